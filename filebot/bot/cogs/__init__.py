"""Bot command modules (Cogs)."""

from .transcode import TranscodeCog
from .help import HelpCog

__all__ = ["TranscodeCog", "HelpCog"]
