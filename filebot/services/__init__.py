"""Application services layer."""

from .scratch import ScratchWorkspace
from .transcoder import Transcoder

__all__ = ["ScratchWorkspace", "Transcoder"]
