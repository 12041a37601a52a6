"""Discord command layer."""
