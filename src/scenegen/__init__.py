"""Scene script generation for short-form AI videos."""

__version__ = "0.1.0"
