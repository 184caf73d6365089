"""Credit Report API - bureau report normalization service."""

__version__ = "1.0.0"
