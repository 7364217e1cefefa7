"""Composite a foreground raster over a cover-fitted background."""

__version__ = "1.0.0"
