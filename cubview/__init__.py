"""Textured ray-casting maze viewer for .cub scene files, with an XPM reader."""

__version__ = "0.1.0"

__all__ = ["__version__"]