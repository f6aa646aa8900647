# src/spikeraster/backends/mpl/__init__.py
from .raster import render_raster

__all__ = ["render_raster"]
