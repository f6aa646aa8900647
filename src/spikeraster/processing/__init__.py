# src/spikeraster/processing/__init__.py
"""
Raster processing: input validation, spike time alignment and layout.

All functions are pure and recompute their result from scratch.
"""

from .alignment import align_spike_times
from .layout import build_raster_layout, create_line_data
from .pipeline import compute_raster
from .validation import validate_raster_inputs
