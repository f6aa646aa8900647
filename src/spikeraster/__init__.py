"""
spikeraster: grouped spike raster layouts for matplotlib and plotly
"""

from .core.categories import UNDEFINED, CategoryIndex
from .core.config import RasterPlotConfig
from .core.data_models import GroupLine, RasterLayout, RasterResult, ValidationResult
from .core.diagnostics import AlignmentTimesMismatch, DataLengthMismatch, RasterWarning
from .processing import (
    align_spike_times,
    build_raster_layout,
    compute_raster,
    validate_raster_inputs,
)
from .utils import generate_example_spikes
from .visualization import SpikeRasterPlot

__version__ = "0.1.0"

__all__ = [
    "UNDEFINED",
    "AlignmentTimesMismatch",
    "CategoryIndex",
    "DataLengthMismatch",
    "GroupLine",
    "RasterLayout",
    "RasterPlotConfig",
    "RasterResult",
    "RasterWarning",
    "SpikeRasterPlot",
    "ValidationResult",
    "align_spike_times",
    "build_raster_layout",
    "compute_raster",
    "generate_example_spikes",
    "validate_raster_inputs",
]
