# src/spikeraster/core/__init__.py
"""
Core types shared by processing and rendering: category indexing,
diagnostics, data models and configuration.
"""

from .base import VisualizationComponent
from .categories import UNDEFINED, CategoryIndex, display_label, is_missing
from .config import RasterPlotConfig
from .data_models import (
    GroupLine,
    RasterInput,
    RasterLayout,
    RasterResult,
    ValidationResult,
    as_seconds,
)
from .diagnostics import (
    AlignmentTimesMismatch,
    DataLengthMismatch,
    Diagnostic,
    DiagnosticKind,
    RasterWarning,
)
