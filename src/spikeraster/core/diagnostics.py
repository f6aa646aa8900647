# src/spikeraster/core/diagnostics.py
"""
Warning categories and diagnostic records for raster input problems.

Input problems never raise. They are reported through the standard
:mod:`warnings` machinery so callers can filter, record or escalate them.
"""

import logging
import warnings
from enum import Enum
from typing import Type

from pydantic import BaseModel, Field

from spikeraster.core.internals import public_api

logger = logging.getLogger(__name__)


@public_api(module_override="spikeraster.core")
class RasterWarning(UserWarning):
    """Base class for all raster input warnings"""


@public_api(module_override="spikeraster.core")
class DataLengthMismatch(RasterWarning):
    """Trial or group data length differs from the spike time data"""


@public_api(module_override="spikeraster.core")
class AlignmentTimesMismatch(RasterWarning):
    """Alignment times are neither empty, scalar nor one per trial category"""


class DiagnosticKind(str, Enum):
    DATA_LENGTH_MISMATCH = "DataLengthMismatch"
    ALIGNMENT_TIMES_MISMATCH = "AlignmentTimesMismatch"

    @property
    def warning_class(self) -> Type[RasterWarning]:
        if self is DiagnosticKind.DATA_LENGTH_MISMATCH:
            return DataLengthMismatch
        return AlignmentTimesMismatch


@public_api(module_override="spikeraster.core")
class Diagnostic(BaseModel):
    """A single problem found in the raster inputs"""

    kind: DiagnosticKind
    message: str
    fatal: bool = Field(
        False, description="Whether the chart must be hidden until corrected"
    )

    def emit(self, stacklevel: int = 3) -> None:
        """Log the diagnostic and issue it as a warning"""
        logger.warning("%s: %s", self.kind.value, self.message)
        warnings.warn(self.message, self.kind.warning_class, stacklevel=stacklevel)


def data_length_mismatch(name: str) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.DATA_LENGTH_MISMATCH,
        message=f"{name} must be empty or the same length as spike_times.",
        fatal=True,
    )


def alignment_times_mismatch(n_times: int, n_categories: int) -> Diagnostic:
    return Diagnostic(
        kind=DiagnosticKind.ALIGNMENT_TIMES_MISMATCH,
        message=(
            "Ignoring alignment_times. alignment_times must be empty, scalar, "
            "or have at least one entry per trial category "
            f"(got {n_times} for {n_categories} categories)."
        ),
    )
