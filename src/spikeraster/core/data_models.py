# src/spikeraster/core/data_models.py
from typing import Any, List, Optional, Tuple

import numpy as np
import polars as pl
from pydantic import BaseModel, ConfigDict, Field, field_validator

from spikeraster.core.categories import UNDEFINED, display_label, is_single_label
from spikeraster.core.diagnostics import Diagnostic


def as_seconds(values: Any) -> np.ndarray:
    """
    Convert timestamps to a 1-D float array of seconds.

    Accepts scalars, sequences, numpy arrays (including ``timedelta64``) and
    polars Series (including ``Duration``). ``None`` gives an empty array.
    """
    if values is None:
        return np.empty(0, dtype=float)
    if isinstance(values, pl.Series):
        values = values.to_numpy()
    arr = np.atleast_1d(np.asarray(values))
    if np.issubdtype(arr.dtype, np.timedelta64):
        return (arr / np.timedelta64(1, "s")).astype(float).ravel()
    return arr.astype(float).ravel()


class RasterInput(BaseModel):
    """Snapshot of the data needed for one raster layout"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    spike_times: np.ndarray = Field(
        default_factory=lambda: np.empty(0), description="Spike times in seconds"
    )
    trials: Optional[Any] = Field(None, description="Trial label per spike")
    groups: Optional[Any] = Field(None, description="Group label per spike")
    alignment_times: np.ndarray = Field(
        default_factory=lambda: np.empty(0),
        description="Empty, one global time, or one time per trial category",
    )
    trial_categories: Optional[List[Any]] = None
    group_categories: Optional[List[Any]] = None

    @field_validator("spike_times", "alignment_times", mode="before")
    @classmethod
    def _to_seconds(cls, value):
        return as_seconds(value)

    @field_validator("trials", "groups", mode="before")
    @classmethod
    def _copy_labels(cls, value):
        # Keep polars Series intact so Enum dtypes still declare categories
        if value is None or isinstance(value, pl.Series):
            return value
        if isinstance(value, np.ndarray):
            return np.atleast_1d(value).copy()
        if is_single_label(value):
            return [value]
        return list(value)


class GroupLine(BaseModel):
    """Coordinates of every tick mark belonging to one group"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    category: Any
    series_index: int = Field(..., description="1-based position in group order")
    x: np.ndarray
    y: np.ndarray

    @property
    def display_name(self) -> str:
        return display_label(self.category)

    @property
    def n_segments(self) -> int:
        return len(self.x) // 3


class RasterLayout(BaseModel):
    """Renderer-ready description of a raster: axis scaffolding and lines"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    category_order: List[Any]
    group_order: List[Any]
    lines: List[GroupLine]
    implicit_trials: bool = Field(
        False, description="True when category_order is only the placeholder row"
    )

    @property
    def display_names(self) -> List[str]:
        return [display_label(category) for category in self.group_order]

    @property
    def tick_labels(self) -> List[str]:
        return [str(category) for category in self.category_order]

    @property
    def legend_visible(self) -> bool:
        return not (len(self.group_order) == 1 and self.group_order[0] is UNDEFINED)

    @property
    def y_limits(self) -> Tuple[float, float]:
        return 0.5, len(self.category_order) + 0.5

    @property
    def n_segments(self) -> int:
        return sum(line.n_segments for line in self.lines)


class ValidationResult(BaseModel):
    """Outcome of checking raster inputs against each other"""

    ok: bool = True
    diagnostics: List[Diagnostic] = Field(default_factory=list)

    def emit(self) -> None:
        for diagnostic in self.diagnostics:
            diagnostic.emit(stacklevel=4)


class RasterResult(BaseModel):
    """Everything a renderer needs from one pass of the pipeline"""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    visible: bool
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    aligned_times: Optional[np.ndarray] = None
    layout: Optional[RasterLayout] = None
