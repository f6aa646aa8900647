# src/spikeraster/core/config.py
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RasterPlotConfig(BaseModel):
    """Presentation settings passed straight through to the renderer"""

    model_config = ConfigDict(validate_assignment=True, extra="allow")

    title: str = ""
    subtitle: str = ""
    xlabel: str = ""
    ylabel: str = ""
    legend_title: str = ""
    legend_visible: bool = True
    color_order: Optional[List[Any]] = Field(
        None, description="Colours cycled over groups; renderer default if None"
    )
    xlim: Optional[Tuple[float, float]] = Field(
        None, description="Manual x-limits; automatic if None"
    )
    line_width: float = Field(1.0, gt=0)
    show_grid: bool = False

    @field_validator("xlim")
    @classmethod
    def _increasing_limits(cls, value):
        if value is not None and not value[1] > value[0]:
            raise ValueError("Specify limits as two increasing values.")
        return value

    @field_validator("color_order")
    @classmethod
    def _non_empty_colors(cls, value):
        if value is not None and len(value) == 0:
            raise ValueError("color_order must contain at least one colour.")
        return value

    @property
    def xlim_mode(self) -> str:
        return "auto" if self.xlim is None else "manual"
