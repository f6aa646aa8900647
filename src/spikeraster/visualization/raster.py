# src/spikeraster/visualization/raster.py
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from spikeraster.core.base import VisualizationComponent
from spikeraster.core.config import RasterPlotConfig
from spikeraster.core.data_models import RasterInput, RasterResult
from spikeraster.core.internals import public_api
from spikeraster.processing.pipeline import compute_raster_from_input

# Inputs that change the data snapshot rather than the presentation
DATA_FIELDS = (
    "spike_times",
    "trials",
    "groups",
    "alignment_times",
    "trial_categories",
    "group_categories",
)


@public_api(module_override="spikeraster.visualization")
class SpikeRasterPlot(VisualizationComponent):
    """
    Spike raster with one row per trial and one coloured line per group.

    The layout is recomputed from scratch on every ``get_data()`` call.
    Invalid inputs never raise: mismatched lengths hide the chart and bad
    alignment times are ignored, each with a warning.

    Parameters
    ----------
    spike_times : array-like, optional
        Spike times in seconds (``timedelta64`` and polars ``Duration`` are
        converted)
    trials : array-like, optional
        Trial label per spike; its category order defines the rows
    groups : array-like, optional
        Group label per spike; one legend entry per group
    alignment_times : array-like or float, optional
        One time subtracted from every spike, or one time per trial category
    trial_categories, group_categories : sequence, optional
        Declared category orders, including categories without spikes
    logger : logging.Logger, optional
        Logger for tracking layout computations
    **kwargs
        Presentation settings, see ``RasterPlotConfig`` (title, subtitle,
        xlabel, ylabel, legend_title, legend_visible, color_order, xlim,
        line_width, show_grid)

    Examples
    --------
    >>> plot = SpikeRasterPlot([2.0, 5.0, 8.0], trials=["A", "A", "B"])
    >>> fig, ax = plot.plot(backend="mpl")
    """

    renderer = "raster"

    def __init__(
        self,
        spike_times: Any = None,
        trials: Any = None,
        groups: Any = None,
        alignment_times: Any = None,
        trial_categories: Optional[Sequence] = None,
        group_categories: Optional[Sequence] = None,
        logger: Optional[logging.Logger] = None,
        **kwargs,
    ):
        data = RasterInput(
            spike_times=spike_times,
            trials=trials,
            groups=groups,
            alignment_times=alignment_times,
            trial_categories=trial_categories,
            group_categories=group_categories,
        )
        super().__init__(data)
        self.config = RasterPlotConfig(**kwargs)
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_theme(
        cls, theme: Union[str, Path], *args, theme_manager=None, **kwargs
    ) -> "SpikeRasterPlot":
        """Create a plot whose group colours come from a custom TOML theme"""
        from spikeraster.core.themes_manager import theme_manager as default_manager

        manager = theme_manager or default_manager
        kwargs.setdefault("color_order", manager.color_order(theme))
        return cls(*args, **kwargs)

    def compute(self) -> RasterResult:
        """Run validation, alignment and layout on the current inputs"""
        return compute_raster_from_input(self.data, logger=self.logger)

    def get_data(self) -> Dict[str, Any]:
        """
        Prepare data for rendering.

        Returns
        -------
        dict
            ``data`` holds the visibility flag, layout and diagnostics,
            ``params`` the presentation settings
        """
        result = self.compute()
        return {
            "data": {
                "visible": result.visible,
                "layout": result.layout,
                "diagnostics": result.diagnostics,
            },
            "params": self.config.model_dump(),
        }

    def update(self, **kwargs) -> None:
        """
        Update inputs or presentation settings.

        Data inputs are validated together as a new snapshot. Assigning
        ``groups`` turns the legend back on. Presentation keys must be
        ``RasterPlotConfig`` fields or extras given at construction.

        Raises
        ------
        ValueError
            If a key is not a known input or presentation setting
        """
        known = set(DATA_FIELDS) | set(RasterPlotConfig.model_fields)
        unknown = set(kwargs) - known - set(self.config.model_extra or {})
        if unknown:
            raise ValueError(f"Unknown plot settings: {', '.join(sorted(unknown))}")

        data_updates = {key: kwargs.pop(key) for key in DATA_FIELDS if key in kwargs}
        if data_updates:
            snapshot = {key: getattr(self.data, key) for key in DATA_FIELDS}
            snapshot.update(data_updates)
            self.data = RasterInput(**snapshot)
            if "groups" in data_updates:
                kwargs.setdefault("legend_visible", True)

        for key, value in kwargs.items():
            setattr(self.config, key, value)

    # Pass-through helpers mirroring the axes-level matplotlib calls

    def title(self, title: str, subtitle: Optional[str] = None) -> None:
        if subtitle is None:
            self.update(title=title)
        else:
            self.update(title=title, subtitle=subtitle)

    def subtitle(self, subtitle: str) -> None:
        self.update(subtitle=subtitle)

    def xlabel(self, label: str) -> None:
        self.update(xlabel=label)

    def ylabel(self, label: str) -> None:
        self.update(ylabel=label)

    def xlim(self, limits: Optional[Sequence[float]] = None):
        """Get the manual x-limits, or set them. ``update(xlim=None)`` restores auto."""
        if limits is None:
            return self.config.xlim
        self.update(xlim=tuple(limits))
        return self.config.xlim

    def __repr__(self) -> str:
        return (
            f"SpikeRasterPlot(n_spikes={len(self.data.spike_times)}, "
            f"title={self.config.title!r})"
        )
