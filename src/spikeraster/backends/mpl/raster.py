# src/spikeraster/backends/mpl/raster.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.lines import Line2D

from spikeraster.backends.reconcile import diff_group_order
from spikeraster.core.data_models import RasterLayout

logger = logging.getLogger(__name__)

# gid shared by every line this renderer owns on an axes
SPIKE_LINE_GID = "spikeraster-spikes"


def _spike_lines(ax: Axes) -> List[Line2D]:
    return [line for line in ax.lines if line.get_gid() == SPIKE_LINE_GID]


def _series_color(series_index: int, color_order: Optional[Sequence[Any]]) -> Any:
    colors = color_order or plt.rcParams["axes.prop_cycle"].by_key().get(
        "color", ["C0"]
    )
    return colors[(series_index - 1) % len(colors)]


def _sync_lines(
    ax: Axes, layout: RasterLayout, params: Dict[str, Any]
) -> List[Line2D]:
    """Reuse, create and delete lines so there is exactly one per group"""
    lines = _spike_lines(ax)
    previous = [line.get_label() for line in lines]
    diff = diff_group_order(previous, layout.display_names)

    for slot in diff.removed[::-1]:
        lines[slot].remove()
    lines = lines[: len(diff.reused)]

    for slot in diff.created:
        (line,) = ax.plot([], [], gid=SPIKE_LINE_GID)
        lines.append(line)

    color_order = params.get("color_order")
    line_width = params.get("line_width", 1.0)
    for line, group_line in zip(lines, layout.lines):
        line.set_data(group_line.x, group_line.y)
        line.set_label(group_line.display_name)
        line.set_color(_series_color(group_line.series_index, color_order))
        line.set_linewidth(line_width)
        line.set_visible(True)

    logger.debug(
        "Synced spike lines: %d reused, %d created, %d removed",
        len(diff.reused),
        len(diff.created),
        len(diff.removed),
    )
    return lines


def _configure_y_axis(ax: Axes, layout: RasterLayout) -> None:
    n_rows = len(layout.category_order)
    if layout.implicit_trials:
        ax.set_yticks([])
    else:
        ax.set_yticks(range(1, n_rows + 1))
        ax.set_yticklabels(layout.tick_labels)

    # First trial at the top
    bottom, top = layout.y_limits
    ax.set_ylim(top, bottom)


def render_raster(
    data: Dict[str, Any], ax: Optional[Axes] = None, **kwargs
) -> Tuple[Figure, Axes]:
    """
    Render a grouped spike raster using matplotlib.

    Lines drawn by an earlier call on the same axes are reused, so calling
    this again after the data changed updates the plot in place.

    Parameters
    ----------
    data : Dict
        Data dictionary from SpikeRasterPlot.get_data()
    ax : Axes, optional
        Matplotlib axes to plot on. If None, creates a new figure.
    **kwargs
        Additional parameters to override those in data

    Returns
    -------
    fig : Figure
        Matplotlib figure
    ax : Axes
        Matplotlib axes with the plot
    """
    raster = data["data"]
    params = {**data["params"], **kwargs}

    if ax is None:
        fig, ax = plt.subplots(figsize=params.get("figsize", (10, 6)))
    else:
        fig = ax.figure

    layout: Optional[RasterLayout] = raster.get("layout")
    if not raster.get("visible", False) or layout is None:
        # Invalid data: hide what is there and skip the redraw
        for line in _spike_lines(ax):
            line.set_visible(False)
        return fig, ax

    lines = _sync_lines(ax, layout, params)
    _configure_y_axis(ax, layout)

    # Title, subtitle and labels
    title = params.get("title") or ""
    subtitle = params.get("subtitle")
    ax.set_title(f"{title}\n{subtitle}" if subtitle else title)
    ax.set_xlabel(params.get("xlabel") or "")
    ax.set_ylabel(params.get("ylabel") or "")

    if params.get("xlim") is not None:
        ax.set_xlim(params["xlim"])
    else:
        ax.relim()
        ax.autoscale_view(scaley=False)

    if params.get("show_grid", False):
        ax.grid(True, axis="x", alpha=0.3)

    legend = ax.get_legend()
    if legend is not None:
        legend.remove()
    if layout.legend_visible and params.get("legend_visible", True):
        ax.legend(handles=lines, title=params.get("legend_title") or None)

    ax.spines["top"].set_visible(False)
    ax.spines["right"].set_visible(False)

    return fig, ax
