# src/spikeraster/backends/plotly/raster.py
from typing import Any, Dict, List, Optional

import plotly.graph_objects as go
from matplotlib.colors import to_hex

from spikeraster.backends.reconcile import diff_group_order
from spikeraster.core.data_models import RasterLayout

# meta tag shared by every trace this renderer owns on a figure
SPIKE_TRACE_META = "spikeraster-spikes"

# Above this many tick marks in a group, switch to WebGL
WEBGL_THRESHOLD = 1000


def _spike_traces(fig: go.Figure) -> List[Any]:
    return [trace for trace in fig.data if trace.meta == SPIKE_TRACE_META]


def _plotly_color(color: Any) -> str:
    # Plotly only takes colour strings; RGB tuples come from seaborn palettes
    return color if isinstance(color, str) else to_hex(color)


def render_raster(
    data: Dict[str, Any],
    fig: Optional[go.Figure] = None,
    use_webgl: bool = True,
    **kwargs,
) -> go.Figure:
    """
    Render a grouped spike raster using Plotly.

    Each group is a single line trace; NaN points break it into separate
    tick marks. Traces from an earlier call on the same figure are reused.

    Parameters
    ----------
    data : Dict
        Data dictionary from SpikeRasterPlot.get_data()
    fig : go.Figure, optional
        Figure to update. If None, creates a new figure.
    use_webgl : bool
        Whether to use WebGL acceleration for large groups
    **kwargs
        Additional parameters to override those in data

    Returns
    -------
    fig : go.Figure
        Plotly figure object
    """
    raster = data["data"]
    params = {**data["params"], **kwargs}

    if fig is None:
        fig = go.Figure()

    layout: Optional[RasterLayout] = raster.get("layout")
    if not raster.get("visible", False) or layout is None:
        for trace in _spike_traces(fig):
            trace.visible = False
        return fig

    traces = _spike_traces(fig)
    diff = diff_group_order([trace.name for trace in traces], layout.display_names)

    # Drop surplus traces, keeping anything the caller added
    surplus = {id(traces[slot]) for slot in diff.removed}
    if surplus:
        fig.data = tuple(trace for trace in fig.data if id(trace) not in surplus)
    traces = traces[: len(diff.reused)]

    color_order = params.get("color_order")
    line_width = params.get("line_width", 1.0)
    for group_line in layout.lines:
        slot = group_line.series_index - 1
        line_style = dict(width=line_width)
        if color_order:
            color = color_order[slot % len(color_order)]
            line_style["color"] = _plotly_color(color)

        trace_kwargs = dict(
            x=group_line.x,
            y=group_line.y,
            name=group_line.display_name,
            mode="lines",
            connectgaps=False,
            line=line_style,
            visible=True,
            meta=SPIKE_TRACE_META,
            hovertemplate="Time: %{x:.3f}s<extra>%{fullData.name}</extra>",
        )

        if slot < len(traces):
            traces[slot].update(**trace_kwargs)
        else:
            ScatterType = (
                go.Scattergl
                if use_webgl and group_line.n_segments > WEBGL_THRESHOLD
                else go.Scatter
            )
            fig.add_trace(ScatterType(**trace_kwargs))

    # Categorical y-axis, first trial at the top
    bottom, top = layout.y_limits
    if layout.implicit_trials:
        fig.update_yaxes(tickvals=[], ticktext=[], range=[top, bottom])
    else:
        fig.update_yaxes(
            tickvals=list(range(1, len(layout.category_order) + 1)),
            ticktext=layout.tick_labels,
            range=[top, bottom],
        )

    title = params.get("title") or ""
    subtitle = params.get("subtitle")
    if subtitle:
        title = f"{title}<br><sup>{subtitle}</sup>"

    fig.update_layout(
        title=title,
        xaxis_title=params.get("xlabel") or "",
        yaxis_title=params.get("ylabel") or "",
        showlegend=layout.legend_visible and params.get("legend_visible", True),
        legend_title_text=params.get("legend_title") or "",
        hovermode="closest",
    )

    if params.get("xlim") is not None:
        fig.update_xaxes(range=list(params["xlim"]))

    if params.get("show_grid", False):
        fig.update_xaxes(showgrid=True, gridwidth=1, gridcolor="lightgray")

    return fig
