"""Tests for the SpikeRasterPlot component and the matplotlib renderer."""

import numpy as np
import pytest
from matplotlib.colors import to_rgba
from pydantic import ValidationError

from spikeraster.backends.mpl.raster import SPIKE_LINE_GID, render_raster
from spikeraster.core.diagnostics import DataLengthMismatch
from spikeraster.visualization.raster import SpikeRasterPlot


def _spike_lines(ax):
    return [line for line in ax.lines if line.get_gid() == SPIKE_LINE_GID]


@pytest.fixture
def grouped_plot(scenario_times):
    return SpikeRasterPlot(
        scenario_times,
        trials=["A", "A", "B"],
        groups=["x", "y", "x"],
        title="Unit 1",
        xlabel="Time (s)",
        ylabel="Trial",
        legend_title="Neuron",
    )


def test_get_data_structure(grouped_plot):
    data = grouped_plot.get_data()

    assert data["data"]["visible"]
    assert data["data"]["layout"].group_order == ["x", "y"]
    assert data["data"]["diagnostics"] == []
    assert data["params"]["title"] == "Unit 1"
    assert data["params"]["xlim"] is None


def test_mpl_draws_one_line_per_group(grouped_plot):
    fig, ax = grouped_plot.plot(backend="mpl")

    lines = _spike_lines(ax)
    assert [line.get_label() for line in lines] == ["x", "y"]
    np.testing.assert_array_equal(
        lines[0].get_xdata(), [2.0, 2.0, np.nan, 8.0, 8.0, np.nan]
    )
    assert ax.get_title() == "Unit 1"
    assert ax.get_xlabel() == "Time (s)"
    assert ax.get_ylabel() == "Trial"


def test_mpl_categorical_y_axis_is_reversed(grouped_plot):
    _, ax = grouped_plot.plot(backend="mpl")

    np.testing.assert_array_equal(ax.get_yticks(), [1, 2])
    assert [label.get_text() for label in ax.get_yticklabels()] == ["A", "B"]
    assert ax.get_ylim() == (2.5, 0.5)


def test_mpl_legend_title(grouped_plot):
    _, ax = grouped_plot.plot(backend="mpl")
    legend = ax.get_legend()
    assert legend is not None
    assert legend.get_title().get_text() == "Neuron"
    assert [text.get_text() for text in legend.get_texts()] == ["x", "y"]


def test_mpl_legend_hidden_for_single_undefined_group(scenario_times):
    plot = SpikeRasterPlot(scenario_times, trials=["A", "A", "B"])
    _, ax = plot.plot(backend="mpl")
    assert ax.get_legend() is None


def test_mpl_placeholder_row_has_no_ticks():
    _, ax = SpikeRasterPlot([1.0, 2.0]).plot(backend="mpl")
    assert len(ax.get_yticks()) == 0
    assert ax.get_ylim() == (1.5, 0.5)


def test_mpl_reuses_lines_on_same_axes(grouped_plot):
    _, ax = grouped_plot.plot(backend="mpl")
    first = _spike_lines(ax)[0]

    grouped_plot.update(groups=["x", "y", "z"])
    grouped_plot.plot(backend="mpl", ax=ax)
    lines = _spike_lines(ax)
    assert len(lines) == 3
    assert lines[0] is first

    grouped_plot.update(groups=None)
    grouped_plot.plot(backend="mpl", ax=ax)
    lines = _spike_lines(ax)
    assert len(lines) == 1
    assert lines[0] is first
    assert lines[0].get_label() == "<undefined>"
    assert ax.get_legend() is None


def test_mpl_color_order_and_xlim(scenario_times):
    plot = SpikeRasterPlot(
        scenario_times,
        groups=["x", "y", "z"],
        color_order=["red", "blue"],
        xlim=(0.0, 10.0),
    )
    _, ax = plot.plot(backend="mpl")

    colors = [to_rgba(line.get_color()) for line in _spike_lines(ax)]
    assert colors == [to_rgba("red"), to_rgba("blue"), to_rgba("red")]
    assert ax.get_xlim() == (0.0, 10.0)


def test_invalid_data_hides_existing_lines(grouped_plot):
    _, ax = grouped_plot.plot(backend="mpl")

    grouped_plot.update(trials=["A"])
    with pytest.warns(DataLengthMismatch):
        grouped_plot.plot(backend="mpl", ax=ax)

    lines = _spike_lines(ax)
    assert len(lines) == 2
    assert not any(line.get_visible() for line in lines)


def test_invalid_data_on_new_axes_draws_nothing():
    plot = SpikeRasterPlot([1.0, 2.0, 3.0], trials=["A", "B"])
    with pytest.warns(DataLengthMismatch):
        _, ax = plot.plot(backend="mpl")
    assert _spike_lines(ax) == []


def test_render_kwargs_override_params(grouped_plot):
    _, ax = render_raster(grouped_plot.get_data(), title="Override", subtitle="sub")
    assert ax.get_title() == "Override\nsub"


def test_update_presentation_and_helpers(grouped_plot):
    grouped_plot.title("New", "Subtitle")
    grouped_plot.xlabel("t")
    grouped_plot.ylabel("trial")
    assert grouped_plot.xlim([1, 4]) == (1.0, 4.0)

    params = grouped_plot.get_data()["params"]
    assert params["title"] == "New"
    assert params["subtitle"] == "Subtitle"
    assert params["xlabel"] == "t"
    assert params["ylabel"] == "trial"
    assert grouped_plot.config.xlim_mode == "manual"

    grouped_plot.update(xlim=None)
    assert grouped_plot.config.xlim_mode == "auto"


def test_setting_groups_turns_legend_back_on(grouped_plot):
    grouped_plot.update(legend_visible=False)
    assert not grouped_plot.config.legend_visible

    grouped_plot.update(groups=["a", "b", "a"])
    assert grouped_plot.config.legend_visible


def test_invalid_limits_rejected(grouped_plot):
    with pytest.raises(ValidationError):
        grouped_plot.update(xlim=(3.0, 1.0))
    with pytest.raises(ValidationError):
        SpikeRasterPlot([1.0], xlim=(1.0, 1.0))


def test_unknown_backend(grouped_plot):
    with pytest.raises(ValueError, match="Unsupported backend"):
        grouped_plot.plot(backend="bokeh")


def test_alignment_through_update(grouped_plot):
    grouped_plot.update(alignment_times=[1.0, 3.0])
    layout = grouped_plot.get_data()["data"]["layout"]
    np.testing.assert_allclose(layout.lines[0].x[0::3], [1.0, 5.0])


def test_string_trial_label_is_not_split():
    plot = SpikeRasterPlot([1.0], trials="AB")

    assert plot.data.trials == ["AB"]
    data = plot.get_data()["data"]
    assert data["visible"]
    assert data["layout"].tick_labels == ["AB"]


def test_unknown_update_key_rejected(grouped_plot):
    with pytest.raises(ValueError, match="titel"):
        grouped_plot.update(titel="Typo", trials=["B", "B", "B"])

    assert grouped_plot.config.title == "Unit 1"
    assert grouped_plot.data.trials == ["A", "A", "B"]


def test_update_accepts_extras_given_at_construction(scenario_times):
    plot = SpikeRasterPlot(scenario_times, figsize=(4, 3))
    plot.update(figsize=(6, 2))
    assert plot.get_data()["params"]["figsize"] == (6, 2)
