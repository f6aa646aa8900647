"""Unit tests for the raster layout builder."""

import numpy as np
import pytest

from spikeraster.core.categories import UNDEFINED
from spikeraster.processing.layout import (
    PLACEHOLDER_ROW,
    build_raster_layout,
    create_line_data,
)


def _segments(line):
    """(time, row) per tick mark of a group line"""
    x = line.x.reshape(-1, 3)
    y = line.y.reshape(-1, 3)
    return [(t, bottom + 0.5) for t, bottom in zip(x[:, 0], y[:, 0])]


def test_create_line_data_emits_three_points_per_spike():
    x, y = create_line_data(np.array([1.0, 4.0]), np.array([1.0, 3.0]))
    np.testing.assert_array_equal(x, [1.0, 1.0, np.nan, 4.0, 4.0, np.nan])
    np.testing.assert_array_equal(y, [0.5, 1.5, np.nan, 2.5, 3.5, np.nan])


def test_create_line_data_with_mask():
    x, y = create_line_data(
        np.array([1.0, 2.0, 3.0]), np.array([1.0, 2.0, 3.0]), np.array([False, True, False])
    )
    np.testing.assert_array_equal(x, [2.0, 2.0, np.nan])
    np.testing.assert_array_equal(y, [1.5, 2.5, np.nan])


def test_create_line_data_empty():
    x, y = create_line_data(np.array([]), np.array([]))
    assert x.shape == (0,)
    assert y.shape == (0,)


def test_trials_without_groups(scenario_times):
    layout = build_raster_layout(scenario_times, ["A", "A", "B"])

    assert layout.category_order == ["A", "B"]
    assert not layout.implicit_trials
    assert layout.group_order == [UNDEFINED]
    assert layout.display_names == ["<undefined>"]
    assert not layout.legend_visible

    (line,) = layout.lines
    assert line.n_segments == 3
    np.testing.assert_array_equal(
        line.y, [0.5, 1.5, np.nan, 0.5, 1.5, np.nan, 1.5, 2.5, np.nan]
    )
    np.testing.assert_array_equal(
        line.x, [2.0, 2.0, np.nan, 5.0, 5.0, np.nan, 8.0, 8.0, np.nan]
    )


def test_groups_partition_segments(scenario_times):
    layout = build_raster_layout(scenario_times, ["A", "A", "B"], ["x", "y", "x"])

    assert layout.group_order == ["x", "y"]
    assert layout.legend_visible
    x_line, y_line = layout.lines
    assert _segments(x_line) == [(2.0, 1.0), (8.0, 2.0)]
    assert _segments(y_line) == [(5.0, 1.0)]
    assert [line.series_index for line in layout.lines] == [1, 2]


def test_empty_trials_use_placeholder_row():
    layout = build_raster_layout([1.0, 2.0])

    assert layout.category_order == [PLACEHOLDER_ROW]
    assert layout.implicit_trials
    assert layout.y_limits == (0.5, 1.5)
    assert _segments(layout.lines[0]) == [(1.0, 1.0), (2.0, 1.0)]


def test_missing_group_goes_to_undefined_bucket(scenario_times):
    layout = build_raster_layout(scenario_times, ["A", "A", "B"], ["x", None, "x"])

    assert layout.group_order == ["x", UNDEFINED]
    assert layout.legend_visible
    x_line, undefined_line = layout.lines
    assert _segments(x_line) == [(2.0, 1.0), (8.0, 2.0)]
    assert _segments(undefined_line) == [(5.0, 1.0)]


def test_all_groups_missing():
    layout = build_raster_layout([1.0, 2.0], None, [None, None])
    assert layout.group_order == [UNDEFINED]
    assert layout.lines[0].n_segments == 2
    assert not layout.legend_visible


def test_every_spike_lands_in_exactly_one_group():
    rng = np.random.default_rng(0)
    times = rng.random(200)
    trials = rng.integers(0, 7, 200)
    groups = rng.choice(np.array(["a", "b", "c", None], dtype=object), 200)

    layout = build_raster_layout(times, trials, groups)

    assert layout.n_segments == len(times)
    emitted = np.sort(np.concatenate([line.x[0::3] for line in layout.lines]))
    np.testing.assert_array_equal(emitted, np.sort(times))


def test_segment_heights_match_rows():
    trials = [3, 1, 2, 3]
    layout = build_raster_layout([0.1, 0.2, 0.3, 0.4], trials)
    y = layout.lines[0].y.reshape(-1, 3)
    rows = np.array([1.0, 2.0, 3.0, 1.0])

    np.testing.assert_array_equal(y[:, 0], rows - 0.5)
    np.testing.assert_array_equal(y[:, 1], rows + 0.5)
    assert np.isnan(y[:, 2]).all()


def test_group_order_is_first_seen():
    layout = build_raster_layout([1.0, 2.0, 3.0, 4.0], None, ["z", "a", "z", "m"])
    assert layout.group_order == ["z", "a", "m"]


def test_order_preserved_within_group():
    layout = build_raster_layout([9.0, 1.0, 5.0], None, ["g", "g", "g"])
    np.testing.assert_array_equal(layout.lines[0].x[0::3], [9.0, 1.0, 5.0])


def test_missing_trial_keeps_segment_without_row():
    layout = build_raster_layout([1.0, 2.0], ["A", None])
    (line,) = layout.lines
    assert line.n_segments == 2
    assert np.isnan(line.y[3:5]).all()


def test_declared_categories():
    layout = build_raster_layout(
        [1.0, 2.0],
        ["B", "B"],
        ["y", "y"],
        trial_categories=["A", "B"],
        group_categories=["x", "y"],
    )
    assert layout.category_order == ["A", "B"]
    assert layout.group_order == ["x", "y"]
    assert layout.lines[0].n_segments == 0
    assert _segments(layout.lines[1]) == [(1.0, 2.0), (2.0, 2.0)]


@pytest.mark.parametrize("trials", [None, []])
def test_empty_dataset_keeps_scaffolding(trials):
    layout = build_raster_layout([], trials, [])
    assert layout.category_order == [PLACEHOLDER_ROW]
    assert layout.group_order == [UNDEFINED]
    assert layout.lines[0].n_segments == 0
    assert layout.n_segments == 0
