# src/spikeraster/processing/layout.py
import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np

from spikeraster.core.categories import UNDEFINED, CategoryIndex
from spikeraster.core.data_models import GroupLine, RasterLayout, as_seconds
from spikeraster.core.internals import public_api

logger = logging.getLogger(__name__)

# Label of the single row used when no trial data is given
PLACEHOLDER_ROW = "1"

# Bottom, top and pen-up offsets of one tick mark around its row
TICK_OFFSETS = np.array([-0.5, 0.5, np.nan])


@public_api(module_override="spikeraster.processing")
def create_line_data(
    times: np.ndarray, rows: np.ndarray, mask: Optional[np.ndarray] = None
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Turn spike times into XData/YData of a single broken line.

    Every spike becomes three points, ``(t, row - 0.5)``, ``(t, row + 0.5)``
    and ``(t, NaN)``, so one polyline draws disjoint vertical ticks.

    Parameters
    ----------
    times : np.ndarray
        Spike times
    rows : np.ndarray
        1-based row per spike, same length as ``times``
    mask : np.ndarray of bool, optional
        Subset of spikes to include

    Returns
    -------
    x, y : np.ndarray
        Flat coordinate arrays of length ``3 * n``
    """
    times = np.asarray(times, dtype=float)
    rows = np.asarray(rows, dtype=float)
    if mask is not None:
        times = times[mask]
        rows = rows[mask]

    x = np.column_stack([times, times, np.full(times.shape, np.nan)]).ravel()
    y = (rows[:, np.newaxis] + TICK_OFFSETS).ravel()
    return x, y


@public_api(module_override="spikeraster.processing")
def build_raster_layout(
    spike_times: Any,
    trials: Any = None,
    groups: Any = None,
    *,
    trial_categories: Optional[Sequence] = None,
    group_categories: Optional[Sequence] = None,
) -> RasterLayout:
    """
    Partition spike times by group into renderable tick-mark lines.

    Inputs are expected to have passed ``validate_raster_inputs``: trials and
    groups are either empty or as long as ``spike_times``.

    Parameters
    ----------
    spike_times : array-like
        Spike times, usually already aligned
    trials : array-like or CategoryIndex, optional
        Trial label per spike. Defines the y-axis rows.
    groups : array-like or CategoryIndex, optional
        Group label per spike. One line is produced per group.
    trial_categories, group_categories : sequence, optional
        Declared category orders

    Returns
    -------
    RasterLayout
        Category order, group order (with a trailing ``UNDEFINED`` group when
        groups are empty or have missing entries) and one line per group.
    """
    times = as_seconds(spike_times)
    trial_index = CategoryIndex.coerce(trials, categories=trial_categories)
    group_index = CategoryIndex.coerce(groups, categories=group_categories)

    category_order: List[Any] = list(trial_index.categories)
    implicit_trials = not category_order
    if implicit_trials:
        category_order = [PLACEHOLDER_ROW]

    group_order: List[Any] = list(group_index.categories)
    if group_index.is_empty or group_index.has_missing:
        group_order.append(UNDEFINED)
    n_groups = len(group_order)

    # Group slot per spike, missing groups go to the trailing slot
    if group_index.is_empty:
        slots = np.full(len(times), n_groups - 1, dtype=np.int64)
    else:
        slots = np.where(group_index.codes < 0, n_groups - 1, group_index.codes)

    rows = trial_index.rows(len(times))

    lines = []
    for slot, category in enumerate(group_order):
        x, y = create_line_data(times, rows, slots == slot)
        lines.append(GroupLine(category=category, series_index=slot + 1, x=x, y=y))

    logger.debug(
        "Built raster layout: %d spikes, %d rows, %d groups",
        len(times),
        len(category_order),
        n_groups,
    )

    return RasterLayout(
        category_order=category_order,
        group_order=group_order,
        lines=lines,
        implicit_trials=implicit_trials,
    )
