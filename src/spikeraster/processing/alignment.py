# src/spikeraster/processing/alignment.py
import logging
from typing import Any, Optional, Sequence

import numpy as np

from spikeraster.core.categories import CategoryIndex
from spikeraster.core.data_models import as_seconds
from spikeraster.core.diagnostics import alignment_times_mismatch, data_length_mismatch
from spikeraster.core.internals import public_api

logger = logging.getLogger(__name__)


def alignment_is_consistent(n_alignment_times: int, n_categories: int) -> bool:
    """Whether alignment times can be applied for the given trial categories"""
    return n_alignment_times <= 1 or n_alignment_times >= n_categories


@public_api(module_override="spikeraster.processing")
def align_spike_times(
    spike_times: Any,
    trials: Any = None,
    alignment_times: Any = None,
    *,
    trial_categories: Optional[Sequence] = None,
    warn: bool = True,
) -> np.ndarray:
    """
    Shift spike times by a global or per-trial reference time.

    Parameters
    ----------
    spike_times : array-like
        Spike times in seconds (or ``timedelta64`` / polars ``Duration``)
    trials : array-like or CategoryIndex, optional
        Trial label per spike. Row numbers come from the category order.
    alignment_times : array-like or float, optional
        Empty for no shift, one value for a uniform shift, or at least one
        value per trial category.
    trial_categories : sequence, optional
        Declared trial category order
    warn : bool, default True
        Emit an ``AlignmentTimesMismatch`` warning when the alignment times
        cannot be matched to the trial categories

    Returns
    -------
    np.ndarray
        Aligned spike times. Always a new array.

    Notes
    -----
    When there are more than one but fewer alignment times than trial
    categories, no spike is shifted at all.
    """
    times = as_seconds(spike_times).copy()
    reference = as_seconds(alignment_times)

    if reference.size == 0:
        return times

    if reference.size == 1:
        return times - reference[0]

    index = CategoryIndex.coerce(trials, categories=trial_categories)
    if not alignment_is_consistent(reference.size, index.n_categories):
        if warn:
            alignment_times_mismatch(reference.size, index.n_categories).emit()
        return times

    if not index.is_empty and len(index) != len(times):
        if warn:
            data_length_mismatch("trials").emit()
        return times

    rows = index.rows(len(times))
    valid = ~np.isnan(rows)
    times[valid] = times[valid] - reference[rows[valid].astype(np.int64) - 1]

    logger.debug(
        "Aligned %d of %d spike times to %d reference times",
        int(valid.sum()),
        len(times),
        reference.size,
    )
    return times
