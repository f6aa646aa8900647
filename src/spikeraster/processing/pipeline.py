# src/spikeraster/processing/pipeline.py
import logging
from typing import Any, Optional, Sequence

from spikeraster.core.categories import CategoryIndex
from spikeraster.core.data_models import RasterInput, RasterResult
from spikeraster.core.internals import public_api
from spikeraster.processing.alignment import align_spike_times
from spikeraster.processing.layout import build_raster_layout
from spikeraster.processing.validation import validate_raster_inputs


@public_api(module_override="spikeraster.processing")
def compute_raster(
    spike_times: Any = None,
    trials: Any = None,
    groups: Any = None,
    alignment_times: Any = None,
    *,
    trial_categories: Optional[Sequence] = None,
    group_categories: Optional[Sequence] = None,
    logger: Optional[logging.Logger] = None,
) -> RasterResult:
    """
    Validate, align and lay out one raster from scratch.

    Diagnostics are emitted as warnings. A structural mismatch returns an
    invisible result without a layout; a bad alignment shape only disables
    alignment.

    Parameters
    ----------
    spike_times : array-like
        Spike times in seconds
    trials : array-like, optional
        Trial label per spike
    groups : array-like, optional
        Group label per spike
    alignment_times : array-like or float, optional
        Global or per-trial reference times
    trial_categories, group_categories : sequence, optional
        Declared category orders
    logger : logging.Logger, optional
        Logger for tracking the computation

    Returns
    -------
    RasterResult
    """
    logger = logger or logging.getLogger(__name__)

    snapshot = RasterInput(
        spike_times=spike_times,
        trials=trials,
        groups=groups,
        alignment_times=alignment_times,
        trial_categories=trial_categories,
        group_categories=group_categories,
    )
    return compute_raster_from_input(snapshot, logger=logger)


def compute_raster_from_input(
    data: RasterInput, logger: Optional[logging.Logger] = None
) -> RasterResult:
    """Validate, align and lay out an existing ``RasterInput`` snapshot"""
    logger = logger or logging.getLogger(__name__)

    # One index per axis, shared by validation, alignment and layout
    trial_index = CategoryIndex(data.trials, categories=data.trial_categories)
    group_index = CategoryIndex(data.groups, categories=data.group_categories)

    validation = validate_raster_inputs(
        data.spike_times, trial_index, group_index, data.alignment_times
    )
    validation.emit()

    if not validation.ok:
        logger.info("Raster hidden until the input lengths are corrected")
        return RasterResult(visible=False, diagnostics=validation.diagnostics)

    aligned = align_spike_times(
        data.spike_times, trial_index, data.alignment_times, warn=False
    )
    layout = build_raster_layout(aligned, trial_index, group_index)

    logger.debug(
        "Raster ready: %d segments across %d lines",
        layout.n_segments,
        len(layout.lines),
    )
    return RasterResult(
        visible=True,
        diagnostics=validation.diagnostics,
        aligned_times=aligned,
        layout=layout,
    )
