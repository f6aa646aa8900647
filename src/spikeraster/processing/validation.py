# src/spikeraster/processing/validation.py
from typing import Any, List, Optional, Sequence

from spikeraster.core.categories import CategoryIndex
from spikeraster.core.data_models import ValidationResult, as_seconds
from spikeraster.core.diagnostics import (
    Diagnostic,
    alignment_times_mismatch,
    data_length_mismatch,
)
from spikeraster.core.internals import public_api
from spikeraster.processing.alignment import alignment_is_consistent


@public_api(module_override="spikeraster.processing")
def validate_raster_inputs(
    spike_times: Any,
    trials: Any = None,
    groups: Any = None,
    alignment_times: Any = None,
    *,
    trial_categories: Optional[Sequence] = None,
) -> ValidationResult:
    """
    Check that the raster inputs are consistent with one another.

    Trial and group data must be empty or match the spike times in length;
    the first mismatch makes the result not ok and stops further checks.
    Alignment times that are neither empty, scalar nor one per trial
    category only add a non-fatal diagnostic.

    Nothing is emitted here, call ``ValidationResult.emit()`` to report.
    """
    n = len(as_seconds(spike_times))
    trial_index = CategoryIndex.coerce(trials, categories=trial_categories)
    group_index = CategoryIndex.coerce(groups)

    diagnostics: List[Diagnostic] = []

    if not trial_index.is_empty and len(trial_index) != n:
        diagnostics.append(data_length_mismatch("trials"))
        return ValidationResult(ok=False, diagnostics=diagnostics)

    if not group_index.is_empty and len(group_index) != n:
        diagnostics.append(data_length_mismatch("groups"))
        return ValidationResult(ok=False, diagnostics=diagnostics)

    n_alignment_times = len(as_seconds(alignment_times))
    if not alignment_is_consistent(n_alignment_times, trial_index.n_categories):
        diagnostics.append(
            alignment_times_mismatch(n_alignment_times, trial_index.n_categories)
        )

    return ValidationResult(ok=True, diagnostics=diagnostics)
