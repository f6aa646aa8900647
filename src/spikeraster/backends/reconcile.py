# src/spikeraster/backends/reconcile.py
from typing import Any, List, Sequence

from pydantic import BaseModel, Field


class GroupOrderDiff(BaseModel):
    """How drawables from a previous render map onto a new group order"""

    reused: List[int] = Field(
        default_factory=list, description="Slots whose drawable is kept"
    )
    relabeled: List[int] = Field(
        default_factory=list, description="Reused slots whose group label changed"
    )
    created: List[int] = Field(
        default_factory=list, description="Slots that need a new drawable"
    )
    removed: List[int] = Field(
        default_factory=list, description="Previous slots to delete"
    )


def diff_group_order(previous: Sequence[Any], current: Sequence[Any]) -> GroupOrderDiff:
    """
    Compare two group orders slot by slot.

    Drawables are matched by position so the colour cycle (series index)
    of every slot stays stable; only the tail grows or shrinks.
    """
    n_previous = len(previous)
    n_current = len(current)
    n_shared = min(n_previous, n_current)

    return GroupOrderDiff(
        reused=list(range(n_shared)),
        relabeled=[i for i in range(n_shared) if previous[i] != current[i]],
        created=list(range(n_shared, n_current)),
        removed=list(range(n_shared, n_previous)),
    )
