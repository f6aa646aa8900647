# src/spikeraster/core/categories.py
import math
from collections.abc import Iterable
from enum import Enum
from typing import Any, Dict, Hashable, List, Optional, Sequence, Tuple, Union

import numpy as np
import polars as pl

from spikeraster.core.internals import public_api


class UndefinedCategory(Enum):
    """Tag for a missing category value (trial or group)"""

    UNDEFINED = "<undefined>"

    def __repr__(self) -> str:
        return "UNDEFINED"


UNDEFINED = UndefinedCategory.UNDEFINED

Category = Union[Hashable, UndefinedCategory]


def is_missing(value: Any) -> bool:
    """
    Check whether a single label counts as missing.

    ``None``, float NaN (including numpy floats), ``numpy.datetime64('NaT')``
    and the ``UNDEFINED`` tag are all missing.
    """
    if value is None or value is UNDEFINED:
        return True
    if isinstance(value, float):
        return math.isnan(value)
    if isinstance(value, (np.datetime64, np.timedelta64)):
        return bool(np.isnat(value))
    return False


def display_label(category: Category) -> str:
    """Convert a category to the text shown on axes and legends"""
    if category is UNDEFINED:
        return UNDEFINED.value
    return str(category)


def is_single_label(value: Any) -> bool:
    """True for a lone label such as a string or number rather than a container"""
    return isinstance(value, (str, bytes)) or not isinstance(value, Iterable)


def _as_label_list(values: Any) -> List[Any]:
    """Flatten any supported label container into a plain list"""
    if values is None:
        return []
    if isinstance(values, CategoryIndex):
        return list(values.labels)
    if isinstance(values, pl.Series):
        return values.to_list()
    if isinstance(values, np.ndarray):
        return values.ravel().tolist()
    if is_single_label(values):
        return [values]
    return list(values)


def _declared_categories(values: Any) -> Optional[List[Any]]:
    """Categories carried by the container's dtype, if any"""
    if isinstance(values, pl.Series) and isinstance(values.dtype, pl.Enum):
        return values.dtype.categories.to_list()
    return None


@public_api(module_override="spikeraster.core")
class CategoryIndex:
    """
    Ordered set of distinct labels with a per-element lookup table.

    The index is computed once per layout call and shared by alignment and
    layout, so that both agree on which row every timestamp belongs to.

    Parameters
    ----------
    values : sequence, numpy array or polars Series, optional
        One label per timestamp. Missing entries are recorded with code -1.
    categories : sequence, optional
        Declared category order. Labels not present in ``categories`` are
        treated as missing. When omitted, categories are taken from a polars
        ``Enum`` dtype if there is one, else in first-seen order.
    """

    def __init__(self, values: Any = None, categories: Optional[Sequence] = None):
        labels = _as_label_list(values)

        if categories is None:
            categories = _declared_categories(values)

        if categories is not None:
            ordered = [c for c in _as_label_list(categories) if not is_missing(c)]
            lookup: Dict[Hashable, int] = {}
            for category in ordered:
                lookup.setdefault(category, len(lookup))
        else:
            lookup = {}
            for label in labels:
                if not is_missing(label) and label not in lookup:
                    lookup[label] = len(lookup)

        self.labels: Tuple[Any, ...] = tuple(labels)
        self.categories: Tuple[Hashable, ...] = tuple(lookup)
        self.codes = np.fromiter(
            (
                -1 if is_missing(label) else lookup.get(label, -1)
                for label in labels
            ),
            dtype=np.int64,
            count=len(labels),
        )

    @classmethod
    def coerce(
        cls, values: Any = None, categories: Optional[Sequence] = None
    ) -> "CategoryIndex":
        """Return ``values`` if it is already an index, else build one"""
        if isinstance(values, cls) and categories is None:
            return values
        return cls(values, categories=categories)

    def __len__(self) -> int:
        return len(self.labels)

    def __repr__(self) -> str:
        return (
            f"CategoryIndex(n={len(self)}, categories={list(self.categories)!r})"
        )

    @property
    def is_empty(self) -> bool:
        return len(self.labels) == 0

    @property
    def n_categories(self) -> int:
        return len(self.categories)

    @property
    def has_missing(self) -> bool:
        return bool(np.any(self.codes < 0))

    def rows(self, n: Optional[int] = None) -> np.ndarray:
        """
        1-based row number per element as floats.

        Missing labels map to NaN. An empty index yields ``n`` rows of 1,
        which is the single implicit row used when no trials are given.
        """
        if self.is_empty:
            return np.ones(0 if n is None else n, dtype=float)
        rows = (self.codes + 1).astype(float)
        rows[self.codes < 0] = np.nan
        return rows
