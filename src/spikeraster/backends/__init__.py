# src/spikeraster/backends/__init__.py
from importlib import import_module
from typing import Callable

from spikeraster.backends.reconcile import GroupOrderDiff, diff_group_order

BACKENDS = {
    "mpl": "spikeraster.backends.mpl",
    "plotly": "spikeraster.backends.plotly",
}


def get_renderer(backend: str, name: str) -> Callable:
    """
    Look up ``render_<name>`` in a backend package.

    Backends are imported lazily so that matplotlib and plotly are only
    loaded when used.
    """
    if backend not in BACKENDS:
        raise ValueError(f"Unsupported backend: {backend}")
    module = import_module(f"{BACKENDS[backend]}.{name}")
    return getattr(module, f"render_{name}")


__all__ = ["BACKENDS", "GroupOrderDiff", "diff_group_order", "get_renderer"]
