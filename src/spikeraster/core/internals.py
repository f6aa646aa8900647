# src/spikeraster/core/internals.py
import sys
from typing import Callable, TypeVar, Union

T = TypeVar("T")


def public_api(
    module_override: Union[str, None] = None, export: bool = True
) -> Callable:
    """
    Mark a function or class as part of the public API.

    Parameters
    ----------
    module_override : str, optional
        Module whose ``__all__`` receives the name. Defaults to the module
        the object is defined in.
    export : bool, default True
        Whether to add the name to ``__all__`` at all

    Usage:
    ------
    @public_api()
    def align_spike_times(...):
        ...

    @public_api(module_override="spikeraster.processing")
    def build_raster_layout(...):
        ...
    """

    def decorator(obj: T) -> T:
        module = module_override or obj.__module__
        module_obj = sys.modules.get(module)
        if module_obj is None:
            # Target package not imported yet, fall back to the defining module
            module_obj = sys.modules[obj.__module__]

        if not hasattr(module_obj, "__all__"):
            module_obj.__all__ = []

        if export and obj.__name__ not in module_obj.__all__:
            module_obj.__all__.append(obj.__name__)

        return obj

    return decorator


def register_module_components(module_name: str = None):
    """Register all public classes of a module in ``__all__``"""

    def decorator(module):
        for name, obj in list(module.__dict__.items()):
            if isinstance(obj, type) and not name.startswith("_"):
                public_api(module_override=module_name)(obj)
        return module

    return decorator
