# src/spikeraster/core/base.py
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict

from spikeraster.core.internals import public_api


@public_api(module_override="spikeraster.core")
class VisualizationComponent(ABC):
    """
    Base class for components that can be drawn by several backends.

    Subclasses keep their inputs and presentation settings, build a
    backend-independent description in ``get_data()`` and name the renderer
    they need in ``renderer``. ``plot()`` looks that renderer up for the
    requested backend.
    """

    renderer: ClassVar[str] = ""

    def __init__(self, data, **kwargs):
        self.data = data
        self.config = kwargs

    @abstractmethod
    def get_data(self) -> Dict[str, Any]:
        """Return ``{"data": ..., "params": ...}`` for a renderer"""

    @abstractmethod
    def update(self, **kwargs) -> None:
        """Change inputs or presentation settings"""

    def plot(self, backend: str = "mpl", **kwargs):
        """
        Generate a plot using the specified backend.

        Parameters
        ----------
        backend : str, optional
            Backend to use for plotting ('mpl', 'plotly')
        **kwargs : dict
            Passed to the renderer, overriding stored parameters

        Returns
        -------
        Any
            ``(fig, ax)`` for matplotlib, a ``go.Figure`` for plotly
        """
        from spikeraster.backends import get_renderer

        render = get_renderer(backend, self.renderer)
        return render(self.get_data(), **kwargs)
