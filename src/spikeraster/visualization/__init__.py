# src/spikeraster/visualization/__init__.py
import sys

from spikeraster.core.internals import register_module_components

from .raster import SpikeRasterPlot

register_module_components(__name__)(sys.modules[__name__])
