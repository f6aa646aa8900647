# src/spikeraster/utils/__init__.py
from .example_data import generate_example_spikes
