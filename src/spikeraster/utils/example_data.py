# src/spikeraster/utils/example_data.py
from typing import List, Optional, Tuple

import numpy as np

from spikeraster.core.internals import public_api


def _neuron_spikes(
    rng: np.random.Generator,
    trial_starts: np.ndarray,
    n_response: int,
    response_time: float,
    response_jitter: float,
    n_background: int,
    trial_duration: float,
) -> Tuple[np.ndarray, np.ndarray]:
    """Spike times and 1-based trial numbers for one simulated neuron"""
    n_trials = len(trial_starts)
    relative = np.concatenate(
        [
            rng.standard_normal((n_trials, n_response)) * response_jitter
            + response_time,
            rng.random((n_trials, n_background)) * trial_duration,
        ],
        axis=1,
    )
    trial_numbers = np.broadcast_to(
        np.arange(1, n_trials + 1)[:, np.newaxis], relative.shape
    )

    keep = (relative >= 0) & (relative < trial_duration)
    times = (relative + trial_starts[:, np.newaxis])[keep]
    return times, trial_numbers[keep]


@public_api(module_override="spikeraster.utils")
def generate_example_spikes(
    n_trials: int = 20,
    trial_duration: float = 60.0,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Generate random spike times for two neurons across several trials.

    Trials start one ``trial_duration`` apart. Neuron 1 fires around 2 s
    into each trial, neuron 2 around 20 s, both on top of uniform
    background firing. Spikes outside ``[0, trial_duration)`` of their
    trial are dropped.

    Parameters
    ----------
    n_trials : int
        Number of trials
    trial_duration : float
        Trial length and spacing in seconds
    seed : int, optional
        Seed for reproducible output

    Returns
    -------
    spike_times : np.ndarray
        Sorted spike times in seconds
    trials : np.ndarray
        1-based trial number per spike
    groups : np.ndarray
        Neuron number (1 or 2) per spike
    trial_starts : np.ndarray
        Start time of each trial, usable as per-trial alignment times
    """
    rng = np.random.default_rng(seed)
    trial_starts = np.arange(1, n_trials + 1) * trial_duration

    times: List[np.ndarray] = []
    trials: List[np.ndarray] = []
    groups: List[np.ndarray] = []
    neurons = [
        # (responses per trial, response time, jitter, background spikes)
        (100, 2.0, 2.5, 20),
        (100, 20.0, 5.0, 10),
    ]
    for neuron, (n_response, response_time, jitter, n_background) in enumerate(
        neurons, start=1
    ):
        neuron_times, neuron_trials = _neuron_spikes(
            rng,
            trial_starts,
            n_response,
            response_time,
            jitter,
            n_background,
            trial_duration,
        )
        times.append(neuron_times)
        trials.append(neuron_trials)
        groups.append(np.full(len(neuron_times), neuron))

    spike_times = np.concatenate(times)
    order = np.argsort(spike_times, kind="stable")

    return (
        spike_times[order],
        np.concatenate(trials)[order],
        np.concatenate(groups)[order],
        trial_starts.astype(float),
    )
