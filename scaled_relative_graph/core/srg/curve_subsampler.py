"""
Positional decimation of long response curves before boundary assembly.

Fine Nyquist grids (thousands of points) give boundaries far denser than a
polygon fill needs. The subsampler keeps ``n_max`` samples evenly spaced by
index, not by frequency, and always keeps both endpoints. It does not look at
curvature, so a sharp resonance can end up under-sampled.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import numpy as np
from typing import Tuple, Union

from scaled_relative_graph.core.frequency_response.frequency_response_curve import FrequencyResponseCurve


def subsample_indices(n: int, n_max: int) -> np.ndarray:
    """
    Evenly spaced, strictly increasing indices into a length-n sequence.

    Parameters
    ----------
    n : int
        Original sequence length
    n_max : int
        Maximum number of samples to keep (>= 2)

    Returns
    -------
    np.ndarray
        Integer indices; arange(n) when n <= n_max, otherwise n_max
        indices starting at 0 and ending at n - 1
    """
    if n_max < 2:
        raise ValueError(f"n_max must be >= 2 to keep both endpoints, got {n_max}")
    if n <= n_max:
        return np.arange(n)
    # Index step (n-1)/(n_max-1) > 1, so rounding never repeats an index
    return np.round(np.linspace(0, n - 1, n_max)).astype(int)


def subsample_curve(
    curve: Union[FrequencyResponseCurve, np.ndarray, Tuple[np.ndarray, np.ndarray]],
    n_max: int
) -> Union[FrequencyResponseCurve, np.ndarray]:
    """
    Thin a response curve to at most n_max samples, preserving order.

    A FrequencyResponseCurve comes back as a FrequencyResponseCurve with its
    frequency vector thinned alongside; so does a (frequencies, response)
    tuple, which is validated first. A bare 1-D array comes back as an array.
    Inputs already within the limit are returned unchanged.
    """
    if isinstance(curve, tuple):
        curve = FrequencyResponseCurve.from_samples(curve)

    if isinstance(curve, FrequencyResponseCurve):
        idx = subsample_indices(len(curve), n_max)
        if idx.size == len(curve):
            return curve
        freqs = None if curve.frequencies is None else curve.frequencies[idx]
        return FrequencyResponseCurve(curve.response[idx], freqs)

    samples = np.asarray(curve)
    if samples.ndim != 1:
        raise ValueError(f"Expected a 1-D sample array, got shape {samples.shape}")
    idx = subsample_indices(samples.shape[0], n_max)
    if idx.size == samples.shape[0]:
        return curve
    return samples[idx]
