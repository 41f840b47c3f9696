"""
Frequency Response Curve Container

Immutable value type holding an ordered Nyquist locus H(jω) sampled at
ascending positive frequencies. This is the read-only input handed to the
SRG boundary builder.

Ordering Contract
-----------------
The arc construction assumes that consecutive samples are neighbours on the
Nyquist locus. The curve therefore enforces:

- at least two samples
- finite response values (no NaN/Inf)
- when frequencies are supplied: positive, finite, strictly increasing

Violations raise ``CurveContractError`` at construction time so that a
malformed polygon is never produced downstream.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union


class CurveContractError(ValueError):
    """Raised when a response curve violates the sampling contract."""


@dataclass(frozen=True)
class FrequencyResponseCurve:
    """
    Ordered complex frequency response H(jω) for ω > 0.

    Attributes
    ----------
    response : np.ndarray
        Complex response samples H[0..n-1]
    frequencies : np.ndarray, optional
        Matching frequency vector [rad/s], strictly increasing
    """
    response: np.ndarray
    frequencies: Optional[np.ndarray] = None

    def __post_init__(self):
        response = np.array(self.response, dtype=complex).reshape(-1)
        response.setflags(write=False)
        object.__setattr__(self, 'response', response)

        if self.frequencies is not None:
            frequencies = np.array(self.frequencies, dtype=float).reshape(-1)
            frequencies.setflags(write=False)
            object.__setattr__(self, 'frequencies', frequencies)

        self.validate()

    def validate(self) -> None:
        """Check the sampling contract, raising CurveContractError on failure."""
        n = self.response.size
        if n < 2:
            raise CurveContractError(
                f"Response curve needs at least 2 samples, got {n}"
            )

        bad = ~np.isfinite(self.response)
        if np.any(bad):
            idx = np.flatnonzero(bad)
            raise CurveContractError(
                f"Response curve has {idx.size} non-finite sample(s), first at index {idx[0]}"
            )

        if self.frequencies is None:
            return

        if self.frequencies.size != n:
            raise CurveContractError(
                f"Frequency vector length {self.frequencies.size} does not match "
                f"response length {n}"
            )
        if not np.all(np.isfinite(self.frequencies)):
            raise CurveContractError("Frequency vector contains non-finite values")
        if self.frequencies[0] <= 0.0:
            raise CurveContractError(
                f"Frequencies must be positive, got {self.frequencies[0]:g} rad/s"
            )
        steps = np.diff(self.frequencies)
        if np.any(steps <= 0.0):
            idx = int(np.flatnonzero(steps <= 0.0)[0])
            raise CurveContractError(
                f"Frequencies must be strictly increasing (violation at index {idx + 1})"
            )

    def __len__(self) -> int:
        return self.response.size

    @property
    def real(self) -> np.ndarray:
        return self.response.real

    @property
    def imag(self) -> np.ndarray:
        return self.response.imag

    def mirrored(self) -> np.ndarray:
        """Negative-frequency branch H(-jω) = conj(H(jω)) for real systems."""
        return np.conj(self.response)

    @classmethod
    def from_samples(
        cls,
        samples: Union['FrequencyResponseCurve', Sequence[complex], np.ndarray,
                       Tuple[np.ndarray, np.ndarray]],
        frequencies: Optional[np.ndarray] = None
    ) -> 'FrequencyResponseCurve':
        """
        Coerce supported inputs into a validated curve.

        Parameters
        ----------
        samples : FrequencyResponseCurve, array-like, or (frequencies, response)
            An existing curve is returned unchanged (unless new frequencies
            are supplied). A 2-tuple of 1-D arrays is read as
            (frequencies, response) and its first array must be real.
        frequencies : np.ndarray, optional
            Frequency vector [rad/s] for a bare response array

        Returns
        -------
        FrequencyResponseCurve

        Raises
        ------
        CurveContractError
            Complex first element in a pair, a multi-dimensional response,
            or any violation of the sampling contract
        """
        if isinstance(samples, cls):
            if frequencies is None:
                return samples
            return cls(samples.response, frequencies)

        # (frequencies, response) pair; a tuple of two scalars is a response
        if (isinstance(samples, tuple) and len(samples) == 2 and frequencies is None
                and np.ndim(samples[0]) == 1 and np.ndim(samples[1]) == 1):
            freqs, response = samples
            if not np.isrealobj(freqs):
                raise CurveContractError(
                    "Ambiguous 2-tuple: first element is complex, so it is not a "
                    "frequency vector; pass (frequencies, response) with real "
                    "frequencies or a single response array"
                )
            return cls(response, freqs)

        if np.ndim(samples) > 1:
            raise CurveContractError(
                f"Response must be one-dimensional, got shape {np.shape(samples)}"
            )

        return cls(samples, frequencies)
