"""
Frequency Response Sampling for SRG Analysis

Produces the ordered Nyquist samples H(jω), ω ascending, that the SRG
boundary builder consumes. Evaluation is delegated to python-control or
scipy.signal; this package owns the grid definition and the sampling
contract.

Sampling Contract
-----------------
- at least two samples
- all samples finite
- frequencies positive and strictly increasing

A real LTI system has a conjugate-symmetric response, H(-jω) = conj H(jω),
so only positive frequencies are sampled; the negative branch is the mirror
image.

Author: Senior Control Systems Engineer
Date: October 18, 2026
"""

from .frequency_response_curve import (
    FrequencyResponseCurve,
    CurveContractError,
)

from .frequency_response_sampler import (
    FrequencyResponseSampler,
    FrequencyGridConfig,
)

__all__ = [
    # Curve
    'FrequencyResponseCurve',
    'CurveContractError',
    # Sampler
    'FrequencyResponseSampler',
    'FrequencyGridConfig',
]
