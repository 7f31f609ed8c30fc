"""
Sampling module for token selection.

This module provides strategies that turn a probability distribution over a
vocabulary into a single token index:

**Basic Samplers:**
- GreedySampler: Always select the most likely token
- RandomSampler: Unrestricted categorical sampling
- TemperatureSampler: Temperature-scaled categorical sampling

**Filtering Samplers:**
- TopKSampler: Sample among the k most likely tokens
- TopPSampler: Nucleus (top-p) sampling
- TypicalSampler: Typical set sampling (entropy-based filtering)

**Penalty/Warper Samplers:**
- RepetitionPenaltySampler: Penalize previously generated tokens

**Dispatch:**
- SamplingConfig: Strategy and parameter configuration
- smart_sample: Route a distribution to the configured strategy
- SmartSampler: Configured sampler owning its random generator
"""

from minisampler.sampling.base import Sampler
from minisampler.sampling.config import SamplingConfig, SamplingMethod
from minisampler.sampling.functional import (apply_repetition_penalty,
                                             apply_temperature,
                                             as_distribution,
                                             categorical_draw, entropy,
                                             greedy_sample, renormalize,
                                             top_k_filter, top_p_filter,
                                             typical_filter)
from minisampler.sampling.greedy import GreedySampler
from minisampler.sampling.random import RandomSampler
from minisampler.sampling.sampler import SmartSampler, smart_sample
from minisampler.sampling.temperature import TemperatureSampler
from minisampler.sampling.top_k import TopKSampler
from minisampler.sampling.top_p import TopPSampler
from minisampler.sampling.typical import TypicalSampler
from minisampler.sampling.warpers import RepetitionPenaltySampler

__all__ = [
    # Base Protocol
    'Sampler',
    # Configuration and dispatch
    'SamplingConfig',
    'SamplingMethod',
    'SmartSampler',
    'smart_sample',
    # Distribution utilities
    'as_distribution',
    'renormalize',
    'categorical_draw',
    'entropy',
    'greedy_sample',
    'apply_temperature',
    'apply_repetition_penalty',
    'top_k_filter',
    'top_p_filter',
    'typical_filter',
    # Basic Samplers
    'GreedySampler',
    'RandomSampler',
    'TemperatureSampler',
    # Filtering Samplers
    'TopKSampler',
    'TopPSampler',
    'TypicalSampler',
    # Penalty/Warper Samplers
    'RepetitionPenaltySampler',
]
