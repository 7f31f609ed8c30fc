"""minisampler: token sampling and sequence search for a chat agent.

minisampler turns a probability distribution over a vocabulary into a chosen
token, or an expansion function into a chosen sequence:
- Greedy, temperature, top-k, top-p (nucleus) and typical sampling
- Repetition penalty composable with every strategy
- A config-driven dispatcher with explicit, injectable random generators
- Beam search and diverse beam search in log-probability space

Quick Start:
    >>> from minisampler import SamplingConfig, smart_sample, make_generator
    >>>
    >>> config = SamplingConfig(method='top_p', top_p=0.5)
    >>> token = smart_sample([0.4, 0.35, 0.25], config,
    ...                      generator=make_generator(0))

Core Modules:
    errors: Typed sampling failures
    sampling.config: Sampling configuration
    sampling.functional: Distribution utilities and filters
    sampling.sampler: Strategy dispatcher
    search.beam_search: Beam search engine
    search.diverse: Diverse beam search
"""

__version__ = '0.1.0'
__author__ = 'minisampler Contributors'

from minisampler.errors import (ExpansionMismatch, InvalidConfig,  # noqa: F401
                                InvalidDistribution, SamplingError)
from minisampler.sampling import (SamplingConfig, SamplingMethod,  # noqa: F401
                                  SmartSampler, categorical_draw,
                                  renormalize, smart_sample)
from minisampler.search import (Candidate, beam_search,  # noqa: F401
                                beam_search_candidates,
                                diverse_beam_search)
from minisampler.utils import make_generator, set_random_seed  # noqa: F401

__all__ = [
    'SamplingConfig',
    'SamplingMethod',
    'SmartSampler',
    'smart_sample',
    'categorical_draw',
    'renormalize',
    'Candidate',
    'beam_search',
    'beam_search_candidates',
    'diverse_beam_search',
    'make_generator',
    'set_random_seed',
    'SamplingError',
    'InvalidDistribution',
    'InvalidConfig',
    'ExpansionMismatch',
]
