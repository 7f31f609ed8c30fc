"""
Single entry point that routes a distribution to the strategy named in a
``SamplingConfig``.
"""

from typing import Iterable, Optional

import torch

from minisampler.sampling import functional as F
from minisampler.sampling.config import SamplingConfig, SamplingMethod
from minisampler.utils.logger_utils import get_logger
from minisampler.utils.random_utils import make_generator

logger = get_logger(__name__)


def smart_sample(
    probs: F.DistributionLike,
    config: Optional[SamplingConfig] = None,
    generator: Optional[torch.Generator] = None,
    prev_tokens: Optional[Iterable[int]] = None,
) -> int:
    """
    Sample one token index with the strategy selected by ``config.method``.

    The function holds no state, so independent calls may run concurrently
    as long as they do not share a generator.

    Args:
        probs: [vocab_size] probability distribution
        config: Sampling configuration; defaults to ``SamplingConfig()``
        generator: Random generator for the draw; ``None`` uses torch's
            global generator. That default is shared with all other torch
            code, so pass a generator (see ``make_generator``) for
            reproducible draws
        prev_tokens: Previously emitted token indices. When given, the
            repetition penalty is applied before the strategy runs

    Returns:
        sampled token index

    Raises:
        InvalidDistribution: If the distribution is structurally invalid.
        InvalidConfig: If a strategy parameter is out of range.
    """
    cfg = config or SamplingConfig()
    cfg.validate()

    # 1. Apply penalties (if any)
    if prev_tokens is not None and cfg.repetition_penalty != 1.0:
        probs = F.apply_repetition_penalty(probs, prev_tokens,
                                           cfg.repetition_penalty)

    # 2. Route on the configured method
    try:
        method = SamplingMethod(cfg.method)
    except ValueError:
        logger.warning(
            f'Unrecognized sampling method {cfg.method!r}, using top_p')
        method = SamplingMethod.TOP_P

    if method is SamplingMethod.GREEDY:
        return F.greedy_sample(probs)

    if method is SamplingMethod.TEMPERATURE:
        scaled = F.apply_temperature(probs, cfg.temperature)
        return F.categorical_draw(scaled, generator)

    if method is SamplingMethod.TOP_K:
        indices, kept = F.top_k_filter(probs, cfg.top_k)
    elif method is SamplingMethod.TYPICAL:
        indices, kept = F.typical_filter(probs, cfg.tau)
    else:
        indices, kept = F.top_p_filter(probs, cfg.top_p)

    return F.sample_filtered(indices, kept, generator)


class SmartSampler:
    """
    A configurable sampler that owns its random generator.

    It supports both stateful usage (initialized with a config) and
    per-call overrides of the config.

    Example:
        >>> sampler = SmartSampler(SamplingConfig(method='top_k', top_k=5, seed=0))
        >>> token = sampler([0.1, 0.6, 0.3])
    """

    def __init__(self,
                 config: Optional[SamplingConfig] = None,
                 generator: Optional[torch.Generator] = None):
        self.config = config or SamplingConfig()
        if generator is None:
            generator = make_generator(self.config.seed)
        self.generator = generator

    def __call__(self,
                 probs: F.DistributionLike,
                 config: Optional[SamplingConfig] = None,
                 prev_tokens: Optional[Iterable[int]] = None) -> int:
        return smart_sample(probs,
                            config or self.config,
                            generator=self.generator,
                            prev_tokens=prev_tokens)
