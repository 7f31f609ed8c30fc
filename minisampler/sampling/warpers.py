"""
---
title: Warper-Based Sampling
summary: Distribution warpers applied before another sampler.
---

# Warper-Based Sampling

Warpers transform the distribution before it reaches a sampler, so they
compose with any strategy: apply the penalty, then filter, then draw.

- Repetition penalty: discourages tokens that were already emitted
"""

from typing import Iterable, Optional

import torch

from minisampler.errors import InvalidConfig
from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import (DistributionLike,
                                             apply_repetition_penalty,
                                             categorical_draw)


class RepetitionPenaltySampler(Sampler):
    """
    ## Repetition Penalty Sampler

    Divides the probability of every distinct previously emitted token by
    the penalty, renormalizes and hands the result to the inner sampler.
    A token seen several times is penalized once.
    """

    def __init__(self,
                 penalty: float = 1.2,
                 sampler: Optional[Sampler] = None):
        """
        :param penalty: is the penalty factor, `>= 1.0`
        :param sampler: optional sampler to apply after the penalty
                       (default: plain categorical sampling)
        """
        if not penalty >= 1.0:
            raise InvalidConfig(f'penalty must be >= 1.0, got {penalty}')
        self.penalty = penalty
        self.sampler = sampler

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None,
                 prev_tokens: Optional[Iterable[int]] = None) -> int:
        """
        Apply repetition penalty and sample

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :param prev_tokens: are the previously generated token indices.
                           If None, no penalty is applied
        :return: sampled token index
        """
        if prev_tokens is not None and self.penalty != 1.0:
            probs = apply_repetition_penalty(probs, prev_tokens, self.penalty)

        if self.sampler is not None:
            return self.sampler(probs, generator)
        return categorical_draw(probs, generator)
