"""
---
title: Top-P Sampling (Nucleus Sampling)
summary: Nucleus (top-p) sampling from a probability distribution.
---

# Top-P Sampling (Nucleus Sampling)

Nucleus sampling was introduced in the paper "The Curious Case of Neural
Text Degeneration" (https://arxiv.org/abs/1904.09751).

We sample from the smallest set of most likely tokens whose cumulative
probability reaches `p`; the token that crosses the threshold belongs to the
nucleus. The nucleus size adapts to the shape of the distribution: a single
dominant token gives a nucleus of one even for large `p`, a flat
distribution gives a large nucleus even for small `p`. With `p = 1` this is
plain categorical sampling.
"""

from typing import Optional

import torch

from minisampler.errors import InvalidConfig
from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import (DistributionLike,
                                             sample_filtered, top_p_filter)


class TopPSampler(Sampler):
    """
    ## Top-P Sampler (Nucleus Sampling)

    Samples tokens from the smallest set whose cumulative probability
    reaches p.
    """

    def __init__(self, p: float = 0.9):
        """
        :param p: is the cumulative probability threshold, in `(0, 1]`
        """
        if not (0.0 < p <= 1.0):
            raise InvalidConfig(f'p must be in (0.0, 1.0], got {p}')
        self.p = p

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Sample from the nucleus

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :return: sampled token index in the original vocabulary
        """
        indices, nucleus = top_p_filter(probs, self.p)
        return sample_filtered(indices, nucleus, generator)
