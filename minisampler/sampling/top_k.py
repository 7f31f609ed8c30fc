"""
---
title: Top-k Sampling
summary: Sampling restricted to the k most likely tokens.
---

# Top-k Sampling

We keep the `k` most likely tokens, renormalize their probabilities and
sample among them. Ties are ordered by token index, so `k = 1` selects
exactly the token greedy sampling would.
"""

from typing import Optional

import torch

from minisampler.errors import InvalidConfig
from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import (DistributionLike,
                                             sample_filtered, top_k_filter)


class TopKSampler(Sampler):
    """
    ## Top-k Sampler
    """

    def __init__(self, k: int = 40):
        """
        :param k: is the number of tokens to pick
        """
        if isinstance(k, bool) or not isinstance(k, int) or k < 1:
            raise InvalidConfig(f'k must be an integer >= 1, got {k!r}')
        self.k = k

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Sample from the top-k tokens

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :return: sampled token index in the original vocabulary
        """
        indices, kept = top_k_filter(probs, self.k)
        return sample_filtered(indices, kept, generator)
