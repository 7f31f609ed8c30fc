"""
---
title: Greedy Sampling
summary: Greedy selection of the most likely token.
---

# Greedy Sampling

Here we pick the most likely token from the distribution. Ties go to the
token with the lowest index, and no randomness is consumed.


"""

from typing import Optional

import torch

from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import DistributionLike, greedy_sample


class GreedySampler(Sampler):
    """
    ## Greedy Sampler
    """

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Select the most likely token

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is accepted for interface compatibility and unused
        :return: index of the maximum-probability token
        """
        return greedy_sample(probs)
