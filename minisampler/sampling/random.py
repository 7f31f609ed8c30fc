"""
---
title: Random Sampling
summary: Unrestricted categorical sampling from a probability distribution.
---

# Random Sampling

Here we sample from the full probability distribution, with no filtering.
This is what top-p sampling degenerates to with `p = 1`.


"""

from typing import Optional

import torch

from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import DistributionLike, categorical_draw


class RandomSampler(Sampler):
    """
    ## Random Sampler
    """

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Sample from the probability distribution

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :return: sampled token index
        """
        return categorical_draw(probs, generator)
