"""
---
title: Sampling Techniques for Token Selection
summary: >
 Strategies that turn a probability distribution over a vocabulary into a
 single token index.
---

# Sampling Techniques for Token Selection

* [Greedy Sampling]
* [Random Sampling]
* [Temperature Sampling]
* [Top-k Sampling]
* [Nucleus Sampling]
* [Typical Sampling]


"""

from typing import Optional, Protocol

import torch

from minisampler.sampling.functional import DistributionLike


class Sampler(Protocol):
    """
    ### Sampler base class
    """

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        ### Sample from a probability distribution

        :param probs: is the probability distribution over `N` tokens
        :param generator: is the random generator used for the draw
        :return: the sampled token index in `[0, N)`
        """
        raise NotImplementedError()
