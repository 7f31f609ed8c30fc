r"""
---
title: Typical Sampling
summary: Typical-set sampling from a probability distribution.
---

# Typical Sampling

Typical sampling keeps the tokens whose information content is closest to
the expected information content of the distribution, i.e. its entropy.
For every token we compute

$$\left| -\ln(p_i + \epsilon) - H \right|, \quad H = -\sum_j p_j \ln p_j$$

and keep the tokens with the smallest deviation until their mass reaches
`tau`. The result avoids both over-likely and over-surprising choices: the
mode itself can be excluded when it is far more likely than typical.

Reference: "Typical Decoding for Natural Language Generation"
"""

from typing import Optional

import torch

from minisampler.errors import InvalidConfig
from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import (DistributionLike,
                                             sample_filtered, typical_filter)


class TypicalSampler(Sampler):
    """
    ## Typical Sampler

    Filters tokens by how close their surprise is to the distribution
    entropy, then samples among the survivors.
    """

    def __init__(self, tau: float = 0.95):
        """
        :param tau: is the probability mass of the typical set, in `(0, 1]`
        """
        if not (0.0 < tau <= 1.0):
            raise InvalidConfig(f'tau must be in (0.0, 1.0], got {tau}')
        self.tau = tau

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Sample from the typical set

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :return: sampled token index in the original vocabulary
        """
        indices, typical = typical_filter(probs, self.tau)
        return sample_filtered(indices, typical, generator)
