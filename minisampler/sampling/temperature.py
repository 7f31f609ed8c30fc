r"""
---
title: Sampling with Temperature
summary: Temperature-scaled sampling from a probability distribution.
---

# Sampling with Temperature

We raise every probability to the power `1 / T` and renormalize:

$$Q_i = \frac{(P_i + \epsilon)^{1/T}}{\sum_j (P_j + \epsilon)^{1/T}}$$

`T < 1` sharpens the distribution toward its mode, `T > 1` flattens it,
and `T = 1` leaves it unchanged up to the epsilon floor.
"""

from typing import Optional

import torch

from minisampler.errors import InvalidConfig
from minisampler.sampling.base import Sampler
from minisampler.sampling.functional import (DistributionLike,
                                             apply_temperature,
                                             categorical_draw)


class TemperatureSampler(Sampler):
    """
    ## Sampler with Temperature
    """

    def __init__(self, temperature: float = 1.0):
        """
        :param temperature: is the temperature to sample with
        """
        if not temperature > 0:
            raise InvalidConfig(
                f'temperature must be positive, got {temperature}')
        self.temperature = temperature

    def __call__(self,
                 probs: DistributionLike,
                 generator: Optional[torch.Generator] = None) -> int:
        """
        Sample from the temperature-scaled distribution

        :param probs: is the probability distribution of shape `[n_tokens]`
        :param generator: is the random generator used for the draw
        :return: sampled token index
        """
        scaled = apply_temperature(probs, self.temperature)
        return categorical_draw(scaled, generator)
