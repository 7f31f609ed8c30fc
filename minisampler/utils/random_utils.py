"""Random number generation utilities.

This module provides helpers for seeding every random source the sampler may
touch and for building the explicit generators that are threaded through
sampling calls.
"""

import random
from typing import Optional

import numpy as np
import torch

__all__ = ['set_random_seed', 'make_generator']


def set_random_seed(seed: int) -> None:
    """Set the random seed for reproducibility.

    This function sets the seed for:
    - Python's random module
    - NumPy's random module
    - PyTorch's default CPU generator

    Args:
        seed: The seed value to use.
    """
    random.seed(seed)
    np.random.seed(seed)
    torch.manual_seed(seed)


def make_generator(seed: Optional[int] = None) -> torch.Generator:
    """Create a dedicated CPU generator for sampling calls.

    Args:
        seed: Seed for the generator. ``None`` seeds it from a
            non-deterministic source.

    Returns:
        A ``torch.Generator`` independent of torch's global state.
    """
    generator = torch.Generator()
    if seed is None:
        generator.seed()
    else:
        generator.manual_seed(seed)
    return generator
