"""
Stateless functional implementations of sampling strategies.
These functions operate on probability distributions and return filtered
distributions or sampled token indices.

Distributions are 1-D ``torch.float64`` tensors. Filters return the kept
original indices together with their renormalized probabilities so the
caller can draw from the reduced distribution and map the draw back.
"""

from typing import Iterable, Optional, Sequence, Tuple, Union

import numpy as np
import torch
from torch import Tensor

from minisampler.errors import InvalidConfig, InvalidDistribution

# Constants
EPSILON = 1e-10

DistributionLike = Union[Tensor, np.ndarray, Sequence[float]]


def as_distribution(values: DistributionLike) -> Tensor:
    """
    Convert an ordered sequence of probabilities into a 1-D float64 tensor.

    Raises:
        InvalidDistribution: If the values are empty, not one-dimensional,
            negative or not finite.
    """
    if isinstance(values, Tensor):
        probs = values.detach().to(device='cpu', dtype=torch.float64)
    else:
        try:
            probs = torch.as_tensor(values, dtype=torch.float64)
        except (TypeError, ValueError) as e:
            raise InvalidDistribution(
                f'Cannot interpret {type(values).__name__} as a distribution'
            ) from e

    if probs.dim() != 1:
        raise InvalidDistribution(
            f'Distribution must be 1-D, got shape {tuple(probs.shape)}',
            details={'shape': tuple(probs.shape)})
    if probs.numel() == 0:
        raise InvalidDistribution('Distribution must not be empty')
    if not torch.isfinite(probs).all():
        raise InvalidDistribution('Distribution contains non-finite values')
    if (probs < 0).any():
        raise InvalidDistribution(
            'Distribution contains negative probabilities',
            details={'min': probs.min().item()})
    return probs


def renormalize(values: DistributionLike) -> Tensor:
    """
    Divide every entry by the total mass.

    Raises:
        InvalidDistribution: If the total mass is not positive.
    """
    probs = as_distribution(values)
    total = probs.sum().item()
    if total <= 0:
        raise InvalidDistribution('Distribution has no probability mass',
                                  details={'total': total})
    return probs / total


def categorical_draw(distribution: DistributionLike,
                     generator: Optional[torch.Generator] = None) -> int:
    """
    Draw one index from a categorical distribution.

    A uniform `r` in `[0, 1)` is compared against the running cumulative sum
    in index order; the first index whose cumulative sum reaches `r` wins.
    When floating-point drift leaves the total below `r`, the last index is
    returned.

    Args:
        distribution: probabilities of shape `[n_tokens]`
        generator: random generator. `None` is a convenience that draws from
            torch's global generator, which any other torch code can advance,
            so draws are only reproducible with an explicit generator

    Returns:
        sampled index in `[0, n_tokens)`
    """
    probs = as_distribution(distribution)
    if probs.sum().item() <= 0:
        raise InvalidDistribution('Cannot draw from a distribution with no '
                                  'probability mass')

    r = torch.rand(1, dtype=torch.float64, generator=generator)
    cumulative = torch.cumsum(probs, dim=0)
    index = int(torch.searchsorted(cumulative, r)[0].item())
    return min(index, probs.numel() - 1)


def entropy(probs: DistributionLike) -> float:
    """
    Shannon entropy `H = -sum(p * ln(p))` in nats, skipping zero entries.
    """
    probs = as_distribution(probs)
    return -torch.special.xlogy(probs, probs).sum().item()


def greedy_sample(probs: DistributionLike) -> int:
    """
    Index of the most likely token; ties go to the lowest index.
    """
    return int(torch.argmax(as_distribution(probs)).item())


def apply_temperature(probs: DistributionLike, temperature: float) -> Tensor:
    """
    Reshape a distribution as `(p + eps) ** (1 / T)` and renormalize.

    The power is taken in log space and normalized with a softmax, which is
    the same distribution but cannot underflow to all zeros for small `T`.
    """
    if not temperature > 0:
        raise InvalidConfig(
            f'temperature must be positive, got {temperature}')
    probs = as_distribution(probs)
    return torch.softmax(torch.log(probs + EPSILON) / temperature, dim=-1)


def _crossing_size(cumulative: Tensor, threshold: float) -> int:
    """Number of leading entries up to and including the first one whose
    cumulative sum reaches `threshold`; all entries if none does."""
    target = torch.tensor([threshold], dtype=cumulative.dtype)
    index = int(torch.searchsorted(cumulative, target)[0].item())
    return min(index + 1, cumulative.numel())


def top_k_filter(probs: DistributionLike, k: int) -> Tuple[Tensor, Tensor]:
    """
    Keep the `k` most likely tokens.

    Ties keep their original index order.

    Returns:
        kept original indices and their renormalized probabilities
    """
    if isinstance(k, bool) or not isinstance(k, int) or k <= 0:
        raise InvalidConfig(f'k must be a positive integer, got {k!r}')
    probs = as_distribution(probs)
    sorted_probs, sorted_indices = torch.sort(probs,
                                              descending=True,
                                              stable=True)
    keep = min(k, probs.numel())
    return sorted_indices[:keep], renormalize(sorted_probs[:keep])


def top_p_filter(probs: DistributionLike, p: float) -> Tuple[Tensor, Tensor]:
    """
    Keep the smallest probability-sorted prefix whose mass reaches `p`.

    The token that crosses the threshold is included.

    Returns:
        kept original indices and their renormalized probabilities
    """
    if not 0.0 < p <= 1.0:
        raise InvalidConfig(f'p must be in (0.0, 1.0], got {p}')
    probs = as_distribution(probs)
    sorted_probs, sorted_indices = torch.sort(probs,
                                              descending=True,
                                              stable=True)
    cumulative = torch.cumsum(sorted_probs, dim=0)
    keep = _crossing_size(cumulative, p)
    return sorted_indices[:keep], renormalize(sorted_probs[:keep])


def typical_filter(probs: DistributionLike,
                   tau: float) -> Tuple[Tensor, Tensor]:
    """
    Keep the most typical tokens until their mass reaches `tau`.

    A token's typicality is the distance between its surprise
    `-ln(p + eps)` and the distribution entropy.

    Returns:
        kept original indices and their renormalized probabilities
    """
    if not 0.0 < tau <= 1.0:
        raise InvalidConfig(f'tau must be in (0.0, 1.0], got {tau}')
    probs = as_distribution(probs)
    h = entropy(probs)
    deviation = torch.abs(-torch.log(probs + EPSILON) - h)
    _, order = torch.sort(deviation, stable=True)
    ordered_probs = probs[order]
    cumulative = torch.cumsum(ordered_probs, dim=0)
    keep = _crossing_size(cumulative, tau)
    return order[:keep], renormalize(ordered_probs[:keep])


def apply_repetition_penalty(probs: DistributionLike,
                             prev_tokens: Iterable[int],
                             penalty: float) -> Tensor:
    """
    Divide the probability of every distinct previous token by `penalty`
    and renormalize.

    Repeated occurrences do not compound. Indices outside the distribution
    are ignored.
    """
    if not penalty >= 1.0:
        raise InvalidConfig(f'penalty must be >= 1.0, got {penalty}')
    probs = as_distribution(probs).clone()
    vocab_size = probs.numel()

    seen = {int(token) for token in prev_tokens}
    valid = sorted(token for token in seen if 0 <= token < vocab_size)
    if valid:
        probs[torch.tensor(valid, dtype=torch.long)] /= penalty

    return renormalize(probs)


def sample_filtered(indices: Tensor,
                    probs: Tensor,
                    generator: Optional[torch.Generator] = None) -> int:
    """
    Draw from a filtered distribution and map the draw back to the
    original token index.
    """
    return int(indices[categorical_draw(probs, generator)].item())
