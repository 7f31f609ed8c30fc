"""Candidate bookkeeping shared by the beam search engines.

This module provides the persistent token path used to store partial
sequences, the Candidate value type, and the helpers that expand and prune
candidates through a caller-supplied expansion function.
"""

from dataclasses import dataclass
from operator import attrgetter
from typing import (Any, Generic, Iterable, Iterator, List, Mapping,
                    NamedTuple, Optional, Protocol, Sequence, Tuple, TypeVar)

import torch

from minisampler.errors import ExpansionMismatch, InvalidDistribution
from minisampler.sampling.functional import EPSILON

S = TypeVar('S')


class ExpansionResult(NamedTuple):
    """Successor states of a search state and their probabilities.

    Attributes:
        next_states: Ordered successor states. A state is finished when it
            carries a truthy ``done`` attribute or ``'done'`` key.
        probabilities: Probability of each successor, same length as
            ``next_states``.
    """
    next_states: Sequence[Any]
    probabilities: Sequence[float]


class Expander(Protocol[S]):
    """Caller-supplied function mapping a state to its successors."""

    def __call__(self, state: S) -> Tuple[Sequence[S], Sequence[float]]:
        ...


def state_is_done(state: Any) -> bool:
    """Check the optional ``done`` flag of an opaque search state.

    Args:
        state: A mapping, an object, or anything else.

    Returns:
        True if the state is a mapping with a truthy ``'done'`` entry or an
        object with a truthy ``done`` attribute, False otherwise.
    """
    if isinstance(state, Mapping):
        return bool(state.get('done', False))
    return bool(getattr(state, 'done', False))


@dataclass(frozen=True, eq=False)
class TokenPath:
    """Immutable linked list of chosen indices, newest token first.

    Children share their parent's prefix, so extending a path costs O(1)
    regardless of its length.

    Attributes:
        token: The most recently chosen index.
        parent: Path leading up to ``token``, or None at the first position.
        length: Number of tokens on the path.
    """

    token: int
    parent: Optional['TokenPath'] = None
    length: int = 1

    def append(self, token: int) -> 'TokenPath':
        return TokenPath(token, self, self.length + 1)

    def __len__(self) -> int:
        return self.length

    def __iter__(self) -> Iterator[int]:
        return iter(self.to_list())

    def to_list(self) -> List[int]:
        """Materialize the path in generation order."""
        tokens = []
        node: Optional[TokenPath] = self
        while node is not None:
            tokens.append(node.token)
            node = node.parent
        tokens.reverse()
        return tokens


@dataclass(frozen=True, eq=False)
class Candidate(Generic[S]):
    """A partial sequence retained by beam search.

    Attributes:
        state: Caller-owned search state, never inspected beyond its
            ``done`` flag.
        score: Cumulative log-probability, including any diversity penalty.
        path: Chosen indices so far, None for the root.
        done: Whether the candidate is finished and must not be expanded.
    """

    state: S
    score: float = 0.0
    path: Optional[TokenPath] = None
    done: bool = False

    @property
    def sequence(self) -> List[int]:
        """Chosen indices in generation order."""
        return self.path.to_list() if self.path is not None else []

    @property
    def length(self) -> int:
        return self.path.length if self.path is not None else 0

    def child(self, index: int, state: S, log_prob: float) -> 'Candidate[S]':
        """Extend this candidate by one chosen index."""
        path = self.path.append(index) if self.path is not None else TokenPath(
            index)
        return Candidate(state=state,
                         score=self.score + log_prob,
                         path=path,
                         done=state_is_done(state))

    def __repr__(self) -> str:
        return (f'Candidate(score={self.score:.4f}, '
                f'sequence={self.sequence}, done={self.done})')


def expand_candidate(expand: Expander, parent: Candidate) -> List[Candidate]:
    """Call the expansion function once and build the parent's children.

    Child ``i`` is scored ``parent.score + ln(probabilities[i] + eps)``.
    Probabilities are not range-checked.

    Args:
        expand: Expansion function.
        parent: Candidate to expand.

    Returns:
        One child per successor state, in successor order.

    Raises:
        ExpansionMismatch: If states and probabilities differ in length.
        InvalidDistribution: If the expansion yields no successors.
    """
    next_states, probabilities = expand(parent.state)
    next_states = list(next_states)

    if len(next_states) != len(probabilities):
        raise ExpansionMismatch(
            f'Expansion returned {len(next_states)} states but '
            f'{len(probabilities)} probabilities',
            details={
                'num_states': len(next_states),
                'num_probabilities': len(probabilities),
            })
    if not next_states:
        raise InvalidDistribution('Expansion returned no next states',
                                  details={'sequence': parent.sequence})

    log_probs = torch.log(
        torch.as_tensor(probabilities, dtype=torch.float64) + EPSILON).tolist()
    return [
        parent.child(index, state, log_prob)
        for index, (state, log_prob) in enumerate(zip(next_states, log_probs))
    ]


def prune(candidates: Iterable[Candidate], width: int) -> List[Candidate]:
    """Keep the ``width`` best candidates, best first.

    The sort is stable, so equal scores keep their insertion order.
    """
    return sorted(candidates, key=attrgetter('score'), reverse=True)[:width]


def all_done(candidates: Iterable[Candidate]) -> bool:
    return all(candidate.done for candidate in candidates)
