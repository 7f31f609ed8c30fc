"""
Diverse beam search.

The total beam is split into ``num_groups`` groups of ``group_size``
candidates. Within a step the groups are expanded one after another, and a
child of a later group loses ``diversity_penalty`` for every candidate of an
earlier group (already updated this step) that chose the same index at the
same position. The penalty stays in the reported score.
"""

from collections import Counter
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, List, Optional

from minisampler.sampling.config import SamplingConfig
from minisampler.search.candidate import (Candidate, Expander, all_done,
                                          expand_candidate, prune)
from minisampler.utils.logger_utils import get_logger

logger = get_logger(__name__)


def _token_counts(previous: Iterable[Candidate], position: int) -> Counter:
    """Count how many earlier-group candidates chose each index at
    ``position``.

    Only the path node at ``position`` is read, so the cost does not grow
    with sequence length. Candidates that finished before reaching
    ``position`` do not count.
    """
    counts: Counter = Counter()
    for candidate in previous:
        node = candidate.path
        while node is not None and node.length > position + 1:
            node = node.parent
        if node is not None and node.length == position + 1:
            counts[node.token] += 1
    return counts


def diverse_beam_search(
    expand: Expander,
    start_state: Any,
    config: Optional[SamplingConfig] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> List[Candidate]:
    """
    Run beam search in groups that are pushed away from each other.

    Args:
        expand: Function mapping a state to ``(next_states, probabilities)``.
        start_state: State shared by the root of every group.
        config: Supplies ``num_groups``, ``group_size``, ``max_length`` and
            ``diversity_penalty``; defaults to ``SamplingConfig()``.
        should_stop: Optional cancellation check polled before each step.

    Returns:
        The final candidates of all groups, best (penalized) score first.

    Raises:
        InvalidConfig: If a field was set out of range after
            construction.
        ExpansionMismatch: If an expansion returns mismatched lengths.
        InvalidDistribution: If an expansion returns no successors.
    """
    cfg = config or SamplingConfig()
    cfg.validate()
    groups: List[List[Candidate]] = [[Candidate(state=start_state)]
                                     for _ in range(cfg.num_groups)]

    for step in range(cfg.max_length):
        if should_stop is not None and should_stop():
            logger.info(f'Diverse beam search cancelled before step {step}')
            break

        for g in range(cfg.num_groups):
            previous = [
                candidate for group in groups[:g] for candidate in group
            ]
            counts: Dict[int, Counter] = {}

            candidates: List[Candidate] = []
            for candidate in groups[g]:
                if candidate.done:
                    candidates.append(candidate)
                    continue
                position = candidate.length
                if position not in counts:
                    counts[position] = (_token_counts(previous, position)
                                        if cfg.diversity_penalty > 0 else
                                        Counter())
                for child in expand_candidate(expand, candidate):
                    repeats = counts[position][child.path.token]
                    if repeats:
                        child = replace(child,
                                        score=child.score -
                                        cfg.diversity_penalty * repeats)
                    candidates.append(child)

            groups[g] = prune(candidates, cfg.group_size)

        logger.debug(f'Diverse beam step {step}: best group scores ' + ', '.join(
            f'{group[0].score:.4f}' for group in groups))

        if all(all_done(group) for group in groups):
            logger.debug(f'All groups finished after {step + 1} steps')
            break

    return prune((candidate for group in groups for candidate in group),
                 cfg.num_groups * cfg.group_size)
