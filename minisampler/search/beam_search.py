"""
Beam search over a caller-supplied expansion function.

This module implements:
- Beam search decoding in log-probability space
- Pass-through of finished candidates
- Early stopping and cooperative cancellation
"""

from typing import Any, Callable, List, Optional

from minisampler.sampling.config import SamplingConfig
from minisampler.search.candidate import (Candidate, Expander, all_done,
                                          expand_candidate, prune)
from minisampler.utils.logger_utils import get_logger

logger = get_logger(__name__)


def beam_search_candidates(
    expand: Expander,
    start_state: Any,
    config: Optional[SamplingConfig] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> List[Candidate]:
    """
    Run beam search and return the whole final beam.

    Every step expands each unfinished candidate once, in beam order, scores
    child ``i`` as ``parent.score + ln(p_i + eps)``, carries finished
    candidates over unchanged and keeps the ``beam_width`` best. The search
    ends after ``max_length`` steps, when every kept candidate is finished,
    or when ``should_stop`` returns True before a step.

    Args:
        expand: Function mapping a state to ``(next_states, probabilities)``.
        start_state: State of the root candidate.
        config: Supplies ``beam_width`` and ``max_length``; defaults to
            ``SamplingConfig()``.
        should_stop: Optional cancellation check polled before each step.

    Returns:
        The final beam, best score first.

    Raises:
        InvalidConfig: If a field was set out of range after
            construction.
        ExpansionMismatch: If an expansion returns mismatched lengths.
        InvalidDistribution: If an expansion returns no successors.
    """
    cfg = config or SamplingConfig()
    cfg.validate()
    beam: List[Candidate] = [Candidate(state=start_state)]

    for step in range(cfg.max_length):
        if should_stop is not None and should_stop():
            logger.info(f'Beam search cancelled before step {step}')
            break

        candidates: List[Candidate] = []
        for candidate in beam:
            if candidate.done:
                candidates.append(candidate)
            else:
                candidates.extend(expand_candidate(expand, candidate))

        beam = prune(candidates, cfg.beam_width)
        logger.debug(f'Beam step {step}: kept {len(beam)} of '
                     f'{len(candidates)} candidates, '
                     f'best score {beam[0].score:.4f}')

        if all_done(beam):
            logger.debug(f'All beams finished after {step + 1} steps')
            break

    return beam


def beam_search(
    expand: Expander,
    start_state: Any,
    config: Optional[SamplingConfig] = None,
    should_stop: Optional[Callable[[], bool]] = None,
) -> Candidate:
    """
    Find the best-scoring sequence with beam search.

    See :func:`beam_search_candidates` for the search procedure.

    Returns:
        The highest-scoring candidate of the final beam.

    Example:
        >>> best = beam_search(expand, root, SamplingConfig(beam_width=4))
        >>> best.sequence, best.score
    """
    return beam_search_candidates(expand, start_state, config,
                                  should_stop)[0]
