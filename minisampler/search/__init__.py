"""Sequence-level search over a caller-supplied expansion function.

- beam_search: Best sequence under a bounded beam
- beam_search_candidates: The whole final beam, best first
- diverse_beam_search: Grouped beams penalized for repeating each other
"""

from minisampler.search.beam_search import beam_search, beam_search_candidates
from minisampler.search.candidate import (Candidate, Expander,
                                          ExpansionResult, TokenPath,
                                          state_is_done)
from minisampler.search.diverse import diverse_beam_search

__all__ = [
    'Candidate',
    'Expander',
    'ExpansionResult',
    'TokenPath',
    'beam_search',
    'beam_search_candidates',
    'diverse_beam_search',
    'state_is_done',
]
