from dataclasses import dataclass
from typing import List, Optional, Tuple

from minisampler import (SamplingConfig, SmartSampler, beam_search,
                         diverse_beam_search)
from minisampler.utils.logger_utils import get_logger

logger = get_logger('__main__')

VOCAB = ['hello', 'there', 'miner', 'friend', '<end>']

# Toy bigram table: row = previous word, column = next word.
BIGRAMS = {
    None: [0.55, 0.05, 0.15, 0.20, 0.05],
    'hello': [0.02, 0.48, 0.20, 0.25, 0.05],
    'there': [0.05, 0.02, 0.40, 0.38, 0.15],
    'miner': [0.05, 0.05, 0.02, 0.08, 0.80],
    'friend': [0.04, 0.06, 0.05, 0.05, 0.80],
    '<end>': [0.0, 0.0, 0.0, 0.0, 1.0],
}


@dataclass(frozen=True)
class ChatState:
    last_word: Optional[str] = None
    done: bool = False


def expand(state: ChatState) -> Tuple[List[ChatState], List[float]]:
    next_states = [
        ChatState(last_word=word, done=word == '<end>') for word in VOCAB
    ]
    return next_states, BIGRAMS[state.last_word]


def main():
    sampler = SmartSampler(SamplingConfig(method='top_p', top_p=0.9, seed=0))
    history: List[int] = []
    probs = BIGRAMS[None]
    for _ in range(4):
        token = sampler(probs, prev_tokens=history)
        history.append(token)
        if VOCAB[token] == '<end>':
            break
        probs = BIGRAMS[VOCAB[token]]
    logger.info(f'Sampled: {" ".join(VOCAB[i] for i in history)!r}')

    best = beam_search(expand, ChatState(),
                       SamplingConfig(beam_width=3, max_length=6))
    logger.info(f'Beam search: {" ".join(VOCAB[i] for i in best.sequence)!r} '
                f'(score {best.score:.3f})')

    pool = diverse_beam_search(
        expand, ChatState(),
        SamplingConfig(num_groups=2, group_size=2, max_length=6))
    for candidate in pool:
        logger.info(
            f'Diverse: {" ".join(VOCAB[i] for i in candidate.sequence)!r} '
            f'(score {candidate.score:.3f})')


if __name__ == '__main__':
    main()
