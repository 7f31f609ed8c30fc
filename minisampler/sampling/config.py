from dataclasses import dataclass, fields
from enum import Enum
from typing import Any, Mapping, Optional

from minisampler.errors import InvalidConfig
from minisampler.utils.logger_utils import get_logger

logger = get_logger(__name__)


class SamplingMethod(str, Enum):
    """Single-step strategies understood by the dispatcher."""
    GREEDY = 'greedy'
    TEMPERATURE = 'temperature'
    TOP_K = 'top_k'
    TOP_P = 'top_p'
    TYPICAL = 'typical'


@dataclass
class SamplingConfig:
    """Configuration for token sampling and sequence search.

    Attributes:
        method: Strategy used by the dispatcher. Unrecognized values fall
            back to top-p when sampling. Default: 'top_p'.
        temperature: Temperature for temperature scaling, > 0. Default: 1.0.
        top_k: Number of candidates kept by top-k, > 0. Default: 40.
        top_p: Nucleus mass threshold, in (0, 1]. Default: 0.9.
        tau: Typical sampling mass threshold, in (0, 1]. Default: 0.95.
        repetition_penalty: Divisor applied to previously emitted tokens,
            >= 1. Default: 1.2.
        beam_width: Candidates kept per beam search step, > 0. Default: 3.
        max_length: Maximum number of search steps, > 0. Default: 20.
        num_groups: Groups in diverse beam search, > 0. Default: 2.
        group_size: Candidates per diverse beam group, > 0. Default: 2.
        diversity_penalty: Score deduction per repeated token across groups,
            >= 0. Default: 0.5.
        seed: Seed for the generator owned by ``SmartSampler``. Default: None.
    """

    method: str = SamplingMethod.TOP_P.value
    temperature: float = 1.0
    top_k: int = 40
    top_p: float = 0.9
    tau: float = 0.95
    repetition_penalty: float = 1.2
    beam_width: int = 3
    max_length: int = 20
    num_groups: int = 2
    group_size: int = 2
    diversity_penalty: float = 0.5
    seed: Optional[int] = None

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Check every field against its allowed range.

        Runs on construction and again at the entry of the search engines,
        since the dataclass stays mutable. Comparisons are written so that
        NaN fails them.

        Raises:
            InvalidConfig: If a field has the wrong type or is out of range.
        """
        for name in ('top_k', 'beam_width', 'max_length', 'num_groups',
                     'group_size'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidConfig(
                    f'{name} must be an integer, got {value!r}',
                    details={'field': name})

        if not self.temperature > 0:
            raise InvalidConfig(
                f'Temperature must be positive, got {self.temperature}')
        if self.top_k <= 0:
            raise InvalidConfig(f'Top-k must be positive, got {self.top_k}')
        if not 0.0 < self.top_p <= 1.0:
            raise InvalidConfig(
                f'Top-p must be in (0.0, 1.0], got {self.top_p}')
        if not 0.0 < self.tau <= 1.0:
            raise InvalidConfig(
                f'Typical tau must be in (0.0, 1.0], got {self.tau}')
        if not self.repetition_penalty >= 1.0:
            raise InvalidConfig(
                f'Repetition penalty must be >= 1.0, '
                f'got {self.repetition_penalty}')
        if self.beam_width <= 0:
            raise InvalidConfig(
                f'Beam width must be positive, got {self.beam_width}')
        if self.max_length <= 0:
            raise InvalidConfig(
                f'Max length must be positive, got {self.max_length}')
        if self.num_groups <= 0:
            raise InvalidConfig(
                f'Number of groups must be positive, got {self.num_groups}')
        if self.group_size <= 0:
            raise InvalidConfig(
                f'Group size must be positive, got {self.group_size}')
        if not self.diversity_penalty >= 0:
            raise InvalidConfig(f'Diversity penalty must be non-negative, '
                                f'got {self.diversity_penalty}')

    @classmethod
    def from_dict(cls, options: Optional[Mapping[str, Any]]) -> 'SamplingConfig':
        """Build a config from a loose mapping of options.

        Unknown keys are ignored and keys that are absent or set to ``None``
        take their defaults.

        Args:
            options: Mapping of option names to values, or ``None``.

        Returns:
            A validated ``SamplingConfig``.

        Raises:
            InvalidConfig: If a recognized option is out of range.
        """
        if not options:
            return cls()

        known = {f.name for f in fields(cls)}
        ignored = sorted(str(key) for key in options if key not in known)
        if ignored:
            logger.debug(f'Ignoring unrecognized sampling options: {ignored}')

        kwargs = {
            key: value
            for key, value in options.items()
            if key in known and value is not None
        }
        return cls(**kwargs)
