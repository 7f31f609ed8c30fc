"""Utility modules for minisampler.

Modules:
    logger_utils: Colored, per-name logger configuration
    random_utils: Seeding helpers and explicit generator construction
"""

from minisampler.utils.logger_utils import get_logger
from minisampler.utils.random_utils import make_generator, set_random_seed

__all__ = ['get_logger', 'make_generator', 'set_random_seed']
