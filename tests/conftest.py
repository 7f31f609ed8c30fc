"""Pytest configuration and shared fixtures for minisampler tests.

This module provides common test utilities and fixtures for all test modules.
"""

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Tuple

import pytest
import torch

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))


@dataclass(frozen=True)
class TreeNode:
    """Search state identified by the path taken from the root."""
    path: Tuple[int, ...] = ()
    done: bool = False


class TreeExpander:
    """Expansion function over a fixed probability tree.

    ``table`` maps a path to the probabilities of its children. Paths
    listed in ``finished`` produce done states. Every call is recorded.
    """

    def __init__(self,
                 table: Dict[Tuple[int, ...], List[float]],
                 finished: Tuple[Tuple[int, ...], ...] = ()):
        self.table = table
        self.finished = set(finished)
        self.calls: List[Tuple[int, ...]] = []

    def __call__(self, state: TreeNode):
        self.calls.append(state.path)
        probs = self.table[state.path]
        next_states = [
            TreeNode(state.path + (i, ), state.path + (i, ) in self.finished)
            for i in range(len(probs))
        ]
        return next_states, probs


@pytest.fixture
def generator():
    """Provide a seeded generator so draws are reproducible."""
    return torch.Generator().manual_seed(1234)


@pytest.fixture
def depth3_tree():
    """Depth-3, branching-factor-2 tree where greedy is not optimal.

    Greedy follows 0 -> 0 -> 0 (0.6 * 0.5 * 0.6 = 0.18), while the best leaf
    is 1 -> 0 -> 0 (0.4 * 0.9 * 0.95 = 0.342).
    """
    return TreeExpander({
        (): [0.6, 0.4],
        (0, ): [0.5, 0.5],
        (1, ): [0.9, 0.1],
        (0, 0): [0.6, 0.4],
        (0, 1): [0.5, 0.5],
        (1, 0): [0.95, 0.05],
        (1, 1): [0.5, 0.5],
    })


# Configure pytest markers
def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line(
        'markers',
        "slow: marks tests as slow (deselect with '-m \"not slow\"')")
    config.addinivalue_line('markers',
                            'statistical: marks tests that rely on many draws')


def pytest_collection_modifyitems(config, items):
    """Modify test items during collection."""
    for item in items:
        if 'trials' in item.nodeid:
            item.add_marker(pytest.mark.statistical)
        if 'slow' in item.nodeid:
            item.add_marker(pytest.mark.slow)
