import itertools
import math

import pytest
from conftest import TreeExpander, TreeNode

from minisampler.errors import (ExpansionMismatch, InvalidConfig,
                                InvalidDistribution)
from minisampler.sampling.config import SamplingConfig
from minisampler.sampling.functional import EPSILON, greedy_sample
from minisampler.search import Candidate, beam_search


def path_score(table, path):
    return sum(
        math.log(table[path[:depth]][token] + EPSILON)
        for depth, token in enumerate(path))


class TestBeamSearchOptimality:
    """Beam search on small trees with known answers."""

    def test_scenario_c_matches_exhaustive_best(self, depth3_tree):
        best = beam_search(depth3_tree, TreeNode(),
                           SamplingConfig(beam_width=2, max_length=3))

        leaves = list(itertools.product([0, 1], repeat=3))
        scores = {leaf: path_score(depth3_tree.table, leaf) for leaf in leaves}
        exhaustive_best = max(leaves, key=scores.get)

        assert tuple(best.sequence) == exhaustive_best == (1, 0, 0)
        assert best.score == pytest.approx(scores[exhaustive_best])
        assert best.score == pytest.approx(math.log(0.4 * 0.9 * 0.95),
                                           abs=1e-8)

    def test_width_one_is_greedy_path(self, depth3_tree):
        best = beam_search(depth3_tree, TreeNode(),
                           SamplingConfig(beam_width=1, max_length=3))
        assert best.sequence == [0, 0, 0]

    def test_width_one_reproduces_greedy_on_deterministic_expansion(self):
        length = 6

        def expand(state):
            # One dominant successor per step, rotating with depth.
            depth = len(state.path)
            probs = [0.1, 0.1, 0.1, 0.1]
            probs[depth % 4] = 0.7
            return [TreeNode(state.path + (i, )) for i in range(4)], probs

        best = beam_search(expand, TreeNode(),
                           SamplingConfig(beam_width=1, max_length=length))

        greedy_path = []
        state = TreeNode()
        for _ in range(length):
            next_states, probs = expand(state)
            index = greedy_sample(probs)
            greedy_path.append(index)
            state = next_states[index]

        assert best.sequence == greedy_path
        assert len(best.sequence) == length

    def test_scores_are_log_probability_sums(self, depth3_tree):
        best = beam_search(depth3_tree, TreeNode(),
                           SamplingConfig(beam_width=4, max_length=3))
        assert best.score == pytest.approx(
            path_score(depth3_tree.table, tuple(best.sequence)))

    def test_long_sequences_do_not_underflow(self):

        def expand(state):
            return [TreeNode(state.path + (i, )) for i in range(2)], [0.5, 0.5]

        best = beam_search(expand, TreeNode(),
                           SamplingConfig(beam_width=2, max_length=1500))
        assert len(best.sequence) == 1500
        assert best.score == pytest.approx(1500 * math.log(0.5 + EPSILON))


class TestBeamSearchLifecycle:
    """Expansion counts, finished candidates and termination."""

    def test_expands_each_unfinished_candidate_once_per_step(
            self, depth3_tree):
        beam_search(depth3_tree, TreeNode(),
                    SamplingConfig(beam_width=2, max_length=3))
        # Step 1 expands the root, steps 2 and 3 expand two candidates each.
        assert len(depth3_tree.calls) == 5
        assert depth3_tree.calls[0] == ()

    def test_done_candidates_pass_through(self):
        table = {
            (): [0.9, 0.1],
            (1, ): [1.0, 0.0],
            (1, 0): [1.0, 0.0],
        }
        expander = TreeExpander(table, finished=((0, ), ))
        best = beam_search(expander, TreeNode(),
                           SamplingConfig(beam_width=2, max_length=3))

        assert best.sequence == [0]
        assert best.done is True
        assert best.score == pytest.approx(math.log(0.9 + EPSILON))
        # The finished candidate (0,) is never expanded.
        assert (0, ) not in expander.calls

    def test_stops_early_when_all_done(self):
        expander = TreeExpander({(): [0.5, 0.5]}, finished=((0, ), (1, )))
        best = beam_search(expander, TreeNode(),
                           SamplingConfig(beam_width=2, max_length=50))
        assert expander.calls == [()]
        assert best.sequence == [0]

    def test_mapping_states_carry_done_flag(self):

        def expand(state):
            return [{'done': True}, {'done': False}], [0.7, 0.3]

        best = beam_search(expand, {'done': False},
                           SamplingConfig(beam_width=1, max_length=10))
        assert best.sequence == [0]
        assert best.done

    def test_max_length_bounds_the_search(self):

        def expand(state):
            return [TreeNode(state.path + (0, ))], [1.0]

        best = beam_search(expand, TreeNode(),
                           SamplingConfig(beam_width=3, max_length=4))
        assert best.sequence == [0, 0, 0, 0]
        assert not best.done

    def test_should_stop_cancels_between_steps(self, depth3_tree):
        steps = []

        def should_stop():
            steps.append(None)
            return len(steps) > 2

        best = beam_search(depth3_tree,
                           TreeNode(),
                           SamplingConfig(beam_width=2, max_length=3),
                           should_stop=should_stop)
        assert len(best.sequence) == 2
        assert best.sequence == [1, 0]

    def test_cancel_before_first_step_returns_root(self, depth3_tree):
        root = TreeNode()
        best = beam_search(depth3_tree,
                           root,
                           SamplingConfig(),
                           should_stop=lambda: True)
        assert isinstance(best, Candidate)
        assert best.sequence == []
        assert best.score == 0.0
        assert best.state is root
        assert depth3_tree.calls == []


class TestBeamSearchErrors:
    """Structural failures surface as typed errors."""

    def test_mismatched_expansion(self):

        def expand(state):
            return [TreeNode((0, )), TreeNode((1, ))], [1.0]

        with pytest.raises(ExpansionMismatch) as excinfo:
            beam_search(expand, TreeNode(), SamplingConfig())
        assert excinfo.value.details == {
            'num_states': 2,
            'num_probabilities': 1
        }

    def test_empty_expansion(self):
        with pytest.raises(InvalidDistribution):
            beam_search(lambda state: ([], []), TreeNode(), SamplingConfig())

    @pytest.mark.parametrize('field', ['beam_width', 'max_length'])
    def test_invalid_config(self, field):
        with pytest.raises(InvalidConfig):
            beam_search(lambda state: ([state], [1.0]), TreeNode(),
                        SamplingConfig(**{field: 0}))

    @pytest.mark.parametrize('field', ['beam_width', 'max_length'])
    def test_config_mutated_after_construction(self, depth3_tree, field):
        config = SamplingConfig(beam_width=2, max_length=3)
        setattr(config, field, 0)
        with pytest.raises(InvalidConfig):
            beam_search(depth3_tree, TreeNode(), config)
        assert depth3_tree.calls == []
