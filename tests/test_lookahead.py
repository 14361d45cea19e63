"""Tests for the clustered lookahead strategy."""

import math
import random

import pytest

from lookahead import (
    HARD_DEPTH,
    TargetCluster,
    cluster_targets,
    evaluate_cluster,
    evaluate_move_score,
    get_promising_directions_from,
    play_hard,
    play_hard_unclustered,
    recursive_score,
    score_clusters,
)
from map_gen import board_from_rows
from models import Direction
from tests.conftest import TRAPPED_BY_MINE_ROWS

# Two single-gem clusters mirrored through the agent
MIRRORED_ROWS = [
    "G....",
    ".....",
    "..A..",
    ".....",
    "....G",
]


class TestClustering:
    def test_quadrant_assignment(self):
        board = board_from_rows([
            "G.G.G",
            ".....",
            "G.A.G",
            ".....",
            "G...G",
        ])
        clusters = {c.quadrant: sorted(c.targets) for c in cluster_targets(board)}
        assert clusters["NW"] == [(0, 0)]
        # Same column as the agent counts as east, same row as south
        assert clusters["NE"] == [(0, 2), (0, 4)]
        assert clusters["SW"] == [(2, 0), (4, 0)]
        assert clusters["SE"] == [(2, 4), (4, 4)]

    def test_quadrant_order_and_empty_dropped(self):
        board = board_from_rows(MIRRORED_ROWS)
        assert [c.quadrant for c in cluster_targets(board)] == ["NW", "SE"]

    def test_shields_are_targets(self):
        board = board_from_rows(["S.A"])
        clusters = cluster_targets(board)
        assert len(clusters) == 1
        assert clusters[0].targets == [(0, 0)]

    def test_no_targets(self):
        board = board_from_rows(["..A.."])
        assert cluster_targets(board) == []


class TestTargetCluster:
    def test_center_uses_integer_division(self):
        cluster = TargetCluster("NE", [(0, 4), (3, 4)])
        assert cluster.center() == (1, 4)

    def test_full_alignment(self):
        cluster = TargetCluster("NE", [(0, 4)])
        # Distance 2 -> 50, heading straight at the centroid -> +50
        assert cluster.evaluate_direction(2, 4, Direction.UP) == pytest.approx(100.0)

    def test_partial_alignment(self):
        cluster = TargetCluster("NE", [(0, 4)])
        assert cluster.evaluate_direction(2, 4, Direction.DOWN) == pytest.approx(75.0)

    def test_no_alignment(self):
        cluster = TargetCluster("NE", [(0, 4)])
        assert cluster.evaluate_direction(2, 4, Direction.RIGHT) == pytest.approx(50.0)

    def test_on_target(self):
        cluster = TargetCluster("SE", [(2, 4)])
        assert cluster.evaluate_direction(2, 4, Direction.RIGHT) == math.inf


class TestClusterCandidate:
    def test_candidate_heads_to_cluster(self, single_gem_board):
        (cluster,) = cluster_targets(single_gem_board)
        assert evaluate_cluster(single_gem_board, cluster) == Direction.RIGHT

    def test_fatal_directions_skipped(self):
        board = board_from_rows(["GMA.."])
        (cluster,) = cluster_targets(board)
        assert evaluate_cluster(board, cluster) == Direction.RIGHT

    def test_wall_facing_aligned_move_not_candidate(self, rng):
        # RIGHT points at the cluster but the wall keeps the agent in place
        board = board_from_rows(["A#.", "..G"])
        stay = board.slide(0, 0, Direction.RIGHT)
        assert (stay.row, stay.col) == (0, 0)
        (cluster,) = cluster_targets(board)
        assert evaluate_cluster(board, cluster) == Direction.DOWN
        assert play_hard(board, rng) == Direction.DOWN

    def test_no_candidate_when_trapped(self):
        board = board_from_rows(["G##", "#AM", "###"])
        (cluster,) = cluster_targets(board)
        assert evaluate_cluster(board, cluster) is None


class TestLookahead:
    def test_depth_zero_is_worthless(self, single_gem_board):
        res = single_gem_board.slide(2, 2, Direction.RIGHT)
        assert evaluate_move_score(single_gem_board, res, 0, 0) == 0.0
        assert recursive_score(single_gem_board, 2, 2, 0, 0, frozenset()) == 0.0

    def test_depth_one_is_immediate_value(self):
        board = board_from_rows(["AGS."])
        res = board.slide(0, 0, Direction.RIGHT)
        assert evaluate_move_score(board, res, 1, 0) == pytest.approx(110.0)

    def test_future_value_decays(self):
        board = board_from_rows(["G.A.G"])
        res = board.slide(0, 2, Direction.RIGHT)
        score = evaluate_move_score(board, res, 2, 0, frozenset({2}))
        assert score == pytest.approx(100 + 0.9 * 100)

    def test_revisited_cell_without_gem_is_dropped(self):
        # Shield at the west edge; the only way on from there is back east
        board = board_from_rows(["S.A"])
        res = board.slide(0, 2, Direction.LEFT)
        assert (res.row, res.col, res.shields) == (0, 0, 1)
        assert evaluate_move_score(board, res, 3, 0, frozenset({2})) == pytest.approx(10.0)
        # The second return to the shield cell is dropped too
        assert evaluate_move_score(board, res, 3, 0) == pytest.approx(10.0)

    def test_recursive_score_drops_revisited_cell(self):
        board = board_from_rows(["S.A"])
        assert recursive_score(board, 0, 2, 0, 3, frozenset({2})) == pytest.approx(10.0)

    def test_revisit_collecting_gem_still_counts(self):
        board = board_from_rows(["SGA"])
        res = board.slide(0, 2, Direction.LEFT)
        assert evaluate_move_score(board, res, 2, 0, frozenset({2})) == pytest.approx(110 + 0.9 * 100)
        assert recursive_score(board, 0, 2, 0, 2, frozenset({2})) == pytest.approx(110 + 0.9 * 100)

    def test_promising_from_position(self):
        board = board_from_rows(["..A.G"])
        assert get_promising_directions_from(board, 0, 2) == [Direction.RIGHT]

    def test_promising_falls_back_to_safe_moves(self):
        board = board_from_rows(["M.A..."])
        assert get_promising_directions_from(board, 0, 2) == [Direction.RIGHT]

    def test_cluster_scores_finite_for_safe_candidate(self):
        board = board_from_rows(MIRRORED_ROWS)
        for _cluster, _d, score in score_clusters(board):
            assert math.isfinite(score)
            assert score >= 0


class TestPlayHard:
    def test_takes_adjacent_gem(self, single_gem_board, rng):
        assert play_hard(single_gem_board, rng) == Direction.RIGHT

    def test_equal_clusters_first_quadrant_wins(self, rng):
        board = board_from_rows(MIRRORED_ROWS)
        scored = score_clusters(board)
        assert [c.quadrant for c, _, _ in scored] == ["NW", "SE"]
        assert scored[0][2] == scored[1][2]
        assert scored[0][1] == Direction.UP
        assert play_hard(board, rng) == Direction.UP
        assert play_hard(board, random.Random(7)) == Direction.UP

    def test_lookahead_depth(self):
        assert HARD_DEPTH == 4

    def test_unclustered_without_targets(self, rng):
        board = board_from_rows(["..A.."])
        assert play_hard(board, rng) == Direction.LEFT

    def test_trapped_returns_none(self, rng):
        board = board_from_rows(TRAPPED_BY_MINE_ROWS)
        assert play_hard(board, rng) is None

    def test_shield_allows_mine(self, rng):
        board = board_from_rows(TRAPPED_BY_MINE_ROWS, shields=1)
        assert play_hard_unclustered(board, rng) == Direction.RIGHT
