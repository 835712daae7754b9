"""Tests for the shortest-path engine and the pointer map it produces."""

import math

import numpy as np
import pytest

from livewire.engine.config import LiveWireConfig
from livewire.engine.cost import NEIGHBOR_OFFSETS, LocalCostModel
from livewire.engine.path import NO_PREDECESSOR, PointerMap
from livewire.engine.pipeline import build_features
from livewire.engine.search import ShortestPathEngine
from livewire.errors import (
    InvariantViolationError,
    NoPathError,
    OutOfBoundsError,
    SearchCancelledError,
)
from tests.conftest import EDGE_4X4, EDGE_12X12, random_image


def _engine(image, config=None) -> ShortestPathEngine:
    return ShortestPathEngine(LocalCostModel(build_features(image)), config)


def _reference_costs(links: np.ndarray, width: int, height: int, seed: tuple[int, int]) -> np.ndarray:
    """Bellman-Ford over the same link table; slow but obviously correct."""
    n = width * height
    dist = [math.inf] * n
    dist[seed[1] * width + seed[0]] = 0.0
    changed = True
    while changed:
        changed = False
        for p in range(n):
            if dist[p] == math.inf:
                continue
            py, px = divmod(p, width)
            for k, (dx, dy) in enumerate(NEIGHBOR_OFFSETS):
                c = links[k, py, px]
                if c == math.inf:
                    continue
                r = (py + dy) * width + (px + dx)
                if dist[p] + c < dist[r] - 1e-12:
                    dist[r] = dist[p] + c
                    changed = True
    return np.array(dist)


class TestTree:
    def test_seed_cost_zero_and_everything_expanded(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((4, 3))
        assert tree.cost(4, 3) == 0.0
        assert tree.expanded.all()
        assert tree.expanded_count == 17 * 11
        assert tree.predecessor(4, 3) is None

    def test_every_non_seed_pixel_has_a_predecessor(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((0, 0))
        preds = tree.predecessors.copy()
        assert preds[tree.seed_index] == NO_PREDECESSOR
        preds = np.delete(preds, tree.seed_index)
        assert (preds >= 0).all()

    def test_costs_monotonic_along_tree(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((8, 5))
        for r in range(tree.width * tree.height):
            q = tree.predecessors[r]
            if q == NO_PREDECESSOR:
                continue
            assert tree.costs[r] >= tree.costs[q]

    def test_predecessors_are_adjacent(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((2, 9))
        for r, q in enumerate(tree.predecessors):
            if q == NO_PREDECESSOR:
                continue
            ry, rx = divmod(r, tree.width)
            qy, qx = divmod(int(q), tree.width)
            assert max(abs(rx - qx), abs(ry - qy)) == 1

    def test_matches_reference_costs(self):
        image = random_image(7, 6, seed=11)
        engine = _engine(image)
        tree = engine.compute_tree((3, 2))
        expected = _reference_costs(engine.cost_model.link_costs(), 7, 6, (3, 2))
        np.testing.assert_allclose(tree.costs, expected, rtol=1e-9, atol=1e-12)

    def test_seed_out_of_bounds(self, noisy_image):
        with pytest.raises(OutOfBoundsError):
            _engine(noisy_image).compute_tree((17, 0))

    def test_tree_arrays_read_only(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((1, 1))
        with pytest.raises(ValueError):
            tree.costs[0] = 1.0


class TestPaths:
    def test_path_to_seed_is_single_point(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((5, 5))
        assert tree.path_to(5, 5) == [(5, 5)]

    def test_all_paths_valid(self, noisy_image):
        tree = _engine(noisy_image).compute_tree((10, 4))
        for y in range(tree.height):
            for x in range(tree.width):
                path = tree.path_to(x, y)
                assert path[0] == (x, y)
                assert path[-1] == (10, 4)
                assert len(path) <= tree.width * tree.height
                for (ax, ay), (bx, by) in zip(path, path[1:]):
                    assert max(abs(ax - bx), abs(ay - by)) == 1

    def test_path_cost_matches_tree_cost(self, noisy_image):
        engine = _engine(noisy_image)
        tree = engine.compute_tree((0, 10))
        path = tree.path_to(16, 0)
        total = sum(engine.cost_model.local_cost(q, r) for r, q in zip(path, path[1:]))
        assert total == pytest.approx(tree.cost(16, 0))

    def test_edge_4x4_follows_edge_row(self):
        tree = _engine(EDGE_4X4).compute_tree((0, 0))
        path = tree.path_to(3, 0)
        assert path == [(3, 0), (2, 0), (1, 0), (0, 0)]
        assert all(1 <= x <= 2 for x, _ in path[1:-1])

    def test_edge_12x12_hugs_edge_then_cuts_across(self):
        tree = _engine(EDGE_12X12).compute_tree((5, 0))
        path = tree.path_to(2, 11)
        assert path[0] == (2, 11)
        assert path[-1] == (5, 0)
        # Stays on the edge column as long as it can, unlike a straight line
        assert all(x == 5 for x, y in path if y <= 8)
        assert len(path) == 12

    def test_edge_12x12_straight_down_the_edge(self):
        tree = _engine(EDGE_12X12).compute_tree((5, 0))
        assert tree.path_to(5, 11) == [(5, y) for y in range(11, -1, -1)]


class TestCancellation:
    def test_should_cancel_stops_search(self, noisy_image):
        engine = _engine(noisy_image, LiveWireConfig(progress_interval=1))
        with pytest.raises(SearchCancelledError):
            engine.compute_tree((0, 0), should_cancel=lambda: True)

    def test_cancel_after_some_progress(self, noisy_image):
        polls = []

        def should_cancel() -> bool:
            polls.append(1)
            return len(polls) >= 3

        engine = _engine(noisy_image, LiveWireConfig(progress_interval=10))
        with pytest.raises(SearchCancelledError):
            engine.compute_tree((0, 0), should_cancel=should_cancel)
        assert len(polls) == 3

    def test_progress_reported(self, noisy_image):
        fractions = []
        engine = _engine(noisy_image, LiveWireConfig(progress_interval=20))
        engine.compute_tree((3, 3), progress_callback=fractions.append)
        assert fractions == sorted(fractions)
        assert fractions[-1] == pytest.approx(1.0)
        assert len(fractions) == (17 * 11) // 20 + 1


def _pointer_map(predecessors, expanded=None, seed=(0, 0), width=3, height=1) -> PointerMap:
    n = width * height
    return PointerMap(
        width=width,
        height=height,
        seed=seed,
        predecessors=np.array(predecessors, dtype=np.int64),
        costs=np.zeros(n),
        expanded=np.array(expanded if expanded is not None else [True] * n),
    )


class TestPointerMapInvariants:
    def test_cycle_detected(self):
        # 1 -> 2 -> 1, never reaching the seed at 0
        pm = _pointer_map([NO_PREDECESSOR, 2, 1])
        with pytest.raises(InvariantViolationError, match="cycle"):
            pm.path_to(1, 0)

    def test_missing_predecessor_detected(self):
        pm = _pointer_map([NO_PREDECESSOR, NO_PREDECESSOR, 1])
        with pytest.raises(InvariantViolationError):
            pm.path_to(2, 0)

    def test_unreached_pixel(self):
        pm = _pointer_map([NO_PREDECESSOR, 0, NO_PREDECESSOR], expanded=[True, True, False])
        assert pm.path_to(1, 0) == [(1, 0), (0, 0)]
        with pytest.raises(NoPathError):
            pm.path_to(2, 0)

    def test_query_out_of_bounds(self):
        pm = _pointer_map([NO_PREDECESSOR, 0, 1])
        with pytest.raises(OutOfBoundsError):
            pm.path_to(3, 0)
        with pytest.raises(OutOfBoundsError):
            pm.cost(0, 1)

    def test_invariant_violation_is_assertion_error(self):
        pm = _pointer_map([NO_PREDECESSOR, 2, 1])
        with pytest.raises(AssertionError):
            pm.path_to(2, 0)
