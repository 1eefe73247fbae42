import unittest
import sys
import os

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from logic.colors import Color
from logic.connection_engine import ConnectionEngine, PathState
from logic.errors import (
    InvalidLevelError,
    REASON_CROSSING,
    REASON_NO_TARGET,
    REASON_NOT_DRAWING,
    REASON_SAME_ENDPOINT,
    REASON_WRONG_COLOR,
)
from logic.level_data import LevelDescriptor, PointData


def make_descriptor(points, grid_size=4):
    return LevelDescriptor(grid_size, [PointData(x, y, name) for x, y, name in points])


# 4x4 board, world coordinates: cell (x, y) -> (x - 1.5, y - 1.5)
RED_BLUE_CORNERS = [(0, 0, "Red"), (2, 0, "Red"), (0, 3, "Blue"), (3, 3, "Blue")]
RED_BLUE_CROSSING = [(0, 0, "Red"), (2, 0, "Red"), (1, 1, "Blue"), (3, 1, "Blue")]


class TestConnectionEngineBasics(unittest.TestCase):
    def setUp(self):
        self.engine = ConnectionEngine()
        self.engine.setup_board(make_descriptor(RED_BLUE_CORNERS))

    def test_begin_rejects_empty_and_out_of_bounds(self):
        self.assertFalse(self.engine.begin_path((1, 1)))
        self.assertFalse(self.engine.begin_path((9, 9)))
        self.assertFalse(self.engine.begin_path((-1, 0)))
        self.assertIsNone(self.engine.drawing_color)

    def test_begin_without_board(self):
        engine = ConnectionEngine()
        self.assertFalse(engine.begin_path((0, 0)))
        self.assertFalse(engine.is_level_complete())

    def test_straight_finalize(self):
        self.assertTrue(self.engine.begin_path((0, 0)))
        self.assertEqual(self.engine.state_of(Color.RED), PathState.DRAWING)
        result = self.engine.end_path((2, 0))
        self.assertTrue(result.accepted)
        self.assertFalse(result.completed_level)

        red_a = self.engine.grid.at(0, 0)
        red_b = self.engine.grid.at(2, 0)
        self.assertTrue(red_a.connected and red_b.connected)
        self.assertEqual(red_a.connected_to, red_b.id)
        self.assertEqual(red_b.connected_to, red_a.id)
        self.assertEqual(self.engine.state_of("red"), PathState.FINALIZED)
        self.assertEqual(len(self.engine.segments), 1)
        self.assertIsNone(self.engine.drawing_color)

    def test_end_without_begin(self):
        result = self.engine.end_path((2, 0))
        self.assertFalse(result.accepted)
        self.assertEqual(result.reason, REASON_NOT_DRAWING)

    def test_invalid_targets_discard_path(self):
        for target, reason in [((0, 3), REASON_WRONG_COLOR),
                               ((0, 0), REASON_SAME_ENDPOINT),
                               (None, REASON_NO_TARGET),
                               ((1, 1), REASON_NO_TARGET)]:
            self.assertTrue(self.engine.begin_path((0, 0)))
            self.engine.extend_path((-1.0, -1.0))
            result = self.engine.end_path(target)
            self.assertFalse(result.accepted)
            self.assertEqual(result.reason, reason)
            self.assertEqual(self.engine.state_of(Color.RED), PathState.IDLE)
            self.assertEqual(self.engine.segments, [])
            self.assertEqual(self.engine.provisional_points, [])

    def test_extend_respects_min_point_distance(self):
        self.engine.begin_path((0, 0))
        self.assertFalse(self.engine.extend_path((-1.45, -1.45)))
        self.assertEqual(len(self.engine.provisional_points), 1)
        self.assertTrue(self.engine.extend_path((-1.0, -1.0)))
        self.assertEqual(len(self.engine.provisional_points), 2)

    def test_extend_without_begin(self):
        self.assertFalse(self.engine.extend_path((0.0, 0.0)))

    def test_extend_snaps_onto_matching_endpoint(self):
        self.engine.begin_path((0, 0))
        self.engine.extend_path((0.45, -1.45))
        self.assertEqual(self.engine.provisional_points[-1], (0.5, -1.5))
        result = self.engine.end_path((2, 0))
        self.assertTrue(result.accepted)
        self.assertEqual(len(self.engine.segments), 1)

    def test_extend_does_not_snap_onto_other_color(self):
        self.engine.begin_path((0, 0))
        self.engine.extend_path((-1.45, 1.4))
        self.assertEqual(self.engine.provisional_points[-1], (-1.45, 1.4))

    def test_remove_path(self):
        self.engine.begin_path((0, 0))
        self.engine.end_path((2, 0))
        self.assertTrue(self.engine.remove_path(Color.RED))
        self.assertFalse(self.engine.grid.at(0, 0).connected)
        self.assertIsNone(self.engine.grid.at(2, 0).connected_to)
        self.assertEqual(self.engine.segments, [])
        self.assertEqual(self.engine.state_of(Color.RED), PathState.IDLE)
        self.assertIsNone(self.engine.path_for(Color.RED))
        self.assertFalse(self.engine.remove_path("Red"))

    def test_remove_path_at_point_on_line(self):
        self.engine.begin_path((0, 0))
        self.engine.end_path((2, 0))
        self.assertIsNone(self.engine.remove_path_at((-0.5, 0.5)))
        self.assertEqual(self.engine.remove_path_at((-0.5, -1.45)), Color.RED)
        self.assertEqual(self.engine.segments, [])

    def test_cancel_path_keeps_committed_paths(self):
        self.engine.begin_path((0, 0))
        self.engine.end_path((2, 0))
        self.engine.begin_path((0, 3))
        self.engine.extend_path((-1.0, 1.0))
        self.engine.cancel_path()
        self.assertEqual(self.engine.provisional_points, [])
        self.assertIsNone(self.engine.drawing_color)
        self.assertEqual(self.engine.state_of(Color.BLUE), PathState.IDLE)
        self.assertEqual(self.engine.state_of(Color.RED), PathState.FINALIZED)
        self.assertEqual(len(self.engine.segments), 1)
        self.assertFalse(self.engine.end_path((3, 3)).accepted)

    def test_setup_board_clears_previous_state(self):
        self.engine.begin_path((0, 0))
        self.engine.end_path((2, 0))
        self.engine.begin_path((0, 3))
        self.engine.setup_board(make_descriptor(RED_BLUE_CROSSING))
        self.assertEqual(self.engine.segments, [])
        self.assertEqual(self.engine.paths, {})
        self.assertIsNone(self.engine.drawing_color)
        self.assertIsNone(self.engine.grid.at(0, 3))

    def test_setup_board_rejects_malformed(self):
        with self.assertRaises(InvalidLevelError):
            self.engine.setup_board(make_descriptor([(0, 0, "Red")]))

    def test_blank_endpoint_cannot_start(self):
        self.engine.setup_board(make_descriptor(RED_BLUE_CORNERS + [(1, 2, "White")]))
        self.assertFalse(self.engine.begin_path((1, 2)))


class TestCrossing(unittest.TestCase):
    def setUp(self):
        self.engine = ConnectionEngine()
        self.engine.setup_board(make_descriptor(RED_BLUE_CROSSING))
        self.engine.begin_path((0, 0))
        self.assertTrue(self.engine.end_path((2, 0)).accepted)

    def test_finalize_rejects_crossing(self):
        before = self.engine.segments
        self.assertTrue(self.engine.begin_path((1, 1)))
        self.engine.extend_path((-0.5, -2.0))   # straight through the red line
        self.engine.extend_path((1.5, -2.0))
        result = self.engine.end_path((3, 1))

        self.assertFalse(result.accepted)
        self.assertEqual(result.reason, REASON_CROSSING)
        self.assertEqual(self.engine.segments, before)
        self.assertFalse(self.engine.grid.at(1, 1).connected)
        self.assertEqual(self.engine.state_of(Color.BLUE), PathState.IDLE)

    def test_non_crossing_path_accepted(self):
        self.engine.begin_path((1, 1))
        self.engine.extend_path((0.5, 0.5))
        result = self.engine.end_path((3, 1))
        self.assertTrue(result.accepted)
        self.assertTrue(result.completed_level)
        self.assertEqual(len(self.engine.segments), 3)

    def test_crossing_check_is_made_once_at_finalize(self):
        """A path may run alongside another line while drawn as long as it never crosses."""
        self.engine.begin_path((1, 1))
        self.engine.extend_path((-0.5, -1.3))
        self.engine.extend_path((0.7, -1.3))
        self.assertEqual(len(self.engine.provisional_points), 3)
        self.assertTrue(self.engine.end_path((3, 1)).accepted)


class TestRedraw(unittest.TestCase):
    def setUp(self):
        self.engine = ConnectionEngine()
        self.engine.setup_board(make_descriptor(RED_BLUE_CORNERS))

    def _draw_red_detour(self):
        self.engine.begin_path((0, 0))
        self.engine.extend_path((-1.0, -0.8))
        self.engine.extend_path((0.2, -0.8))
        return self.engine.end_path((2, 0))

    def test_redraw_removes_exactly_old_segments(self):
        self.engine.begin_path((0, 3))
        self.engine.end_path((3, 3))
        self.assertTrue(self._draw_red_detour().accepted)
        old_count = len(self.engine.path_for(Color.RED).segments)
        self.assertEqual(old_count, 3)
        total = len(self.engine.segments)

        self.assertTrue(self.engine.begin_path((0, 0)))
        self.assertEqual(len(self.engine.segments), total - old_count)
        self.assertTrue(all(s.color == Color.BLUE for s in self.engine.segments))
        self.assertFalse(self.engine.grid.at(0, 0).connected)
        self.assertFalse(self.engine.grid.at(2, 0).connected)
        self.assertEqual(self.engine.state_of(Color.RED), PathState.DRAWING)
        self.assertEqual(len(self.engine.provisional_points), 1)

    def test_redraw_from_partner_endpoint(self):
        self._draw_red_detour()
        self.assertTrue(self.engine.begin_path((2, 0)))
        self.assertEqual(self.engine.segments, [])
        result = self.engine.end_path((0, 0))
        self.assertTrue(result.accepted)
        self.assertEqual(self.engine.grid.at(2, 0).connected_to, self.engine.grid.at(0, 0).id)

    def test_strict_mode_rejects_connected_start(self):
        engine = ConnectionEngine(allow_redraw=False)
        engine.setup_board(make_descriptor(RED_BLUE_CORNERS))
        engine.begin_path((0, 0))
        engine.end_path((2, 0))
        self.assertFalse(engine.begin_path((0, 0)))
        self.assertEqual(len(engine.segments), 1)
        self.assertEqual(engine.state_of(Color.RED), PathState.FINALIZED)

    def test_at_most_one_path_per_color(self):
        ops = [
            lambda: self._draw_red_detour(),
            lambda: (self.engine.begin_path((2, 0)), self.engine.end_path((0, 0))),
            lambda: (self.engine.begin_path((0, 3)), self.engine.end_path((3, 3))),
            lambda: self._draw_red_detour(),
            lambda: self.engine.remove_path(Color.BLUE),
            lambda: (self.engine.begin_path((3, 3)), self.engine.end_path((0, 3))),
            lambda: (self.engine.begin_path((0, 0)), self.engine.end_path(None)),
            lambda: self._draw_red_detour(),
        ]
        for op in ops:
            op()
            for color, record in self.engine.paths.items():
                owned = [s for s in self.engine.segments if s.color == color]
                self.assertEqual(len(owned), len(record.segments))
            colors = {s.color for s in self.engine.segments}
            self.assertTrue(colors <= set(self.engine.paths))


class TestCompletion(unittest.TestCase):
    def setUp(self):
        self.engine = ConnectionEngine()
        self.engine.setup_board(make_descriptor(RED_BLUE_CORNERS + [(1, 2, "White")]))
        self.calls = []
        self.engine.on_level_complete(lambda: self.calls.append(1))

    def _connect(self, a, b):
        self.engine.begin_path(a)
        return self.engine.end_path(b)

    def test_all_but_one_pair_is_incomplete(self):
        self._connect((0, 0), (2, 0))
        self.assertFalse(self.engine.is_level_complete())
        self.assertEqual(self.calls, [])

    def test_last_pair_completes_once(self):
        self._connect((0, 0), (2, 0))
        result = self._connect((0, 3), (3, 3))
        self.assertTrue(result.completed_level)
        self.assertTrue(self.engine.is_level_complete())
        self.assertTrue(self.engine.is_level_complete())
        self.assertEqual(len(self.calls), 1)

    def test_completion_fires_again_after_removal_and_resolve(self):
        self._connect((0, 0), (2, 0))
        self._connect((0, 3), (3, 3))
        self.engine.remove_path(Color.BLUE)
        self.assertFalse(self.engine.is_level_complete())
        self._connect((3, 3), (0, 3))
        self.assertEqual(len(self.calls), 2)

    def test_redraw_of_solved_level_refires_only_on_resolve(self):
        self._connect((0, 0), (2, 0))
        self._connect((0, 3), (3, 3))
        self.engine.begin_path((0, 0))
        self.assertFalse(self.engine.is_level_complete())
        self.engine.end_path(None)
        self.assertEqual(len(self.calls), 1)

    def test_unsolved_fires_once_when_solved_board_loses_a_path(self):
        unsolved = []
        self.engine.on_level_unsolved(lambda: unsolved.append(1))
        self._connect((0, 0), (2, 0))
        self.engine.remove_path(Color.RED)
        self.assertEqual(unsolved, [])

        self._connect((0, 0), (2, 0))
        self._connect((0, 3), (3, 3))
        self.engine.remove_path(Color.BLUE)
        self.engine.remove_path(Color.RED)
        self.assertEqual(len(unsolved), 1)


if __name__ == '__main__':
    unittest.main()
