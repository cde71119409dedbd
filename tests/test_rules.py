import unittest

from blockfall.game import ScoringRules


class TestScoringRules(unittest.TestCase):
    def setUp(self):
        self.rules = ScoringRules()

    def test_given_line_counts_then_classic_table_times_level(self):
        self.assertEqual(self.rules.score_for_lines(0, 3), 0)
        self.assertEqual(self.rules.score_for_lines(1, 1), 40)
        self.assertEqual(self.rules.score_for_lines(2, 1), 100)
        self.assertEqual(self.rules.score_for_lines(3, 2), 600)
        self.assertEqual(self.rules.score_for_lines(4, 5), 6000)

    def test_given_rows_dropped_then_two_points_each(self):
        self.assertEqual(self.rules.score_for_hard_drop(5), 10)
        self.assertEqual(self.rules.score_for_hard_drop(0), 0)

    def test_given_total_lines_then_level(self):
        self.assertEqual(self.rules.level_for_lines(0), 1)
        self.assertEqual(self.rules.level_for_lines(9), 1)
        self.assertEqual(self.rules.level_for_lines(10), 2)
        self.assertEqual(self.rules.level_for_lines(100), 11)

    def test_given_level_then_interval_decreases_to_floor(self):
        self.assertEqual(self.rules.drop_interval_for_level(1), 1000)
        self.assertEqual(self.rules.drop_interval_for_level(2), 900)
        self.assertEqual(self.rules.drop_interval_for_level(10), 100)
        self.assertEqual(self.rules.drop_interval_for_level(15), 100)
