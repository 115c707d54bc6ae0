import unittest

from nutriplan.logic.planning.history import UsageHistory


class TestUsageHistory(unittest.TestCase):

    def setUp(self):
        self.history = UsageHistory()
        for day in (1, 2, 5):
            self.history.record("Мюсли", day)

    def test_window_excludes_current_day(self):
        self.assertEqual(self.history.count_in_window("Мюсли", 5, 7), 2)

    def test_window_clipped_at_day_one(self):
        self.assertEqual(self.history.count_in_window("Мюсли", 3, 7), 2)

    def test_window_slides(self):
        # day 9 looks at days 3..8
        self.assertEqual(self.history.count_in_window("Мюсли", 9, 7), 1)
        self.assertEqual(self.history.count_in_window("Мюсли", 13, 7), 0)

    def test_last_used(self):
        self.assertEqual(self.history.last_used("Мюсли"), 5)
        self.assertIsNone(self.history.last_used("Омлет"))

    def test_unknown_meal(self):
        self.assertEqual(self.history.count_in_window("Омлет", 4, 7), 0)
        self.assertNotIn("Омлет", self.history)
        self.assertIn("Мюсли", self.history)
        self.assertEqual(self.history.total("Мюсли"), 3)


if __name__ == '__main__':
    unittest.main()
