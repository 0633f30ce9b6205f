import unittest

from college_scorecard.backoff import BackoffPolicy, is_retryable_status


class TestBackoffPolicy(unittest.TestCase):
    def test_default_delays_double_then_clamp(self):
        policy = BackoffPolicy()
        self.assertEqual(policy.delay_for_attempt(0), 300)
        self.assertEqual(policy.delay_for_attempt(1), 600)
        self.assertEqual(policy.delay_for_attempt(3), 2400)
        self.assertEqual(policy.delay_for_attempt(5), 9600)
        # 300 * 64 = 19200 -> clamped
        self.assertEqual(policy.delay_for_attempt(6), 10000)
        self.assertEqual(policy.delay_for_attempt(30), 10000)

    def test_formula_holds_for_custom_bounds(self):
        policy = BackoffPolicy(base_delay_ms=50, max_delay_ms=1000)
        for attempt in range(12):
            self.assertEqual(policy.delay_for_attempt(attempt), min(50 * 2 ** attempt, 1000))

    def test_negative_attempt_rejected(self):
        with self.assertRaises(ValueError):
            BackoffPolicy().delay_for_attempt(-1)


class TestRetryableStatus(unittest.TestCase):
    def test_rate_limit_and_server_errors_are_retryable(self):
        self.assertTrue(is_retryable_status(429))
        for code in range(500, 600):
            self.assertTrue(is_retryable_status(code), code)

    def test_other_statuses_are_permanent(self):
        for code in (0, 200, 301, 400, 401, 403, 404, 428, 430, 499, 600):
            self.assertFalse(is_retryable_status(code), code)


if __name__ == "__main__":
    unittest.main()
