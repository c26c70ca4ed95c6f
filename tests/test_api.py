import unittest

from totp_stack.api import generate, verify
from totp_stack.errors import DecodeError, InvalidInput
from totp_stack.models import ExecutionContext

RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"


def at(unix_time):
    return ExecutionContext(clock=lambda: unix_time)


class GenerateTests(unittest.TestCase):
    def test_reads_context_clock(self):
        result = generate(RFC_SECRET, ctx=at(59))
        self.assertEqual(result.code, "287082")
        self.assertEqual(result.counter, 1)
        self.assertEqual(result.interval, 30)

    def test_messy_secret_and_service_case(self):
        result = generate("gezd gnbv gy3t qojq gezd gnbv gy3t qojq", "GitLab", "030", ctx=at(59))
        self.assertEqual(result.code, "287082")

    def test_interval_changes_counter(self):
        result = generate(RFC_SECRET, "google", 60, ctx=at(119))
        self.assertEqual(result.counter, 1)
        self.assertEqual(result.code, "287082")

    def test_deterministic_within_window(self):
        codes = {generate(RFC_SECRET, ctx=at(t)).code for t in range(30, 60)}
        self.assertEqual(codes, {"287082"})

    def test_errors(self):
        with self.assertRaises(InvalidInput):
            generate(RFC_SECRET, "facebook", ctx=at(59))
        with self.assertRaises(InvalidInput):
            generate(RFC_SECRET, interval="0", ctx=at(59))
        with self.assertRaises(DecodeError):
            generate("!!!!", ctx=at(59))


class VerifyTests(unittest.TestCase):
    def test_current_window(self):
        self.assertTrue(verify("287082", RFC_SECRET, ctx=at(59)))
        self.assertTrue(verify("287 082", RFC_SECRET, ctx=at(59)))

    def test_drift_window(self):
        # counters 0 and 2 around counter 1
        self.assertTrue(verify("755224", RFC_SECRET, ctx=at(59)))
        self.assertTrue(verify("359152", RFC_SECRET, ctx=at(59)))
        self.assertFalse(verify("755224", RFC_SECRET, window=0, ctx=at(59)))
        self.assertFalse(verify("969429", RFC_SECRET, ctx=at(59)))

    def test_malformed_candidates(self):
        for code in ("", "28708", "2870820", "abcdef", "٢٨٧٠٨٢"):
            with self.subTest(code=code):
                self.assertFalse(verify(code, RFC_SECRET, ctx=at(59)))

    def test_window_at_epoch(self):
        self.assertTrue(verify("755224", RFC_SECRET, ctx=at(0)))


class RemainingSecondsTests(unittest.TestCase):
    def test_remaining(self):
        self.assertEqual(generate(RFC_SECRET, ctx=at(59)).remaining_seconds, 1)
        self.assertEqual(generate(RFC_SECRET, ctx=at(60)).remaining_seconds, 30)
        self.assertEqual(generate(RFC_SECRET, ctx=at(75)).remaining_seconds, 15)


if __name__ == "__main__":
    unittest.main()
