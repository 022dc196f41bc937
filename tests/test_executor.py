"""
Unit Tests for the Pipeline Executor

Ordering, threading of values and short-circuiting on the first Err.
"""

import unittest
from unittest.mock import Mock

from groupfeed.orchestration.executor import Pipeline
from groupfeed.orchestration.results import Ok, bad_request, unprocessable


def add(n):
    return lambda value: Ok(value + n)


class TestPipeline(unittest.TestCase):
    def test_threads_values_through_steps(self):
        pipeline = Pipeline([("add_one", add(1)), ("add_ten", add(10))])
        outcome = pipeline.run(0)
        self.assertTrue(outcome.ok)
        self.assertEqual(outcome.value, 11)

    def test_runs_steps_in_declared_order(self):
        calls = []
        pipeline = Pipeline(
            [
                ("first", lambda v: calls.append("first") or Ok(v)),
                ("second", lambda v: calls.append("second") or Ok(v)),
                ("third", lambda v: calls.append("third") or Ok(v)),
            ]
        )
        pipeline.run(None)
        self.assertEqual(calls, ["first", "second", "third"])

    def test_first_err_is_returned_verbatim(self):
        failure = unprocessable("second step failed")
        third = Mock(return_value=Ok(None))
        pipeline = Pipeline(
            [("first", add(1)), ("second", lambda v: failure), ("third", third)]
        )

        outcome = pipeline.run(0)

        self.assertIs(outcome, failure)
        third.assert_not_called()

    def test_on_step_sees_a_strict_prefix_on_failure(self):
        seen = []
        pipeline = Pipeline(
            [
                ("first", add(1)),
                ("second", lambda v: bad_request("bad")),
                ("third", add(1)),
            ],
            on_step=seen.append,
        )
        pipeline.run(0)
        self.assertEqual(seen, ["first", "second"])

    def test_step_exceptions_propagate(self):
        def explode(value):
            raise RuntimeError("disk full")

        pipeline = Pipeline([("first", add(1)), ("explode", explode)])
        with self.assertRaises(RuntimeError):
            pipeline.run(0)

    def test_step_must_return_an_outcome(self):
        pipeline = Pipeline([("raw", lambda v: v)])
        with self.assertRaises(TypeError):
            pipeline.run(1)

    def test_step_is_not_retried(self):
        step = Mock(return_value=bad_request("bad"))
        Pipeline([("only", step)]).run("payload")
        step.assert_called_once_with("payload")

    def test_step_names(self):
        pipeline = Pipeline([("a", add(1)), ("b", add(2))])
        self.assertEqual(pipeline.step_names, ("a", "b"))

    def test_empty_pipeline_is_rejected(self):
        with self.assertRaises(ValueError):
            Pipeline([])


if __name__ == "__main__":
    unittest.main()
