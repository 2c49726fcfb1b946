import os
import sys
from pathlib import Path
import unittest

# Ensure the api package is importable when tests are run from repo root.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("JOURNAL_FILE", "/tmp/floor_designer_journal_test.log")

from designer.logging.checkpoints import (  # noqa: E402
    log_checkpoint,
    reset_checkpoint_callback,
    set_checkpoint_callback,
)
from designer.progress import (  # noqa: E402
    DEFAULT_STEPS,
    CancellationToken,
    Cancelled,
    DesignProgress,
    Done,
    Idle,
    Step,
)


class DesignProgressTest(unittest.TestCase):
    def setUp(self):
        self.messages = []
        self._token = set_checkpoint_callback(
            lambda message, percent: self.messages.append((message, percent))
        )

    def tearDown(self):
        reset_checkpoint_callback(self._token)

    def test_runs_every_step_in_order(self):
        progress = DesignProgress(step_delay=0)
        self.assertEqual(progress.state, Idle())

        final = progress.run()

        self.assertEqual(final, Done())
        self.assertEqual(progress.percent, 100)
        self.assertEqual(
            self.messages, [(step.message, step.percent) for step in DEFAULT_STEPS]
        )

    def test_cancel_before_start(self):
        token = CancellationToken()
        token.cancel()

        final = DesignProgress(step_delay=0, token=token).run()

        self.assertEqual(final, Cancelled(completed_steps=0))
        self.assertEqual(self.messages, [])

    def test_cancel_between_steps(self):
        states = []
        token = CancellationToken()

        def _record(state):
            states.append(state)
            if isinstance(state, Step) and state.index == 1:
                token.cancel()

        progress = DesignProgress(step_delay=0, token=token, on_state=_record)
        final = progress.run()

        self.assertEqual(final, Cancelled(completed_steps=2))
        self.assertEqual(progress.percent, 40)
        self.assertEqual(states, [Step(0, 20), Step(1, 40), Cancelled(2)])
        self.assertEqual(len(self.messages), 2)

    def test_cannot_run_twice(self):
        progress = DesignProgress(step_delay=0)
        progress.run()

        with self.assertRaises(RuntimeError):
            progress.run()

    def test_requires_steps(self):
        with self.assertRaises(ValueError):
            DesignProgress(steps=())


class CheckpointTest(unittest.TestCase):
    def test_blank_messages_are_dropped(self):
        seen = []
        token = set_checkpoint_callback(lambda m, p: seen.append((m, p)))
        try:
            log_checkpoint("   ", 10)
            log_checkpoint("Working", 150)
        finally:
            reset_checkpoint_callback(token)

        self.assertEqual(seen, [("Working", 100)])

    def test_failing_callback_does_not_propagate(self):
        def _boom(message, percent):
            raise RuntimeError("host went away")

        token = set_checkpoint_callback(_boom)
        try:
            with self.assertLogs(level="ERROR"):
                log_checkpoint("Working", 50)
        finally:
            reset_checkpoint_callback(token)


if __name__ == "__main__":
    unittest.main()
