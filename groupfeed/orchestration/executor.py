"""
Pipeline Executor - Ordered, Short-Circuiting Step Runner

Runs a fixed list of named steps, threading each step's value into the
next. The first Err stops the run and is returned as-is. Steps are never
reordered, retried or run in parallel, and exceptions raised by a step are
left to propagate.
"""

import time
from typing import Any, Callable, Optional, Sequence, Tuple
import logging

from .results import Err, Ok, Outcome

logger = logging.getLogger(__name__)

Step = Callable[[Any], Outcome]
NamedStep = Tuple[str, Step]


class Pipeline:
    """Fixed, ordered sequence of named steps"""

    def __init__(
        self,
        steps: Sequence[NamedStep],
        name: str = "pipeline",
        on_step: Optional[Callable[[str], None]] = None,
    ):
        """
        Args:
            steps: (name, step) pairs in execution order
            name: Label used in log messages
            on_step: Called with each step name just before it runs
        """
        if not steps:
            raise ValueError("A pipeline needs at least one step")
        self.steps = tuple(steps)
        self.name = name
        self.on_step = on_step

    @property
    def step_names(self) -> Tuple[str, ...]:
        return tuple(step_name for step_name, _ in self.steps)

    def run(self, initial: Any) -> Outcome:
        """
        Execute all steps in order

        Args:
            initial: Input of the first step

        Returns:
            Outcome: Ok(value of the last step), or the first Err
        """
        start = time.time()
        value = initial
        total = len(self.steps)

        for index, (step_name, step) in enumerate(self.steps, 1):
            if self.on_step is not None:
                self.on_step(step_name)

            logger.debug(f"🔄 {self.name} step {index}/{total}: {step_name}")
            outcome = step(value)

            if isinstance(outcome, Err):
                logger.warning(
                    f"❌ {self.name} halted at {step_name}: "
                    f"{outcome.failure.classification.value} - {outcome.failure.message}"
                )
                return outcome
            if not isinstance(outcome, Ok):
                raise TypeError(
                    f"Step {step_name} returned {type(outcome).__name__}, expected Ok or Err"
                )

            value = outcome.value

        logger.info(f"✅ {self.name} completed {total} steps: {time.time() - start:.2f} seconds")
        return Ok(value)
