"""
Debounced name checks for the admin editor.

Every keystroke calls `schedule()`. That invalidates the pending debounce
timer, advances the generation counter and arms a new timer. When a timer
fires its check runs as a task; in-flight checks are never aborted. A result
is applied only if its generation is still the latest one, so a slow check
that finishes after a newer one can never overwrite the newer result.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from models import NameCheckResult

from .checker import NameCheckConfig, NameUniquenessChecker

logger = logging.getLogger(__name__)


class GenerationCounter:
    """Monotonic request generations; only the latest one is current."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def advance(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, generation: int) -> bool:
        return generation == self._current


class NameCheckScheduler:
    def __init__(
        self,
        checker: NameUniquenessChecker,
        config: NameCheckConfig | None = None,
        on_result: Callable[[NameCheckResult], None] | None = None,
        generations: GenerationCounter | None = None,
    ) -> None:
        self.checker = checker
        self.config = config or NameCheckConfig.from_env()
        self.on_result = on_result
        self.generations = generations or GenerationCounter()
        self.result: NameCheckResult | None = None
        self._timer: asyncio.TimerHandle | None = None
        self._in_flight: set[asyncio.Task] = set()

    def schedule(self, name: str, exclude_id: int | None = None) -> int:
        """Queue a check after the quiet period; returns the generation assigned to it."""
        self.cancel_pending()
        generation = self.generations.advance()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(
            self.config.debounce_seconds, self._launch, generation, name, exclude_id
        )
        return generation

    def cancel_pending(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _launch(self, generation: int, name: str, exclude_id: int | None) -> None:
        self._timer = None
        task = asyncio.ensure_future(self._run(generation, name, exclude_id))
        self._in_flight.add(task)
        task.add_done_callback(self._in_flight.discard)

    async def _run(self, generation: int, name: str, exclude_id: int | None) -> None:
        unique = await self.checker.check(name, exclude_id)
        self.deliver(
            NameCheckResult(generation=generation, name=name, exclude_id=exclude_id, unique=unique)
        )

    def deliver(self, result: NameCheckResult) -> bool:
        """Apply a finished check unless a newer one has been scheduled since."""
        if not self.generations.is_current(result.generation):
            logger.debug(
                "Dropping stale name check %d (current %d)",
                result.generation,
                self.generations.current,
            )
            return False
        self.result = result
        if self.on_result is not None:
            self.on_result(result)
        return True

    @property
    def pending(self) -> bool:
        return self._timer is not None or bool(self._in_flight)

    async def wait_idle(self) -> None:
        """Wait for the pending timer (if any) and every in-flight check to finish."""
        while self.pending:
            if self._in_flight:
                await asyncio.gather(*list(self._in_flight))
            else:
                await asyncio.sleep(min(self.config.debounce_seconds, 0.05))
