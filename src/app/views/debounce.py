"""Debounce de gravações sobre asyncio.

Cada trigger() rearma o timer; a ação só roda depois de ``delay_seconds``
sem novos triggers. A ação roda numa task própria, fora do timer, para que
um trigger durante a gravação não a cancele.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class Debouncer:
    """Timer de debounce dono das suas tasks (timer + gravações em andamento).

    Args:
        delay_seconds: Quiet period após o último trigger
        action: Corrotina executada quando o timer dispara
        name: Rótulo para logs
    """

    def __init__(
        self,
        delay_seconds: float,
        action: Callable[[], Awaitable[None]],
        *,
        name: str = "debounce",
    ) -> None:
        self._delay = max(delay_seconds, 0.0)
        self._action = action
        self._name = name
        self._timer: asyncio.Task[None] | None = None
        self._in_flight: set[asyncio.Task[Any]] = set()
        self._closed = False

    @property
    def pending(self) -> bool:
        """True enquanto há timer armado."""
        return self._timer is not None and not self._timer.done()

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    @property
    def closed(self) -> bool:
        return self._closed

    def trigger(self) -> None:
        """Rearma o timer. Ignorado após close."""
        if self._closed:
            return
        if self._timer is not None:
            self._timer.cancel()
        self._timer = asyncio.create_task(self._wait_and_fire())

    async def _wait_and_fire(self) -> None:
        await asyncio.sleep(self._delay)
        self._timer = None
        self._fire()

    def _fire(self) -> asyncio.Task[Any] | None:
        if self._closed:
            return None
        task = asyncio.create_task(self._action())
        self._in_flight.add(task)
        task.add_done_callback(self._on_action_done)
        return task

    def _on_action_done(self, task: asyncio.Task[Any]) -> None:
        self._in_flight.discard(task)
        with contextlib.suppress(asyncio.CancelledError):
            exc = task.exception()
            if exc is not None:
                logger.error(
                    "debounced_action_failed",
                    extra={
                        "component": "debouncer",
                        "action": self._name,
                        "result": "error",
                        "error_type": type(exc).__name__,
                    },
                )

    async def flush(self) -> None:
        """Dispara agora o timer pendente e aguarda as gravações em andamento."""
        timer = self._timer
        if timer is not None and not timer.done():
            timer.cancel()
            self._timer = None
            self._fire()
        if self._in_flight:
            await asyncio.gather(*list(self._in_flight), return_exceptions=True)

    def cancel(self) -> None:
        """Cancela timer e gravações em andamento; o Debouncer fica fechado."""
        self._closed = True
        if self._timer is not None:
            self._timer.cancel()
        for task in list(self._in_flight):
            task.cancel()

    async def aclose(self) -> None:
        """cancel() e aguarda o encerramento das tasks."""
        timer = self._timer
        pending = list(self._in_flight)
        self.cancel()
        self._timer = None
        tasks = [task for task in (timer, *pending) if task is not None]
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
