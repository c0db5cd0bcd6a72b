"""Queue-backed audit dispatcher.

The dispatcher runs as a background task within the FastAPI application.
``submit`` only enqueues, so recording an entry never waits on the
database; a single consumer task delivers queued entries to the sink.
"""

from __future__ import annotations

import asyncio

from audit.application.observability import AuditTrailProbe, DefaultAuditTrailProbe
from audit.domain.entry import AuditEntry
from audit.ports.sinks import AuditDispatcher, AuditSink


class QueuedAuditDispatcher(AuditDispatcher):
    """Bounded in-memory queue in front of an AuditSink.

    When the queue is full, new entries are dropped and logged rather than
    applying back-pressure to the request being audited.
    """

    def __init__(
        self,
        sink: AuditSink,
        probe: AuditTrailProbe | None = None,
        queue_size: int = 1000,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            sink: Destination of delivered entries
            probe: Observability probe for drops and delivery failures
            queue_size: Maximum number of pending entries
        """
        self._sink = sink
        self._probe = probe or DefaultAuditTrailProbe()
        self._queue_size = queue_size
        self._queue: asyncio.Queue[AuditEntry] = asyncio.Queue(maxsize=queue_size)
        self._task: asyncio.Task | None = None

    @property
    def pending(self) -> int:
        return self._queue.qsize()

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def submit(self, entry: AuditEntry) -> bool:
        try:
            self._queue.put_nowait(entry)
        except asyncio.QueueFull:
            self._probe.entry_dropped(entry_id=entry.id, reason="queue_full")
            return False
        return True

    async def start(self) -> None:
        """Start the delivery loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._deliver_loop())
        self._probe.dispatcher_started(queue_size=self._queue_size)

    async def drain(self) -> None:
        """Wait until every entry submitted so far has been handled."""
        await self._queue.join()

    async def stop(self, drain_timeout: float = 5.0) -> None:
        """Stop the delivery loop, giving pending entries a chance to land.

        Args:
            drain_timeout: Seconds to wait for the queue to empty
        """
        if self._task is None:
            return

        try:
            await asyncio.wait_for(self._queue.join(), timeout=drain_timeout)
        except TimeoutError:
            pass

        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass

        self._task = None
        self._probe.dispatcher_stopped(pending=self._queue.qsize())

    async def _deliver_loop(self) -> None:
        while True:
            entry = await self._queue.get()
            try:
                await self._sink.write(entry)
            except Exception as e:
                self._probe.delivery_failed(entry_id=entry.id, error=str(e))
            else:
                self._probe.entry_delivered(entry_id=entry.id)
            finally:
                self._queue.task_done()
