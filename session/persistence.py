import asyncio
import logging
from typing import Set

from models import Round
from session.gateways import RoundStore

logger = logging.getLogger(__name__)


class RoundWriter:
    """Fire-and-forget, strictly ordered snapshot writes for one round.

    Writes run one at a time in submission order. A snapshot that has
    already been superseded by a newer submission when its turn comes is
    skipped, since the newer snapshot contains everything it would write.
    """

    def __init__(self, store: RoundStore, course_id: str):
        self._store = store
        self._course_id = course_id
        self._lock = asyncio.Lock()
        self._sequence = 0
        self._written = 0
        self._pending: Set[asyncio.Task] = set()

    @property
    def last_submitted_sequence(self) -> int:
        return self._sequence

    @property
    def last_written_sequence(self) -> int:
        return self._written

    @property
    def pending(self) -> int:
        return len(self._pending)

    def submit(self, round_: Round) -> int:
        """Schedule a snapshot write without waiting for it. Returns its sequence number."""
        self._sequence += 1
        seq = self._sequence
        task = asyncio.get_running_loop().create_task(self._write(seq, round_))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return seq

    async def drain(self) -> None:
        """Wait for every submitted write to settle."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def _write(self, seq: int, round_: Round) -> None:
        async with self._lock:
            if seq < self._sequence:
                logger.debug("Skipping round snapshot %d, superseded by %d", seq, self._sequence)
                return
            try:
                await self._store.save_round(self._course_id, round_)
            except Exception:
                logger.exception("Saving round snapshot %d for course %s failed", seq, self._course_id)
                return
            self._written = seq
