"""Round snapshots: one row per round, overwritten on every save."""

import asyncpg
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from models import Round
from database.converters import round_from_row, round_to_row
from database.exceptions import IntegrityError


class RoundRepositoryDB:
    """Async round persistence; satisfies the RoundStore gateway."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Read
    # ================================================================

    async def get_round(self, course_id: str, round_date: datetime) -> Optional[Round]:
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                """SELECT * FROM players.round_snapshots
                   WHERE course_id = $1 AND round_date = $2""",
                UUID(course_id), round_date,
            )
            return round_from_row(row) if row else None

    async def get_round_history(self, course_id: str) -> List[Round]:
        """A course's rounds, oldest first."""
        async with self._pool.acquire() as conn:
            rows = await conn.fetch(
                """SELECT * FROM players.round_snapshots
                   WHERE course_id = $1 ORDER BY round_date""",
                UUID(course_id),
            )
            return [round_from_row(r) for r in rows]

    # ================================================================
    # Write
    # ================================================================

    async def save_round(self, course_id: str, round_: Round) -> None:
        """Insert or overwrite the snapshot of this round.

        A round is identified by its course and start time, so repeated
        saves of the same round replace each other.
        """
        data = round_to_row(course_id, round_)
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """INSERT INTO players.round_snapshots
                       (course_id, round_date, snapshot, total_score, holes_played, is_finished)
                       VALUES ($1, $2, $3::jsonb, $4, $5, $6)
                       ON CONFLICT (course_id, round_date) DO UPDATE SET
                           snapshot = EXCLUDED.snapshot,
                           total_score = EXCLUDED.total_score,
                           holes_played = EXCLUDED.holes_played,
                           is_finished = EXCLUDED.is_finished,
                           updated_at = now()""",
                    data["course_id"], data["round_date"], data["snapshot"],
                    data["total_score"], data["holes_played"], data["is_finished"],
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise IntegrityError(f"Cannot save round for unknown course {course_id}") from e
