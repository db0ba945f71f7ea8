"""Reads for the courses schema and writes for the notes the caddie learns."""

import asyncpg
from typing import Optional
from uuid import UUID

from models import Course
from database.converters import course_from_rows
from database.exceptions import NotFoundError


def _parse_course_id(course_id: str) -> Optional[UUID]:
    """Course IDs are UUIDs; anything else cannot name a stored course."""
    try:
        return UUID(course_id)
    except (TypeError, ValueError, AttributeError):
        return None


class CourseRepositoryDB:
    """Async course lookups; satisfies the CourseNotes gateway."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    # ================================================================
    # Private helpers
    # ================================================================

    async def _assemble(self, conn, course_row) -> Course:
        """Build a full Course model from a course row + holes + notes."""
        hole_rows = await conn.fetch(
            "SELECT * FROM courses.holes WHERE course_id = $1 ORDER BY hole_number",
            course_row["id"],
        )
        note_rows = await conn.fetch(
            """SELECT hole_number, note FROM courses.hole_notes
               WHERE course_id = $1 ORDER BY id""",
            course_row["id"],
        )
        return course_from_rows(course_row, hole_rows, note_rows)

    # ================================================================
    # Read
    # ================================================================

    async def get_course(self, course_id: str) -> Optional[Course]:
        """Get a fully-populated Course (holes and their notes) by ID.

        Returns None for unknown or malformed IDs.
        """
        key = _parse_course_id(course_id)
        if key is None:
            return None
        async with self._pool.acquire() as conn:
            row = await conn.fetchrow(
                "SELECT * FROM courses.courses WHERE id = $1",
                key,
            )
            if not row:
                return None
            return await self._assemble(conn, row)

    # ================================================================
    # Notes
    # ================================================================

    async def add_note(self, course_id: str, hole_number: int, text: str) -> None:
        """Append a note to a hole. Raises NotFoundError if the hole doesn't exist."""
        key = _parse_course_id(course_id)
        if key is None:
            raise NotFoundError(f"Course {course_id!r} not found")
        try:
            async with self._pool.acquire() as conn:
                await conn.execute(
                    """INSERT INTO courses.hole_notes (course_id, hole_number, note)
                       VALUES ($1, $2, $3)""",
                    key, hole_number, text,
                )
        except asyncpg.ForeignKeyViolationError as e:
            raise NotFoundError(f"Hole {hole_number} not found on course {course_id}") from e
