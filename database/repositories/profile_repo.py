"""Player tendencies learned by the caddie."""

import asyncpg

from models import PlayerProfile
from database.converters import profile_from_rows


class PlayerProfileRepositoryDB:
    """Async player profile storage; satisfies the PlayerProfileStore gateway."""

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    async def get_profile(self) -> PlayerProfile:
        async with self._pool.acquire() as conn:
            rows = await conn.fetch("SELECT tendency FROM players.tendencies ORDER BY id")
            return profile_from_rows(rows)

    async def add_tendency(self, text: str) -> None:
        """Record a tendency; one already on file is left as is."""
        text = text.strip()
        if not text:
            return
        async with self._pool.acquire() as conn:
            await conn.execute(
                """INSERT INTO players.tendencies (tendency) VALUES ($1)
                   ON CONFLICT (tendency) DO NOTHING""",
                text,
            )
