import asyncpg

from database.repositories import CourseRepositoryDB, PlayerProfileRepositoryDB, RoundRepositoryDB


class DatabaseManager:
    """Bundles the repositories that share one asyncpg pool.

    Each repository doubles as a session gateway:
    - `courses`  -> CourseNotes
    - `rounds`   -> RoundStore
    - `profiles` -> PlayerProfileStore
    """

    def __init__(self, pool: asyncpg.Pool):
        self.courses = CourseRepositoryDB(pool)
        self.rounds = RoundRepositoryDB(pool)
        self.profiles = PlayerProfileRepositoryDB(pool)
