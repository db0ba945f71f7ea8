from database.connection import DatabasePool, db
from database.db_manager import DatabaseManager
from database.repositories import CourseRepositoryDB, PlayerProfileRepositoryDB, RoundRepositoryDB
from database.exceptions import DatabaseError, IntegrityError, NotFoundError

__all__ = [
    "DatabasePool",
    "db",
    "DatabaseManager",
    "CourseRepositoryDB",
    "PlayerProfileRepositoryDB",
    "RoundRepositoryDB",
    "DatabaseError",
    "IntegrityError",
    "NotFoundError",
]
