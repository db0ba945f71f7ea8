from .course_repo import CourseRepositoryDB
from .profile_repo import PlayerProfileRepositoryDB
from .round_repo import RoundRepositoryDB

__all__ = ["CourseRepositoryDB", "PlayerProfileRepositoryDB", "RoundRepositoryDB"]
