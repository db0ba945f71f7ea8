class SessionError(Exception):
    """Base for all round-session errors."""


class EmptyCourseError(SessionError):
    """A round cannot start on a course without holes."""


class HolePointerError(SessionError):
    """Hole pointer does not index into the hole registry."""


class SessionFinishedError(SessionError):
    """Operation attempted after the round was finished."""
