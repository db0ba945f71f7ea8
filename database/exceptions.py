class DatabaseError(Exception):
    """Base for all persistence errors."""


class NotFoundError(DatabaseError):
    """Course or hole does not exist."""


class IntegrityError(DatabaseError):
    """Foreign key or check constraint violation, e.g. a round for an unknown course."""
