from fastapi import Request

from api.session_manager import SessionManager


def get_session_manager(request: Request) -> SessionManager:
    """FastAPI dependency that provides the single-session holder."""
    return request.app.state.session_manager
