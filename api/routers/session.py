"""Round session endpoints: start, talk, finish, abandon."""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import get_session_manager
from api.schemas import SendMessageRequest, SessionResponse, StartSessionRequest, TurnResponse
from api.session_manager import NoActiveSessionError, SessionConflictError, SessionManager
from models import Round, Sender
from session import SessionFinishedError, TurnOutcome

router = APIRouter()

_FAILED_TURNS = {
    TurnOutcome.IGNORED: (409, "A message is already being answered"),
    TurnOutcome.FAILED: (502, "The caddie didn't answer; try sending again"),
    TurnOutcome.TIMED_OUT: (504, "The caddie took too long to answer; try sending again"),
    TurnOutcome.DISCARDED: (409, "The round finished before the caddie answered"),
}


def _active_session(manager: SessionManager):
    try:
        return manager.require_active()
    except NoActiveSessionError:
        raise HTTPException(404, "No round in progress")


@router.post("", response_model=SessionResponse, status_code=201)
async def start_session(
    req: StartSessionRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    course = await manager.courses.get_course(req.course_id)
    if course is None:
        raise HTTPException(404, "Course not found")
    if not course.holes:
        raise HTTPException(400, "Course has no holes")
    try:
        session = await manager.start(course)
    except SessionConflictError as e:
        raise HTTPException(409, str(e))
    return SessionResponse.from_session(session)


@router.get("", response_model=SessionResponse)
async def get_session(manager: SessionManager = Depends(get_session_manager)):
    return SessionResponse.from_session(_active_session(manager))


@router.post("/messages", response_model=TurnResponse)
async def send_message(
    req: SendMessageRequest,
    manager: SessionManager = Depends(get_session_manager),
):
    session = _active_session(manager)
    try:
        outcome = await session.send_user_message(req.text)
    except SessionFinishedError:
        raise HTTPException(409, "Round is already finished")

    if outcome in _FAILED_TURNS:
        status, detail = _FAILED_TURNS[outcome]
        raise HTTPException(status, detail)

    last = session.round.conversation[-1]
    return TurnResponse(
        outcome=outcome,
        reply=last if last.sender is Sender.ASSISTANT else None,
        session=SessionResponse.from_session(session),
    )


@router.post("/finish", response_model=Round)
async def finish_session(manager: SessionManager = Depends(get_session_manager)):
    session = _active_session(manager)
    try:
        final_round = await session.finish()
    except SessionFinishedError:
        raise HTTPException(409, "Round is already finished")
    await manager.release()
    return final_round


@router.delete("", status_code=204)
async def abandon_session(manager: SessionManager = Depends(get_session_manager)):
    _active_session(manager)
    await manager.release()
