"""Folds one extraction payload into the running round.

`merge_extraction` is pure: it never performs I/O. Course notes and player
tendencies it finds are handed back as requests for the session to carry
out against its gateways.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from models import ExtractionPayload, HolePerformance, Round, Shot, ShotOutcome
from models.shot import UNKNOWN
from session.hole_registry import HoleRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CourseNoteRequest:
    hole_number: int
    text: str


@dataclass(frozen=True)
class MergeResult:
    round: Round
    hole_index: int
    learning: Optional[str] = None
    course_note: Optional[CourseNoteRequest] = None
    player_tendency: Optional[str] = None


def compose_learning(
    note_hole: Optional[int],
    tendency_recorded: bool,
    assistant_name: str = "JP",
) -> Optional[str]:
    """Learning annotation for the side effects of one turn."""
    phrases = []
    if note_hole is not None:
        phrases.append(f"{assistant_name} added a new note for Hole {note_hole}.")
    if tendency_recorded:
        phrases.append(f"{assistant_name} updated your player profile.")
    return " ".join(phrases) or None


def merge_extraction(
    round_: Round,
    registry: HoleRegistry,
    current_hole_index: int,
    payload: ExtractionPayload,
    *,
    assistant_name: str = "JP",
) -> MergeResult:
    """Apply a payload to the round and hole pointer.

    Steps:
    1. A hole number inside the registry moves the pointer and becomes the
       merge target; otherwise the hole at the pointer is the target.
    2. A hole number outside the registry is rejected outright: the pointer
       stays, and the payload's shot and score are not applied.
    3. club/outcome appends exactly one shot; scoreOnHole overwrites the score.
    4. The round only changes if step 3 did something; a hole touched for
       the first time is appended, otherwise updated in place.
    5. courseNote (recorded against the hole at the pointer before this
       merge) and playerTendency become learning requests.
    """
    current_hole = registry.hole_at(current_hole_index)
    new_index = current_hole_index
    target_hole = current_hole.hole_number
    target_valid = True

    if payload.hole_number is not None:
        if registry.contains(payload.hole_number):
            new_index = registry.index_of(payload.hole_number)
            target_hole = payload.hole_number
        else:
            target_valid = False
            logger.warning(
                "Rejecting hole %d: course has %d holes", payload.hole_number, len(registry),
            )

    new_round = round_
    if target_valid and (payload.has_shot or payload.has_score):
        performance = round_.get_hole_performance(target_hole) or HolePerformance(hole_number=target_hole)
        if payload.has_shot:
            performance = performance.with_shot(Shot(
                club=payload.club or UNKNOWN,
                lie=UNKNOWN,
                outcome=payload.outcome or ShotOutcome.UNKNOWN,
            ))
        if payload.has_score:
            performance = performance.with_score(payload.score_on_hole)
        new_round = round_.with_hole_performance(performance)

    course_note = None
    if payload.course_note:
        course_note = CourseNoteRequest(hole_number=current_hole.hole_number, text=payload.course_note)

    return MergeResult(
        round=new_round,
        hole_index=new_index,
        learning=compose_learning(
            course_note.hole_number if course_note else None,
            payload.player_tendency is not None,
            assistant_name,
        ),
        course_note=course_note,
        player_tendency=payload.player_tendency,
    )
