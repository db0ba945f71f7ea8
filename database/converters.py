"""Conversion between asyncpg rows and the pydantic domain models.

Rounds are stored whole, as a JSON snapshot, so reading one back is a
single validation of that document.
"""

from typing import Dict, List
from uuid import UUID

from models import Course, Hole, PlayerProfile, Round


# ================================================================
# Row -> Model (reads)
# ================================================================

def hole_from_row(row, notes: List[str]) -> Hole:
    """courses.holes row + its notes -> Hole model."""
    return Hole(
        hole_number=row["hole_number"],
        par=row["par"],
        yardage=row["yardage"],
        description=row["description"] or "",
        notes=tuple(notes),
    )


def course_from_rows(course_row, hole_rows: list, note_rows: list) -> Course:
    """Assemble a Course from courses.courses, courses.holes and courses.hole_notes rows."""
    notes_by_hole: Dict[int, List[str]] = {}
    for nr in note_rows:
        notes_by_hole.setdefault(nr["hole_number"], []).append(nr["note"])

    holes = sorted(
        (hole_from_row(r, notes_by_hole.get(r["hole_number"], [])) for r in hole_rows),
        key=lambda h: h.hole_number,
    )
    return Course(
        id=str(course_row["id"]),
        name=course_row["name"],
        holes=tuple(holes),
    )


def round_from_row(row) -> Round:
    """players.round_snapshots row -> Round model."""
    snapshot = row["snapshot"]
    if isinstance(snapshot, (str, bytes)):
        return Round.model_validate_json(snapshot)
    return Round.model_validate(snapshot)


def profile_from_rows(rows: list) -> PlayerProfile:
    """players.tendencies rows (oldest first) -> PlayerProfile."""
    return PlayerProfile(tendencies=tuple(r["tendency"] for r in rows))


# ================================================================
# Model -> Row (writes)
# ================================================================

def round_to_row(course_id: str, round_: Round) -> dict:
    """Round model -> players.round_snapshots column values."""
    return {
        "course_id": UUID(course_id),
        "round_date": round_.date,
        "snapshot": round_.model_dump_json(),
        "total_score": round_.calculate_total_score(),
        "holes_played": len(round_.hole_by_hole),
        "is_finished": round_.is_finished,
    }
