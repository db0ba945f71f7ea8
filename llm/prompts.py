from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional

from models import GOLF_CLUBS, LIE_TYPES, ChatMessage, Course, Hole, PlayerProfile, Round, Sender, ShotOutcome

RECENT_MESSAGE_LIMIT = 12


# ================================================================
# Shared prompt fragments
# ================================================================

_PERSONA = """You are {name}, a friendly, knowledgeable golf caddie walking the course with the player.
Keep replies short and conversational (one to three sentences): they are read aloud on the course."""

_CUE_INSTRUCTIONS = """
AUDIO CUE:
Pick at most one sound effect for your reply, or null:
- "discovery": you learned something new about the course
- "update": the player moved to a different hole
- "memory": you recalled or recorded something about the player
- "achievement": a great shot or score worth celebrating
- "log": you recorded a shot"""

_EXTRACTION_INSTRUCTIONS = """
EXTRACTED DATA:
Report only facts the player just told you in their LAST message. Omit every field that was not mentioned.
- holeNumber: the hole the player is talking about, if they named one.
- club: the club used for a shot, from this list where possible: {clubs}.
- outcome: where that shot finished, exactly one of: {outcomes}.
- scoreOnHole: the player's total strokes on the hole, once they tell you.
- courseNote: a lasting fact about the hole worth remembering next time (e.g. "green breaks hard left").
- playerTendency: a lasting habit of the player (e.g. "tends to miss right with long irons").
Every mention of a shot is one reported shot: never repeat a shot from an earlier message."""

_RESPONSE_JSON_SCHEMA = """
Return a JSON object with this exact structure:
{
  "conversationalResponse": "string",
  "audioCue": "discovery | update | memory | achievement | log | null",
  "extractedData": {
    "holeNumber": "int (optional)",
    "club": "string (optional)",
    "outcome": "string (optional)",
    "scoreOnHole": "int (optional)",
    "courseNote": "string (optional)",
    "playerTendency": "string (optional)"
  }
}"""


# ================================================================
# Context sections
# ================================================================

def _format_hole(hole: Hole) -> str:
    lines = [f"Hole {hole.hole_number}: par {hole.par}, {hole.yardage} yards."]
    if hole.description:
        lines.append(f"Description: {hole.description}")
    if hole.notes:
        lines.append("Your notes from earlier rounds:")
        lines.extend(f"- {note}" for note in hole.notes)
    return "\n".join(lines)


def _format_round_so_far(round_: Round) -> str:
    if not round_.hole_by_hole:
        return "No holes recorded yet."
    lines = []
    for perf in round_.hole_by_hole:
        shots = ", ".join(f"{s.club} -> {s.outcome.value}" for s in perf.shots) or "no shots"
        score = f"score {perf.score}" if perf.score else "score not yet known"
        lines.append(f"- Hole {perf.hole_number}: {score}; {shots}")
    return "\n".join(lines)


def _format_profile(profile: PlayerProfile) -> str:
    if not profile.tendencies:
        return "Nothing recorded yet."
    return "\n".join(f"- {t}" for t in profile.tendencies)


def _format_conversation(messages: List[ChatMessage], assistant_name: str) -> str:
    lines = []
    for msg in messages:
        speaker = "Player" if msg.sender is Sender.USER else assistant_name
        lines.append(f"{speaker}: {msg.text}")
    return "\n".join(lines)


# ================================================================
# Caddie turn prompt
# ================================================================

def build_caddie_prompt(
    course: Course,
    hole: Hole,
    round_: Round,
    profile: PlayerProfile,
    *,
    assistant_name: str = "JP",
    recent_limit: int = RECENT_MESSAGE_LIMIT,
) -> str:
    """Build the prompt for one conversational turn of a live round."""
    recent = list(round_.conversation[-recent_limit:])
    extraction = _EXTRACTION_INSTRUCTIONS.format(
        clubs=", ".join(GOLF_CLUBS),
        outcomes=", ".join(o.value for o in ShotOutcome),
    )
    return "\n".join([
        _PERSONA.format(name=assistant_name),
        "",
        f"COURSE: {course.name} ({course.hole_count} holes, par {course.par})",
        f"CONDITIONS: {round_.conditions or 'unknown'}",
        f"TYPICAL LIES: {', '.join(LIE_TYPES)}",
        "",
        "CURRENT HOLE:",
        _format_hole(hole),
        "",
        "ROUND SO FAR:",
        _format_round_so_far(round_),
        "",
        "WHAT YOU KNOW ABOUT THE PLAYER:",
        _format_profile(profile),
        "",
        "CONVERSATION (most recent last):",
        _format_conversation(recent, assistant_name),
        _CUE_INSTRUCTIONS,
        extraction,
        _RESPONSE_JSON_SCHEMA,
    ])


# ================================================================
# Pydantic models for LLM response parsing
# ================================================================

class RawExtractedData(BaseModel):
    """Loose shape of extractedData; values are validated later, field by field."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    hole_number: Optional[Any] = None
    club: Optional[Any] = None
    outcome: Optional[Any] = None
    score_on_hole: Optional[Any] = None
    course_note: Optional[Any] = None
    player_tendency: Optional[Any] = None


class RawCaddieResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    conversational_response: str = Field(..., min_length=1)
    audio_cue: Optional[str] = None
    extracted_data: Optional[RawExtractedData] = None

    def extracted_payload(self) -> Optional[Dict[str, Any]]:
        """extractedData as a camelCase dict with absent fields left out."""
        if self.extracted_data is None:
            return None
        return self.extracted_data.model_dump(by_alias=True, exclude_none=True)
