from .caddie_assistant import GeminiCaddieAssistant, GEMINI_MODEL
from .prompts import RawCaddieResponse, RawExtractedData, build_caddie_prompt

__all__ = [
    "GEMINI_MODEL",
    "GeminiCaddieAssistant",
    "RawCaddieResponse",
    "RawExtractedData",
    "build_caddie_prompt",
]
