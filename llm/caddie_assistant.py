import logging
import os
from typing import Optional

from dotenv import load_dotenv
load_dotenv()

from google import genai
from google.genai import types

from models import Course, Hole, PlayerProfile, Round
from llm.prompts import RawCaddieResponse, build_caddie_prompt
from session.gateways import AssistantResponse

logger = logging.getLogger(__name__)


# --- Configuration ---

GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-2.5-flash")


# --- API Interaction ---

def _create_client() -> genai.Client:
    api_key = os.environ.get("GOOGLE_API_KEY")
    if not api_key:
        raise EnvironmentError(
            "GOOGLE_API_KEY environment variable is not set. "
            "Get an API key at https://aistudio.google.com/apikey"
        )
    return genai.Client(api_key=api_key)


def _to_assistant_response(raw: RawCaddieResponse) -> AssistantResponse:
    return AssistantResponse(
        text=raw.conversational_response,
        cue=raw.audio_cue,
        extracted_data=raw.extracted_payload(),
    )


class GeminiCaddieAssistant:
    """Caddie assistant backed by Gemini structured JSON output.

    Satisfies the CaddieAssistant protocol: every failure, including a
    missing API key, is logged and reported as None.
    """

    def __init__(
        self,
        client: Optional[genai.Client] = None,
        *,
        model: str = GEMINI_MODEL,
        assistant_name: str = "JP",
    ):
        self._client = client
        self.model = model
        self.assistant_name = assistant_name

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = _create_client()
        return self._client

    async def get_response(
        self,
        course: Course,
        hole: Hole,
        round_: Round,
        profile: PlayerProfile,
    ) -> Optional[AssistantResponse]:
        try:
            client = self._get_client()
            prompt = build_caddie_prompt(
                course, hole, round_, profile, assistant_name=self.assistant_name,
            )
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_json_schema=RawCaddieResponse.model_json_schema(),
                ),
            )
            raw = RawCaddieResponse.model_validate_json(response.text or "")
        except Exception:
            logger.exception("Caddie assistant request failed")
            return None
        return _to_assistant_response(raw)
