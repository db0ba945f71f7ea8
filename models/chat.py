from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import model_validator

from .base import BaseGolfModel


class Sender(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class ChatMessage(BaseGolfModel):
    """One message of the round's conversation.

    `learning` is an assistant-only annotation describing a profile or
    course-note update performed in the same turn.
    """
    sender: Sender
    text: str
    timestamp: datetime
    learning: Optional[str] = None

    @model_validator(mode='after')
    def validate_learning_sender(self):
        if self.learning is not None and self.sender is not Sender.ASSISTANT:
            raise ValueError("Only assistant messages can carry a learning annotation")
        return self

    @classmethod
    def from_user(cls, text: str, timestamp: datetime) -> "ChatMessage":
        return cls(sender=Sender.USER, text=text, timestamp=timestamp)

    @classmethod
    def from_assistant(
        cls, text: str, timestamp: datetime, learning: Optional[str] = None,
    ) -> "ChatMessage":
        return cls(sender=Sender.ASSISTANT, text=text, timestamp=timestamp, learning=learning)
