"""
Transcript data model for the voice call console.

A transcript is an ordered, immutable tuple of ConversationItem values. Items are
never mutated in place: every update produces a copy, so a snapshot handed to a
reader stays valid while the reducer keeps producing newer ones.
"""

from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Tuple

from pydantic import BaseModel, ConfigDict


class ItemType(str, Enum):
    """Kind of a conversation item."""
    MESSAGE = "message"
    FUNCTION_CALL = "function_call"
    FUNCTION_CALL_OUTPUT = "function_call_output"


class Role(str, Enum):
    """Role of a participant in a conversation."""
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class Status(str, Enum):
    """Completion status of a conversation item."""
    RUNNING = "running"
    COMPLETED = "completed"


class ContentFragment(BaseModel):
    """One piece of content within an item. Non-text parts keep their extra fields."""
    model_config = ConfigDict(frozen=True, extra="allow")

    type: str = "text"
    text: Optional[str] = None


class ConversationItem(BaseModel):
    """One transcript entry: a message, a function call or a function call output."""
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    type: ItemType
    role: Optional[Role] = None
    content: Tuple[ContentFragment, ...] = ()
    status: Status = Status.RUNNING
    timestamp: Optional[str] = None

    # function_call / function_call_output
    call_id: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None
    output: Optional[str] = None

    @property
    def display_text(self) -> str:
        return "".join(fragment.text or "" for fragment in self.content)

    def updated(self, **changes) -> "ConversationItem":
        """Return a copy of the item with the given fields replaced."""
        return self.model_copy(update=changes)


Transcript = Tuple[ConversationItem, ...]
Clock = Callable[[], datetime]


def text_fragment(text: str) -> ContentFragment:
    return ContentFragment(type="text", text=text)


def format_timestamp(moment: datetime) -> str:
    """Format a time the way the console displays it, e.g. '3:04:05 PM'."""
    hour = moment.hour % 12 or 12
    suffix = "AM" if moment.hour < 12 else "PM"
    return f"{hour}:{moment:%M:%S} {suffix}"


def find_item_index(transcript: Transcript, item_id: Optional[str]) -> int:
    """Index of the first item with the given id, or -1."""
    if item_id is None:
        return -1
    for index, item in enumerate(transcript):
        if item.id == item_id:
            return index
    return -1


def replace_item(
    transcript: Transcript, index: int, item: ConversationItem
) -> Transcript:
    return transcript[:index] + (item,) + transcript[index + 1:]
