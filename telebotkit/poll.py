"""Native polls, poll options and poll answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional


class PollType(str, Enum):
    """Kind of poll; ANY is only meaningful for keyboard poll requests."""

    ANY = "any"
    QUIZ = "quiz"
    REGULAR = "regular"

    def to_dict(self) -> dict[str, str]:
        """Keyboard-button poll request form."""
        return {"type": self.value}


@dataclass
class PollOption:
    """One answer option in a poll."""

    text: str = ""
    voter_count: int = 0

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PollOption":
        return cls(text=data.get("text", ""), voter_count=data.get("voter_count", 0))


@dataclass
class Poll:
    """A poll with its options and settings."""

    id: str = ""
    type: Optional[PollType] = None
    question: str = ""
    options: list[PollOption] = field(default_factory=list)
    voter_count: int = 0
    closed: bool = False
    correct_option: int = 0
    multiple_answers: bool = False
    explanation: str = ""
    parse_mode: str = ""
    entities: list[Mapping[str, Any]] = field(default_factory=list)
    anonymous: bool = False
    open_period: int = 0
    close_unixdate: int = 0

    def is_regular(self) -> bool:
        return self.type is PollType.REGULAR

    def is_quiz(self) -> bool:
        return self.type is PollType.QUIZ

    def close_date(self) -> datetime:
        """Close date of the poll in local time."""
        return datetime.fromtimestamp(self.close_unixdate)

    def add_options(self, *texts: str) -> None:
        """Append text options to the poll."""
        self.options.extend(PollOption(text=text) for text in texts)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Poll":
        kind = data.get("type")
        return cls(
            id=data.get("id", ""),
            type=PollType(kind) if kind else None,
            question=data.get("question", ""),
            options=[PollOption.from_dict(o) for o in data.get("options") or []],
            voter_count=data.get("total_voter_count", 0),
            closed=data.get("is_closed", False),
            correct_option=data.get("correct_option_id", 0),
            multiple_answers=data.get("allows_multiple_answers", False),
            explanation=data.get("explanation", ""),
            parse_mode=data.get("explanation_parse_mode", ""),
            entities=list(data.get("explanation_entities") or []),
            anonymous=data.get("is_anonymous", False),
            open_period=data.get("open_period", 0),
            close_unixdate=data.get("close_date", 0),
        )


@dataclass
class PollAnswer:
    """A user's answer in a non-anonymous poll."""

    poll_id: str = ""
    sender: Optional[Mapping[str, Any]] = None
    options: list[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PollAnswer":
        return cls(
            poll_id=data.get("poll_id", ""),
            sender=data.get("user"),
            options=list(data.get("option_ids") or []),
        )