"""Domain models for a single game session."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from millionaire.domain.game.lifelines import LIFELINES

SessionState = str


class GameError(RuntimeError):
	def __init__(self, code: str, *, message: str | None = None) -> None:
		super().__init__(message or code)
		self.code = code
		self.detail = message or code


@dataclass(slots=True)
class LifelineState:
	fifty_fifty: bool = True
	audience_poll: bool = True
	phone_a_friend: bool = True

	def available(self) -> List[str]:
		return [name for name in LIFELINES if getattr(self, name)]

	def consume(self, name: str) -> None:
		if not getattr(self, name):
			raise GameError("lifeline_used", message=f"{name} already used")
		setattr(self, name, False)


@dataclass(slots=True)
class AnswerOutcome:
	question_idx: int
	selected_idx: int
	correct_idx: int
	correct: bool
	earned: int
	finished: bool


@dataclass(slots=True)
class SessionSummary:
	session_id: str
	state: SessionState
	earned: int
	answered: int
	won: bool
	source: Optional[str] = None
	lifelines_left: List[str] = field(default_factory=list)

	def to_payload(self) -> Dict[str, object]:
		return {
			"session_id": self.session_id,
			"state": self.state,
			"earned": self.earned,
			"answered": self.answered,
			"won": self.won,
			"source": self.source,
			"lifelines_left": list(self.lifelines_left),
		}
