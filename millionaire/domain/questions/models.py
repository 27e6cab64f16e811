"""Domain models for game questions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

Difficulty = str
Source = str

DIFFICULTIES: tuple[Difficulty, ...] = (
	"easy",
	"medium",
	"hard",
)

SOURCES: tuple[Source, ...] = (
	"cache",
	"live",
	"fallback",
)

OPTION_COUNT = 4


@dataclass(frozen=True, slots=True)
class Question:
	"""Canonical multiple-choice question with its prize value."""

	id: int
	text: str
	options: tuple[str, ...]
	correct_idx: int
	category: str
	difficulty: Difficulty
	value: int

	def __post_init__(self) -> None:
		if self.id <= 0:
			raise ValueError(f"question id must be positive, got {self.id}")
		if len(self.options) != OPTION_COUNT:
			raise ValueError(f"question {self.id} has {len(self.options)} options, expected {OPTION_COUNT}")
		if not 0 <= self.correct_idx < OPTION_COUNT:
			raise ValueError(f"question {self.id} correct_idx {self.correct_idx} out of range")
		if self.difficulty not in DIFFICULTIES:
			raise ValueError(f"question {self.id} has unknown difficulty {self.difficulty!r}")
		if self.value <= 0:
			raise ValueError(f"question {self.id} value must be positive, got {self.value}")

	@property
	def correct_option(self) -> str:
		return self.options[self.correct_idx]

	def to_payload(self) -> dict[str, Any]:
		return {
			"id": self.id,
			"text": self.text,
			"options": list(self.options),
			"correct_idx": self.correct_idx,
			"category": self.category,
			"difficulty": self.difficulty,
			"value": self.value,
		}

	@classmethod
	def from_payload(cls, payload: Dict[str, Any]) -> "Question":
		return cls(
			id=int(payload["id"]),
			text=str(payload["text"]),
			options=tuple(str(option) for option in payload["options"]),
			correct_idx=int(payload["correct_idx"]),
			category=str(payload["category"]),
			difficulty=str(payload["difficulty"]),
			value=int(payload["value"]),
		)


def sort_by_value(questions: list[Question]) -> list[Question]:
	"""Stable ascending sort on prize value."""
	return sorted(questions, key=lambda q: q.value)


@dataclass(slots=True)
class Acquisition:
	"""Outcome of a question acquisition; always carries a playable set."""

	questions: list[Question]
	source: Source
	reason: Optional[str] = None

	def __post_init__(self) -> None:
		if self.source not in SOURCES:
			raise ValueError(f"unknown acquisition source {self.source!r}")

	def __len__(self) -> int:
		return len(self.questions)
