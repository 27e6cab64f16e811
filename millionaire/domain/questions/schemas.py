"""Pydantic schemas for Open Trivia Database payloads."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field

# Open Trivia Database response codes
RESPONSE_OK = 0


class TriviaRecord(BaseModel):
	"""One raw question; text fields may carry HTML entities."""

	model_config = ConfigDict(extra="ignore")

	category: str = ""
	type: str = "multiple"
	difficulty: str
	question: str
	correct_answer: str = ""
	incorrect_answers: List[str] = Field(default_factory=list)


class TriviaResponse(BaseModel):
	model_config = ConfigDict(extra="ignore")

	response_code: int
	results: List[TriviaRecord] = Field(default_factory=list)

	@property
	def ok(self) -> bool:
		return self.response_code == RESPONSE_OK
