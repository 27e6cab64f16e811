"""Turn raw trivia records into canonical questions."""

from __future__ import annotations

import html
import random
from typing import Dict, Iterable, List, Sequence

from millionaire.domain.questions.errors import InvalidRecord
from millionaire.domain.questions.models import Question
from millionaire.domain.questions.schemas import TriviaRecord
from millionaire.domain.questions.shuffle import fisher_yates

VALUE_LADDER: Dict[str, tuple[int, ...]] = {
	"easy": (100, 200, 300, 500, 1000),
	"medium": (2000, 4000, 8000, 16000, 32000),
	"hard": (64000, 125000, 250000, 500000, 1000000),
}

INCORRECT_ANSWERS = 3


def decode_entities(text: str) -> str:
	return html.unescape(text)


def value_for(difficulty: str, position: int) -> int:
	try:
		slots = VALUE_LADDER[difficulty]
	except KeyError:
		raise InvalidRecord(f"unknown difficulty {difficulty!r}") from None
	return slots[position % len(slots)]


def normalize_record(
	record: TriviaRecord,
	*,
	position: int,
	question_id: int,
	rng: random.Random,
) -> Question:
	"""Decode, shuffle and price a single record.

	``position`` is the record's index inside its difficulty batch and picks the
	prize slot. When two options decode to the same text the first one in the
	shuffled order is taken as correct.
	"""
	if not record.correct_answer:
		raise InvalidRecord(f"record {question_id} has no correct answer")
	if len(record.incorrect_answers) != INCORRECT_ANSWERS:
		raise InvalidRecord(
			f"record {question_id} has {len(record.incorrect_answers)} incorrect answers, expected {INCORRECT_ANSWERS}"
		)
	difficulty = record.difficulty.strip().lower()
	value = value_for(difficulty, position)

	correct = decode_entities(record.correct_answer)
	options = fisher_yates([correct, *(decode_entities(a) for a in record.incorrect_answers)], rng)
	try:
		return Question(
			id=question_id,
			text=decode_entities(record.question),
			options=tuple(options),
			correct_idx=options.index(correct),
			category=decode_entities(record.category),
			difficulty=difficulty,
			value=value,
		)
	except ValueError as exc:
		raise InvalidRecord(str(exc)) from exc


def normalize_batches(batches: Iterable[Sequence[TriviaRecord]], rng: random.Random) -> List[Question]:
	"""Normalise difficulty batches in order; ids run 1..n across all batches."""
	questions: List[Question] = []
	for batch in batches:
		for position, record in enumerate(batch):
			questions.append(
				normalize_record(record, position=position, question_id=len(questions) + 1, rng=rng)
			)
	return questions
