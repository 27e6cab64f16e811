"""Locally simulated lifelines."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Iterable, List

from millionaire.domain.questions.models import OPTION_COUNT
from millionaire.domain.questions.shuffle import fisher_yates

LIFELINES: tuple[str, ...] = ("fifty_fifty", "audience_poll", "phone_a_friend")

OPTION_LETTERS = ("A", "B", "C", "D")

AUDIENCE_BASE_VOTES = (10, 15, 20, 25)
FRIEND_ACCURACY = 0.8

_CONFIDENT_PHRASES = ("I'm pretty sure", "I'm confident", "I definitely know")
_UNSURE_PHRASES = ("I think", "I'm not 100% sure, but", "If I had to guess")


@dataclass(frozen=True, slots=True)
class PhoneAdvice:
	option_idx: int
	confident: bool
	message: str


def fifty_fifty(correct_idx: int, rng: random.Random) -> List[int]:
	"""Pick two wrong options to eliminate, returned in ascending order."""
	wrong = [idx for idx in range(OPTION_COUNT) if idx != correct_idx]
	return sorted(fisher_yates(wrong, rng)[:2])


def audience_poll(correct_idx: int, eliminated: Iterable[int], rng: random.Random) -> List[int]:
	"""Vote percentages per option; the correct option always polls highest."""
	votes = fisher_yates(AUDIENCE_BASE_VOTES, rng)
	top = votes.index(max(votes))
	votes[top], votes[correct_idx] = votes[correct_idx], votes[top]
	for idx in set(eliminated):
		if idx != correct_idx:
			votes[idx] = 0
	total = sum(votes)
	return [round(vote / total * 100) for vote in votes]


def phone_a_friend(correct_idx: int, eliminated: Iterable[int], rng: random.Random) -> PhoneAdvice:
	removed = set(eliminated)
	confident = rng.random() < FRIEND_ACCURACY
	if confident:
		answer = correct_idx
	else:
		candidates = [idx for idx in range(OPTION_COUNT) if idx != correct_idx and idx not in removed]
		answer = candidates[rng.randrange(len(candidates))]
	phrases = _CONFIDENT_PHRASES if confident else _UNSURE_PHRASES
	phrase = phrases[rng.randrange(len(phrases))]
	return PhoneAdvice(
		option_idx=answer,
		confident=confident,
		message=f"{phrase} it's {OPTION_LETTERS[answer]}.",
	)
