"""Seedable shuffling helpers."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def fisher_yates(items: Sequence[T], rng: random.Random) -> list[T]:
	"""Return a uniformly permuted copy of ``items``; the input is left untouched."""
	shuffled = list(items)
	for i in range(len(shuffled) - 1, 0, -1):
		j = rng.randrange(i + 1)
		shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
	return shuffled


def take_random(items: Sequence[T], count: int, rng: random.Random) -> list[T]:
	"""Draw ``count`` items without replacement."""
	if count > len(items):
		raise ValueError(f"cannot take {count} items from {len(items)}")
	return fisher_yates(items, rng)[:count]
