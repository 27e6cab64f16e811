"""Money ladder and milestone payouts."""

from __future__ import annotations

MONEY_LADDER: tuple[int, ...] = (
	100,
	200,
	300,
	500,
	1000,
	2000,
	4000,
	8000,
	16000,
	32000,
	64000,
	125000,
	250000,
	500000,
	1000000,
)

# 1-based question numbers after which winnings are guaranteed
MILESTONES: tuple[int, ...] = (5, 10, 15)

TOP_PRIZE = MONEY_LADDER[-1]


def prize_for(index: int) -> int:
	"""Prize for answering the 0-based question ``index`` correctly."""
	return MONEY_LADDER[index]


def is_milestone(number: int) -> bool:
	return number in MILESTONES


def guaranteed_payout(index: int) -> int:
	"""Payout when the 0-based question ``index`` is answered wrongly.

	Only milestones that were actually cleared count, so missing question 5
	still pays nothing.
	"""
	completed = index
	for milestone in reversed(MILESTONES):
		if completed >= milestone:
			return MONEY_LADDER[milestone - 1]
	return 0
