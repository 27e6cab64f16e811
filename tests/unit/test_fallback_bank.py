import random

import pytest

from millionaire.domain.questions.errors import FallbackExhausted
from millionaire.domain.questions.fallback_bank import (
	EXPECTED_BUCKETS,
	FallbackBank,
	get_bank,
	get_random_questions,
	split_counts,
)
from millionaire.domain.questions.models import Question


def test_bank_holds_one_hundred_unique_questions():
	bank = get_bank()
	assert len(bank) == 100
	assert len({q.id for q in bank.all()}) == 100
	assert {d: len(bank.by_difficulty(d)) for d in ("easy", "medium", "hard")} == EXPECTED_BUCKETS


def test_split_counts_for_a_full_game():
	assert split_counts(15) == {"easy": 4, "medium": 4, "hard": 7}
	assert split_counts(10) == {"easy": 3, "medium": 3, "hard": 4}
	assert split_counts(0) == {"easy": 0, "medium": 0, "hard": 0}


@pytest.mark.parametrize("seed", range(10))
def test_sample_returns_fifteen_sorted_distinct(seed):
	sample = get_bank().sample(15, rng=random.Random(seed))
	assert len(sample) == 15
	assert len({q.id for q in sample}) == 15
	values = [q.value for q in sample]
	assert values == sorted(values)
	assert [q.difficulty for q in sample].count("hard") == 7


def test_sample_is_reproducible_with_seed():
	assert get_random_questions(15, seed=7) == get_random_questions(15, seed=7)


def test_get_returns_known_question():
	question = get_bank().get(1)
	assert question is not None
	assert question.correct_option == "Mars"
	assert get_bank().get(999) is None


def _question(question_id: int, difficulty: str) -> Question:
	return Question(
		id=question_id,
		text=f"q{question_id}",
		options=("a", "b", "c", "d"),
		correct_idx=0,
		category="Test",
		difficulty=difficulty,
		value=question_id * 100,
	)


def test_construction_checks_bucket_capacity():
	items = [_question(1, "easy"), _question(2, "medium"), _question(3, "hard")]
	with pytest.raises(ValueError):
		FallbackBank(items)


def test_construction_checks_expected_sizes():
	with pytest.raises(ValueError):
		FallbackBank(get_bank().all(), expected={"easy": 30, "medium": 30, "hard": 40})


def test_construction_rejects_duplicate_ids():
	items = get_bank().all()
	items.append(items[0])
	with pytest.raises(ValueError):
		FallbackBank(items)


def test_oversized_sample_is_refused():
	items = [_question(i, "easy") for i in range(1, 5)]
	items += [_question(i, "medium") for i in range(5, 9)]
	items += [_question(i, "hard") for i in range(9, 16)]
	bank = FallbackBank(items)
	assert len(bank.sample(15, rng=random.Random(0))) == 15
	with pytest.raises(FallbackExhausted):
		bank.sample(30, rng=random.Random(0))


def test_draw_caps_each_difficulty_at_bank_size():
	drawn = get_bank().draw(100, rng=random.Random(2))
	counts = {d: sum(1 for q in drawn if q.difficulty == d) for d in ("easy", "medium", "hard")}
	assert counts == {"easy": 33, "medium": 29, "hard": 34}
	assert [q.value for q in drawn] == sorted(q.value for q in drawn)
	assert get_bank().draw(-1) == []
	assert len(get_bank().draw(15, rng=random.Random(2))) == 15
