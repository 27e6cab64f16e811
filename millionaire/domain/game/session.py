"""Turn-by-turn game flow for one player."""

from __future__ import annotations

import logging
import random
import uuid
from typing import List, Optional

from millionaire.domain.game import ladder, lifelines
from millionaire.domain.game.models import AnswerOutcome, GameError, LifelineState, SessionSummary
from millionaire.domain.questions.fallback_bank import FallbackBank, get_bank
from millionaire.domain.questions.models import OPTION_COUNT, Question
from millionaire.domain.questions.provider import QuestionProvider
from millionaire.obs import logging as obs_logging

logger = logging.getLogger(__name__)

QUESTIONS_PER_GAME = len(ladder.MONEY_LADDER)


class GameSession:
	"""State machine: idle -> loading -> playing -> finished."""

	def __init__(
		self,
		provider: QuestionProvider,
		*,
		rng: random.Random | None = None,
		bank: FallbackBank | None = None,
		session_id: str | None = None,
	) -> None:
		self._provider = provider
		self._rng = rng or random.Random()
		self._bank = bank
		self.session_id = session_id or uuid.uuid4().hex
		self._reset()

	def _reset(self) -> None:
		self.state = "idle"
		self.questions: List[Question] = []
		self.source: Optional[str] = None
		self.current_index = 0
		self.earned = 0
		self.won = False
		self.lifelines = LifelineState()
		self._reset_question()

	def _reset_question(self) -> None:
		self.phase = "awaiting_selection"
		self.selected: Optional[int] = None
		self.eliminated: List[int] = []
		self.audience: Optional[List[int]] = None
		self.phone_advice: Optional[lifelines.PhoneAdvice] = None

	@property
	def current_question(self) -> Question:
		self._ensure_state("playing")
		return self.questions[self.current_index]

	def _ensure_state(self, expected: str) -> None:
		if self.state != expected:
			raise GameError("invalid_state", message=f"session is {self.state}, expected {expected}")

	def _ensure_answer_open(self) -> None:
		self._ensure_state("playing")
		if self.phase != "awaiting_selection":
			raise GameError("answer_locked")

	async def start(self) -> None:
		"""Load a fresh question set; a finished session may be restarted."""
		if self.state not in ("idle", "finished"):
			raise GameError("invalid_state", message=f"cannot start while {self.state}")
		self._reset()
		self.state = "loading"
		tokens = obs_logging.bind_context(session_id=self.session_id)
		try:
			acquisition = await self._provider.acquire(QUESTIONS_PER_GAME)
		except Exception:
			self.state = "idle"
			raise
		finally:
			obs_logging.reset_context(tokens)
		questions = list(acquisition.questions)
		source = acquisition.source
		if len(questions) != QUESTIONS_PER_GAME:
			logger.warning(
				"unexpected question count, resampling fallback",
				extra={"count": len(questions), "session_id": self.session_id},
			)
			questions = (self._bank or get_bank()).sample(QUESTIONS_PER_GAME, rng=self._rng)
			source = "fallback"
		self.questions = questions
		self.source = source
		self.state = "playing"

	def select(self, option_idx: int) -> None:
		self._ensure_answer_open()
		if not 0 <= option_idx < OPTION_COUNT:
			raise GameError("invalid_option")
		if option_idx in self.eliminated:
			raise GameError("option_eliminated")
		self.selected = option_idx

	def confirm(self) -> AnswerOutcome:
		self._ensure_answer_open()
		if self.selected is None:
			raise GameError("no_selection")
		question = self.current_question
		correct = self.selected == question.correct_idx
		last = self.current_index == len(self.questions) - 1
		if correct:
			self.phase = "confirmed_correct"
			self.earned = ladder.prize_for(self.current_index)
			if last:
				self.won = True
				self.state = "finished"
		else:
			self.phase = "confirmed_wrong"
			self.earned = ladder.guaranteed_payout(self.current_index)
			self.state = "finished"
		return AnswerOutcome(
			question_idx=self.current_index,
			selected_idx=self.selected,
			correct_idx=question.correct_idx,
			correct=correct,
			earned=self.earned,
			finished=self.state == "finished",
		)

	def advance(self) -> Question:
		"""Move past a correctly answered question."""
		self._ensure_state("playing")
		if self.phase != "confirmed_correct":
			raise GameError("not_confirmed")
		self.current_index += 1
		self._reset_question()
		return self.current_question

	def use_fifty_fifty(self) -> List[int]:
		self._ensure_answer_open()
		self.lifelines.consume("fifty_fifty")
		self.eliminated = lifelines.fifty_fifty(self.current_question.correct_idx, self._rng)
		if self.selected in self.eliminated:
			self.selected = None
		return list(self.eliminated)

	def use_audience_poll(self) -> List[int]:
		self._ensure_answer_open()
		self.lifelines.consume("audience_poll")
		self.audience = lifelines.audience_poll(self.current_question.correct_idx, self.eliminated, self._rng)
		return list(self.audience)

	def use_phone_a_friend(self) -> lifelines.PhoneAdvice:
		self._ensure_answer_open()
		self.lifelines.consume("phone_a_friend")
		self.phone_advice = lifelines.phone_a_friend(self.current_question.correct_idx, self.eliminated, self._rng)
		return self.phone_advice

	def summary(self) -> SessionSummary:
		answered = self.current_index
		if self.phase == "confirmed_correct":
			answered += 1
		return SessionSummary(
			session_id=self.session_id,
			state=self.state,
			earned=self.earned,
			answered=answered,
			won=self.won,
			source=self.source,
			lifelines_left=self.lifelines.available(),
		)
