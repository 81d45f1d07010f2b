"""
Shared plumbing for question generators.
Every generator runs its attempt function inside a bounded retry loop instead of recursing.
"""

from dataclasses import dataclass
from random import Random
from typing import Callable, List, Optional, TypeVar

from loguru import logger

from .config import EngineConfig
from .difficulty import filter_by_difficulty, is_allowed, normalize_mode
from .entity_index import EntityIndex
from .errors import GenerationError, RETRYABLE_ERRORS
from .history import SessionHistory
from .models import MovieRecord, OscarDataset, UniqueActor

T = TypeVar('T')


@dataclass
class GenerationContext:
	"""Everything a generator needs from its session."""
	movies: List[MovieRecord]
	index: EntityIndex
	history: SessionHistory
	rng: Random
	config: EngineConfig
	oscars: Optional[OscarDataset] = None


class QuestionGenerator:
	"""
	Base class: subclasses implement `_attempt` and raise a retryable error
	(InsufficientCandidatesError, MissingPosterError) when a draw cannot be completed.
	"""

	category = ''

	def __init__(self, context: GenerationContext):
		self.context = context
		self.index = context.index
		self.history = context.history
		self.rng = context.rng
		self.config = context.config

	def generate(self, difficulty: str, **kwargs):
		mode = normalize_mode(difficulty)
		return self._retry(lambda: self._attempt(mode, **kwargs), self.category)

	def _attempt(self, mode: str, **kwargs):
		raise NotImplementedError

	def _retry(self, attempt: Callable[[], T], label: str) -> T:
		last_error = None
		for attempt_no in range(1, self.config.max_attempts + 1):
			try:
				return attempt()
			except RETRYABLE_ERRORS as e:
				last_error = e
				logger.debug(f"[{label}] Attempt {attempt_no} failed: {e}")
		raise GenerationError(f"{label}: no question after {self.config.max_attempts} attempts") from last_error

	# Shared helpers

	def eligible_actors(self, mode: str) -> List[UniqueActor]:
		return filter_by_difficulty(self.index.unique_actors, mode)

	def eligible_movies(self, mode: str) -> List[MovieRecord]:
		return [m for m in self.context.movies if m.movie_imdb and is_allowed(m.difficulty, mode)]


class AsyncQuestionGenerator(QuestionGenerator):
	"""Generators whose attempt awaits I/O; retries stay sequential."""

	async def generate(self, difficulty: str, **kwargs):
		mode = normalize_mode(difficulty)
		last_error = None
		for attempt_no in range(1, self.config.max_attempts + 1):
			try:
				return await self._attempt(mode, **kwargs)
			except RETRYABLE_ERRORS as e:
				last_error = e
				logger.debug(f"[{self.category}] Attempt {attempt_no} failed: {e}")
		raise GenerationError(f"{self.category}: no question after {self.config.max_attempts} attempts") from last_error

	async def _attempt(self, mode: str, **kwargs):
		raise NotImplementedError
