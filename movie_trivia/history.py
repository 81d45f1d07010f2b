"""
Short-term memory of recently used pivots.
Each generator family owns a bounded FIFO; SessionHistory groups them for one game session.
"""

from collections import deque  # bounded FIFO with automatic eviction
from dataclasses import dataclass, field
from random import Random
from typing import Callable, Hashable, List, Optional, Sequence, Set, TypeVar

from loguru import logger

from .config import EngineConfig
from .errors import InsufficientCandidatesError

T = TypeVar('T')

RELAX_CLEAR = 'clear'  # forget everything when the pool runs dry
RELAX_HALF = 'half'  # forget the oldest half, repeatedly if needed


class HistoryTracker:
	"""
	Bounded FIFO of identifiers recently used as a question pivot.
	Newest identifiers are pushed on the right; the oldest fall off once capacity is exceeded.
	"""

	def __init__(self, name: str, capacity: int, relax: str = RELAX_CLEAR):
		self.name = name
		self.capacity = capacity
		self.relax = relax
		self._items = deque(maxlen=capacity)  # oldest entries fall off automatically

	def __contains__(self, item: Hashable) -> bool:
		return item in self._items

	def __len__(self) -> int:
		return len(self._items)

	def items(self) -> List[Hashable]:
		return list(self._items)

	def recent(self, count: int) -> List[Hashable]:
		"""The last `count` identifiers, oldest first."""
		if count <= 0:
			return []
		return list(self._items)[-count:]

	def push(self, item: Hashable):
		self._items.append(item)  # evicts the oldest once full

	def discard(self, item: Hashable):
		"""Forget every occurrence of one identifier."""
		kept = [i for i in self._items if i != item]
		self._items.clear()
		self._items.extend(kept)

	def clear(self):
		self._items.clear()

	def trim(self, keep: int):
		"""Keep only the newest `keep` identifiers."""
		kept = self.recent(keep)
		self._items.clear()
		self._items.extend(kept)

	def discard_oldest_half(self):
		self.trim(len(self._items) - len(self._items) // 2)

	def fresh_pool(self, candidates: Sequence[T], key: Callable[[T], Hashable], minimum: int = 1) -> List[T]:
		"""
		Candidates whose identifier is not in the history.
		When fewer than `minimum` remain the history is relaxed until enough come back;
		an empty history means every candidate is fresh again.
		"""
		pool = [c for c in candidates if key(c) not in self]  # unused candidates only
		while len(pool) < minimum and len(self._items) > 0:
			if self.relax == RELAX_HALF and len(self._items) > 1:
				self.discard_oldest_half()
			else:
				self.clear()
			logger.debug(f"[History] '{self.name}' relaxed to {len(self._items)} entries")
			pool = [c for c in candidates if key(c) not in self]
		return pool

	def pick_fresh(self, rng: Random, candidates: Sequence[T], key: Callable[[T], Hashable]) -> T:
		"""Draw a random fresh candidate and record it as used."""
		pool = self.fresh_pool(candidates, key)
		if not pool:
			raise InsufficientCandidatesError(f"No candidates available for '{self.name}'")
		choice = rng.choice(pool)  # uniform draw among fresh candidates
		self.push(key(choice))  # remember it for the next questions
		return choice


@dataclass
class ChainTracker:
	"""Actors already used in the current co-star chain and where the chain started."""
	used: Set[str] = field(default_factory=set)
	origin: Optional[str] = None

	def reset(self, origin: Optional[str] = None):
		self.used.clear()
		self.origin = origin


class SessionHistory:
	"""All mutable anti-repetition state of one game session."""

	def __init__(self, config: EngineConfig):
		self.co_actor = HistoryTracker('co_actor', config.co_actor_history)
		self.movie_of_actor = HistoryTracker('movie_of_actor', config.actor_movie_history)
		self.actor_in_movie = HistoryTracker('actor_in_movie', config.actor_movie_history)
		self.movie_of_director = HistoryTracker('movie_of_director', config.director_movie_history)
		self.director_of_movie = HistoryTracker('director_of_movie', config.director_movie_history)
		self.keywords = HistoryTracker('keywords', config.keyword_history, relax=RELAX_HALF)
		self.posters = HistoryTracker('posters', config.poster_history, relax=RELAX_HALF)
		self.oscar_years = HistoryTracker('oscar_years', config.oscar_item_history)
		self.oscar_people = HistoryTracker('oscar_people', config.oscar_item_history)
		self.oscar_films = HistoryTracker('oscar_films', config.oscar_item_history)
		self.oscar_types = HistoryTracker('oscar_types', config.oscar_type_history)
		self.chain = ChainTracker()  # co-star chain state

	def trackers(self) -> List[HistoryTracker]:
		return [value for value in vars(self).values() if isinstance(value, HistoryTracker)]

	def clear(self):
		for tracker in self.trackers():
			tracker.clear()
		self.chain.reset()
