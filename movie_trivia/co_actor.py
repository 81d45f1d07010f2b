"""
Co-star questions: "Which actor played with X in a movie?" and its chained variant,
where each correct answer becomes the pivot of the next question.
"""

from typing import List, Optional

from loguru import logger

from .difficulty import is_allowed
from .distractors import assemble_choices, select_distractors
from .errors import InsufficientCandidatesError
from .generator_base import QuestionGenerator
from .models import ChainState, CoStar, CoStarLookup, Person, Question, UniqueActor


def _co_actor_question(pivot_name: str, correct: CoStar, choices: List[str]) -> Question:
	return Question(
		question=f"Which actor played with {pivot_name} in a movie?",
		choices=choices,
		correct_answer=correct.name,
		explanation=f"{correct.name} played with {pivot_name} in: {', '.join(correct.movie_titles())}",
	)


class FindCoActorGenerator(QuestionGenerator):
	category = 'Find Co-Actor'

	def _attempt(self, mode: str, actor: Optional[str] = None) -> Question:
		candidates = self.eligible_actors(mode)  # reference actors of this tier
		if actor:
			pinned = self.index.find_actor(actor)
			if pinned is None or not is_allowed(pinned.difficulty, mode):
				raise InsufficientCandidatesError(f"Actor '{actor}' is not available in {mode} mode")
			pivot = pinned
			self.history.co_actor.push(pivot.imdb)
		else:
			pivot = self.history.co_actor.pick_fresh(self.rng, candidates, key=lambda a: a.imdb)
		logger.debug(f"[CoActor] Pivot: {pivot.name} ({pivot.imdb})")

		lookup = self.index.co_stars_of(pivot.imdb)  # credited co-appearances
		eligible = self._eligible_co_stars(lookup, mode)
		if not eligible:
			raise InsufficientCandidatesError(f"{pivot.name} has no eligible co-stars")
		correct = self.rng.choice(eligible)  # any eligible co-star is a right answer

		wrong_pool = [
			a for a in candidates
			if a.imdb != pivot.imdb and a.imdb not in lookup.co_stars
		]
		wrong = select_distractors(self.rng, wrong_pool)  # three actors never seen with the pivot
		choices = assemble_choices(self.rng, correct.name, [a.name for a in wrong])
		return _co_actor_question(pivot.name, correct, choices)

	def _eligible_co_stars(self, lookup: CoStarLookup, mode: str) -> List[CoStar]:
		"""Co-stars that are reference actors of the requested difficulty tier."""
		eligible = []
		for imdb, co_star in lookup.co_stars.items():
			known = self.index.actor(imdb)
			if known is not None and is_allowed(known.difficulty, mode):
				eligible.append(co_star)
		return eligible


class ChainCoActorGenerator(FindCoActorGenerator):
	"""
	Walks the co-star graph without repeating an actor.
	The caller threads ChainState between calls; the session keeps the used-actor set.
	On a dead end the chain restarts once from its first pivot, then a brand-new chain begins.
	"""

	category = 'Chain Co-Actor'

	def _attempt(self, mode: str, chain_state: Optional[ChainState] = None) -> Question:
		chain = self.history.chain  # used actors and origin of this session
		state = chain_state
		restarted = False  # one restart from the origin per call

		for _ in range(self.config.max_attempts):
			if state is not None and state.current_actor is not None:
				pivot = state.current_actor
				is_new_chain = False
				if chain.origin is None:
					chain.origin = pivot.imdb
			else:
				pivot = self._start_chain(mode)
				is_new_chain = True

			chain.used.add(pivot.imdb)  # never offer the pivot again
			lookup = self.index.co_stars_of(pivot.imdb)
			eligible = [c for c in self._eligible_co_stars(lookup, mode) if c.imdb not in chain.used]

			if not eligible:
				origin = chain.origin
				if origin and origin != pivot.imdb and not restarted and self.index.actor(origin):
					logger.debug(f"[Chain] Dead end at {pivot.name}, restarting from {origin}")
					chain.reset(origin=origin)
					state = ChainState(current_actor=self.index.actor(origin).as_person())
					restarted = True
				else:
					logger.debug(f"[Chain] Dead end at {pivot.name}, starting a new chain")
					chain.reset()
					state = None
				continue

			correct = self.rng.choice(eligible)
			wrong_pool = [
				a for a in self.eligible_actors(mode)
				if a.imdb != pivot.imdb
				and a.imdb not in lookup.co_stars
				and a.imdb not in chain.used
			]
			wrong = select_distractors(self.rng, wrong_pool)
			choices = assemble_choices(self.rng, correct.name, [a.name for a in wrong])

			question = _co_actor_question(pivot.name, correct, choices)
			question.is_new_chain = is_new_chain
			question.next_actor = Person(name=correct.name, imdb=correct.imdb)  # pivot of the next link
			return question

		raise InsufficientCandidatesError("Co-star chain kept dead-ending")

	def _start_chain(self, mode: str) -> Person:
		candidates = self.eligible_actors(mode)  # reference actors of this tier
		if not candidates:
			raise InsufficientCandidatesError(f"No reference actors in {mode} mode")
		first: UniqueActor = self.rng.choice(candidates)  # random starting actor
		self.history.chain.reset(origin=first.imdb)
		logger.debug(f"[Chain] New chain from {first.name} ({first.imdb})")
		return first.as_person()
