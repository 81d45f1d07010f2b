"""
Question engine module.
One QuestionEngine per game session: it owns the random source, the anti-repetition
history and the generators, and exposes one method per question archetype.
"""

from random import Random  # injectable randomness for reproducible sessions
from typing import List, Optional

# Import project modules for data structures and components
from .config import EngineConfig  # retry budgets and history sizes
from .entity_index import EntityIndex  # actor/director/movie lookups
from .generator_base import GenerationContext  # shared generator state
from .history import SessionHistory  # per-session recently-used pivots
from .models import ChainState, MovieRecord, OscarDataset, Question
from .co_actor import ChainCoActorGenerator, FindCoActorGenerator
from .actor_movie import FindActorInMovieGenerator, FindMovieOfActorGenerator
from .director_movie import FindDirectorOfMovieGenerator, FindMovieOfDirectorGenerator
from .keyword_movie import FindMovieByKeywordsGenerator
from .poster import FindMovieByPosterGenerator, LocalPosterProbe, PosterProbe
from .oscar import OscarQuestionGenerator
from .mix import generate_mix

# Import loguru for console logging
from loguru import logger


class QuestionEngine:
	"""
	Session-scoped trivia question API.
	The EntityIndex is read-only and may be shared between engines (pass `index=`),
	while history and randomness stay private to each session.
	"""
	def __init__(
		self,
		movies: List[MovieRecord],  # movie rows, one per movie/reference-actor pairing
		oscars: Optional[OscarDataset] = None,  # Academy Award records
		config: Optional[EngineConfig] = None,  # defaults when omitted
		rng: Optional[Random] = None,  # seed it in tests
		poster_probe: Optional[PosterProbe] = None,  # defaults to the local posters folder
		index: Optional[EntityIndex] = None,  # prebuilt index shared across sessions
	):
		self.movies = movies
		self.oscars = oscars
		self.config = config or EngineConfig()
		self.config.validate()
		self.rng = rng or Random()

		if index is None:
			logger.info(f"[Engine] Building entity index over {len(movies)} movie rows")
			index = EntityIndex(movies)
		self.index = index
		self.history = SessionHistory(self.config)

		if poster_probe is None:
			poster_probe = LocalPosterProbe(
				self.config.poster_dir,
				url_prefix=self.config.poster_url_prefix,
				extensions=self.config.poster_extensions,
			)
		self.poster_probe = poster_probe

		context = GenerationContext(
			movies=movies,
			index=index,
			history=self.history,
			rng=self.rng,
			config=self.config,
			oscars=oscars,
		)
		self._co_actor = FindCoActorGenerator(context)
		self._chain = ChainCoActorGenerator(context)
		self._movie_of_actor = FindMovieOfActorGenerator(context)
		self._actor_in_movie = FindActorInMovieGenerator(context)
		self._movie_of_director = FindMovieOfDirectorGenerator(context)
		self._director_of_movie = FindDirectorOfMovieGenerator(context)
		self._keywords = FindMovieByKeywordsGenerator(context)
		self._poster = FindMovieByPosterGenerator(context, probe=poster_probe)
		self._oscar = OscarQuestionGenerator(context)
		logger.debug(
			f"[Engine] Ready: {len(index.unique_actors)} reference actors, "
			f"{len(oscars) if oscars else 0} Oscar records"
		)

	def find_co_actor(self, difficulty: str, actor: Optional[str] = None) -> Question:
		"""Which actor played with X? Pass `actor` (name or IMDb id) to pin the pivot."""
		return self._co_actor.generate(difficulty, actor=actor)

	def chain_co_actor(self, difficulty: str, chain_state: Optional[ChainState] = None) -> Question:
		"""
		Next link of a co-star chain. Pass `question.next_chain_state()` from the previous
		answer to continue, or None to start a new chain.
		"""
		return self._chain.generate(difficulty, chain_state=chain_state)

	def find_movie_of_actor(self, difficulty: str) -> Question:
		return self._movie_of_actor.generate(difficulty)

	def find_actor_in_movie(self, difficulty: str) -> Question:
		return self._actor_in_movie.generate(difficulty)

	def find_movie_of_director(self, difficulty: str, director: Optional[str] = None) -> Question:
		return self._movie_of_director.generate(difficulty, director=director)

	def find_director_of_movie(self, difficulty: str) -> Question:
		return self._director_of_movie.generate(difficulty)

	def find_movie_by_keywords(self, difficulty: str) -> Question:
		return self._keywords.generate(difficulty)

	async def find_movie_by_poster(self, difficulty: str) -> Question:
		return await self._poster.generate(difficulty)

	def oscar_question(self, difficulty: str, sub_type: Optional[str] = None) -> Question:
		"""Weighted random Oscar question, or the requested `sub_type`."""
		return self._oscar.generate(difficulty, sub_type=sub_type)

	async def ultimate_mix(self, difficulty: str) -> List[Question]:
		"""One question of every archetype, shuffled."""
		return await generate_mix(self, difficulty)

	def reset_history(self):
		"""Forget every recently used pivot, the chain and the Oscar type history."""
		self.history.clear()
		logger.info("[Engine] Session history cleared")
