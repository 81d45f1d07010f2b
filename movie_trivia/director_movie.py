"""
Director <-> movie questions.
"Which movie was directed by X?" and "Who directed T (Y)?".
"""

from typing import Optional

from loguru import logger

from .difficulty import is_allowed
from .distractors import assemble_choices, select_distractors
from .errors import InsufficientCandidatesError
from .generator_base import QuestionGenerator
from .models import Question
from .sampling import unique_by


class FindMovieOfDirectorGenerator(QuestionGenerator):
	category = 'Find Movie of Director'

	def _attempt(self, mode: str, director: Optional[str] = None) -> Question:
		directors = self.index.unique_directors(mode)
		if director:
			pinned = self.index.find_director(director)
			if pinned is None or pinned.imdb not in {d.imdb for d in directors}:
				raise InsufficientCandidatesError(f"Director '{director}' is not available in {mode} mode")
			pivot = pinned
			self.history.movie_of_director.push(pivot.imdb)
		else:
			pivot = self.history.movie_of_director.pick_fresh(self.rng, directors, key=lambda d: d.imdb)

		director_movies = self.index.movies_of_director(pivot.imdb)
		playable = [m for m in director_movies if is_allowed(m.difficulty, mode)]
		if not playable:
			raise InsufficientCandidatesError(f"{pivot.name} has no {mode} movies")
		correct = self.rng.choice(playable)

		excluded_keys = {m.key for m in director_movies}
		wrong_pool = unique_by(
			[m for m in self.eligible_movies(mode) if m.key not in excluded_keys],
			key=lambda m: m.key,
		)
		wrong = select_distractors(self.rng, wrong_pool)

		correct_answer = correct.display_title
		choices = assemble_choices(self.rng, correct_answer, [m.display_title for m in wrong])
		logger.debug(f"[DirectorMovie] {pivot.name} -> {correct_answer}")
		return Question(
			question=f"Which movie was directed by {pivot.name}?",
			choices=choices,
			correct_answer=correct_answer,
			explanation=f"{pivot.name} directed {correct_answer}",
		)


class FindDirectorOfMovieGenerator(QuestionGenerator):
	category = 'Find Director of Movie'

	def _attempt(self, mode: str) -> Question:
		candidates = [m for m in self.eligible_movies(mode) if m.valid_directors()]
		movie = self.history.director_of_movie.pick_fresh(self.rng, candidates, key=lambda m: m.movie_imdb)

		movie_directors = self.index.directors_of_movie(movie)
		if not movie_directors:
			raise InsufficientCandidatesError(f"{movie.display_title} has no valid directors")
		correct = self.rng.choice(movie_directors)

		own_ids = {d.imdb for d in movie_directors}
		wrong_pool = unique_by(
			[d for d in self.index.unique_directors(mode) if d.imdb not in own_ids],
			key=lambda d: d.imdb,
		)
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, correct.name, [d.name for d in wrong])

		title = movie.display_title
		logger.debug(f"[DirectorMovie] {title} -> {correct.name}")
		return Question(
			question=f"Who directed {title}?",
			choices=choices,
			correct_answer=correct.name,
			explanation=f"{correct.name} directed {title}",
		)
