"""
Actor <-> movie questions.
"Which movie did X play in?" and "Which actor played in T (Y)?".
Wrong answers are excluded by movie identity (title, year), never by row id alone.
"""

from loguru import logger

from .difficulty import is_allowed
from .distractors import assemble_choices, select_distractors
from .errors import InsufficientCandidatesError
from .generator_base import QuestionGenerator
from .models import Question
from .sampling import unique_by


class FindMovieOfActorGenerator(QuestionGenerator):
	category = 'Find Movie of Actor'

	def _attempt(self, mode: str) -> Question:
		pivot = self.history.movie_of_actor.pick_fresh(self.rng, self.eligible_actors(mode), key=lambda a: a.imdb)

		actor_movies = self.index.movies_of_actor(pivot.imdb)  # List A
		playable = [m for m in actor_movies if is_allowed(m.difficulty, mode)]
		if not playable:
			raise InsufficientCandidatesError(f"{pivot.name} has no {mode} movies")
		correct = self.rng.choice(playable)

		# Same title+year under another row id must never become a wrong answer
		excluded_keys = {m.key for m in actor_movies}
		wrong_pool = unique_by(
			[m for m in self.eligible_movies(mode) if m.key not in excluded_keys],
			key=lambda m: m.key,
		)
		wrong = select_distractors(self.rng, wrong_pool)

		correct_answer = correct.display_title
		choices = assemble_choices(self.rng, correct_answer, [m.display_title for m in wrong])

		character = correct.character_of(pivot.imdb)
		logger.debug(f"[ActorMovie] {pivot.name} -> {correct_answer}")
		return Question(
			question=f"Which movie did {pivot.name} play in?",
			choices=choices,
			correct_answer=correct_answer,
			explanation=f"{pivot.name} played in {correct_answer}{f' as {character}' if character else ''}.",
		)


class FindActorInMovieGenerator(QuestionGenerator):
	category = 'Find Actor in Movie'

	def _attempt(self, mode: str) -> Question:
		movie = self.history.actor_in_movie.pick_fresh(self.rng, self.eligible_movies(mode), key=lambda m: m.movie_imdb)

		featured = [a for a in self.index.featured_actors_in_movie(movie) if is_allowed(a.difficulty, mode)]
		if not featured:
			raise InsufficientCandidatesError(f"No {mode} reference actors credited in {movie.display_title}")
		correct = self.rng.choice(featured)

		# Anyone appearing in any row of this movie, credited or not, is off limits
		cast_ids = self.index.actors_in_movie(movie)
		wrong_pool = [a for a in self.eligible_actors(mode) if a.imdb not in cast_ids]
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, correct.name, [a.name for a in wrong])

		character = None
		for row in self.index.rows_for_key(movie.key):
			character = row.character_of(correct.imdb)
			if character:
				break

		title = movie.display_title
		logger.debug(f"[ActorMovie] {title} -> {correct.name}")
		return Question(
			question=f"Which actor played in {title}?",
			choices=choices,
			correct_answer=correct.name,
			explanation=f"{correct.name} played in {title}{f' as {character}' if character else ''}.",
		)
