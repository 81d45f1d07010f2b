"""
Keyword questions: show a movie's tags and ask which movie they describe.
Wrong answers are the movies sharing the fewest keywords with the pivot.
"""

from loguru import logger

from .distractors import WRONG_ANSWER_COUNT, assemble_choices, pick_dissimilar
from .errors import InsufficientCandidatesError
from .generator_base import QuestionGenerator
from .models import Question
from .sampling import unique_by


class FindMovieByKeywordsGenerator(QuestionGenerator):
	category = 'Find Movie by Keywords'

	def _attempt(self, mode: str) -> Question:
		movies = self.eligible_movies(mode)
		candidates = [m for m in movies if len(m.keywords) >= self.config.min_keywords]
		movie = self.history.keywords.pick_fresh(self.rng, candidates, key=lambda m: m.movie_imdb)
		logger.debug(f"[Keywords] Pivot: {movie.display_title} {movie.keywords}")

		others = unique_by(
			[m for m in movies if m.keywords and m.key != movie.key],
			key=lambda m: m.key,
		)
		wrong = pick_dissimilar(self.rng, movie.keywords, others, keywords_of=lambda m: m.keywords)
		if len(wrong) < WRONG_ANSWER_COUNT:
			raise InsufficientCandidatesError(f"Only {len(wrong)} dissimilar movies for {movie.display_title}")

		correct_answer = movie.display_title
		choices = assemble_choices(self.rng, correct_answer, [m.display_title for m in wrong])
		keywords = ', '.join(movie.keywords)
		return Question(
			question='Which movie matches these keywords:',
			keywords=keywords,
			choices=choices,
			correct_answer=correct_answer,
			explanation=f"{correct_answer} is characterized by: {keywords}.",
		)
