"""
Ultimate Mix: one question per archetype, shuffled into a single batch.
"""

from typing import List

from loguru import logger

from .difficulty import normalize_mode
from .errors import GenerationError
from .models import Question
from .validator import check_question


async def generate_mix(engine, difficulty: str) -> List[Question]:
	"""
	Fill one slot per archetype (eight movie archetypes plus one Oscar question).
	A slot gets `mix_slot_attempts` tries; slots that keep failing are dropped.
	Returns an empty list when movie or Oscar data is missing.
	"""
	mode = normalize_mode(difficulty)
	if not engine.movies or not engine.oscars or not len(engine.oscars):
		logger.warning("[Mix] Missing movie or Oscar data, returning an empty batch")
		return []

	slots = [
		('Find Co-Actor', lambda: engine.find_co_actor(mode)),
		('Chain Co-Actor', lambda: engine.chain_co_actor(mode, chain_state=None)),  # always a fresh chain
		('Find Movie of Actor', lambda: engine.find_movie_of_actor(mode)),
		('Find Actor in Movie', lambda: engine.find_actor_in_movie(mode)),
		('Find Movie of Director', lambda: engine.find_movie_of_director(mode)),
		('Find Director of Movie', lambda: engine.find_director_of_movie(mode)),
		('Find Movie by Keywords', lambda: engine.find_movie_by_keywords(mode)),
		('Find Movie by Poster', None),
		('Oscar Question', lambda: engine.oscar_question(mode)),
	]
	attempts = engine.config.mix_slot_attempts

	questions: List[Question] = []
	for name, build in slots:
		question = None
		for attempt in range(1, attempts + 1):
			try:
				if build is None:
					candidate = await engine.find_movie_by_poster(mode)
				else:
					candidate = build()
				question = check_question(candidate)
				break
			except GenerationError as e:
				logger.warning(f"[Mix] {name} attempt {attempt}/{attempts} failed: {e}")
			except Exception:
				logger.exception(f"[Mix] {name} attempt {attempt}/{attempts} crashed")
		if question is None:
			logger.warning(f"[Mix] Dropping {name} after {attempts} attempts")
			continue
		question.category = name
		questions.append(question)

	logger.info(f"[Mix] Generated {len(questions)}/{len(slots)} questions")
	engine.rng.shuffle(questions)
	return questions
