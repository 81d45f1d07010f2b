"""
Print sample trivia questions from the exported datasets.

This script:
1) Loads the movie part files and the Oscar records (DataConfig, MOVIE_TRIVIA_* env vars)
2) Builds a QuestionEngine
3) Generates one question per archetype
4) Generates an Ultimate Mix batch

Usage:
    python -m scripts.sample_questions --difficulty hard --seed 7

Handy for eyeballing a new data export before deploying the API.
"""

import argparse  # command line flags
import asyncio  # poster and mix generators are coroutines
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths
from random import Random  # reproducible runs with --seed

from loguru import logger  # console logging

from movie_trivia.config import DataConfig, EngineConfig  # settings
from movie_trivia.data_loader import DataLoader  # data ingestion
from movie_trivia.engine import QuestionEngine  # question API
from movie_trivia.errors import GenerationError  # exhausted retries


def _print_question(label: str, question):
	logger.info(f"[{label}] {question.question}")
	if question.keywords:
		logger.info(f"    keywords: {question.keywords}")
	if question.poster_path:
		logger.info(f"    poster: {question.poster_path}")
	for choice in question.choices:
		marker = '*' if choice == question.correct_answer else ' '
		logger.info(f"  {marker} {choice}")
	logger.info(f"    {question.explanation}")


async def run(difficulty: str, seed=None):
	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Sample Trivia Questions")
	logger.info("=" * 60)

	# 1) Load data
	logger.info("[1/4] Loading data...")
	data_config = DataConfig.from_env()
	loader = DataLoader()
	movie_paths = [p for p in data_config.movie_paths() if Path(p).exists()]
	movies = loader.load_movies(movie_paths) if movie_paths else []
	oscars = loader.load_oscars(data_config.oscar_path()) if Path(data_config.oscar_path()).exists() else None
	logger.info(f"[OK] {len(movies)} movie rows, {len(oscars) if oscars else 0} Oscar records")

	# 2) Build engine
	logger.info("\n[2/4] Building engine...")
	t0 = time.time()
	engine = QuestionEngine(movies, oscars=oscars, config=EngineConfig.from_env(), rng=Random(seed))
	logger.info(f"[OK] Engine ready in {time.time() - t0:.2f}s")

	# 3) One question per archetype
	logger.info("\n[3/4] One question per archetype...")
	archetypes = [
		('Find Co-Actor', engine.find_co_actor),
		('Chain Co-Actor', engine.chain_co_actor),
		('Find Movie of Actor', engine.find_movie_of_actor),
		('Find Actor in Movie', engine.find_actor_in_movie),
		('Find Movie of Director', engine.find_movie_of_director),
		('Find Director of Movie', engine.find_director_of_movie),
		('Find Movie by Keywords', engine.find_movie_by_keywords),
		('Oscar Question', engine.oscar_question),
	]
	for label, generate in archetypes:
		try:
			_print_question(label, generate(difficulty))
		except GenerationError as e:
			logger.warning(f"[{label}] {e}")
	try:
		_print_question('Find Movie by Poster', await engine.find_movie_by_poster(difficulty))
	except GenerationError as e:
		logger.warning(f"[Find Movie by Poster] {e}")

	# 4) Ultimate Mix
	logger.info("\n[4/4] Ultimate Mix...")
	for question in await engine.ultimate_mix(difficulty):
		_print_question(question.category, question)

	# Footer
	logger.info("=" * 60)


def main():
	parser = argparse.ArgumentParser(description="Print sample movie trivia questions")
	parser.add_argument('--difficulty', default='easy', choices=['easy', 'hard'])
	parser.add_argument('--seed', type=int, default=None)
	args = parser.parse_args()
	asyncio.run(run(args.difficulty, args.seed))


if __name__ == '__main__':
	main()  # invoke sampler
