"""
Tests for the movie-backed generators: co-actor, actor <-> movie, director <-> movie and keywords.
"""

import re
from random import Random

import pytest

from movie_trivia.config import EngineConfig
from movie_trivia.engine import QuestionEngine
from movie_trivia.errors import GenerationError
from movie_trivia.validator import validate_question

from tests.sample_data import MEG_RYAN, TOM_HANKS, cast, easy_titles, movie, sample_movies


def make_engine(seed=7, **config):
	return QuestionEngine(sample_movies(), config=EngineConfig(**config), rng=Random(seed))


def easy_actor_names(engine):
	return {a.name for a in engine.index.unique_actors if a.difficulty == 'Easy'}


def cast_names_by_title(engine):
	names = {}
	for movie in engine.movies:
		names.setdefault(movie.display_title, set()).update(a.name for a in movie.actors)
	return names


def wrong_choices(question):
	return [c for c in question.choices if c != question.correct_answer]


# Co-actor

def test_pinned_co_actor_question():
	engine = make_engine()
	question = engine.find_co_actor('easy', actor='Tom Hanks')

	assert question.question == 'Which actor played with Tom Hanks in a movie?'
	assert question.correct_answer == 'Meg Ryan'
	assert question.explanation == "Meg Ryan played with Tom Hanks in: Sleepless in Seattle (1993), You've Got Mail (1998)"
	assert validate_question(question)
	co_stars = engine.index.co_stars_of(TOM_HANKS).co_stars
	for name in wrong_choices(question):
		assert name != 'Tom Hanks'
		assert name not in {c.name for c in co_stars.values()}


def test_pin_by_imdb_id_and_unavailable_pin():
	engine = make_engine(max_attempts=2)
	assert engine.find_co_actor('easy', actor=MEG_RYAN).correct_answer == 'Tom Hanks'
	with pytest.raises(GenerationError):
		engine.find_co_actor('easy', actor='Tilda Swinton')  # a Hard reference actor


def test_easy_mode_only_offers_easy_actors():
	engine = make_engine()
	allowed = easy_actor_names(engine)
	for _ in range(15):
		question = engine.find_co_actor('easy')
		assert validate_question(question)
		assert set(question.choices) <= allowed


def test_hard_mode_reaches_hard_actors():
	engine = make_engine(seed=3)
	seen = set()
	for _ in range(30):
		seen.update(engine.find_actor_in_movie('hard').choices)
	assert seen & {'Tilda Swinton', 'Adam Driver', 'Penélope Cruz', 'Scarlett Johansson'}


# Actor <-> movie

def test_movie_of_actor_pivots_do_not_repeat():
	engine = make_engine()
	prompts = [engine.find_movie_of_actor('easy').question for _ in range(10)]
	assert len(set(prompts)) == 10


def test_movie_of_actor_wrong_answers_outside_filmography():
	engine = make_engine(seed=11)
	titles = easy_titles(engine.movies)
	for _ in range(20):
		question = engine.find_movie_of_actor('easy')
		name = re.match(r'Which movie did (.+) play in\?', question.question).group(1)
		filmography = {m.display_title for m in engine.index.movies_of_actor(engine.index.find_actor(name).imdb)}

		assert question.correct_answer in filmography
		assert set(question.choices) <= titles
		assert not set(wrong_choices(question)) & filmography
		assert question.explanation.startswith(f"{name} played in {question.correct_answer}")


def test_movie_of_actor_explanation_names_character():
	engine = make_engine(seed=2)
	for _ in range(10):
		question = engine.find_movie_of_actor('easy')
		# every Easy row in the sample lists the reference actor's character
		assert re.search(r' as .+\.$', question.explanation)


def test_actor_in_movie_wrong_answers_never_in_cast():
	engine = make_engine(seed=5)
	cast = cast_names_by_title(engine)
	allowed = easy_actor_names(engine)
	for _ in range(20):
		question = engine.find_actor_in_movie('easy')
		title = re.match(r'Which actor played in (.+)\?', question.question).group(1)

		assert question.correct_answer in cast[title]
		assert set(question.choices) <= allowed
		assert not set(wrong_choices(question)) & cast[title]


# Director <-> movie

def test_movie_of_director_answer_belongs_to_director():
	engine = make_engine(seed=13)
	titles = easy_titles(engine.movies)
	for _ in range(10):
		question = engine.find_movie_of_director('easy')
		name = re.match(r'Which movie was directed by (.+)\?', question.question).group(1)
		director = engine.index.find_director(name)
		directed = {m.display_title for m in engine.index.movies_of_director(director.imdb)}

		assert question.correct_answer in directed
		assert set(question.choices) <= titles
		assert not set(wrong_choices(question)) & directed
		assert question.explanation == f"{name} directed {question.correct_answer}"


def test_movie_of_director_pin():
	engine = make_engine(max_attempts=2)
	question = engine.find_movie_of_director('easy', director='Nora Ephron')
	assert question.question == 'Which movie was directed by Nora Ephron?'
	assert question.correct_answer in {'Sleepless in Seattle (1993)', "You've Got Mail (1998)"}
	with pytest.raises(GenerationError):
		engine.find_movie_of_director('hard', director='Steven Spielberg')  # only directs an unrated movie


def test_director_of_movie_excludes_co_directors():
	engine = make_engine(seed=17)
	directors_by_title = {}
	for movie in engine.movies:
		directors_by_title.setdefault(movie.display_title, set()).update(d.name for d in movie.directors)
	for _ in range(20):
		question = engine.find_director_of_movie('easy')
		title = re.match(r'Who directed (.+)\?', question.question).group(1)

		assert question.correct_answer in directors_by_title[title]
		assert not set(wrong_choices(question)) & directors_by_title[title]
		assert 'Jim Jarmusch' not in question.choices


# Keywords

def test_keyword_question_shows_pivot_keywords():
	engine = make_engine(seed=19)
	titles = easy_titles(engine.movies)
	keywords_by_title = {m.display_title: ', '.join(m.keywords) for m in engine.movies}
	for _ in range(10):
		question = engine.find_movie_by_keywords('easy')
		assert question.question == 'Which movie matches these keywords:'
		assert question.keywords == keywords_by_title[question.correct_answer]
		assert set(question.choices) <= titles
		assert question.explanation == f"{question.correct_answer} is characterized by: {question.keywords}."


# Engine

def test_invalid_difficulty_is_rejected():
	engine = make_engine()
	with pytest.raises(ValueError):
		engine.find_co_actor('medium')
	with pytest.raises(ValueError):
		engine.find_movie_by_keywords('')


def test_reset_history():
	engine = make_engine()
	engine.find_co_actor('easy')
	engine.find_movie_of_actor('easy')
	engine.chain_co_actor('easy')
	engine.reset_history()
	assert all(len(t) == 0 for t in engine.history.trackers())
	assert engine.history.chain.origin is None


def test_sessions_sharing_an_index_keep_separate_histories():
	first = make_engine(seed=1)
	second = QuestionEngine(first.movies, config=EngineConfig(), rng=Random(1), index=first.index)
	first.find_movie_of_actor('easy')
	assert len(first.history.movie_of_actor) == 1
	assert len(second.history.movie_of_actor) == 0
	assert second.index is first.index


def test_movie_identity_ignores_row_id_and_title_spelling():
	titanic_reissue = movie(" TITANIC  ", 'tt9999999', 1997, 'Easy', None,
		cast(('Billy Zane', 'nm0000708', 'Cal Hockley')),
		[('James Cameron', 'nm0000116')], ['ship', 'iceberg'])
	movies = sample_movies() + [titanic_reissue]
	engine = QuestionEngine(movies, config=EngineConfig(), rng=Random(8))

	rows = engine.index.rows_for_key(titanic_reissue.key)
	assert {r.movie_imdb for r in rows} == {'tt0120338', 'tt9999999'}
	assert titanic_reissue.display_title == 'TITANIC (1997)'

	titanic_pivots = 0
	for _ in range(20):
		question = engine.find_movie_of_actor('easy')
		assert len({c.strip().lower() for c in question.choices}) == 4
		if question.correct_answer == 'Titanic (1997)':
			titanic_pivots += 1
			assert 'TITANIC (1997)' not in question.choices
	assert titanic_pivots >= 2
