"""
Tests for the FastAPI question server.
The startup hook is not triggered (no context manager); data is installed with api.configure().
"""

import pytest
from fastapi.testclient import TestClient

import api
from movie_trivia.config import EngineConfig

from tests.sample_data import MEG_RYAN, TOM_HANKS, sample_movies, sample_oscars


@pytest.fixture
def client(tmp_path):
	config = EngineConfig(max_attempts=50, poster_dir=str(tmp_path / 'posters'))
	api.configure(sample_movies(), sample_oscars(), config, seed=7)
	yield TestClient(api.app)
	api.SESSIONS.clear()


def test_health(client):
	body = client.get('/health').json()
	assert body['status'] == 'ok'
	assert body['engine_ready'] is True
	assert body['movies'] == 20
	assert body['oscar_records'] == len(sample_oscars())


def test_pinned_co_actor(client):
	response = client.get('/questions/co-actor', params={'actor': 'Tom Hanks'})
	assert response.status_code == 200
	body = response.json()
	assert body['correctAnswer'] == 'Meg Ryan'
	assert len(body['choices']) == 4
	assert 'posterPath' not in body


def test_bad_requests(client):
	assert client.get('/questions/bogus').status_code == 400
	assert client.get('/questions/keywords', params={'difficulty': 'medium'}).status_code == 400
	assert client.get('/questions/oscar', params={'sub_type': 'bestCostume'}).status_code == 400
	assert client.get('/questions/chain', params={'current_actor_imdb': 'nm0'}).status_code == 400


def test_oscar_sub_type(client):
	body = client.get('/questions/oscar', params={'sub_type': 'bestPictureByYear'}).json()
	assert body['correctAnswer'] == 'Parasite'


def test_chain_continues_from_actor(client):
	body = client.get('/questions/chain', params={'current_actor_imdb': TOM_HANKS}).json()
	assert body['nextActor'] == {'name': 'Meg Ryan', 'imdb': MEG_RYAN}
	assert body['isNewChain'] is False


def test_keywords_payload(client):
	body = client.get('/questions/keywords', params={'difficulty': 'hard'}).json()
	assert body['keywords']
	assert body['correctAnswer'] in body['choices']


def test_poster_without_assets_is_unavailable(client):
	assert client.get('/questions/poster').status_code == 503


def test_mix_and_reset(client):
	body = client.get('/mix', params={'session': 'alice'}).json()
	assert body['session'] == 'alice'
	categories = {q['category'] for q in body['questions']}
	assert 'Find Movie by Poster' not in categories  # no poster files
	assert 'Oscar Question' in categories

	assert client.post('/sessions/alice/reset').json() == {'session': 'alice', 'reset': True}
	assert client.post('/sessions/nobody/reset').json() == {'session': 'nobody', 'reset': False}


def test_sessions_are_isolated(client):
	client.get('/questions/movie-of-actor', params={'session': 'a'})
	client.get('/questions/movie-of-actor', params={'session': 'b'})
	assert set(api.SESSIONS) == {'a', 'b'}
	assert api.SESSIONS['a'].history is not api.SESSIONS['b'].history
	assert api.SESSIONS['a'].index is api.SESSIONS['b'].index


def test_not_configured():
	api.INDEX = None
	try:
		assert TestClient(api.app).get('/questions/co-actor').status_code == 503
		assert TestClient(api.app).get('/health').json()['engine_ready'] is False
	finally:
		api.configure(sample_movies())


def test_least_recently_used_session_is_evicted(tmp_path):
	config = EngineConfig(max_attempts=50, poster_dir=str(tmp_path / 'posters'), max_sessions=2)
	api.configure(sample_movies(), sample_oscars(), config, seed=7)
	client = TestClient(api.app)
	try:
		for session in ('a', 'b', 'a', 'c'):
			assert client.get('/questions/movie-of-actor', params={'session': session}).status_code == 200
		assert list(api.SESSIONS) == ['a', 'c']
		assert client.get('/health').json()['sessions'] == 2
	finally:
		api.SESSIONS.clear()
