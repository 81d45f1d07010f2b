"""
Tests for the difficulty filter, the history trackers, sampling helpers and name normalization.
"""

from random import Random

import pytest

from movie_trivia.config import EngineConfig
from movie_trivia.difficulty import filter_by_difficulty, is_allowed, normalize_mode
from movie_trivia.errors import InsufficientCandidatesError
from movie_trivia.history import RELAX_HALF, HistoryTracker, SessionHistory
from movie_trivia.normalization import format_title, is_same_person, movie_key, normalize_name, normalize_unicode
from movie_trivia.sampling import prefer_recent, unique_by, weighted_pick_excluding


# Difficulty

def test_difficulty_tiers():
	assert is_allowed('Easy', 'easy')
	assert not is_allowed('Hard', 'easy')
	assert is_allowed('Hard', 'hard')
	assert is_allowed('Easy', 'hard')
	assert not is_allowed(None, 'easy')
	assert not is_allowed(None, 'hard')


def test_normalize_mode():
	assert normalize_mode(' Hard ') == 'hard'
	with pytest.raises(ValueError):
		normalize_mode('medium')
	with pytest.raises(ValueError):
		normalize_mode('')


def test_filter_by_difficulty_with_custom_label():
	items = [('a', 'Easy'), ('b', 'Hard'), ('c', None)]
	assert filter_by_difficulty(items, 'easy', label_of=lambda i: i[1]) == [('a', 'Easy')]
	assert filter_by_difficulty(items, 'hard', label_of=lambda i: i[1]) == [('a', 'Easy'), ('b', 'Hard')]


# History

def test_history_evicts_oldest():
	tracker = HistoryTracker('test', capacity=3)
	for item in 'abcd':
		tracker.push(item)
	assert tracker.items() == ['b', 'c', 'd']
	assert 'a' not in tracker
	assert tracker.recent(2) == ['c', 'd']
	assert tracker.recent(0) == []


def test_trim_keeps_newest():
	tracker = HistoryTracker('test', capacity=10)
	for item in range(6):
		tracker.push(item)
	tracker.trim(2)
	assert tracker.items() == [4, 5]


def test_discard_forgets_every_occurrence():
	tracker = HistoryTracker('test', capacity=10)
	for item in 'abacd':
		tracker.push(item)
	tracker.discard('a')
	assert tracker.items() == ['b', 'c', 'd']
	tracker.discard('z')
	assert len(tracker) == 3


def test_fresh_pool_clears_when_exhausted():
	tracker = HistoryTracker('test', capacity=5)
	tracker.push(1)
	tracker.push(2)
	assert tracker.fresh_pool([1, 2, 3], key=lambda x: x) == [3]
	assert tracker.fresh_pool([1, 2], key=lambda x: x) == [1, 2]
	assert len(tracker) == 0


def test_fresh_pool_half_relaxation():
	tracker = HistoryTracker('test', capacity=10, relax=RELAX_HALF)
	for item in range(4):
		tracker.push(item)
	pool = tracker.fresh_pool(list(range(5)), key=lambda x: x, minimum=3)
	assert pool == [0, 1, 4]  # the two oldest were forgotten
	assert tracker.items() == [2, 3]


def test_pick_fresh_records_and_raises_on_empty():
	rng = Random(1)
	tracker = HistoryTracker('test', capacity=5)
	picked = tracker.pick_fresh(rng, ['x', 'y'], key=lambda v: v)
	assert picked in tracker
	with pytest.raises(InsufficientCandidatesError):
		tracker.pick_fresh(rng, [], key=lambda v: v)


def test_session_history_clear():
	history = SessionHistory(EngineConfig())
	history.co_actor.push('nm1')
	history.oscar_types.push('winnerByYear')
	history.chain.reset(origin='nm1')
	history.chain.used.add('nm1')
	history.clear()
	assert all(len(t) == 0 for t in history.trackers())
	assert history.chain.origin is None
	assert history.chain.used == set()
	assert history.posters.capacity == 200
	assert history.keywords.relax == RELAX_HALF


# Sampling

def test_weighted_pick_skips_recent():
	rng = Random(3)
	weights = {'a': 1, 'b': 1, 'c': 1}
	for _ in range(20):
		name, fell_back = weighted_pick_excluding(rng, weights, recent=['a', 'b'])
		assert name == 'c'
		assert not fell_back


def test_weighted_pick_falls_back_and_honours_bans():
	rng = Random(3)
	weights = {'a': 1, 'b': 1}
	name, fell_back = weighted_pick_excluding(rng, weights, recent=['a', 'b'], banned=['a'])
	assert (name, fell_back) == ('b', True)
	assert weighted_pick_excluding(rng, weights, recent=[], banned=['a', 'b']) == (None, True)


def test_weighted_pick_follows_weights():
	rng = Random(11)
	counts = {'heavy': 0, 'light': 0}
	for _ in range(2000):
		name, _ = weighted_pick_excluding(rng, {'heavy': 9, 'light': 1}, recent=[])
		counts[name] += 1
	assert counts['heavy'] > counts['light'] * 4


def test_prefer_recent():
	years = [1975, 1985, 1995, 2005]
	always = prefer_recent(Random(0), years, year_of=lambda y: y, min_year=1990, probability=1.0)
	never = prefer_recent(Random(0), years, year_of=lambda y: y, min_year=1990, probability=0.0)
	assert always == [1995, 2005]
	assert never == years
	assert prefer_recent(Random(0), years, lambda y: y, 1990, 1.0, minimum=3) == years


def test_unique_by_keeps_first():
	assert unique_by(['A', 'a', 'b'], key=str.lower) == ['A', 'b']


# Normalization

def test_unicode_and_name_normalization():
	assert normalize_unicode('Penélope Cruz') == 'Penelope Cruz'
	assert normalize_name('  Jean - Louis   Trintignant ') == 'jean louis trintignant'
	assert is_same_person('Daniel Day-Lewis', 'daniel day lewis')
	assert is_same_person('Alfonso Cuarón', 'Alfonso Cuaron')
	assert not is_same_person('Tom Hanks', 'Tom Hardy')
	assert normalize_name(None) == ''


def test_movie_identity_and_titles():
	assert movie_key(' Titanic ', 1997) == movie_key('titanic', 1997)
	assert movie_key('Titanic', 1997) != movie_key('Titanic', 1953)
	assert format_title('Titanic', 1997) == 'Titanic (1997)'
	assert format_title('Titanic', None) == 'Titanic'
