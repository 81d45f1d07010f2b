"""
Tests for EngineConfig and DataConfig, including MOVIE_TRIVIA_* environment overrides.
"""

import os

import pytest

from movie_trivia.config import DataConfig, EngineConfig


def test_defaults_are_valid():
	config = EngineConfig()
	assert config.validate()
	assert config.max_attempts == 20
	assert config.oscar_min_year == 1970
	assert config.poster_extensions == ('jpg', 'jpeg', 'png')


def test_engine_config_from_env(monkeypatch):
	monkeypatch.setenv('MOVIE_TRIVIA_MAX_ATTEMPTS', '7')
	monkeypatch.setenv('MOVIE_TRIVIA_OSCAR_RECENT_BIAS', '0.5')
	monkeypatch.setenv('MOVIE_TRIVIA_POSTER_EXTENSIONS', 'webp, png')
	monkeypatch.setenv('MOVIE_TRIVIA_POSTER_DIR', '/srv/posters')

	config = EngineConfig.from_env()

	assert config.max_attempts == 7
	assert config.oscar_recent_bias == 0.5
	assert config.poster_extensions == ('webp', 'png')
	assert config.poster_dir == '/srv/posters'
	assert config.mix_slot_attempts == 3


def test_invalid_values_are_rejected(monkeypatch):
	with pytest.raises(ValueError):
		EngineConfig(max_attempts=0).validate()
	with pytest.raises(ValueError):
		EngineConfig(oscar_recent_bias=1.5).validate()
	with pytest.raises(ValueError):
		EngineConfig(poster_extensions=()).validate()
	with pytest.raises(ValueError):
		EngineConfig(max_sessions=0).validate()

	monkeypatch.setenv('MOVIE_TRIVIA_KEYWORD_HISTORY', '0')
	with pytest.raises(ValueError):
		EngineConfig.from_env()


def test_data_config_paths(monkeypatch):
	monkeypatch.setenv('MOVIE_TRIVIA_DATA_DIR', 'exports')
	monkeypatch.setenv('MOVIE_TRIVIA_MOVIE_FILES', 'a.json,b.jsonl')

	config = DataConfig.from_env()

	assert config.movie_paths() == (os.path.join('exports', 'a.json'), os.path.join('exports', 'b.jsonl'))
	assert config.oscar_path() == os.path.join('exports', 'oscars.json')
