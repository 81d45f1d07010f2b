"""
Configuration for the question engine and the data files it reads.
Defaults match the quiz's tuned values; every field can be overridden
through MOVIE_TRIVIA_* environment variables.
"""

import os  # environment overrides
from dataclasses import dataclass, field, fields
from typing import Tuple


def _env(name: str, default, cast=str):
	raw = os.getenv(f"MOVIE_TRIVIA_{name.upper()}")
	if raw is None or raw == '':
		return default
	if cast is tuple:
		return tuple(part.strip() for part in raw.split(',') if part.strip())
	return cast(raw)


@dataclass
class EngineConfig:
	"""Knobs for retries, history sizes, Oscar sampling and poster probing."""
	# Retry budgets
	max_attempts: int = 20  # attempts per generator call
	mix_slot_attempts: int = 3  # attempts per Ultimate Mix slot

	# History capacities (recently used pivots per family)
	co_actor_history: int = 10
	actor_movie_history: int = 10
	director_movie_history: int = 10
	keyword_history: int = 100
	poster_history: int = 200
	oscar_item_history: int = 12
	oscar_type_history: int = 15
	oscar_type_window: int = 5  # last N question types excluded from the next pick
	oscar_type_trim: int = 8  # type history kept when the window empties the pool

	# Oscar sampling
	oscar_min_year: int = 1970
	oscar_recent_year: int = 1990
	oscar_recent_bias: float = 0.85  # probability of preferring records >= oscar_recent_year

	# Keyword questions
	min_keywords: int = 2

	# Poster questions
	poster_dir: str = 'assets/posters'  # where LocalPosterProbe looks
	poster_url_prefix: str = '/assets/posters'  # path reported to the UI
	poster_extensions: Tuple[str, ...] = ('jpg', 'jpeg', 'png')
	poster_probe_timeout: float = 3.0  # seconds per probe

	# HTTP API
	max_sessions: int = 1000  # engines kept alive; the least recently used is evicted

	@classmethod
	def from_env(cls) -> 'EngineConfig':
		values = {}
		for f in fields(cls):
			default = f.default
			cast = type(default)
			values[f.name] = _env(f.name, default, cast)
		config = cls(**values)
		config.validate()
		return config

	def validate(self) -> bool:
		if self.max_attempts < 1:
			raise ValueError(f"max_attempts must be positive, got: {self.max_attempts}")
		if self.mix_slot_attempts < 1:
			raise ValueError(f"mix_slot_attempts must be positive, got: {self.mix_slot_attempts}")
		if self.max_sessions < 1:
			raise ValueError(f"max_sessions must be positive, got: {self.max_sessions}")
		for name in ('co_actor_history', 'actor_movie_history', 'director_movie_history',
					 'keyword_history', 'poster_history', 'oscar_item_history', 'oscar_type_history'):
			if getattr(self, name) < 1:
				raise ValueError(f"{name} must be positive, got: {getattr(self, name)}")
		if not 0.0 <= self.oscar_recent_bias <= 1.0:
			raise ValueError(f"oscar_recent_bias must be within [0, 1], got: {self.oscar_recent_bias}")
		if self.poster_probe_timeout <= 0:
			raise ValueError(f"poster_probe_timeout must be positive, got: {self.poster_probe_timeout}")
		if not self.poster_extensions:
			raise ValueError("poster_extensions cannot be empty")
		return True


@dataclass
class DataConfig:
	"""Location of the exported datasets."""
	data_dir: str = 'data'
	movie_files: Tuple[str, ...] = field(default=(
		'movie_data_part1.json',
		'movie_data_part2.json',
		'movie_data_part3.json',
		'movie_data_part4.json',
	))
	oscar_file: str = 'oscars.json'

	@classmethod
	def from_env(cls) -> 'DataConfig':
		defaults = cls()
		return cls(
			data_dir=_env('data_dir', defaults.data_dir),
			movie_files=_env('movie_files', defaults.movie_files, tuple),
			oscar_file=_env('oscar_file', defaults.oscar_file),
		)

	def movie_paths(self) -> Tuple[str, ...]:
		return tuple(os.path.join(self.data_dir, name) for name in self.movie_files)

	def oscar_path(self) -> str:
		return os.path.join(self.data_dir, self.oscar_file)
