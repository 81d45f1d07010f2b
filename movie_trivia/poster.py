"""
Poster questions.
A movie's poster is looked up by its IMDb id; the probe that does the lookup is injected
so the generator can run against the local assets folder, a web server or a fake in tests.
"""

import asyncio
from pathlib import Path
from typing import Optional, Sequence

import requests
from loguru import logger

from .distractors import assemble_choices, select_distractors
from .errors import InsufficientCandidatesError, MissingPosterError
from .generator_base import AsyncQuestionGenerator
from .models import Question
from .normalization import clean_display_name
from .sampling import unique_by

MIN_POSTER_CANDIDATES = 4


class PosterProbe:
	"""Resolves an IMDb id to a poster path, or None when there is no poster."""

	async def find(self, imdb: str) -> Optional[str]:
		raise NotImplementedError


class LocalPosterProbe(PosterProbe):
	"""Looks for `<directory>/<imdb>.<ext>` on disk and reports it under `url_prefix`."""

	def __init__(self, directory: str, url_prefix: str = '/assets/posters', extensions: Sequence[str] = ('jpg', 'jpeg', 'png')):
		self.directory = Path(directory)
		self.url_prefix = url_prefix.rstrip('/')
		self.extensions = tuple(extensions)

	async def find(self, imdb: str) -> Optional[str]:
		for ext in self.extensions:
			candidate = self.directory / f"{imdb}.{ext}"
			if await asyncio.to_thread(candidate.is_file):
				return f"{self.url_prefix}/{imdb}.{ext}"
		return None


class HttpPosterProbe(PosterProbe):
	"""Issues HEAD requests against a static file server."""

	def __init__(self, base_url: str, extensions: Sequence[str] = ('jpg', 'jpeg', 'png'), timeout: float = 3.0):
		self.base_url = base_url.rstrip('/')
		self.extensions = tuple(extensions)
		self.timeout = timeout

	async def find(self, imdb: str) -> Optional[str]:
		for ext in self.extensions:
			url = f"{self.base_url}/{imdb}.{ext}"
			try:
				response = await asyncio.to_thread(requests.head, url, timeout=self.timeout)
			except requests.RequestException as e:
				logger.debug(f"[Poster] HEAD {url} failed: {e}")
				continue
			if response.ok:
				return url
		return None


class FindMovieByPosterGenerator(AsyncQuestionGenerator):
	category = 'Find Movie by Poster'

	def __init__(self, context, probe: Optional[PosterProbe] = None):
		super().__init__(context)
		self.probe = probe

	async def _attempt(self, mode: str) -> Question:
		if self.probe is None:
			raise MissingPosterError("No poster probe configured")

		eligible = self.eligible_movies(mode)
		pool = self.history.posters.fresh_pool(eligible, key=lambda m: m.movie_imdb, minimum=MIN_POSTER_CANDIDATES)
		if len(pool) < MIN_POSTER_CANDIDATES:
			raise InsufficientCandidatesError(f"Only {len(pool)} movies available for posters")

		shuffled = list(pool)
		self.rng.shuffle(shuffled)

		for movie in shuffled:
			poster_path = await self._probe(movie.movie_imdb)
			if poster_path is None:
				logger.debug(f"[Poster] No poster for {movie.display_title} ({movie.movie_imdb})")
				continue

			title = clean_display_name(movie.movie_title).lower()
			wrong_pool = unique_by(
				[
					m for m in pool
					if m.movie_imdb != movie.movie_imdb
					and clean_display_name(m.movie_title).lower() != title
				],
				key=lambda m: m.key,
			)
			try:
				wrong = select_distractors(self.rng, wrong_pool)
				correct_answer = movie.display_title
				choices = assemble_choices(self.rng, correct_answer, [m.display_title for m in wrong])
			except InsufficientCandidatesError as e:
				# DuplicateChoiceError included: try the next poster
				logger.debug(f"[Poster] Skipping {movie.display_title}: {e}")
				continue

			self.history.posters.push(movie.movie_imdb)
			logger.debug(f"[Poster] {correct_answer} -> {poster_path}")
			return Question(
				question='Which movie is shown in this poster?',
				poster_path=poster_path,
				choices=choices,
				correct_answer=correct_answer,
				explanation=f"This is the movie poster for {correct_answer}.",
			)

		logger.warning(f"[Poster] No usable poster among {len(shuffled)} candidates, clearing poster history")
		self.history.posters.clear()
		raise MissingPosterError(f"No poster found among {len(shuffled)} {mode} candidates")

	async def _probe(self, imdb: str) -> Optional[str]:
		try:
			return await asyncio.wait_for(self.probe.find(imdb), timeout=self.config.poster_probe_timeout)
		except asyncio.TimeoutError:
			logger.warning(f"[Poster] Probe timed out for {imdb}")
			return None
		except Exception as e:
			# an unreachable poster source means no poster for this movie
			logger.warning(f"[Poster] Probe failed for {imdb}: {e!r}")
			return None
