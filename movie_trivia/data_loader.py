"""
Data loading module.
Reads the exported movie and Oscar JSON files and turns them into typed records.
"""

# Standard libs for JSON parsing, typing, and paths
import json  # parse JSON documents and JSON lines
from typing import Any, Dict, Iterable, List, Optional, Union  # type hints
from pathlib import Path  # filesystem-safe paths

# Import our record classes used across the project
from .models import CastMember, MovieRecord, OscarDataset, OscarRecord, Person  # structured records

# Console logging
from loguru import logger  # console logger


class DataLoader:
	"""
	Loads movie rows and Oscar records from JSON exports.
	Accepts JSON arrays, {"records": [...]} objects and JSON Lines files.
	"""

	def load_movies(self, filepaths: Union[str, Path, Iterable[Union[str, Path]]]) -> List[MovieRecord]:
		"""
		Load movie rows from one file or from several part files, in order.
		Returns a flat list of MovieRecord objects.
		"""
		if isinstance(filepaths, (str, Path)):  # single path given
			filepaths = [filepaths]

		movies: List[MovieRecord] = []  # accumulator across parts
		for filepath in filepaths:
			part = self.load_movies_from_file(filepath)  # parse one part
			movies.extend(part)  # keep part order
		logger.info(f"[DataLoader] Loaded {len(movies)} movie rows in total.")  # summary
		return movies

	def load_movies_from_file(self, filepath: Union[str, Path]) -> List[MovieRecord]:
		"""Load movie rows from a single JSON or JSONL file."""
		movies = []  # accumulator for parsed rows
		logger.info(f"[DataLoader] Loading movies from {filepath}...")  # log action

		for row_num, data in enumerate(self._read_rows(filepath), 1):  # keep row number for diagnostics
			try:
				movie = self._parse_movie_data(data)  # convert dict -> MovieRecord
			except (KeyError, TypeError, ValueError) as e:
				logger.warning(f"[DataLoader] Skipping movie row {row_num} in {filepath}: {e}")  # malformed row
				continue  # move on
			movies.append(movie)  # collect

		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movie rows from {filepath}.")  # summary
		return movies

	def load_oscars(self, filepath: Union[str, Path]) -> OscarDataset:
		"""Load Oscar records; the export wraps them as {"records": [...]}."""
		records = []
		logger.info(f"[DataLoader] Loading Oscar records from {filepath}...")
		for row_num, data in enumerate(self._read_rows(filepath), 1):
			try:
				records.append(self._parse_oscar_data(data))
			except (KeyError, TypeError, ValueError) as e:
				logger.warning(f"[DataLoader] Skipping Oscar record {row_num}: {e}")
				continue
		logger.info(f"[DataLoader] Successfully loaded {len(records)} Oscar records.")
		return OscarDataset(records=records)

	def _read_rows(self, filepath: Union[str, Path]) -> List[Dict[str, Any]]:
		"""Read a file into a list of dicts regardless of its JSON flavour."""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Data file not found: {filepath}")

		text = filepath.read_text(encoding='utf-8')
		try:
			document = json.loads(text)  # whole-document JSON
		except json.JSONDecodeError:
			return self._read_json_lines(text, filepath)  # fall back to one object per line

		if isinstance(document, dict):
			document = document.get('records', [])  # {"records": [...]} wrapper
		if not isinstance(document, list):
			raise ValueError(f"Unsupported JSON layout in {filepath}")
		return [row for row in document if isinstance(row, dict)]

	def _read_json_lines(self, text: str, filepath: Path) -> List[Dict[str, Any]]:
		rows = []
		for line_num, line in enumerate(text.splitlines(), 1):
			if not line.strip():
				continue
			try:
				rows.append(json.loads(line))
			except json.JSONDecodeError as e:
				logger.warning(f"[DataLoader] Skipping invalid JSON at {filepath}:{line_num}: {e}")
		return rows

	def _parse_movie_data(self, data: Dict) -> MovieRecord:
		"""
		Convert a raw dictionary (camelCase export) into a MovieRecord.
		Performs trimming and safe defaults.
		"""
		title = self._clean(data.get('movieTitle'))
		if not title:
			raise ValueError("missing movieTitle")

		actors = [
			CastMember(
				name=self._clean(actor.get('name')),
				imdb=self._clean(actor.get('imdb')),
				character_name=self._clean(actor.get('characterName')) or None,
				credited=actor.get('credited') if isinstance(actor.get('credited'), bool) else None,
			)
			for actor in (data.get('actors') or [])
			if isinstance(actor, dict)
		]
		directors = [
			Person(name=self._clean(director.get('name')), imdb=self._clean(director.get('imdb')))
			for director in (data.get('directors') or [])
			if isinstance(director, dict)
		]

		return MovieRecord(
			movie_title=title,
			movie_imdb=self._clean(data.get('movieIMDB')),
			year=self._parse_year(data.get('year')),
			difficulty=self._parse_difficulty(data.get('difficulty')),
			reference_actor=self._clean(data.get('referenceActor')) or None,
			reference_actor_imdb=self._clean(data.get('referenceActorIMDB')) or None,
			actors=actors,
			directors=directors,
			keywords=self._parse_keywords(data.get('keywords')),
		)

	def _parse_oscar_data(self, data: Dict) -> OscarRecord:
		year = self._parse_year(data.get('year'))
		if year is None:
			raise ValueError("missing year")
		return OscarRecord(
			year=year,
			category=self._clean(data.get('category')),
			status=self._clean(data.get('status')),
			names=self._clean(data.get('names')),
			film=self._clean(data.get('film')),
		)

	def _clean(self, value) -> str:
		"""Trim strings; None (or any non-string) becomes an empty string."""
		if value is None:
			return ''
		return str(value).strip()

	def _parse_year(self, value) -> Optional[int]:
		if value in (None, ''):
			return None
		return int(value)

	def _parse_difficulty(self, value) -> Optional[str]:
		"""Keep only the two known labels; anything else means "not rated"."""
		label = self._clean(value).capitalize()
		return label if label in ('Easy', 'Hard') else None

	def _parse_keywords(self, value) -> List[str]:
		"""Accept a list or a comma-separated string; drop blanks and duplicates, keep order."""
		if value is None:
			return []
		if isinstance(value, str):
			value = value.split(',')
		keywords: List[str] = []
		seen = set()
		for item in value:
			keyword = self._clean(item)
			if keyword and keyword.lower() not in seen:
				seen.add(keyword.lower())
				keywords.append(keyword)
		return keywords
