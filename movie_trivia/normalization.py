"""
Text normalization helpers.
Unicode folding, person-name equality and movie identity keys shared by every generator.
"""

import re  # hyphen/space collapsing
import unicodedata  # NFD decomposition
from typing import Optional, Tuple

_HYPHEN_RUN = re.compile(r'\s*-\s*')
_SPACE_RUN = re.compile(r'\s+')


def normalize_unicode(text: Optional[str]) -> str:
	"""Decompose to NFD and drop combining marks ("Penélope" -> "Penelope")."""
	if not text:
		return ''
	decomposed = unicodedata.normalize('NFD', text)
	return ''.join(ch for ch in decomposed if not unicodedata.combining(ch))


def clean_display_name(name: Optional[str]) -> str:
	"""Display form keeps the original characters, only trimmed."""
	if not name:
		return ''
	return name.strip()


def normalize_name(name: Optional[str]) -> str:
	"""
	Comparison key for person names.
	Folds accents, treats hyphens and spaces alike, collapses whitespace and lowercases,
	so "Jean-Louis Trintignant" and "Jean Louis  Trintignant" compare equal.
	"""
	if not name:
		return ''
	folded = normalize_unicode(name)
	folded = _HYPHEN_RUN.sub('-', folded)  # "Jean - Louis" -> "Jean-Louis"
	folded = folded.replace('-', ' ')
	folded = _SPACE_RUN.sub(' ', folded)
	return folded.strip().lower()


def is_same_person(first: Optional[str], second: Optional[str]) -> bool:
	return normalize_name(first) == normalize_name(second)


def movie_key(title: Optional[str], year: Optional[int]) -> Tuple[str, Optional[int]]:
	"""Identity of a movie across rows: lower-cased trimmed title plus year."""
	return ((title or '').strip().lower(), year)


def format_title(title: str, year: Optional[int]) -> str:
	"""Render "Title (Year)", or just the title when the year is unknown."""
	return f"{title} ({year})" if year else title
