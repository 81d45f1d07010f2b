"""
Two-tier difficulty policy shared by every generator.
"easy" keeps Easy content only; "hard" adds Hard content on top of it.
Rows without a difficulty are never selectable.
"""

from typing import Callable, Iterable, List, Optional, TypeVar

from .models import EASY, HARD

T = TypeVar('T')

EASY_MODE = 'easy'
HARD_MODE = 'hard'

_ALLOWED = {
	EASY_MODE: frozenset({EASY}),
	HARD_MODE: frozenset({EASY, HARD}),
}


def normalize_mode(difficulty: str) -> str:
	"""Validate a requested mode ("easy" / "hard")."""
	mode = (difficulty or '').strip().lower()
	if mode not in _ALLOWED:
		raise ValueError(f"Unknown difficulty '{difficulty}', expected 'easy' or 'hard'")
	return mode


def is_allowed(label: Optional[str], mode: str) -> bool:
	return label in _ALLOWED[mode]


def filter_by_difficulty(items: Iterable[T], mode: str, label_of: Callable[[T], Optional[str]] = lambda item: item.difficulty) -> List[T]:
	allowed = _ALLOWED[mode]
	return [item for item in items if label_of(item) in allowed]
