"""
Random selection utilities built on an injected random.Random.
"""

from random import Random
from typing import Callable, Collection, List, Mapping, Optional, Sequence, Tuple, TypeVar

T = TypeVar('T')


def weighted_pick_excluding(rng: Random, weights: Mapping[str, float], recent: Collection[str], banned: Collection[str] = ()) -> Tuple[Optional[str], bool]:
	"""
	Weighted draw over `weights`, skipping names in `recent` and `banned`.
	If the recent-window leaves nothing, only `banned` is applied and the second
	element of the result is True so the caller can trim its history.
	Returns (None, True) when even that pool is empty.
	"""
	available = {name: w for name, w in weights.items() if name not in recent and name not in banned}
	fell_back = False
	if not available:
		available = {name: w for name, w in weights.items() if name not in banned}
		fell_back = True
	if not available:
		return None, True

	name = rng.choices(list(available), weights=list(available.values()), k=1)[0]
	return name, fell_back


def prefer_recent(rng: Random, items: Sequence[T], year_of: Callable[[T], int], min_year: int, probability: float, minimum: int = 1) -> List[T]:
	"""
	Soft bias toward items from `min_year` on.
	With the given probability the recent subset is used, provided it holds at least `minimum` items.
	"""
	items = list(items)
	if rng.random() < probability:
		recent = [item for item in items if year_of(item) >= min_year]
		if len(recent) >= minimum:
			return recent
	return items


def unique_by(items: Sequence[T], key: Callable[[T], object]) -> List[T]:
	"""First occurrence of every key, in order."""
	seen = set()
	result = []
	for item in items:
		k = key(item)
		if k in seen:
			continue
		seen.add(k)
		result.append(item)
	return result
