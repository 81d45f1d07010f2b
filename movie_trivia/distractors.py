"""
Distractor selection.
Draws wrong answers from a prepared pool and assembles the shuffled four-choice set.
"""

from collections import defaultdict
from random import Random
from typing import Callable, Dict, Iterable, List, Sequence, TypeVar

from .errors import DuplicateChoiceError, InsufficientCandidatesError

T = TypeVar('T')

WRONG_ANSWER_COUNT = 3


def select_distractors(rng: Random, pool: Sequence[T], k: int = WRONG_ANSWER_COUNT) -> List[T]:
	"""
	Draw `k` distinct items uniformly without replacement.
	The pool must already be difficulty-filtered and exclude the correct answer;
	a short pool is a regeneration signal, never padded.
	"""
	if len(pool) < k:
		raise InsufficientCandidatesError(f"Need {k} distractors, only {len(pool)} available")
	return rng.sample(list(pool), k)


def assemble_choices(rng: Random, correct: str, wrong: Iterable[str]) -> List[str]:
	"""Correct answer plus wrong answers, shuffled; collapsed display strings are rejected."""
	choices = [correct, *wrong]
	if len(set(choices)) != len(choices):
		raise DuplicateChoiceError(f"Duplicate choices after formatting: {choices}")
	rng.shuffle(choices)
	return choices


def keyword_overlap(target: Iterable[str], other: Iterable[str]) -> int:
	"""Number of target keywords that also appear in `other` (case-insensitive exact match)."""
	other_lower = {k.lower() for k in other}
	return sum(1 for k in {t.lower() for t in target} if k in other_lower)


def pick_dissimilar(rng: Random, target_keywords: Sequence[str], candidates: Sequence[T], keywords_of: Callable[[T], Sequence[str]], count: int = WRONG_ANSWER_COUNT) -> List[T]:
	"""
	Pick the `count` candidates sharing the fewest keywords with the target.
	Candidates are bucketed by overlap score; buckets are drained from score 0 upwards,
	drawing randomly inside each bucket.
	"""
	buckets: Dict[int, List[T]] = defaultdict(list)
	for candidate in candidates:
		buckets[keyword_overlap(target_keywords, keywords_of(candidate))].append(candidate)

	picked: List[T] = []
	for score in sorted(buckets):
		needed = count - len(picked)
		if needed <= 0:
			break
		bucket = buckets[score]
		picked.extend(rng.sample(bucket, min(needed, len(bucket))))
	return picked
