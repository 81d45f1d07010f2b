"""
Academy Award categories and aggregate statistics over Oscar records.
People are grouped by their normalized name so spelling variants count as one person.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .models import OscarRecord
from .normalization import clean_display_name, format_title, normalize_name

# Raw category names as exported
BEST_ACTOR = 'Actor in a Leading Role'
BEST_ACTRESS = 'Actress in a Leading Role'
SUPPORTING_ACTOR = 'Actor in a Supporting Role'
SUPPORTING_ACTRESS = 'Actress in a Supporting Role'
DIRECTING = 'Directing'
BEST_PICTURE = 'Best Picture'
ANIMATED_FEATURE = 'Animated Feature Film'
VISUAL_EFFECTS = 'Visual Effects'

CATEGORY_MAPPINGS = {
	BEST_ACTOR: 'Best Actor',
	BEST_ACTRESS: 'Best Actress',
	SUPPORTING_ACTOR: 'Best Supporting Actor',
	SUPPORTING_ACTRESS: 'Best Supporting Actress',
	DIRECTING: 'Best Director',
	BEST_PICTURE: 'Best Picture',
	ANIMATED_FEATURE: 'Best Animated Feature Film',
	VISUAL_EFFECTS: 'Best Visual Effects',
	'Cinematography': 'Best Cinematography',
	'Film Editing': 'Best Film Editing',
	'Sound Mixing': 'Best Sound Mixing',
	'Sound': 'Best Sound',
	'Writing (Original Screenplay)': 'Best Original Screenplay',
	'Writing (Adapted Screenplay)': 'Best Adapted Screenplay',
	'Music (Original Score)': 'Best Original Score',
	'Music (Original Song)': 'Best Original Song',
	'Costume Design': 'Best Costume Design',
	'Makeup and Hairstyling': 'Best Makeup and Hairstyling',
	'Production Design': 'Best Production Design',
	'Art Direction': 'Best Art Direction',
}

LEAD_CATEGORIES = (BEST_ACTOR, BEST_ACTRESS, DIRECTING)
SUPPORTING_CATEGORIES = (SUPPORTING_ACTOR, SUPPORTING_ACTRESS)
PERSON_CATEGORIES = (BEST_ACTOR, BEST_ACTRESS, SUPPORTING_ACTOR, SUPPORTING_ACTRESS, DIRECTING)

# Wrong answers for "in which category did X win"
COMMON_CATEGORIES = [
	BEST_PICTURE,
	BEST_ACTOR,
	BEST_ACTRESS,
	SUPPORTING_ACTOR,
	SUPPORTING_ACTRESS,
	DIRECTING,
	VISUAL_EFFECTS,
	'Cinematography',
	'Film Editing',
	'Sound Mixing',
	'Sound',
	'Writing (Original Screenplay)',
	'Writing (Adapted Screenplay)',
	'Music (Original Score)',
	'Music (Original Song)',
	'Costume Design',
	'Makeup and Hairstyling',
	'Production Design',
	'Art Direction',
	ANIMATED_FEATURE,
]


def display_category(category: str) -> str:
	return CATEGORY_MAPPINGS.get(category, category)


def supporting_label(category: str) -> str:
	return 'Supporting Actor' if 'Actor' in category else 'Supporting Actress'


def film_key(film: Optional[str], year: Optional[int]):
	return ((film or '').strip().lower(), year)


def plural(count: int, word: str) -> str:
	return f"{count} {word}{'s' if count != 1 else ''}"


@dataclass
class PersonStats:
	key: str  # normalized name
	display_name: str  # first-seen spelling
	records: List[OscarRecord] = field(default_factory=list)

	@property
	def nominations(self) -> int:
		return len(self.records)

	@property
	def wins(self) -> int:
		return sum(1 for r in self.records if r.is_winner)

	def film_titles(self) -> List[str]:
		return [format_title(r.film, r.year) for r in self.records if r.film]

	def by_year(self) -> List[OscarRecord]:
		return sorted(self.records, key=lambda r: r.year)


@dataclass
class FilmStats:
	film: str
	year: int
	nominations: int = 0
	wins: int = 0
	categories: List[str] = field(default_factory=list)

	@property
	def display_title(self) -> str:
		return format_title(self.film, self.year)

	@property
	def other_nominations(self) -> int:
		return self.nominations - self.wins


def person_stats(records: Iterable[OscarRecord], category: str) -> Dict[str, PersonStats]:
	"""Nominations per person inside one category, keyed by normalized name."""
	stats: Dict[str, PersonStats] = {}
	for record in records:
		if record.category != category or not record.names:
			continue
		key = normalize_name(record.names)
		if key not in stats:
			stats[key] = PersonStats(key=key, display_name=clean_display_name(record.names))
		stats[key].records.append(record)
	return stats


def film_nomination_counts(records: Iterable[OscarRecord], min_year: int) -> List[FilmStats]:
	"""Nomination and win totals per (film, year), winners counted as nominations too."""
	films: Dict[tuple, FilmStats] = {}
	for record in records:
		if record.year < min_year or not record.film:
			continue
		key = film_key(record.film, record.year)
		if key not in films:
			films[key] = FilmStats(film=record.film, year=record.year)
		stats = films[key]
		stats.nominations += 1
		stats.categories.append(record.category)
		if record.is_winner:
			stats.wins += 1
	return list(films.values())


def wins_by_year(records: Iterable[OscarRecord], min_year: int) -> Dict[int, List[FilmStats]]:
	"""For every ceremony year, the films that won at least once, most wins first."""
	yearly: Dict[int, Dict[tuple, FilmStats]] = {}
	for record in records:
		if record.year < min_year or not record.is_winner or not record.film:
			continue
		films = yearly.setdefault(record.year, {})
		key = film_key(record.film, record.year)
		if key not in films:
			films[key] = FilmStats(film=record.film, year=record.year)
		films[key].wins += 1
		films[key].nominations += 1
		films[key].categories.append(record.category)
	return {
		year: sorted(films.values(), key=lambda f: f.wins, reverse=True)
		for year, films in yearly.items()
	}


def has_clear_leader(counts: List[int]) -> bool:
	"""True when the highest count is held by exactly one entry."""
	if not counts:
		return False
	top = max(counts)
	return counts.count(top) == 1
