"""
Academy Award questions.

Twelve question types are drawn with fixed weights; the last few types asked are skipped
so a session cycles through the catalogue. Every type narrows the records to ceremonies
from `oscar_min_year` on and prefers recent ceremonies without making that a hard filter.
"""

from typing import Callable, Dict, List, Optional

from loguru import logger

from .difficulty import normalize_mode
from .distractors import WRONG_ANSWER_COUNT, assemble_choices, select_distractors
from .errors import GenerationError, InsufficientCandidatesError
from .generator_base import QuestionGenerator
from .models import OscarRecord, Question
from .normalization import clean_display_name, format_title, is_same_person, normalize_name
from .oscar_stats import (
	ANIMATED_FEATURE,
	BEST_PICTURE,
	COMMON_CATEGORIES,
	LEAD_CATEGORIES,
	PERSON_CATEGORIES,
	SUPPORTING_CATEGORIES,
	VISUAL_EFFECTS,
	display_category,
	film_key,
	film_nomination_counts,
	has_clear_leader,
	person_stats,
	plural,
	supporting_label,
	wins_by_year,
)
from .sampling import prefer_recent, unique_by, weighted_pick_excluding

SUB_TYPE_WEIGHTS = {
	'winnerByYear': 15,
	'bestPictureByYear': 12,
	'mostOscars': 10,
	'mostNominationsComparison': 8,
	'neverWonOscar': 8,
	'firstNomination': 8,
	'movieWinCategory': 12,
	'visualEffectsWinner': 9,
	'mostOscarsInYear': 8,
	'supportingActorByMovie': 10,
	'movieForSupportingActor': 10,
	'animatedFeatureWinner': 9,
}

ANIMATED_MIN_YEAR = 2001  # first ceremony with the category
ANIMATED_RECENT_YEAR = 2010
MIN_COMPARISON_NOMINATIONS = 5
MOST_OSCARS_RUNNERS_UP = 6
PEOPLE_HISTORY_TRIM = 6
NEARBY_YEARS = 5  # first-nomination distractors
SUPPORTING_WINDOW = 10  # movie-for-supporting-actor distractors


def _person_of(record: OscarRecord) -> str:
	return clean_display_name(record.names)


def _film_of(record: OscarRecord) -> str:
	return clean_display_name(record.film)


def _title_key(title: Optional[str]) -> str:
	return (title or '').strip().lower()


class OscarQuestionGenerator(QuestionGenerator):
	category = 'Oscar Question'

	def __init__(self, context):
		super().__init__(context)
		oscars = context.oscars
		self.records: List[OscarRecord] = [r for r in oscars.records if r.year] if oscars else []
		self._builders: Dict[str, Callable[[], Question]] = {
			'winnerByYear': self._winner_by_year,
			'bestPictureByYear': self._best_picture_by_year,
			'mostOscars': self._most_oscars,
			'mostNominationsComparison': self._most_nominations_comparison,
			'neverWonOscar': self._never_won_oscar,
			'firstNomination': self._first_nomination,
			'movieWinCategory': self._movie_win_category,
			'visualEffectsWinner': self._visual_effects_winner,
			'mostOscarsInYear': self._most_oscars_in_year,
			'supportingActorByMovie': self._supporting_actor_by_movie,
			'movieForSupportingActor': self._movie_for_supporting_actor,
			'animatedFeatureWinner': self._animated_feature_winner,
		}

	def generate(self, difficulty: str, sub_type: Optional[str] = None) -> Question:
		# Oscar records carry no difficulty tier; the mode is only validated
		normalize_mode(difficulty)  # raises ValueError for unknown modes
		if not self.records:
			raise GenerationError("Oscar data not available")
		if sub_type is not None:
			if sub_type not in self._builders:
				raise ValueError(f"Unknown Oscar question type: {sub_type}")
			question = self._retry(self._builders[sub_type], f"Oscar:{sub_type}")
			self.history.oscar_types.push(sub_type)
			return question

		types = self.history.oscar_types  # recently asked question types
		banned = set()  # types that exhausted their retries in this call
		while True:
			recent = types.recent(self.config.oscar_type_window)  # skip the last few types
			name, fell_back = weighted_pick_excluding(self.rng, SUB_TYPE_WEIGHTS, recent, banned)
			if name is None:
				raise GenerationError("No Oscar question type could be generated")
			if fell_back:
				types.trim(self.config.oscar_type_trim)  # window emptied the pool
			try:
				question = self._retry(self._builders[name], f"Oscar:{name}")
			except GenerationError as e:
				logger.warning(f"[Oscar] Type '{name}' failed, trying another: {e}")
				banned.add(name)
				continue
			types.push(name)  # only successful types count as asked
			logger.debug(f"[Oscar] {name}: {question.question}")
			return question

	# Helpers

	def _since(self, min_year: Optional[int] = None) -> List[OscarRecord]:
		floor = self.config.oscar_min_year if min_year is None else min_year
		return [r for r in self.records if r.year >= floor]

	def _biased(self, items, year_of, recent_year: Optional[int] = None, minimum: int = 1):
		return prefer_recent(
			self.rng, items, year_of,
			self.config.oscar_recent_year if recent_year is None else recent_year,
			self.config.oscar_recent_bias,
			minimum,
		)

	def _nominees_then_winners(self, category: str, year: int, value_of, key_of, exclude_key) -> List[str]:
		"""Same-year nominees first; winners from other years only when those run short."""
		same_year, other_years = [], []
		for record in self.records:
			if record.category != category:
				continue
			value = value_of(record)
			if not value or key_of(value) == exclude_key:
				continue
			if record.year == year and not record.is_winner:
				same_year.append(value)
			elif record.year != year and record.is_winner:
				other_years.append(value)
		pool = unique_by(same_year, key=key_of)
		if len(pool) < WRONG_ANSWER_COUNT:
			pool = unique_by(pool + other_years, key=key_of)
		return pool

	# Question types

	def _winner_by_year(self) -> Question:
		category = self.rng.choice(LEAD_CATEGORIES)
		label = display_category(category)
		years = sorted({r.year for r in self._since() if r.category == category and r.is_winner and r.names})
		pool = self.history.oscar_years.fresh_pool(years, key=lambda y: y)
		if not pool:
			raise InsufficientCandidatesError(f"No {label} winners")
		year = self.rng.choice(self._biased(pool, year_of=lambda y: y))  # recent ceremonies preferred

		winner = next(r for r in self.records if r.year == year and r.category == category and r.is_winner and r.names)
		name = _person_of(winner)
		wrong_pool = self._nominees_then_winners(category, year, _person_of, normalize_name, normalize_name(name))
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, name, wrong)

		self.history.oscar_years.push(year)
		return Question(
			question=f"Who won the Oscar for {label} in {year}?",
			choices=choices,
			correct_answer=name,
			explanation=f'{name} won the Oscar for {label} in {year} for "{winner.film}".',
		)

	def _film_winner_by_year(self, category: str, min_year: int, recent_year: int, question: str, explanation: str) -> Question:
		winners = [r for r in self._since(min_year) if r.category == category and r.is_winner and r.film]
		pool = self.history.oscar_years.fresh_pool(winners, key=lambda r: r.year)
		if not pool:
			raise InsufficientCandidatesError(f"No {display_category(category)} winners")
		winner = self.rng.choice(self._biased(pool, year_of=lambda r: r.year, recent_year=recent_year))

		film = _film_of(winner)  # display title of the winning film
		wrong_pool = self._nominees_then_winners(category, winner.year, _film_of, _title_key, _title_key(film))
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, film, wrong)

		self.history.oscar_years.push(winner.year)
		return Question(
			question=question.format(year=winner.year),
			choices=choices,
			correct_answer=film,
			explanation=explanation.format(film=film, year=winner.year),
		)

	def _best_picture_by_year(self) -> Question:
		return self._film_winner_by_year(
			BEST_PICTURE, self.config.oscar_min_year, self.config.oscar_recent_year,
			'Which film won the Oscar for Best Picture in {year}?',
			'"{film}" won the Academy Award for Best Picture in {year}, beating other nominees in the category.',
		)

	def _visual_effects_winner(self) -> Question:
		return self._film_winner_by_year(
			VISUAL_EFFECTS, self.config.oscar_min_year, self.config.oscar_recent_year,
			'Which film won the Oscar for Best Visual Effects in {year}?',
			'"{film}" won the Academy Award for Best Visual Effects in {year}.',
		)

	def _animated_feature_winner(self) -> Question:
		return self._film_winner_by_year(
			ANIMATED_FEATURE, ANIMATED_MIN_YEAR, ANIMATED_RECENT_YEAR,
			'Which animated feature film won the Oscar for Best Animated Feature Film in {year}?',
			'"{film}" won the Academy Award for Best Animated Feature Film in {year}.',
		)

	def _movie_win_category(self) -> Question:
		wins = [r for r in self._since() if r.is_winner and r.film]
		pool = self.history.oscar_films.fresh_pool(wins, key=lambda r: film_key(r.film, r.year))
		if not pool:
			raise InsufficientCandidatesError("No winning films")
		chosen = self.rng.choice(self._biased(pool, year_of=lambda r: r.year))
		key = film_key(chosen.film, chosen.year)

		# Every category the film won that year is excluded from the wrong answers
		won = unique_by(
			[r.category for r in self.records if r.is_winner and film_key(r.film, r.year) == key],
			key=lambda c: c,
		)
		correct = display_category(self.rng.choice(won))
		won_labels = {display_category(c) for c in won}
		wrong_pool = unique_by(
			[display_category(c) for c in COMMON_CATEGORIES if display_category(c) not in won_labels],
			key=lambda c: c,
		)
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, correct, wrong)

		self.history.oscar_films.push(key)
		film = _film_of(chosen)
		if len(won) > 1:
			tally = f"The film won a total of {len(won)} Oscars that year."
		else:
			tally = "This was the film's only Oscar win that year."
		return Question(
			question=f'In which category did "{film}" ({chosen.year}) win an Oscar?',
			choices=choices,
			correct_answer=correct,
			explanation=f'"{film}" ({chosen.year}) won the Academy Award for {correct}. {tally}',
		)

	def _most_oscars(self) -> Question:
		people = self.history.oscar_people
		winners = [r for r in self._since() if r.is_winner]

		# Categories with enough winners and a single leader
		viable = {}
		for category in PERSON_CATEGORIES:
			ranked = sorted(person_stats(winners, category).values(), key=lambda p: p.wins, reverse=True)
			if len(ranked) >= WRONG_ANSWER_COUNT + 1 and has_clear_leader([p.wins for p in ranked]):
				viable[category] = ranked
		if not viable:
			raise InsufficientCandidatesError("No category with a clear Oscar leader")

		fresh = [c for c in viable if viable[c][0].key not in people]
		if not fresh:
			people.trim(PEOPLE_HISTORY_TRIM)
			fresh = [c for c in viable if viable[c][0].key not in people]
		if not fresh:
			# every leader was asked recently; forget them
			for ranked in viable.values():
				people.discard(ranked[0].key)
			fresh = list(viable)
			logger.debug("[Oscar] All category leaders asked recently, history relaxed")

		category = self.rng.choice(fresh)
		label = display_category(category)
		ranked = viable[category]
		top = ranked[0]
		runners_up = [p for p in ranked if p.wins < top.wins][:MOST_OSCARS_RUNNERS_UP]
		wrong = select_distractors(self.rng, runners_up)
		choices = assemble_choices(self.rng, top.display_name, [p.display_name for p in wrong])

		self.history.oscar_people.push(top.key)
		return Question(
			question=f"Which person has won the most Oscars in the {label} category?",
			choices=choices,
			correct_answer=top.display_name,
			explanation=f"{top.display_name} has won {plural(top.wins, 'Oscar')} for {label} for: {', '.join(top.film_titles())}.",
		)

	def _most_nominations_comparison(self) -> Question:
		films = [
			f for f in film_nomination_counts(self.records, self.config.oscar_min_year)
			if f.nominations >= MIN_COMPARISON_NOMINATIONS
		]
		films = self._biased(films, year_of=lambda f: f.year, minimum=WRONG_ANSWER_COUNT + 1)
		if len(films) < WRONG_ANSWER_COUNT + 1:
			raise InsufficientCandidatesError("Too few heavily nominated films")

		picked = self.rng.sample(films, WRONG_ANSWER_COUNT + 1)  # four films to compare
		if not has_clear_leader([f.nominations for f in picked]):
			raise InsufficientCandidatesError("Tie for most nominations")
		top = max(picked, key=lambda f: f.nominations)
		choices = assemble_choices(self.rng, top.display_title, [f.display_title for f in picked if f is not top])

		categories = [display_category(c) for c in unique_by(top.categories, key=lambda c: c)]
		more = ', and others' if len(categories) > 5 else ''
		return Question(
			question='Which of these films received the most Oscar nominations?',
			choices=choices,
			correct_answer=top.display_title,
			explanation=(
				f'"{top.film}" ({top.year}) received {top.nominations} Oscar nominations '
				f'({top.wins} wins and {top.other_nominations} additional nominations) '
				f"across categories including: {', '.join(categories[:5])}{more}."
			),
		)

	def _never_won_oscar(self) -> Question:
		category = self.rng.choice(PERSON_CATEGORIES)
		label = display_category(category)
		stats = person_stats(self.records, category)  # nominations per person
		never_won = [p for p in stats.values() if p.wins == 0 and p.nominations >= 2]
		pool = self.history.oscar_people.fresh_pool(never_won, key=lambda p: p.key)
		if not pool:
			raise InsufficientCandidatesError(f"No repeat {label} nominees without a win")

		most = max(p.nominations for p in pool)
		person = self.rng.choice([p for p in pool if p.nominations == most])
		winners = [p.display_name for p in stats.values() if p.wins > 0]
		wrong = select_distractors(self.rng, winners)
		choices = assemble_choices(self.rng, person.display_name, wrong)

		self.history.oscar_people.push(person.key)
		films = person.film_titles()
		more = ', and others' if len(films) > 3 else ''
		return Question(
			question=f"Which of the following has never won an Oscar in the {label} category?",
			choices=choices,
			correct_answer=person.display_name,
			explanation=(
				f"{person.display_name} has {plural(person.nominations, 'Oscar nomination')} for {label} "
				f"but has never won. Nominations were for: {', '.join(films[:3])}{more}."
			),
		)

	def _first_nomination(self) -> Question:
		category = self.rng.choice(PERSON_CATEGORIES)
		label = display_category(category)
		stats = person_stats([r for r in self.records if r.film], category)
		people = [p for p in stats.values() if p.nominations >= 2]
		pool = self.history.oscar_people.fresh_pool(people, key=lambda p: p.key)
		if not pool:
			raise InsufficientCandidatesError(f"No repeat {label} nominees")

		person = self.rng.choice(pool)
		ordered = person.by_year()  # oldest nomination first
		first = ordered[0]
		if ordered[1].year == first.year:
			raise InsufficientCandidatesError(f"{person.display_name} has several nominations in their first year")

		correct = format_title(_film_of(first), first.year)
		own_titles = {_title_key(r.film) for r in ordered}
		later = [format_title(_film_of(r), r.year) for r in ordered[1:]]
		nearby = [
			format_title(_film_of(r), r.year) for r in self.records
			if r.category == category and r.film
			and abs(r.year - first.year) <= NEARBY_YEARS
			and _title_key(r.film) not in own_titles
		]
		wrong_pool = [t for t in unique_by(later + nearby, key=lambda t: t) if t != correct]
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, correct, wrong)

		self.history.oscar_people.push(person.key)
		return Question(
			question=f"For which film did {person.display_name} receive their first Oscar nomination in the {label} category?",
			choices=choices,
			correct_answer=correct,
			explanation=(
				f'{person.display_name} received their first Oscar nomination for {label} in {first.year} '
				f'for "{_film_of(first)}". They have since received '
				f"{plural(person.nominations - 1, 'additional nomination')} in this category."
			),
		)

	def _most_oscars_in_year(self) -> Question:
		yearly = wins_by_year(self.records, self.config.oscar_min_year)  # year -> films by wins
		eligible = sorted(
			year for year, films in yearly.items()
			if len(films) >= WRONG_ANSWER_COUNT + 1
			and films[0].wins >= 2
			and has_clear_leader([f.wins for f in films])
		)
		pool = self.history.oscar_years.fresh_pool(eligible, key=lambda y: y)
		if not pool:
			raise InsufficientCandidatesError("No ceremony with a clear most-awarded film")
		year = self.rng.choice(self._biased(pool, year_of=lambda y: y))  # recent ceremonies preferred

		films = yearly[year]
		top = films[0]
		wrong_pool = unique_by([_film_of(f) for f in films[1:]], key=_title_key)
		wrong = select_distractors(self.rng, wrong_pool)
		film = _film_of(top)
		choices = assemble_choices(self.rng, film, wrong)

		self.history.oscar_years.push(year)
		return Question(
			question=f"In {year}, which film won the most Oscars overall?",
			choices=choices,
			correct_answer=film,
			explanation=(
				f'"{film}" won {plural(top.wins, "Oscar")} in {year}, winning in the following categories: '
				f"{', '.join(display_category(c) for c in top.categories)}."
			),
		)

	def _supporting_actor_by_movie(self) -> Question:
		category = self.rng.choice(SUPPORTING_CATEGORIES)
		wins = [r for r in self._since() if r.category == category and r.is_winner and r.film and r.names]
		pool = self.history.oscar_films.fresh_pool(wins, key=lambda r: film_key(r.film, r.year))
		if not pool:
			raise InsufficientCandidatesError(f"No {display_category(category)} winners")
		win = self.rng.choice(self._biased(pool, year_of=lambda r: r.year))

		name = _person_of(win)
		wrong_pool = unique_by(
			[
				_person_of(r) for r in self.records
				if r.category == category and r.is_winner and r.names
				and not is_same_person(r.names, win.names)
				and _title_key(r.film) != _title_key(win.film)
			],
			key=normalize_name,
		)
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, name, wrong)

		self.history.oscar_films.push(film_key(win.film, win.year))
		role = supporting_label(category)
		film = _film_of(win)
		return Question(
			question=f'Who won the Oscar for Best {role} in "{film}" ({win.year})?',
			choices=choices,
			correct_answer=name,
			explanation=f'{name} won the Academy Award for Best {role} for their performance in "{film}" ({win.year}).',
		)

	def _movie_for_supporting_actor(self) -> Question:
		wins = [
			r for r in self._since()
			if r.category in SUPPORTING_CATEGORIES and r.is_winner and r.film and r.names
		]
		pool = self.history.oscar_people.fresh_pool(wins, key=lambda r: normalize_name(r.names))
		if not pool:
			raise InsufficientCandidatesError("No supporting role winners")
		win = self.rng.choice(self._biased(pool, year_of=lambda r: r.year))

		correct = format_title(_film_of(win), win.year)
		wrong_pool = unique_by(
			[
				format_title(_film_of(r), r.year) for r in self.records
				if r.category == win.category and r.is_winner and r.film
				and _title_key(r.film) != _title_key(win.film)
				and not is_same_person(r.names, win.names)
				and abs(r.year - win.year) <= SUPPORTING_WINDOW
			],
			key=lambda t: t,
		)
		wrong = select_distractors(self.rng, wrong_pool)
		choices = assemble_choices(self.rng, correct, wrong)

		self.history.oscar_people.push(normalize_name(win.names))
		name = _person_of(win)
		role = supporting_label(win.category)
		return Question(
			question=f"For which movie did {name} win the Oscar for Best {role}?",
			choices=choices,
			correct_answer=correct,
			explanation=f'{name} won the Academy Award for Best {role} for their performance in "{_film_of(win)}" ({win.year}).',
		)
