"""
Data models for the Movie Trivia engine.
Defines the records consumed by the engine and the questions it produces.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # auto-generates __init__, __repr__, etc.
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional, Tuple  # containers and optional values

from .normalization import clean_display_name, format_title, movie_key, normalize_unicode


# Difficulty labels as they appear in the dataset
EASY = 'Easy'
HARD = 'Hard'

# Oscar record statuses
WINNER = 'Winner'
NOMINEE = 'Nominee'


@dataclass
class Person:
	"""A named person with a stable IMDb identifier (director, chain link, ...)."""
	name: str  # display name, trimmed
	imdb: str  # e.g. "nm0000158"


@dataclass
class CastMember:
	"""
	One entry of a movie's cast list.
	Older exports flag uncredited performers inside the name string instead of
	the boolean, so both are honoured.
	"""
	name: str  # actor name as exported (may contain "(uncredited)")
	imdb: str  # actor IMDb id
	character_name: Optional[str] = None  # role played, when known
	credited: Optional[bool] = None  # explicit flag; None means "not stated"

	@property
	def is_credited(self) -> bool:
		if not self.name:
			return False
		if self.credited is False:
			return False
		return 'uncredited' not in self.name.lower()


@dataclass
class MovieRecord:
	"""
	One row of the flattened movie dataset.
	A movie appears once per reference actor, so identity is (title, year), not the IMDb id.
	"""
	movie_title: str  # title as exported
	movie_imdb: str  # IMDb id of the movie (granularity follows the row)
	year: Optional[int] = None  # release year
	difficulty: Optional[str] = None  # "Easy", "Hard" or None (never selectable)
	reference_actor: Optional[str] = None  # featured actor of this row
	reference_actor_imdb: Optional[str] = None  # featured actor IMDb id
	actors: List[CastMember] = field(default_factory=list)  # ordered cast
	directors: List[Person] = field(default_factory=list)  # ordered directors
	keywords: List[str] = field(default_factory=list)  # ordered, de-duplicated tags

	@property
	def key(self) -> Tuple[str, Optional[int]]:
		"""Movie identity used for de-duplication across rows."""
		return movie_key(self.movie_title, self.year)

	@property
	def display_title(self) -> str:
		"""Title formatted for choices, e.g. "Titanic (1997)"."""
		return format_title(clean_display_name(self.movie_title), self.year)

	@property
	def has_reference_actor(self) -> bool:
		return bool(self.reference_actor and self.reference_actor_imdb)

	def valid_directors(self) -> List[Person]:
		return [d for d in self.directors if d.name and d.imdb]

	def character_of(self, actor_imdb: str) -> Optional[str]:
		"""Character played by an actor in this row, if the cast lists one."""
		for member in self.actors:
			if member.imdb == actor_imdb and member.character_name:
				return member.character_name
		return None


@dataclass
class OscarRecord:
	year: int  # ceremony year as exported
	category: str  # raw Academy category, e.g. "Actor in a Leading Role"
	status: str  # "Winner" or "Nominee"
	names: str  # person (or comma-joined persons)
	film: str  # film title

	@property
	def is_winner(self) -> bool:
		return self.status == WINNER


@dataclass
class OscarDataset:
	"""Oscar records wrapped the way the exported JSON wraps them ({records: [...]})."""
	records: List[OscarRecord] = field(default_factory=list)

	def __len__(self) -> int:
		return len(self.records)


@dataclass
class UniqueActor:
	"""A reference actor; the only actors eligible as standalone answers."""
	name: str  # first-seen display name
	imdb: str
	difficulty: Optional[str] = None  # difficulty of the first row featuring the actor

	@property
	def normalized_name(self) -> str:
		return normalize_unicode(self.name).lower()

	def as_person(self) -> Person:
		return Person(name=self.name, imdb=self.imdb)


@dataclass
class CoStar:
	"""A co-star of some pivot actor, with the movies justifying the edge."""
	name: str
	imdb: str
	movies: Dict[Tuple[str, Optional[int]], None] = field(default_factory=dict)  # ordered set of (title, year)

	def add_movie(self, title: str, year: Optional[int]):
		self.movies.setdefault((title, year), None)

	def movie_titles(self) -> List[str]:
		return [format_title(title, year) for title, year in self.movies]


@dataclass
class CoStarLookup:
	movies: List[MovieRecord]  # every row the pivot appears in
	co_stars: Dict[str, CoStar]  # co-star imdb -> CoStar


@dataclass
class ChainState:
	"""State threaded by the caller between chain questions."""
	current_actor: Optional[Person] = None


@dataclass
class Question:
	"""
	A finished multiple-choice question.
	Use to_dict() for the camelCase wire format consumed by the UI.
	"""
	question: str
	choices: List[str]
	correct_answer: str
	explanation: str
	keywords: Optional[str] = None  # keyword questions only
	poster_path: Optional[str] = None  # poster questions only
	category: Optional[str] = None  # set by the mix orchestrator
	is_new_chain: Optional[bool] = None  # chain questions only
	next_actor: Optional[Person] = None  # chain questions only

	def next_chain_state(self) -> ChainState:
		return ChainState(current_actor=self.next_actor)

	def to_dict(self) -> Dict[str, Any]:
		data: Dict[str, Any] = {
			'question': self.question,
			'choices': list(self.choices),
			'correctAnswer': self.correct_answer,
			'explanation': self.explanation,
		}
		if self.keywords is not None:
			data['keywords'] = self.keywords
		if self.poster_path is not None:
			data['posterPath'] = self.poster_path
		if self.category is not None:
			data['category'] = self.category
		if self.is_new_chain is not None:
			data['isNewChain'] = self.is_new_chain
		if self.next_actor is not None:
			data['nextActor'] = {'name': self.next_actor.name, 'imdb': self.next_actor.imdb}
		return data
