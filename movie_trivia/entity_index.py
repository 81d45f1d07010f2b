"""
Entity index module.
Derives reference actors, directors, movie identities and co-star edges from the flat rows.
"""

from typing import Dict, List, Optional, Set, Tuple

from rapidfuzz import fuzz, process  # fuzzy name resolution

from loguru import logger  # console logging

from .difficulty import is_allowed
from .models import CoStar, CoStarLookup, MovieRecord, Person, UniqueActor
from .normalization import clean_display_name, normalize_unicode

MovieKey = Tuple[str, Optional[int]]


class EntityIndex:
	"""
	Read-only lookups over the movie rows.
	Built once per dataset and shared by every generator (and every session).
	"""

	# Minimum WRatio score for a fuzzy name match
	NAME_MATCH_THRESHOLD = 85

	def __init__(self, movies: List[MovieRecord]):
		self.movies = movies  # keep dataset reference

		self._rows_by_key: Dict[MovieKey, List[MovieRecord]] = {}  # movie identity -> rows
		self._rows_by_actor: Dict[str, List[MovieRecord]] = {}  # actor imdb -> rows (credited or not)
		self._rows_by_director: Dict[str, List[MovieRecord]] = {}  # director imdb -> rows
		self._actors: Dict[str, UniqueActor] = {}  # reference actor imdb -> first-seen UniqueActor

		for movie in movies:  # single pass over the rows
			self._rows_by_key.setdefault(movie.key, []).append(movie)

			if movie.has_reference_actor and movie.reference_actor_imdb not in self._actors:
				self._actors[movie.reference_actor_imdb] = UniqueActor(
					name=clean_display_name(movie.reference_actor),
					imdb=movie.reference_actor_imdb,
					difficulty=movie.difficulty,
				)

			members = set()
			if movie.reference_actor_imdb:
				members.add(movie.reference_actor_imdb)
			members.update(actor.imdb for actor in movie.actors if actor.imdb)
			for imdb in members:
				self._rows_by_actor.setdefault(imdb, []).append(movie)

			for director in movie.valid_directors():
				rows = self._rows_by_director.setdefault(director.imdb, [])
				if not rows or rows[-1] is not movie:
					rows.append(movie)

		self.unique_actors: List[UniqueActor] = list(self._actors.values())
		self.reference_actor_ids: Set[str] = set(self._actors)
		self._actor_names = {a.imdb: a.normalized_name for a in self.unique_actors}
		logger.info(
			f"[Index] {len(movies)} rows | {len(self._rows_by_key)} movies | "
			f"{len(self.unique_actors)} reference actors | {len(self._rows_by_director)} directors"
		)

	def actor(self, imdb: Optional[str]) -> Optional[UniqueActor]:
		return self._actors.get(imdb) if imdb else None

	def rows_for_key(self, key: MovieKey) -> List[MovieRecord]:
		return self._rows_by_key.get(key, [])

	def movies_of_actor(self, actor_imdb: Optional[str]) -> List[MovieRecord]:
		"""Every row where the actor is the reference actor or listed in the cast."""
		if not actor_imdb:
			return []
		return list(self._rows_by_actor.get(actor_imdb, []))

	def movies_of_director(self, director_imdb: Optional[str]) -> List[MovieRecord]:
		if not director_imdb:
			return []
		return list(self._rows_by_director.get(director_imdb, []))

	def co_stars_of(self, actor_imdb: Optional[str]) -> CoStarLookup:
		"""
		All credited co-appearances of an actor.
		Rows count when the pivot is the reference actor or a credited cast member;
		every other credited participant (and the row's reference actor) becomes a co-star,
		with the (title, year) pairs that justify the edge.
		"""
		if not actor_imdb:
			return CoStarLookup(movies=[], co_stars={})

		movies = [
			movie for movie in self._rows_by_actor.get(actor_imdb, [])
			if movie.reference_actor_imdb == actor_imdb
			or any(a.imdb == actor_imdb and a.is_credited for a in movie.actors)
		]

		co_stars: Dict[str, CoStar] = {}
		for movie in movies:
			participants: List[Person] = []
			if movie.has_reference_actor and movie.reference_actor_imdb != actor_imdb:
				participants.append(Person(clean_display_name(movie.reference_actor), movie.reference_actor_imdb))
			participants.extend(
				Person(clean_display_name(a.name), a.imdb)
				for a in movie.actors
				if a.imdb and a.imdb != actor_imdb and a.is_credited
			)

			for person in participants:
				if not person.name:
					continue
				# Reference actors are displayed under their canonical first-seen name
				known = self._actors.get(person.imdb)
				co_star = co_stars.setdefault(person.imdb, CoStar(name=known.name if known else person.name, imdb=person.imdb))
				co_star.add_movie(clean_display_name(movie.movie_title), movie.year)

		logger.debug(f"[Index] {actor_imdb}: {len(movies)} movies, {len(co_stars)} co-stars")
		return CoStarLookup(movies=movies, co_stars=co_stars)

	def actors_in_movie(self, movie: MovieRecord) -> Set[str]:
		"""Every actor imdb appearing in any row of the movie, credited or not."""
		ids: Set[str] = set()
		for row in self.rows_for_key(movie.key):
			if row.reference_actor_imdb:
				ids.add(row.reference_actor_imdb)
			ids.update(a.imdb for a in row.actors if a.imdb)
		return ids

	def featured_actors_in_movie(self, movie: MovieRecord) -> List[UniqueActor]:
		"""Reference actors credited in the movie, across all rows of its identity."""
		found: Dict[str, UniqueActor] = {}
		for row in self.rows_for_key(movie.key):
			if row.reference_actor_imdb in self._actors:
				found.setdefault(row.reference_actor_imdb, self._actors[row.reference_actor_imdb])
			for member in row.actors:
				if member.imdb in self._actors and member.is_credited:
					found.setdefault(member.imdb, self._actors[member.imdb])
		return list(found.values())

	def directors_of_movie(self, movie: MovieRecord) -> List[Person]:
		"""Directors listed on any row sharing the movie's identity, first-seen order."""
		found: Dict[str, Person] = {}
		for row in self.rows_for_key(movie.key):
			for director in row.valid_directors():
				found.setdefault(director.imdb, director)
		return list(found.values())

	def unique_directors(self, mode: str) -> List[Person]:
		"""Directors of difficulty-eligible movies, distinct by imdb."""
		found: Dict[str, Person] = {}
		for movie in self.movies:
			if not is_allowed(movie.difficulty, mode):
				continue
			for director in movie.valid_directors():
				found.setdefault(director.imdb, director)
		return list(found.values())

	def find_actor(self, query: Optional[str]) -> Optional[UniqueActor]:
		"""Resolve an imdb id or a (possibly misspelled) name to a reference actor."""
		if not query or not query.strip():
			return None
		query = query.strip()
		if query in self._actors:
			return self._actors[query]

		normalized = normalize_unicode(query).lower()
		match = process.extractOne(normalized, self._actor_names, scorer=fuzz.WRatio)
		if match and match[1] >= self.NAME_MATCH_THRESHOLD:
			logger.debug(f"[Index] Actor fuzzy match: '{query}' -> '{match[0]}' (score={match[1]:.0f})")
			return self._actors[match[2]]
		logger.debug(f"[Index] No actor matches '{query}'")
		return None

	def find_director(self, query: Optional[str]) -> Optional[Person]:
		"""Resolve an imdb id or a name to a director."""
		if not query or not query.strip():
			return None
		query = query.strip()
		directors = {}
		for imdb, rows in self._rows_by_director.items():
			directors[imdb] = next(d for d in rows[0].valid_directors() if d.imdb == imdb)
		if query in directors:
			return directors[query]

		names = {imdb: normalize_unicode(d.name).lower() for imdb, d in directors.items()}
		match = process.extractOne(normalize_unicode(query).lower(), names, scorer=fuzz.WRatio)
		if match and match[1] >= self.NAME_MATCH_THRESHOLD:
			return directors[match[2]]
		return None
