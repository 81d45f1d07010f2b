"""
FastAPI server exposing the movie trivia question API.
Endpoints:
- GET /health: basic health check
- GET /questions/{archetype}?difficulty=easy&session=...: one question of the given archetype
- GET /mix?difficulty=easy&session=...: the shuffled Ultimate Mix batch
- POST /sessions/{session}/reset: forget a session's recently asked pivots

Startup loads the movie part files and the Oscar records named by DataConfig
(MOVIE_TRIVIA_* environment variables) and builds the shared entity index once.
Every session id gets its own QuestionEngine so histories never leak between players.
"""

# Import standard libraries for filesystem paths and timing
import time  # measure startup and request latencies
from pathlib import Path  # path-safe filesystem handling
from random import Random  # seeded engines for reproducible sessions
from typing import Dict, List, Optional  # precise typing for clarity

# Import FastAPI for building the web API and Pydantic for response models
from fastapi import FastAPI, HTTPException, Query  # FastAPI primitives
from pydantic import BaseModel  # response schema definitions

# Import our internal modules for data loading and question generation
from movie_trivia.config import DataConfig, EngineConfig  # env-driven settings
from movie_trivia.data_loader import DataLoader  # loads and normalizes rows
from movie_trivia.engine import QuestionEngine  # per-session question API
from movie_trivia.entity_index import EntityIndex  # shared read-only lookups
from movie_trivia.errors import GenerationError  # generation exhausted its retries
from movie_trivia.models import ChainState, MovieRecord, OscarDataset, Question

# Import loguru for simple, structured console logging
from loguru import logger  # convenient console logger

# Instantiate the FastAPI application with metadata
app = FastAPI(title="Movie Trivia Question API", version="1.0.0")  # web app

ARCHETYPES = (
	'co-actor',
	'chain',
	'movie-of-actor',
	'actor-in-movie',
	'movie-of-director',
	'director-of-movie',
	'keywords',
	'poster',
	'oscar',
)

# Globals that hold the loaded data, the shared index and the per-session engines
MOVIES: List[MovieRecord] = []
OSCARS: Optional[OscarDataset] = None
INDEX: Optional[EntityIndex] = None
CONFIG: EngineConfig = EngineConfig()
SEED: Optional[int] = None  # fixed seed for every new session engine, tests only
SESSIONS: Dict[str, QuestionEngine] = {}
STARTUP_TIME_S: float = 0.0  # measures how long startup took


# Pydantic models that describe the question payload
class NextActorOut(BaseModel):
	name: str
	imdb: str


class QuestionOut(BaseModel):
	question: str  # prompt shown to the player
	choices: List[str]  # four distinct answers
	correctAnswer: str
	explanation: str
	keywords: Optional[str] = None  # keyword questions only
	posterPath: Optional[str] = None  # poster questions only
	category: Optional[str] = None  # Ultimate Mix only
	isNewChain: Optional[bool] = None  # chain questions only
	nextActor: Optional[NextActorOut] = None  # chain questions only


class MixResponse(BaseModel):
	difficulty: str
	session: str
	elapsed_ms: float  # server-side generation time in ms
	questions: List[QuestionOut]


def configure(movies: List[MovieRecord], oscars: Optional[OscarDataset] = None, config: Optional[EngineConfig] = None, seed: Optional[int] = None):
	"""Install a dataset, rebuild the shared index and drop every session."""
	global MOVIES, OSCARS, INDEX, CONFIG, SEED
	MOVIES = movies
	OSCARS = oscars
	CONFIG = config or EngineConfig()
	SEED = seed
	INDEX = EntityIndex(movies)
	SESSIONS.clear()
	logger.info(f"[API] Indexed {len(movies)} movie rows and {len(oscars) if oscars else 0} Oscar records")


# FastAPI startup hook to load data once
@app.on_event("startup")
async def startup_event():
	"""Load the datasets named by the environment and build the shared index."""
	global STARTUP_TIME_S
	start = time.time()  # start timer for startup latency
	logger.info("[API] Startup: loading movie and Oscar data...")  # log intent

	data_config = DataConfig.from_env()
	loader = DataLoader()

	movie_paths = [p for p in data_config.movie_paths() if Path(p).exists()]
	missing = len(data_config.movie_paths()) - len(movie_paths)
	if missing:
		logger.warning(f"[API] {missing} movie data file(s) missing under '{data_config.data_dir}'")
	movies = loader.load_movies(movie_paths) if movie_paths else []

	oscars = None
	if Path(data_config.oscar_path()).exists():
		oscars = loader.load_oscars(data_config.oscar_path())
	else:
		logger.warning(f"[API] Oscar data not found at '{data_config.oscar_path()}'")

	configure(movies, oscars, EngineConfig.from_env())

	STARTUP_TIME_S = time.time() - start  # elapsed seconds
	logger.info(f"[API] Startup complete in {STARTUP_TIME_S:.2f}s.")  # summary log


def _engine_for(session: str) -> QuestionEngine:
	if INDEX is None:
		logger.warning("[API] Question requested but data not loaded")
		raise HTTPException(status_code=503, detail="Question engine not initialized")
	engine = SESSIONS.pop(session, None)  # re-inserted below as most recently used
	if engine is None:
		logger.debug(f"[API] New session '{session}'")
		engine = QuestionEngine(
			MOVIES,
			oscars=OSCARS,
			config=CONFIG,
			rng=Random(SEED) if SEED is not None else None,
			index=INDEX,
		)
	SESSIONS[session] = engine

	# dicts keep insertion order, so the first key is the least recently used session
	while len(SESSIONS) > CONFIG.max_sessions:
		evicted = next(iter(SESSIONS))
		del SESSIONS[evicted]
		logger.info(f"[API] Evicted idle session '{evicted}' ({len(SESSIONS)} active)")
	return engine


def _to_out(question: Question) -> QuestionOut:
	return QuestionOut(**question.to_dict())


# Simple health endpoint for readiness checks
@app.get("/health")
async def health():
	"""Return minimal health info for liveness/readiness probes."""
	return {
		"status": "ok",  # constant indicator
		"engine_ready": INDEX is not None,  # True once data is indexed
		"movies": len(MOVIES),
		"oscar_records": len(OSCARS) if OSCARS else 0,
		"sessions": len(SESSIONS),
		"startup_seconds": round(STARTUP_TIME_S, 2),  # startup latency
	}


@app.get("/questions/{archetype}", response_model=QuestionOut, response_model_exclude_none=True)
async def question(
	archetype: str,
	difficulty: str = Query('easy', description="easy or hard"),
	session: str = Query('default', description="Player session id"),
	actor: Optional[str] = Query(None, description="Pin the co-actor pivot by name or IMDb id"),
	current_actor_imdb: Optional[str] = Query(None, description="Continue a chain from this actor"),
	sub_type: Optional[str] = Query(None, description="Specific Oscar question type"),
):
	"""Generate one question of the requested archetype."""
	if archetype not in ARCHETYPES:
		raise HTTPException(status_code=400, detail=f"Unknown archetype '{archetype}'")
	engine = _engine_for(session)
	logger.debug(f"[API] /questions/{archetype} difficulty={difficulty} session={session}")

	start = time.time()
	try:
		if archetype == 'co-actor':
			result = engine.find_co_actor(difficulty, actor=actor)
		elif archetype == 'chain':
			state = None
			if current_actor_imdb:
				known = engine.index.actor(current_actor_imdb)
				if known is None:
					raise ValueError(f"Unknown actor: {current_actor_imdb}")
				state = ChainState(current_actor=known.as_person())
			result = engine.chain_co_actor(difficulty, chain_state=state)
		elif archetype == 'movie-of-actor':
			result = engine.find_movie_of_actor(difficulty)
		elif archetype == 'actor-in-movie':
			result = engine.find_actor_in_movie(difficulty)
		elif archetype == 'movie-of-director':
			result = engine.find_movie_of_director(difficulty)
		elif archetype == 'director-of-movie':
			result = engine.find_director_of_movie(difficulty)
		elif archetype == 'keywords':
			result = engine.find_movie_by_keywords(difficulty)
		elif archetype == 'poster':
			result = await engine.find_movie_by_poster(difficulty)
		else:
			result = engine.oscar_question(difficulty, sub_type=sub_type)
	except ValueError as e:
		raise HTTPException(status_code=400, detail=str(e))
	except GenerationError as e:
		logger.warning(f"[API] /questions/{archetype} failed: {e}")
		raise HTTPException(status_code=503, detail=str(e))

	elapsed_ms = (time.time() - start) * 1000  # compute ms
	logger.info(f"[API] /questions/{archetype} served in {elapsed_ms:.2f} ms")  # summary
	return _to_out(result)


@app.get("/mix", response_model=MixResponse, response_model_exclude_none=True)
async def mix(
	difficulty: str = Query('easy', description="easy or hard"),
	session: str = Query('default', description="Player session id"),
):
	"""One question of every archetype, shuffled."""
	engine = _engine_for(session)
	start = time.time()
	try:
		questions = await engine.ultimate_mix(difficulty)
	except ValueError as e:
		raise HTTPException(status_code=400, detail=str(e))
	elapsed_ms = (time.time() - start) * 1000
	logger.info(f"[API] /mix served {len(questions)} questions in {elapsed_ms:.2f} ms")
	return MixResponse(
		difficulty=difficulty,
		session=session,
		elapsed_ms=round(elapsed_ms, 2),
		questions=[_to_out(q) for q in questions],
	)


@app.post("/sessions/{session}/reset")
async def reset_session(session: str):
	"""Clear the anti-repetition history of one session."""
	engine = SESSIONS.get(session)
	if engine is not None:
		engine.reset_history()
	return {"session": session, "reset": engine is not None}
