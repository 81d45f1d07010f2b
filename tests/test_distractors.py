"""
Tests for distractor selection, choice assembly and the question validator.
"""

from random import Random

import pytest

from movie_trivia.distractors import assemble_choices, keyword_overlap, pick_dissimilar, select_distractors
from movie_trivia.errors import DuplicateChoiceError, InsufficientCandidatesError, MalformedQuestionError
from movie_trivia.models import ChainState, Person, Question
from movie_trivia.validator import check_question, validate_question, validation_errors


def make_question(**overrides):
	fields = dict(
		question='Which actor played with Tom Hanks in a movie?',
		choices=['Meg Ryan', 'Brad Pitt', 'Keanu Reeves', 'Kate Winslet'],
		correct_answer='Meg Ryan',
		explanation='Meg Ryan played with Tom Hanks in: Sleepless in Seattle (1993)',
	)
	fields.update(overrides)
	return Question(**fields)


def test_select_distractors_draws_distinct_items():
	rng = Random(5)
	pool = list(range(10))
	for _ in range(20):
		picked = select_distractors(rng, pool)
		assert len(picked) == 3
		assert len(set(picked)) == 3


def test_select_distractors_never_pads():
	with pytest.raises(InsufficientCandidatesError):
		select_distractors(Random(1), ['only', 'two'])


def test_assemble_choices_shuffles_and_rejects_duplicates():
	choices = assemble_choices(Random(2), 'Titanic (1997)', ['Speed (1994)', 'Se7en (1995)', 'Volver (2006)'])
	assert sorted(choices) == sorted(['Titanic (1997)', 'Speed (1994)', 'Se7en (1995)', 'Volver (2006)'])
	with pytest.raises(DuplicateChoiceError):
		assemble_choices(Random(2), 'Titanic (1997)', ['Titanic (1997)', 'Speed (1994)', 'Se7en (1995)'])


def test_duplicate_choice_is_a_retry_signal():
	assert issubclass(DuplicateChoiceError, InsufficientCandidatesError)


def test_keyword_overlap_is_case_insensitive():
	assert keyword_overlap(['Love', 'ship'], ['love', 'bus']) == 1
	assert keyword_overlap([], ['love']) == 0


def test_pick_dissimilar_prefers_lowest_overlap():
	target = ['love', 'ship', 'iceberg']
	candidates = {
		'a': ['love', 'ship'],  # 2
		'b': ['bus'],  # 0
		'c': ['Love'],  # 1
		'd': ['bomb'],  # 0
		'e': ['ship', 'iceberg', 'love'],  # 3
	}
	picked = pick_dissimilar(Random(4), target, list(candidates), keywords_of=lambda k: candidates[k])
	assert set(picked) == {'b', 'd', 'c'}


def test_pick_dissimilar_returns_what_exists():
	assert pick_dissimilar(Random(4), ['x'], ['a'], keywords_of=lambda k: ['y']) == ['a']


def test_validator_accepts_well_formed_question():
	question = make_question()
	assert validate_question(question)
	assert validate_question(question)  # idempotent
	assert validation_errors(question) == []
	assert check_question(question) is question


@pytest.mark.parametrize('overrides', [
	{'choices': ['Meg Ryan', 'Brad Pitt', 'Keanu Reeves']},
	{'choices': ['Meg Ryan', 'Meg Ryan', 'Keanu Reeves', 'Kate Winslet']},
	{'choices': ['Meg Ryan', '', 'Keanu Reeves', 'Kate Winslet']},
	{'correct_answer': 'Julia Roberts'},
	{'question': '  '},
	{'explanation': ''},
])
def test_validator_rejects_malformed_questions(overrides):
	question = make_question(**overrides)
	assert not validate_question(question)
	with pytest.raises(MalformedQuestionError):
		check_question(question)


def test_validator_rejects_non_questions():
	assert not validate_question(None)
	assert not validate_question({'question': 'x'})


def test_wire_format_is_camel_case():
	question = make_question(is_new_chain=True, next_actor=Person('Meg Ryan', 'nm0000212'))
	data = question.to_dict()
	assert data['correctAnswer'] == 'Meg Ryan'
	assert data['isNewChain'] is True
	assert data['nextActor'] == {'name': 'Meg Ryan', 'imdb': 'nm0000212'}
	assert 'posterPath' not in data
	assert 'keywords' not in data
	assert question.next_chain_state() == ChainState(current_actor=Person('Meg Ryan', 'nm0000212'))
