"""
Structural validation of generated questions.
No semantic checks: only the shape every question must have before it reaches a player.
"""

from typing import List

from loguru import logger

from .errors import MalformedQuestionError
from .models import Question

CHOICE_COUNT = 4


def validation_errors(question) -> List[str]:
	"""Return the list of problems with a question; empty means valid."""
	if not isinstance(question, Question):
		return [f"not a Question: {type(question).__name__}"]

	problems = []
	if not isinstance(question.question, str) or not question.question.strip():
		problems.append("missing question text")
	if not isinstance(question.explanation, str) or not question.explanation.strip():
		problems.append("missing explanation")

	choices = question.choices
	if not isinstance(choices, (list, tuple)) or len(choices) != CHOICE_COUNT:
		problems.append(f"expected {CHOICE_COUNT} choices, got {choices!r}")
		return problems
	for choice in choices:
		if not isinstance(choice, str) or not choice.strip():
			problems.append(f"invalid choice: {choice!r}")
	if len(set(choices)) != len(choices):
		problems.append(f"duplicate choices: {list(choices)}")
	if question.correct_answer not in choices:
		problems.append(f"correct answer not among choices: {question.correct_answer!r}")
	return problems


def validate_question(question) -> bool:
	return not validation_errors(question)


def check_question(question) -> Question:
	"""Raise MalformedQuestionError when the question is not structurally valid."""
	problems = validation_errors(question)
	if problems:
		logger.warning(f"[Validator] Rejected question: {'; '.join(problems)}")
		raise MalformedQuestionError('; '.join(problems))
	return question
