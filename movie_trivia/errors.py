"""
Exceptions raised by the question engine.
Retry signals are subclasses of GenerationError so callers can catch a single type.
"""


class GenerationError(Exception):
	"""A generator could not produce a question within its attempt budget."""


class InsufficientCandidatesError(GenerationError):
	"""Fewer eligible pivots or distractors than required; the generator retries."""


class DuplicateChoiceError(InsufficientCandidatesError):
	"""Two choices collapsed into the same display string."""


class MissingPosterError(GenerationError):
	"""No poster file could be found for any candidate movie."""


class MalformedQuestionError(GenerationError):
	"""A question failed structural validation."""


# Errors that only mean "try again with a different draw"
RETRYABLE_ERRORS = (InsufficientCandidatesError, MissingPosterError)
