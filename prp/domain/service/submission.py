"""Press release field validation shared by submit and edit."""

from collections.abc import Mapping

from prp.domain.error import (
    IncompleteSubmissionError,
    ValidationError,
    WordLimitExceededError,
)
from prp.domain.model.press_release import CONTENT_FIELDS, NARRATIVE_FIELDS

DEFAULT_MAX_WORDS = 1000


def count_words(text: str | None) -> int:
    """Count whitespace-delimited tokens."""
    if not text:
        return 0
    return len(text.split())


def narrative_word_count(fields: Mapping[str, str | None]) -> int:
    """Combined word count of the six narrative fields."""
    return sum(count_words(fields.get(name)) for name in NARRATIVE_FIELDS)


def validate_submission(
    fields: Mapping[str, str | None],
    allow_partial: bool = False,
    max_words: int = DEFAULT_MAX_WORDS,
) -> dict[str, str]:
    """Validate press release content.

    Every field that is present must be non-empty after trimming. With
    ``allow_partial=False`` all ten content fields must be present. The word
    limit applies to whichever narrative fields are present.

    Args:
        fields: Field name to value
        allow_partial: Whether missing fields are acceptable (edit payloads)
        max_words: Combined narrative word limit

    Returns:
        The validated fields, in form order

    Raises:
        ValidationError: If an unknown field is supplied
        IncompleteSubmissionError: If a field is missing or blank
        WordLimitExceededError: If the narrative fields exceed max_words
    """
    unknown = sorted(set(fields) - set(CONTENT_FIELDS))
    if unknown:
        raise ValidationError(f"Unknown press release fields: {', '.join(unknown)}")

    validated: dict[str, str] = {}
    for name in CONTENT_FIELDS:
        if name not in fields:
            if allow_partial:
                continue
            raise IncompleteSubmissionError(name)

        value = fields[name]
        if value is None or not value.strip():
            raise IncompleteSubmissionError(name)
        validated[name] = value

    count = narrative_word_count(validated)
    if count > max_words:
        raise WordLimitExceededError(count, max_words)

    return validated
