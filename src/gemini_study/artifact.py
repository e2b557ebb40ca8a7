"""Shape of the study artifact returned to end users.

The pipeline itself only guarantees well-formed JSON; these models add the
caller-side shape check on top.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gemini_study.core.exceptions import MalformedModelOutputError


class MultipleChoiceQuestion(BaseModel):
    """One quiz question with its options and the correct answer."""

    model_config = ConfigDict(extra="ignore")

    question: str
    options: list[str] = Field(min_length=1)
    answer: str


class StudyArtifact(BaseModel):
    """Summary, quiz and explanatory content for a piece of study material."""

    model_config = ConfigDict(extra="ignore")

    summary: str
    mcqs: list[MultipleChoiceQuestion]
    content: str


def validate_artifact(value: Any, *, raw_text: str) -> StudyArtifact:
    """Validate a parsed model response as a ``StudyArtifact``.

    Raises:
        MalformedModelOutputError: The JSON parsed but has the wrong shape.
    """
    try:
        return StudyArtifact.model_validate(value)
    except ValidationError as e:
        raise MalformedModelOutputError(
            f"Model response does not match the study artifact shape: "
            f"{e.error_count()} validation error(s)",
            raw_text=raw_text,
        ) from e
