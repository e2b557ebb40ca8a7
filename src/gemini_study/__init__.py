"""Study-material generation on top of the Gemini API."""

import importlib.metadata
import logging

from gemini_study.artifact import MultipleChoiceQuestion, StudyArtifact
from gemini_study.config import StudySettings, resolve_config
from gemini_study.core.exceptions import (
    ConfigurationError,
    ErrorKind,
    GeminiStudyError,
    MalformedModelOutputError,
    MissingKeyError,
    RemoteModelError,
    StudyPipelineError,
    UnsupportedInputError,
)
from gemini_study.core.types import (
    BinaryPart,
    BinarySource,
    DocumentSource,
    ExtractionFailed,
    Failure,
    Parsed,
    RetryPolicy,
    Success,
    TextPart,
    TextSource,
)
from gemini_study.pipeline import (
    BackoffExecutor,
    ContentAssembler,
    ErrorClassifier,
    ModelInvoker,
    ResponseNormalizer,
)
from gemini_study.service import StudyService, create_study_service
from gemini_study.telemetry import TelemetryContext, TelemetryReporter
from gemini_study.vector_store import VectorStore

try:
    __version__ = importlib.metadata.version("gemini-study")
except importlib.metadata.PackageNotFoundError:
    __version__ = "development"

# Library convention: let the consuming application configure handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [  # noqa: RUF022
    # Service
    "StudyService",
    "create_study_service",
    # Pipeline stages
    "ContentAssembler",
    "BackoffExecutor",
    "ModelInvoker",
    "ResponseNormalizer",
    "ErrorClassifier",
    # Types
    "TextPart",
    "BinaryPart",
    "TextSource",
    "DocumentSource",
    "BinarySource",
    "RetryPolicy",
    "Success",
    "Failure",
    "Parsed",
    "ExtractionFailed",
    "StudyArtifact",
    "MultipleChoiceQuestion",
    # Configuration
    "StudySettings",
    "resolve_config",
    # Collaborators
    "VectorStore",
    "TelemetryContext",
    "TelemetryReporter",
    # Exceptions
    "ErrorKind",
    "GeminiStudyError",
    "ConfigurationError",
    "StudyPipelineError",
    "UnsupportedInputError",
    "MissingKeyError",
    "RemoteModelError",
    "MalformedModelOutputError",
]
