"""Model-invocation and response-normalization pipeline stages."""

from .assembler import ContentAssembler
from .backoff import BackoffExecutor, compute_backoff_delay
from .error_classifier import ClassifiedError, ErrorClassifier
from .invoker import ModelInvoker
from .normalizer import ResponseNormalizer

__all__ = [
    "BackoffExecutor",
    "ClassifiedError",
    "ContentAssembler",
    "ErrorClassifier",
    "ModelInvoker",
    "ResponseNormalizer",
    "compute_backoff_delay",
]
