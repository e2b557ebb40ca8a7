"""Configuration for the study pipeline.

Settings are resolved once by the composition root and passed down
explicitly; nothing reads configuration lazily during a request.
"""

from .api import resolve_config
from .schema import StudySettings

__all__ = ["StudySettings", "resolve_config"]
