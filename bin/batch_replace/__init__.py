"""Batch search and replace for customised language strings."""

from .config import Config
from .exceptions import (
    BatchReplaceError,
    ConfigurationError,
    InvalidAnswerError,
    NoMatchesError,
    StoreError,
)
from .matcher import LiteralMatcher, RegexMatcher, build_matcher
from .models import Classification, TranslatableString
from .placeholders import MaskedText, mask, unmask
from .runner import run_batch_replace
from .safety import is_safe_to_replace
from .store import YamlStringStore

__all__ = [
    "BatchReplaceError",
    "Classification",
    "Config",
    "ConfigurationError",
    "InvalidAnswerError",
    "LiteralMatcher",
    "MaskedText",
    "NoMatchesError",
    "RegexMatcher",
    "StoreError",
    "TranslatableString",
    "YamlStringStore",
    "build_matcher",
    "is_safe_to_replace",
    "mask",
    "run_batch_replace",
    "unmask",
]
