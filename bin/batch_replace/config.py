"""Centralized configuration management."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from batch_replace.exceptions import ConfigurationError

# bin/batch_replace/config.py -> .parent=batch_replace/ -> .parent=bin/ -> .parent=project root
_PROJECT_DIR = Path(__file__).resolve().parent.parent.parent


@dataclass
class Config:
    """Centralized configuration management"""
    store_dir: Optional[str] = None  # Root of the per-language string store
    default_lang: Optional[str] = None  # Language used when --lang is not given
    assume_yes: bool = False
    assume_no: bool = False
    regex: bool = False
    ignore_case: bool = False
    prefix: Optional[str] = None  # Guard that makes a sub-word match safe when it precedes the match
    suffix: Optional[str] = None  # Guard that makes a sub-word match safe when it follows the match
    colour: bool = True

    def __post_init__(self):
        if self.store_dir is None:
            self.store_dir = os.environ.get('BATCH_REPLACE_STORE_DIR', 'var/strings')
        if self.default_lang is None:
            self.default_lang = os.environ.get('BATCH_REPLACE_LANG', 'en')

        # Resolve relative paths against project root
        if not os.path.isabs(self.store_dir):
            self.store_dir = str(_PROJECT_DIR / self.store_dir)

        # Empty guards behave like unset guards
        if self.prefix == '':
            self.prefix = None
        if self.suffix == '':
            self.suffix = None

    def validate(self, search: Optional[str], replace: Optional[str]) -> None:
        """Reject option combinations that must stop the tool before checkout."""
        if self.assume_yes and self.assume_no:
            raise ConfigurationError("--assume-yes and --assume-no cannot be used together")
        if not search:
            raise ConfigurationError("No search string given, use --search")
        if replace is None:
            raise ConfigurationError("No replacement string given, use --replace")
