"""Prompt templates and rendering."""

from .builder import FRAGMENT_SEPARATOR, PromptBuilder, effective_template
from .constants import DEFAULT_FILE_PROMPT, DEFAULT_MODULE_PROMPT, DEFAULT_PROJECT_PROMPT

__all__ = [
    "DEFAULT_FILE_PROMPT",
    "DEFAULT_MODULE_PROMPT",
    "DEFAULT_PROJECT_PROMPT",
    "FRAGMENT_SEPARATOR",
    "PromptBuilder",
    "effective_template",
]
