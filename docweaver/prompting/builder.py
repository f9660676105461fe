"""Renders file, module and project prompts from the effective templates."""

from __future__ import annotations

import json
from typing import Dict, Mapping, Sequence, Tuple

from jinja2 import DictLoader, Environment, StrictUndefined

from ..config import PromptConfig
from .constants import DEFAULT_PROMPTS, PROMPT_ROLES

FRAGMENT_SEPARATOR = "\n\n"

_LAYOUTS: Dict[str, str] = {
    "file.j2": (
        "{{ instructions }}\n\n"
        "Here is the code snippet:\n"
        "```\n"
        "{{ content }}\n"
        "```"
    ),
    "module.j2": "{{ instructions }}\n\n{{ fragments }}",
    "project.j2": (
        "{{ instructions }}\n\n"
        "File Summaries:\n\n"
        "{% for path, summary in summaries %}"
        "File: {{ path }}\nSummary: {{ summary }}\n\n"
        "{% endfor %}"
        "Project Structure (JSON):\n"
        "```json\n"
        "{{ structure }}\n"
        "```"
    ),
}


def effective_template(override: str | None, role: str) -> str:
    """Return the user override when it has content, else the built-in default."""
    if role not in DEFAULT_PROMPTS:
        raise KeyError(f"Unknown prompt role '{role}'")
    if override is not None and override.strip():
        return override.strip()
    return DEFAULT_PROMPTS[role].strip()


class PromptBuilder:
    """Builds prompts for one run; templates are fixed at construction time."""

    def __init__(self, prompts: PromptConfig | None = None) -> None:
        prompts = prompts or PromptConfig()
        overrides: Mapping[str, str | None] = {
            "file": prompts.file,
            "module": prompts.module,
            "project": prompts.project,
        }
        self.templates: Dict[str, str] = {
            role: effective_template(overrides.get(role), role) for role in PROMPT_ROLES
        }
        self._env = Environment(
            loader=DictLoader(_LAYOUTS),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=False,
        )

    def build_file_prompt(self, content: str) -> str:
        return self._render("file.j2", instructions=self.templates["file"], content=content)

    def build_module_prompt(self, fragments: Sequence[str]) -> str:
        return self._render(
            "module.j2",
            instructions=self.templates["module"],
            fragments=FRAGMENT_SEPARATOR.join(fragments),
        )

    def build_project_prompt(
        self,
        file_summaries: Sequence[Tuple[str, str]],
        structure: Mapping[str, object],
    ) -> str:
        return self._render(
            "project.j2",
            instructions=self.templates["project"],
            summaries=list(file_summaries),
            structure=json.dumps(structure, indent=2),
        )

    def _render(self, name: str, **context: object) -> str:
        return self._env.get_template(name).render(**context)


__all__ = ["FRAGMENT_SEPARATOR", "PromptBuilder", "effective_template"]
