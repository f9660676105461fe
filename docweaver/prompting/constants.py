"""Built-in prompt templates for the three summarization roles."""

from __future__ import annotations

DEFAULT_FILE_PROMPT = """
Analyze the following code snippet and provide a concise technical summary. Include:

- **Imports:** List each import with its purpose.
- **Functions/Classes:** For each, include the name, parameters (with types if available), return value, and a brief description.
- **Overall Functionality:** Summarize how the code operates.
- **Additional Notes:** Highlight key details, assumptions, or edge cases.
"""

DEFAULT_MODULE_PROMPT = """
Analyze the following file and submodule summaries for the module.
Provide a concise summary that covers:
- The module's overall functionality.
- Key responsibilities and purpose.
- Interactions with other modules or external dependencies.
Include any critical details.
"""

# Superseded by module aggregation at the root; kept for callers that still
# want a single flat project prompt.
DEFAULT_PROJECT_PROMPT = """
Using the file summaries and project structure below, generate a concise technical documentation overview. Include:

- **Project Overview:** Summarize the core purpose, main functionality, and target audience.
- **Technical Architecture:** Outline the system design, component relationships, and data flow.
- **Implementation Details:** Identify critical files, key classes/interfaces, and major dependencies.
- **Module Interactions:** Describe inter-file dependencies, API contracts, and data exchange patterns.
"""

PROMPT_ROLES: tuple[str, ...] = ("file", "module", "project")

DEFAULT_PROMPTS: dict[str, str] = {
    "file": DEFAULT_FILE_PROMPT,
    "module": DEFAULT_MODULE_PROMPT,
    "project": DEFAULT_PROJECT_PROMPT,
}


__all__ = [
    "DEFAULT_FILE_PROMPT",
    "DEFAULT_MODULE_PROMPT",
    "DEFAULT_PROJECT_PROMPT",
    "DEFAULT_PROMPTS",
    "PROMPT_ROLES",
]
