"""Configuration loading for docweaver (.docweaver.yml + environment)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".docweaver.yml"

DEFAULT_PROVIDER = "ollama"
DEFAULT_OLLAMA_URL = "http://localhost:11434"
DEFAULT_OLLAMA_MODEL = "phi4"
DEFAULT_OPENAI_URL = "https://api.openai.com/v1"
DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
DEFAULT_OUTPUT_DIR = "DocsWeaver"
DEFAULT_OUTPUT_FILE = "DOCWEAVER_OUTPUT.md"
DEFAULT_CONCURRENCY = 2
DEFAULT_REQUEST_TIMEOUT = 120.0
DEFAULT_MAX_RETRIES = 2
DEFAULT_RETRY_BASE_DELAY_MS = 1000


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass(frozen=True)
class BackendConfig:
    """Settings for the summarization backend."""

    provider: str = DEFAULT_PROVIDER
    ollama_url: str = DEFAULT_OLLAMA_URL
    ollama_model: str = DEFAULT_OLLAMA_MODEL
    openai_key: Optional[str] = None
    openai_url: str = DEFAULT_OPENAI_URL
    openai_model: str = DEFAULT_OPENAI_MODEL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    retry_base_delay_ms: int = DEFAULT_RETRY_BASE_DELAY_MS


@dataclass(frozen=True)
class PromptConfig:
    """User overrides for the three prompt roles; blank means built-in default."""

    file: Optional[str] = None
    module: Optional[str] = None
    project: Optional[str] = None


@dataclass(frozen=True)
class OutputConfig:
    """Where and whether the assembled documentation is persisted."""

    save_to_file: bool = True
    directory: str = DEFAULT_OUTPUT_DIR
    file_name: str = DEFAULT_OUTPUT_FILE


@dataclass(frozen=True)
class DocWeaverConfig:
    """Immutable run configuration, built once and threaded through components."""

    root: Path
    backend: BackendConfig = field(default_factory=BackendConfig)
    prompts: PromptConfig = field(default_factory=PromptConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    ignore_patterns: Tuple[str, ...] = ()
    max_file_size_bytes: int = 0
    concurrency: int = DEFAULT_CONCURRENCY


_ENV_OVERRIDES: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("provider", ("DOCWEAVER_PROVIDER",)),
    ("ollama_url", ("DOCWEAVER_OLLAMA_URL", "OLLAMA_HOST")),
    ("ollama_model", ("DOCWEAVER_OLLAMA_MODEL",)),
    ("openai_key", ("DOCWEAVER_OPENAI_KEY", "OPENAI_API_KEY")),
    ("openai_model", ("DOCWEAVER_OPENAI_MODEL",)),
)


def load_config(
    root: Path,
    *,
    environ: Mapping[str, str] | None = None,
) -> DocWeaverConfig:
    """Load configuration for the project at ``root``.

    Values come from ``.docweaver.yml`` when present; environment variables take
    precedence for backend selection and credentials.
    """
    root = Path(root).expanduser().resolve()
    config_file = root / CONFIG_FILENAME
    env = os.environ if environ is None else environ

    data: Dict[str, Any] = {}
    if config_file.is_file():
        data = _read_config(config_file)

    backend = _parse_backend(_as_dict(data.get("backend")))
    backend = _apply_env_overrides(backend, env)

    prompts_data = _as_dict(data.get("prompts"))
    prompts = PromptConfig(
        file=_as_str(prompts_data.get("file")),
        module=_as_str(prompts_data.get("module")),
        project=_as_str(prompts_data.get("project")),
    )

    output_data = _as_dict(data.get("output"))
    save_to_file = _as_bool(output_data.get("save_to_file"))
    output = OutputConfig(
        save_to_file=True if save_to_file is None else save_to_file,
        directory=_as_str(output_data.get("directory")) or DEFAULT_OUTPUT_DIR,
        file_name=_as_str(output_data.get("file_name")) or DEFAULT_OUTPUT_FILE,
    )

    max_size = _as_int(data.get("max_file_size_bytes"))
    concurrency = _as_int(data.get("concurrency"))

    return DocWeaverConfig(
        root=root,
        backend=backend,
        prompts=prompts,
        output=output,
        ignore_patterns=tuple(_as_str_list(data.get("ignore_patterns"))),
        max_file_size_bytes=max(max_size or 0, 0),
        concurrency=max(concurrency or DEFAULT_CONCURRENCY, 1),
    )


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{path.name} must contain a mapping at the root")
    return loaded


def _parse_backend(data: Dict[str, Any]) -> BackendConfig:
    defaults = BackendConfig()
    timeout = _as_float(data.get("request_timeout"))
    retries = _as_int(data.get("max_retries"))
    base_delay = _as_int(data.get("retry_base_delay_ms"))
    return BackendConfig(
        provider=(_as_str(data.get("provider")) or defaults.provider).strip().lower(),
        ollama_url=_as_str(data.get("ollama_url")) or defaults.ollama_url,
        ollama_model=_as_str(data.get("ollama_model")) or defaults.ollama_model,
        openai_key=_as_str(data.get("openai_key")),
        openai_url=_as_str(data.get("openai_url")) or defaults.openai_url,
        openai_model=_as_str(data.get("openai_model")) or defaults.openai_model,
        request_timeout=timeout if timeout and timeout > 0 else defaults.request_timeout,
        max_retries=retries if retries is not None and retries >= 0 else defaults.max_retries,
        retry_base_delay_ms=(
            base_delay if base_delay is not None and base_delay >= 0 else defaults.retry_base_delay_ms
        ),
    )


def _apply_env_overrides(backend: BackendConfig, env: Mapping[str, str]) -> BackendConfig:
    updates: Dict[str, str] = {}
    for attribute, keys in _ENV_OVERRIDES:
        value = _first_env_value(env, keys)
        if value:
            updates[attribute] = value.strip().lower() if attribute == "provider" else value
    if not updates:
        return backend
    return replace(backend, **updates)


def _first_env_value(env: Mapping[str, str], keys: Sequence[str]) -> Optional[str]:
    for key in keys:
        value = env.get(key)
        if value:
            return value
    return None


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "BackendConfig",
    "CONFIG_FILENAME",
    "ConfigError",
    "DocWeaverConfig",
    "OutputConfig",
    "PromptConfig",
    "load_config",
]
