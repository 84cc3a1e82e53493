"""Runtime settings, read once at startup.

Sources, highest precedence first:
- keyword overrides passed to ``load_settings``
- environment variables (a ``.env`` file in the working directory is loaded first)
- YAML file given by ``COMMITGEN_CONFIG`` or the ``config_path`` argument
- defaults below
"""
from __future__ import annotations
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Callable

import yaml
from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-1.5-flash"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com"
DEFAULT_MAX_BODY_BYTES = 50 * 1024 * 1024

@dataclass(frozen=True)
class Settings:
    api_key: str = ""
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    host: str = "0.0.0.0"
    port: int = 3000
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    timeout_s: float = 120.0
    temperature: float = 0.2
    top_p: float = 0.9
    max_tokens: int = 512
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    template_path: str | None = None
    log_level: str = "INFO"

# field name -> (env var, parser)
_ENV: dict[str, tuple[str, Callable[[str], Any]]] = {
    "api_key": ("GEMINI_API_KEY", str),
    "model": ("GEMINI_MODEL", str),
    "base_url": ("GEMINI_BASE_URL", str),
    "host": ("HOST", str),
    "port": ("PORT", int),
    "max_body_bytes": ("MAX_BODY_BYTES", int),
    "timeout_s": ("UPSTREAM_TIMEOUT", float),
    "temperature": ("TEMPERATURE", float),
    "top_p": ("TOP_P", float),
    "max_tokens": ("MAX_TOKENS", int),
    "cors_origins": ("CORS_ORIGINS", lambda v: [o.strip() for o in v.split(",") if o.strip()]),
    "template_path": ("PROMPT_TEMPLATE", str),
    "log_level": ("LOG_LEVEL", str),
}

def load_cfg(path: str | Path) -> dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")
    return data

def _parse(name: str, raw: Any, source: str) -> Any:
    parser = _ENV[name][1]
    if name == "cors_origins" and isinstance(raw, list):
        return [str(o) for o in raw]
    try:
        value = raw if isinstance(raw, (int, float)) and parser in (int, float) else str(raw)
        return parser(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid value for {source}: {raw!r}") from e

def load_settings(
    config_path: str | Path | None = None,
    env: dict[str, str] | None = None,
    use_dotenv: bool = True,
    **overrides: Any,
) -> Settings:
    """
    Build Settings from defaults, an optional YAML file, and the environment.

    Args:
        config_path: YAML file with keys named like the Settings fields.
        env: Mapping to read instead of ``os.environ`` (mainly for tests).
        use_dotenv: Load ``.env`` into the process environment first.
        **overrides: Field values that win over every other source.

    Raises:
        ValueError: On unknown YAML keys or values that do not parse.
    """
    if use_dotenv and env is None:
        load_dotenv()
    environ = os.environ if env is None else env

    values: dict[str, Any] = {}
    path = config_path or environ.get("COMMITGEN_CONFIG")
    if path:
        known = {f.name for f in fields(Settings)}
        for key, raw in load_cfg(path).items():
            if key not in known:
                raise ValueError(f"Unknown setting {key!r} in {path}")
            if raw is None:
                continue
            values[key] = _parse(key, raw, f"{path}:{key}")

    for name, (env_name, _) in _ENV.items():
        raw = environ.get(env_name)
        if raw is not None and raw != "":
            values[name] = _parse(name, raw, env_name)

    values.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**values)
