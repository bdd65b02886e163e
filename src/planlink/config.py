"""Runtime settings with environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

ENV_PREFIX = "PLANLINK_"


@dataclass(frozen=True, slots=True)
class Settings:
    """Tunables for the existence check, the setup form and storage."""

    github_api_url: str = "https://api.github.com"
    check_timeout_seconds: float = 10.0
    debounce_seconds: float = 0.3
    revalidate_delay_seconds: float = 1.0
    default_plan_path: str = "plan.sh"
    db_path: Path = Path(".planlink/planlink.db")


def _float_env(env: Mapping[str, str], name: str, fallback: float) -> float:
    raw = env.get(ENV_PREFIX + name, "").strip()
    if not raw:
        return fallback
    try:
        value = float(raw)
    except ValueError:
        return fallback
    return value if value >= 0 else fallback


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from defaults and ``PLANLINK_*`` variables."""
    source = os.environ if env is None else env
    defaults = Settings()
    overrides: dict[str, object] = {
        "check_timeout_seconds": _float_env(
            source, "CHECK_TIMEOUT", defaults.check_timeout_seconds
        ),
        "debounce_seconds": _float_env(source, "DEBOUNCE_SECONDS", defaults.debounce_seconds),
        "revalidate_delay_seconds": _float_env(
            source, "REVALIDATE_DELAY", defaults.revalidate_delay_seconds
        ),
    }
    api_url = source.get(ENV_PREFIX + "GITHUB_API_URL", "").strip()
    if api_url:
        overrides["github_api_url"] = api_url.rstrip("/")
    plan_path = source.get(ENV_PREFIX + "DEFAULT_PLAN_PATH", "").strip()
    if plan_path:
        overrides["default_plan_path"] = plan_path
    db_path = source.get(ENV_PREFIX + "DB_PATH", "").strip()
    if db_path:
        overrides["db_path"] = Path(db_path)
    return replace(defaults, **overrides)
