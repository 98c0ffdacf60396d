from __future__ import annotations

import os, tomli
from pathlib import Path
from functools import lru_cache
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .errors import ConfigError

# Project root (gist_uploader/config.py -> root)
ROOT = Path(__file__).resolve().parents[1]
ENV_FILE = ROOT / ".env"
CONFIG_FILE = ROOT / "config.toml"

# Holds "user:token"; the name is part of the tool's interface.
AUTH_ENV = "GISTAUTH"
DEFAULT_API_URL = "https://api.github.com/gists"


def load_env(env_file: Path = ENV_FILE) -> None:
    # Variables already exported by the shell win over .env entries.
    if env_file.exists():
        load_dotenv(dotenv_path=env_file, override=False)
    else:
        load_dotenv(override=False)


load_env()


@dataclass(frozen=True)
class ApiCfg:
    url: str = DEFAULT_API_URL
    # None means wait as long as the server takes.
    timeout: Optional[float] = None


@dataclass(frozen=True)
class AppConfig:
    api: ApiCfg
    auth_raw: str


@dataclass(frozen=True)
class Credential:
    username: str
    token: str

    def __repr__(self) -> str:
        return f"Credential(username={self.username!r}, token=***)"


def resolve_credential(raw: Optional[str], env_name: str = AUTH_ENV) -> Credential:
    """Split a ``user:token`` string into a Credential.

    Only the first two colon separated components are used; anything after
    a second colon is ignored. Raises ConfigError when there is no colon.
    """
    raw = raw or ""
    parts = raw.split(":")
    if len(parts) < 2:
        raise ConfigError(f"env: {env_name!r} expected user:secret, got: {raw!r}")
    return Credential(username=parts[0], token=parts[1])


def _config_path() -> Path:
    override = os.getenv("GIST_CONFIG")
    return Path(override) if override else CONFIG_FILE


@lru_cache
def _raw_toml(path: Path) -> dict:
    if path.exists():
        with path.open("rb") as f:
            return tomli.load(f)
    return {}


def _coerce_timeout(val) -> Optional[float]:
    if val is None:
        return None
    try:
        timeout = float(val)
    except (TypeError, ValueError):
        raise ConfigError(f"config: invalid timeout {val!r}")
    if timeout < 0:
        raise ConfigError(f"config: invalid timeout {val!r}")
    return timeout or None


def load_app_config(
    api_url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> AppConfig:
    """Build the effective configuration.

    Precedence: explicit arguments (CLI) > config.toml > defaults. The raw
    credential string always comes from the environment.
    """
    try:
        raw = _raw_toml(_config_path())
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"config: {_config_path()}: {e}")
    api = raw.get("api", {}) or {}

    api_cfg = ApiCfg(
        url=api_url or api.get("url", ApiCfg.url),
        timeout=_coerce_timeout(timeout if timeout is not None else api.get("timeout")),
    )
    return AppConfig(
        api=api_cfg,
        auth_raw=os.getenv(AUTH_ENV, ""),
    )
