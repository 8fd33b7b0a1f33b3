"""Configuration loading from YAML and environment.

Secrets (tokens) are taken from environment variables or from files
(GITHUB_TOKEN_FILE). Never put real tokens in config files committed to a
repository.
"""

import os
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitpr.errors import ConfigurationError

CONFIG_ENV = "GITPR_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/git-pr/config.yaml")
DEFAULT_API_URL = "https://github.bus.zalan.do/api/v3"


def _read_secret(env_key: str, file_env_key: str, env: Mapping[str, str] | None = None) -> str | None:
    """Read secret from env var or from file path in env."""
    env = os.environ if env is None else env
    value = env.get(env_key)
    if value:
        return value.strip()
    file_path = env.get(file_env_key)
    if file_path:
        try:
            return Path(file_path).expanduser().read_text().strip()
        except OSError as e:
            raise ConfigurationError(f"Cannot read {file_env_key} ({file_path}): {e}") from e
    return None


class GitHubConfig(BaseSettings):
    """GitHub API settings."""

    model_config = SettingsConfigDict(env_prefix="GITHUB_", extra="ignore")

    token: str | None = Field(default=None, description="PAT; use env or GITHUB_TOKEN_FILE")
    api_url: str = Field(default=DEFAULT_API_URL, description="API base URL")


class EditorConfig(BaseSettings):
    """Editor used to review the PR description (env: EDITOR)."""

    model_config = SettingsConfigDict(env_prefix="", extra="ignore")

    editor: str | None = Field(default=None, description="Editor command, e.g. vim or 'code --wait'")


class RepoConfig(BaseSettings):
    """Per-repository conventions."""

    model_config = SettingsConfigDict(env_prefix="GITPR_", extra="ignore")

    protected_branch: str = Field(default="master", description="Branch a PR may never be opened from")
    default_base: str = Field(default="master", description="Base when the branch tracks nothing")
    default_remote: str = Field(default="origin", description="Remote to push to when tracking is local")
    template_path: str = Field(
        default=".github/PULL_REQUEST_TEMPLATE.md",
        description="PR template, relative to the repository root",
    )
    store_path: str = Field(
        default="github.sqlite3",
        description="Branch to PR number database, relative to the git directory",
    )


class LoggingConfig(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="LOGGING_", extra="ignore")

    level: str = Field(default="WARNING", description="Log level")
    format: str = Field(default="%(levelname)s %(name)s: %(message)s", description="Log format")


class AppConfig(BaseModel):
    """Root application config from YAML + env.

    Sections are settings models, so each one reads its own environment
    variables when built with defaults.
    """

    model_config = {"extra": "ignore"}

    github: GitHubConfig = Field(default_factory=GitHubConfig)
    editor: EditorConfig = Field(default_factory=EditorConfig)
    repo: RepoConfig = Field(default_factory=RepoConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def github_token_resolved(self) -> str | None:
        """Resolve GitHub token from config, env or secret file."""
        t = self.github.token
        if t and not t.startswith("${"):
            return t
        return _read_secret("GITHUB_TOKEN", "GITHUB_TOKEN_FILE")

    def require_github_token(self) -> str:
        """Return the GitHub token or raise ConfigurationError."""
        token = self.github_token_resolved
        if not token:
            raise ConfigurationError("GITHUB_TOKEN environment variable must be set!")
        return token


def _substitute_env(value: Any, env: Mapping[str, str]) -> Any:
    """Replace ${VAR} and $VAR in strings with values from env."""
    if isinstance(value, str):
        if value.startswith("${") and value.endswith("}"):
            key = value[2:-1].strip()
            return env.get(key, value)
        if value.startswith("$") and not value.startswith("${"):
            key = value[1:].strip()
            return env.get(key, value)
        return value
    if isinstance(value, dict):
        return {k: _substitute_env(v, env) for k, v in value.items()}
    if isinstance(value, list):
        return [_substitute_env(v, env) for v in value]
    return value


def resolve_config_path(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> Path | None:
    """Pick the config file: explicit path, then $GITPR_CONFIG, then the user default.

    Returns None when no file applies. An explicitly requested file that
    does not exist raises ConfigurationError.
    """
    env = os.environ if env is None else env
    explicit = config_path or (Path(env[CONFIG_ENV]) if env.get(CONFIG_ENV) else None)
    if explicit is not None:
        explicit = explicit.expanduser()
        if not explicit.is_file():
            raise ConfigurationError(f"Config file not found: {explicit}")
        return explicit
    default = DEFAULT_CONFIG_PATH.expanduser()
    return default if default.is_file() else None


def load_config(config_path: Path | None = None, env: Mapping[str, str] | None = None) -> AppConfig:
    """Load config from YAML file and environment.

    Environment variables win over file values for the token, API URL and
    editor so a shell session can override a shared config file.
    """
    env = dict(os.environ) if env is None else dict(env)

    path = resolve_config_path(config_path, env)
    if path is None:
        return AppConfig()

    try:
        raw = yaml.safe_load(path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigurationError(f"Invalid config file {path}: expected a mapping")
    raw = _substitute_env(raw, env)

    github_raw = dict(raw.get("github") or {})
    if env.get("GITHUB_TOKEN"):
        github_raw["token"] = env["GITHUB_TOKEN"]
    if env.get("GITHUB_API_URL"):
        github_raw["api_url"] = env["GITHUB_API_URL"]

    editor_raw = raw.get("editor") or {}
    editor_raw = {"editor": editor_raw} if isinstance(editor_raw, str) else dict(editor_raw)
    if env.get("EDITOR"):
        editor_raw["editor"] = env["EDITOR"]

    try:
        return AppConfig(
            github=GitHubConfig(**github_raw),
            editor=EditorConfig(**editor_raw),
            repo=RepoConfig(**(raw.get("repo") or {})),
            logging=LoggingConfig(**(raw.get("logging") or {})),
        )
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}") from e
