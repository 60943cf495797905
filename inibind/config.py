"""Binder configuration model and loaders.

Responsibilities:
- Define binder behavior switches as a typed dataclass.
- Provide deterministic precedence resolution (CLI > environment > default).
- Provide an environment-based loader entry point.

Key types:
- `BindConfig`: normalized binder settings for one load.
- `ConfigLoader`: static construction helpers for `BindConfig`.
"""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping

from .parsing import normalize_optional_string


DEFAULT_TAG = "ini"
LINE_ENDINGS_UNIVERSAL = "universal"
LINE_ENDINGS_CRLF = "crlf"
UNSUPPORTED_KINDS_ERROR = "error"
UNSUPPORTED_KINDS_IGNORE = "ignore"

_SUPPORTED_LINE_ENDINGS = frozenset({LINE_ENDINGS_UNIVERSAL, LINE_ENDINGS_CRLF})
_SUPPORTED_UNSUPPORTED_KINDS = frozenset({UNSUPPORTED_KINDS_ERROR, UNSUPPORTED_KINDS_IGNORE})
_SUPPORTED_LOG_LEVELS = frozenset({"TRACE", "DEBUG", "INFO", "WARNING", "ERROR"})


@dataclass(frozen=True, slots=True)
class BindConfig:
    """Settings that shape how a configuration file is bound.

    Attributes:
        tag: Dataclass field metadata key holding the external section/key name.
        line_endings: `universal` splits on CRLF and LF; `crlf` splits on CRLF only.
        unsupported_kinds: `error` rejects keys bound to non-scalar fields;
            `ignore` leaves such fields unmodified.
        log_level: Minimum level for CLI log output.
    """

    tag: str = DEFAULT_TAG
    line_endings: str = LINE_ENDINGS_UNIVERSAL
    unsupported_kinds: str = UNSUPPORTED_KINDS_ERROR
    log_level: str = "WARNING"

    def validate(self) -> None:
        """Validate settings before a bind runs."""

        if not isinstance(self.tag, str) or not self.tag.strip():
            raise ValueError("`tag` must be a non-empty string.")
        self._require_choice(self.line_endings, "line_endings", _SUPPORTED_LINE_ENDINGS)
        self._require_choice(
            self.unsupported_kinds, "unsupported_kinds", _SUPPORTED_UNSUPPORTED_KINDS
        )
        self._require_choice(self.log_level, "log_level", _SUPPORTED_LOG_LEVELS)

    @staticmethod
    def _require_choice(value: str, field_name: str, supported: frozenset[str]) -> None:
        """Validate that a setting is one of its supported values."""

        if value not in supported:
            choices = ", ".join(sorted(supported))
            raise ValueError(f"Unsupported `{field_name}` value `{value}`; supported: {choices}.")


class ConfigLoader:
    """Factory methods for creating `BindConfig` from external sources."""

    _ENV_KEYS = {
        "tag": "INIBIND_TAG",
        "line_endings": "INIBIND_LINE_ENDINGS",
        "unsupported_kinds": "INIBIND_UNSUPPORTED_KINDS",
        "log_level": "INIBIND_LOG_LEVEL",
    }

    @staticmethod
    def from_env(env: Mapping[str, str] | None = None) -> BindConfig:
        """Create config from `INIBIND_*` environment variables."""

        return ConfigLoader.resolve(cli={}, env=env)

    @staticmethod
    def resolve(
        cli: Mapping[str, str | None],
        env: Mapping[str, str] | None = None,
    ) -> BindConfig:
        """Resolve config values with precedence `cli` > `env` > default.

        Args:
            cli: Values passed explicitly on the command line, keyed by field name.
            env: Environment mapping; defaults to `os.environ`.
        """

        env_map = env if env is not None else os.environ
        defaults = BindConfig()
        resolved: dict[str, str] = {}
        for key, env_key in ConfigLoader._ENV_KEYS.items():
            cli_value = normalize_optional_string(cli.get(key))
            if cli_value is not None:
                resolved[key] = cli_value
                continue
            env_value = ConfigLoader._optional_env_string(env_map, env_key)
            if env_value is not None:
                resolved[key] = env_value
                continue
            resolved[key] = getattr(defaults, key)

        config = BindConfig(
            tag=resolved["tag"],
            line_endings=resolved["line_endings"].lower(),
            unsupported_kinds=resolved["unsupported_kinds"].lower(),
            log_level=resolved["log_level"].upper(),
        )
        config.validate()
        return config

    @staticmethod
    def _optional_env_string(env: Mapping[str, str], key: str) -> str | None:
        """Read and normalize optional string environment variable values."""

        if key not in env:
            return None
        return normalize_optional_string(env.get(key))
