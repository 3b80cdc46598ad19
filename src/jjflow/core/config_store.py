"""Global configuration data structures and loading.

Provides immutable global config data loaded from ~/.jjflow/config.toml.
Loaded eagerly at the CLI entry point and stored in JjflowContext.
"""

import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from pathlib import Path

import tomlkit

CONFIG_KEYS = ("jj_executable", "show_diff_stat", "default_revset", "keep_emptied")
BOOLEAN_KEYS = frozenset({"show_diff_stat", "keep_emptied"})


@dataclass(frozen=True)
class GlobalConfig:
    """Immutable global configuration data.

    Attributes:
        jj_executable: Name or path of the jj binary
        show_diff_stat: Compute per-changeset diff stats in the log (slower)
        default_revset: Revset passed to ``jj log -r`` when none is given
        keep_emptied: Pass --keep-emptied to squash by default
    """

    jj_executable: str = "jj"
    show_diff_stat: bool = False
    default_revset: str | None = None
    keep_emptied: bool = False

    def with_value(self, key: str, raw_value: str) -> "GlobalConfig":
        """Return a copy with ``key`` set from its string form.

        Raises:
            KeyError: If ``key`` is not a known config key
            ValueError: If a boolean key gets something other than true/false
        """
        if key not in CONFIG_KEYS:
            raise KeyError(key)
        if key in BOOLEAN_KEYS:
            lowered = raw_value.lower()
            if lowered not in ("true", "false"):
                raise ValueError(f"Invalid boolean value for {key}: {raw_value}")
            return replace(self, **{key: lowered == "true"})
        if key == "default_revset":
            return replace(self, default_revset=raw_value or None)
        return replace(self, **{key: raw_value})


class ConfigStore(ABC):
    """Abstract interface for global config access."""

    @abstractmethod
    def exists(self) -> bool:
        """Check if global config exists."""
        ...

    @abstractmethod
    def load(self) -> GlobalConfig:
        """Load global config.

        Raises:
            ValueError: If config is malformed
        """
        ...

    @abstractmethod
    def save(self, config: GlobalConfig) -> None:
        """Save global config."""
        ...

    @abstractmethod
    def path(self) -> Path:
        """Get the path to the global config file (for messages)."""
        ...


class RealConfigStore(ConfigStore):
    """Production implementation that reads/writes ~/.jjflow/config.toml."""

    def __init__(self, config_path: Path | None = None) -> None:
        self._path = config_path

    def path(self) -> Path:
        if self._path is not None:
            return self._path
        return Path.home() / ".jjflow" / "config.toml"

    def exists(self) -> bool:
        return self.path().exists()

    def load(self) -> GlobalConfig:
        config_path = self.path()
        if not config_path.exists():
            return GlobalConfig()

        try:
            data = tomllib.loads(config_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise ValueError(f"Malformed config at {config_path}: {e}") from e

        default_revset = data.get("default_revset")
        return GlobalConfig(
            jj_executable=str(data.get("jj_executable", "jj")),
            show_diff_stat=bool(data.get("show_diff_stat", False)),
            default_revset=str(default_revset) if default_revset else None,
            keep_emptied=bool(data.get("keep_emptied", False)),
        )

    def save(self, config: GlobalConfig) -> None:
        """Write the config, preserving unrelated keys and comments via tomlkit."""
        config_path = self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()

        doc["jj_executable"] = config.jj_executable
        doc["show_diff_stat"] = config.show_diff_stat
        doc["keep_emptied"] = config.keep_emptied
        if config.default_revset is not None:
            doc["default_revset"] = config.default_revset
        elif "default_revset" in doc:
            del doc["default_revset"]

        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")


class FakeConfigStore(ConfigStore):
    """In-memory config store for tests."""

    def __init__(self, config: GlobalConfig | None = None) -> None:
        self._config = config

    def exists(self) -> bool:
        return self._config is not None

    def load(self) -> GlobalConfig:
        if self._config is None:
            return GlobalConfig()
        return self._config

    def save(self, config: GlobalConfig) -> None:
        self._config = config

    def path(self) -> Path:
        return Path("/fake/jjflow/config.toml")
