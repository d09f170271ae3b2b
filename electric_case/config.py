"""Configuration loading and management."""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass, fields, replace
from pathlib import Path
import tomllib


@dataclass(frozen=True)
class CaseConfig:
    """Configuration for scanning and converting hyphenated tokens.

    Attributes:
        convert_numerals: Treat digits as part of a token.
        convert_leading_hyphens: Rewrite hyphens at the start of a token
            instead of keeping them as a literal prefix.
        convert_trailing_hyphens: Rewrite hyphens at the end of a token.
        convert_calls: Allow conversion of tokens outside declaration position.
        max_iteration: Default number of trailing tokens re-examined per edit.
        max_scan_length: Characters on each side of the cursor a scan may read.
        delimiter: Synthetic delimiter inserted by trigger keys.

    Examples:
        CaseConfig(convert_numerals=True, max_iteration=3)
    """

    # Scan switches
    convert_numerals: bool = False
    convert_leading_hyphens: bool = False
    convert_trailing_hyphens: bool = True
    convert_calls: bool = False

    # Driver
    max_iteration: int = 2
    delimiter: str = ";"

    # Limits
    max_scan_length: int = 10_000


class ConfigError(ValueError):
    """Exception raised when configuration values are invalid.

    Examples:
        raise ConfigError("`max_iteration` must be a positive integer")
    """


_BOOLEAN_FIELDS = (
    "convert_numerals",
    "convert_leading_hyphens",
    "convert_trailing_hyphens",
    "convert_calls",
)


def load_config(search_path: Path) -> CaseConfig:
    """Load configuration from the nearest config file.

    Walks parent directories from `search_path` to the filesystem root, reading
    the ``[tool.electric-case]`` table from `pyproject.toml` and the
    ``[electric-case]`` or ``[tool.electric-case]`` table from
    `.electric-case.toml` when present. Returns default values when no
    configuration is found. TOML files that cannot be read or decoded are
    skipped.

    Args:
        search_path: Directory used as the starting point for configuration lookup.

    Returns:
        CaseConfig: Loaded configuration with defaults applied when necessary.

    Raises:
        ConfigError: If the table is present but not a mapping or contains
            unsupported keys.

    Examples:
        load_config(Path("src"))
    """
    current = search_path.resolve()

    while True:
        pyproject_config = _load_from_file(
            current / "pyproject.toml", table_paths=[("tool", "electric-case")]
        )
        if pyproject_config is not None:
            return pyproject_config

        dotfile_config = _load_from_file(
            current / ".electric-case.toml",
            table_paths=[("electric-case",), ("tool", "electric-case")],
        )
        if dotfile_config is not None:
            return dotfile_config

        parent = current.parent
        if parent == current:
            break
        current = parent

    return CaseConfig()


_MISSING = object()


def _load_from_file(config_file: Path, table_paths: list[tuple[str, ...]]) -> CaseConfig | None:
    if not config_file.exists():
        return None

    try:
        with open(config_file, "rb") as stream:
            data = tomllib.load(stream)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    for table_path in table_paths:
        raw_config = _extract_table(data, table_path)
        if raw_config is _MISSING:
            continue
        return _build_config_from_raw(raw_config, config_file, table_path)

    return None


def _extract_table(data: object, table_path: tuple[str, ...]) -> object:
    current = data
    for key in table_path:
        if not isinstance(current, dict) or key not in current:
            return _MISSING
        current = current[key]
    return current


def _build_config_from_raw(
    raw_config: object, config_file: Path, table_path: tuple[str, ...]
) -> CaseConfig:
    table_display = ".".join(table_path)

    if raw_config is None or raw_config == {}:
        return CaseConfig()

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}")

    # TOML keys are conventionally dashed
    normalized = {key.replace("-", "_"): value for key, value in raw_config.items()}
    try:
        return CaseConfig(**normalized)
    except TypeError as error:
        raise ConfigError(f"Invalid `[{table_display}]` settings in {config_file}") from error


def validate_config(config: CaseConfig) -> None:
    """Validate a `CaseConfig` instance.

    Args:
        config: Configuration to validate.

    Raises:
        ConfigError: If a switch is not a boolean, a numeric limit is not a
            positive integer, or the delimiter is not a single character.

    Examples:
        validate_config(CaseConfig(max_iteration=3))
    """
    for name in _BOOLEAN_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"`{name}` must be a boolean")

    _ensure_integers(
        {
            "max_iteration": config.max_iteration,
            "max_scan_length": config.max_scan_length,
        }
    )
    _ensure_positive(
        {
            "max_iteration": config.max_iteration,
            "max_scan_length": config.max_scan_length,
        }
    )

    if not isinstance(config.delimiter, str) or len(config.delimiter) != 1:
        raise ConfigError("`delimiter` must be a single character")
    if config.delimiter.isalnum() or config.delimiter == "-":
        raise ConfigError("`delimiter` must not be a letter, digit or hyphen")


def apply_overrides(config: CaseConfig, **overrides: object) -> CaseConfig:
    """Apply override values to a `CaseConfig`.

    Args:
        config: Base configuration to update.
        overrides: Override values keyed by configuration field name; values set to
            None are ignored.

    Returns:
        CaseConfig: New configuration with the provided overrides applied. The
        original configuration is returned when no changes are supplied.

    Raises:
        TypeError: If an override name is not defined on `CaseConfig`.

    Examples:
        updated = apply_overrides(config, convert_numerals=True)
    """
    changes = {key: value for key, value in overrides.items() if value is not None}
    if not changes:
        return config
    return replace(config, **changes)


def build_config(search_path: Path, **overrides: object) -> CaseConfig:
    """Load, override, and validate configuration.

    Args:
        search_path: Directory where configuration files are resolved.
        overrides: Override values keyed by configuration attributes; None values
            are ignored.

    Returns:
        CaseConfig: Validated configuration.

    Raises:
        ConfigError: If configuration loading or validation fails.

    Examples:
        config = build_config(Path.cwd(), max_iteration=3)
    """
    config = load_config(search_path)
    config = apply_overrides(config, **overrides)
    validate_config(config)
    return config


class ConfigScope:
    """Global configuration with per-session overrides.

    Sessions resolve their effective configuration through `resolve`, which
    layers the session's overrides on top of the global record.

    Examples:
        scope = ConfigScope()
        scope.set_global(convert_numerals=True)
        scope.set_local("buffer-1", convert_calls=True)
        scope.resolve("buffer-1").convert_numerals  # True
    """

    def __init__(self, defaults: CaseConfig | None = None):
        self._global = defaults or CaseConfig()
        validate_config(self._global)
        self._local: dict[Hashable, dict[str, object]] = {}

    @property
    def global_config(self) -> CaseConfig:
        return self._global

    def set_global(self, **changes: object) -> CaseConfig:
        _ensure_known(changes)
        config = replace(self._global, **changes)
        validate_config(config)
        self._global = config
        return config

    def set_local(self, key: Hashable, **changes: object) -> CaseConfig:
        _ensure_known(changes)
        merged = {**self._local.get(key, {}), **changes}
        validate_config(replace(self._global, **merged))
        self._local[key] = merged
        return self.resolve(key)

    def clear_local(self, key: Hashable) -> None:
        self._local.pop(key, None)

    def resolve(self, key: Hashable | None = None) -> CaseConfig:
        overrides = self._local.get(key) if key is not None else None
        if not overrides:
            return self._global
        return replace(self._global, **overrides)


def _ensure_known(changes: dict[str, object]) -> None:
    known = {field.name for field in fields(CaseConfig)}
    unknown = sorted(set(changes) - known)
    if unknown:
        raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")


def _ensure_positive(values: dict[str, int]) -> None:
    for key, value in values.items():
        if value <= 0:
            raise ConfigError(f"`{key}` must be a positive integer")


def _ensure_integers(values: dict[str, object]) -> None:
    for key, value in values.items():
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"`{key}` must be an integer")
