from __future__ import annotations

import textwrap
import pytest
from pathlib import Path

from electric_case.config import (
    CaseConfig,
    ConfigError,
    ConfigScope,
    apply_overrides,
    build_config,
    load_config,
    validate_config,
)


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def _write_dotfile(base: Path, body: str) -> Path:
    path = base / ".electric-case.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_loads_config_from_pyproject(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        convert_numerals = true
        convert_leading_hyphens = true
        convert_trailing_hyphens = false
        convert_calls = true
        max_iteration = 3
        max_scan_length = 80
        delimiter = ","
        """,
    )

    config = load_config(tmp_path)

    assert config == CaseConfig(
        convert_numerals=True,
        convert_leading_hyphens=True,
        convert_trailing_hyphens=False,
        convert_calls=True,
        max_iteration=3,
        max_scan_length=80,
        delimiter=",",
    )


def test_dashed_keys_are_accepted(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        convert-numerals = true
        max-iteration = 4
        """,
    )

    config = load_config(tmp_path)

    assert config.convert_numerals is True
    assert config.max_iteration == 4


def test_loads_config_from_dotfile(tmp_path: Path):
    _write_dotfile(
        tmp_path,
        """
        [electric-case]
        convert_calls = true
        """,
    )
    nested = tmp_path / "child"
    nested.mkdir()

    config = load_config(nested)

    assert config.convert_calls is True


def test_load_config_walks_up_directories(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        max_iteration = 5
        """,
    )
    nested = tmp_path / "a" / "b" / "c"
    nested.mkdir(parents=True)

    assert load_config(nested).max_iteration == 5


def test_empty_config_table_stops_inheritance(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        max_iteration = 5
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [tool.electric-case]
        """,
    )

    assert load_config(child) == CaseConfig()


def test_pyproject_without_table_is_skipped(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        convert_calls = true
        """,
    )
    child = tmp_path / "child"
    child.mkdir()
    _write_pyproject(
        child,
        """
        [project]
        name = "demo"
        """,
    )

    assert load_config(child).convert_calls is True


def test_invalid_toml_is_ignored(tmp_path: Path):
    (tmp_path / "pyproject.toml").write_text("[tool.electric-case\n", encoding="utf-8")

    assert load_config(tmp_path) == CaseConfig()


def test_unknown_keys_raise(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        convert_everything = true
        """,
    )

    with pytest.raises(ConfigError, match="tool.electric-case"):
        load_config(tmp_path)


def test_non_table_value_raises(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool]
        electric-case = "yes"
        """,
    )

    with pytest.raises(ConfigError):
        load_config(tmp_path)


@pytest.mark.parametrize(
    ("changes", "message"),
    [
        ({"max_iteration": 0}, "max_iteration"),
        ({"max_iteration": True}, "max_iteration"),
        ({"max_scan_length": -5}, "max_scan_length"),
        ({"convert_numerals": "yes"}, "convert_numerals"),
        ({"delimiter": ";;"}, "delimiter"),
        ({"delimiter": "a"}, "delimiter"),
        ({"delimiter": "-"}, "delimiter"),
    ],
)
def test_validate_config_rejects_bad_values(changes, message):
    with pytest.raises(ConfigError, match=message):
        validate_config(CaseConfig(**changes))


def test_apply_overrides_ignores_none():
    config = CaseConfig()

    assert apply_overrides(config, convert_numerals=None) is config
    assert apply_overrides(config, convert_numerals=True).convert_numerals is True


def test_build_config_applies_overrides_and_validates(tmp_path: Path):
    _write_pyproject(
        tmp_path,
        """
        [tool.electric-case]
        max_iteration = 3
        """,
    )

    assert build_config(tmp_path, convert_calls=True).max_iteration == 3

    with pytest.raises(ConfigError):
        build_config(tmp_path, max_iteration=0)


def test_scope_rejects_unknown_and_invalid_changes():
    scope = ConfigScope()

    with pytest.raises(ConfigError, match="Unknown"):
        scope.set_global(colour="blue")
    with pytest.raises(ConfigError):
        scope.set_local("buffer", max_iteration=0)

    assert scope.resolve("buffer") == CaseConfig()


def test_scope_layers_local_overrides():
    scope = ConfigScope()
    scope.set_local("buffer", convert_numerals=True)
    scope.set_local("buffer", convert_calls=True)

    resolved = scope.resolve("buffer")

    assert resolved.convert_numerals is True
    assert resolved.convert_calls is True
    assert scope.resolve() == CaseConfig()

    scope.clear_local("buffer")

    assert scope.resolve("buffer") == CaseConfig()
