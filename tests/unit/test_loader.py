"""Tests for loading test modules."""

import sys
from pathlib import Path

import pytest

from chaintest.errors import TestModuleLoadError
from chaintest.loader import (
    discover_test_files,
    load_test_file,
    load_test_module,
    load_test_targets,
)
from chaintest.registry import default_registry

SUITE = """\
import chaintest


@chaintest.test
def {name}():
    chaintest.check(lambda: True)
"""


def write_suite(path: Path, name: str = "passes") -> Path:
    """Write a test file registering one test."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(SUITE.format(name=name))
    return path


def registered_names() -> list[str]:
    """Names in the default registry, in run order."""
    return [record.identity.name for record in default_registry()]


def test_discover_test_files(tmp_path: Path) -> None:
    """Finds files matching the test patterns, sorted by path."""
    write_suite(tmp_path / "test_b.py")
    write_suite(tmp_path / "a_test.py")
    write_suite(tmp_path / "nested" / "test_c.py")
    (tmp_path / "helpers.py").write_text("")
    (tmp_path / "__pycache__").mkdir()
    (tmp_path / "__pycache__" / "test_b.py").write_text("")

    assert discover_test_files(tmp_path) == [
        tmp_path / "a_test.py",
        tmp_path / "nested" / "test_c.py",
        tmp_path / "test_b.py",
    ]


def test_load_test_file_registers_tests(tmp_path: Path) -> None:
    """Importing a test file runs its registrations."""
    path = write_suite(tmp_path / "test_numbers.py", name="adds")

    module = load_test_file(path)

    assert module.__file__ == str(path.resolve())
    assert registered_names() == ["adds"]


def test_load_test_file_twice_reuses_module(tmp_path: Path) -> None:
    """A file already imported is not executed again."""
    path = write_suite(tmp_path / "test_once.py")

    first = load_test_file(path)
    second = load_test_file(path)

    assert first is second
    assert len(default_registry()) == 1


def test_load_missing_test_file(tmp_path: Path) -> None:
    """Raises when the file doesn't exist."""
    with pytest.raises(TestModuleLoadError, match="Test file not found"):
        load_test_file(tmp_path / "test_missing.py")


def test_load_broken_test_file(tmp_path: Path) -> None:
    """Import errors are wrapped and the module is not left half-imported."""
    path = tmp_path / "test_broken.py"
    path.write_text("raise RuntimeError('broken suite')\n")
    modules_before = set(sys.modules)

    with pytest.raises(TestModuleLoadError, match="broken suite") as exc_info:
        load_test_file(path)

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert set(sys.modules) == modules_before


def test_load_test_module_by_name(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """Dotted names are imported from the module search path."""
    write_suite(tmp_path / "chaintest_named_suite.py", name="by_name")
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.delitem(sys.modules, "chaintest_named_suite", raising=False)

    module = load_test_module("chaintest_named_suite")

    assert module.__name__ == "chaintest_named_suite"
    assert registered_names() == ["by_name"]
    del sys.modules["chaintest_named_suite"]


def test_load_unknown_test_module() -> None:
    """Raises when the module can't be imported."""
    with pytest.raises(TestModuleLoadError, match="chaintest_no_such_module"):
        load_test_module("chaintest_no_such_module")


def test_load_test_targets(tmp_path: Path) -> None:
    """Loads directories and files given as targets."""
    write_suite(tmp_path / "suite" / "test_first.py", name="first")
    single = write_suite(tmp_path / "single_test.py", name="single")

    modules = load_test_targets([str(tmp_path / "suite"), str(single)])

    assert len(modules) == 2
    assert sorted(registered_names()) == ["first", "single"]


def test_load_test_targets_empty_directory(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    """Warns when a directory holds no test files."""
    modules = load_test_targets([str(tmp_path)])

    assert modules == []
    assert f"No test files found in {tmp_path}" in caplog.text
