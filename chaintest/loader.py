"""Import test modules so that their tests get registered."""

import importlib
import importlib.util
import logging
import re
import sys
from collections.abc import Sequence
from pathlib import Path
from types import ModuleType

from chaintest.errors import TestModuleLoadError

log = logging.getLogger(__name__)

TEST_FILE_PATTERNS = ("test_*.py", "*_test.py")


def discover_test_files(directory: Path) -> Sequence[Path]:
    """Find test files under a directory, sorted by path."""
    found: set[Path] = set()
    for pattern in TEST_FILE_PATTERNS:
        found.update(
            path
            for path in directory.rglob(pattern)
            if path.is_file() and "__pycache__" not in path.parts
        )
    return sorted(found)


def load_test_targets(targets: Sequence[str]) -> Sequence[ModuleType]:
    """Import every target: a test file, a directory of test files or a module name.

    Raises:
        TestModuleLoadError: If a target doesn't exist or fails to import

    """
    modules: list[ModuleType] = []
    for target in targets:
        path = Path(target)
        if path.is_dir():
            files = discover_test_files(path)
            if not files:
                log.warning("No test files found in %s", path)
            modules.extend(load_test_file(file) for file in files)
        elif path.suffix == ".py":
            modules.append(load_test_file(path))
        else:
            modules.append(load_test_module(target))
    return modules


def load_test_file(path: Path) -> ModuleType:
    """Import a Python file as a module named after its path."""
    if not path.is_file():
        raise TestModuleLoadError(f"Test file not found: {path}")

    resolved = path.resolve()
    module_name = _module_name_for(resolved)
    if module_name in sys.modules:
        return sys.modules[module_name]

    spec = importlib.util.spec_from_file_location(module_name, resolved)
    if spec is None or spec.loader is None:
        raise TestModuleLoadError(f"Cannot import test file: {path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules[module_name] = module
    try:
        spec.loader.exec_module(module)
    except Exception as e:
        del sys.modules[module_name]
        raise TestModuleLoadError(f"Failed to import test file {path}: {e}") from e

    log.debug("Loaded test file %s as %s", path, module_name)
    return module


def load_test_module(name: str) -> ModuleType:
    """Import a test module by dotted name."""
    try:
        return importlib.import_module(name)
    except Exception as e:
        raise TestModuleLoadError(f"Failed to import test module {name}: {e}") from e


def _module_name_for(path: Path) -> str:
    stem = "_".join(path.with_suffix("").parts[1:])
    return "chaintest_suite_" + re.sub(r"\W", "_", stem)
