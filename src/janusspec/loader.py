"""Loading of explicitly named spec files.

A spec file is a plain Python module that registers specs at import time with
`janusspec.test` / `janusspec.focused_test`. There is no discovery: callers
name every file.
"""

import hashlib
import importlib.util
import logging
from pathlib import Path
from types import ModuleType

from janusspec.errors import SpecFileLoadError
from janusspec.registry import Registry, use_registry

logger = logging.getLogger(__name__)


def _module_name(path: Path) -> str:
    digest = hashlib.sha256(str(path).encode("utf-8")).hexdigest()[:12]
    return f"janusspec_specs.{path.stem}_{digest}"


def load_spec_file(path: str | Path, registry: Registry) -> ModuleType:
    """Execute a spec file, registering its specs on `registry`.

    Args:
        path: Path to a ``.py`` file.
        registry: Registry that module-level `test` calls are routed to.

    Returns:
        ModuleType: The executed module.

    Raises:
        SpecFileLoadError: If the file is missing or raises while executing.
    """
    resolved = Path(path).resolve()
    before = len(registry)
    module_spec = importlib.util.spec_from_file_location(_module_name(resolved), resolved)
    if module_spec is None or module_spec.loader is None or not resolved.is_file():
        raise SpecFileLoadError(str(path), FileNotFoundError(str(resolved)))

    module = importlib.util.module_from_spec(module_spec)
    with use_registry(registry):
        try:
            module_spec.loader.exec_module(module)
        except Exception as e:  # pylint: disable=broad-except
            raise SpecFileLoadError(str(path), e) from e

    logger.debug("Loaded %s: %d spec(s)", resolved, len(registry) - before)
    return module


def load_spec_files(paths: list[Path], registry: Registry) -> list[ModuleType]:
    """Load several spec files in the given order."""
    return [load_spec_file(path, registry) for path in paths]
