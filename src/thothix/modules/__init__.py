"""Feature modules with auto-discovery."""

from importlib import import_module
from pathlib import Path

import structlog
from fastapi import APIRouter


logger = structlog.get_logger()


def discover_modules() -> list[APIRouter]:
    """Collect the routers of all feature modules.

    Every subpackage with a ``routes`` module exposing ``router`` is
    mounted. Packages without one are skipped.

    Returns:
        Routers in alphabetical order of their package name
    """
    modules_dir = Path(__file__).parent
    routers: list[APIRouter] = []

    for path in sorted(modules_dir.iterdir()):
        if not path.is_dir() or path.name.startswith("_"):
            continue
        if not (path / "routes.py").exists():
            continue

        module = import_module(f"thothix.modules.{path.name}.routes")
        router = getattr(module, "router", None)
        if isinstance(router, APIRouter):
            routers.append(router)
            logger.debug("module_loaded", module=path.name)

    return routers
