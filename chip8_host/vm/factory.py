"""
Engine factory - Creates the VMHandle the driver will own.

Engines are chosen by name: a built-in ("demo", "mock") or a dotted
import path "package.module:ClassName" for an external interpreter.
"""

import importlib
import logging
from typing import Callable, Dict

from .handle import VMHandle
from .demo import DemoVM
from .mock_vm import MockVM

logger = logging.getLogger(__name__)


ENGINES: Dict[str, Callable[[], VMHandle]] = {
    "demo": DemoVM,
    "mock": MockVM,
}


def create_engine(name: str) -> VMHandle:
    """
    Construct a fresh engine.

    Args:
        name: Built-in engine name or "package.module:ClassName"

    Returns:
        New VMHandle instance with zeroed state

    Raises:
        ValueError: If the name is unknown or does not name a VMHandle
    """
    if name in ENGINES:
        engine = ENGINES[name]()
        logger.info(f"Created built-in engine '{name}'")
        return engine

    module_name, sep, attr = name.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(
            f"Unknown engine '{name}' (built-ins: {', '.join(sorted(ENGINES))})"
        )

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import engine module '{module_name}': {e}") from e

    factory = getattr(module, attr, None)
    if factory is None:
        raise ValueError(f"Module '{module_name}' has no attribute '{attr}'")

    engine = factory()
    if not isinstance(engine, VMHandle):
        raise ValueError(f"'{name}' did not produce a VMHandle")

    logger.info(f"Created engine {engine.name} from '{name}'")
    return engine
