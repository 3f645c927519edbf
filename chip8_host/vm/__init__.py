"""
VM Package - The emulation engine seen from the host.

Key components:
- handle: Abstract VMHandle contract
- demo: Built-in demo engine
- mock_vm: Testing mock engine
- factory: Engine construction by name
"""

from .handle import VMHandle, format_display
from .demo import DemoVM
from .mock_vm import MockVM
from .factory import create_engine, ENGINES

__all__ = [
    "VMHandle",
    "format_display",
    "DemoVM",
    "MockVM",
    "create_engine",
    "ENGINES",
]
