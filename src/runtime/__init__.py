"""Runtime engine exports."""

from .loop import RuntimeBootstrap, RuntimeEngine
from .ticks import TickDependencies, TickProcessor

__all__ = ["RuntimeBootstrap", "RuntimeEngine", "TickDependencies", "TickProcessor"]
