"""Falling sand simulation engine."""

from .config import SimulationConfig
from .config import load_config
from .runtime import SandSimulation
from .runtime import SimulationGrid
from .runtime import SimulationSnapshot

__all__ = [
    "logic",
    "SandSimulation",
    "SimulationConfig",
    "SimulationGrid",
    "SimulationSnapshot",
    "load_config",
]
