"""Aeolian dune-field cellular automaton on a toroidal grid."""

from dunescape.config.types import ConfigurationError, DuneFieldConfig, TransportParams
from dunescape.domain.field import DuneField
from dunescape.domain.grid import Grid
from dunescape.domain.transport import CycleStats

__all__ = [
    "ConfigurationError",
    "CycleStats",
    "DuneField",
    "DuneFieldConfig",
    "Grid",
    "TransportParams",
]
