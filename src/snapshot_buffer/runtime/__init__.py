"""Runtime services shared by buffers."""

from . import telemetry

__all__ = ["telemetry"]
