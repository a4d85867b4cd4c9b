"""Runtime entity exports."""

from .entity import Entity

__all__ = ["Entity"]
