"""UI-agnostic controllers."""

from .run_controller import RunController

__all__ = ["RunController"]
