"""Blueprint exports."""

from . import habits, health

__all__ = ["habits", "health"]
