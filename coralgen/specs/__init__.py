"""Build specifications."""

from .coral_spec import CoralSpec

__all__ = ["CoralSpec"]
