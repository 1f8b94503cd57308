"""Interfaces of collaborators the engine consumes."""

from .reporter import Reporter

__all__ = ["Reporter"]
