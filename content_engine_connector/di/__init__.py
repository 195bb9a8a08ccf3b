"""Dependency injection package."""

from .container import Container

__all__ = ["Container"]
