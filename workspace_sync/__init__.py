"""Workspace state and role storage with member-scoped task visibility."""

__version__ = "1.0.0"
