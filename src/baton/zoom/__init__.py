"""Zoom connector syncing users, groups, roles and contact groups."""

__version__ = "0.1.0"
