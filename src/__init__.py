"""Ownable reference model source package.

This package contains:
- config: Configuration loading and management
- ownership: Ownable entities, capability discovery, and ownership events
"""

from __future__ import annotations

__all__: list[str] = []
