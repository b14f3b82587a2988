"""
appcontext - application context toolkit.

File: src/appcontext/__init__.py
Last updated: 2026-10-17

Purpose
- Package root. Resolves per-application XDG locations, keeps typed configuration
  and JSON record stores durable on disk, and models an application's file layout.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
- Subpackages are imported explicitly: ``appcontext.configmanager``,
  ``appcontext.jsonstore``, ``appcontext.pathspec``, ``appcontext.xdg``.
"""

__version__ = "0.2.1"

__all__ = ["__version__"]
