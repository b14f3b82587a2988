"""
appcontext - integration test package

File: tests/integration/__init__.py
Last updated: 2026-10-17

Purpose
- Test package marker for end-to-end scenarios that touch the real filesystem.

Functional requirements
- Must not import heavy modules at import time; keep test collection fast.
"""
