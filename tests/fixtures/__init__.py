"""Shared test fixtures for the phpcheck test suite.

Runtime Snapshots (from tests/fixtures/runtime.py)
--------------------------------------------------

Fixtures:
    make_snapshot: Factory building a RuntimeSnapshot from a healthy PHP 8.3
        baseline. Accepts ``ini_update``, ``extensions_update``,
        ``remove_ini``, ``remove_functions`` and top-level field overrides.

    healthy_snapshot: A snapshot that meets every requirement.

Projects (from tests/fixtures/projects.py)
------------------------------------------

Fixtures:
    make_project: Factory creating a composer project directory with an
        optional vendor tree, Symfony kernel and var/ subdirectories.

Example:
    >>> def test_report(make_snapshot, make_project):
    ...     snapshot = make_snapshot(ini_update={"session.auto_start": "1"})
    ...     root = make_project(symfony_version="7.1.0")
"""

from __future__ import annotations
