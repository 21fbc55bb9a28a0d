"""
forgecord test suite.

Test Organization
-----------------
- tests/unit/          : Fast unit tests with mocked discord.py objects
- tests/integration/   : Integration tests with testcontainers (real Redis)

Markers
-------
- unit, ui, rest: selectively run unit suites
- integration: needs docker; skipped when it is unavailable
"""
