"""Runtime package.

Keep this module dependency-light: importing `trimetric.runtime.*` from unit
tests should not start any background work.
"""

__all__: list[str] = []
