# pathviz/core/errors.py
#!/usr/bin/env python3


class PathvizError(Exception):
    """Base class for errors raised by the search core."""


class InvalidRequest(PathvizError, ValueError):
    """Start/end missing, out of bounds, overlapping or on an obstacle."""


class InternalConsistencyError(PathvizError, RuntimeError):
    """A search invariant broke (dangling predecessor chain, closed cell relaxed)."""
