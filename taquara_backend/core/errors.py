# taquara_backend/core/errors.py
# Validation errors raised by the standings/points engine.
# Both derive from ValueError so routes can translate them into HTTP 400.


class InvalidReferenceError(ValueError):
    """A match, prediction or standings entry points at an unknown team, user or match."""


class MalformedScoreError(ValueError):
    """A score outside the non-negative integer domain reached the engine."""


def validate_score(value, field: str = "score", allow_none: bool = True):
    """
    Returns the score unchanged if it is a non-negative int (or None when allowed).
    Raises MalformedScoreError otherwise. Bools are rejected even though they are ints.
    """
    if value is None:
        if allow_none:
            return None
        raise MalformedScoreError(f"{field} is required.")
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedScoreError(f"{field} must be an integer, got {value!r}.")
    if value < 0:
        raise MalformedScoreError(f"{field} must not be negative, got {value}.")
    return value
