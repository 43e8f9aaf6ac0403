from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class InvariantError(AssertionError):
    """Board bookkeeping went wrong (a coin missing where one must exist)."""


def expect(condition: bool, message: str, *args: object) -> bool:
    """Check a board invariant.

    Raises InvariantError in debug runs. Under ``python -O`` the violation is
    logged and the caller skips the affected step instead of crashing
    mid-cascade. Returns ``condition``.
    """
    if condition:
        return True
    text = message % args if args else message
    if __debug__:
        raise InvariantError(text)
    logger.warning("Invariant violated: %s", text)
    return False
