from __future__ import annotations

import logging
from functools import wraps

from ..core.exceptions import DomainError, InternalError

logger = logging.getLogger(__name__)


def operation(failure_message: str):
    """Surface domain errors verbatim and wrap anything else.

    Unexpected exceptions are logged with their traceback and re-raised as
    ``InternalError(failure_message)``.
    """

    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            try:
                return fn(*args, **kwargs)
            except (DomainError, InternalError):
                raise
            except Exception as exc:
                logger.exception("%s (%s)", failure_message, fn.__qualname__)
                raise InternalError(failure_message) from exc

        return wrapper

    return decorator
