"""Search error types and the store-call guard.

- StoreFailure: the store could not answer (timeout, connection, malformed rows).
  Surfaces to callers, who decide on retry/backoff.
- InvalidRequest: the request itself is unusable. Raised before any store access.

Unresolved category/city references are not errors: they produce an empty page.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from bizdir.settings import get_settings

logger = logging.getLogger("uvicorn.error")

T = TypeVar("T")


class StoreFailure(RuntimeError):
    """The external store failed to answer a query."""

    TIMEOUT = "timeout"
    UNAVAILABLE = "unavailable"
    MALFORMED_RESPONSE = "malformed_response"

    def __init__(self, reason: str, message: str | None = None) -> None:
        self.reason = reason
        super().__init__(message or f"Store failure: {reason}")


class InvalidRequest(ValueError):
    """A search request field has an unusable value."""

    def __init__(self, field: str, message: str) -> None:
        self.field = field
        super().__init__(message)


async def call_store(
    awaitable: Awaitable[T],
    *,
    operation: str,
    timeout: float | None = None,
) -> T:
    """Await a store call with a time bound, mapping failures to StoreFailure.

    Args:
        awaitable: The pending store call.
        operation: Short name used in logs and error messages.
        timeout: Seconds before giving up (defaults to settings.store_timeout_seconds).
    """
    limit = timeout if timeout is not None else get_settings().store_timeout_seconds
    try:
        return await asyncio.wait_for(awaitable, timeout=limit)
    except StoreFailure:
        raise
    except asyncio.TimeoutError as e:
        logger.warning(f"Store call {operation} timed out after {limit}s")
        raise StoreFailure(StoreFailure.TIMEOUT, f"{operation} timed out after {limit}s") from e
    except ValidationError as e:
        logger.exception(f"Store call {operation} returned malformed rows")
        raise StoreFailure(StoreFailure.MALFORMED_RESPONSE, f"{operation} returned malformed data") from e
    except (SQLAlchemyError, OSError) as e:
        logger.exception(f"Store call {operation} failed")
        raise StoreFailure(StoreFailure.UNAVAILABLE, f"{operation} failed: {e.__class__.__name__}") from e
    except RuntimeError as e:
        # Session factory missing: the database never initialised
        logger.error(f"Store call {operation} failed: {e}")
        raise StoreFailure(StoreFailure.UNAVAILABLE, f"{operation} failed: store not initialised") from e
