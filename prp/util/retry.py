"""Transient store failure handling.

Postgres repositories wrap every statement in ``store_errors`` (reads) or
``store_write`` (writes) so that connection loss and timeouts surface as
``TransientStoreError``. Idempotent reads are additionally wrapped in
``retry_transient``, which rolls the session back and retries with
exponential backoff. A failed statement aborts the whole request
transaction, so the rollback is only safe while that transaction holds no
writes; once it does, the first failure reaches the caller. Writes are never
retried here.
"""

import asyncio
import functools
from collections.abc import Awaitable, Callable
from contextlib import contextmanager
from typing import Iterator, ParamSpec, Protocol, TypeVar

import logfire
from sqlalchemy.exc import (
    DBAPIError,
    InterfaceError,
    OperationalError,
    PendingRollbackError,
)
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from prp.config import StoreSettings
from prp.domain.error import TransientStoreError

P = ParamSpec("P")
R = TypeVar("R")

# Session.info key set once the current transaction has issued a write
WRITES_KEY = "prp.has_writes"

# in_failed_sql_transaction: the transaction was aborted by an earlier error
_ABORTED_TRANSACTION = "25P02"


class HasStoreSettings(Protocol):
    session: AsyncSession
    store_settings: StoreSettings


def _before_sleep_callback(retry_state: RetryCallState) -> None:
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logfire.warn(
        "Retrying store read",
        attempt=retry_state.attempt_number,
        operation=getattr(retry_state.fn, "__qualname__", None),
        error=str(exc),
    )


def is_transient(error: BaseException) -> bool:
    """Whether a database error is worth retrying."""
    if isinstance(
        error,
        (
            OperationalError,
            InterfaceError,
            PendingRollbackError,
            PoolTimeoutError,
            asyncio.TimeoutError,
        ),
    ):
        return True
    if not isinstance(error, DBAPIError):
        return False
    if error.connection_invalidated:
        return True
    code = getattr(error.orig, "sqlstate", None) or getattr(error.orig, "pgcode", None)
    return code == _ABORTED_TRANSACTION


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Translate transient database failures into TransientStoreError."""
    try:
        yield
    except (
        DBAPIError,
        PendingRollbackError,
        PoolTimeoutError,
        asyncio.TimeoutError,
    ) as e:
        if not is_transient(e):
            raise
        logfire.error("Document store unavailable", operation=operation, error=str(e))
        raise TransientStoreError(f"Document store unavailable during {operation}") from e


@contextmanager
def store_write(session: AsyncSession, operation: str) -> Iterator[None]:
    """Like ``store_errors``, and marks the session's transaction as written."""
    session.info[WRITES_KEY] = True
    with store_errors(operation):
        yield


def has_writes(session: AsyncSession) -> bool:
    """Whether the session's transaction has issued a write."""
    return bool(session.info.get(WRITES_KEY))


def retry_transient(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Retry an idempotent repository read on TransientStoreError.

    The wrapped method's instance must expose ``session`` and
    ``store_settings``. Each failed attempt rolls the session back so the
    next one starts a fresh transaction. When the transaction already holds
    writes the read runs once. After the last attempt the
    TransientStoreError itself is re-raised.
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        owner: HasStoreSettings = args[0]  # type: ignore[assignment]
        session = owner.session
        if has_writes(session):
            return await func(*args, **kwargs)

        settings = owner.store_settings
        retrying = AsyncRetrying(
            stop=stop_after_attempt(settings.retry_attempts),
            wait=wait_exponential(
                min=settings.retry_wait_min_seconds,
                max=settings.retry_wait_max_seconds,
            ),
            retry=retry_if_exception_type(TransientStoreError),
            before_sleep=_before_sleep_callback,
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                try:
                    return await func(*args, **kwargs)
                except TransientStoreError:
                    with store_errors("rollback"):
                        await session.rollback()
                    raise

    return wrapper
