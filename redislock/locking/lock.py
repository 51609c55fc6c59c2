"""Redis-based distributed lock. SET NX PX acquisition with bounded retry, token-checked atomic release."""

import asyncio
import contextlib
import logging
import uuid
from typing import Any, AsyncIterator, Awaitable, Callable, Mapping, Optional, TypeVar, Union

from redislock.domain.exceptions import AlreadyHeldError, LockAcquisitionError, LockReleaseError
from redislock.domain.models import LockOptions, LockState
from redislock.locking.registry import LockRegistry, get_registry

logger = logging.getLogger(__name__)

T = TypeVar("T")
Callback = Callable[[Optional[BaseException]], Any]


def _run_callback(callback: Optional[Callback], outcome: Optional[BaseException]) -> None:
    # A failing callback must not change the outcome of the lock operation.
    if callback is None:
        return
    try:
        callback(outcome)
    except Exception:
        logger.exception("lock_callback_failed", extra={"outcome": repr(outcome)})


async def _notify(operation: Awaitable[T], callback: Optional[Callback]) -> T:
    """Await operation, then hand its outcome to callback. The outcome is still returned or raised."""
    try:
        result = await operation
    except Exception as exc:
        _run_callback(callback, exc)
        raise
    _run_callback(callback, None)
    return result


class Lock:
    """
    One attempt to hold a named resource in Redis.

    The Lock's id is written as the key's value and is the credential checked on
    release. Options not given fall back to the registry defaults. Construction
    performs no I/O.
    """

    def __init__(
        self,
        connection: Any,
        options: Union[LockOptions, Mapping[str, Any], None] = None,
        *,
        registry: Optional[LockRegistry] = None,
        **overrides: Any,
    ) -> None:
        self._registry = registry if registry is not None else get_registry()
        resolved = self._registry.defaults.merged(options, **overrides)

        self.id = str(uuid.uuid1())
        self.key: Optional[str] = None
        self.state = LockState.IDLE
        self.timeout = resolved.timeout
        self.retries = resolved.retries
        self.delay = resolved.delay

        self._adapter = self._registry.adapter_for(connection)
        self._release_script = self._registry.release_script_for(connection)

    def __repr__(self) -> str:
        return f"<Lock id={self.id} key={self.key!r} state={self.state.value}>"

    @property
    def locked(self) -> bool:
        return self.state is LockState.LOCKED

    async def acquire(self, key: str, callback: Optional[Callback] = None) -> None:
        """
        Become the exclusive holder of key. Raises AlreadyHeldError without any I/O
        if this Lock is locked or mid-operation, LockAcquisitionError once the
        retry budget is spent. Transport errors propagate and end the attempt.
        """
        return await _notify(self._acquire(key), callback)

    async def release(self, callback: Optional[Callback] = None) -> None:
        """
        Delete the key if it still holds this Lock's id. Raises LockReleaseError if
        not locked, or if the lease was lost; local state is cleared in both
        outcomes of the script.
        """
        return await _notify(self._release(), callback)

    @contextlib.asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator["Lock"]:
        """Acquire key for the duration of the block."""
        await self.acquire(key)
        try:
            yield self
        except BaseException:
            if self.locked:
                try:
                    await self.release()
                except Exception as exc:
                    # The body's exception wins over a failed cleanup.
                    logger.warning(
                        "lock_release_failed",
                        extra={"lock_id": self.id, "key": key, "error": repr(exc)},
                    )
            raise
        else:
            if self.locked:
                await self.release()

    async def _acquire(self, key: str) -> None:
        if self.locked:
            raise AlreadyHeldError(f"Lock already held on {self.key}", key=self.key)
        if self.state is not LockState.IDLE:
            raise AlreadyHeldError(f"Lock is busy ({self.state.value})", key=self.key or key)

        self.state = LockState.ACQUIRING
        acquired = False
        try:
            await self._attempt_lock(key)
            acquired = True
        finally:
            self.state = LockState.LOCKED if acquired else LockState.IDLE

        self.key = key
        self._registry.mark_acquired(self)
        logger.info(
            "lock_acquired",
            extra={"lock_id": self.id, "key": key, "timeout_ms": self.timeout},
        )

    async def _attempt_lock(self, key: str) -> None:
        # Constant delay between attempts; at most retries + 1 writes.
        remaining = self.retries
        while True:
            if await self._adapter.set_if_absent(key, self.id, self.timeout):
                return
            if remaining <= 0:
                logger.info(
                    "lock_acquisition_failed",
                    extra={"lock_id": self.id, "key": key, "retries": self.retries},
                )
                raise LockAcquisitionError(f"Could not acquire lock on {key}", key=key)
            logger.debug(
                "lock_contended",
                extra={"lock_id": self.id, "key": key, "retries_left": remaining},
            )
            remaining -= 1
            await asyncio.sleep(self.delay / 1000)

    async def _release(self) -> None:
        if not self.locked:
            raise LockReleaseError("Lock has not been acquired", key=self.key)

        key = self.key
        self.state = LockState.RELEASING
        settled = False
        try:
            deleted = await self._release_script(keys=[key], args=[self.id])
            settled = True
        finally:
            if not settled:
                self.state = LockState.LOCKED

        self.state = LockState.IDLE
        self.key = None
        self._registry.mark_released(self)

        if not deleted:
            logger.warning("lock_release_expired", extra={"lock_id": self.id, "key": key})
            raise LockReleaseError(f"Lock on {key} has expired", key=key)
        logger.info("lock_released", extra={"lock_id": self.id, "key": key})
