from __future__ import annotations

import asyncio
import enum

from .errors import ProviderStateError, StoreClosedError, StoreFailedError


class ProviderState(str, enum.Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    FAILED = "failed"
    CLOSED = "closed"


_SETTLED = frozenset({ProviderState.READY, ProviderState.FAILED, ProviderState.CLOSED})


class ReadinessGate:
    """
    Per-provider state machine:

      UNINITIALIZED -> INITIALIZING -> READY -> CLOSED
                                    \\-> FAILED

    Callers awaiting `wait_ready()` before the provider settles are held until
    it reaches READY, FAILED or CLOSED. Any number of waiters is supported.
    """

    def __init__(self) -> None:
        self._state = ProviderState.UNINITIALIZED
        self._settled = asyncio.Event()
        self._failure: BaseException | None = None

    @property
    def state(self) -> ProviderState:
        return self._state

    @property
    def failure(self) -> BaseException | None:
        return self._failure

    @property
    def settled(self) -> bool:
        return self._state in _SETTLED

    def begin(self) -> None:
        if self._state is not ProviderState.UNINITIALIZED:
            raise ProviderStateError(f"cannot initialize a provider in state {self._state.value!r}")
        self._state = ProviderState.INITIALIZING

    def mark_ready(self) -> None:
        if self._state is not ProviderState.INITIALIZING:
            raise ProviderStateError(f"cannot become ready from state {self._state.value!r}")
        self._settle(ProviderState.READY)

    def mark_failed(self, exc: BaseException) -> None:
        self._failure = exc
        self._settle(ProviderState.FAILED)

    def mark_closed(self) -> None:
        self._settle(ProviderState.CLOSED)

    def _settle(self, state: ProviderState) -> None:
        self._state = state
        self._settled.set()

    async def wait_settled(self) -> ProviderState:
        await self._settled.wait()
        return self._state

    async def wait_ready(self) -> None:
        state = await self.wait_settled()
        if state is ProviderState.READY:
            return
        if state is ProviderState.CLOSED:
            raise StoreClosedError()
        raise StoreFailedError() from self._failure
