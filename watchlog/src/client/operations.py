import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import Enum
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class OperationStatus(str, Enum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    # Returned by Operation.run only, never a resting state
    CANCELLED = "cancelled"


class Operation(Generic[T]):
    """A single kind of async request with last-request-wins semantics.

    ``Idle -> Pending -> Succeeded | Failed``. Starting a run cancels the run
    in flight; a cancelled, superseded or timed-out run leaves ``status``,
    ``result`` and ``error`` exactly as the last settled run left them.
    """

    def __init__(
        self,
        name: str,
        *,
        timeout: float | None = None,
        clear_on_failure: bool = True,
    ):
        self.name = name
        self.timeout = timeout
        self.clear_on_failure = clear_on_failure
        self.status = OperationStatus.IDLE
        self.result: T | None = None
        self.error: Exception | None = None
        self._settled = OperationStatus.IDLE
        self._task: asyncio.Task | None = None
        self._generation = 0

    @property
    def is_pending(self) -> bool:
        return self.status is OperationStatus.PENDING

    def cancel(self) -> None:
        self._generation += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.status = self._settled

    def reset(self, result: T | None = None) -> None:
        self.cancel()
        self.result = result
        self.error = None
        self._settle(OperationStatus.IDLE)

    async def run(
        self,
        factory: Callable[[], Awaitable[T]],
        *,
        delay: float = 0.0,
    ) -> OperationStatus:
        self.cancel()
        generation = self._generation
        self.status = OperationStatus.PENDING
        task = asyncio.create_task(self._execute(factory, delay))
        self._task = task

        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise
            logger.debug("%s: superseded by a newer request", self.name)
            return OperationStatus.CANCELLED
        except TimeoutError as e:
            if self.timeout is None:
                return self._fail(generation, e)
            logger.debug("%s: timed out after %ss", self.name, self.timeout)
            if generation == self._generation:
                self._task = None
                self.status = self._settled
            return OperationStatus.CANCELLED
        except Exception as e:
            return self._fail(generation, e)

        if generation != self._generation:
            return OperationStatus.CANCELLED
        self.result = result
        self.error = None
        self._settle(OperationStatus.SUCCEEDED)
        return OperationStatus.SUCCEEDED

    async def _execute(self, factory: Callable[[], Awaitable[T]], delay: float) -> T:
        if delay > 0:
            await asyncio.sleep(delay)
        if self.timeout is None:
            return await factory()
        return await asyncio.wait_for(factory(), self.timeout)

    def _fail(self, generation: int, error: Exception) -> OperationStatus:
        if generation != self._generation:
            return OperationStatus.CANCELLED
        logger.debug("%s: failed: %s", self.name, error)
        self.error = error
        if self.clear_on_failure:
            self.result = None
        self._settle(OperationStatus.FAILED)
        return OperationStatus.FAILED

    def _settle(self, status: OperationStatus) -> None:
        self.status = status
        self._settled = status
        self._task = None
