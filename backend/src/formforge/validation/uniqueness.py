"""Uniqueness checks against an external existence collaborator.

The engine owns no storage, so ``unique`` delegates to an ExistenceChecker
supplied by the host application. The call is bounded by a timeout; a
timeout or failure is inconclusive and the value passes.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from typing import Any, Protocol, runtime_checkable

from formforge.config import DEFAULT_TIMEOUT

logger = logging.getLogger(__name__)


@runtime_checkable
class ExistenceChecker(Protocol):
    """Protocol for the collaborator that knows which values are taken."""

    def exists(self, target: str, value: Any) -> bool:
        """Return True if ``value`` is already used for ``target``.

        Args:
            target: What the rule parameter names, e.g. ``"users.email"``
            value: The submitted value
        """
        ...


class UniqueRule:
    """The ``unique`` rule validator.

    Without a checker it is a pass-through. A string parameter names the
    target (``unique: users.email``); any other parameter checks against the
    ``"default"`` target.
    """

    def __init__(
        self,
        checker: ExistenceChecker | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.checker = checker
        self.timeout = timeout
        self._executor: ThreadPoolExecutor | None = None
        self._lock = threading.Lock()

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=4, thread_name_prefix="formforge-unique"
                )
            return self._executor

    def __call__(self, value: Any, param: Any, all_values: dict[str, Any]) -> bool:
        if self.checker is None:
            return True

        target = param if isinstance(param, str) and param else "default"
        future = self._get_executor().submit(self.checker.exists, target, value)
        try:
            return not future.result(timeout=self.timeout)
        except FutureTimeoutError:
            future.cancel()
            logger.warning(
                "Uniqueness check for '%s' timed out after %.1fs, treating as unique",
                target,
                self.timeout,
            )
            return True
        except Exception as e:
            logger.warning(
                "Uniqueness check for '%s' failed: %s, treating as unique", target, e
            )
            return True

    def shutdown(self) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False)
