# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Bounded worker pool that runs RequestOperations."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from contextlib import suppress

from ..config import HttpSettings, load_http_settings
from ..http.client import HttpClient, create_default_http_client
from ..models.request import RequestDescriptor
from .configuration import RestConfig
from .operation import OperationState, RequestOperation
from .request_builder import build_http_request

logger = logging.getLogger(__name__)


class RequestExecutor:
    """
    Owns the transport and the worker pool shared by every client using it.

    Operations run concurrently with no ordering guarantee between them.
    """

    def __init__(
        self,
        http_client: HttpClient | None = None,
        *,
        settings: HttpSettings | None = None,
        max_workers: int | None = None,
    ):
        self.settings = settings or load_http_settings()
        self._owns_client = http_client is None
        self.http_client = http_client or create_default_http_client(self.settings)
        self.max_workers = max_workers or self.settings.max_workers
        self._pool = ThreadPoolExecutor(max_workers=self.max_workers, thread_name_prefix="httpriot")
        self._lock = threading.Lock()
        self._operations: set[RequestOperation] = set()
        self._closed = False

    def prepare(self, descriptor: RequestDescriptor, config: RestConfig) -> RequestOperation:
        """
        Build a READY operation without queueing it.

        Raises ConfigurationError when the request cannot be built, before any
        network activity.
        """
        request = build_http_request(descriptor, config, allow_redirects=self.settings.allow_redirects)
        return RequestOperation(
            descriptor,
            request,
            self.http_client,
            config.formatter,
            results_key=config.results_key,
        )

    def submit(self, descriptor: RequestDescriptor, config: RestConfig) -> RequestOperation:
        if self._closed:
            raise RuntimeError("RequestExecutor is shut down")
        operation = self.prepare(descriptor, config)
        with self._lock:
            self._operations.add(operation)
        task = self._pool.submit(operation.run)
        operation.attach(task)
        task.add_done_callback(lambda _task: self._forget(operation))
        logger.debug("Queued %r", operation)
        return operation

    def _forget(self, operation: RequestOperation) -> None:
        with self._lock:
            self._operations.discard(operation)

    def shutdown(self, wait: bool = True, *, cancel_pending: bool = False) -> None:
        """Stop accepting work; with `cancel_pending`, queued operations are cancelled."""
        self._closed = True
        if cancel_pending:
            with self._lock:
                pending = [op for op in self._operations if op.state is OperationState.READY]
            for operation in pending:
                operation.cancel()
        self._pool.shutdown(wait=wait, cancel_futures=cancel_pending)
        if self._owns_client:
            with suppress(Exception):
                self.http_client.close()

    def close(self) -> None:
        self.shutdown(wait=True)

    def __enter__(self) -> RequestExecutor:
        return self

    def __exit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        self.close()


_default_executor: RequestExecutor | None = None
_default_lock = threading.Lock()


def get_default_executor() -> RequestExecutor:
    """Return the process-wide executor, creating it on first use."""
    global _default_executor
    with _default_lock:
        if _default_executor is None:
            _default_executor = RequestExecutor()
        return _default_executor


def set_default_executor(executor: RequestExecutor | None) -> RequestExecutor | None:
    """Swap the process-wide executor and return the previous one (not shut down)."""
    global _default_executor
    with _default_lock:
        previous = _default_executor
        _default_executor = executor
        return previous


__all__ = ["RequestExecutor", "get_default_executor", "set_default_executor"]
