# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
A single cancellable request.

Lifecycle: READY -> EXECUTING -> FINISHED, or READY/EXECUTING -> CANCELLED.
An operation cancelled before it starts never reaches the transport. One
cancelled while executing stops reading the body and never delivers. Every
other operation delivers exactly one Envelope, first to its callback and then
to waiters on `result()`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from concurrent import futures
from enum import Enum
from typing import Any

from ..errors import (
    CancellationError,
    DecodeError,
    ErrorCategory,
    NetworkError,
)
from ..formats import Formatter
from ..http.client import HttpClient, failed_response
from ..http.models import HttpRequest, HttpResponse
from ..models.envelope import Envelope
from ..models.request import RequestDescriptor

logger = logging.getLogger(__name__)


class OperationState(str, Enum):
    READY = "READY"
    EXECUTING = "EXECUTING"
    FINISHED = "FINISHED"
    CANCELLED = "CANCELLED"


class RequestOperation:
    """Unit of work owning one transport call and one response buffer."""

    def __init__(
        self,
        descriptor: RequestDescriptor,
        request: HttpRequest,
        transport: HttpClient,
        formatter: Formatter,
        *,
        results_key: str | None = "results",
    ):
        self.descriptor = descriptor
        self.request = request
        self._transport = transport
        self._formatter = formatter
        self._results_key = results_key
        self._state = OperationState.READY
        self._lock = threading.Lock()
        self._cancel_event = threading.Event()
        self.request.cancel_event = self._cancel_event
        self._future: futures.Future[Envelope] = futures.Future()
        self._task: futures.Future[Any] | None = None

    def __repr__(self) -> str:
        return f"<RequestOperation {self.request.method} {self.request.url} {self._state.value}>"

    @property
    def state(self) -> OperationState:
        return self._state

    def attach(self, task: futures.Future[Any]) -> None:
        """Remember the worker-pool task so cancellation can unqueue it."""
        self._task = task

    def cancel(self) -> bool:
        """Cancel the operation; returns False once it has finished."""
        with self._lock:
            if self._state in (OperationState.FINISHED, OperationState.CANCELLED):
                return self._state is OperationState.CANCELLED
            previous = self._state
            self._state = OperationState.CANCELLED
            self._cancel_event.set()
        if self._task is not None:
            self._task.cancel()
        self._future.cancel()
        logger.debug("Cancelled %s %s while %s", self.request.method, self.request.url, previous.value)
        return True

    def cancelled(self) -> bool:
        return self._state is OperationState.CANCELLED

    def done(self) -> bool:
        return self._state in (OperationState.FINISHED, OperationState.CANCELLED)

    def result(self, timeout: float | None = None) -> Envelope:
        """
        Block until the envelope is delivered.

        Raises CancellationError for cancelled operations and TimeoutError when
        `timeout` elapses first.
        """
        try:
            return self._future.result(timeout)
        except futures.CancelledError:
            raise CancellationError(f"{self.request.method} {self.request.url} was cancelled") from None

    def run(self) -> Envelope | None:
        """Execute on a worker thread; returns None when nothing was delivered."""
        with self._lock:
            if self._state is not OperationState.READY:
                return None
            self._state = OperationState.EXECUTING

        logger.debug("Sending %s %s", self.request.method, self.request.url)
        try:
            envelope = self._execute()
        except Exception as exc:  # noqa: BLE001
            logger.exception("Unexpected failure in %s %s", self.request.method, self.request.url)
            envelope = Envelope(error=exc, object=self.descriptor.object)

        with self._lock:
            if self._state is OperationState.CANCELLED:
                logger.debug("Dropping result of cancelled %s %s", self.request.method, self.request.url)
                return None
            self._state = OperationState.FINISHED

        self._deliver(envelope)
        return envelope

    def _execute(self) -> Envelope:
        """
        Send the request and decode the body into an Envelope.

        The body is `response.content`; `response.text` is only a fallback for
        adapters that set no `content`. Formatter failures of any kind are
        reported as DecodeError.
        """
        obj = self.descriptor.object
        try:
            response = self._transport.request(self.request)
        except Exception as exc:  # noqa: BLE001
            response = failed_response(self.request, exc)

        if not response.ok:
            return Envelope(response=response, error=self._network_error(response), object=obj)

        if response.meta.get("body_truncated"):
            error = NetworkError(
                f"Response body exceeded {response.meta.get('body_bytes_limit')} bytes",
                category=ErrorCategory.BODY_TOO_LARGE,
                url=response.url or self.request.url,
            )
            return Envelope(response=response, error=error, object=obj)

        content = response.content or response.text.encode("utf-8")
        if not content.strip():
            logger.debug("%s %s -> %s (empty body)", self.request.method, self.request.url, response.status_code)
            return Envelope(response=response, object=obj)

        try:
            payload = self._formatter.decode(content)
        except DecodeError as exc:
            logger.debug("%s %s -> %s (%s)", self.request.method, self.request.url, response.status_code, exc)
            return Envelope(response=response, error=exc, object=obj)
        except Exception as exc:  # noqa: BLE001
            logger.debug("%s %s -> %s (%r)", self.request.method, self.request.url, response.status_code, exc)
            error = DecodeError(
                f"Could not decode response body: {exc}", body=bytes(content), format=self._formatter.format.value
            )
            error.__cause__ = exc
            return Envelope(response=response, error=error, object=obj)

        logger.debug("%s %s -> %s", self.request.method, self.request.url, response.status_code)
        return Envelope(results=self._unwrap(payload), response=response, object=obj, payload=payload)

    def _unwrap(self, payload: Any) -> Any:
        if self._results_key and isinstance(payload, Mapping) and self._results_key in payload:
            return payload[self._results_key]
        return payload

    def _network_error(self, response: HttpResponse) -> NetworkError:
        raw_category = response.meta.get("error_category")
        try:
            category = ErrorCategory(raw_category) if raw_category else ErrorCategory.UNKNOWN_ERROR
        except ValueError:
            category = ErrorCategory.UNKNOWN_ERROR
        return NetworkError(
            response.error_message or "Request failed",
            category=category,
            error_type=response.error_type,
            url=response.url or self.request.url,
        )

    def _deliver(self, envelope: Envelope) -> None:
        callback = self.descriptor.callback
        if callback is not None:
            try:
                callback(envelope)
            except Exception:
                logger.exception("Callback for %s %s raised", self.request.method, self.request.url)
        self._future.set_result(envelope)


__all__ = ["OperationState", "RequestOperation"]
