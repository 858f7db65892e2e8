# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Instance-level REST client bound to one RestConfig."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..models.request import Callback, RequestDescriptor, RequestMethod, RequestOptions
from .configuration import RestConfig
from .executor import RequestExecutor, get_default_executor
from .operation import RequestOperation

Options = RequestOptions | Mapping[str, Any] | None


class RestClient:
    """
    Send GET/POST/PUT/DELETE requests with a configuration's defaults.

    Every verb returns a RequestOperation immediately. The decoded Envelope is
    passed to `callback` (on a worker thread) and is also available from
    `operation.result()`.

    Recognized options: `headers`, `params` and, for POST/PUT, `body` (bytes,
    str or a mapping sent form-encoded). Setting `body` makes POST/PUT ignore
    `params`.
    """

    def __init__(self, config: RestConfig | None = None, executor: RequestExecutor | None = None):
        self.config = config if config is not None else RestConfig()
        self._executor = executor

    @property
    def executor(self) -> RequestExecutor:
        return self._executor or get_default_executor()

    def request(
        self,
        method: RequestMethod | str,
        path: str,
        options: Options = None,
        *,
        callback: Callback | None = None,
        obj: Any = None,
        timeout: float | None = None,
    ) -> RequestOperation:
        executor = self.executor
        descriptor = RequestDescriptor(
            method=RequestMethod.coerce(method),
            path=path,
            options=RequestOptions.from_value(options),
            timeout=timeout if timeout is not None else executor.settings.timeout,
            callback=callback,
            object=obj,
        )
        return executor.submit(descriptor, self.config)

    def get(self, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return self.request(RequestMethod.GET, path, options, **kwargs)

    def post(self, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return self.request(RequestMethod.POST, path, options, **kwargs)

    def put(self, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return self.request(RequestMethod.PUT, path, options, **kwargs)

    def delete(self, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return self.request(RequestMethod.DELETE, path, options, **kwargs)


__all__ = ["RestClient"]
