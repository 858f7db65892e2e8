# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Class-level REST models.

Subclass RestModel and either declare a configuration or fill one in from the
`configure()` hook:

    class Person(RestModel):
        @classmethod
        def configure(cls) -> None:
            cls.config.set_base_uri("http://localhost:1234/api")
            cls.config.set_default_params({"api_key": "1234567"})

    # GET http://localhost:1234/api/people/1?api_key=1234567
    Person.get_path("/people/1", callback=person_loaded)

Configurations are never inherited: a subclass that does not declare `config`
starts from an empty RestConfig, and a parent's `configure()` is not replayed
for its subclasses.
"""

from __future__ import annotations

from typing import Any, ClassVar

from ..models.request import RequestMethod
from .client import Options, RestClient
from .configuration import RestConfig
from .executor import RequestExecutor
from .operation import RequestOperation


class RestModel:
    config: ClassVar[RestConfig] = RestConfig()
    executor: ClassVar[RequestExecutor | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "config" not in cls.__dict__:
            cls.config = RestConfig()
        if "configure" in cls.__dict__:
            cls.configure()

    @classmethod
    def configure(cls) -> None:
        """Hook run once when a subclass is created."""

    @classmethod
    def client(cls) -> RestClient:
        return RestClient(cls.config, cls.executor)

    @classmethod
    def request_path(cls, method: RequestMethod | str, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return cls.client().request(method, path, options, **kwargs)

    @classmethod
    def get_path(cls, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return cls.request_path(RequestMethod.GET, path, options, **kwargs)

    @classmethod
    def post_path(cls, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return cls.request_path(RequestMethod.POST, path, options, **kwargs)

    @classmethod
    def put_path(cls, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return cls.request_path(RequestMethod.PUT, path, options, **kwargs)

    @classmethod
    def delete_path(cls, path: str, options: Options = None, **kwargs: Any) -> RequestOperation:
        return cls.request_path(RequestMethod.DELETE, path, options, **kwargs)


__all__ = ["RestModel"]
