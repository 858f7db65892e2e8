# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""REST configuration, request execution and client facades."""

from .client import RestClient
from .configuration import BasicAuth, RestConfig
from .executor import RequestExecutor, get_default_executor, set_default_executor
from .model import RestModel
from .operation import OperationState, RequestOperation
from .request_builder import FORM_CONTENT_TYPE, build_http_request, compose_url

__all__ = [
    "BasicAuth",
    "FORM_CONTENT_TYPE",
    "OperationState",
    "RequestExecutor",
    "RequestOperation",
    "RestClient",
    "RestConfig",
    "RestModel",
    "build_http_request",
    "compose_url",
    "get_default_executor",
    "set_default_executor",
]
