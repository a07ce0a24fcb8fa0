# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Perigee — single-shot JSON requests over httpx with typed status errors."""

from perigee.api import delete, get, post, put, request
from perigee.config import ClientProperties, Config
from perigee.exceptions import (
    DeserializationError,
    PerigeeException,
    RequestConstructionError,
    RequestException,
    ResponseException,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
)
from perigee.exchange import configure
from perigee.options import Options
from perigee.response import Response

__all__ = [
    "ClientProperties",
    "Config",
    "DeserializationError",
    "Options",
    "PerigeeException",
    "RequestConstructionError",
    "RequestException",
    "Response",
    "ResponseException",
    "SerializationError",
    "TransportError",
    "UnexpectedStatusError",
    "configure",
    "delete",
    "get",
    "post",
    "put",
    "request",
]
