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
"""Unified exception hierarchy for Perigee.

Every error raised by the request executor inherits from PerigeeException and
carries the result descriptor as far as it was populated, so callers can
inspect whatever did succeed, such as the status line or the raw body.

Categories:
- RequestException: the outgoing request could not be built
- ResponseException: the exchange failed or produced an unusable response
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from perigee.response import Response


# =============================================================================
# Base Exception
# =============================================================================


class PerigeeException(Exception):
    """Base exception for all Perigee errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "UNEXPECTED_STATUS").
        context: Arbitrary key-value pairs for error context and debugging.
        response: The result descriptor, possibly partially populated.
    """

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
        response: Response | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code if code is not None else self.default_code
        self.context: dict = context if context is not None else {}
        self.response = response


# =============================================================================
# Request Exceptions
# =============================================================================


class RequestException(PerigeeException):
    """The outgoing request could not be prepared from the caller's input."""


class SerializationError(RequestException):
    """The request body could not be encoded as JSON."""

    default_code = "SERIALIZATION"


class RequestConstructionError(RequestException):
    """The method or URL is malformed."""

    default_code = "REQUEST_CONSTRUCTION"


# =============================================================================
# Response Exceptions
# =============================================================================


class ResponseException(PerigeeException):
    """The exchange failed or the server answered outside the caller's contract."""


class TransportError(ResponseException):
    """Network-level failure while sending the request or reading the body."""

    default_code = "TRANSPORT"


class UnexpectedStatusError(ResponseException):
    """The server answered with a status code the caller did not accept.

    Most often this is a real error condition (a 404 where a 200 was expected),
    but it needn't be: a 204 where only 200 was accepted lands here too.
    """

    default_code = "UNEXPECTED_STATUS"

    def __init__(
        self,
        expected: Iterable[int],
        actual: int,
        response: Response | None = None,
    ) -> None:
        self.expected: frozenset[int] = frozenset(expected)
        self.actual = actual
        codes = ", ".join(str(c) for c in sorted(self.expected))
        super().__init__(
            f"Expected HTTP response code in [{codes}]; got {actual} instead",
            context={"expected": sorted(self.expected), "actual": actual},
            response=response,
        )


class DeserializationError(ResponseException):
    """The response body is not valid JSON or does not match the output type."""

    default_code = "DESERIALIZATION"
