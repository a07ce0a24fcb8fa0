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
"""Per-call options for the request executor."""

from __future__ import annotations

from collections.abc import Collection, Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

DEFAULT_OK_CODES: frozenset[int] = frozenset({200})


@dataclass
class Options:
    """Optional parameters to the various request calls.

    The custom client can be used for a variety of purposes beyond selecting
    encrypted versus unencrypted channels: transports can be mounted to provide
    augmented logging, header manipulation, et al. An injected client is never
    closed by Perigee; the async executor expects an ``httpx.AsyncClient``.

    If ``body`` is not ``None`` it is sent as a JSON document.

    If JSON output is expected, pass the container type in ``results``
    (a pydantic model, a dataclass, ``dict``, ``list[Item]``, ``typing.Any``).
    The decoded value lands on ``Response.results``.

    ``more_headers`` are applied after the default ``Content-Type`` and
    ``Accept`` headers; a caller value for either replaces the default.

    ``ok_codes`` lists the status codes treated as success; empty means 200.

    ``dump_request_json`` logs the serialized body before sending. ``None``
    defers to the ``perigee.client.dump-request-json`` setting.
    """

    client: httpx.Client | httpx.AsyncClient | None = None
    body: Any = None
    results: Any = None
    more_headers: Mapping[str, str] = field(default_factory=dict)
    ok_codes: Collection[int] = field(default_factory=frozenset)
    dump_request_json: bool | None = None

    def accepted_codes(self) -> frozenset[int]:
        return frozenset(self.ok_codes) or DEFAULT_OK_CODES
