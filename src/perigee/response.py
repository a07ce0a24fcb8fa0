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
"""Result descriptor returned by every request call."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx


@dataclass
class Response:
    """Outcome of a single exchange.

    ``http_response`` holds status line and headers; its body has already been
    drained and the stream closed. ``json_result`` holds the raw body bytes and
    ``results`` the decoded value, both only when an output type was requested
    and the status was accepted.
    """

    http_response: httpx.Response | None = None
    json_result: bytes | None = None
    results: Any = None
    status_code: int = 0

    @property
    def location(self) -> str | None:
        """The ``Location`` response header, if any."""
        if self.http_response is None:
            return None
        return self.http_response.headers.get("Location")
