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
"""Steps shared by the synchronous and asynchronous executors.

Nothing here touches the network: body encoding, request construction,
status checking and result decoding live here.
The executors in :mod:`perigee.api` and :mod:`perigee.aio` only add the
network call around these steps.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from perigee.config import ClientProperties, Config
from perigee.exceptions import (
    DeserializationError,
    RequestConstructionError,
    SerializationError,
    UnexpectedStatusError,
)
from perigee.logging import configure_logging, get_logger
from perigee.response import Response

logger = get_logger(__name__)

JSON_MEDIA_TYPE = "application/json"

# RFC 7230 token characters.
_METHOD_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")

_properties: ClientProperties | None = None


def configure(config: Config) -> None:
    """Bind ``perigee.client`` properties and set up logging from *config*."""
    global _properties
    _properties = config.bind(ClientProperties)
    configure_logging(config)


def client_properties() -> ClientProperties:
    """The configured client properties, or ones read from the environment."""
    if _properties is not None:
        return _properties
    return Config().bind(ClientProperties)


def default_client_kwargs(properties: ClientProperties) -> dict[str, Any]:
    """Keyword arguments for building the default httpx client."""
    kwargs: dict[str, Any] = {
        "timeout": properties.timeout,
        "follow_redirects": properties.follow_redirects,
    }
    if properties.user_agent:
        kwargs["headers"] = {"User-Agent": properties.user_agent}
    return kwargs


def encode_body(body: Any, method: str, url: str, dump: bool | None = None) -> bytes | None:
    """Serialize *body* to UTF-8 JSON, or return ``None`` when there is no body.

    Models and dataclasses are converted through pydantic. NaN and infinite
    floats have no JSON form and are rejected.
    """
    if body is None:
        return None
    try:
        content = json.dumps(
            body,
            default=to_jsonable_python,
            allow_nan=False,
            ensure_ascii=False,
            separators=(",", ":"),
        ).encode("utf-8")
    except (ValueError, TypeError, RecursionError) as exc:
        raise SerializationError(
            f"Cannot encode request body as JSON: {exc}",
            context={"method": method, "url": url, "type": type(body).__name__},
        ) from exc

    if dump is None:
        dump = client_properties().dump_request_json
    if dump:
        logger.debug(
            "perigee.request.body",
            method=method,
            url=url,
            body=content.decode("utf-8", errors="replace"),
        )
    return content


def request_headers(more_headers: Mapping[str, str] | None) -> httpx.Headers:
    """Default JSON headers with caller headers applied last-write-wins per key."""
    headers = httpx.Headers({"Content-Type": JSON_MEDIA_TYPE, "Accept": JSON_MEDIA_TYPE})
    if more_headers:
        headers.update(more_headers)
    return headers


def build_request(
    client: httpx.Client | httpx.AsyncClient,
    method: str,
    url: str,
    content: bytes | None,
    more_headers: Mapping[str, str] | None,
) -> httpx.Request:
    """Build the outgoing request, rejecting malformed methods and URLs."""
    context = {"method": method, "url": url}
    if not isinstance(method, str) or not _METHOD_RE.fullmatch(method):
        raise RequestConstructionError(f"Invalid HTTP method {method!r}", context=context)

    try:
        headers = request_headers(more_headers)
    except (TypeError, ValueError, AttributeError) as exc:
        names = sorted(more_headers or {})
        raise RequestConstructionError(f"Invalid request header among {names}: {exc}", context=context) from exc

    try:
        request = client.build_request(method, url, content=content, headers=headers)
    except (httpx.InvalidURL, TypeError, ValueError) as exc:
        raise RequestConstructionError(f"Invalid URL {url!r}: {exc}", context=context) from exc

    if not request.url.is_absolute_url or request.url.scheme not in ("http", "https"):
        raise RequestConstructionError(
            f"URL {url!r} is not an absolute http(s) URL", context=context
        )
    return request


def record_response(result: Response, http_response: httpx.Response) -> None:
    result.http_response = http_response
    result.status_code = http_response.status_code


def finish(
    result: Response,
    raw: bytes,
    accepted: frozenset[int],
    results_type: Any,
) -> Response:
    """Check the status against *accepted* and decode *raw* into *results_type*."""
    if result.status_code not in accepted:
        raise UnexpectedStatusError(accepted, result.status_code, response=result)

    if results_type is not None:
        result.json_result = raw
        try:
            result.results = TypeAdapter(results_type).validate_json(raw)
        except ValidationError as exc:
            raise DeserializationError(
                f"Response body does not match {getattr(results_type, '__name__', results_type)!s}: {exc}",
                context={"status": result.status_code},
                response=result,
            ) from exc
    return result
