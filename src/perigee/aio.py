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
"""Asynchronous request executor over httpx.AsyncClient.

Same contract as :mod:`perigee.api`; only the network call is awaited.
"""

from __future__ import annotations

import contextlib
from collections.abc import AsyncIterator

import httpx

from perigee import exchange
from perigee.exceptions import TransportError
from perigee.logging import get_logger
from perigee.options import Options
from perigee.response import Response

logger = get_logger(__name__)


@contextlib.asynccontextmanager
async def _client_scope(
    client: httpx.Client | httpx.AsyncClient | None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected client untouched, or a default client closed on exit."""
    if client is None:
        properties = exchange.client_properties()
        async with httpx.AsyncClient(**exchange.default_client_kwargs(properties)) as default:
            yield default
        return
    if not isinstance(client, httpx.AsyncClient):
        raise TypeError(
            f"perigee.aio needs an httpx.AsyncClient, got {type(client).__name__}; "
            "use perigee.api with httpx.Client"
        )
    yield client


async def request(method: str, url: str, options: Options | None = None) -> Response:
    """Make a single request and return its result descriptor."""
    opts = options if options is not None else Options()
    accepted = opts.accepted_codes()
    content = exchange.encode_body(opts.body, method, url, opts.dump_request_json)

    async with _client_scope(opts.client) as client:
        http_request = exchange.build_request(client, method, url, content, opts.more_headers)
        result = Response()
        context = {"method": method, "url": url}

        try:
            http_response = await client.send(http_request, stream=True)
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{method} {url} failed: {exc}", context=context, response=result
            ) from exc

        try:
            exchange.record_response(result, http_response)
            raw = await http_response.aread()
        except httpx.HTTPError as exc:
            raise TransportError(
                f"{method} {url}: reading response body failed: {exc}",
                context=context,
                response=result,
            ) from exc
        finally:
            await http_response.aclose()

    logger.debug("perigee.request.done", method=method, url=url, status=result.status_code)
    return exchange.finish(result, raw, accepted, opts.results)


async def get(url: str, options: Options | None = None) -> Response:
    """Make a GET request."""
    return await request("GET", url, options)


async def post(url: str, options: Options | None = None) -> Response:
    """Make a POST request."""
    return await request("POST", url, options)


async def put(url: str, options: Options | None = None) -> Response:
    """Make a PUT request."""
    return await request("PUT", url, options)


async def delete(url: str, options: Options | None = None) -> Response:
    """Make a DELETE request."""
    return await request("DELETE", url, options)
