"""
HTTP transport helpers shared by the adapters

Single boundary where httpx responses become domain errors: transport
failures and non-success statuses raise UpstreamError, undecodable bodies
raise ParseError.
"""
import logging
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import httpx

from ..core.errors import ParseError, UpstreamError

logger = logging.getLogger(__name__)


@contextmanager
def open_client(client: Optional[httpx.Client], timeout: float) -> Iterator[httpx.Client]:
    """Use the injected client, or a short-lived one for this call"""
    if client is not None:
        yield client
        return
    with httpx.Client(follow_redirects=True, timeout=timeout) as owned:
        yield owned


def send(
    client: httpx.Client,
    method: str,
    url: str,
    *,
    failure_message: str,
    **kwargs: Any
) -> httpx.Response:
    """Send a request; raise UpstreamError unless the response is 2xx"""
    logger.info(f"{method} {url}")
    try:
        response = client.request(method, url, **kwargs)
    except httpx.RequestError as e:
        logger.warning(f"{method} {url} FAILED: {e}")
        raise UpstreamError(f"{failure_message}: {e}", status=502, url=url) from e

    if not response.is_success:
        logger.warning(f"{method} {url} returned {response.status_code}")
        raise UpstreamError(
            failure_message,
            status=response.status_code,
            body=response.text,
            url=url
        )
    return response


def parse_json(response: httpx.Response, failure_message: str) -> Any:
    """Decode a JSON body, raising ParseError with the raw text on failure"""
    try:
        return response.json()
    except ValueError as e:
        raise ParseError(failure_message, raw=response.text, url=str(response.request.url)) from e
