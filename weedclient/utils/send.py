import logging
from typing import Any, NamedTuple, Optional

import httpx

from ..config import get_settings
from ..errors import MalformedAddress, TransportFailure

logger = logging.getLogger(__name__)

DEFAULT_PORT = 9333


class EndPoint(NamedTuple):
    host: str
    port: Optional[int] = None

    @property
    def base_url(self) -> str:
        port = DEFAULT_PORT if self.port is None else self.port
        return f"http://{self.host}:{port}"

    def url(self, path: str) -> httpx.URL:
        # copy_with escapes the path, "," stays literal
        return httpx.URL(self.base_url).copy_with(path=path)


def parse_endpoint(address: str) -> EndPoint:
    """
    Parse a "host:port" token as handed out by the master.

    A bare "host" is accepted and uses the default port.
    """
    host, sep, port = address.partition(":")
    if not host:
        raise MalformedAddress("Missing host, expected host:port", address)
    if not sep:
        return EndPoint(host)
    if not port.isdigit() or not port.isascii() or int(port) > 65535:
        raise MalformedAddress("Invalid port, expected host:port", address)
    return EndPoint(host, int(port))


async def send_request(
    client: Optional[httpx.AsyncClient],
    method: str,
    url: httpx.URL,
    *,
    params: Optional[httpx.QueryParams] = None,
    fid: Optional[str] = None,
    **kwargs: Any,
) -> httpx.Response:
    """
    Send a single request; network failures surface as TransportFailure.

    Without a client, one is opened for this request only and closed before
    returning.
    """
    try:
        if client is None:
            timeout = httpx.Timeout(get_settings().WEED_TIMEOUT)
            async with httpx.AsyncClient(timeout=timeout) as own_client:
                resp = await own_client.request(method, url, params=params, **kwargs)
        else:
            resp = await client.request(method, url, params=params, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("%s %s failed: %s", method, url, exc)
        raise TransportFailure(f"{method} {url} failed: {exc}", fid=fid) from exc

    logger.debug("%s %s -> %d", method, resp.url, resp.status_code)
    return resp


def decode_json(resp: httpx.Response, fid: Optional[str] = None) -> dict:
    try:
        payload = resp.json()
    except ValueError as exc:
        raise TransportFailure(f"Invalid JSON in response: {exc}", fid=fid) from exc
    if not isinstance(payload, dict):
        raise TransportFailure("Expected a JSON object in response", fid=fid)
    return payload
