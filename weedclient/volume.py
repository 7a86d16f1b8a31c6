"""
Client for a volume server.

A volume server stores the content behind file ids. Get its address from
:meth:`Master.assign` or :meth:`Master.lookup`.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

import httpx

from .errors import FileNotFound, InvalidRequest, NotAccepted, NotCreated, TransportFailure
from .fid import FileId
from .types import Location
from .utils import (
    EndPoint,
    decode_json,
    encode_query,
    parse_endpoint,
    send_request,
)

logger = logging.getLogger(__name__)


class FetchMode(Enum):
    FIT = "fit"
    FILL = "fill"


@dataclass(frozen=True)
class FetchOptions:
    """Options for :meth:`Volume.fetch` and :meth:`Volume.fetch_bytes`."""

    read_deleted: Optional[bool] = None
    # image resizing
    width: Optional[int] = None
    height: Optional[int] = None
    mode: Optional[FetchMode] = None
    # image cropping
    crop_x1: Optional[int] = None
    crop_x2: Optional[int] = None
    crop_y1: Optional[int] = None
    crop_y2: Optional[int] = None

    def to_query(self) -> httpx.QueryParams:
        return encode_query(
            [
                ("readDeleted", self.read_deleted),
                ("width", self.width),
                ("height", self.height),
                ("mode", self.mode),
                ("crop_x1", self.crop_x1),
                ("crop_x2", self.crop_x2),
                ("crop_y1", self.crop_y1),
                ("crop_y2", self.crop_y2),
            ]
        )


@dataclass(frozen=True)
class StoreOptions:
    """Options for :meth:`Volume.store` and :meth:`Volume.store_form`."""

    # sent as type=replicate when True, not sent at all otherwise
    replicated: Optional[bool] = None
    # modification timestamp in epoch seconds
    ts: Optional[int] = None
    # content is a chunk manifest file
    cm: Optional[bool] = None

    def to_query(self) -> httpx.QueryParams:
        return encode_query(
            [
                ("type", "replicate" if self.replicated is True else None),
                ("ts", self.ts),
                ("cm", self.cm),
            ]
        )


@dataclass(frozen=True)
class StoreResponse:
    size: int
    etag: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "StoreResponse":
        return cls(size=int(data["size"]), etag=data.get("eTag"))


@dataclass(frozen=True)
class DeleteResponse:
    size: int

    @classmethod
    def from_dict(cls, data: dict) -> "DeleteResponse":
        return cls(size=int(data["size"]))


class Volume:
    """
    Client for uploading, downloading and deleting files on a volume server.

    Example:
        ```python
        volume = Volume.from_str("127.0.0.1:8080")

        stored = await volume.store(fid, b"Hello World!")
        data = await volume.fetch_bytes(fid)
        await volume.delete(fid)

        try:
            await volume.fetch_bytes(fid)
        except FileNotFound:
            ...
        ```
    """

    def __init__(
        self,
        host: str,
        port: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Args:
            host: Volume server host name or address
            port: Volume server port, 9333 if not provided
            client: httpx client to send requests with; a new one per request if not provided
        """
        self.endpoint = EndPoint(host, port)
        self._client = client

    @classmethod
    def from_str(
        cls, address: str, client: Optional[httpx.AsyncClient] = None
    ) -> "Volume":
        """
        Create a volume client from a "host:port" string such as ``Location.url``.

        Raises:
            MalformedAddress: If the address cannot be parsed
        """
        endpoint = parse_endpoint(address)
        return cls(endpoint.host, endpoint.port, client=client)

    @classmethod
    def from_location(
        cls,
        location: Location,
        public: bool = False,
        client: Optional[httpx.AsyncClient] = None,
    ) -> "Volume":
        """Create a volume client for the internal (or public) url of a location."""
        address = location.public_url if public else location.url
        return cls.from_str(address, client=client)

    def __repr__(self) -> str:
        return f"Volume({self.endpoint.base_url!r})"

    def _fid_url(self, fid: FileId) -> httpx.URL:
        return self.endpoint.url(f"/{fid}")

    async def fetch(
        self, fid: FileId, options: Optional[FetchOptions] = None
    ) -> httpx.Response:
        """
        Download a file and return the full response.

        Raises:
            InvalidRequest: If the server does not answer with 200
            TransportFailure: If the request fails
        """
        resp = await self._get(fid, options)
        if resp.status_code != httpx.codes.OK:
            raise InvalidRequest(resp.text, status=resp.status_code, fid=str(fid))
        return resp

    async def fetch_bytes(
        self, fid: FileId, options: Optional[FetchOptions] = None
    ) -> bytes:
        """
        Download a file and return its content.

        Raises:
            FileNotFound: If the server answers with 404
            InvalidRequest: If the server answers with any other status but 200
            TransportFailure: If the request fails
        """
        resp = await self._get(fid, options)
        if resp.status_code == httpx.codes.NOT_FOUND:
            raise FileNotFound(fid=str(fid))
        if resp.status_code != httpx.codes.OK:
            raise InvalidRequest(resp.text, status=resp.status_code, fid=str(fid))
        return resp.content

    async def _get(
        self, fid: FileId, options: Optional[FetchOptions]
    ) -> httpx.Response:
        params = (options or FetchOptions()).to_query()
        return await send_request(
            self._client, "GET", self._fid_url(fid), params=params, fid=str(fid)
        )

    async def store(
        self, fid: FileId, data: bytes, options: Optional[StoreOptions] = None
    ) -> StoreResponse:
        """
        Upload raw bytes under a file id.

        Args:
            fid: File id from Master.assign
            data: File content
            options: Upload options

        Returns:
            StoreResponse: Stored size and etag

        Raises:
            NotCreated: If the server does not answer with 201
            TransportFailure: If the request fails or the answer cannot be decoded
        """
        return await self._upload(fid, "PUT", options, content=data)

    async def store_form(
        self,
        fid: FileId,
        files: Mapping[str, Any],
        options: Optional[StoreOptions] = None,
        data: Optional[Mapping[str, Any]] = None,
    ) -> StoreResponse:
        """
        Upload a multipart form under a file id.

        Args:
            fid: File id from Master.assign
            files: Multipart files in httpx form, e.g.
                   ``{"file": ("hello.txt", b"Hello World!", "text/plain")}``
            options: Upload options
            data: Extra non-file form fields

        Raises:
            NotCreated: If the server does not answer with 201
            TransportFailure: If the request fails or the answer cannot be decoded
        """
        return await self._upload(fid, "POST", options, files=files, data=data)

    async def _upload(
        self,
        fid: FileId,
        method: str,
        options: Optional[StoreOptions],
        **body: Any,
    ) -> StoreResponse:
        params = (options or StoreOptions()).to_query()
        resp = await send_request(
            self._client, method, self._fid_url(fid), params=params, fid=str(fid), **body
        )
        if resp.status_code != httpx.codes.CREATED:
            raise NotCreated(resp.text, status=resp.status_code, fid=str(fid))

        payload = decode_json(resp, fid=str(fid))
        try:
            stored = StoreResponse.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportFailure(
                f"Unexpected upload response: {payload}", fid=str(fid)
            ) from exc

        logger.debug("stored %s (%d bytes)", fid, stored.size)
        return stored

    async def delete(self, fid: FileId) -> DeleteResponse:
        """
        Delete a file.

        Raises:
            NotAccepted: If the server does not answer with 202
            TransportFailure: If the request fails or the answer cannot be decoded
        """
        resp = await send_request(
            self._client, "DELETE", self._fid_url(fid), fid=str(fid)
        )
        if resp.status_code != httpx.codes.ACCEPTED:
            raise NotAccepted(resp.text, status=resp.status_code, fid=str(fid))

        payload = decode_json(resp, fid=str(fid))
        try:
            return DeleteResponse.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportFailure(
                f"Unexpected delete response: {payload}", fid=str(fid)
            ) from exc
