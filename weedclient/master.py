"""
Client for the master server.

The master hands out file ids (``/dir/assign``) and knows which volume
servers hold a volume (``/dir/lookup``).
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

import httpx

from .config import get_settings
from .errors import InvalidRequest, TransportFailure
from .fid import FileId, parse_fid
from .types import TTL, Location, ReplicationType
from .utils import (
    EndPoint,
    decode_json,
    encode_query,
    parse_endpoint,
    send_request,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssignOptions:
    """Options for :meth:`Master.assign`. Fields left as None are not sent."""

    count: Optional[int] = None
    collection: Optional[str] = None
    data_center: Optional[str] = None
    rack: Optional[str] = None
    data_node: Optional[str] = None
    replication: Optional[ReplicationType] = None
    ttl: Optional[TTL] = None
    # if no matching volumes, pre-allocate this number of bytes on disk for new volumes
    preallocate: Optional[int] = None
    # if no matching volumes, create this number of new volumes
    writable_volume_count: Optional[int] = None
    # disk type label to allocate on
    disk: Optional[str] = None

    def to_query(self) -> httpx.QueryParams:
        return encode_query(
            [
                ("count", self.count),
                ("collection", self.collection),
                ("dataCenter", self.data_center),
                ("rack", self.rack),
                ("dataNode", self.data_node),
                ("replication", self.replication),
                ("ttl", self.ttl),
                ("preallocate", self.preallocate),
                ("writableVolumeCount", self.writable_volume_count),
                ("disk", self.disk),
            ]
        )


@dataclass(frozen=True)
class AssignResponse:
    count: int
    fid: FileId
    location: Location

    @classmethod
    def from_dict(cls, data: dict) -> "AssignResponse":
        return cls(
            count=int(data["count"]),
            fid=parse_fid(data["fid"]),
            location=Location.from_dict(data),
        )


@dataclass(frozen=True)
class LookupOptions:
    """Options for :meth:`Master.lookup`. Fields left as None are not sent."""

    collection: Optional[str] = None
    file_id: Optional[FileId] = None
    read: Optional[bool] = None


@dataclass(frozen=True)
class LookupResponse:
    locations: List[Location]

    @classmethod
    def from_dict(cls, data: dict) -> "LookupResponse":
        return cls(locations=[Location.from_dict(item) for item in data["locations"]])


class Master:
    """
    Client for a master server.

    Example:
        ```python
        master = Master.from_str("localhost:9333")
        assigned = await master.assign()
        volume = Volume.from_location(assigned.location)
        await volume.store(assigned.fid, b"Hello World!")
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
            host: Master host name or address
            port: Master port, 9333 if not provided
            client: httpx client to send requests with; a new one per request if not provided
        """
        self.endpoint = EndPoint(host, port)
        self._client = client

    @classmethod
    def from_str(
        cls, address: str, client: Optional[httpx.AsyncClient] = None
    ) -> "Master":
        """
        Create a master client from a "host:port" string.

        Raises:
            MalformedAddress: If the address cannot be parsed
        """
        endpoint = parse_endpoint(address)
        return cls(endpoint.host, endpoint.port, client=client)

    @classmethod
    def from_env(cls, client: Optional[httpx.AsyncClient] = None) -> "Master":
        """Create a master client from the WEED_MASTER environment variable."""
        return cls.from_str(get_settings().WEED_MASTER, client=client)

    def __repr__(self) -> str:
        return f"Master({self.endpoint.base_url!r})"

    async def assign(self, options: Optional[AssignOptions] = None) -> AssignResponse:
        """
        Ask the master for a new file id.

        Args:
            options: Placement and allocation options

        Returns:
            AssignResponse: The file id, how many ids were reserved and where to upload

        Raises:
            InvalidRequest: If the master does not answer with 200
            TransportFailure: If the request fails or the answer cannot be decoded
        """
        params = (options or AssignOptions()).to_query()
        resp = await send_request(
            self._client, "GET", self.endpoint.url("/dir/assign"), params=params
        )
        if resp.status_code != httpx.codes.OK:
            raise InvalidRequest(resp.text, status=resp.status_code)

        payload = decode_json(resp)
        try:
            assigned = AssignResponse.from_dict(payload)
        except (KeyError, TypeError, ValueError) as exc:
            raise TransportFailure(f"Unexpected assign response: {payload}") from exc

        logger.debug("assigned %s on %s", assigned.fid, assigned.location.url)
        return assigned

    async def lookup(
        self, fid: FileId, options: Optional[LookupOptions] = None
    ) -> LookupResponse:
        """
        Find the volume servers holding the volume of a file id.

        Locations are returned in the order reported by the master.

        Raises:
            InvalidRequest: If the master does not answer with 200
            TransportFailure: If the request fails or the answer cannot be decoded
        """
        options = options or LookupOptions()
        params = encode_query(
            [
                ("volumeId", fid.volume_id),
                ("collection", options.collection),
                ("fileId", options.file_id),
                ("read", options.read),
            ]
        )
        resp = await send_request(
            self._client,
            "GET",
            self.endpoint.url("/dir/lookup"),
            params=params,
            fid=str(fid),
        )
        if resp.status_code != httpx.codes.OK:
            raise InvalidRequest(resp.text, status=resp.status_code, fid=str(fid))

        payload = decode_json(resp, fid=str(fid))
        try:
            return LookupResponse.from_dict(payload)
        except (KeyError, TypeError) as exc:
            raise TransportFailure(
                f"Unexpected lookup response: {payload}", fid=str(fid)
            ) from exc
