"""
Python client for the master and volume servers of a SeaweedFS cluster.

Ask the master for a file id, then store, fetch and delete content on the
volume server it points to.
"""

import logging

from .errors import (
    FileNotFound,
    InvalidRequest,
    MalformedAddress,
    MalformedHandle,
    NotAccepted,
    NotCreated,
    TransportFailure,
    WeedError,
)
from .fid import FileId, format_fid, parse_fid
from .master import AssignOptions, AssignResponse, LookupOptions, LookupResponse, Master
from .types import TTL, Location, ReplicationType, ReplicationValue, TTLUnit
from .volume import (
    DeleteResponse,
    FetchMode,
    FetchOptions,
    StoreOptions,
    StoreResponse,
    Volume,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AssignOptions",
    "AssignResponse",
    "DeleteResponse",
    "FetchMode",
    "FetchOptions",
    "FileId",
    "FileNotFound",
    "InvalidRequest",
    "Location",
    "LookupOptions",
    "LookupResponse",
    "MalformedAddress",
    "MalformedHandle",
    "Master",
    "NotAccepted",
    "NotCreated",
    "ReplicationType",
    "ReplicationValue",
    "StoreOptions",
    "StoreResponse",
    "TTL",
    "TTLUnit",
    "TransportFailure",
    "Volume",
    "WeedError",
    "format_fid",
    "parse_fid",
]
