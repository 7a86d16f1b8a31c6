from .query import encode_query
from .send import (
    DEFAULT_PORT,
    EndPoint,
    decode_json,
    parse_endpoint,
    send_request,
)

__all__ = [
    "DEFAULT_PORT",
    "EndPoint",
    "decode_json",
    "encode_query",
    "parse_endpoint",
    "send_request",
]
