"""Shared fixtures: an in-memory master and volume server behind httpx.MockTransport."""

from __future__ import annotations

from dataclasses import dataclass, field

import httpx
import pytest

from weedclient import Master, Volume

MASTER_HOST = "master"
VOLUME_ADDRESS = "volume:8080"


def _json(status: int, payload: dict) -> httpx.Response:
    return httpx.Response(status, json=payload)


def _multipart_file(request: httpx.Request) -> bytes:
    """Return the body of the first part that carries a filename."""
    content_type = request.headers["Content-Type"]
    boundary = content_type.split("boundary=", 1)[1].encode()
    for part in request.content.split(b"--" + boundary):
        headers, _, body = part.partition(b"\r\n\r\n")
        if b"filename=" in headers:
            return body[: -len(b"\r\n")] if body.endswith(b"\r\n") else body
    raise AssertionError("no file part in multipart body")


@dataclass
class FakeCluster:
    """Tiny model of a master with one volume server."""

    volume_id: int = 3
    objects: dict[str, bytes] = field(default_factory=dict)
    requests: list[httpx.Request] = field(default_factory=list)
    _next_key: int = 0x01637037D6

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == MASTER_HOST:
            return self._handle_master(request)
        return self._handle_volume(request)

    def _handle_master(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/dir/assign":
            count = int(request.url.params.get("count", "1"))
            fid = f"{self.volume_id},{self._next_key:x}"
            self._next_key += 1
            return _json(200, {
                "count": count,
                "fid": fid,
                "publicUrl": VOLUME_ADDRESS,
                "url": VOLUME_ADDRESS,
            })
        if request.url.path == "/dir/lookup":
            if request.url.params.get("volumeId") != str(self.volume_id):
                return _json(404, {"error": "volume id not found"})
            return _json(200, {
                "locations": [{"publicUrl": VOLUME_ADDRESS, "url": VOLUME_ADDRESS}]
            })
        return httpx.Response(404, text="not found")

    def _handle_volume(self, request: httpx.Request) -> httpx.Response:
        fid = request.url.path.lstrip("/")
        if request.method == "PUT":
            self.objects[fid] = request.content
            return _json(201, {"size": len(request.content), "eTag": "1f3a9d2c"})
        if request.method == "POST":
            data = _multipart_file(request)
            self.objects[fid] = data
            return _json(201, {"name": "hello.txt", "size": len(data), "eTag": "7be2b1aa"})
        if request.method == "GET":
            if fid not in self.objects:
                return httpx.Response(404)
            return httpx.Response(200, content=self.objects[fid])
        if request.method == "DELETE":
            data = self.objects.pop(fid, None)
            if data is None:
                return _json(404, {"error": "not found"})
            return _json(202, {"size": len(data)})
        return httpx.Response(405, text="method not allowed")


@pytest.fixture
def cluster():
    return FakeCluster()


@pytest.fixture
def http_client(cluster):
    return httpx.AsyncClient(transport=httpx.MockTransport(cluster.handle))


@pytest.fixture
def master(http_client):
    return Master(MASTER_HOST, 9333, client=http_client)


@pytest.fixture
def volume(http_client):
    return Volume.from_str(VOLUME_ADDRESS, client=http_client)


@pytest.fixture
def client_for():
    """Build an httpx client whose requests are answered by a handler."""

    def make_client(handler) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return make_client
