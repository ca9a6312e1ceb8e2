import json
import httpx
import pytest
from fastapi.testclient import TestClient
from main import app
from routers.mcbb import get_resolver
from utils.fetcher import RemoteFetcher
from utils.registry import registry
from utils.resolver import VersionResolver

ALIYUN_MANIFEST_URL = "https://mirrors.aliyun.com/minecraft/version_manifest.json"
ALIYUN_DETAIL_URL = "https://mirrors.aliyun.com/minecraft/v1/1.20.1.json"
MOJANG_MANIFEST_URL = "https://launchermeta.mojang.com/mc/game/version_manifest.json"
MOJANG_DETAIL_URL = "https://launcher.mojang.com/v1/1.20.1.json"

CLIENT_SHA1 = "0c3ec587af28e5a785c0b4a7b8a30f9a8f78f838"

MANIFEST = {
    "latest": {"release": "1.20.1", "snapshot": "23w31a"},
    "versions": [
        {
            "id": "23w31a",
            "type": "snapshot",
            "url": "https://launcher.mojang.com/v1/23w31a.json",
            "releaseTime": "2023-08-01T12:52:36+00:00"
        },
        {
            "id": "1.20.1",
            "type": "release",
            "url": MOJANG_DETAIL_URL,
            "releaseTime": "2023-06-12T13:25:51+00:00"
        },
        {
            "id": "1.20.1",
            "type": "release",
            "url": "https://launcher.mojang.com/v1/duplicate.json",
            "releaseTime": "2023-06-12T13:25:51+00:00"
        },
        {
            "id": "b1.7.3",
            "type": "old_beta",
            "url": "https://launcher.mojang.com/v1/b1.7.3.json",
            "releaseTime": "2011-07-07T22:00:00+00:00"
        }
    ]
}

DETAIL = {
    "id": "1.20.1",
    "downloads": {
        "client": {
            "sha1": CLIENT_SHA1,
            "size": 123456789,
            "url": f"https://launcher.mojang.com/v1/objects/{CLIENT_SHA1}/client.jar"
        },
        "server": {
            "sha1": "84194a2f286ef7c14ed7ce0090dba59902951553",
            "size": 47391447,
            "url": "https://launcher.mojang.com/v1/objects/84194a2f286ef7c14ed7ce0090dba59902951553/server.jar"
        }
    }
}


class FakeMirror:
    """Serves canned responses by URL, answers 404 for anything unknown."""

    def __init__(self):
        self.routes = {}
        self.requested = []

    def add(self, url, payload=None, status_code=200, text=None):
        self.routes[url] = (status_code, text if text is not None else json.dumps(payload))

    def fail(self, url, exc_type=httpx.ConnectError):
        self.routes[url] = exc_type

    def handler(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.requested.append(url)
        route = self.routes.get(url)
        if route is None:
            return httpx.Response(404, text="not found")
        if isinstance(route, type):
            raise route("connection refused", request=request)
        status_code, text = route
        return httpx.Response(status_code, text=text)

    @property
    def transport(self):
        return httpx.MockTransport(self.handler)


@pytest.fixture
def mirror():
    fake = FakeMirror()
    fake.add(ALIYUN_MANIFEST_URL, MANIFEST)
    fake.add(ALIYUN_DETAIL_URL, DETAIL)
    fake.add(MOJANG_MANIFEST_URL, MANIFEST)
    fake.add(MOJANG_DETAIL_URL, DETAIL)
    return fake


@pytest.fixture
def resolver(mirror):
    return VersionResolver(registry, RemoteFetcher(timeout=1, transport=mirror.transport))


@pytest.fixture
def client(resolver):
    app.dependency_overrides[get_resolver] = lambda: resolver
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
