import asyncio
import io
import os
import sys
from pathlib import Path
from types import SimpleNamespace
from typing import List, Optional

import pytest
import httpx
import openai
from fastapi.testclient import TestClient
from PIL import Image

# Ensure project root is on sys.path so the top-level packages are importable during tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("OPENAI_API_KEY", "test-key")

from models.errors import TransportError  # noqa: E402
from services.image_assets import materialize_image  # noqa: E402


def make_image_bytes(color=(200, 120, 40), size=(16, 12), fmt="PNG") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


def make_image_ref(color=(200, 120, 40), filename: str = "room.png"):
    return materialize_image(make_image_bytes(color), filename=filename)


class FakeDesignClient:
    """Stand-in for RoomDesignClient with scripted answers.

    `object_labels`, `structure_labels` and `designs` are consumed one entry
    per call; an entry that is an exception instance is raised instead.
    """

    def __init__(self) -> None:
        self.object_labels: List = []
        self.structure_labels: List = []
        self.designs: List = []
        self.requests = []
        self.gate: Optional[asyncio.Event] = None

    async def _answer(self, queue: List):
        if self.gate is not None:
            await self.gate.wait()
        answer = queue.pop(0) if queue else []
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def detect_objects(self, image):
        return await self._answer(self.object_labels)

    async def detect_structural_elements(self, image):
        return await self._answer(self.structure_labels)

    async def generate(self, request):
        self.requests.append(request)
        return await self._answer(self.designs)


class FakeResponses:
    def __init__(self) -> None:
        self.calls = []
        self.response = SimpleNamespace(output=[], output_text="", usage=None)
        self.error: Optional[Exception] = None

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.response


class FakeImages:
    """Images API stub returning one scripted outcome per call."""

    def __init__(self) -> None:
        self.calls = []
        self.outcomes: List = []

    async def edit(self, **kwargs):
        self.calls.append(kwargs)
        outcome = self.outcomes.pop(0) if self.outcomes else None
        if isinstance(outcome, Exception):
            raise outcome
        data = [] if outcome is None else [SimpleNamespace(b64_json=outcome)]
        return SimpleNamespace(data=data)


class FakeOpenAI:
    def __init__(self) -> None:
        self.responses = FakeResponses()
        self.images = FakeImages()


def connection_error():
    return openai.APIConnectionError(request=httpx.Request("POST", "https://api.openai.com/v1/images/edits"))


@pytest.fixture()
def png_bytes() -> bytes:
    return make_image_bytes()


@pytest.fixture()
def room_image():
    return make_image_ref()


@pytest.fixture()
def fake_design_client() -> FakeDesignClient:
    return FakeDesignClient()


@pytest.fixture()
def fake_openai() -> FakeOpenAI:
    return FakeOpenAI()


@pytest.fixture()
def transport_error() -> TransportError:
    return TransportError("connection reset")


@pytest.fixture()
def app(fake_design_client):
    # lazy import after env configured
    from main import create_app
    from services.session.session_store import SessionStore

    application = create_app()
    application.state.design_client = fake_design_client
    application.state.session_store = SessionStore()
    return application


@pytest.fixture()
def client(app) -> TestClient:
    # lifespan is not entered, so app.state keeps the fakes set above
    return TestClient(app)


@pytest.fixture()
def make_designs():
    def _make(count: int):
        return [make_image_ref((10 * i, 50, 90), f"ai-design-{i + 1}.png") for i in range(count)]

    return _make


@pytest.fixture()
def api_connection_error():
    return connection_error
