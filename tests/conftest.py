"""Shared fixtures: temporary output root, settings, fake renderer, client."""

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from pdfhelper.app import build_app
from pdfhelper.config import Settings, init_settings, reset_settings
from pdfhelper.modules.generate.router import get_service
from pdfhelper.modules.generate.service import GenerateService
from pdfhelper.shared.errors import RendererError


class FakePage:
    """Stands in for RenderPage; produces deterministic PDF-ish bytes."""

    def __init__(self, engine: "FakeEngine", number: int) -> None:
        self.engine = engine
        self.number = number
        self.closed = False

    async def render_to_pdf(self, html: str) -> bytes:
        self.engine.events.append(("render", html))
        if html in self.engine.fail_render:
            raise RendererError("Failed to render PDF", error=self.engine.fail_render[html])
        return b"%PDF-1.4\n" + html.encode()

    async def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        self.engine.events.append(("page_close", self.number))


class FakeSession:
    """Stands in for RendererSession without launching a browser."""

    def __init__(self, engine: "FakeEngine") -> None:
        self.engine = engine
        self.pages: list[FakePage] = []
        self.closed = False

    async def __aenter__(self) -> "FakeSession":
        self.engine.events.append("launch")
        if self.engine.fail_launch:
            raise RendererError("Failed to launch renderer", error=self.engine.fail_launch)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def new_page(self) -> FakePage:
        page = FakePage(self.engine, len(self.pages))
        self.pages.append(page)
        self.engine.events.append(("page_open", page.number))
        return page

    async def close(self) -> None:
        if self.closed:
            return
        for page in self.pages:
            await page.close()
        self.closed = True
        self.engine.events.append("session_close")


class FakeEngine:
    """Records everything the orchestrator asks of the renderer."""

    def __init__(self) -> None:
        self.events: list = []
        self.sessions: list[FakeSession] = []
        self.fail_launch: str | None = None
        self.fail_render: dict[str, str] = {}

    def session(self) -> FakeSession:
        session = FakeSession(self)
        self.sessions.append(session)
        return session

    @property
    def launches(self) -> int:
        return self.events.count("launch")

    @property
    def rendered(self) -> list[str]:
        return [e[1] for e in self.events if isinstance(e, tuple) and e[0] == "render"]


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Output root for generated documents."""
    root = tmp_path / "out"
    root.mkdir()
    return root


@pytest.fixture
def settings(temp_dir: Path):
    s = Settings(_env_file=None, save_path=temp_dir, max_generate_bulk=3)
    init_settings(s)
    yield s
    reset_settings()


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def service(settings: Settings, engine: FakeEngine) -> GenerateService:
    return GenerateService(settings=settings, session_factory=engine.session)


@pytest.fixture
def client(settings: Settings, service: GenerateService):
    app = build_app(settings)
    app.dependency_overrides[get_service] = lambda: service
    with TestClient(app) as c:
        yield c
