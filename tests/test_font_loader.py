import asyncio

import pytest
import requests
from conftest import FakeMeasurer

from wireframe_svg.errors import FontLoadError
from wireframe_svg.font_loader import FontLoader


class FakeResponse:
    def __init__(self, content: bytes, status_code: int = 200) -> None:
        self.content = content
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError(f"{self.status_code} Client Error")


class FakeSession:
    def __init__(self, response: FakeResponse | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[tuple[str, float]] = []

    def get(self, url: str, timeout: float) -> FakeResponse:
        self.calls.append((url, timeout))
        if self.error:
            raise self.error
        return self.response


def test_fetch_over_http_uses_session():
    session = FakeSession(FakeResponse(b"ttf"))
    loader = FontLoader(timeout=5, session=session)

    assert loader.fetch("https://cdn.example.com/font.ttf") == b"ttf"
    assert session.calls == [("https://cdn.example.com/font.ttf", 5)]


def test_http_error_status_raises_font_load_error():
    loader = FontLoader(session=FakeSession(FakeResponse(b"", status_code=404)))

    with pytest.raises(FontLoadError) as excinfo:
        loader.fetch("https://cdn.example.com/missing.ttf")
    assert excinfo.value.source == "https://cdn.example.com/missing.ttf"
    assert "404" in excinfo.value.reason


def test_connection_error_raises_font_load_error():
    loader = FontLoader(session=FakeSession(error=requests.exceptions.ConnectionError("refused")))

    with pytest.raises(FontLoadError, match="refused"):
        loader.fetch("http://localhost:1/font.ttf")


def test_fetch_reads_local_paths_and_file_urls(tmp_path):
    font_path = tmp_path / "hand.ttf"
    font_path.write_bytes(b"local-font")
    loader = FontLoader(session=FakeSession())

    assert loader.fetch(str(font_path)) == b"local-font"
    assert loader.fetch(font_path.as_uri()) == b"local-font"


def test_missing_local_file_raises_font_load_error(tmp_path):
    with pytest.raises(FontLoadError):
        FontLoader(session=FakeSession()).fetch(str(tmp_path / "nope.ttf"))


def test_load_registers_with_measurer(tmp_path):
    font_path = tmp_path / "hand.ttf"
    font_path.write_bytes(b"local-font")
    measurer = FakeMeasurer()

    asyncio.run(FontLoader(session=FakeSession()).load("Hand", str(font_path), measurer))

    assert measurer.registered == {"Hand": b"local-font"}


def test_local_paths_can_be_refused(tmp_path):
    font_path = tmp_path / "hand.ttf"
    font_path.write_bytes(b"local-font")
    loader = FontLoader(session=FakeSession(), allow_local_paths=False)

    for location in (str(font_path), font_path.as_uri(), str(tmp_path / "missing.ttf")):
        with pytest.raises(FontLoadError) as excinfo:
            loader.fetch(location)
        assert excinfo.value.reason == "only http and https font URLs are accepted"


def test_refusing_local_paths_still_fetches_http():
    session = FakeSession(FakeResponse(b"ttf"))
    loader = FontLoader(session=session, allow_local_paths=False)
    assert loader.fetch("https://cdn.example.com/font.ttf") == b"ttf"
