from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from wireframe_svg.models.wireframe import Control, Wireframe
from wireframe_svg.renderer import Renderer
from wireframe_svg.svg_surface import SvgSurface
from wireframe_svg.text_metrics import FontSpec, TextMetrics

DATA_DIR = Path(__file__).resolve().parents[1] / "data" / "wireframes"

CHAR_WIDTH = 6.0
ASCENT = 10.0


class FakeMeasurer:
    """Deterministic metrics: fixed advance per character, fixed ascent."""

    def __init__(self) -> None:
        self.registered: dict[str, bytes] = {}
        self.measured: list[tuple[str, FontSpec]] = []

    def measure(self, text: str, font: FontSpec) -> TextMetrics:
        self.measured.append((text, font))
        return TextMetrics(width=CHAR_WIDTH * len(text), ascent=ASCENT)

    def register_font(self, family: str, data: bytes) -> None:
        self.registered[family] = data


def load_fixture(name: str) -> Wireframe:
    return Wireframe.model_validate(json.loads((DATA_DIR / f"{name}.json").read_text(encoding="utf-8")))


def make_control(type_id: str, **fields: Any) -> Control:
    fields.setdefault("x", "0")
    fields.setdefault("y", "0")
    return Control.model_validate({"typeID": type_id, **fields})


@pytest.fixture
def measurer() -> FakeMeasurer:
    return FakeMeasurer()


@pytest.fixture
def surface() -> SvgSurface:
    return SvgSurface()


@pytest.fixture
def renderer(surface: SvgSurface, measurer: FakeMeasurer) -> Renderer:
    return Renderer(surface, "sans-serif", measurer)
