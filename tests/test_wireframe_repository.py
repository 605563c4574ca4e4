import json

import pytest
from conftest import DATA_DIR

from wireframe_svg.errors import WireframeNotFoundError
from wireframe_svg.wireframe_repository import LocalWireframeRepository


def test_loads_document_by_record_id():
    wireframe = LocalWireframeRepository(base_path=DATA_DIR).get(record_id="login-form")
    assert wireframe.mockup.canvas_size == (400, 300)


def test_missing_record_raises_not_found():
    with pytest.raises(WireframeNotFoundError, match="nope"):
        LocalWireframeRepository(base_path=DATA_DIR).get(record_id="nope")


def test_not_found_is_also_a_file_not_found_error():
    with pytest.raises(FileNotFoundError):
        LocalWireframeRepository(base_path=DATA_DIR).get(record_id="")


def test_record_ids_cannot_escape_the_base_directory(tmp_path):
    base = tmp_path / "wireframes"
    base.mkdir()
    (tmp_path / "secret.json").write_text(json.dumps({"mockup": {}}), encoding="utf-8")
    repository = LocalWireframeRepository(base_path=base)

    for record_id in ("../secret", str(tmp_path / "secret")):
        with pytest.raises(WireframeNotFoundError):
            repository.get(record_id=record_id)
