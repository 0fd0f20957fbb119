from __future__ import annotations

import importlib.util
import json
import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent
APP_DIR = REPO_ROOT / "app"
APP_PATH = APP_DIR / "streamlit_app.py"
DATA_PATH = APP_DIR / "data.py"


def _load_module(name: str, path: Path):
    spec = importlib.util.spec_from_file_location(name, path)
    assert spec and spec.loader
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _load_data_module():
    return _load_module("data", DATA_PATH)


def _load_app_module():
    # Ensure app/ is on path so `from data import ...` works inside streamlit_app.
    if str(APP_DIR) not in sys.path:
        sys.path.insert(0, str(APP_DIR))
    return _load_module("streamlit_app", APP_PATH)


class _Upload:
    def __init__(self, name: str, data: bytes):
        self.name = name
        self._data = data

    def getvalue(self) -> bytes:
        return self._data


# ---- data.py tests ----


def test_data_uploads_to_selected_files():
    data = _load_data_module()
    files = data.uploads_to_selected_files(
        [_Upload("a.xyz", b"1 2 3"), _Upload("b.txt", b"")]
    )
    assert [f.name for f in files] == ["a.xyz", "b.txt"]
    assert files[0].data == b"1 2 3"
    assert data.uploads_to_selected_files(None) == []


def test_data_load_result_json(sample_payload):
    data = _load_data_module()
    result = data.load_result_json(json.dumps(sample_payload).encode("utf-8"))
    assert result.n_points == 5
    assert data.load_result_json(data.result_to_json(result)) == result


def test_data_load_result_json_rejects_garbage():
    data = _load_data_module()
    with pytest.raises(ValueError, match="Not a JSON file"):
        data.load_result_json(b"x y z\n")
    with pytest.raises(ValueError, match="Missing field"):
        data.load_result_json(b"{}")


def test_data_format_file_size():
    data = _load_data_module()
    assert data.format_file_size(512) == "512 B"
    assert data.format_file_size(4096) == "4 KB"


# ---- streamlit_app.py tests ----


def test_streamlit_module_has_main():
    module = _load_app_module()
    assert hasattr(module, "main")
