"""
Shared test fixtures for the PCA viewer tests.
"""
import json
import sys
from pathlib import Path

import pytest
import requests

# Add src/ to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from analysis_result import AnalysisResult
from file_selection import SelectedFile


class FakeResponse:
    """Minimal stand-in for requests.Response."""

    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


@pytest.fixture
def sample_payload():
    """Five points, three components."""
    return {
        "points": [
            {"x": float(i), "y": -0.5 * i, "label": f"frame_{i:03d}.xyz"}
            for i in range(5)
        ],
        "explained_variance_ratio_all": [0.6, 0.25, 0.15],
        "cumulative_variance_ratio_all": [0.6, 0.85, 1.0],
    }


@pytest.fixture
def sample_result(sample_payload):
    return AnalysisResult.from_payload(sample_payload)


@pytest.fixture
def xyz_files():
    return [
        SelectedFile(name="a.xyz", data=b"0 0 0\n1 1 1\n"),
        SelectedFile(name="c.xyz", data=b"2 2 2\n"),
    ]


@pytest.fixture
def fake_post(monkeypatch):
    """Patch requests.post; set ``fake_post.response`` or ``.error`` per test."""

    class _FakePost:
        def __init__(self):
            self.calls = []
            self.response = FakeResponse(200, {})
            self.error = None

        def __call__(self, url, **kwargs):
            self.calls.append((url, kwargs))
            if self.error is not None:
                raise self.error
            return self.response

    fake = _FakePost()
    monkeypatch.setattr(requests, "post", fake)
    return fake
