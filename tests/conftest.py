import io

import pytest
from werkzeug.datastructures import FileStorage

import error_log

MIB = 1024 * 1024


class FakeAnalyzer:
    """Records calls and returns a canned answer (or raises `error`)."""

    def __init__(self, answer: str = "1. Result:\n- Country: Testland", error: Exception | None = None):
        self.answer = answer
        self.error  = error
        self.calls: list[tuple[str, str]] = []

    def __call__(self, image_data_uri: str, prompt: str) -> str:
        self.calls.append((image_data_uri, prompt))
        if self.error is not None:
            raise self.error
        return self.answer


def make_upload(size: int = 1 * MIB, mimetype: str = "image/jpeg", filename: str = "coin.jpg") -> FileStorage:
    return FileStorage(
        stream=io.BytesIO(b"\xff\xd8\xff" + b"\0" * (size - 3)),
        filename=filename,
        content_type=mimetype,
    )


@pytest.fixture(autouse=True)
def error_log_path(tmp_path, monkeypatch):
    path = tmp_path / "last_error.log"
    monkeypatch.setattr(error_log, "ERROR_LOG", str(path))
    return path


@pytest.fixture
def analyzer():
    return FakeAnalyzer()
