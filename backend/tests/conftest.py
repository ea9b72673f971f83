"""Shared pytest fixtures for the audio converter tests.

Most tests run against a fake ffmpeg so they need no codecs installed; the
fake writes a deterministic output file derived from its input.
"""

import io
import wave
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from audio_converter.core.config import Settings, get_settings
from audio_converter.main import app
from audio_converter.services import transcode as transcode_module


class FakeProcess:
    """Minimal ``subprocess.Popen`` result: a stdout pipe and an exit code."""

    def __init__(self, returncode, output):
        self.returncode = returncode
        self.stdout = io.BytesIO(output)

    def wait(self):
        return self.returncode

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.stdout.close()
        return False


class FakeFfmpeg:
    """Stand-in for ``subprocess.Popen`` that mimics an ffmpeg invocation."""

    def __init__(self):
        self.calls: list[list[str]] = []
        self.kwargs: list[dict] = []
        self.returncode = 0
        self.output = b""
        self.write_output = True

    def __call__(self, cmd, **kwargs):
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        input_path = cmd[cmd.index("-i") + 1]
        output_path = cmd[-1]
        encoder = cmd[cmd.index("-c:a") + 1]
        if self.returncode == 0 and self.write_output:
            data = Path(input_path).read_bytes()
            Path(output_path).write_bytes(f"{encoder}:".encode() + data[::-1])
        return FakeProcess(self.returncode, self.output)


@pytest.fixture
def scratch_dir(tmp_path):
    path = tmp_path / "scratch"
    path.mkdir()
    return path


@pytest.fixture
def test_settings(scratch_dir):
    return Settings(temp_dir=str(scratch_dir), ffmpeg_binary="ffmpeg")


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    fake = FakeFfmpeg()
    monkeypatch.setattr(transcode_module.subprocess, "Popen", fake)
    return fake


@pytest.fixture
def client(test_settings):
    """TestClient with the scratch directory pointed at a temp dir."""
    app.dependency_overrides[get_settings] = lambda: test_settings
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def sample_wav_bytes():
    """One second of 16-bit mono silence at 22050 Hz."""
    buf = io.BytesIO()
    with wave.open(buf, "wb") as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(22050)
        wf.writeframes(b"\x00" * 22050 * 2)
    return buf.getvalue()
