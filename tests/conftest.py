"""Shared test fixtures for the PlantUML server."""

import os
import time
from pathlib import Path

import pytest

from plantuml_core.config import EngineConfig
from plantuml_core.engine import EngineAdapter, EngineOutput
from plantuml_core.executor import PlantUMLExecutor

SAMPLE_SOURCE = "@startuml\nAlice -> Bob: Hello\n@enduml"


class FakeEngine(EngineAdapter):
    """Engine stand-in that records calls and replays a canned outcome.

    With no canned outcome it echoes the input wrapped in a fake SVG, so
    callers can tell which request an output belongs to.
    """

    def __init__(self, returncode=0, stdout=None, stderr=b"", delay=0.0, truncated=False):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.delay = delay
        self.truncated = truncated
        self.calls = []

    def invoke(self, input_bytes, format_flag):
        self.calls.append((input_bytes, format_flag))
        if self.delay:
            time.sleep(self.delay)
        stdout = self.stdout
        if stdout is None:
            stdout = b"<svg>" + input_bytes + b"</svg>"
        return EngineOutput(
            self.returncode, stdout, self.stderr,
            truncated=self.truncated,
            stdout_total=len(stdout) * 2 if self.truncated else len(stdout),
        )


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def engine_config(tmp_path):
    return EngineConfig(jar_path=str(tmp_path / "plantuml.jar"), timeout_seconds=5, max_output_mb=1)


@pytest.fixture
def fake_engine():
    return FakeEngine()


@pytest.fixture
def executor(fake_engine, engine_config):
    return PlantUMLExecutor(engine=fake_engine, config=engine_config)


def plantuml_jar():
    """Path to a real plantuml.jar, or None when unavailable."""
    jar = os.getenv("PLANTUML_JAR", "/opt/plantuml/plantuml.jar")
    return jar if Path(jar).is_file() else None
