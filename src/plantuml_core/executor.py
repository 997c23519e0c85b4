"""
PlantUML Render Executor

Turns diagram source plus a requested format into rendered bytes by handing
the source to the engine adapter and classifying what comes back.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .config import EngineConfig
from .engine import EngineAdapter, SubprocessEngine
from .errors import (
    EmptyInput,
    EmptyOutput,
    InvalidValidationOutput,
    OutputTooLarge,
    RenderFailed,
)
from .formats import DiagramFormat

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """A successfully rendered artifact."""
    content: bytes
    content_type: str
    format: DiagramFormat


class PlantUMLExecutor:
    """Renders PlantUML source through an engine adapter."""

    def __init__(self, engine: Optional[EngineAdapter] = None,
                 config: Optional[EngineConfig] = None):
        """Initialize executor; configuration is resolved once, here."""
        self.config = config or EngineConfig.from_env()
        self.engine = engine or SubprocessEngine(self.config)

    def generate(self, source: str, fmt: DiagramFormat) -> RenderResult:
        """
        Generate a diagram from PlantUML source.

        Args:
            source: PlantUML diagram source
            fmt: Requested output format

        Returns:
            RenderResult with the engine's stdout and the format's content type

        Raises:
            EmptyInput: source is empty or whitespace only (engine not run)
            RenderFailed: engine exited non-zero, even if it wrote output
                (or too much output)
            OutputTooLarge: engine exited cleanly but its output went past the cap
            EmptyOutput: engine exited cleanly without output (syntax error)
            EngineUnavailable, RenderTimeout, OutputTooLarge: from the adapter
        """
        if not source.strip():
            raise EmptyInput()

        fmt = DiagramFormat(fmt)
        logger.debug("Generating %s diagram (%d chars source)", fmt.flag, len(source))

        output = self.engine.invoke(source.encode("utf-8"), fmt.flag)

        if output.returncode != 0:
            logger.info("PlantUML exited with status %d", output.returncode)
            raise RenderFailed(output.returncode, output.stderr_text)

        if output.truncated:
            raise OutputTooLarge(output.stdout_total or len(output.stdout),
                                 self.config.max_output_bytes)

        if not output.stdout:
            raise EmptyOutput(output.stderr_text)

        logger.debug("Generated %d bytes output", len(output.stdout))
        return RenderResult(
            content=output.stdout,
            content_type=fmt.content_type,
            format=fmt,
        )

    def validate(self, source: str) -> str:
        """Check PlantUML syntax; returns the engine's text report."""
        result = self.generate(source, DiagramFormat.TXT)
        try:
            return result.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidValidationOutput(e) from e
