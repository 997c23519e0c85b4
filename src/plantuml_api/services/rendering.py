"""Rendering service that bridges HTTP requests to the PlantUML core."""

import logging
from typing import Optional

from starlette.concurrency import run_in_threadpool

from plantuml_core.encoding import decode
from plantuml_core.errors import InvalidSourceText
from plantuml_core.executor import PlantUMLExecutor, RenderResult
from plantuml_core.formats import DiagramFormat

logger = logging.getLogger(__name__)


class RenderService:
    """Service for rendering raw or encoded diagram source."""

    def __init__(self, executor: Optional[PlantUMLExecutor] = None):
        self.executor = executor or PlantUMLExecutor()

    async def render_source(self, body: bytes, fmt: DiagramFormat) -> RenderResult:
        """
        Render diagram source received as raw request bytes.

        Args:
            body: Request body, expected to be UTF-8 PlantUML source
            fmt: Requested output format

        Returns:
            RenderResult from the executor
        """
        try:
            source = body.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSourceText(e) from e

        # The executor blocks on the engine process; keep it off the event loop.
        return await run_in_threadpool(self.executor.generate, source, fmt)

    async def render_encoded(self, encoded: str, fmt: DiagramFormat) -> RenderResult:
        """Decode a PlantUML URL token, then render it like a request body."""
        source = await run_in_threadpool(decode, encoded)
        logger.debug("Decoded PlantUML source (%d chars)", len(source))
        return await run_in_threadpool(self.executor.generate, source, fmt)
