"""Output formats understood by the PlantUML engine."""

from enum import Enum


class DiagramFormat(str, Enum):
    """Requested artifact kind."""

    SVG = "svg"
    PNG = "png"
    TXT = "txt"  # syntax check / ASCII rendering

    @property
    def flag(self) -> str:
        """Command-line selector passed to the engine."""
        return _FLAGS[self]

    @property
    def content_type(self) -> str:
        """MIME type of the engine output for this format."""
        return _CONTENT_TYPES[self]


_FLAGS = {
    DiagramFormat.SVG: "-tsvg",
    DiagramFormat.PNG: "-tpng",
    DiagramFormat.TXT: "-txt",
}

_CONTENT_TYPES = {
    DiagramFormat.SVG: "image/svg+xml",
    DiagramFormat.PNG: "image/png",
    DiagramFormat.TXT: "text/plain",
}
