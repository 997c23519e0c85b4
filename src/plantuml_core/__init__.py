"""
PlantUML rendering core.

Decodes PlantUML's URL-safe text encoding and drives the PlantUML engine as a
subprocess in pipe mode. Nothing here depends on the HTTP layer.
"""

from .encoding import decode, encode
from .errors import DiagramError
from .executor import PlantUMLExecutor, RenderResult
from .formats import DiagramFormat

__version__ = "0.1.0"

__all__ = [
    "decode",
    "encode",
    "DiagramError",
    "DiagramFormat",
    "PlantUMLExecutor",
    "RenderResult",
]
