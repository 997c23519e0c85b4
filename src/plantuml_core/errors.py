"""Error taxonomy for decoding and rendering."""

from typing import Any, Dict, Optional


class DiagramError(Exception):
    """Base class for every classified failure raised by the core.

    ``code`` and ``status_code`` are fixed per subclass; ``diagnostic`` holds
    whatever detail explains the failure (engine stderr, decoder cause, ...).
    """

    code = "DIAGRAM_ERROR"
    status_code = 500
    client_error = False

    def __init__(self, message: str, diagnostic: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.diagnostic = diagnostic

    def to_detail(self) -> Dict[str, Any]:
        """Structured error detail in the shape used by API error responses."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.diagnostic,
        }


# Client-input errors

class InvalidEncoding(DiagramError):
    code = "INVALID_ENCODING"
    status_code = 400
    client_error = True

    def __init__(self, character: str, position: int):
        super().__init__(
            f"Invalid character in encoding: {character!r}",
            f"Character {character!r} at position {position} is not in the PlantUML alphabet",
        )
        self.character = character
        self.position = position


class Base64DecodeFailed(DiagramError):
    code = "BASE64_DECODE_FAILED"
    status_code = 400
    client_error = True

    def __init__(self, cause: Exception):
        super().__init__("Base64 decode failed", str(cause))
        self.cause = cause


class DecompressionFailed(DiagramError):
    code = "DECOMPRESSION_FAILED"
    status_code = 400
    client_error = True

    def __init__(self, cause: Exception):
        super().__init__("Decompression failed", str(cause))
        self.cause = cause


class InvalidSourceText(DiagramError):
    code = "INVALID_SOURCE_TEXT"
    status_code = 400
    client_error = True

    def __init__(self, cause: Exception):
        super().__init__("Invalid UTF-8 in diagram source", str(cause))
        self.cause = cause


class EmptyInput(DiagramError):
    code = "EMPTY_INPUT"
    status_code = 400
    client_error = True

    def __init__(self):
        super().__init__("Empty PlantUML source")


class EmptyOutput(DiagramError):
    """Engine exited cleanly but wrote nothing; PlantUML's way of reporting a syntax error."""

    code = "EMPTY_OUTPUT"
    status_code = 422
    client_error = True

    def __init__(self, stderr: str):
        super().__init__("PlantUML generated empty output", stderr)
        self.stderr = stderr


class RenderFailed(DiagramError):
    code = "RENDER_FAILED"
    status_code = 422
    client_error = True

    def __init__(self, returncode: int, stderr: str):
        super().__init__(f"PlantUML process failed with exit status {returncode}", stderr)
        self.returncode = returncode
        self.stderr = stderr


# Server / environment errors

class EngineUnavailable(DiagramError):
    code = "ENGINE_UNAVAILABLE"
    status_code = 503

    def __init__(self, reason: str):
        super().__init__("PlantUML engine could not be launched", reason)


class RenderTimeout(DiagramError):
    code = "RENDER_TIMEOUT"
    status_code = 504

    def __init__(self, timeout_seconds: float):
        super().__init__(
            f"PlantUML process timed out after {timeout_seconds} seconds",
            "The engine was killed",
        )
        self.timeout_seconds = timeout_seconds


class OutputTooLarge(DiagramError):
    code = "OUTPUT_TOO_LARGE"
    status_code = 502

    def __init__(self, size: int, limit: int):
        super().__init__(
            "PlantUML output exceeds the configured limit",
            f"Received {size} bytes, limit is {limit} bytes",
        )
        self.size = size
        self.limit = limit


class InvalidValidationOutput(DiagramError):
    code = "INVALID_VALIDATION_OUTPUT"
    status_code = 502

    def __init__(self, cause: Exception):
        super().__init__("Failed to decode PlantUML text output", str(cause))
        self.cause = cause
