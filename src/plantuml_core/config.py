"""Configuration for the PlantUML engine."""

import os

from pydantic import BaseModel, Field

DEFAULT_JAR_PATH = "/opt/plantuml/plantuml.jar"


class EngineConfig(BaseModel):
    """Engine location and per-invocation limits."""

    jar_path: str = Field(default=DEFAULT_JAR_PATH, description="Path to plantuml.jar")
    java_bin: str = Field(default="java", description="Java executable used to launch the jar")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Wall-clock budget per render")
    max_output_mb: int = Field(default=20, gt=0, description="Maximum engine output size in MB")

    @property
    def max_output_bytes(self) -> int:
        return self.max_output_mb * 1024 * 1024

    @classmethod
    def from_env(cls) -> "EngineConfig":
        """Create config from environment variables."""
        return cls(
            jar_path=os.getenv("PLANTUML_JAR", DEFAULT_JAR_PATH),
            java_bin=os.getenv("JAVA_BIN", "java"),
            timeout_seconds=float(os.getenv("PLANTUML_TIMEOUT_SECONDS", "30")),
            max_output_mb=int(os.getenv("PLANTUML_MAX_OUTPUT_MB", "20")),
        )
