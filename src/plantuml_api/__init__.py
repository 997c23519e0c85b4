"""
HTTP API for the PlantUML rendering service.

This module provides a FastAPI-based REST API that wraps the rendering core,
accepting diagram source in request bodies or as encoded URL tokens.
"""

__version__ = "0.1.0"
