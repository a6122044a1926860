"""Prompt-to-image web app relaying requests to the Gemini image API."""

__version__ = "1.0.0"
