"""
AI client dispatcher.
Selects the active backend based on the AI_PROVIDER environment variable
and delegates all calls to it.

Supported backends (ai_backends/<name>.py, each must expose call()):
  gemini_api  — Google Gemini via google-genai SDK (default)

To add a new backend:
  1. Create ai_backends/my_provider.py with a call() function matching the signature below.
  2. Set AI_PROVIDER=my_provider in .env.
"""
import os
import importlib

from dotenv import load_dotenv

from errors import AnalyzerError

load_dotenv()


def analyze_image(image_data_uri: str, prompt: str) -> str:
    """Send an image + prompt to the active AI backend and return its text answer.

    Args:
        image_data_uri: Image encoded as a base64 data URI.
        prompt:         Text prompt describing what to tell about the image.

    Returns:
        The model's free-text response.

    Raises:
        AnalyzerError: on any backend failure, with a human-readable message.
    """
    load_dotenv(override=True)  # re-read .env so changes apply without server restart
    provider = os.environ.get("AI_PROVIDER", "gemini_api")
    try:
        backend = importlib.import_module(f"ai_backends.{provider}")
    except ModuleNotFoundError:
        raise AnalyzerError(
            f"AI backend '{provider}' not found. "
            f"Create ai_backends/{provider}.py or change AI_PROVIDER in .env."
        )
    return backend.call(image_data_uri, prompt)
