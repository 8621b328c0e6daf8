"""
AI backend: Google Gemini
Uses gemini-2.5-flash-lite (override with GEMINI_MODEL) and returns plain text.
Requires GEMINI_API_KEY in environment.
"""
import os
import json

from google import genai
from google.genai import types

from errors import AnalyzerError
from image_processor import parse_data_uri

DEFAULT_MODEL = "gemini-2.5-flash-lite"


def _quota_message(msg: str) -> str:
    retry = ""
    try:
        data = json.loads(msg[msg.index("{"):])
        details = data.get("error", {}).get("details", [])
        for d in details:
            if d.get("@type", "").endswith("RetryInfo"):
                retry = f" Retry after: {d['retryDelay']}."
    except (ValueError, AttributeError, KeyError):
        pass  # no structured details in the message
    return (
        f"Gemini API quota exceeded — free tier limit reached.{retry} "
        "Generate a new key at https://aistudio.google.com/apikey "
        "or wait and try again."
    )


def call(image_data_uri: str, prompt: str) -> str:
    """Send an image + prompt to Gemini and return the text response.

    Args:
        image_data_uri: Image as a base64 data URI.
        prompt:         Text prompt to send alongside the image.

    Returns:
        The model's answer as plain text.
    """
    api_key = os.environ.get("GEMINI_API_KEY")
    if not api_key:
        raise AnalyzerError(
            "GEMINI_API_KEY is not set. Copy .env.example to .env and add your key."
        )
    model = os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL

    try:
        mime_type, image_bytes = parse_data_uri(image_data_uri)
    except ValueError as e:
        raise AnalyzerError(f"Could not decode the image: {e}")

    client = genai.Client(api_key=api_key)

    try:
        response = client.models.generate_content(
            model=model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                prompt,
            ],
            config=types.GenerateContentConfig(max_output_tokens=4096),
        )
    except Exception as e:
        msg = str(e)
        if "429" in msg or "RESOURCE_EXHAUSTED" in msg:
            raise AnalyzerError(_quota_message(msg)) from e
        raise AnalyzerError(msg) from e

    text = (response.text or "").strip()
    if not text:
        raise AnalyzerError("AI returned an empty response.")
    return text
