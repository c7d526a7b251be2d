from __future__ import annotations

import os
from typing import Optional

from google import genai

DEFAULT_MODEL = "gemini-2.5-flash"


class GeminiClient:
    def __init__(self, model: Optional[str] = None, api_key: Optional[str] = None):
        key = api_key or os.getenv("GEMINI_API_KEY") or os.getenv("GOOGLE_API_KEY")
        if not key:
            raise RuntimeError("GEMINI_API_KEY (or GOOGLE_API_KEY) is not set.")
        self.client = genai.Client(api_key=key)
        self.model = model or os.getenv("GEMINI_MODEL") or DEFAULT_MODEL

    def generate_text(self, prompt: str) -> str:
        resp = self.client.models.generate_content(
            model=self.model,
            contents=prompt,
        )
        return (resp.text or "").strip()
