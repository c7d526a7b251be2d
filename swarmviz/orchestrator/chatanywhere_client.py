import os
from typing import Any, Dict, Optional

import requests

DEFAULT_URL = "https://api.chatanywhere.tech/v1/chat/completions"


class ChatAnywhereClient:
    """
    Minimal client for the ChatAnywhere OpenAI-compatible endpoint.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = "gpt-4o-mini-2024-07-18",
        url: str = DEFAULT_URL,
        timeout_sec: int = 60,
    ):
        key = api_key or os.getenv("CHATANYWHERE_API_KEY")
        if not key:
            raise RuntimeError("CHATANYWHERE_API_KEY is not set.")
        self.api_key = key
        self.model = model
        self.url = url
        self.timeout_sec = timeout_sec

    def _post(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        r = requests.post(self.url, headers=headers, json=payload, timeout=self.timeout_sec)
        r.raise_for_status()
        return r.json()

    def generate_text(self, prompt: str, temperature: float = 0.2) -> str:
        payload = {
            "model": self.model,
            "temperature": float(temperature),
            "messages": [{"role": "user", "content": prompt}],
        }
        raw = self._post(payload)
        return (raw["choices"][0]["message"]["content"] or "").strip()
