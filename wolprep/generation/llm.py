"""Chat-completion calls to the OpenAI API.

One request in flight at a time; no retries beyond the SDK defaults.
"""

import os
import json
import time
import logging
from typing import Optional

from wolprep.config import OPENAI_API_KEY, MODEL, MODEL_STRONG, MAX_TOKENS, MAX_TOKENS_JSON
from wolprep.errors import ConfigError

logger = logging.getLogger(__name__)


def system(content: str) -> dict:
    return {"role": "system", "content": content}


def user(content: str) -> dict:
    return {"role": "user", "content": content}


class ChatClient:
    """Thin wrapper over ``chat.completions.create``."""

    def __init__(self, api_key: Optional[str] = None, model: str = MODEL,
                 strong_model: str = MODEL_STRONG, client=None):
        if client is None:
            from openai import OpenAI
            api_key = api_key or os.environ.get("OPENAI_API_KEY", "") or OPENAI_API_KEY
            if not api_key:
                raise ConfigError("OPENAI_API_KEY is not configured in the environment.")
            client = OpenAI(api_key=api_key)
        self.client = client
        self.model = model
        self.strong_model = strong_model

    def _create(self, messages: list, model: str, **kwargs):
        logger.debug("calling %s with %d messages", model, len(messages))
        t0 = time.time()
        completion = self.client.chat.completions.create(
            model=model, messages=messages, **kwargs)
        logger.debug("%s call done in %.1fs, usage: %s",
                     model, time.time() - t0, getattr(completion, "usage", None))
        return completion.choices[0].message.content

    def text(self, messages: list, strong: bool = False) -> str:
        """Free-text answer."""
        model = self.strong_model if strong else self.model
        return self._create(messages, model, max_tokens=MAX_TOKENS).strip()

    def json(self, messages: list, strong: bool = False) -> dict:
        """Answer constrained to a JSON object, parsed."""
        model = self.strong_model if strong else self.model
        content = self._create(messages, model, max_tokens=MAX_TOKENS_JSON,
                               response_format={"type": "json_object"})
        return json.loads(content)
