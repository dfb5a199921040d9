"""Wire format for the generation backend.

Requests are JSON objects ``{model, prompt, temperature, stream, system}``
with the temperature sent as a one-decimal string. A successful response
carries the generated text in ``response`` followed by the ``done``
sentinel. Responses come from a loosely specified source, so decoding
never raises: anything unexpected decodes to ``None``.
"""

from __future__ import annotations

import json
import logging

from pydantic import BaseModel, ConfigDict, field_serializer

from social_llm.config import GenerationConfig
from social_llm.generation.constants import DONE_FIELD, RESPONSE_FIELD

logger = logging.getLogger(__name__)

_WRAPPING_QUOTES = (('"', '"'), ("“", "”"), ("'", "'"))


class GenerationRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: str
    prompt: str
    temperature: float
    stream: bool = False
    system: str = ""

    @field_serializer("temperature")
    def _format_temperature(self, value: float) -> str:
        return f"{value:.1f}"

    @classmethod
    def from_config(cls, config: GenerationConfig, prompt: str) -> GenerationRequest:
        return cls(
            model=config.model,
            prompt=prompt,
            temperature=config.temperature,
            stream=False,
            system=config.system_prompt,
        )


def encode(request: GenerationRequest) -> bytes:
    """Serialize a request body. Quotes and control characters are escaped."""
    return request.model_dump_json().encode("utf-8")


def _unwrap_quotes(text: str) -> str:
    text = text.strip()
    for opening, closing in _WRAPPING_QUOTES:
        if len(text) >= 2 and text.startswith(opening) and text.endswith(closing):
            inner = text[len(opening):-len(closing)].strip()
            # Only unwrap a single quoted sentence, not '"a" and "b"'
            if opening not in inner and closing not in inner:
                return inner
    return text


def _extract(payload: object) -> str | None:
    if not isinstance(payload, dict):
        return None
    if DONE_FIELD not in payload:
        return None
    value = payload.get(RESPONSE_FIELD)
    if not isinstance(value, str):
        return None
    return value


def _decode_lines(body: str) -> str | None:
    """Accept a line-delimited stream of partial responses."""
    fragments: list[str] = []
    last: object = None
    for line in body.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            last = json.loads(line)
        except ValueError:
            return None
        if not isinstance(last, dict) or not isinstance(last.get(RESPONSE_FIELD), str):
            return None
        fragments.append(last[RESPONSE_FIELD])
    if not isinstance(last, dict) or last.get(DONE_FIELD) is not True:
        return None
    return "".join(fragments)


def decode(raw: bytes | str | None) -> str | None:
    """Extract the generated text from a response body, or None."""
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray)):
        body = bytes(raw).decode("utf-8", errors="replace")
    else:
        body = str(raw)
    body = body.strip()
    if not body:
        return None

    try:
        try:
            text = _extract(json.loads(body))
        except ValueError:
            text = _decode_lines(body) if "\n" in body else None
    except RecursionError:
        logger.warning("Response body nested too deeply to decode")
        return None

    if text is None:
        logger.debug("No %r/%r fields in response body", RESPONSE_FIELD, DONE_FIELD)
        return None

    text = _unwrap_quotes(text)
    return text or None
