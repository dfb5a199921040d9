from __future__ import annotations

import threading
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings

DEFAULT_SYSTEM_PROMPT = (
    "You are generating social interaction messages between two colonists. "
    "Keep responses immersive, brief, and fitting the game's tone. "
    "Responses should be a single sentence within quotes. "
    "Make it more detailed and personality-driven, considering their traits "
    "and relationship."
)


class Settings(BaseSettings):
    OLLAMA_MODEL: str = "llama3.2:3b"
    OLLAMA_ENDPOINT: str = "http://localhost:11434"
    INTERACTION_LLM_ENABLED: bool = True
    TEMPERATURE: float = 0.7
    SYSTEM_PROMPT: str = DEFAULT_SYSTEM_PROMPT

    # Transport timeouts, plus the hard deadline for one generation attempt
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    CONNECT_TIMEOUT_SECONDS: float = 5.0
    GENERATION_DEADLINE_SECONDS: float = 45.0

    DEDUP_MAX_ENTRIES: int = 4096
    DEDUP_TTL_SECONDS: float = 3600.0

    LOG_LEVEL: str = "INFO"
    LOG_FILE: Path | None = None

    model_config = {
        "env_file": str(Path(__file__).resolve().parent.parent.parent / ".env"),
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def generation_config(self) -> GenerationConfig:
        return GenerationConfig(
            model=self.OLLAMA_MODEL,
            endpoint=self.OLLAMA_ENDPOINT,
            enabled=self.INTERACTION_LLM_ENABLED,
            temperature=self.TEMPERATURE,
            system_prompt=self.SYSTEM_PROMPT,
        )


class GenerationConfig(BaseModel):
    """Immutable snapshot of the user-editable generation settings."""

    model_config = ConfigDict(frozen=True)

    model: str
    endpoint: str
    enabled: bool = True
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class ConfigStore:
    """Holds the live GenerationConfig.

    Writers swap in a whole new snapshot; readers take the current one and
    keep using it for the rest of their work, so an edit made while a
    request is in flight never changes that request.
    """

    def __init__(self, initial: GenerationConfig) -> None:
        self._lock = threading.Lock()
        self._current = initial

    def snapshot(self) -> GenerationConfig:
        with self._lock:
            return self._current

    def update(self, **changes) -> GenerationConfig:
        with self._lock:
            merged = self._current.model_dump()
            merged.update(changes)
            self._current = GenerationConfig.model_validate(merged)
            return self._current


settings = Settings()
