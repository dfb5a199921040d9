from social_llm.models.interaction import (
    Agent,
    InteractionEvent,
    LogEntry,
    Notification,
    Severity,
)

__all__ = [
    "Agent",
    "InteractionEvent",
    "LogEntry",
    "Notification",
    "Severity",
]
