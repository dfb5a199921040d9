from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True, eq=False)
class Agent:
    name: str
    traits: tuple[str, ...] = ()
    # Opinion of other agents, keyed by their name. Positive is favorable.
    opinions: dict[str, float] = field(default_factory=dict)

    def opinion_of(self, other: Agent) -> float:
        return float(self.opinions.get(other.name, 0.0))

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "traits": list(self.traits),
            "opinions": dict(self.opinions),
        }

    @classmethod
    def from_dict(cls, data: dict) -> Agent:
        return cls(
            name=data["name"],
            traits=tuple(data.get("traits", ())),
            opinions=dict(data.get("opinions", {})),
        )


@dataclass(frozen=True, eq=False)
class LogEntry:
    """A record appended to the host's play log.

    Entries compare and hash by identity: the same object delivered twice is
    the same event, two entries with identical text are not.
    """

    text: str
    kind: str = "generic"
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def render(self, pov: Agent | None = None) -> str:
        return self.text

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "kind": self.kind,
            "text": self.text,
            "created_at": self.created_at,
        }


@dataclass(frozen=True, eq=False)
class InteractionEvent(LogEntry):
    """Two agents interacted. The only entry kind that gets flavor text."""

    kind: str = "interaction"
    initiator: Agent | None = None
    recipient: Agent | None = None

    def render(self, pov: Agent | None = None) -> str:
        # Host templates may refer to the point-of-view agent as {pov}
        if pov is not None and "{pov}" in self.text:
            return self.text.replace("{pov}", pov.name)
        return self.text

    def to_dict(self) -> dict:
        data = super().to_dict()
        data["initiator"] = self.initiator.to_dict() if self.initiator else None
        data["recipient"] = self.recipient.to_dict() if self.recipient else None
        return data


class Severity(str, enum.Enum):
    NEUTRAL = "neutral"
    POSITIVE = "positive"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Notification:
    text: str
    severity: Severity = Severity.NEUTRAL
    # Shown to the user but not archived in the host's message history
    historical: bool = False
    source_event_id: str | None = None
    created_at: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "severity": self.severity.value,
            "historical": self.historical,
            "source_event_id": self.source_event_id,
            "created_at": self.created_at,
        }
