from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, Field

from social_llm.models.interaction import Agent, InteractionEvent, LogEntry

router = APIRouter(tags=["events"])


class AgentBody(BaseModel):
    name: str
    traits: list[str] = Field(default_factory=list)
    opinions: dict[str, float] = Field(default_factory=dict)

    def to_agent(self) -> Agent:
        return Agent(name=self.name, traits=tuple(self.traits), opinions=dict(self.opinions))


class RecordEventRequest(BaseModel):
    text: str
    kind: str = "interaction"
    initiator: AgentBody | None = None
    recipient: AgentBody | None = None


@router.post("/events", status_code=201)
async def record_event(body: RecordEventRequest, request: Request):
    """Append an entry to the play log, as the host would."""
    if body.kind == "interaction":
        entry: LogEntry = InteractionEvent(
            text=body.text,
            initiator=body.initiator.to_agent() if body.initiator else None,
            recipient=body.recipient.to_agent() if body.recipient else None,
        )
    else:
        entry = LogEntry(text=body.text, kind=body.kind)
    request.app.state.play_log.add(entry)
    return entry.to_dict()


@router.get("/events")
async def list_events(request: Request):
    return [e.to_dict() for e in request.app.state.play_log.entries()]


@router.get("/events/{event_id}")
async def get_event(event_id: str, request: Request):
    entry = request.app.state.play_log.get(event_id)
    if entry is None:
        raise HTTPException(404, "Event not found")
    return entry.to_dict()


@router.get("/notifications")
async def list_notifications(request: Request):
    return [n.to_dict() for n in request.app.state.notifications.items()]
