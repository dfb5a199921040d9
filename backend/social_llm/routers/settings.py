from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel, ValidationError

router = APIRouter(prefix="/settings", tags=["settings"])


class UpdateSettingsRequest(BaseModel):
    model: str | None = None
    endpoint: str | None = None
    enabled: bool | None = None
    temperature: float | None = None
    system_prompt: str | None = None


@router.get("")
async def get_settings(request: Request):
    return request.app.state.config_store.snapshot().model_dump()


@router.patch("")
async def update_settings(body: UpdateSettingsRequest, request: Request):
    changes = body.model_dump(exclude_none=True)
    try:
        config = request.app.state.config_store.update(**changes)
    except ValidationError as e:
        raise HTTPException(422, e.errors(include_url=False))
    return config.model_dump()
