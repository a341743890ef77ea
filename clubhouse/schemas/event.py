"""Pydantic schemas for Events.

Field bounds are deliberately not declared here: the lifecycle manager's
validator enforces them so the HTTP layer and direct library calls reject
exactly the same payloads.
"""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel


class EventPayload(BaseModel):
    id: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None  # free-form, e.g. "2025-05-01" or "Every Friday"
    location: Optional[str] = None
    perks: Optional[list[str]] = None
    rsvps: Optional[list[str]] = None
    pinned: Optional[bool] = None
    image_data: Optional[str] = None  # base64, optionally as a data: URL


class EventOut(BaseModel):
    id: str
    name: str
    description: str
    date: str
    location: str
    image: str
    perks: list[str] = []
    rsvps: list[str] = []
    pinned: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
