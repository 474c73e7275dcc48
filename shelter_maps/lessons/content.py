# shelter_maps/lessons/content.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Optional
from urllib.parse import quote

MAPS_HOME = "https://maps.google.com"

# Street View opens centred on Manchester city centre
STREET_VIEW_ANCHOR = "53.4808,-2.2426"


@dataclass(frozen=True)
class LessonStep:
    title: str
    content: str
    action: str
    target: Optional[str] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    query: Optional[str] = None
    location: Optional[str] = None


def _q(value: str | None) -> str:
    return quote(value or "", safe="")


def parse_steps(raw_content: str) -> list[LessonStep]:
    """
    Decode a lesson's JSON ``content`` into its ordered steps.

    Unknown keys are ignored; a payload without ``steps`` has no steps.
    """
    payload = json.loads(raw_content) if raw_content else {}
    steps = []
    for s in payload.get("steps") or []:
        steps.append(LessonStep(
            title=str(s.get("title", "")),
            content=str(s.get("content", "")),
            action=str(s.get("action", "")),
            target=s.get("target"),
            origin=s.get("from"),
            destination=s.get("to"),
            query=s.get("query"),
            location=s.get("location"),
        ))
    return steps


def maps_link(step: LessonStep) -> str | None:
    if step.action == "introduction":
        return None
    if step.action == "search":
        return f"{MAPS_HOME}/maps?q={_q(step.target)}"
    if step.action == "directions":
        return f"{MAPS_HOME}/maps/dir/{_q(step.origin)}/{_q(step.destination)}"
    if step.action == "search_nearby":
        return f"{MAPS_HOME}/maps?q={_q(step.query)}"
    if step.action == "street_view":
        return f"{MAPS_HOME}/maps?q={_q(step.location)}&layer=c&cbll={STREET_VIEW_ANCHOR}"
    return MAPS_HOME


def step_to_dict(step: LessonStep) -> dict:
    out = {
        "title": step.title,
        "content": step.content,
        "action": step.action,
        "mapsLink": maps_link(step),
    }
    # action-specific fields keep the names used in the stored content
    for key, value in (
        ("target", step.target),
        ("from", step.origin),
        ("to", step.destination),
        ("query", step.query),
        ("location", step.location),
    ):
        if value is not None:
            out[key] = value
    return out
