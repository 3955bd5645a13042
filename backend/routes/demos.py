"""Demo sketches: GET /examples/{name}.json serves bundled sketch files."""

from __future__ import annotations

import json
import logging
import re

from fastapi import APIRouter, HTTPException, status

from backend import config

logger = logging.getLogger(__name__)

router = APIRouter(tags=["demos"])

_NAME_RE = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]{0,63}$")


def list_demo_names() -> list[str]:
    """Names of the bundled demos, sorted."""
    demo_dir = config.settings.DEMO_DIR
    if not demo_dir.is_dir():
        return []
    return sorted(p.stem for p in demo_dir.glob("*.json") if _NAME_RE.match(p.stem))


@router.get("/examples")
async def list_demos() -> dict[str, list[str]]:
    """List the demo sketch names."""
    return {"demos": list_demo_names()}


@router.get("/examples/{name}.json")
async def get_demo(name: str) -> dict:
    """Serve one demo sketch as JSON."""
    if not _NAME_RE.match(name):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Demo sketch not found")

    path = config.settings.DEMO_DIR / f"{name}.json"
    if not path.is_file():
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Demo sketch not found")

    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError:
        logger.exception("Demo sketch %s is not valid JSON", name)
        raise HTTPException(status_code=500, detail="Demo sketch is unreadable") from None
