"""JSONB codec for a user's embedded emotions and days."""

from datetime import datetime
from typing import Any
from uuid import UUID

from moodlog.domain.entities import Day, Emotion

DOCUMENT_FORMAT = 1


def encode_document(emotions: list[Emotion], days: list[Day]) -> dict[str, Any]:
    """Embedded collections as a JSON-compatible dict, tombstones included."""
    return {
        "format": DOCUMENT_FORMAT,
        "emotions": [
            {
                "id": str(e.id),
                "name": e.name,
                "color": e.color,
                "deleted": e.deleted,
                "created_at": e.created_at.isoformat(),
                "updated_at": e.updated_at.isoformat(),
            }
            for e in emotions
        ],
        "days": [
            {
                "id": str(d.id),
                "date": d.date,
                "description": d.description,
                "emotions": [str(emotion_id) for emotion_id in d.emotions],
                "deleted": d.deleted,
                "created_at": d.created_at.isoformat(),
                "updated_at": d.updated_at.isoformat(),
            }
            for d in days
        ],
    }


def decode_document(document: dict[str, Any] | None) -> tuple[list[Emotion], list[Day]]:
    """Inverse of ``encode_document``. A missing document is an empty journal."""
    if not document:
        return [], []
    emotions = [
        Emotion(
            id=UUID(e["id"]),
            name=e["name"],
            color=e["color"],
            deleted=bool(e.get("deleted", False)),
            created_at=datetime.fromisoformat(e["created_at"]),
            updated_at=datetime.fromisoformat(e["updated_at"]),
        )
        for e in document.get("emotions", [])
    ]
    days = [
        Day(
            id=UUID(d["id"]),
            date=d["date"],
            description=d.get("description"),
            emotions=[UUID(emotion_id) for emotion_id in d.get("emotions", [])],
            deleted=bool(d.get("deleted", False)),
            created_at=datetime.fromisoformat(d["created_at"]),
            updated_at=datetime.fromisoformat(d["updated_at"]),
        )
        for d in document.get("days", [])
    ]
    return emotions, days
