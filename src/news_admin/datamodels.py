from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional


# --- Data models ---
@dataclass
class NewsItem:
    id: Optional[str]
    title: str
    content: str
    image_url: Optional[str] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> NewsItem:
        """Build an item from the news resource's JSON shape."""
        raw_id = data.get("_id", data.get("id"))
        image = data.get("news_image") or data.get("news_image_url")
        return cls(
            id=str(raw_id) if raw_id is not None else None,
            title=_as_text(data.get("title")),
            content=_as_text(data.get("news_content")),
            image_url=str(image) if image else None,
            created_at=parse_timestamp(data.get("created_at")),
        )


@dataclass
class DraftCreate:
    title: str = ""
    content: str = ""
    image_url: str = ""

    def to_payload(self) -> Dict[str, str]:
        return {
            "title": self.title,
            "news_content": self.content,
            "news_image_url": self.image_url,
        }


def _as_text(value: Any) -> str:
    return "" if value is None else str(value)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 string or epoch number; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    try:
        if isinstance(value, (int, float)):
            return datetime.fromtimestamp(value, tz=timezone.utc)
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        parsed = datetime.fromisoformat(text)
    except (ValueError, OverflowError, OSError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def newest_first(items: list[NewsItem]) -> list[NewsItem]:
    """Sort descending by created_at; undated items go last, in their original order."""
    dated = [i for i in items if i.created_at is not None]
    undated = [i for i in items if i.created_at is None]
    dated.sort(key=lambda i: i.created_at, reverse=True)
    return dated + undated
