from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .datamodels import DraftCreate, NewsItem
from .errors import ValidationError


def require_title_and_content(title: str, content: str) -> None:
    if not title or not content:
        raise ValidationError("Title and content are required!")


@dataclass
class CreateSession:
    """Draft buffer and visibility flag for the Create News dialog."""

    visible: bool = False
    draft: DraftCreate = field(default_factory=DraftCreate)

    def open(self) -> None:
        self.visible = True

    def close(self) -> None:
        self.visible = False
        self.draft = DraftCreate()

    def snapshot(self) -> DraftCreate:
        """Validated copy of the draft as it stands when submitted."""
        require_title_and_content(self.draft.title, self.draft.content)
        return replace(self.draft)


@dataclass
class EditSession:
    """Draft copy of one item plus the title it was loaded under."""

    visible: bool = False
    draft: Optional[NewsItem] = None
    original_title: Optional[str] = None

    def open(self, item: NewsItem) -> None:
        self.draft = replace(item)
        self.original_title = item.title
        self.visible = True

    def close(self) -> None:
        self.visible = False
        self.draft = None
        self.original_title = None

    def snapshot(self) -> tuple[str, NewsItem]:
        if self.draft is None or self.original_title is None:
            raise ValidationError("Title and content are required!")
        require_title_and_content(self.draft.title, self.draft.content)
        return self.original_title, replace(self.draft)
