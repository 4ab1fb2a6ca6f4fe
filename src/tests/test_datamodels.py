from __future__ import annotations

from datetime import datetime, timezone

import pytest

from news_admin.datamodels import DraftCreate, NewsItem, newest_first, parse_timestamp
from news_admin.errors import ValidationError
from news_admin.sessions import CreateSession, EditSession


@pytest.mark.parametrize(
    "value, expected",
    [
        ("2024-05-01T10:00:00Z", datetime(2024, 5, 1, 10, tzinfo=timezone.utc)),
        ("2024-05-01T10:00:00", datetime(2024, 5, 1, 10, tzinfo=timezone.utc)),
        ("2024-05-01T12:00:00+02:00", datetime(2024, 5, 1, 10, tzinfo=timezone.utc)),
        (0, datetime(1970, 1, 1, tzinfo=timezone.utc)),
        ("yesterday", None),
        (None, None),
        ("", None),
    ],
)
def test_parse_timestamp(value, expected):
    assert parse_timestamp(value) == expected


def test_from_dict_accepts_plain_id_and_image_url():
    item = NewsItem.from_dict(
        {"id": 7, "title": "T", "news_content": "C", "news_image_url": "i.png"}
    )
    assert item.id == "7"
    assert item.image_url == "i.png"


def test_from_dict_coerces_non_string_fields():
    item = NewsItem.from_dict(
        {"_id": 1, "title": 123, "news_content": 4.5, "news_image": 0}
    )
    assert item.id == "1"
    assert item.title == "123"
    assert item.content == "4.5"
    assert item.image_url is None


def test_from_dict_missing_text_fields_are_empty():
    item = NewsItem.from_dict({"_id": "x"})
    assert item.title == ""
    assert item.content == ""


def test_newest_first_puts_undated_last():
    undated = NewsItem.from_dict({"_id": "u", "title": "U", "news_content": "x"})
    old = NewsItem.from_dict(
        {"_id": "o", "title": "O", "news_content": "x", "created_at": "2023-01-01"}
    )
    new = NewsItem.from_dict(
        {"_id": "n", "title": "N", "news_content": "x", "created_at": "2024-01-01"}
    )

    assert [i.title for i in newest_first([undated, old, new])] == ["N", "O", "U"]


def test_create_session_lifecycle():
    session = CreateSession()
    session.open()
    session.draft.title = "Title"
    session.draft.content = "Body"

    snapshot = session.snapshot()
    session.draft.title = "Changed later"

    assert snapshot == DraftCreate(title="Title", content="Body")
    assert session.visible is True

    session.close()
    assert session.visible is False
    assert session.draft == DraftCreate()


def test_create_session_requires_fields():
    session = CreateSession()
    session.draft.title = "Only a title"
    with pytest.raises(ValidationError):
        session.snapshot()


def test_edit_session_copies_item():
    item = NewsItem(id="1", title="A", content="body")
    session = EditSession()
    session.open(item)
    session.draft.title = "B"

    assert item.title == "A"
    assert session.snapshot()[0] == "A"

    session.close()
    assert session.draft is None
    with pytest.raises(ValidationError):
        session.snapshot()
