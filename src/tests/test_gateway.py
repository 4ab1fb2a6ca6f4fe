from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
import requests

from news_admin.datamodels import DraftCreate, NewsItem
from news_admin.errors import CreateError, DeleteError, FetchError, UpdateError
from news_admin.gateway import NewsGateway

API_URL = "http://test.local/News/"


@pytest.fixture
def gateway():
    return NewsGateway(API_URL, timeout=5)


def _response(status_code, payload=None, bad_json=False):
    resp = MagicMock()
    resp.status_code = status_code
    if bad_json:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = payload
    return resp


def test_list_all(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(
            200,
            [
                {
                    "_id": "65a1",
                    "title": "Match day",
                    "news_content": "We won",
                    "news_image": "http://img/1.png",
                    "created_at": "2024-05-01T10:00:00Z",
                },
                {"_id": "65a2", "title": "Training", "news_content": "Moved to 6pm"},
            ],
        )
        items = gateway.list_all()

    mock_request.assert_called_once_with(
        "GET", API_URL, params=None, json=None, timeout=5
    )
    assert len(items) == 2
    assert items[0].id == "65a1"
    assert items[0].title == "Match day"
    assert items[0].content == "We won"
    assert items[0].image_url == "http://img/1.png"
    assert items[0].created_at.year == 2024
    assert items[1].image_url is None
    assert items[1].created_at is None


def test_list_all_non_2xx(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(503)
        with pytest.raises(FetchError) as excinfo:
            gateway.list_all()
    assert excinfo.value.status == 503


def test_list_all_bad_json(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(200, bad_json=True)
        with pytest.raises(FetchError) as excinfo:
            gateway.list_all()
    assert excinfo.value.status is None


def test_list_all_transport_failure(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.side_effect = requests.ConnectionError("refused")
        with pytest.raises(FetchError):
            gateway.list_all()


def test_create_posts_wire_payload(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(
            201,
            {
                "_id": "abc",
                "title": "New kit",
                "news_content": "Launching Friday",
                "news_image_url": "kit.png",
                "created_at": "2024-06-01T09:30:00",
            },
        )
        item = gateway.create(
            DraftCreate(title="New kit", content="Launching Friday", image_url="kit.png")
        )

    mock_request.assert_called_once_with(
        "POST",
        API_URL,
        params=None,
        json={
            "title": "New kit",
            "news_content": "Launching Friday",
            "news_image_url": "kit.png",
        },
        timeout=5,
    )
    assert item.id == "abc"
    assert item.image_url == "kit.png"
    assert item.created_at.tzinfo is not None


def test_create_failure(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(400, {"detail": "duplicate title"})
        with pytest.raises(CreateError) as excinfo:
            gateway.create(DraftCreate(title="x", content="y"))
    assert excinfo.value.status == 400


def test_update_sends_query_parameters(gateway):
    draft = NewsItem(id="1", title="Renamed", content="New body & more")
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(200)
        gateway.update("Original", draft)

    mock_request.assert_called_once_with(
        "PUT",
        API_URL,
        params={"title": "Original", "news_content": "New body & more"},
        json=None,
        timeout=5,
    )


def test_update_timeout(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.side_effect = requests.Timeout("slow")
        with pytest.raises(UpdateError):
            gateway.update("A", NewsItem(id="1", title="A", content="b"))


def test_delete(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(204)
        gateway.delete("Old news")

    mock_request.assert_called_once_with(
        "DELETE", API_URL, params={"title": "Old news"}, json=None, timeout=5
    )


def test_delete_redirect_is_failure(gateway):
    with patch.object(gateway.session, "request") as mock_request:
        mock_request.return_value = _response(302)
        with pytest.raises(DeleteError):
            gateway.delete("Old news")


def test_query_parameters_are_url_encoded(gateway):
    prepared = requests.Request(
        "DELETE", API_URL, params={"title": "Cup final: 2-1 & more"}
    ).prepare()
    assert prepared.url == API_URL + "?title=Cup+final%3A+2-1+%26+more"
