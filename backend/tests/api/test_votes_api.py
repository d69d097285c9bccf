"""API tests: vote submission against a migrated test DB."""
import uuid

import pytest
from sqlalchemy import select

from models.vote import Vote

pytestmark = pytest.mark.api

PARK_ID = uuid.UUID("11111111-1111-1111-1111-111111111111")
MISSING_ID = uuid.UUID("00000000-0000-0000-0000-000000000000")


@pytest.fixture
def park(client, seed_location):
    return seed_location("Park", "Do you like this park?", PARK_ID)


def test_add_vote_stores_row(client, park, sync_engine, vote_count):
    r = client.post(
        "/votes",
        json={"agrees": True, "comment": "Nice", "locationId": str(park)},
        headers={"User-Agent": "test-agent"},
    )
    assert r.status_code == 200
    assert r.content == b""
    assert vote_count(park) == 1
    with sync_engine.connect() as conn:
        row = conn.execute(select(Vote.__table__)).one()
    assert row.user_agent == "test-agent"
    assert row.agrees is True
    assert row.comment == "Nice"
    assert row.created_at is not None


def test_add_vote_without_comment(client, park, vote_count):
    r = client.post("/votes", json={"agrees": False, "locationId": str(park)}, headers={"User-Agent": "test-agent"})
    assert r.status_code == 200
    assert vote_count(park) == 1


def test_add_vote_accepts_snake_case_location_id(client, park, vote_count):
    r = client.post(
        "/votes",
        json={"agrees": True, "comment": None, "location_id": str(park)},
        headers={"User-Agent": "web"},
    )
    assert r.status_code == 200
    assert vote_count(park) == 1


def test_repeated_vote_is_not_deduplicated(client, park, vote_count):
    body = {"agrees": True, "comment": "Nice", "locationId": str(park)}
    for _ in range(3):
        assert client.post("/votes", json=body, headers={"User-Agent": "test-agent"}).status_code == 200
    assert vote_count(park) == 3


def test_vote_for_unknown_location_fails(client, vote_count):
    r = client.post(
        "/votes",
        json={"agrees": True, "locationId": str(MISSING_ID)},
        headers={"User-Agent": "test-agent"},
    )
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert "FOREIGN KEY" not in r.text
    assert vote_count() == 0


@pytest.mark.parametrize(
    "body",
    [
        {"comment": "missing agrees", "locationId": str(PARK_ID)},
        {"agrees": True, "locationId": "not-a-uuid"},
        {"agrees": True},
    ],
)
def test_malformed_body_is_opaque_500(client, park, vote_count, body):
    r = client.post("/votes", json=body, headers={"User-Agent": "test-agent"})
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error"}
    assert vote_count() == 0
