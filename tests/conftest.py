import pytest
from fastapi.testclient import TestClient

from trip_planner.config import settings
from trip_planner.core.rate_limit import limiter
from trip_planner.database.supabase_client import SupabaseClient
from trip_planner.main import app
from tests.fakes import FakeSupabase


def get_user_trips(db, query_user_id):
    """Same visibility rule as the SQL function: owned trips plus trips with a participation row."""
    member_of = {p["trip_id"] for p in db.rows("trip_participants") if p["user_id"] == query_user_id}
    return [
        dict(trip) for trip in db.rows("trips")
        if trip["owner_id"] == query_user_id or trip["id"] in member_of
    ]


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeSupabase()
    db.rpc_functions["get_user_trips"] = get_user_trips
    monkeypatch.setattr(SupabaseClient, "_client", db)
    monkeypatch.setattr(SupabaseClient, "for_user", classmethod(lambda cls, access_token: db))
    monkeypatch.setattr(SupabaseClient, "new_client", classmethod(lambda cls, *args, **kwargs: db))
    return db


@pytest.fixture
def client(fake_db, monkeypatch):
    monkeypatch.setattr(limiter, "enabled", False)
    test_client = TestClient(app, follow_redirects=False)
    yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client, fake_db):
    """Create an auth user plus profile row and put its token in the client's cookies."""
    def _login(user_id="user-1", status="approved", role="user", profile=True, **profile_fields):
        token = fake_db.add_user(user_id)
        if profile:
            fake_db.add_row("profiles", {
                "id": user_id,
                "email": f"{user_id}@example.com",
                "status": status,
                "role": role,
                **profile_fields,
            })
        client.cookies.set(settings.access_token_cookie, token)
        return token
    return _login
