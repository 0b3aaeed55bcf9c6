import pytest

from trip_planner.modules.trips.service import TripService


@pytest.fixture
def trip(fake_db):
    """A trip owned by owner-1 offering three catalog activities."""
    for activity_id, name in [("a1", "Hiking"), ("a2", "Kayaking"), ("a3", "Museum")]:
        fake_db.add_row("activities", {"id": activity_id, "name": name, "category": "General", "requires_gps": False})
    fake_db.add_row("trips", {
        "id": "trip-1",
        "name": "Austin weekend",
        "owner_id": "owner-1",
        "is_public": False,
        "locations": ["Austin, TX"],
    })
    for activity_id in ("a1", "a2", "a3"):
        fake_db.add_row("trip_activities", {"trip_id": "trip-1", "activity_id": activity_id})
    return fake_db.rows("trips")[0]


def joined_ids(db, trip_id="trip-1", user_id="user-1"):
    return sorted(
        row["activity_id"] for row in db.rows("trip_activity_participants")
        if row["trip_id"] == trip_id and row["user_id"] == user_id
    )


def test_join_all_adds_only_missing_rows(client, fake_db, login_as, trip):
    login_as()
    fake_db.add_row("trip_activity_participants", {"trip_id": "trip-1", "activity_id": "a2", "user_id": "user-1"})

    response = client.post("/trips/trip-1/activities/join-all")

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert response.json()["changed"] == 2
    assert joined_ids(fake_db) == ["a1", "a2", "a3"]


def test_join_all_is_idempotent(client, fake_db, login_as, trip):
    login_as()
    client.post("/trips/trip-1/activities/join-all")

    response = client.post("/trips/trip-1/activities/join-all")

    assert response.json() == {"success": True, "message": None, "changed": 0, "joined": None}
    assert len(fake_db.rows("trip_activity_participants")) == 3


def test_leave_all_then_join_all_restores_full_set(client, fake_db, login_as, trip):
    login_as()
    fake_db.add_row("trip_activity_participants", {"trip_id": "trip-1", "activity_id": "a1", "user_id": "user-1"})
    fake_db.add_row("trip_activity_participants", {"trip_id": "trip-1", "activity_id": "a1", "user_id": "other"})

    left = client.post("/trips/trip-1/activities/leave-all").json()
    assert left["success"] is True
    assert left["changed"] == 1
    assert joined_ids(fake_db) == []
    assert joined_ids(fake_db, user_id="other") == ["a1"]

    client.post("/trips/trip-1/activities/join-all")
    assert joined_ids(fake_db) == ["a1", "a2", "a3"]


def test_join_all_reports_failure(client, fake_db, login_as, trip):
    login_as()
    fake_db.failures.add(("trip_activity_participants", "upsert"))

    response = client.post("/trips/trip-1/activities/join-all")

    assert response.status_code == 200
    assert response.json()["success"] is False
    assert response.json()["message"] == "Failed to join all activities"


def test_leave_all_reports_failure(client, fake_db, login_as, trip):
    login_as()
    fake_db.failures.add(("trip_activity_participants", "delete"))

    response = client.post("/trips/trip-1/activities/leave-all")

    assert response.json()["success"] is False
    assert response.json()["message"] == "Failed to unjoin all activities"


def test_toggle_activity(client, fake_db, login_as, trip):
    login_as()
    joined = client.post("/trips/trip-1/activities/a1/toggle").json()
    assert joined["joined"] is True
    assert joined_ids(fake_db) == ["a1"]

    left = client.post("/trips/trip-1/activities/a1/toggle").json()
    assert left["joined"] is False
    assert joined_ids(fake_db) == []


def test_toggle_rejects_activity_not_on_trip(client, fake_db, login_as, trip):
    login_as()
    response = client.post("/trips/trip-1/activities/unknown/toggle")
    assert response.json()["success"] is False
    assert joined_ids(fake_db) == []


def test_edit_page_redirects_non_owner(client, login_as, trip):
    login_as()
    response = client.get("/trips/trip-1/edit")
    assert response.status_code == 307
    assert response.headers["location"] == "/trips/trip-1"


def test_edit_page_for_owner(client, login_as, trip):
    login_as("owner-1")
    response = client.get("/trips/trip-1/edit")
    assert response.status_code == 200
    body = response.json()
    assert body["trip"]["id"] == "trip-1"
    assert sorted(body["selected_activity_ids"]) == ["a1", "a2", "a3"]
    assert [a["name"] for a in body["activities"]] == ["Hiking", "Kayaking", "Museum"]


def test_edit_page_missing_trip(client, login_as, trip):
    login_as()
    assert client.get("/trips/nope/edit").status_code == 404


def test_update_by_non_owner_is_forbidden(client, fake_db, login_as, trip):
    login_as()
    response = client.put("/trips/trip-1", json={"name": "Hijacked"})
    assert response.status_code == 403
    assert fake_db.rows("trips")[0]["name"] == "Austin weekend"


def test_update_by_owner_replaces_activities(client, fake_db, login_as, trip):
    login_as("owner-1")
    response = client.put("/trips/trip-1", json={"name": "Austin long weekend", "activity_ids": ["a1"]})
    assert response.status_code == 200
    assert response.json()["name"] == "Austin long weekend"
    assert [row["activity_id"] for row in fake_db.rows("trip_activities")] == ["a1"]


def test_delete_by_admin(client, fake_db, login_as, trip):
    login_as("admin-1", role="admin")
    assert client.delete("/trips/trip-1").status_code == 204
    assert fake_db.rows("trips") == []


def test_delete_by_member_is_forbidden(client, fake_db, login_as, trip):
    login_as()
    assert client.delete("/trips/trip-1").status_code == 403
    assert len(fake_db.rows("trips")) == 1


def test_create_trip_adds_owner_participant(client, fake_db, login_as, trip):
    login_as()
    response = client.post("/trips", json={
        "name": "Lisbon",
        "start_date": "2026-05-01",
        "end_date": "2026-05-05",
        "activity_ids": ["a1", "a3", "a1"],
    })

    assert response.status_code == 201
    new_id = response.json()["id"]
    assert response.json()["owner_id"] == "user-1"
    assert sorted(
        row["activity_id"] for row in fake_db.rows("trip_activities") if row["trip_id"] == new_id
    ) == ["a1", "a3"]
    owner_rows = [row for row in fake_db.rows("trip_participants") if row["trip_id"] == new_id]
    assert owner_rows == [
        {**owner_rows[0], "user_id": "user-1", "status": "going", "role": "owner"}
    ]


def test_list_trips_uses_visibility_function(client, fake_db, login_as, trip):
    login_as()
    fake_db.add_row("trips", {"id": "trip-2", "name": "Mine", "owner_id": "user-1"})
    fake_db.add_row("trips", {"id": "trip-3", "name": "Someone else's", "owner_id": "owner-2"})
    fake_db.add_row("trip_participants", {"trip_id": "trip-1", "user_id": "user-1", "status": "going"})

    response = client.get("/trips")

    assert response.status_code == 200
    body = response.json()
    assert sorted(t["id"] for t in body["trips"]) == ["trip-1", "trip-2"]
    assert body["current_user_id"] == "user-1"
    assert body["is_admin"] is False
    assert ("rpc", "get_user_trips", {"query_user_id": "user-1"}) in fake_db.calls


def test_list_trips_renders_empty_on_error(client, fake_db, login_as, trip):
    login_as()
    fake_db.failures.add(("rpc", "get_user_trips"))
    response = client.get("/trips")
    assert response.status_code == 200
    assert response.json()["trips"] == []


def test_trip_detail_counts_guests(client, fake_db, login_as, trip):
    login_as()
    fake_db.add_row("profiles", {"id": "owner-1", "full_name": "Olive Owner", "status": "approved"})
    fake_db.add_row("trip_participants", {
        "trip_id": "trip-1", "user_id": "owner-1", "status": "going", "role": "owner", "guests": []
    })
    fake_db.add_row("trip_participants", {
        "trip_id": "trip-1", "user_id": "user-1", "status": "going",
        "guests": [{"name": "Sam"}, {"name": "Kit", "age": "7"}]
    })
    fake_db.add_row("trip_participants", {"trip_id": "trip-1", "user_id": "user-3", "status": "declined"})
    fake_db.add_row("trip_activity_participants", {"trip_id": "trip-1", "activity_id": "a2", "user_id": "user-1"})

    response = client.get("/trips/trip-1")

    assert response.status_code == 200
    body = response.json()
    assert body["total_confirmed"] == 4
    assert len(body["going"]) == 2
    assert len(body["declined"]) == 1
    assert body["is_owner"] is False
    assert body["owner"]["full_name"] == "Olive Owner"
    assert body["my_participation"]["user_id"] == "user-1"
    assert body["joined_count"] == 1
    assert body["total_count"] == 3


def test_trip_detail_missing(client, login_as):
    login_as()
    assert client.get("/trips/nope").status_code == 404


def test_rsvp_upserts_single_row(client, fake_db, login_as, trip):
    login_as()
    client.put("/trips/trip-1/rsvp", json={"status": "going", "guests": [{"name": "Sam"}]})
    response = client.put("/trips/trip-1/rsvp", json={"status": "declined"})

    assert response.status_code == 200
    assert response.json()["status"] == "declined"
    rows = [row for row in fake_db.rows("trip_participants") if row["user_id"] == "user-1"]
    assert len(rows) == 1
    assert rows[0]["guests"] == []


def test_join_all_skips_write_when_nothing_missing(fake_db, trip):
    for activity_id in ("a1", "a2", "a3"):
        fake_db.add_row("trip_activity_participants", {"trip_id": "trip-1", "activity_id": activity_id, "user_id": "user-1"})

    result = TripService(fake_db).join_all_activities("trip-1", "user-1")

    assert result.changed == 0
    assert fake_db.calls_to("trip_activity_participants", "upsert") == []
