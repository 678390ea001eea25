"""End-to-end room placement through the HTTP API."""

import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError

from services.rooms import is_room_number_conflict


def _room(number, x, y, width=0.1, height=0.1, **extra):
    body = {
        "room_number": number,
        "coordinates": {"x": x, "y": y, "width": width, "height": height},
    }
    body.update(extra)
    return body


def _create(client, floor, number, x, y, width=0.1, height=0.1, **extra):
    return client.post(f"/api/floors/{floor['id']}/rooms",
                       json=_room(number, x, y, width, height, **extra))


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_create_room_returns_derived_values(client, floor):
    resp = _create(client, floor, "101", 0.1, 0.2, 0.2, 0.1, room_type="suite")
    assert resp.status_code == 201, resp.text
    room = resp.json()
    assert room["floor_id"] == floor["id"]
    assert room["room_type"] == "suite"
    assert room["status"] == "available"
    assert room["x_coordinate"] == 0.1
    assert abs(room["x_end"] - 0.3) < 1e-9
    assert abs(room["center_y"] - 0.25) < 1e-9
    assert abs(room["area"] - 0.02) < 1e-9


def test_invalid_coordinates_report_all_errors(client, floor):
    resp = _create(client, floor, "101", 0.5, 0.5, 0.6, 0.001)
    assert resp.status_code == 400
    errors = resp.json()["detail"]["errors"]
    assert len(errors) == 3
    assert any("right edge" in e for e in errors)
    assert any("Height must be at least" in e for e in errors)
    assert any("Aspect ratio" in e for e in errors)


def test_overlapping_room_is_rejected_with_conflicts(client, floor):
    first = _create(client, floor, "101", 0.1, 0.1, 0.3, 0.3).json()
    resp = _create(client, floor, "102", 0.1, 0.1, 0.3, 0.3)
    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert "101" in detail["message"]
    [conflict] = detail["overlapping_rooms"]
    assert conflict["id"] == first["id"]
    assert conflict["room_number"] == "101"
    assert abs(conflict["overlap_percentage"] - 100) < 1e-6

    rooms = client.get(f"/api/floors/{floor['id']}/rooms").json()
    assert [r["room_number"] for r in rooms] == ["101"]


def test_adjacent_rooms_with_small_overlap_are_accepted(client, floor):
    assert _create(client, floor, "101", 0.0, 0.0, 0.2, 0.2).status_code == 201
    assert _create(client, floor, "102", 0.198, 0.0, 0.2, 0.2).status_code == 201


def test_rooms_on_other_floors_do_not_conflict(client, floor):
    other = client.post(f"/api/hotels/{floor['hotel_id']}/floors",
                        json={"floor_number": 2, "name": "First Floor"}).json()
    assert _create(client, floor, "101", 0.1, 0.1).status_code == 201
    assert _create(client, other, "201", 0.1, 0.1).status_code == 201


def test_duplicate_room_number_conflicts(client, floor):
    assert _create(client, floor, "101", 0.1, 0.1).status_code == 201
    resp = _create(client, floor, "101", 0.6, 0.6)
    assert resp.status_code == 409
    assert "already exists" in resp.json()["detail"]


def test_move_room_excludes_itself(client, floor):
    room = _create(client, floor, "101", 0.1, 0.1, 0.3, 0.3).json()

    # same spot, and a nudge that overlaps its own old placement
    for coords in ({"x": 0.1, "y": 0.1, "width": 0.3, "height": 0.3},
                   {"x": 0.15, "y": 0.1, "width": 0.3, "height": 0.3}):
        resp = client.patch(f"/api/rooms/{room['id']}/coordinates",
                            json={"coordinates": coords, "change_reason": "drag"})
        assert resp.status_code == 200, resp.text

    assert resp.json()["x_coordinate"] == 0.15

    history = client.get(f"/api/rooms/{room['id']}/history").json()
    assert len(history) == 2
    assert {h["new_x_coordinate"] for h in history} == {0.1, 0.15}
    assert all(h["change_reason"] == "drag" for h in history)


def test_move_room_onto_sibling_is_rejected(client, floor):
    _create(client, floor, "101", 0.1, 0.1, 0.2, 0.2)
    mover = _create(client, floor, "102", 0.6, 0.6, 0.2, 0.2).json()

    resp = client.patch(f"/api/rooms/{mover['id']}/coordinates",
                        json={"coordinates": {"x": 0.15, "y": 0.15, "width": 0.2, "height": 0.2}})
    assert resp.status_code == 409
    assert resp.json()["detail"]["overlapping_rooms"][0]["room_number"] == "101"

    unchanged = client.get(f"/api/rooms/{mover['id']}").json()
    assert unchanged["x_coordinate"] == 0.6
    assert client.get(f"/api/rooms/{mover['id']}/history").json() == []


def test_move_room_to_invalid_spot_is_rejected(client, floor):
    room = _create(client, floor, "101", 0.1, 0.1).json()
    resp = client.patch(f"/api/rooms/{room['id']}/coordinates",
                        json={"coordinates": {"x": 0.95, "y": 0.1, "width": 0.1, "height": 0.1}})
    assert resp.status_code == 400
    assert any("right edge" in e for e in resp.json()["detail"]["errors"])


def test_neighbors(client, floor):
    first = _create(client, floor, "101", 0.09, 0.09, 0.02, 0.02).json()
    _create(client, floor, "102", 0.14, 0.09, 0.02, 0.02)
    _create(client, floor, "103", 0.89, 0.89, 0.02, 0.02)

    resp = client.get(f"/api/rooms/{first['id']}/neighbors", params={"max_distance": 0.1})
    assert resp.status_code == 200
    body = resp.json()
    assert [n["room_number"] for n in body["neighbors"]] == ["102"]

    wide = client.get(f"/api/rooms/{first['id']}/neighbors", params={"max_distance": 2}).json()
    assert [n["room_number"] for n in wide["neighbors"]] == ["102", "103"]


def test_room_at_point(client, floor):
    _create(client, floor, "101", 0.1, 0.1, 0.2, 0.2)
    resp = client.get(f"/api/floors/{floor['id']}/rooms/at", params={"x": 0.3, "y": 0.3})
    assert resp.status_code == 200
    assert resp.json()["room_number"] == "101"

    miss = client.get(f"/api/floors/{floor['id']}/rooms/at", params={"x": 0.9, "y": 0.9})
    assert miss.status_code == 404


def test_update_and_delete_room(client, floor):
    room = _create(client, floor, "101", 0.1, 0.1).json()
    resp = client.put(f"/api/rooms/{room['id']}", json={"status": "occupied", "capacity": 4})
    assert resp.status_code == 200
    assert resp.json()["status"] == "occupied"
    assert resp.json()["capacity"] == 4

    assert client.delete(f"/api/rooms/{room['id']}").status_code == 204
    assert client.get(f"/api/rooms/{room['id']}").status_code == 404

    # the freed spot can be reused
    assert _create(client, floor, "101", 0.1, 0.1).status_code == 201


def test_floor_with_rooms_cannot_be_deleted(client, floor):
    room = _create(client, floor, "101", 0.1, 0.1).json()
    assert client.delete(f"/api/floors/{floor['id']}").status_code == 409
    client.delete(f"/api/rooms/{room['id']}")
    assert client.delete(f"/api/floors/{floor['id']}").status_code == 204


def test_duplicate_floor_number_conflicts(client, floor):
    resp = client.post(f"/api/hotels/{floor['hotel_id']}/floors",
                       json={"floor_number": 1, "name": "Again"})
    assert resp.status_code == 409


def test_hotel_detail_and_stats(client, floor):
    _create(client, floor, "101", 0.1, 0.1)
    occupied = _create(client, floor, "102", 0.5, 0.5, room_type="deluxe").json()
    client.put(f"/api/rooms/{occupied['id']}", json={"status": "occupied"})

    hotel = client.get(f"/api/hotels/{floor['hotel_id']}").json()
    assert hotel["image_aspect_ratio"] == 2.0
    assert [f["name"] for f in hotel["floors"]] == ["Ground Floor"]
    assert len(hotel["floors"][0]["rooms"]) == 2

    stats = client.get(f"/api/hotels/{floor['hotel_id']}/stats").json()
    assert stats["total_floors"] == 1
    assert stats["total_rooms"] == 2
    assert stats["rooms_by_type"] == {"standard": 1, "deluxe": 1}
    assert stats["occupancy_rate"] == "50.00%"


def test_delete_hotel_cascades(client, floor):
    room = _create(client, floor, "101", 0.1, 0.1).json()
    assert client.delete(f"/api/hotels/{floor['hotel_id']}").status_code == 204
    assert client.get(f"/api/floors/{floor['id']}").status_code == 404
    assert client.get(f"/api/rooms/{room['id']}").status_code == 404


def test_missing_entities(client):
    assert client.get("/api/hotels/nope").status_code == 404
    assert client.get("/api/floors/nope/rooms").status_code == 404
    assert client.post("/api/floors/nope/rooms", json=_room("1", 0.1, 0.1)).status_code == 404
    assert client.patch("/api/rooms/nope/coordinates",
                        json={"coordinates": {"x": 0, "y": 0, "width": 0.1, "height": 0.1}}).status_code == 404


def test_hotel_list_paginates(client):
    for i in range(3):
        client.post("/api/hotels", json={
            "name": f"Paged Hotel {i}", "image_width": 100, "image_height": 100,
        })
    resp = client.get("/api/hotels", params={"search": "Paged Hotel", "limit": 2})
    body = resp.json()
    assert resp.status_code == 200
    assert body["total"] == 3
    assert body["total_pages"] == 2
    assert len(body["hotels"]) == 2


def test_coordinate_endpoints(client):
    check = client.post("/api/coordinates/validate",
                        json={"x": 0.5, "y": 0.5, "width": 0.6, "height": 0.001}).json()
    assert check["valid"] is False
    assert len(check["errors"]) == 3

    norm = client.post("/api/coordinates/normalize", json={
        "x": 200, "y": 150, "width": 400, "height": 300,
        "image_width": 800, "image_height": 600,
    }).json()
    assert norm == {"x": 0.25, "y": 0.25, "width": 0.5, "height": 0.5}

    px = client.post("/api/coordinates/denormalize", json={
        "coordinates": norm, "image_width": 1000, "image_height": 500,
    }).json()
    assert (px["x"], px["y"], px["width"], px["height"]) == (250, 125, 500, 250)


def _post_raw(client, floor, body):
    # NaN is not valid strict JSON, so send the text as-is
    return client.post(f"/api/floors/{floor['id']}/rooms", content=body,
                       headers={"Content-Type": "application/json"})


@pytest.mark.parametrize("x", ["NaN", "Infinity"])
def test_non_finite_coordinates_are_rejected(client, floor, x):
    resp = _post_raw(client, floor,
                     '{"room_number": "901", "coordinates": '
                     '{"x": %s, "y": 0.1, "width": 0.2, "height": 0.2}}' % x)
    assert resp.status_code == 400, resp.text
    errors = resp.json()["detail"]["errors"]
    assert any(e.startswith("X coordinate must be between 0 and 1") for e in errors)
    assert client.get(f"/api/floors/{floor['id']}/rooms").json() == []


def test_rename_room_to_taken_number_conflicts(client, floor):
    _create(client, floor, "101", 0.1, 0.1)
    other = _create(client, floor, "102", 0.5, 0.5).json()

    resp = client.put(f"/api/rooms/{other['id']}", json={"room_number": "101"})
    assert resp.status_code == 409
    assert "already exists" in resp.json()["detail"]
    assert client.get(f"/api/rooms/{other['id']}").json()["room_number"] == "102"

    # keeping its own number is not a conflict
    resp = client.put(f"/api/rooms/{other['id']}", json={"room_number": "102", "capacity": 3})
    assert resp.status_code == 200
    assert resp.json()["capacity"] == 3


def test_update_hotel_regenerates_slug(client, floor):
    hotel_id = floor["hotel_id"]
    before = client.get(f"/api/hotels/{hotel_id}").json()

    resp = client.put(f"/api/hotels/{hotel_id}", json={"name": "Grand Plaza", "status": "inactive"})
    assert resp.status_code == 200
    hotel = resp.json()
    assert hotel["name"] == "Grand Plaza"
    assert hotel["status"] == "inactive"
    assert hotel["slug"].startswith("grand-plaza-")
    assert hotel["slug"] != before["slug"]

    # no name change keeps the slug
    same = client.put(f"/api/hotels/{hotel_id}", json={"status": "active"}).json()
    assert same["slug"] == hotel["slug"]

    assert client.put("/api/hotels/nope", json={"name": "X"}).status_code == 404


def test_update_floor_fields(client, floor):
    resp = client.put(f"/api/floors/{floor['id']}", json={
        "name": "Lobby",
        "display_order": 5,
        "status": "maintenance",
        "notes": "closed for painting",
    })
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["name"] == "Lobby"
    assert updated["display_order"] == 5
    assert updated["status"] == "maintenance"
    assert updated["notes"] == "closed for painting"
    assert updated["floor_number"] == 1

    assert client.get(f"/api/floors/{floor['id']}").json()["name"] == "Lobby"
    assert client.put("/api/floors/nope", json={"name": "X"}).status_code == 404


def test_only_the_room_number_constraint_counts_as_duplicate():
    def error(message):
        return IntegrityError("INSERT INTO rooms", {}, sqlite3.IntegrityError(message))

    assert is_room_number_conflict(
        error("UNIQUE constraint failed: rooms.floor_id, rooms.room_number"))
    assert is_room_number_conflict(
        error('duplicate key value violates unique constraint "unique_floor_room_number"'))
    assert not is_room_number_conflict(
        error("NOT NULL constraint failed: rooms.x_coordinate"))
    assert not is_room_number_conflict(
        error("FOREIGN KEY constraint failed"))
