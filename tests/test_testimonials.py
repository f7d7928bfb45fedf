import pytest

from app.models.testimonial import Testimonial


def test_submit_and_list_newest_first(client, db):
    for author in ("Maria", "Tom"):
        r = client.post(
            "/api/testimonials",
            json={"author": author, "relation": "Daughter of resident", "text": "Wonderful care."},
        )
        assert r.status_code == 201
        assert r.json()["author"] == author
        assert r.json()["createdAt"].endswith(("Z", "+00:00"))

    listed = client.get("/api/testimonials").json()
    assert [t["author"] for t in listed] == ["Tom", "Maria"]
    assert db.query(Testimonial).count() == 2


@pytest.mark.parametrize("missing", ["author", "relation", "text"])
def test_all_fields_required(client, db, missing):
    payload = {"author": "Maria", "relation": "Daughter", "text": "Great"}
    payload[missing] = "  "
    r = client.post("/api/testimonials", json=payload)
    assert r.status_code == 400
    assert db.query(Testimonial).count() == 0


def test_list_empty(client):
    assert client.get("/api/testimonials").json() == []
