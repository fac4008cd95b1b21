from sqlalchemy.exc import OperationalError

from freshbox.crud import contact as crud_contact


MESSAGE = {
    "firstName": "Sana",
    "lastName": "Malik",
    "email": "sana@example.com",
    "subject": "Delivery areas",
    "message": "Do you deliver to DHA Phase 6?",
}


def test_create_and_list_contact_messages(client):
    first = client.post("/api/contact", json=MESSAGE)
    assert first.status_code == 201
    assert first.json()["isReplied"] is False
    assert first.json()["phone"] is None

    second = client.post("/api/contact", json={**MESSAGE, "subject": "Bulk order", "phone": "03211234567"})

    messages = client.get("/api/contact").json()
    assert [message["id"] for message in messages] == [second.json()["id"], first.json()["id"]]


def test_contact_message_validation(client):
    assert client.post("/api/contact", json={**MESSAGE, "email": "sana"}).status_code == 422
    assert client.post("/api/contact", json={**MESSAGE, "message": ""}).status_code == 422


def test_mark_message_replied(client):
    message_id = client.post("/api/contact", json=MESSAGE).json()["id"]

    response = client.put(f"/api/contact/{message_id}/replied")
    assert response.status_code == 200
    assert response.json()["isReplied"] is True

    assert client.put("/api/contact/999/replied").status_code == 404


def test_contact_storage_failure(client, monkeypatch):
    def storage_down(db, data):
        raise OperationalError("INSERT", {}, Exception("database is unavailable"))

    monkeypatch.setattr(crud_contact, "create_contact_message", storage_down)

    response = client.post("/api/contact", json=MESSAGE)

    assert response.status_code == 500
    assert response.json() == {"detail": "Failed to create contact message"}
