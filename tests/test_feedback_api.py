# tests/test_feedback_api.py
from fastapi.testclient import TestClient

from tests.conftest import ALICE, BOB, auth


def test_submit_feedback(client: TestClient, store):
    store.add_interactions(ALICE, 1)
    interaction_id = store.interactions(ALICE)[0].id

    response = client.post(f"/feedback/{interaction_id}", headers=auth(ALICE), json={
        "helpful": True,
        "rating": 5,
        "comment": "Great hint!"
    })
    assert response.status_code == 200
    assert response.json() == {"message": "Feedback saved successfully"}
    assert store.interactions(ALICE)[0].feedback == {"helpful": True, "rating": 5, "comment": "Great hint!"}


def test_feedback_last_write_wins(client: TestClient, store):
    store.add_interactions(ALICE, 1)
    interaction_id = store.interactions(ALICE)[0].id

    client.post(f"/feedback/{interaction_id}", headers=auth(ALICE), json={"helpful": True, "rating": 5, "comment": "first"})
    client.post(f"/feedback/{interaction_id}", headers=auth(ALICE), json={"helpful": False, "rating": 2, "comment": "second"})

    interaction = store.interactions(ALICE)[0]
    assert interaction.feedback == {"helpful": False, "rating": 2, "comment": "second"}
    # Everything else is untouched
    assert interaction.response == "response 0"
    assert interaction.tokens_used == 10


def test_feedback_interaction_not_found(client: TestClient):
    response = client.post("/feedback/missing", headers=auth(ALICE), json={"helpful": True, "rating": 4, "comment": ""})
    assert response.status_code == 404
    assert response.json() == {"message": "Interaction not found"}


def test_feedback_on_someone_elses_interaction(client: TestClient, store):
    store.add_interactions(ALICE, 1)
    interaction_id = store.interactions(ALICE)[0].id

    response = client.post(f"/feedback/{interaction_id}", headers=auth(BOB), json={"helpful": False, "rating": 1, "comment": "spam"})
    assert response.status_code == 403
    assert response.json() == {"message": "Not authorized"}
    assert store.interactions(ALICE)[0].feedback is None


def test_feedback_fields_are_optional(client: TestClient, store):
    store.add_interactions(ALICE, 1)
    interaction_id = store.interactions(ALICE)[0].id

    response = client.post(f"/feedback/{interaction_id}", headers=auth(ALICE), json={"rating": 3.5})
    assert response.status_code == 200
    assert store.interactions(ALICE)[0].feedback == {"helpful": None, "rating": 3.5, "comment": None}
