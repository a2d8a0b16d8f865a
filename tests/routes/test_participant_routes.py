import pytest


class TestParticipantRoutes:

    def test_create_and_warning(self, client):
        first = client.post("/participants/", json={"first_name": "Marc", "last_name": "Dupont", "belt": "bleue", "age": 30, "weight_kg": 80})
        assert first.status_code == 201
        assert first.json()["warning"] is None
        assert first.json()["wins"] == 0

        second = client.post("/participants/", json={"first_name": "Marc"})
        assert second.status_code == 201
        assert "Marc Dupont" in second.json()["warning"]

    def test_validation(self, client):
        assert client.post("/participants/", json={"first_name": ""}).status_code == 422
        assert client.post("/participants/", json={"first_name": "X", "belt": "rose"}).status_code == 422

    def test_list_search_update_delete(self, client):
        pid = client.post("/participants/", json={"first_name": "Ana", "belt": "noire"}).json()["id"]
        client.post("/participants/", json={"first_name": "Bob"})

        found = client.get("/participants/", params={"search": "noire"}).json()
        assert [p["id"] for p in found] == [pid]

        updated = client.put(f"/participants/{pid}", json={"last_name": "Zeta"})
        assert updated.json()["last_name"] == "Zeta"

        assert client.delete(f"/participants/{pid}").status_code == 200
        assert client.get(f"/participants/{pid}").status_code == 404

    def test_hall_of_fame(self, client, make_participants, db):
        a, b = make_participants("A", "B")
        b.wins = 2
        db.commit()

        ranking = client.get("/participants/hall-of-fame").json()
        assert [p["first_name"] for p in ranking] == ["B", "A"]

        assert len(client.get("/participants/hall-of-fame", params={"limit": 1}).json()) == 1

    @pytest.mark.parametrize("limit", [0, -1])
    def test_hall_of_fame_rejects_non_positive_limit(self, client, make_participants, limit):
        make_participants("A", "B", "C")
        assert client.get("/participants/hall-of-fame", params={"limit": limit}).status_code == 422

    def test_delete_participant_in_a_tournament(self, client):
        ids = []
        for name in ("A", "B"):
            ids.append(client.post("/participants/", json={"first_name": name}).json()["id"])
        tournament = client.post("/tournaments/", json={"name": "Open", "participant_ids": ids}).json()

        response = client.delete(f"/participants/{ids[0]}")
        assert response.status_code == 409
        assert client.get(f"/participants/{ids[0]}").status_code == 200

        headers = {"X-Access-Code": tournament["code"]}
        assert client.delete(f"/tournaments/{tournament['id']}/matches", headers=headers).status_code == 200
        assert client.delete(f"/participants/{ids[0]}").status_code == 200
