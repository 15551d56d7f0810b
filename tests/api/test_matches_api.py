import pytest
from fastapi.testclient import TestClient

MATCH = {
    "date": "2025-05-01",
    "score_a": 3,
    "score_b": 1,
    "scorers_a": [{"player": "Ronaldo", "count": 2}, {"player": "Kaka", "count": 1}, {"player": "", "count": 1}],
    "scorers_b": [{"player": "Raul", "count": 1}],
    "yellow_a": 1,
    "yellow_b": 2,
    "red_b": 1,
    "man_of_the_match": "Ronaldo",
}

pytestmark = pytest.mark.usefixtures("roster", "funded")


def test_create_list_and_delete_match(client: TestClient) -> None:
    create = client.post("/matches", json=MATCH)
    assert create.status_code == 201
    body = create.json()
    assert body["match_number"] == 1
    assert (body["prize_a"], body["prize_b"]) == (930_000, -740_000)
    assert (body["bonus_a"], body["bonus_b"]) == (100_000, 0)
    assert body["balances"] == {"AEK": 6_030_000, "Real": 4_260_000}
    assert body["debt"]["loser"] == "Real"
    assert body["debt"]["remaining"] == 5
    assert body["messages"] == ["Match AEK vs Real (3:1) saved"]

    listed = client.get("/matches")
    assert listed.status_code == 200
    [match] = listed.json()
    assert match["id"] == body["match_id"]
    assert match["number"] == 1
    assert match["scorers_a"] == [{"player": "Ronaldo", "count": 2}, {"player": "Kaka", "count": 1}]

    ledger = client.get("/transactions", params={"match_id": body["match_id"]})
    assert {row["type"] for row in ledger.json()} == {"Bonus SdS", "Preisgeld", "Echtgeld-Ausgleich"}

    delete = client.delete(f"/matches/{body['match_id']}")
    assert delete.status_code == 200
    assert delete.json()["removed_transactions"] == 4
    assert client.get("/matches").json() == []

    finances = {row["team"]: row for row in client.get("/finances").json()}
    assert finances["AEK"]["balance"] == 5_000_000
    assert finances["Real"]["balance"] == 5_000_000
    assert finances["Real"]["debt"] == 5


def test_scorer_sum_error_shape(client: TestClient) -> None:
    payload = {**MATCH, "scorers_b": [{"player": "Raul", "count": 2}]}

    response = client.post("/matches", json=payload)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["code"] == "scorer_sum_exceeded"
    assert detail["details"] == {"team": "Real", "scored": 2, "score": 1}
    assert client.get("/matches").json() == []


def test_replace_match(client: TestClient) -> None:
    match_id = client.post("/matches", json=MATCH).json()["match_id"]

    response = client.put(
        f"/matches/{match_id}",
        json={**MATCH, "score_a": 1, "score_b": 1, "scorers_a": [{"player": "Kaka"}], "man_of_the_match": None},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["replaced_id"] == match_id
    assert (body["prize_a"], body["prize_b"]) == (0, 0)
    assert body["debt"] is None
    assert body["messages"] == ["Match updated"]
    players = {p["name"]: p["goals"] for p in client.get("/players").json()}
    assert (players["Ronaldo"], players["Kaka"], players["Raul"]) == (0, 1, 1)


def test_unknown_match_returns_404(client: TestClient) -> None:
    assert client.delete("/matches/404").json()["detail"]["code"] == "match_not_found"
    assert client.put("/matches/404", json=MATCH).status_code == 404


def test_negative_score_is_rejected_by_schema(client: TestClient) -> None:
    response = client.post("/matches", json={**MATCH, "score_a": -1})

    assert response.status_code == 422
