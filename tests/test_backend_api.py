from fastapi.testclient import TestClient
from zlodej_api.app import app


client = TestClient(app)


def _new_game(**extra):
    body = {
        "players": [{"kind": "H", "name": "You"}, {"kind": "AI", "name": "Bot A"}],
        "seed": 42,
        "firstPlayer": 0,
    }
    body.update(extra)
    r = client.post("/new-game", json=body)
    assert r.status_code == 200
    data = r.json()
    return data["sessionId"], data["state"]


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json().get("ok") is True


def test_new_game_returns_dealt_table():
    sid, state = _new_game()
    assert state["schemaVersion"] == 1
    assert state["phase"] == "playing"
    assert state["currentPlayer"] == 0
    assert [len(p["hand"]) for p in state["players"]] == [6, 6]
    assert state["drawCount"] == 96

    r = client.get(f"/state/{sid}")
    assert r.status_code == 200
    assert r.json()["state"] == state


def test_command_discard_then_ai_turn():
    sid, state = _new_game()
    card_id = state["players"][0]["hand"][0]["id"]
    r = client.post("/command", json={"sessionId": sid, "playerIndex": 0, "action": "discard", "cardId": card_id})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is True
    assert body["state"]["currentPlayer"] == 1
    assert body["state"]["discardTop"]["id"] == card_id

    r2 = client.post("/run-ai", json={"sessionId": sid})
    assert r2.status_code == 200
    state2 = r2.json()["state"]
    assert state2["currentPlayer"] == 0
    assert "explain" in state2
    assert state2["explain"]["pick"]["reason"].startswith("AI_PICK")


def test_rule_violation_is_reported_not_raised():
    sid, state = _new_game()
    card_id = state["players"][1]["hand"][0]["id"]
    r = client.post("/command", json={"sessionId": sid, "playerIndex": 1, "action": "discard", "cardId": card_id})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["code"] == "not_your_turn"
    assert body["state"]["currentPlayer"] == 0


def test_steal_needs_victim():
    sid, state = _new_game()
    card_id = state["players"][0]["hand"][0]["id"]
    r = client.post("/command", json={"sessionId": sid, "playerIndex": 0, "action": "steal", "cardId": card_id})
    assert r.status_code == 422


def test_unknown_session_and_bad_setup():
    assert client.get("/state/nope").status_code == 404
    assert client.post("/step", json={"sessionId": "nope"}).status_code == 404
    r = client.post("/new-game", json={"players": [{"kind": "H", "name": "Solo"}]})
    assert r.status_code == 422
    r = client.post(
        "/new-game",
        json={"players": [{"kind": "H"}, {"kind": "AI"}], "firstPlayer": 3},
    )
    assert r.status_code == 422


def test_step_endpoint_progresses():
    sid, _ = _new_game(firstPlayer=1)
    r = client.post("/step", json={"sessionId": sid})
    assert r.status_code == 200
    assert r.json()["state"]["currentPlayer"] == 0


def test_skip_and_series_next_game():
    sid, state = _new_game(series=True)
    assert state["series"]["numGames"] == 2

    r = client.post("/next-game", json={"sessionId": sid})
    assert r.status_code == 400

    r = client.post("/skip", json={"sessionId": sid})
    assert r.status_code == 200
    state = r.json()["state"]
    assert state["gameEnd"]["reason"] == "manual-skip"
    assert state["series"]["gamesPlayed"] == 1

    r = client.post("/next-game", json={"sessionId": sid})
    assert r.status_code == 200
    state = r.json()["state"]
    assert state["phase"] == "playing"
    assert state["firstPlayer"] == 1

    client.post("/skip", json={"sessionId": sid})
    r = client.post("/next-game", json={"sessionId": sid})
    assert r.status_code == 400


def test_next_game_requires_series():
    sid, _ = _new_game()
    client.post("/skip", json={"sessionId": sid})
    assert client.post("/next-game", json={"sessionId": sid}).status_code == 400


def test_command_cannot_play_for_ai_seat():
    sid, state = _new_game(firstPlayer=1)
    card_id = state["players"][1]["hand"][0]["id"]
    r = client.post("/command", json={"sessionId": sid, "playerIndex": 1, "action": "discard", "cardId": card_id})
    assert r.status_code == 200
    body = r.json()
    assert body["ok"] is False
    assert body["code"] == "ai_seat"
    assert body["state"]["currentPlayer"] == 1
    assert len(body["state"]["players"][1]["hand"]) == 6


def test_single_card_hands_are_rejected():
    r = client.post(
        "/new-game",
        json={"players": [{"kind": "H"}, {"kind": "AI"}], "handSize": 1},
    )
    assert r.status_code == 422
