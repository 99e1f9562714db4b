"""
Testing API via TestClient
- The store fixture is shared, so the lock puzzle is solved once for the session.
- Codes are plain JSON lists; null marks a position not filled in yet.
"""

LOCK = "/puzzles/combination-lock"
ANSWER = [5, 1, 3, 2, 4]


def test_list_puzzles(client):
    response = client.get("/puzzles")
    assert response.status_code == 200
    names = [p["name"] for p in response.json()]
    assert names == ["combination-lock", "two-digit-demo"]


def test_get_puzzle_hides_solutions(client):
    response = client.get(LOCK)
    assert response.status_code == 200
    body = response.json()
    assert body["code_length"] == 5
    assert len(body["clues"]) == 5
    assert body["clues"][0]["guess"] == [8, 2, 6, 1, 9]
    assert body["solvable"] is True
    assert body["solution_count"] >= 1
    assert "solutions" not in body


def test_unknown_puzzle_is_404(client):
    assert client.get("/puzzles/nope").status_code == 404
    assert client.post("/puzzles/nope/check", json={"code": ANSWER}).status_code == 404


def test_validate_partial_code_is_unknown_for_every_clue(client):
    response = client.post(f"{LOCK}/validate", json={"code": [5, None, 3, None, 4]})
    assert response.status_code == 200
    body = response.json()
    assert body["complete"] is False
    assert [v["verdict"] for v in body["verdicts"]] == ["unknown"] * 5


def test_validate_complete_code(client):
    response = client.post(f"{LOCK}/validate", json={"code": ANSWER})
    assert response.status_code == 200
    body = response.json()
    assert body["complete"] is True
    assert [v["verdict"] for v in body["verdicts"]] == ["valid"] * 5

    # 12345 vs 82619: 2 shared digits but the 2 is in place -> clue 1 fails
    response = client.post(f"{LOCK}/validate", json={"code": [1, 2, 3, 4, 5]})
    assert response.json()["verdicts"][0]["verdict"] == "invalid"


def test_validate_rejects_bad_input(client):
    # wrong length -> 400 from the route
    assert client.post(f"{LOCK}/validate", json={"code": [1, 2]}).status_code == 400
    # digit out of range -> 422 from the schema
    assert client.post(f"{LOCK}/validate", json={"code": [1, 2, 3, 4, 10]}).status_code == 422


def test_check(client):
    response = client.post(f"{LOCK}/check", json={"code": ANSWER})
    assert response.status_code == 200
    assert response.json()["solved"] is True

    response = client.post(f"{LOCK}/check", json={"code": [1, 2, 3, 4, 5]})
    assert response.status_code == 200
    assert response.json()["solved"] is False

    # a submitted code must be complete
    assert client.post(f"{LOCK}/check", json={"code": [5, 1, 3, 2, None]}).status_code == 422
    assert client.post(f"{LOCK}/check", json={"code": [5, 1, 3]}).status_code == 400


def test_explain_clue(client):
    response = client.post(f"{LOCK}/clues/0/explain", json={"code": [1, 2, 3, 4, 5]})
    assert response.status_code == 200
    body = response.json()
    assert body["verdict"] == "invalid"
    assert body["guess"] == "82619"
    assert body["code"] == "12345"
    assert body["evaluation"] == {"digit_matches": 2, "position_matches": 1, "satisfies": False}
    # JSON object keys are strings
    assert body["shared_digits"] == {"1": 1, "2": 1}
    assert [p["match"] for p in body["positions"]] == [False, True, False, False, False]
    assert len(body["notes"]) == 1


def test_explain_partial_code(client):
    response = client.post(f"{LOCK}/clues/4/explain", json={"code": [None, 1, None, None, 4]})
    assert response.status_code == 200
    body = response.json()
    assert body["verdict"] == "unknown"
    assert body["code"] == "-1--4"
    assert body["evaluation"] is None
    assert body["positions"] == []


def test_explain_unknown_clue_is_404(client):
    assert client.post(f"{LOCK}/clues/5/explain", json={"code": ANSWER}).status_code == 404
    assert client.post(f"{LOCK}/clues/-1/explain", json={"code": ANSWER}).status_code == 404


def test_solve_unique(client):
    payload = {
        "clues": [{"guess": [1, 2], "target_digit_matches": 2, "target_position_matches": 0}],
        "code_length": 2,
    }
    response = client.post("/solve", json=payload)
    assert response.status_code == 200
    assert response.json() == {"count": 1, "solutions": [[2, 1]]}


def test_solve_contradiction_is_empty_not_an_error(client):
    payload = {
        "clues": [
            {"guess": [0, 0], "target_digit_matches": 2, "target_position_matches": 2},
            {"guess": [1, 1], "target_digit_matches": 2, "target_position_matches": 2},
        ],
        "code_length": 2,
    }
    response = client.post("/solve", json=payload)
    assert response.status_code == 200
    assert response.json() == {"count": 0, "solutions": []}


def test_solve_without_clues(client):
    response = client.post("/solve", json={"clues": [], "code_length": 2})
    body = response.json()
    assert body["count"] == 100
    assert body["solutions"][0] == [0, 0]
    assert body["solutions"][-1] == [9, 9]

    response = client.post("/solve", json={"clues": [], "code_length": 2, "distinct_only": True})
    assert response.json()["count"] == 90


def test_solve_rejects_bad_input(client):
    # above the configured limit (4 in tests)
    assert client.post("/solve", json={"clues": [], "code_length": 5}).status_code == 400
    # guess length does not match code_length
    payload = {
        "clues": [{"guess": [1, 2, 3], "target_digit_matches": 1, "target_position_matches": 0}],
        "code_length": 2,
    }
    assert client.post("/solve", json=payload).status_code == 400
    # target larger than the guess
    payload = {
        "clues": [{"guess": [1, 2], "target_digit_matches": 3, "target_position_matches": 0}],
        "code_length": 2,
    }
    assert client.post("/solve", json=payload).status_code == 400
    # digit out of range
    payload = {
        "clues": [{"guess": [1, 12], "target_digit_matches": 1, "target_position_matches": 0}],
        "code_length": 2,
    }
    assert client.post("/solve", json=payload).status_code == 422


def test_evaluate(client):
    payload = {
        "candidate": [2, 1],
        "clue": {"guess": [1, 2], "target_digit_matches": 2, "target_position_matches": 0},
    }
    response = client.post("/evaluate", json=payload)
    assert response.status_code == 200
    assert response.json() == {"digit_matches": 2, "position_matches": 0, "satisfies": True}

    payload["candidate"] = [2, 1, 0]
    assert client.post("/evaluate", json=payload).status_code == 400
