import pytest
from fastapi.testclient import TestClient

from backend.app import app

client = TestClient(app)

SAMPLE = "# start: s\n# end: t\ns red:a\na red:s blue:b red:e\nb blue:a red:c\nc red:b blue:c\ne red:a blue:t\nt blue:e\n"


def test_health():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_list_puzzles():
    response = client.get("/puzzles")
    assert response.status_code == 200
    names = [p["name"] for p in response.json()["puzzles"]]
    assert "wall-puzzle.txt" in names
    assert "four-rooms.json" in names


def test_parse():
    response = client.post("/parse", json={"name": "sample.txt", "text": SAMPLE})
    assert response.status_code == 200
    data = response.json()
    assert data["counts"] == {"rooms": 6, "pathways": 11}
    assert data["directed"] is True
    assert data["start"] == "s"
    assert data["end"] == "t"


def test_graph_payload():
    response = client.post("/graph", json={"text": "# directed: no\na red:b:2\n"})
    assert response.status_code == 200
    graph = response.json()["graph"]
    assert graph["directed"] is False
    assert graph["rooms"] == ["a", "b"]
    assert graph["pathways"] == [{"from": "a", "to": "b", "color": "red", "cost": 2}]


def test_solve():
    response = client.post("/solve", json={"text": SAMPLE})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "solved"
    assert data["cost"] == 8
    assert data["path"]["rooms"] == ["s", "a", "b", "c", "c", "b", "a", "e", "t"]
    assert data["path"]["steps"][3] == {"from": "c", "to": "c", "color": "blue", "cost": 1}


def test_solve_json_puzzle():
    text = '{"rooms": ["A", "T"], "pathways": [{"from": "A", "to": "T", "color": "blue"}]}'
    response = client.post(
        "/solve", json={"name": "p.json", "text": text, "start": "T", "end": "A", "initial_color": "red"}
    )
    assert response.status_code == 200
    assert response.json()["path"]["rooms"] == ["T", "A"]


def test_solve_no_path():
    response = client.post("/solve", json={"text": "a blue:b\nb blue:c\n", "start": "a", "end": "c"})
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "no_path"
    assert data["path"] is None


def test_solve_aborted():
    response = client.post("/solve", json={"text": SAMPLE, "max_expansions": 0})
    assert response.status_code == 200
    assert response.json()["status"] == "aborted"


@pytest.mark.parametrize(
    "payload",
    [
        {"text": "a green:b", "start": "a", "end": "b"},
        {"text": "a red:b\na red:c", "start": "a", "end": "b"},
        {"text": SAMPLE, "start": "nowhere"},
        {"text": "a red:b"},
        {"name": "p.json", "text": '{"rooms": ["A"], "pathways": null}', "start": "A", "end": "A"},
        {"name": "p.json", "text": '{"rooms": ["A"], "meta": 5}', "start": "A", "end": "A"},
        {"name": "p.json", "text": '{"rooms": ["A", "T"], "directed": "false"}', "start": "A", "end": "T"},
        {
            "name": "p.json",
            "text": '{"rooms": ["A", "T"], "pathways": [{"from": "A", "to": "T", "color": "red", "cost": Infinity}]}',
            "start": "A",
            "end": "T",
        },
    ],
)
def test_solve_bad_requests(payload):
    response = client.post("/solve", json=payload)
    assert response.status_code == 400
    assert response.json()["detail"]


def test_solve_validates_timeout():
    response = client.post("/solve", json={"text": SAMPLE, "timeout_ms": 0})
    assert response.status_code == 422
