from fastapi.testclient import TestClient

from chat_relay.web.main import create_app


class EchoResponder:
    name = "echo"

    def __init__(self):
        self.inputs = []

    def respond(self, message):
        self.inputs.append(message)
        return f"**{message}**"


def client_with(responder):
    return TestClient(create_app(responder=responder))


def test_send_single():
    r = EchoResponder()
    resp = client_with(r).post("/Chat/Send", json={"message": "hi"})
    assert resp.status_code == 200
    assert resp.json() == {
        "responses": [
            {
                "full": "**hi**",
                "snippet": "<p><strong>hi</strong></p>",
                "hasMore": False,
                "snippetType": "html",
            }
        ]
    }


def test_send_cycles():
    r = EchoResponder()
    resp = client_with(r).post("/Chat/Send", json={"message": "hi", "cycles": 3})
    assert [item["full"] for item in resp.json()["responses"]] == [
        "**hi**",
        "****hi****",
        "******hi******",
    ]
    assert r.inputs == ["hi", "**hi**", "****hi****"]


def test_send_pascal_case_keys():
    r = EchoResponder()
    resp = client_with(r).post("/Chat/Send", json={"Message": "hi", "Cycles": 2})
    assert len(resp.json()["responses"]) == 2


def test_send_blank_message():
    r = EchoResponder()
    client = client_with(r)
    assert client.post("/Chat/Send", json={"message": "   "}).json() == {"responses": []}
    assert client.post("/Chat/Send", json={}).json() == {"responses": []}
    assert r.inputs == []


def test_send_null_cycles():
    r = EchoResponder()
    resp = client_with(r).post("/Chat/Send", json={"message": "hi", "cycles": None})
    assert resp.status_code == 200
    assert len(resp.json()["responses"]) == 1
    assert r.inputs == ["hi"]


def test_send_non_numeric_cycles():
    r = EchoResponder()
    resp = client_with(r).post("/Chat/Send", json={"message": "hi", "cycles": "many"})
    assert resp.status_code == 200
    assert len(resp.json()["responses"]) == 1


def test_send_non_string_message():
    r = EchoResponder()
    client = client_with(r)
    resp = client.post("/Chat/Send", json={"message": 42})
    assert resp.status_code == 200
    assert resp.json()["responses"][0]["full"] == "**42**"
    resp = client.post("/Chat/Send", json={"message": ["hi"]})
    assert resp.status_code == 200
    assert resp.json() == {"responses": []}
    assert r.inputs == ["42"]


def test_send_code_snippet_type():
    class FencedResponder:
        name = "fenced"

        def respond(self, message):
            return "Sample:\n```js\nlet a = 1;\n```"

    item = client_with(FencedResponder()).post("/Chat/Send", json={"message": "x"}).json()["responses"][0]
    assert item["snippetType"] == "code"
    assert item["snippet"] == "let a = 1;"


def test_index_page():
    resp = client_with(EchoResponder()).get("/")
    assert resp.status_code == 200
    assert "echo" in resp.text
    assert "chat.js" in resp.text


def test_health():
    resp = client_with(EchoResponder()).get("/health")
    assert resp.json() == {"status": "healthy", "responder": "echo"}
