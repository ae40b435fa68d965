"""Tests for the Flask endpoints."""

import pytest

import app as chat_app


@pytest.fixture
def client():
    chat_app.app.config["TESTING"] = True
    with chat_app.app.test_client() as client:
        yield client


@pytest.fixture
def reply(monkeypatch):
    received = []

    def fake_response(message):
        received.append(message)
        return "Use **pip**:\n```bash\npip install flask\n```"

    monkeypatch.setattr(chat_app, "response", fake_response)
    return received


def test_index_renders_chat_form(client):
    res = client.get("/")
    assert res.status_code == 200
    assert b'id="chat-form"' in res.data
    assert b'id="chat-box"' in res.data


def test_chat_returns_reply_and_html(client, reply):
    res = client.post("/api/chat", json={"message": "How do I install flask?"})

    assert res.status_code == 200
    data = res.get_json()
    assert reply == ["How do I install flask?"]
    assert data["reply"] == "Use **pip**:\n```bash\npip install flask\n```"
    assert data["html"] == (
        'Use <strong>pip</strong>:<br>'
        '<pre><code class="language-bash">pip install flask</code></pre>'
    )


@pytest.mark.parametrize("body", [{}, {"message": ""}, {"message": "   "}, {"message": 42}, ["hi"]])
def test_chat_rejects_invalid_message(client, reply, body):
    res = client.post("/api/chat", json=body)

    assert res.status_code == 400
    assert res.get_json() == {"reply": "Please send a non-empty message."}
    assert reply == []


def test_chat_rejects_non_json_body(client, reply):
    res = client.post("/api/chat", data="message=hi", content_type="application/x-www-form-urlencoded")
    assert res.status_code == 400


def test_chat_reports_provider_failure(client, monkeypatch):
    def broken_response(message):
        raise RuntimeError("api key missing")

    monkeypatch.setattr(chat_app, "response", broken_response)
    res = client.post("/api/chat", json={"message": "hi"})

    assert res.status_code == 502
    assert "unavailable" in res.get_json()["reply"]
