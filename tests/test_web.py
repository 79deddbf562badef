import datetime

import pytest

from airss.web import create_app

from .conftest import NOW


@pytest.fixture
def client(store, make_article):
    store.insert(make_article("z80", title="Z80 Project", score="90", analysis="great", model="m"))
    store.insert(make_article("lamp", title="Smart <Lamp>", score="20", published=NOW - datetime.timedelta(hours=1)))
    store.insert(make_article("new", title="Fresh", published=NOW - datetime.timedelta(hours=2)))
    store.mark_reported(["z80"])
    app = create_app(store, limit=100)
    app.config["TESTING"] = True
    return app.test_client()


def test_list_page(client):
    resp = client.get("/")

    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Z80 Project" in body
    assert "Smart &lt;Lamp&gt;" in body
    assert '<span class="score-high">90</span>' in body
    assert '<span class="score-low">20</span>' in body
    assert 'value="z80"' in body
    assert "2024-06-01 12:00" in body


def test_list_reported_only(client):
    body = client.get("/?reported=true").get_data(as_text=True)

    assert "Z80 Project" in body
    assert "Fresh" not in body
    assert 'id="reportedOnly" onclick="updateFilter()" checked' in body


def test_rescore_action(client, store):
    resp = client.post("/action", data={"action": "rescore", "guids": ["z80", "lamp"]})

    assert resp.status_code == 303
    assert resp.headers["Location"].endswith("/")
    assert store.get("z80").score == ""
    assert store.get("z80").analysis == ""
    assert {a.guid for a in store.select_unscored()} == {"z80", "lamp", "new"}


def test_reset_reported_action(client, store):
    resp = client.post("/action", data={"action": "reset-reported", "guids": ["z80"]})

    assert resp.status_code == 303
    assert store.get("z80").reported is False


def test_action_without_ids_redirects(client, store):
    resp = client.post("/action", data={"action": "rescore"})

    assert resp.status_code == 303
    assert store.get("z80").score == "90"


def test_unknown_action(client, store):
    resp = client.post("/action", data={"action": "delete", "guids": ["z80"]})

    assert resp.status_code == 400
    assert store.get("z80").reported is True


def test_action_requires_post(client):
    assert client.get("/action").status_code == 405


def test_other_paths_404(client):
    assert client.get("/articles").status_code == 404
