from urllib.parse import unquote

from utils.invite_store import InviteToolStore
from utils.template_renderer import FORMAL_TEMPLATE, MUSLIM_TEMPLATE


def test_initial_state(client):
    data = client.get("/api/invite-tool").get_json()["data"]
    assert data["rawGuestNames"] == ""
    assert data["introText"] == FORMAL_TEMPLATE
    assert data["templateKey"] == "formal"
    assert data["shareBaseUrl"] == "https://wedding.example"
    assert data["guests"] == []


def test_generate_builds_and_persists_batch(app, client):
    resp = client.post("/api/invite-tool/generate", json={"rawGuestNames": "Budi, Siti\nAndi,, Budi"})
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["message"] == "Guest list created."
    assert data["rawGuestNames"] == "Budi\nSiti\nAndi\nBudi"

    guests = data["guests"]
    assert [g["name"] for g in guests] == ["Budi", "Siti", "Andi", "Budi"]
    assert [g["slug"] for g in guests] == ["budi", "siti", "andi", "budi-2"]
    assert guests[3]["inviteLink"] == "https://wedding.example/?to=budi-2"
    assert "Dear Budi," in guests[0]["personalizedText"]
    assert "https://wedding.example/?to=budi" in guests[0]["personalizedText"]
    assert unquote(guests[0]["whatsappUrl"].split("=", 1)[1]) == guests[0]["personalizedText"]
    created = [g["createdAt"] for g in guests]
    assert created == sorted(created) and len(set(created)) == 4

    stored = InviteToolStore(app.config["INVITE_TOOL_STATE_PATH"]).load()
    assert [g.slug for g in stored.guests] == ["budi", "siti", "andi", "budi-2"]


def test_generate_replaces_previous_batch(client):
    client.post("/api/invite-tool/generate", json={"rawGuestNames": "Ana, Budi"})
    data = client.post("/api/invite-tool/generate", json={"rawGuestNames": "Citra"}).get_json()["data"]
    assert [g["name"] for g in data["guests"]] == ["Citra"]


def test_generate_uses_stored_names(client):
    client.put("/api/invite-tool", json={"rawGuestNames": "Ana\nDewi"})
    data = client.post("/api/invite-tool/generate").get_json()["data"]
    assert [g["name"] for g in data["guests"]] == ["Ana", "Dewi"]


def test_generate_without_names_fails_and_keeps_state(client):
    client.post("/api/invite-tool/generate", json={"rawGuestNames": "Ana"})
    resp = client.post("/api/invite-tool/generate", json={"rawGuestNames": ",,,"})
    assert resp.status_code == 422
    assert resp.get_json()["error"] == "Enter at least one guest name first."

    data = client.get("/api/invite-tool").get_json()["data"]
    assert [g["name"] for g in data["guests"]] == ["Ana"]
    assert data["rawGuestNames"] == "Ana"


def test_update_template_rerenders_messages(client):
    client.post("/api/invite-tool/generate", json={"rawGuestNames": "Ana"})

    data = client.put("/api/invite-tool", json={"templateKey": "muslim"}).get_json()["data"]
    assert data["introText"] == MUSLIM_TEMPLATE
    assert data["templateKey"] == "muslim"
    assert data["message"] == "Muslim Template applied."
    assert "have Ana join us" in data["guests"][0]["personalizedText"]

    data = client.put("/api/invite-tool", json={"introText": "Hello there"}).get_json()["data"]
    assert data["templateKey"] == "custom"
    text = data["guests"][0]["personalizedText"]
    assert text.startswith("Dear, Ana,")
    assert text.endswith("Invitation link: https://wedding.example/?to=ana")


def test_update_validation(client):
    assert client.put("/api/invite-tool", json={"templateKey": "royal"}).status_code == 422
    assert client.put("/api/invite-tool", json={"introText": 5}).status_code == 422
    assert client.put("/api/invite-tool", data="x", content_type="application/json").status_code == 400


def test_remove_guest(client):
    guests = client.post("/api/invite-tool/generate", json={"rawGuestNames": "Ana, Budi"}).get_json()["data"]["guests"]

    resp = client.delete(f"/api/invite-tool/guests/{guests[0]['id']}")
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["message"] == "Ana removed from the guest list."
    assert [g["name"] for g in data["guests"]] == ["Budi"]

    assert client.delete(f"/api/invite-tool/guests/{guests[0]['id']}").status_code == 404


def test_lookup_by_slug(client):
    client.post("/api/invite-tool/generate", json={"rawGuestNames": "José Ramírez"})
    resp = client.get("/api/invite-tool/lookup?to=jose-ramirez")
    assert resp.status_code == 200
    assert resp.get_json()["data"]["name"] == "José Ramírez"
    assert resp.get_json()["data"]["source"] == "guest_list"

    assert client.get("/api/invite-tool/lookup").status_code == 400


def test_lookup_unknown_slug_falls_back_to_title_case(client):
    resp = client.get("/api/invite-tool/lookup?to=budi-santoso")
    assert resp.status_code == 200
    assert resp.get_json()["data"] == {"name": "Budi Santoso", "slug": "budi-santoso", "source": "slug"}


def test_templates_and_share(client):
    templates = client.get("/api/invite-tool/templates").get_json()["data"]
    assert [t["key"] for t in templates] == ["formal", "muslim"]

    share = client.get("/api/invite-tool/share").get_json()["data"]
    assert "https://wedding.example/" in share["message"]
    assert share["whatsappUrl"].startswith("https://wa.me/?text=")


def test_share_base_url_falls_back_to_request_host(tmp_path):
    from app import create_app

    app = create_app({
        "TESTING": True,
        "SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'host.db'}",
        "SHARE_BASE_URL": "",
    }, invite_store=InviteToolStore(str(tmp_path / "state.json")))
    client = app.test_client()

    data = client.post("/api/invite-tool/generate", json={"rawGuestNames": "Ana"}).get_json()["data"]
    assert data["shareBaseUrl"] == "http://localhost"
    assert data["guests"][0]["inviteLink"] == "http://localhost/?to=ana"
