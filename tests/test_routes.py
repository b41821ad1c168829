"""Tests for the administration pages and the JSON API."""
from message_customize.catalog import get_catalog
from message_customize.models.custom_message_setting import CustomMessageSetting
from message_customize.models.user import User

EDIT_URL = "/admin/custom-messages/"


def test_login_page_loads(client):
    r = client.get("/login")
    assert r.status_code == 200
    assert b"Sign in" in r.data


def test_invalid_login(client):
    r = client.post("/login", data={"username": "admin", "password": "wrong"},
                    follow_redirects=True)
    assert b"Invalid user or password." in r.data


def test_anonymous_is_redirected_to_login(client):
    r = client.get(EDIT_URL)
    assert r.status_code == 302
    assert "/login" in r.headers["Location"]


def test_non_admin_is_forbidden(user_client):
    r = user_client.get(EDIT_URL)
    assert r.status_code == 403
    # Error page rendered in the user's language
    assert "403 Accès interdit" in r.get_data(as_text=True)


def test_edit_page_loads(admin_client):
    r = admin_client.get(EDIT_URL + "?lang=fr")
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "Custom messages" in body
    assert 'value="fr" selected' in body
    assert "label_issue" in body


def test_update_single_language(app, admin_client):
    r = admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_issue]": "Ticket",
        "custom_messages[date.formats.default]": "%m/%d/%Y",
    })
    assert r.status_code == 302
    assert "lang=en" in r.headers["Location"]

    with app.app_context():
        setting = CustomMessageSetting.find_or_default()
        assert setting.custom_messages("en") == {
            "label_issue": "Ticket",
            "date": {"formats": {"default": "%m/%d/%Y"}},
        }
        # Only the affected language was reloaded with the override
        assert get_catalog().translations_for("en")["label_issue"] == "Ticket"

    r = admin_client.get(EDIT_URL)
    assert b"Successful update." in r.data


def test_update_with_new_key_row(app, admin_client):
    r = admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "ja",
        "new_key": "field_subject",
        "new_value": "件名",
    })
    assert r.status_code == 302
    with app.app_context():
        assert CustomMessageSetting.find_or_default().custom_messages("ja") == {
            "field_subject": "件名"
        }


def test_update_with_unknown_key_shows_errors(app, admin_client):
    r = admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_nothing]": "x",
    })
    assert r.status_code == 200
    assert b"The keys do not exist. keys: [label_nothing]" in r.data
    with app.app_context():
        assert CustomMessageSetting.find_or_default().custom_messages() == {}


def test_update_yaml(app, admin_client):
    r = admin_client.post(EDIT_URL, data={
        "tab": "yaml",
        "custom_messages_yaml": "fr:\n  label_issue: Billet\n",
    })
    assert r.status_code == 302
    assert "tab=yaml" in r.headers["Location"]

    r = admin_client.get(EDIT_URL + "?tab=yaml")
    assert "label_issue: Billet" in r.get_data(as_text=True)


def test_update_invalid_yaml_keeps_text_for_correction(app, admin_client):
    r = admin_client.post(EDIT_URL, data={
        "tab": "yaml",
        "custom_messages_yaml": "not: valid: yaml: [",
    })
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    assert "mapping values are not allowed here" in body
    assert "not: valid: yaml: [" in body

    with app.app_context():
        assert CustomMessageSetting.find_or_default().custom_messages() == {}


def test_toggle_enabled(app, admin_client):
    admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_issue]": "Ticket",
    })

    r = admin_client.post(EDIT_URL + "toggle", follow_redirects=True)
    assert b"Custom messages are disabled." in r.data
    with app.app_context():
        assert not CustomMessageSetting.find_or_default().enabled()
        assert get_catalog().translations_for("en")["label_issue"] == "Issue"

    r = admin_client.post(EDIT_URL + "toggle", follow_redirects=True)
    assert b"Custom messages are enabled." in r.data
    with app.app_context():
        assert get_catalog().translations_for("en")["label_issue"] == "Ticket"


def test_overrides_show_in_the_interface(admin_client):
    admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_custom_messages]": "Message overrides",
    })
    r = admin_client.get(EDIT_URL)
    assert b"<h1>Message overrides</h1>" in r.data


def test_set_language(admin_client):
    admin_client.get("/set-language/ja")
    r = admin_client.get(EDIT_URL)
    assert "メッセージのカスタマイズ" in r.get_data(as_text=True)

    admin_client.get("/set-language/xx")
    r = admin_client.get(EDIT_URL)
    assert "メッセージのカスタマイズ" in r.get_data(as_text=True)


def test_api_requires_authentication(client):
    r = client.get("/api/custom-messages")
    assert r.status_code == 401
    assert r.get_json()["error"] == "Authentication required"


def test_api_requires_admin(user_client):
    r = user_client.get("/api/languages")
    assert r.status_code == 403


def test_api_languages(admin_client):
    admin_client.post(EDIT_URL, data={
        "tab": "yaml",
        "custom_messages_yaml": "fr:\n  label_issue: Billet\nja:\n  label_issue: 課題\n",
    })
    data = admin_client.get("/api/languages").get_json()
    assert data["languages"] == ["en", "fr", "ja"]
    assert data["using"] == ["fr", "ja"]


def test_api_custom_messages(admin_client):
    admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "fr",
        "custom_messages[date.formats.default]": "%d.%m.%Y",
        "custom_messages[date.order]": "[year, month, day]",
    })
    data = admin_client.get("/api/custom-messages?lang=fr").get_json()
    assert data["enabled"] is True
    assert data["custom_messages"] == {
        "date.formats.default": "%d.%m.%Y",
        "date.order": ["year", "month", "day"],
    }


def test_api_available_messages(admin_client):
    data = admin_client.get("/api/available-messages?lang=ja").get_json()
    assert data["lang"] == "ja"
    assert data["messages"]["label_issue"] == "チケット"

    r = admin_client.get("/api/available-messages?lang=xx")
    assert r.status_code == 404


def test_init_db_command(app, tmp_path):
    database = str(tmp_path / "fresh.db")
    app.config["DATABASE"] = database
    result = app.test_cli_runner().invoke(args=["init-db"])
    assert "Database initialized" in result.output

    with app.app_context():
        assert User.get_by_username("admin").is_admin


def test_clearing_a_field_removes_only_that_override(app, admin_client):
    admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_issue]": "Ticket",
        "custom_messages[label_project]": "Space",
    })
    r = admin_client.post(EDIT_URL, data={
        "tab": "normal",
        "lang": "en",
        "custom_messages[label_issue]": "",
        "custom_messages[label_project]": "Space",
    })
    assert r.status_code == 302

    with app.app_context():
        assert CustomMessageSetting.find_or_default().custom_messages() == {
            "en": {"label_project": "Space"}
        }
        # Base message is back instead of an empty string
        assert get_catalog().translations_for("en")["label_issue"] == "Issue"


def test_login_messages_use_configured_default_language(app, client):
    app.config["DEFAULT_LANGUAGE"] = "fr"
    r = client.post("/login", data={"username": "admin", "password": "wrong"})
    assert "Identifiant ou mot de passe invalide." in r.get_data(as_text=True)
