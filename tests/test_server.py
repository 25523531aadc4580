"""HTTP-level tests for the mock endpoints."""

import pytest
from fastapi.testclient import TestClient

from bakalari_mock.server import create_app
from bakalari_mock.storage import MemoryStorage
from bakalari_mock.version_cache import DEFAULT_API_VERSION, DEFAULT_APP_VERSION


JSON_TYPE = "application/json; charset=utf-8"


@pytest.fixture
def app(store, cache):
    return create_app(store=store, versions=cache)


@pytest.fixture
def client(app):
    return TestClient(app)


def login(client, username="novak", password="4.A"):
    return client.post(
        "/api/login",
        data={"grant_type": "password", "username": username, "password": password, "client_id": "ANDR"},
    )


class TestInfo:
    def test_reports_cached_versions(self, client):
        response = client.get("/api/3")

        assert response.status_code == 200
        assert response.headers["content-type"] == JSON_TYPE
        assert response.json() == {
            "ApiVersion": DEFAULT_API_VERSION,
            "ApplicationVersion": DEFAULT_APP_VERSION,
            "BaseUrl": "api/3",
        }

    def test_reports_refreshed_versions(self, client, spawn):
        client.get("/api/3")
        spawn.run_all()

        assert client.get("/api/3").json()["ApiVersion"] == "3.30.0"

    def test_lifespan_starts_first_refresh(self, app, spawn):
        with TestClient(app) as client:
            client.get("/api/3")
            client.get("/api/3")

        assert len(spawn.spawned) == 1


class TestLogin:
    def test_password_login_issues_tokens(self, client, store):
        response = login(client)

        assert response.status_code == 200
        body = response.json()
        user, found = store.get_user_by_name("novak")
        assert found
        assert body["access_token"] == user.access_token
        assert body["refresh_token"] == user.refresh_token
        assert body["token_type"] == "Bearer"
        assert body["expires_in"] == 3599
        assert body["scope"] == "openid profile offline_access bakalari_api"
        assert body["bak:UserId"] == "1"
        assert body["bak:ApiVersion"] == DEFAULT_API_VERSION
        assert body["bak:AppVersion"] == DEFAULT_APP_VERSION

    def test_repeat_login_returns_same_tokens(self, client, store):
        first = login(client, password="4.A").json()
        second = login(client, password="1.B").json()

        assert first["access_token"] == second["access_token"]
        assert first["refresh_token"] == second["refresh_token"]
        assert store.get_user_by_name("novak")[0].class_name == "1.B"

    def test_refresh_token_grant(self, client):
        tokens = login(client).json()

        response = client.post(
            "/api/login",
            data={"grant_type": "refresh_token", "refresh_token": tokens["refresh_token"]},
        )

        assert response.status_code == 200
        assert response.json()["access_token"] == tokens["access_token"]

    @pytest.mark.parametrize(
        "form",
        [
            {"grant_type": "password", "password": "4.A"},
            {"grant_type": "password", "username": "novak"},
            {"grant_type": "password", "username": "x" * 256, "password": "4.A"},
            {"grant_type": "password", "username": "novak", "password": "y" * 256},
            {"grant_type": "refresh_token"},
            {"grant_type": "refresh_token", "refresh_token": "unknown"},
            {"grant_type": "client_credentials"},
            {},
        ],
    )
    def test_bad_requests(self, client, form):
        response = client.post("/api/login", data=form)

        assert response.status_code == 400
        assert response.content == b""

    def test_field_just_under_limit_is_accepted(self, client):
        assert login(client, username="x" * 255).status_code == 200

    def test_empty_password_is_accepted(self, client, store):
        assert login(client, password="").status_code == 200
        assert store.get_user_by_name("novak")[0].class_name == ""


class TestUser:
    def test_requires_bearer_token(self, client):
        assert client.get("/api/3/user").status_code == 401
        assert client.get("/api/3/user", headers={"Authorization": "Basic abc"}).status_code == 401
        assert client.get("/api/3/user", headers={"Authorization": "Bearer nope"}).status_code == 401

    def test_returns_user_payload(self, client):
        token = login(client, password="4.A").json()["access_token"]

        response = client.get("/api/3/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        body = response.json()
        assert body["FullName"] == "novak, 4.A"
        assert body["Class"] == {"Id": "XL", "Abbrev": "4.A", "Name": "4.A"}
        assert body["UserType"] == "student"
        modules = [m["Module"] for m in body["EnabledModules"]]
        assert "Komens" in modules
        assert "Campaign" not in modules
        assert body["SettingModules"]["Common"]["$type"] == "CommonModuleSettings"
        assert body["CampaignCategoryCode"]

    def test_register_notification(self, client):
        response = client.post("/api/3/register-notification", json={"token": "x"})

        assert response.status_code == 200
        assert response.content == b""


class TestWeb:
    def test_webmodule(self, client):
        body = client.get("/api/3/webmodule").json()

        assert body["WebModules"][0]["Name"] == "Dokumenty"
        assert body["Dashboard"]["Url"] == ""

    def test_login_token(self, client):
        response = client.get("/api/3/logintoken")

        assert response.headers["content-type"] == JSON_TYPE
        assert response.json() == "donate"

    def test_donate_redirect(self, client):
        response = client.get("/api/3/login/donate", follow_redirects=False)

        assert response.status_code == 307
        assert response.headers["location"] == "https://www.buymeacoffee.com/vfosnar"


class TestFallbacks:
    def test_home_page(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "Dummy Bakaláři" in response.text

    def test_unknown_path_is_bad_request(self, client):
        response = client.get("/api/3/marks")

        assert response.status_code == 400
        assert response.content == b""

    def test_exception_becomes_empty_500(self, cache):
        class BrokenStore(MemoryStorage):
            def get_user_by_access_token(self, access_token):
                raise RuntimeError("broken")

        client = TestClient(create_app(store=BrokenStore(), versions=cache))

        response = client.get("/api/3/user", headers={"Authorization": "Bearer abc"})

        assert response.status_code == 500
        assert response.content == b""
