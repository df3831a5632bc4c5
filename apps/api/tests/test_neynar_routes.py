"""User lookup, notification, and cast route tests."""

from __future__ import annotations

import os
import unittest

import httpx
from fastapi.testclient import TestClient

from app.adapters.neynar import NeynarClientProvider, NeynarError, NeynarErrorKind
from app.core.config import Settings, get_settings
from app.main import create_app
from app.schemas.neynar import NeynarUser, NotificationDelivery, VerifiedAddresses

from test_neynar_service import FakeSocialGraphClient

INTERNAL_HEADERS = {"X-Internal-Secret": "test-internal-secret"}
BEARER_HEADERS = {"Authorization": "Bearer test:1"}


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "AUTH_PROVIDER",
        "AUTH_DOMAIN",
        "INTERNAL_SECRET",
        "APP_URL",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["AUTH_PROVIDER"] = "mock"
        os.environ.pop("AUTH_DOMAIN", None)
        os.environ["INTERNAL_SECRET"] = "test-internal-secret"
        os.environ["APP_URL"] = "https://miniapp.example"
        get_settings.cache_clear()

        self.fake = FakeSocialGraphClient()
        self.fake.users[2] = NeynarUser(
            fid=2,
            username="second",
            verified_addresses=VerifiedAddresses(eth_addresses=["0xdef"]),
        )
        provider = NeynarClientProvider(
            load_settings=lambda: Settings(neynar_api_key="test-key"),
            client_factory=lambda _settings: self.fake,
        )
        self.app = create_app(neynar_provider=provider)
        self.client = TestClient(self.app)

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class UserRouteTests(_SettingsEnvCase):
    def test_openapi_documents_reachable_error_codes(self) -> None:
        paths = self.client.get("/openapi.json").json()["paths"]

        self.assertEqual(
            set(paths["/api/users/{fid}"]["get"]["responses"].keys()),
            {"200", "400", "401", "404", "429", "500", "502"},
        )
        self.assertIn("500", paths["/api/notifications"]["post"]["responses"])
        self.assertIn("500", paths["/api/casts"]["post"]["responses"])

    def test_rate_limited_lookup_returns_429(self) -> None:
        self.fake.fetch_error = NeynarError(NeynarErrorKind.RATE_LIMITED, "slow down")

        response = self.client.get("/api/users/1", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 429)
        self.assertEqual(response.json(), {"error": "Rate limited"})

    def test_known_user_is_returned(self) -> None:
        response = self.client.get("/api/users/2", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["fid"], 2)
        self.assertEqual(body["username"], "second")
        self.assertEqual(body["primary_address"], "0xdef")

    def test_unknown_user_returns_404(self) -> None:
        response = self.client.get("/api/users/999", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "User not found"})

    def test_indeterminate_lookup_returns_502(self) -> None:
        self.fake.fetch_error = httpx.ConnectError("unreachable")

        with self.assertLogs("app.services.neynar", level="ERROR"):
            response = self.client.get("/api/users/1", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "User lookup unavailable"})

    def test_requires_bearer_token(self) -> None:
        response = self.client.get("/api/users/1")

        self.assertEqual(response.status_code, 401)

    def test_non_positive_fid_returns_400(self) -> None:
        response = self.client.get("/api/users/0", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid FID"})

    def test_missing_api_key_returns_500(self) -> None:
        app = create_app(neynar_provider=NeynarClientProvider(load_settings=lambda: Settings(neynar_api_key="")))
        client = TestClient(app)

        response = client.get("/api/users/1", headers=BEARER_HEADERS)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "Internal server error"})


class NotificationRouteTests(_SettingsEnvCase):
    payload = {"fid": 1, "title": "Test Notification", "body": "Test Body"}

    def test_requires_internal_secret(self) -> None:
        missing = self.client.post("/api/notifications", json=self.payload)
        wrong = self.client.post("/api/notifications", headers={"X-Internal-Secret": "nope"}, json=self.payload)

        self.assertEqual(missing.status_code, 401)
        self.assertEqual(wrong.status_code, 401)
        self.assertEqual(self.fake.notification_calls, [])

    def test_unset_internal_secret_rejects_everything(self) -> None:
        os.environ.pop("INTERNAL_SECRET", None)
        get_settings.cache_clear()

        response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.status_code, 401)

    def test_success_state_is_returned(self) -> None:
        response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"state": "success"})
        self.assertEqual(self.fake.notification_calls[0][1].target_url, "https://miniapp.example")

    def test_no_token_state_is_returned(self) -> None:
        self.fake.deliveries = []

        response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.json(), {"state": "no_token"})

    def test_rate_limited_state_is_returned(self) -> None:
        self.fake.notify_error = NeynarError(NeynarErrorKind.RATE_LIMITED, "slow down")

        response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.json(), {"state": "rate_limited"})

    def test_unclassified_failure_returns_error_state_without_detail(self) -> None:
        self.fake.notify_error = RuntimeError("secret upstream detail")

        with self.assertLogs("app.services.neynar", level="ERROR"):
            response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"state": "error"})

    def test_failed_delivery_returns_502(self) -> None:
        self.fake.deliveries = [NotificationDelivery(fid=1, status="failed")]

        response = self.client.post("/api/notifications", headers=INTERNAL_HEADERS, json=self.payload)

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "Failed to deliver notification"})

    def test_invalid_payload_returns_400(self) -> None:
        response = self.client.post(
            "/api/notifications",
            headers=INTERNAL_HEADERS,
            json={"fid": 1, "title": "x" * 33, "body": "Test Body"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request payload"})


class CastRouteTests(_SettingsEnvCase):
    def test_cast_is_published(self) -> None:
        response = self.client.post(
            "/api/casts",
            headers=INTERNAL_HEADERS,
            json={"signer_uuid": "test-uuid", "text": "Test cast", "embeds": ["https://example.com"]},
        )

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.fake.cast_calls, [("test-uuid", "Test cast", ["https://example.com"])])

    def test_cast_failure_returns_502(self) -> None:
        self.fake.cast_error = RuntimeError("Failed to publish")

        response = self.client.post(
            "/api/casts",
            headers=INTERNAL_HEADERS,
            json={"signer_uuid": "test-uuid", "text": "Test cast"},
        )

        self.assertEqual(response.status_code, 502)
        self.assertEqual(response.json(), {"error": "Failed to publish cast"})
