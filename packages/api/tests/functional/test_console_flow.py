# This project was developed with assistance from AI tools.
"""Functional tests: shared-secret admin console, uploads and health."""

from pathlib import Path

import pytest

from src.core.config import settings

from .personas import PDF, cash_buyer, console_headers, upload_document, wholesaler

pytestmark = pytest.mark.functional


class TestConsoleAccess:
    def test_missing_secret_is_401(self, client):
        assert client.get("/api/console/deals").status_code == 401

    def test_wrong_secret_is_403(self, client):
        assert client.get("/api/console/deals", headers=console_headers("wrong")).status_code == 403

    def test_user_token_is_refused(self, client):
        walt = wholesaler(client)
        assert client.get("/api/console/deals", headers=walt.headers).status_code == 403

    def test_disabled_console_is_503(self, client, monkeypatch):
        monkeypatch.setattr(settings, "ADMIN_CONSOLE_SECRET", None)
        assert client.get("/api/console/deals", headers=console_headers()).status_code == 503


class TestConsoleVerification:
    def test_pending_sellers_and_verify(self, client):
        walt = wholesaler(client)
        cash_buyer(client)

        sellers = client.get("/api/console/sellers", headers=console_headers()).json()
        assert [u["id"] for u in sellers["data"]] == [walt.user_id]

        resp = client.patch(f"/api/console/sellers/{walt.user_id}/verify", headers=console_headers())
        assert resp.status_code == 200
        assert resp.json()["is_verified"] is True

        assert client.get("/api/console/sellers", headers=console_headers()).json()["count"] == 0
        assert client.get("/api/auth/me", headers=walt.headers).json()["capabilities"]["can_post_properties"]

    def test_verify_buyer_endpoint_rejects_seller(self, client):
        walt = wholesaler(client)
        resp = client.patch(f"/api/console/buyers/{walt.user_id}/verify", headers=console_headers())
        assert resp.status_code == 404

    def test_deals_empty(self, client):
        deals = client.get("/api/console/deals", headers=console_headers()).json()
        assert deals == {"data": [], "count": 0}


class TestConsoleFiles:
    def test_fetch_uploaded_document(self, client):
        cassie = cash_buyer(client)
        upload_document(client, cassie, "id")

        docs = client.get("/api/console/verification-documents", headers=console_headers()).json()
        assert docs["count"] == 1
        name = Path(docs["data"][0]["file_path"]).name

        resp = client.get(f"/api/console/files/{name}", headers=console_headers())
        assert resp.status_code == 200
        assert resp.content == PDF
        assert resp.headers["content-type"] == "application/pdf"

    def test_missing_file_is_404(self, client):
        resp = client.get("/api/console/files/nothing-here.pdf", headers=console_headers())
        assert resp.status_code == 404


class TestUploadLimits:
    def test_unsupported_type_is_422(self, client):
        cassie = cash_buyer(client)
        resp = upload_document(client, cassie, "id", content_type="text/plain")
        assert resp.status_code == 422
        assert client.get("/api/verification/documents", headers=cassie.headers).json()["count"] == 0

    def test_oversize_is_413(self, client, monkeypatch):
        monkeypatch.setattr(settings, "UPLOAD_MAX_SIZE_MB", 1)
        cassie = cash_buyer(client)
        resp = client.post(
            "/api/verification/documents",
            headers=cassie.headers,
            data={"document_type": "id"},
            files={"document": ("big.pdf", b"0" * (1024 * 1024 + 1), "application/pdf")},
        )
        assert resp.status_code == 413
        assert resp.json()["title"] == "Payload Too Large"


class TestHealth:
    def test_health_ok(self, client):
        resp = client.get("/health/")
        assert resp.status_code == 200
        assert resp.json()["database"] == "ok"

    def test_root(self, client):
        assert client.get("/").status_code == 200


class TestAdminPanel:
    def test_edit_form_cannot_desync_verification(self, client, monkeypatch):
        walt = wholesaler(client)

        monkeypatch.setattr(settings, "AUTH_DISABLED", True)
        resp = client.post(
            f"/admin/user/edit/{walt.user_id}",
            data={"is_verified": "y", "verification_status": "pending"},
            follow_redirects=False,
        )
        assert resp.status_code == 403
        monkeypatch.setattr(settings, "AUTH_DISABLED", False)

        me = client.get("/api/auth/me", headers=walt.headers).json()
        assert me["is_verified"] is False
        assert me["verification_status"] == "pending"

    def test_create_form_refused(self, client, monkeypatch):
        monkeypatch.setattr(settings, "AUTH_DISABLED", True)
        resp = client.post("/admin/closed-deal/create", data={"commission_amount": "1"}, follow_redirects=False)
        assert resp.status_code == 403
