# This project was developed with assistance from AI tools.
"""Functional tests: buyer engagement and deal closing with commission."""

from pathlib import Path

import pytest

from src.core.config import settings

from .personas import admin, approve, cash_buyer, close_deal, create_listing, verify, wholesaler

pytestmark = pytest.mark.functional


@pytest.fixture
def market(client):
    """Verified wholesaler with one approved listing, a verified buyer and an admin."""
    walt = wholesaler(client)
    cassie = cash_buyer(client)
    ada = admin(client)
    verify(client, ada, walt)
    verify(client, ada, cassie)
    listing = create_listing(client, walt).json()
    approve(client, ada, listing["id"])
    return walt, cassie, ada, listing


class TestCloseDeal:
    def test_close_computes_commission(self, client, market):
        walt, cassie, _, listing = market

        resp = close_deal(client, walt, listing["id"], cassie.user_id, assignment_fee=10_000)
        assert resp.status_code == 201, resp.text
        deal = resp.json()
        assert deal["commission_amount"] == 700
        assert deal["commission_paid"] is False
        assert deal["seller_id"] == walt.user_id

        prop = client.get(f"/api/properties/{listing['id']}").json()
        assert prop["status"] == "closed"

    def test_second_close_conflicts(self, client, market):
        walt, cassie, _, listing = market
        assert close_deal(client, walt, listing["id"], cassie.user_id).status_code == 201

        resp = close_deal(client, walt, listing["id"], cassie.user_id)
        assert resp.status_code == 409

        deals = client.get("/api/closed-deals", headers=walt.headers).json()
        assert deals["count"] == 1

    def test_non_owner_cannot_close(self, client, market):
        _, cassie, _, listing = market
        other = wholesaler(client, "wendy")
        verify(client, admin(client, "root"), other)

        resp = close_deal(client, other, listing["id"], cassie.user_id)
        assert resp.status_code == 403
        assert client.get(f"/api/properties/{listing['id']}").json()["status"] == "available"

    def test_refused_close_stores_nothing(self, client, market):
        _, cassie, _, listing = market
        other = wholesaler(client, "wendy")
        verify(client, admin(client, "root"), other)
        uploads = Path(settings.UPLOAD_DIR)
        before = sorted(uploads.iterdir())

        assert close_deal(client, other, listing["id"], cassie.user_id).status_code == 403
        assert close_deal(client, other, 9999, cassie.user_id).status_code == 404
        assert sorted(uploads.iterdir()) == before

    def test_unverified_cannot_close(self, client, market):
        _, _, _, listing = market
        newbie = wholesaler(client, "newbie")
        resp = close_deal(client, newbie, listing["id"], 1)
        assert resp.status_code == 403

    def test_commission_paid_attestation(self, client, market):
        walt, cassie, _, listing = market
        deal = close_deal(client, walt, listing["id"], cassie.user_id, assignment_fee=8_533).json()
        assert deal["commission_amount"] == 597

        assert client.patch(
            f"/api/closed-deals/{deal['id']}/pay-commission", headers=cassie.headers
        ).status_code == 403

        paid = client.patch(f"/api/closed-deals/{deal['id']}/pay-commission", headers=walt.headers).json()
        assert paid["commission_paid"] is True
        first = client.get(f"/api/closed-deals/{deal['id']}", headers=walt.headers).json()

        client.patch(f"/api/closed-deals/{deal['id']}/pay-commission", headers=walt.headers)
        again = client.get(f"/api/closed-deals/{deal['id']}", headers=walt.headers).json()
        assert again["commission_paid_at"] == first["commission_paid_at"]

        dash = client.get("/api/dashboard", headers=walt.headers).json()
        assert dash["commission_owed"] == 0
        assert dash["closed_deals"] == 1

    def test_buyer_sees_deal(self, client, market):
        walt, cassie, _, listing = market
        deal = close_deal(client, walt, listing["id"], cassie.user_id).json()

        resp = client.get(f"/api/closed-deals/{deal['id']}", headers=cassie.headers)
        assert resp.status_code == 200
        assert resp.json()["buyer_id"] == cassie.user_id


class TestBuyerEngagement:
    def test_contact_owner(self, client, market):
        walt, cassie, _, listing = market

        resp = client.post(
            "/api/contact-requests",
            headers=cassie.headers,
            json={"property_id": listing["id"], "message": "Can I walk it Saturday?"},
        )
        assert resp.status_code == 201
        request = resp.json()
        assert request["recipient_id"] == walt.user_id

        inbox = client.get("/api/contact-requests", headers=walt.headers).json()
        assert [r["id"] for r in inbox["received"]] == [request["id"]]
        assert client.get("/api/dashboard", headers=walt.headers).json()["unread_contact_requests"] == 1

        resp = client.patch(f"/api/contact-requests/{request['id']}/read", headers=walt.headers)
        assert resp.json()["is_read"] is True

    def test_unverified_buyer_cannot_contact(self, client, market):
        _, _, _, listing = market
        newbie = cash_buyer(client, "newbie")
        resp = client.post(
            "/api/contact-requests",
            headers=newbie.headers,
            json={"property_id": listing["id"], "message": "hi"},
        )
        assert resp.status_code == 403

    def test_owner_cannot_contact_self(self, client, market):
        walt, _, _, listing = market
        resp = client.post(
            "/api/contact-requests",
            headers=walt.headers,
            json={"property_id": listing["id"], "message": "hello me"},
        )
        assert resp.status_code == 422
        assert client.get("/api/contact-requests", headers=walt.headers).json()["sent"] == []

    def test_saved_deals(self, client, market):
        _, cassie, _, listing = market

        first = client.post("/api/saved-deals", headers=cassie.headers, json={"property_id": listing["id"]})
        second = client.post("/api/saved-deals", headers=cassie.headers, json={"property_id": listing["id"]})
        assert first.status_code == second.status_code == 201

        saved = client.get("/api/saved-deals", headers=cassie.headers).json()
        assert saved["count"] == 2

        assert client.delete(f"/api/saved-deals/{first.json()['id']}", headers=cassie.headers).status_code == 204
        assert client.get("/api/saved-deals", headers=cassie.headers).json()["count"] == 1

    def test_buyer_criteria_upsert(self, client, market):
        _, cassie, _, _ = market
        body = {
            "locations": ["Austin, TX"],
            "property_types": ["single_family", "multi_family"],
            "min_price": 50_000,
            "max_price": 250_000,
            "financing_type": "cash",
            "exit_strategy": "flip",
            "closing_timeframe": "30_days",
        }

        assert client.get("/api/buyer-criteria", headers=cassie.headers).status_code == 404
        created = client.put("/api/buyer-criteria", headers=cassie.headers, json=body).json()
        body["locations"] = ["Round Rock, TX"]
        updated = client.put("/api/buyer-criteria", headers=cassie.headers, json=body).json()

        assert updated["id"] == created["id"]
        assert client.get("/api/buyer-criteria", headers=cassie.headers).json()["locations"] == ["Round Rock, TX"]

    def test_buyer_criteria_price_order(self, client, market):
        _, cassie, _, _ = market
        resp = client.put(
            "/api/buyer-criteria",
            headers=cassie.headers,
            json={"min_price": 300_000, "max_price": 100_000, "financing_type": "cash"},
        )
        assert resp.status_code == 422
