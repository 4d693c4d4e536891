# This project was developed with assistance from AI tools.
"""Persona helpers for functional tests.

Personas are real accounts: registered and logged in through the API, so
every request carries a genuine bearer token. Admins cannot self-register
and are created with the seed helper on the client's event loop.
"""

from io import BytesIO

from src.seed import create_admin

CONSOLE_SECRET = "functional-console-secret"
PASSWORD = "functional-pass-123"
PDF = b"%PDF-1.4 functional test document"


class Persona:
    def __init__(self, user_id: int, username: str, token: str):
        self.user_id = user_id
        self.username = username
        self.token = token

    @property
    def headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}


def _login(client, username: str) -> str:
    resp = client.post("/api/auth/login", json={"username": username, "password": PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["access_token"]


def register(client, username: str, role: str) -> Persona:
    resp = client.post(
        "/api/auth/register",
        json={
            "username": username,
            "email": f"{username}@example.com",
            "password": PASSWORD,
            "first_name": username.title(),
            "last_name": "Tester",
            "role": role,
        },
    )
    assert resp.status_code == 201, resp.text
    return Persona(resp.json()["id"], username, _login(client, username))


def wholesaler(client, username: str = "walt") -> Persona:
    return register(client, username, "wholesaler")


def cash_buyer(client, username: str = "cassie") -> Persona:
    return register(client, username, "cash_buyer")


def admin(client, username: str = "ada") -> Persona:
    async def _seed():
        async with client.sessionmaker() as session:
            await create_admin(session, username=username, email=f"{username}@example.com", password=PASSWORD)

    client.portal.call(_seed)
    token = _login(client, username)
    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"}).json()
    return Persona(me["id"], username, token)


def console_headers(secret: str = CONSOLE_SECRET) -> dict[str, str]:
    return {"Authorization": f"Bearer {secret}"}


# ---------------------------------------------------------------------------
# Request helpers
# ---------------------------------------------------------------------------


def upload_document(client, persona: Persona, document_type: str, content_type: str = "application/pdf"):
    return client.post(
        "/api/verification/documents",
        headers=persona.headers,
        data={"document_type": document_type},
        files={"document": (f"{document_type}.pdf", BytesIO(PDF), content_type)},
    )


def verify(client, admin_persona: Persona, user: Persona) -> None:
    resp = client.patch(
        f"/api/admin/users/{user.user_id}/verification",
        headers=admin_persona.headers,
        json={"status": "verified"},
    )
    assert resp.status_code == 200, resp.text


def listing_form(**overrides) -> dict[str, str]:
    form = {
        "title": "Duplex near campus",
        "address": "42 College Ave",
        "city": "Austin",
        "state": "TX",
        "zip_code": "78705",
        "property_type": "multi_family",
        "contract_price": "180000",
        "arv": "260000",
        "repair_cost": "25000",
        "assignment_fee": "10000",
    }
    form.update({k: str(v) for k, v in overrides.items()})
    return form


def create_listing(client, persona: Persona, *, contract: bool = True, images: int = 0, **overrides):
    files = []
    if contract:
        files.append(("contract_document", ("contract.pdf", BytesIO(PDF), "application/pdf")))
    for i in range(images):
        files.append(("images", (f"photo-{i}.jpg", BytesIO(b"\xff\xd8\xff jpeg"), "image/jpeg")))
    return client.post(
        "/api/properties",
        headers=persona.headers,
        data=listing_form(**overrides),
        files=files or None,
    )


def approve(client, admin_persona: Persona, property_id: int, is_approved: bool = True):
    resp = client.patch(
        f"/api/admin/properties/{property_id}/approval",
        headers=admin_persona.headers,
        json={"is_approved": is_approved},
    )
    assert resp.status_code == 200, resp.text
    return resp.json()


def close_deal(client, persona: Persona, property_id: int, buyer_id: int, assignment_fee: int = 10_000):
    return client.post(
        "/api/closed-deals",
        headers=persona.headers,
        data={"property_id": str(property_id), "buyer_id": str(buyer_id), "assignment_fee": str(assignment_fee)},
        files={"proof_document": ("closing.pdf", BytesIO(PDF), "application/pdf")},
    )
