"""
Test API endpoints.
"""

import pytest
from fastapi.testclient import TestClient

from careflow.core.config import Settings
from careflow.core.database import Store
from careflow.main import create_app

PROVIDER_SIGNUP = {
    "name": "Dr. Grace Okafor",
    "age": 42,
    "date_of_birth": "1982-04-12",
    "gender": "Female",
    "license": "MD-7781",
    "specialization": "Family Medicine",
}

RECIPIENT_SIGNUP = {
    "name": "Alex Rivera",
    "age": 31,
    "date_of_birth": "1993-09-03",
    "gender": "Other",
    "phone": "+1-555-0220",
}


def _auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


def _login(client: TestClient, role: str, actor_id: str, credential: str):
    return client.post(
        "/api/v1/auth/login",
        json={"role": role, "id": actor_id, "credential": credential},
    )


@pytest.fixture
def provider_token(client: TestClient) -> str:
    signup = client.post("/api/v1/auth/providers", json=PROVIDER_SIGNUP).json()
    response = _login(client, "provider", signup["actor"]["id"], signup["credential"])
    return response.json()["token"]


@pytest.fixture
def recipient_token(client: TestClient, provider_token: str) -> str:
    signup = client.post("/api/v1/auth/recipients", json=RECIPIENT_SIGNUP).json()
    recipient_id = signup["actor"]["id"]
    client.post(
        f"/api/v1/recipients/{recipient_id}/approve", headers=_auth(provider_token)
    )
    response = _login(client, "recipient", recipient_id, signup["credential"])
    return response.json()["token"]


def test_root_endpoint(client: TestClient):
    """Test root endpoint."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "message" in data
    assert "version" in data
    assert data["status"] == "running"


def test_health_check(client: TestClient):
    """Test health check endpoint."""
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data
    assert "timestamp" in data


def test_registration(client: TestClient):
    response = client.post("/api/v1/auth/providers", json=PROVIDER_SIGNUP)
    assert response.status_code == 201
    data = response.json()
    assert data["actor"]["id"] == "DOC001"
    assert data["actor"]["phone"] == "Not provided"
    assert data["credential"] == "password123"

    response = client.post("/api/v1/auth/recipients", json=RECIPIENT_SIGNUP)
    assert response.status_code == 201
    assert response.json()["actor"]["onboarding_status"] == "pending"


def test_registration_validation(client: TestClient):
    response = client.post(
        "/api/v1/auth/recipients", json={**RECIPIENT_SIGNUP, "age": 0}
    )
    assert response.status_code == 422
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "validation_failed"
    assert data["status_code"] == 422
    assert "age" in data["detail"]


def test_malformed_transition_body(client: TestClient, recipient_token: str):
    report = client.post("/api/v1/reports", json={}, headers=_auth(recipient_token)).json()

    response = client.post(
        f"/api/v1/reports/{report['id']}/submit",
        json={"expected_status": "archived"},
        headers=_auth(recipient_token),
    )
    assert response.status_code == 422
    assert response.json()["error"] == "validation_failed"
    assert "expected_status" in response.json()["detail"]


def test_pending_recipient_cannot_log_in(client: TestClient):
    signup = client.post("/api/v1/auth/recipients", json=RECIPIENT_SIGNUP).json()
    response = _login(client, "recipient", signup["actor"]["id"], signup["credential"])

    assert response.status_code == 403
    assert response.json() == {
        "success": False,
        "error": "approval_pending",
        "detail": response.json()["detail"],
        "status_code": 403,
    }


def test_wrong_credential(client: TestClient, provider_token: str):
    response = _login(client, "provider", "DOC001", "letmein")
    assert response.status_code == 401
    assert response.json()["error"] == "invalid_credential"


def test_requires_token(client: TestClient):
    response = client.get("/api/v1/auth/me")
    assert response.status_code == 401
    assert response.json()["error"] == "not_authenticated"

    response = client.get("/api/v1/reports", headers=_auth("bogus"))
    assert response.status_code == 401


def test_me_and_logout(client: TestClient, provider_token: str):
    response = client.get("/api/v1/auth/me", headers=_auth(provider_token))
    assert response.status_code == 200
    assert response.json()["actor_id"] == "DOC001"
    assert response.json()["role"] == "provider"

    response = client.post("/api/v1/auth/logout", headers=_auth(provider_token))
    assert response.json() == {"success": True}
    response = client.get("/api/v1/auth/me", headers=_auth(provider_token))
    assert response.status_code == 401


def test_onboarding_endpoints(client: TestClient, provider_token: str):
    signup = client.post("/api/v1/auth/recipients", json=RECIPIENT_SIGNUP).json()
    recipient_id = signup["actor"]["id"]

    response = client.get(
        "/api/v1/recipients", params={"status": "pending"}, headers=_auth(provider_token)
    )
    assert [r["id"] for r in response.json()] == [recipient_id]

    response = client.post(
        f"/api/v1/recipients/{recipient_id}/reject", headers=_auth(provider_token)
    )
    assert response.status_code == 200
    assert response.json()["onboarding_status"] == "rejected"
    assert response.json()["decided_by"] == "DOC001"

    response = client.post(
        f"/api/v1/recipients/{recipient_id}/approve", headers=_auth(provider_token)
    )
    assert response.status_code == 409
    assert response.json()["error"] == "invalid_state_transition"

    response = _login(client, "recipient", recipient_id, signup["credential"])
    assert response.json()["error"] == "approval_rejected"


def test_recipient_cannot_list_applicants(client: TestClient, recipient_token: str):
    response = client.get("/api/v1/recipients", headers=_auth(recipient_token))
    assert response.status_code == 403
    assert response.json()["error"] == "forbidden"


def test_report_flow(client: TestClient, provider_token: str, recipient_token: str):
    response = client.post(
        "/api/v1/reports", json={"symptoms": ["  "]}, headers=_auth(recipient_token)
    )
    assert response.status_code == 201
    report = response.json()
    assert report["status"] == "draft"
    assert report["symptoms"] == []
    report_id = report["id"]

    response = client.post(
        f"/api/v1/reports/{report_id}/items/symptoms",
        json={"value": "fever", "expected_status": "draft"},
        headers=_auth(recipient_token),
    )
    assert response.json()["symptoms"] == ["fever"]

    response = client.post(
        f"/api/v1/reports/{report_id}/items/diagnosis",
        json={"value": "flu", "expected_status": "draft"},
        headers=_auth(recipient_token),
    )
    assert response.status_code == 403

    response = client.post(
        f"/api/v1/reports/{report_id}/submit",
        json={"expected_status": "draft"},
        headers=_auth(recipient_token),
    )
    assert response.json()["status"] == "submitted"

    response = client.get("/api/v1/reports/pending", headers=_auth(provider_token))
    assert [r["id"] for r in response.json()["reports"]] == [report_id]

    response = client.post(
        f"/api/v1/reports/{report_id}/items/diagnosis",
        json={"value": "viral infection", "expected_status": "submitted"},
        headers=_auth(provider_token),
    )
    assert response.json()["diagnosis"] == ["viral infection"]

    response = client.post(
        f"/api/v1/reports/{report_id}/confirm",
        json={"expected_status": "submitted"},
        headers=_auth(provider_token),
    )
    data = response.json()
    assert data["status"] == "confirmed"
    assert data["editable"] is False
    assert data["doctor_id"] == "DOC001"

    response = client.post(
        f"/api/v1/reports/{report_id}/reject",
        json={"expected_status": "submitted"},
        headers=_auth(provider_token),
    )
    assert response.status_code == 409

    response = client.get(
        f"/api/v1/reports/{report_id}/snapshot", headers=_auth(recipient_token)
    )
    assert response.json()["finalized"] is True

    response = client.put(
        f"/api/v1/reports/{report_id}",
        json={"expected_status": "confirmed", "symptoms": ["fever"]},
        headers=_auth(recipient_token),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "invalid_state_transition"


def test_remove_item_endpoint(client: TestClient, recipient_token: str):
    report = client.post(
        "/api/v1/reports",
        json={"symptoms": ["fever", "cough"]},
        headers=_auth(recipient_token),
    ).json()
    url = f"/api/v1/reports/{report['id']}/items/symptoms/0"

    response = client.delete(
        url, params={"expected_status": "draft"}, headers=_auth(recipient_token)
    )
    assert response.json()["symptoms"] == ["cough"]

    response = client.delete(
        f"/api/v1/reports/{report['id']}/items/symptoms/5",
        params={"expected_status": "draft"},
        headers=_auth(recipient_token),
    )
    assert response.status_code == 409
    assert response.json()["error"] == "index_out_of_range"


def test_update_and_search(client: TestClient, provider_token: str, recipient_token: str):
    report = client.post(
        "/api/v1/reports",
        json={"symptoms": ["fever"], "submit": True},
        headers=_auth(recipient_token),
    ).json()

    response = client.put(
        f"/api/v1/reports/{report['id']}",
        json={"expected_status": "draft", "additional_notes": "late"},
        headers=_auth(recipient_token),
    )
    assert response.status_code == 409

    response = client.put(
        f"/api/v1/reports/{report['id']}",
        json={"expected_status": "submitted", "treatment_plan": ["Rest", ""]},
        headers=_auth(recipient_token),
    )
    assert response.json()["treatment_plan"] == ["Rest"]

    response = client.get(
        "/api/v1/reports",
        params={"search": "rivera", "status": "submitted"},
        headers=_auth(provider_token),
    )
    assert response.json()["count"] == 1

    response = client.get(
        "/api/v1/reports", params={"status": "confirmed"}, headers=_auth(provider_token)
    )
    assert response.json() == {"count": 0, "reports": []}


def test_unknown_report(client: TestClient, provider_token: str):
    response = client.get("/api/v1/reports/RPT-NOPE0000", headers=_auth(provider_token))
    assert response.status_code == 404
    assert response.json()["error"] == "report_not_found"


def test_dashboards(client: TestClient, provider_token: str, recipient_token: str):
    client.post("/api/v1/reports", json={"submit": True}, headers=_auth(recipient_token))
    client.post("/api/v1/auth/recipients", json=RECIPIENT_SIGNUP)

    response = client.get("/api/v1/dashboard/summary", headers=_auth(provider_token))
    assert response.json() == {
        "pending_recipients": 1,
        "approved_recipients": 1,
        "rejected_recipients": 0,
        "total_recipients": 2,
        "pending_reports": 1,
    }

    response = client.get("/api/v1/dashboard/summary", headers=_auth(recipient_token))
    data = response.json()
    assert data["onboarding_status"] == "approved"
    assert data["total_reports"] == 1
    assert data["by_status"]["submitted"] == 1


def test_demo_accounts_are_seeded():
    settings = Settings(
        _env_file=None,
        DATABASE_URL="sqlite://",
        seed_demo_data=True,
        credential_hash_rounds=4,
    )
    app = create_app(settings, Store(settings.DATABASE_URL))

    with TestClient(app) as client:
        for role, actor_id, credential in (
            ("provider", "DOC001", "password123"),
            ("provider", "DOC002", "password123"),
            ("recipient", "PAT001", "patient123"),
            ("recipient", "PAT002", "patient123"),
        ):
            response = _login(client, role, actor_id, credential)
            assert response.status_code == 200, actor_id
