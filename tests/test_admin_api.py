"""Tests for the platform administration endpoints."""

from datetime import datetime, timedelta

import pytest

from hereoz_backend.auth.models import UserRole
from tests.conftest import TEST_PASSWORD, auth_headers, create_offer, create_user


@pytest.fixture
def platform_admin(db_session):
    return create_user(db_session, "ops@hereoz.com", UserRole.PLATFORM_ADMIN, first_name="Ops")


@pytest.fixture
def admin_headers(platform_admin):
    return auth_headers(platform_admin)


def _swipe_right(client, headers, offer):
    response = client.post("/matches/swipe", json={"offer_id": str(offer.id), "action": "right"}, headers=headers)
    assert response.status_code == 201
    return response


class TestAccess:

    @pytest.mark.parametrize("path", ["/admin/stats", "/admin/users", "/admin/companies", "/admin/jobs"])
    def test_staff_and_candidates_denied(self, client, candidate_headers, recruiter_headers, path):
        assert client.get(path, headers=candidate_headers).status_code == 403
        assert client.get(path, headers=recruiter_headers).status_code == 403

    def test_token_required(self, client):
        assert client.get("/admin/stats").status_code == 401


class TestGlobalStats:

    def test_counts(self, client, admin_headers, candidate, candidate_headers, offer):
        _swipe_right(client, candidate_headers, offer)

        data = client.get("/admin/stats", headers=admin_headers).json()["data"]

        assert data["users"] == {"total": 3, "candidates": 1, "recruiters": 1, "suspended": 0}
        assert data["companies"] == 1
        assert data["offers"] == {"total": 1, "active": 1, "applications": 1, "conversion_rate": 100.0}

    def test_window_excludes_older_rows(self, client, admin_headers, offer):
        tomorrow = (datetime.utcnow() + timedelta(days=1)).isoformat()

        data = client.get("/admin/stats", params={"date_from": tomorrow}, headers=admin_headers).json()["data"]

        assert data["users"]["total"] == 0
        assert data["offers"]["total"] == 0
        assert data["offers"]["conversion_rate"] == 0.0
        assert data["offers"]["active"] == 1

    def test_inverted_window(self, client, admin_headers):
        now = datetime.utcnow()
        response = client.get(
            "/admin/stats",
            params={"date_from": now.isoformat(), "date_to": (now - timedelta(days=1)).isoformat()},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation"


class TestUsers:

    def test_list_and_filter(self, client, admin_headers, candidate, other_candidate, recruiter):
        everyone = client.get("/admin/users", headers=admin_headers).json()
        assert everyone["pagination"]["total"] == 4

        candidates = client.get("/admin/users", params={"role": "candidate"}, headers=admin_headers).json()
        assert {u["email"] for u in candidates["data"]} == {candidate.email, other_candidate.email}

        found = client.get("/admin/users", params={"q": "camille"}, headers=admin_headers).json()
        assert [u["id"] for u in found["data"]] == [str(candidate.id)]

        paged = client.get("/admin/users", params={"limit": 1, "page": 2}, headers=admin_headers).json()
        assert len(paged["data"]) == 1
        assert paged["pagination"]["pages"] == 4

    def test_details_include_activity(self, client, admin_headers, candidate, candidate_headers, offer):
        _swipe_right(client, candidate_headers, offer)

        data = client.get(f"/admin/users/{candidate.id}", headers=admin_headers).json()["data"]

        assert data["user"]["email"] == candidate.email
        assert data["user"]["suspended_at"] is None
        assert data["activity"] == {"applications": 1, "offers": 0, "messages": 0, "swipes": 1}

    def test_unknown_user(self, client, admin_headers):
        response = client.get("/admin/users/7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", headers=admin_headers)
        assert response.status_code == 404


class TestModeration:

    def test_suspend_then_reactivate(self, client, admin_headers, candidate, candidate_headers):
        suspended = client.put(
            f"/admin/users/{candidate.id}/moderate",
            json={"action": "suspend", "reason": "  Spam messages  "},
            headers=admin_headers,
        )

        assert suspended.status_code == 200
        assert suspended.json()["message"] == "User suspended"
        data = suspended.json()["data"]
        assert data["is_active"] is False
        assert data["suspension_reason"] == "Spam messages"
        assert data["suspended_at"] is not None

        assert client.get("/auth/me", headers=candidate_headers).status_code == 401
        login = client.post("/auth/login", json={"email": candidate.email, "password": TEST_PASSWORD})
        assert login.status_code == 403

        inactive = client.get("/admin/users", params={"is_active": "false"}, headers=admin_headers).json()
        assert [u["id"] for u in inactive["data"]] == [str(candidate.id)]

        reactivated = client.put(
            f"/admin/users/{candidate.id}/moderate",
            json={"action": "reactivate"},
            headers=admin_headers,
        ).json()["data"]
        assert reactivated["is_active"] is True
        assert reactivated["suspension_reason"] is None
        assert client.get("/auth/me", headers=candidate_headers).status_code == 200

    @pytest.mark.parametrize("reason", [None, "   "])
    def test_suspension_needs_reason(self, client, admin_headers, candidate, reason):
        response = client.put(
            f"/admin/users/{candidate.id}/moderate",
            json={"action": "suspend", "reason": reason},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_unknown_action(self, client, admin_headers, candidate):
        response = client.put(f"/admin/users/{candidate.id}/moderate", json={"action": "delete"}, headers=admin_headers)
        assert response.status_code == 400

    def test_cannot_moderate_self(self, client, admin_headers, platform_admin):
        response = client.put(
            f"/admin/users/{platform_admin.id}/moderate",
            json={"action": "suspend", "reason": "Oops"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    def test_cannot_moderate_other_admin(self, client, db_session, admin_headers):
        peer = create_user(db_session, "peer@hereoz.com", UserRole.PLATFORM_ADMIN)

        response = client.put(
            f"/admin/users/{peer.id}/moderate",
            json={"action": "suspend", "reason": "Takeover"},
            headers=admin_headers,
        )

        assert response.status_code == 403
        db_session.refresh(peer)
        assert peer.is_active is True


class TestListings:

    def test_companies(self, client, admin_headers, company, other_recruiter):
        listed = client.get("/admin/companies", headers=admin_headers).json()
        assert [c["name"] for c in listed["data"]] == ["Acme", "Globex"]
        assert listed["pagination"]["total"] == 2

        found = client.get("/admin/companies", params={"q": "glob"}, headers=admin_headers).json()
        assert [c["name"] for c in found["data"]] == ["Globex"]

    def test_jobs_of_every_status(self, client, db_session, admin_headers, recruiter, offer):
        closed = create_offer(db_session, recruiter, title="Old role", status="closed")
        urgent = create_offer(db_session, recruiter, title="Urgent role", is_urgent=True)

        everything = client.get("/admin/jobs", headers=admin_headers).json()
        assert everything["pagination"]["total"] == 3

        only_closed = client.get("/admin/jobs", params={"status": "closed"}, headers=admin_headers).json()
        assert [o["id"] for o in only_closed["data"]] == [str(closed.id)]

        only_urgent = client.get("/admin/jobs", params={"is_urgent": "true"}, headers=admin_headers).json()
        assert [o["id"] for o in only_urgent["data"]] == [str(urgent.id)]
