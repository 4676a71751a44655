"""Tests for availability slots and dashboard statistics."""

from datetime import datetime, timedelta

import pytest

from hereoz_backend.models.application import Application
from hereoz_backend.models.interview import Interview
from tests.conftest import auth_headers, create_offer


class TestAvailability:

    def test_create_list_delete(self, client, candidate, candidate_headers, recruiter_headers):
        created = client.post(
            "/availability",
            json={"weekday": 2, "start_time": "09:00", "end_time": "12:30"},
            headers=candidate_headers,
        )
        assert created.status_code == 201
        slot = created.json()["data"]
        assert slot["recurrence"] == "weekly"
        assert slot["timezone"] == "Europe/Paris"

        listed = client.get(f"/availability/{candidate.id}", headers=recruiter_headers).json()["data"]
        assert [s["id"] for s in listed] == [slot["id"]]

        denied = client.delete(f"/availability/{slot['id']}", headers=recruiter_headers)
        assert denied.status_code == 403

        deleted = client.delete(f"/availability/{slot['id']}", headers=candidate_headers)
        assert deleted.status_code == 200
        assert client.get(f"/availability/{candidate.id}", headers=candidate_headers).json()["data"] == []

    @pytest.mark.parametrize("payload", [
        {"weekday": 7, "start_time": "09:00", "end_time": "10:00"},
        {"weekday": 1, "start_time": "9:00", "end_time": "10:00"},
        {"weekday": 1, "start_time": "14:00", "end_time": "13:00"},
        {"weekday": 1, "start_time": "24:00", "end_time": "24:30"},
        {"weekday": 1, "start_time": "09:00", "end_time": "10:00", "recurrence": "once"},
    ])
    def test_invalid_slots(self, client, candidate_headers, payload):
        response = client.post("/availability", json=payload, headers=candidate_headers)
        assert response.status_code == 400

    def test_one_off_slot(self, client, candidate_headers):
        response = client.post(
            "/availability",
            json={
                "weekday": 5,
                "start_time": "15:00",
                "end_time": "16:00",
                "recurrence": "once",
                "specific_date": "2026-11-20",
            },
            headers=candidate_headers,
        )
        assert response.status_code == 201
        assert response.json()["data"]["specific_date"] == "2026-11-20"

    def test_unknown_slot(self, client, candidate_headers):
        response = client.delete("/availability/7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", headers=candidate_headers)
        assert response.status_code == 404


class TestStats:

    def test_candidate_stats_zero_filled(self, client, candidate_headers):
        data = client.get("/stats/candidate", headers=candidate_headers).json()["data"]

        assert data["applications_by_status"] == {
            "new": 0, "viewed": 0, "contacted": 0, "interview": 0,
            "offer": 0, "accepted": 0, "hired": 0, "rejected": 0,
        }
        assert data["swipes_by_action"] == {"right": 0, "left": 0, "favorite": 0}
        assert data["upcoming_interviews"] == 0

    def test_candidate_stats_after_activity(self, client, db_session, candidate_headers, recruiter, offer):
        second = create_offer(db_session, recruiter, title="Second")
        client.post("/matches/swipe", json={"offer_id": str(offer.id), "action": "right"}, headers=candidate_headers)
        client.post("/matches/swipe", json={"offer_id": str(second.id), "action": "left"}, headers=candidate_headers)

        application = db_session.query(Application).one()
        db_session.add(Interview(
            application_id=application.id,
            scheduled_at=datetime.utcnow() + timedelta(days=1),
            mode="video",
            status="planned",
        ))
        db_session.add(Interview(
            application_id=application.id,
            scheduled_at=datetime.utcnow() - timedelta(days=1),
            mode="video",
            status="planned",
        ))
        db_session.commit()

        data = client.get("/stats/candidate", headers=candidate_headers).json()["data"]
        assert data["applications_by_status"]["new"] == 1
        assert data["swipes_by_action"] == {"right": 1, "left": 1, "favorite": 0}
        assert data["upcoming_interviews"] == 1

    def test_recruiter_and_offer_stats(self, client, candidate_headers, recruiter_headers, offer):
        client.get(f"/jobs/{offer.id}", headers=candidate_headers)
        client.post("/matches/swipe", json={"offer_id": str(offer.id), "action": "right"}, headers=candidate_headers)

        recruiter_data = client.get("/stats/recruiter", headers=recruiter_headers).json()["data"]
        assert recruiter_data["offers_by_status"] == {"active": 1, "closed": 0, "filled": 0}
        assert recruiter_data["applications_by_status"]["new"] == 1
        assert recruiter_data["total_views"] == 1

        offer_data = client.get(f"/stats/offers/{offer.id}", headers=recruiter_headers).json()["data"]
        assert offer_data["views"] == 1
        assert offer_data["favorites"] == 0
        assert offer_data["applications_by_status"]["new"] == 1

    def test_company_admin_sees_company_offers(self, client, db_session, company_admin, offer):
        data = client.get("/stats/recruiter", headers=auth_headers(company_admin)).json()["data"]
        assert data["offers_by_status"]["active"] == 1

    def test_role_guards(self, client, candidate_headers, recruiter_headers, other_recruiter, offer):
        assert client.get("/stats/recruiter", headers=candidate_headers).status_code == 403
        assert client.get("/stats/candidate", headers=recruiter_headers).status_code == 403
        assert client.get(f"/stats/offers/{offer.id}", headers=auth_headers(other_recruiter)).status_code == 403
