"""End-to-end tests for the swipe feed, swipes and the application pipeline."""

from hereoz_backend.models.application import Application
from hereoz_backend.models.swipe_event import SwipeEvent
from tests.conftest import auth_headers, create_offer


class TestSwipeFlow:

    def test_right_swipe_then_left_swipe_conflicts(self, client, db_session, candidate_headers, offer):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "right"},
            headers=candidate_headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Application submitted"
        assert body["data"]["swipe"]["action"] == "right"
        application = body["data"]["application"]
        assert application["status"] == "new"
        assert application["progress_step"] == 0
        assert application["offer_id"] == str(offer.id)

        again = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "left"},
            headers=candidate_headers,
        )

        assert again.status_code == 409
        assert again.json()["data"] is None
        assert again.json()["error"] == "conflict"
        assert db_session.query(SwipeEvent).count() == 1
        assert db_session.query(Application).count() == 1

    def test_left_swipe_has_no_application(self, client, candidate_headers, offer):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "left", "rejection_reason": "Too far"},
            headers=candidate_headers,
        )

        assert response.status_code == 201
        assert response.json()["message"] == "Swipe recorded"
        assert response.json()["data"]["application"] is None
        assert response.json()["data"]["swipe"]["rejection_reason"] == "Too far"

    def test_recruiter_rejects_with_reason(self, client, db_session, candidate_headers, recruiter_headers, offer):
        created = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "right"},
            headers=candidate_headers,
        )
        application_id = created.json()["data"]["application"]["id"]

        response = client.put(
            f"/applications/{application_id}/status",
            json={"status": "rejected", "rejection_reason": "Salary mismatch"},
            headers=recruiter_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "rejected"
        assert data["rejection_reason"] == "Salary mismatch"
        assert data["progress_step"] == -1

        seen_by_candidate = client.get(f"/applications/{application_id}", headers=candidate_headers).json()["data"]
        assert seen_by_candidate["rejection_reason"] == "Salary mismatch"
        assert seen_by_candidate["progress_step"] == -1

        history = client.get(f"/applications/{application_id}/history", headers=candidate_headers).json()["data"]
        assert [(h["old_status"], h["new_status"]) for h in history] == [("new", "rejected")]
        assert history[0]["reason"] == "Salary mismatch"

        reopen = client.put(
            f"/applications/{application_id}/status",
            json={"status": "interview"},
            headers=recruiter_headers,
        )
        assert reopen.status_code == 400
        assert reopen.json()["details"] == {"current_status": "rejected", "target_status": "interview"}

    def test_rejection_reason_requires_rejected_status(self, client, candidate_headers, recruiter_headers, offer):
        created = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "right"},
            headers=candidate_headers,
        )
        application_id = created.json()["data"]["application"]["id"]

        response = client.put(
            f"/applications/{application_id}/status",
            json={"status": "viewed", "rejection_reason": "Nope"},
            headers=recruiter_headers,
        )
        assert response.status_code == 400

    def test_invalid_action(self, client, candidate_headers, offer):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "up"},
            headers=candidate_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation"

    def test_out_of_range_score(self, client, db_session, candidate_headers, offer):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "right", "matching_score": 150},
            headers=candidate_headers,
        )

        assert response.status_code == 400
        assert db_session.query(SwipeEvent).count() == 0

    def test_recruiter_cannot_swipe(self, client, recruiter_headers, offer):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": str(offer.id), "action": "right"},
            headers=recruiter_headers,
        )
        assert response.status_code == 403

    def test_unknown_offer(self, client, candidate_headers):
        response = client.post(
            "/matches/swipe",
            json={"offer_id": "7b0c3c1e-7d4c-4a57-9c6e-4cb1b2d1e0aa", "action": "right"},
            headers=candidate_headers,
        )
        assert response.status_code == 404


class TestFeedAndHistory:

    def test_feed_hides_swiped_offers(self, client, db_session, candidate_headers, recruiter, offer):
        other = create_offer(db_session, recruiter, title="Data Engineer")

        feed = client.get("/matches/offers", headers=candidate_headers).json()
        assert feed["pagination"]["total"] == 2
        assert all(0 <= item["matching_score"] <= 100 for item in feed["data"])

        client.post("/matches/swipe", json={"offer_id": str(other.id), "action": "left"}, headers=candidate_headers)

        feed = client.get("/matches/offers", headers=candidate_headers).json()
        assert [item["id"] for item in feed["data"]] == [str(offer.id)]
        assert feed["data"][0]["matching_score"] == 87

    def test_history(self, client, candidate_headers, offer):
        client.post("/matches/swipe", json={"offer_id": str(offer.id), "action": "favorite"}, headers=candidate_headers)

        response = client.get("/matches/history", params={"action": "favorite"}, headers=candidate_headers)

        assert response.status_code == 200
        assert response.json()["pagination"] == {"total": 1, "page": 1, "limit": 10, "pages": 1}
        assert response.json()["data"][0]["offer_id"] == str(offer.id)

    def test_suggested_candidates_for_owner_only(self, client, candidate, other_recruiter, recruiter_headers, offer):
        response = client.get(f"/matches/candidates/{offer.id}", params={"min_score": 50}, headers=recruiter_headers)

        assert response.status_code == 200
        assert [(c["id"], c["matching_score"]) for c in response.json()["data"]] == [(str(candidate.id), 87)]

        denied = client.get(f"/matches/candidates/{offer.id}", headers=auth_headers(other_recruiter))
        assert denied.status_code == 403


class TestApplicationEndpoints:

    def _apply(self, client, headers, offer):
        response = client.post("/applications", json={"offer_id": str(offer.id)}, headers=headers)
        assert response.status_code == 201
        return response.json()["data"]["id"]

    def test_my_applications_and_withdraw(self, client, candidate_headers, offer):
        application_id = self._apply(client, candidate_headers, offer)

        mine = client.get("/applications/me", headers=candidate_headers).json()
        assert [a["id"] for a in mine["data"]] == [application_id]

        withdrawn = client.post(
            f"/applications/{application_id}/withdraw",
            json={"reason": "Accepted another offer"},
            headers=candidate_headers,
        )
        assert withdrawn.status_code == 200
        assert withdrawn.json()["data"]["status"] == "rejected"
        assert withdrawn.json()["data"]["withdrawn_at"] is not None

        again = client.post(f"/applications/{application_id}/withdraw", headers=candidate_headers)
        assert again.status_code == 400

    def test_duplicate_direct_apply(self, client, candidate_headers, offer):
        self._apply(client, candidate_headers, offer)
        response = client.post("/applications", json={"offer_id": str(offer.id)}, headers=candidate_headers)
        assert response.status_code == 409

    def test_offer_applications_and_viewed(self, client, candidate_headers, recruiter_headers, offer):
        application_id = self._apply(client, candidate_headers, offer)

        listing = client.get(f"/applications/offer/{offer.id}", headers=recruiter_headers).json()
        assert listing["pagination"]["total"] == 1

        viewed = client.post(f"/applications/{application_id}/viewed", headers=recruiter_headers)
        assert viewed.json()["data"]["status"] == "viewed"
        assert viewed.json()["data"]["progress_step"] == 1

        filtered = client.get(
            f"/applications/offer/{offer.id}", params={"status": "new"}, headers=recruiter_headers
        ).json()
        assert filtered["data"] == []

    def test_other_candidate_cannot_read(self, client, candidate_headers, other_candidate, offer):
        application_id = self._apply(client, candidate_headers, offer)

        response = client.get(f"/applications/{application_id}", headers=auth_headers(other_candidate))
        assert response.status_code == 403

    def test_open_conversation_from_application(self, client, candidate_headers, recruiter, offer):
        application_id = self._apply(client, candidate_headers, offer)

        response = client.post(f"/applications/{application_id}/conversation", headers=candidate_headers)

        assert response.status_code == 200
        conversation_id = response.json()["data"]["conversation_id"]
        assert conversation_id is not None

        again = client.post(f"/applications/{application_id}/conversation", headers=candidate_headers)
        assert again.json()["data"]["conversation_id"] == conversation_id
