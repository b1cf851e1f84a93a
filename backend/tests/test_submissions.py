"""Tests for request submission — leave, IT tickets and profile updates."""
from tests.conftest import as_actor, commits_failing, create_test_user, submit_leave, submit_ticket


class TestLeaveSubmission:

    def test_submit_leave_creates_pending_request(self, client, admin):
        candidate = create_test_user(client, admin, name="John Doe")
        data = submit_leave(client, candidate)

        assert data["kind"] == "leave"
        assert data["status"] == "Pending"
        assert data["user_name"] == "John Doe"
        assert data["dates"] == "2026-03-02 to 2026-03-04"
        assert data["version"] == 1
        assert data["submitted_date"]

    def test_end_before_start_is_rejected_and_nothing_persisted(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/requests/leave", params=as_actor(candidate), json={
            "user_id": candidate["user_id"],
            "leave_type": "Sick Leave",
            "start_date": "2026-03-05",
            "end_date": "2026-03-01",
            "reason": "Flu",
        })
        assert resp.status_code == 422
        assert resp.json()["error"] == "ValidationError"

        history = client.get(f"/api/requests/history/{candidate['user_id']}", params=as_actor(candidate))
        assert history.json() == []

    def test_store_failure_is_unavailable_and_nothing_persisted(self, client, admin):
        candidate = create_test_user(client, admin)
        with commits_failing():
            resp = client.post("/api/requests/leave", params=as_actor(candidate), json={
                "user_id": candidate["user_id"],
                "leave_type": "Annual Leave",
                "start_date": "2026-03-02",
                "end_date": "2026-03-04",
                "reason": "Family visit",
            })
        assert resp.status_code == 503
        assert resp.json()["error"] == "PersistenceError"

        history = client.get(f"/api/requests/history/{candidate['user_id']}", params=as_actor(candidate))
        assert history.json() == []

    def test_blank_reason_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/requests/leave", params=as_actor(candidate), json={
            "user_id": candidate["user_id"],
            "leave_type": "Annual Leave",
            "start_date": "2026-03-02",
            "end_date": "2026-03-02",
            "reason": "   ",
        })
        assert resp.status_code == 422
        assert "Reason" in resp.json()["detail"]

    def test_cannot_submit_for_someone_else(self, client, admin):
        alice = create_test_user(client, admin, name="Alice")
        bob = create_test_user(client, admin, name="Bob")
        resp = client.post("/api/requests/leave", params=as_actor(alice), json={
            "user_id": bob["user_id"],
            "leave_type": "Annual Leave",
            "start_date": "2026-03-02",
            "end_date": "2026-03-03",
            "reason": "Trip",
        })
        assert resp.status_code == 403

    def test_unknown_actor_is_not_found(self, client, admin):
        resp = client.post("/api/requests/leave", params={"actor_user_id": "nobody"}, json={
            "user_id": "nobody",
            "leave_type": "Annual Leave",
            "start_date": "2026-03-02",
            "end_date": "2026-03-03",
            "reason": "Trip",
        })
        assert resp.status_code == 404
        assert resp.json()["error"] == "NotFoundError"

    def test_forms_view_is_candidate_only(self, client, admin):
        manager = create_test_user(client, admin, name="Mandla", role="Manager")
        resp = client.post("/api/requests/leave", params=as_actor(manager), json={
            "user_id": manager["user_id"],
            "leave_type": "Annual Leave",
            "start_date": "2026-03-02",
            "end_date": "2026-03-03",
            "reason": "Trip",
        })
        assert resp.status_code == 403
        assert resp.json()["error"] == "PermissionDeniedError"


class TestITTicketSubmission:

    def test_submit_ticket_opens_it(self, client, admin):
        candidate = create_test_user(client, admin)
        data = submit_ticket(client, candidate)

        assert data["kind"] == "it_ticket"
        assert data["status"] == "Open"
        assert data["priority"] == "High"
        assert data["category"] == "Hardware"

    def test_priority_defaults_to_low(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/requests/it-tickets", params=as_actor(candidate), json={
            "user_id": candidate["user_id"],
            "category": "Software",
            "description": "VPN drops every hour",
        })
        assert resp.status_code == 201
        assert resp.json()["priority"] == "Low"

    def test_unknown_priority_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/requests/it-tickets", params=as_actor(candidate), json={
            "user_id": candidate["user_id"],
            "category": "Software",
            "priority": "Whenever",
            "description": "VPN drops every hour",
        })
        assert resp.status_code == 422
        assert "Whenever" in resp.json()["detail"]

    def test_blank_description_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/requests/it-tickets", params=as_actor(candidate), json={
            "user_id": candidate["user_id"],
            "category": "Software",
            "description": "",
        })
        assert resp.status_code == 422


class TestProfileUpdateSubmission:

    def _propose(self, client, user, updates):
        return client.post("/api/requests/profile-updates", params=as_actor(user), json={
            "user_id": user["user_id"],
            "updates": updates,
        })

    def test_submit_profile_update(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = self._propose(client, candidate, {"phone": "+27 71 555 0000", "bio": "  Data nerd "})
        assert resp.status_code == 201
        data = resp.json()
        assert data["kind"] == "profile_update"
        assert data["status"] == "Pending"
        assert data["updates"] == {"phone": "+27 71 555 0000", "bio": "Data nerd"}

    def test_blank_fields_are_dropped(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = self._propose(client, candidate, {"phone": "+27 71 555 0000", "location": "", "bio": None})
        assert resp.status_code == 201
        assert resp.json()["updates"] == {"phone": "+27 71 555 0000"}

    def test_only_blank_fields_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = self._propose(client, candidate, {"location": "  "})
        assert resp.status_code == 422

    def test_role_and_email_cannot_be_proposed(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = self._propose(client, candidate, {"role": "Admin/HR", "email": "me@evil.test"})
        assert resp.status_code == 422
        assert "email" in resp.json()["detail"]
        assert "role" in resp.json()["detail"]

    def test_only_one_pending_update_per_user(self, client, admin):
        candidate = create_test_user(client, admin)
        assert self._propose(client, candidate, {"location": "Cape Town"}).status_code == 201

        check = client.get(
            f"/api/requests/profile-updates/pending-check/{candidate['user_id']}", params=as_actor(candidate)
        )
        assert check.json() == {"user_id": candidate["user_id"], "has_pending": True}

        second = self._propose(client, candidate, {"location": "Durban"})
        assert second.status_code == 422
        assert "pending profile update already exists" in second.json()["detail"]

    def test_pending_check_is_false_without_requests(self, client, admin):
        candidate = create_test_user(client, admin)
        check = client.get(
            f"/api/requests/profile-updates/pending-check/{candidate['user_id']}", params=as_actor(candidate)
        )
        assert check.json()["has_pending"] is False
