"""Tests for the AI oracle: certificates, feedback analysis and risk scoring.

The OpenAI client is replaced with a stub; nothing leaves the process.
"""
import base64
import json

import openai
import pytest

from talent_portal.services import ai_service
from tests.conftest import StubOpenAI, as_actor, create_test_cohort, create_test_user, stub_reply

IMAGE = base64.b64encode(b"\x89PNG fake certificate bytes").decode()


@pytest.fixture
def use_stub(monkeypatch):
    """Install a stub client that plays back the given replies."""
    def _install(*replies):
        stub = StubOpenAI(*replies)
        monkeypatch.setattr(ai_service, "get_client", lambda: stub)
        return stub
    return _install


def _json_reply(payload: dict):
    return stub_reply(content=json.dumps(payload))


class TestCertificateVerification:

    def test_verified_certificate_is_stored(self, client, admin, use_stub):
        candidate = create_test_user(client, admin, name="John Doe")
        stub = use_stub(_json_reply({
            "candidateName": "John Doe",
            "courseName": "AI Essentials",
            "issueDate": "2026-02-01",
            "issuer": "Intel",
            "verificationStatus": "VERIFIED",
            "confidenceScore": 93,
            "reason": "Seal and signature present",
        }))

        resp = client.post("/api/certificates/verify", params=as_actor(candidate), json={
            "image_base64": IMAGE, "mime_type": "image/png",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["verification_status"] == "VERIFIED"
        assert data["certificate_id"] is not None

        sent = stub.requests[0]
        assert sent["response_format"] == {"type": "json_object"}
        image_part = sent["messages"][0]["content"][1]
        assert image_part["image_url"]["url"].startswith("data:image/png;base64,")

        stored = client.get("/api/certificates/", params=as_actor(candidate)).json()
        assert len(stored) == 1
        assert stored[0]["course_name"] == "AI Essentials"
        assert stored[0]["confidence_score"] == 93

    def test_rejected_certificate_is_not_stored(self, client, admin, use_stub):
        candidate = create_test_user(client, admin)
        use_stub(_json_reply({
            "verificationStatus": "REJECTED",
            "confidenceScore": 88,
            "reason": "Image does not resemble a certificate",
        }))

        resp = client.post("/api/certificates/verify", params=as_actor(candidate), json={
            "image_base64": IMAGE, "mime_type": "image/jpeg",
        })
        assert resp.json()["verification_status"] == "REJECTED"
        assert resp.json()["certificate_id"] is None
        assert client.get("/api/certificates/", params=as_actor(candidate)).json() == []

    def test_no_api_key_falls_back_and_saves_nothing(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/certificates/verify", params=as_actor(candidate), json={
            "image_base64": IMAGE, "mime_type": "image/png",
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["verification_status"] == "REJECTED"
        assert data["confidence_score"] == 0
        assert data["reason"] == "AI Service Error: Could not process image."
        assert client.get("/api/certificates/", params=as_actor(candidate)).json() == []

    def test_out_of_range_reply_falls_back(self, use_stub):
        use_stub(_json_reply({"verificationStatus": "VERIFIED", "confidenceScore": 150, "reason": "??"}))
        result = ai_service.verify_certificate(IMAGE, "image/png")
        assert result.verification_status == "REJECTED"
        assert result.confidence_score == 0

    def test_non_image_upload_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/certificates/verify", params=as_actor(candidate), json={
            "image_base64": IMAGE, "mime_type": "application/pdf",
        })
        assert resp.status_code == 422

    def test_garbage_base64_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/certificates/verify", params=as_actor(candidate), json={
            "image_base64": "not base64 at all!", "mime_type": "image/png",
        })
        assert resp.status_code == 422

    def test_staff_have_no_certificate_view(self, client, admin):
        manager = create_test_user(client, admin, role="Manager")
        resp = client.post("/api/certificates/verify", params=as_actor(manager), json={
            "image_base64": IMAGE, "mime_type": "image/png",
        })
        assert resp.status_code == 403


class TestFeedbackAnalysis:

    def test_feedback_saved_with_analysis(self, client, admin, use_stub):
        candidate = create_test_user(client, admin, name="Thato")
        use_stub(_json_reply({
            "sentiment": "Negative",
            "topics": ["Pacing", "Instructor", "Material", "Venue"],
            "aiSummary": "Course moves too fast.",
            "urgency": "Medium",
        }))

        resp = client.post("/api/feedback/", params=as_actor(candidate), json={
            "category": "Course", "content": "The Python module is way too fast.",
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["sentiment"] == "Negative"
        assert data["topics"] == ["Pacing", "Instructor", "Material"]
        assert data["ai_summary"] == "Course moves too fast."
        assert data["user_name"] == "Thato"

    def test_feedback_saved_even_when_ai_fails(self, client, admin, use_stub):
        candidate = create_test_user(client, admin)
        use_stub(stub_reply(content="this is not json"))

        resp = client.post("/api/feedback/", params=as_actor(candidate), json={
            "category": "Project", "content": "Loved the capstone.",
        })
        assert resp.status_code == 201
        data = resp.json()
        assert data["sentiment"] == "Neutral"
        assert data["topics"] == ["General"]
        assert data["ai_summary"] == "Could not analyze content."
        assert data["urgency"] == "Low"

    def test_empty_feedback_is_rejected(self, client, admin):
        candidate = create_test_user(client, admin)
        resp = client.post("/api/feedback/", params=as_actor(candidate), json={"content": "  "})
        assert resp.status_code == 422

    def test_candidates_see_only_their_own(self, client, admin):
        alice = create_test_user(client, admin, name="Alice")
        bob = create_test_user(client, admin, name="Bob")
        client.post("/api/feedback/", params=as_actor(alice), json={"content": "Great week"})
        client.post("/api/feedback/", params=as_actor(bob), json={"content": "Too much homework"})

        assert len(client.get("/api/feedback/", params=as_actor(alice)).json()) == 1
        assert len(client.get("/api/feedback/", params=as_actor(admin)).json()) == 2

    def test_fallback_is_not_shared_between_calls(self):
        first = ai_service.analyze_feedback("a", "General")
        first.topics.append("Mutated")
        second = ai_service.analyze_feedback("b", "General")
        assert second.topics == ["General"]


class TestRiskAnalysis:

    def test_results_merge_by_id(self, client, admin, use_stub):
        cohort = create_test_cohort(client, admin)
        manager = create_test_user(client, admin, role="Manager")
        strong = create_test_user(client, admin, name="Strong", cohort_id=cohort["cohort_id"])
        weak = create_test_user(client, admin, name="Weak", cohort_id=cohort["cohort_id"])
        use_stub(_json_reply({"results": [
            {"id": weak["user_id"], "riskScore": 82, "riskLevel": "High", "aiAnalysis": "Attendance is low."},
            {"id": "unknown-id", "riskScore": 10, "riskLevel": "Low", "aiAnalysis": "Ignored."},
        ]}))

        resp = client.post("/api/analytics/risk", params=as_actor(manager))
        assert resp.status_code == 200
        by_id = {r["id"]: r for r in resp.json()}
        assert set(by_id) == {strong["user_id"], weak["user_id"]}
        assert by_id[weak["user_id"]]["risk_level"] == "High"
        assert by_id[weak["user_id"]]["risk_score"] == 82
        assert by_id[strong["user_id"]]["risk_level"] is None

    def test_failure_returns_unscored_metrics(self, client, admin, use_stub):
        manager = create_test_user(client, admin, role="Manager")
        create_test_user(client, admin, name="Candidate")
        use_stub(openai.OpenAIError("upstream down"))

        resp = client.post("/api/analytics/risk", params=as_actor(manager))
        assert resp.status_code == 200
        assert len(resp.json()) == 1
        assert resp.json()[0]["risk_score"] is None

    def test_no_candidates_skips_the_oracle(self, use_stub):
        stub = use_stub()
        assert ai_service.analyze_candidate_risk([]) == []
        assert stub.requests == []

    def test_candidates_have_no_risk_view(self, client, admin):
        candidate = create_test_user(client, admin)
        assert client.post("/api/analytics/risk", params=as_actor(candidate)).status_code == 403
