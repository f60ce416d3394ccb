"""
Tests for the public contact, newsletter, NDA and lease application forms.
"""

import pytest

from brokerage.db.models import ContactMessage, LeaseApplication, NdaSubmission

# Database setup and the client fixture live in conftest.py


@pytest.fixture
def nda_payload():
    return {
        "listing_slug": "1200-commerce-pkwy",
        "listing_title": "1200 Commerce Pkwy",
        "first_name": " Pat ",
        "last_name": "Lee",
        "email": "Pat.Lee@Example.com",
        "signature_name": "Pat Lee",
        "acknowledged": True,
    }


@pytest.fixture
def application_payload():
    return {
        "listing_slug": "suite-200",
        "listing_title": "Suite 200",
        "first_name": "Sam",
        "last_name": "Reed",
        "email": "sam@example.com",
        "ssn": "123-45-6789",
        "signature_name": "Sam Reed",
        "credit_check_acknowledged": True,
        "financials_paths": ["/uploads/a.pdf", " "],
    }


class TestContact:
    """Test contact form."""

    def test_contact_saved_unread(self, client, db_session):
        response = client.post(
            "/api/contact",
            json={"name": "Kim", "email": "Kim@Example.com", "message": "Tour request"},
        )
        assert response.status_code == 200
        assert response.json()["success"] is True

        message = db_session.query(ContactMessage).one()
        assert message.read is False
        assert message.email == "kim@example.com"

    @pytest.mark.parametrize("missing", ["name", "email", "message"])
    def test_contact_required_fields(self, client, missing):
        payload = {"name": "Kim", "email": "kim@example.com", "message": "Hi"}
        payload[missing] = "  "
        response = client.post("/api/contact", json=payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Name, email, and message are required"


class TestNewsletter:
    def test_signup(self, client):
        response = client.post("/api/newsletter", json={"email": "reader@example.com"})
        assert response.json() == {"success": True}

    def test_invalid_email(self, client):
        response = client.post("/api/newsletter", json={"email": "not-an-email"})
        assert response.status_code == 422


class TestNdaSubmission:
    """Test NDA form."""

    def test_submit(self, client, db_session, nda_payload):
        response = client.post("/api/nda-submission", json=nda_payload)
        assert response.status_code == 200

        nda = db_session.query(NdaSubmission).one()
        assert nda.id == response.json()["id"]
        assert nda.first_name == "Pat"
        assert nda.email == "pat.lee@example.com"
        assert nda.status == "pending"
        assert nda.approval_token is None

    def test_missing_fields(self, client, nda_payload):
        nda_payload["signature_name"] = ""
        response = client.post("/api/nda-submission", json=nda_payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing required fields"

    def test_must_acknowledge(self, client, nda_payload):
        nda_payload["acknowledged"] = False
        response = client.post("/api/nda-submission", json=nda_payload)
        assert response.status_code == 400
        assert "confidentiality" in response.json()["detail"]


class TestLeaseApplication:
    """Test lease application form."""

    def test_submit(self, client, db_session, application_payload):
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 200
        data = response.json()
        assert data["payment_required"] is True

        application = db_session.query(LeaseApplication).one()
        assert application.id == data["application_id"]
        assert application.ssn == "123456789"
        assert application.financials_paths == ["/uploads/a.pdf"]
        assert application.application_fee_cents == 5000
        assert application.payment_status == "pending"
        assert application.co_applicant is None

    def test_requires_credit_check(self, client, application_payload):
        application_payload["credit_check_acknowledged"] = False
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 400

    def test_requires_listing(self, client, application_payload):
        application_payload["listing_slug"] = ""
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid listing."

    def test_co_applicant_signature_required(self, client, application_payload):
        application_payload["co_applicant"] = {"first_name": "Alex", "last_name": "Reed"}
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 400

    def test_co_applicant_saved(self, client, db_session, application_payload):
        application_payload["co_applicant"] = {
            "first_name": "Alex",
            "last_name": "Reed",
            "ssn": "987 65 4321",
            "signature_name": "Alex Reed",
        }
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 200

        application = db_session.query(LeaseApplication).one()
        assert application.co_applicant["ssn"] == "987654321"
        assert application.co_applicant["signature_name"] == "Alex Reed"

    def test_blank_co_applicant_ignored(self, client, db_session, application_payload):
        application_payload["co_applicant"] = {"first_name": "", "last_name": ""}
        response = client.post("/api/lease-application", json=application_payload)
        assert response.status_code == 200
        assert db_session.query(LeaseApplication).one().co_applicant is None
