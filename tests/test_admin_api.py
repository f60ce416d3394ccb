"""
Tests for the back-office endpoints.
"""

import pytest

from brokerage.db.models import (
    Agent,
    ContactMessage,
    FeatureOption,
    LeaseApplication,
    Listing,
    NdaSubmission,
)

# Database setup and the client/admin_headers fixtures live in conftest.py


@pytest.fixture
def second_agent(db_session):
    agent = Agent(slug="casey-morgan", name="Casey Morgan", email="cm@example.com", order=1)
    db_session.add(agent)
    db_session.commit()
    db_session.refresh(agent)
    return agent


@pytest.fixture
def nda(db_session, investment_listing):
    submission = NdaSubmission(
        listing_slug=investment_listing.slug,
        listing_title=investment_listing.title,
        first_name="Pat",
        last_name="Lee",
        email="pat@example.com",
        signature_name="Pat Lee",
    )
    db_session.add(submission)
    db_session.commit()
    db_session.refresh(submission)
    return submission


@pytest.fixture
def lease_application(db_session):
    application = LeaseApplication(
        listing_slug="suite-200",
        listing_title="Suite 200",
        first_name="Sam",
        last_name="Reed",
        email="sam@example.com",
        ssn="123456789",
        signature_name="Sam Reed",
        credit_check_acknowledged=True,
        co_applicant={"first_name": "Alex", "last_name": "Reed", "ssn": "987654321"},
        application_fee_cents=5000,
    )
    db_session.add(application)
    db_session.commit()
    db_session.refresh(application)
    return application


class TestAdminListings:
    """Test listing management."""

    def test_create_listing_is_draft(self, client, admin_headers, agent):
        response = client.post(
            "/api/admin/listings",
            headers=admin_headers,
            json={
                "title": "225 Worth Ave.",
                "price": "1,500,000",
                "noi": "120000",
                "cap_rate": "0.08",
                "square_feet": "8,200",
                "features": '["Drive-Thru"]',
                "broker_ids": [agent.id, "unknown-agent-id-000"],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "225-worth-ave"
        assert data["published"] is False
        assert data["featured"] is False
        assert data["price"] == 1500000
        assert data["square_feet"] == 8200
        assert data["features"] == ["Drive-Thru"]
        assert [b["id"] for b in data["brokers"]] == [agent.id]

    def test_create_parses_formatted_numbers(self, client, admin_headers):
        response = client.post(
            "/api/admin/listings",
            headers=admin_headers,
            json={
                "title": "Suite 200",
                "price": "$1,250,000.99",
                "lease_price_per_sf": "18.755",
                "lease_nnn_charges": "6.5.1",
                "unit_count": "n/a",
            },
        )
        data = response.json()
        assert data["price"] == 1250000
        assert data["lease_price_per_sf"] == pytest.approx(18.75)
        assert data["lease_nnn_charges"] == pytest.approx(6.51)
        assert data["unit_count"] is None

    def test_create_duplicate_slug(self, client, admin_headers, investment_listing):
        response = client.post(
            "/api/admin/listings",
            headers=admin_headers,
            json={"title": "1200 Commerce Pkwy"},
        )
        assert response.json()["slug"] == "1200-commerce-pkwy-1"

    def test_create_negotiable_clears_price(self, client, admin_headers):
        response = client.post(
            "/api/admin/listings",
            headers=admin_headers,
            json={"nickname": "Corner Pad", "price": "900000", "price_negotiable": True},
        )
        data = response.json()
        assert data["title"] == "Corner Pad"
        assert data["price"] is None

    def test_list_includes_drafts(self, client, admin_headers, investment_listing, db_session):
        db_session.add(Listing(slug="draft", title="Draft", published=False))
        db_session.commit()

        response = client.get("/api/admin/listings", headers=admin_headers)
        assert len(response.json()) == 2

    def test_update_listing(self, client, admin_headers, investment_listing):
        response = client.patch(
            f"/api/admin/listings/{investment_listing.id}",
            headers=admin_headers,
            json={
                "noi": "not a number",
                "latitude": "bad",
                "longitude": "-82.99",
                "status": "Closed",
                "featured": False,
                "sold_date": "2025-06-30",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["noi"] is None
        assert data["latitude"] is None
        assert data["longitude"] == pytest.approx(-82.99)
        assert data["status"] == "Active"
        assert data["featured"] is False
        assert data["sold_date"] == "2025-06-30"
        assert data["title"] == "1200 Commerce Pkwy"

    def test_update_replaces_brokers(self, client, admin_headers, investment_listing, second_agent):
        response = client.patch(
            f"/api/admin/listings/{investment_listing.id}",
            headers=admin_headers,
            json={"broker_ids": [second_agent.id]},
        )
        assert [b["name"] for b in response.json()["brokers"]] == ["Casey Morgan"]

    def test_update_invalid_date(self, client, admin_headers, investment_listing):
        response = client.patch(
            f"/api/admin/listings/{investment_listing.id}",
            headers=admin_headers,
            json={"sold_date": "June"},
        )
        assert response.status_code == 400

    def test_composite_id(self, client, admin_headers, investment_listing, agent):
        response = client.get(
            f"/api/admin/listings/{investment_listing.id}|{agent.id}",
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["id"] == investment_listing.id

    def test_invalid_id(self, client, admin_headers):
        response = client.get("/api/admin/listings/abc", headers=admin_headers)
        assert response.status_code == 400

    def test_delete_listing(self, client, admin_headers, investment_listing):
        response = client.delete(
            f"/api/admin/listings/{investment_listing.id}", headers=admin_headers
        )
        assert response.json() == {"deleted": True, "id": investment_listing.id}
        assert client.get("/api/listings/1200-commerce-pkwy").status_code == 404
        assert (
            client.get(f"/api/admin/listings/{investment_listing.id}", headers=admin_headers).status_code
            == 404
        )


class TestAdminAgents:
    """Test team management."""

    def test_create_agent_goes_last(self, client, admin_headers, agent):
        response = client.post(
            "/api/admin/agents",
            headers=admin_headers,
            json={"name": "Riley Quinn", "email": "RQuinn@Example.com"},
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "riley-quinn"
        assert data["email"] == "rquinn@example.com"
        assert data["order"] == 1

    def test_phone_stored_as_digits(self, client, admin_headers, agent):
        created = client.post(
            "/api/admin/agents",
            headers=admin_headers,
            json={"name": "Riley Quinn", "email": "rq@example.com", "phone": "(614) 555-0199"},
        ).json()
        assert created["phone"] == "6145550199"
        assert created["phone_display"] == "(614) 555-0199"

        updated = client.patch(
            f"/api/admin/agents/{agent.id}",
            headers=admin_headers,
            json={"phone": "+1 614.555.0142"},
        ).json()
        assert updated["phone"] == "6145550142"

    def test_create_agent_requires_name(self, client, admin_headers):
        response = client.post(
            "/api/admin/agents", headers=admin_headers, json={"name": " ", "email": "x@y.z"}
        )
        assert response.status_code == 400

    def test_reorder(self, client, admin_headers, agent, second_agent):
        response = client.post(
            "/api/admin/agents/reorder",
            headers=admin_headers,
            json={"agent_ids": [second_agent.id, agent.id]},
        )
        assert response.status_code == 200
        assert [a["name"] for a in response.json()] == ["Casey Morgan", "Jordan Avery"]

    def test_reorder_requires_ids(self, client, admin_headers):
        response = client.post(
            "/api/admin/agents/reorder", headers=admin_headers, json={"agent_ids": []}
        )
        assert response.status_code == 400

    def test_update_agent(self, client, admin_headers, agent):
        response = client.patch(
            f"/api/admin/agents/{agent.id}",
            headers=admin_headers,
            json={"title": "Managing Broker", "ext": ""},
        )
        data = response.json()
        assert data["title"] == "Managing Broker"
        assert data["ext"] is None
        assert data["name"] == "Jordan Avery"

    def test_delete_agent_removes_from_listings(
        self, client, admin_headers, agent, investment_listing
    ):
        response = client.delete(f"/api/admin/agents/{agent.id}", headers=admin_headers)
        assert response.json()["deleted"] is True

        listing = client.get("/api/listings/1200-commerce-pkwy").json()
        assert listing["brokers"] == []
        assert client.get("/api/agents").json()["total"] == 0


class TestAdminNews:
    """Test news management."""

    def test_create_news_with_links(self, client, admin_headers):
        response = client.post(
            "/api/admin/news",
            headers=admin_headers,
            json={
                "title": "Q3 Market Report",
                "content": "Body",
                "links": [
                    {"label": "Report", "url": "https://example.com/report"},
                    {"label": "", "url": "https://example.com/skipped"},
                    {"label": "Press", "url": "https://example.com/press"},
                ],
            },
        )
        assert response.status_code == 201
        data = response.json()
        assert data["slug"] == "q3-market-report"
        assert [(l["label"], l["order"]) for l in data["links"]] == [
            ("Report", 0),
            ("Press", 1),
        ]

    def test_slug_suffixes(self, client, admin_headers):
        slugs = [
            client.post(
                "/api/admin/news", headers=admin_headers, json={"title": "Deal Closed"}
            ).json()["slug"]
            for _ in range(3)
        ]
        assert slugs == ["deal-closed", "deal-closed-1", "deal-closed-2"]

    def test_update_replaces_links(self, client, admin_headers):
        created = client.post(
            "/api/admin/news",
            headers=admin_headers,
            json={"title": "Post", "links": [{"label": "Old", "url": "https://old"}]},
        ).json()

        response = client.patch(
            f"/api/admin/news/{created['id']}",
            headers=admin_headers,
            json={"links": [{"label": "New", "url": "https://new"}]},
        )
        assert [l["label"] for l in response.json()["links"]] == ["New"]

    def test_delete_news(self, client, admin_headers):
        created = client.post(
            "/api/admin/news", headers=admin_headers, json={"title": "Gone"}
        ).json()
        client.delete(f"/api/admin/news/{created['id']}", headers=admin_headers)
        assert client.get("/api/news/gone").status_code == 404


class TestAdminInboxAndReviews:
    """Test inbox, NDA review, lease applications and lookups."""

    def test_mark_message_read(self, client, admin_headers, db_session):
        message = ContactMessage(name="Kim", email="kim@example.com", message="Hi")
        db_session.add(message)
        db_session.commit()

        counts = client.get("/api/admin/notifications", headers=admin_headers).json()
        assert counts["unread_messages"] == 1

        response = client.patch(
            f"/api/admin/messages/{message.id}", headers=admin_headers, json={"read": True}
        )
        assert response.json()["read"] is True

        counts = client.get("/api/admin/notifications", headers=admin_headers).json()
        assert counts["unread_messages"] == 0

    def test_approve_nda_issues_token(self, client, admin_headers, nda):
        response = client.patch(
            f"/api/admin/ndas/{nda.id}",
            headers=admin_headers,
            json={"status": "approved", "notes": "  Qualified buyer  "},
        )
        data = response.json()
        assert data["status"] == "approved"
        assert len(data["approval_token"]) == 64
        assert data["notes"] == "Qualified buyer"

    def test_reapproval_rotates_token(self, client, admin_headers, nda):
        url = f"/api/admin/ndas/{nda.id}"
        first = client.patch(url, headers=admin_headers, json={"status": "approved"}).json()
        second = client.patch(url, headers=admin_headers, json={"status": "approved"}).json()
        assert first["approval_token"] != second["approval_token"]

    def test_reject_nda_clears_token(self, client, admin_headers, nda):
        url = f"/api/admin/ndas/{nda.id}"
        token = client.patch(url, headers=admin_headers, json={"status": "approved"}).json()[
            "approval_token"
        ]
        response = client.patch(url, headers=admin_headers, json={"status": "rejected"})
        assert response.json()["approval_token"] is None

        financials = client.get(f"/api/listings/1200-commerce-pkwy/financials?token={token}")
        assert financials.status_code == 403

    def test_invalid_nda_status(self, client, admin_headers, nda):
        response = client.patch(
            f"/api/admin/ndas/{nda.id}", headers=admin_headers, json={"status": "maybe"}
        )
        assert response.status_code == 400

    def test_lease_applications_mask_ssn(self, client, admin_headers, lease_application):
        data = client.get("/api/admin/lease-applications", headers=admin_headers).json()
        assert data[0]["ssn"] == "***-**-6789"
        assert data[0]["co_applicant"]["ssn"] == "***-**-4321"

    def test_mark_application_received(self, client, admin_headers, lease_application):
        counts = client.get("/api/admin/notifications", headers=admin_headers).json()
        assert counts["applications"] == 1

        client.patch(
            f"/api/admin/lease-applications/{lease_application.id}",
            headers=admin_headers,
            json={"received": True},
        )
        counts = client.get("/api/admin/notifications", headers=admin_headers).json()
        assert counts["applications"] == 0

    def test_feature_options_sorted(self, client, admin_headers, db_session):
        db_session.add_all([FeatureOption(label="Drive-Thru"), FeatureOption(label="Corner Lot")])
        db_session.commit()

        data = client.get("/api/admin/feature-options", headers=admin_headers).json()
        assert [o["label"] for o in data] == ["Corner Lot", "Drive-Thru"]
