"""
Seed the database with feature options, the team and a demo investment listing.
Safe to run more than once: existing rows are left alone.
"""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from brokerage.calculations.investment import compute_investment_summary
from brokerage.db.database import get_db_context, init_db
from brokerage.db.models import Agent, FeatureOption, Listing, ListingBroker

FEATURE_OPTIONS = [
    "Corner Lot",
    "Dock High Doors",
    "Drive-Thru",
    "Drive-In Doors",
    "Fenced Yard",
    "Freeway Visibility",
    "Outdoor Patio",
    "Signalized Intersection",
]

AGENTS = [
    {
        "slug": "jordan-avery",
        "name": "Jordan Avery",
        "title": "Principal Broker",
        "email": "javery@example.com",
        "phone": "6145550101",
        "credentials": "CCIM",
        "notable_deals": ["Sold 48,000 SF flex building, Dublin"],
    },
    {
        "slug": "casey-morgan",
        "name": "Casey Morgan",
        "title": "Senior Advisor",
        "email": "cmorgan@example.com",
        "phone": "6145550102",
        "ext": "12",
        "credentials": "SIOR",
        "notable_deals": [],
    },
]

DEMO_LISTING = {
    "slug": "1200-commerce-pkwy",
    "title": "1200 Commerce Pkwy",
    "address": "1200 Commerce Pkwy",
    "city": "Columbus",
    "state": "OH",
    "zip_code": "43215",
    "latitude": 39.9612,
    "longitude": -83.0007,
    "listing_type": "For Sale",
    "property_type": "Retail",
    "occupancy": "Investment",
    "square_feet": 8200,
    "description": "Single-tenant net leased retail building on a signalized corner.",
    "features": ["Corner Lot", "Drive-Thru", "Signalized Intersection"],
    "noi": 120000,
    "price": 1500000,
    "cap_rate": 0.08,
    "status": "Active",
    "published": True,
    "featured": True,
}


def main():
    init_db()

    with get_db_context() as db:
        existing_labels = {o.label for o in db.query(FeatureOption).all()}
        for label in FEATURE_OPTIONS:
            if label not in existing_labels:
                db.add(FeatureOption(label=label))
        print(f"Feature options: {len(FEATURE_OPTIONS)}")

        agents = []
        for order, data in enumerate(AGENTS):
            agent = db.query(Agent).filter(Agent.slug == data["slug"]).first()
            if agent is None:
                agent = Agent(order=order, **data)
                db.add(agent)
                db.flush()
                print(f"Created agent: {agent.name} (ID: {agent.id})")
            agents.append(agent)

        listing = db.query(Listing).filter(Listing.slug == DEMO_LISTING["slug"]).first()
        if listing is not None:
            print(f"Listing '{listing.title}' already exists (ID: {listing.id})")
            return

        listing = Listing(**DEMO_LISTING)
        db.add(listing)
        db.flush()
        for position, agent in enumerate(agents):
            db.add(ListingBroker(listing_id=listing.id, agent_id=agent.id, position=position))
        print(f"Created listing: {listing.title} (ID: {listing.id})")

        summary = compute_investment_summary(
            listing.noi,
            listing.price,
            listing.cap_rate,
            round(listing.price * 0.3),
            7.0,
        )
        print("\n=== Investment summary (30% down, 7.0%) ===")
        print(f"Cap rate:       {summary.cap_rate_percent:.1f}%")
        print(f"Debt service:   ${summary.annual_debt_service:,.0f}/yr")
        print(f"DSCR:           {summary.dscr:.2f}")
        print(f"Cash-on-cash:   {summary.coc_return_percent:.1f}%")
        print(f"ROI:            {summary.roi_percent:.1f}%")


if __name__ == "__main__":
    main()
