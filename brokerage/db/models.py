"""
SQLAlchemy ORM models for listings, team, news and inbound submissions.
"""

from datetime import datetime
from sqlalchemy import (
    Column,
    String,
    Float,
    Integer,
    Boolean,
    Date,
    DateTime,
    ForeignKey,
    JSON,
    Text,
)
from sqlalchemy.orm import declarative_base, relationship
import uuid

Base = declarative_base()


def generate_uuid():
    return str(uuid.uuid4())


class AuditMixin:
    """Mixin for audit fields on all models."""

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )
    is_deleted = Column(Boolean, default=False, nullable=False)


class Agent(AuditMixin, Base):
    """Broker or advisor shown on the team page and on listings."""

    __tablename__ = "agents"

    id = Column(String, primary_key=True, default=generate_uuid)
    slug = Column(String(255), unique=True, nullable=True, index=True)
    name = Column(String(255), nullable=False)
    title = Column(String(255))
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    ext = Column(String(20))
    credentials = Column(String(255))  # e.g. "CCIM, SIOR"
    website = Column(String(255))
    headshot = Column(String(500))
    description = Column(Text)
    notable_deals = Column(JSON, default=list)
    order = Column(Integer, default=0, nullable=False)

    listings = relationship(
        "ListingBroker", back_populates="agent", cascade="all, delete-orphan"
    )


class Listing(AuditMixin, Base):
    """A property marketed for sale or lease."""

    __tablename__ = "listings"

    id = Column(String, primary_key=True, default=generate_uuid)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    nickname = Column(String(255))

    # Address
    address = Column(String(255), default="", nullable=False)
    city = Column(String(100), default="", nullable=False)
    state = Column(String(50), default="OH", nullable=False)
    zip_code = Column(String(20))
    latitude = Column(Float)
    longitude = Column(Float)

    # Classification
    listing_type = Column(String(20), default="For Sale", nullable=False)
    property_type = Column(String(50), default="Retail", nullable=False)
    land_subcategory = Column(String(50))
    occupancy = Column(String(50))  # Owner User, Investment, Owner User/Investment

    # Size
    square_feet = Column(Integer)
    acreage = Column(Float)
    is_multi_tenant = Column(Boolean, default=False, nullable=False)
    unit_count = Column(Integer)

    # Marketing content
    description = Column(Text, default="", nullable=False)
    features = Column(JSON, default=list)
    hero_image = Column(String(500))
    gallery_images = Column(JSON, default=list)
    floor_plan = Column(String(500))
    site_plan = Column(String(500))
    brochure = Column(String(500))
    financial_doc_path = Column(String(500))  # NDA-gated
    youtube_link = Column(String(500))

    # Pricing
    price = Column(Float)
    price_negotiable = Column(Boolean, default=False, nullable=False)
    noi = Column(Float)
    cap_rate = Column(Float)  # decimal, 0.08 for 8%
    lease_type = Column(String(50))
    lease_price_per_sf = Column(Float)
    lease_nnn_charges = Column(Float)

    # Lifecycle
    status = Column(String(20), default="Active", nullable=False)
    transaction_outcome = Column(String(20))  # Sold / Leased for Sale/Lease deals
    sold_price = Column(Float)
    sold_date = Column(Date)
    sold_notes = Column(Text)
    published = Column(Boolean, default=False, nullable=False)
    featured = Column(Boolean, default=False, nullable=False)

    brokers = relationship(
        "ListingBroker",
        back_populates="listing",
        cascade="all, delete-orphan",
        order_by="ListingBroker.position",
    )


class ListingBroker(Base):
    """Association between a listing and the agents marketing it."""

    __tablename__ = "listing_brokers"

    listing_id = Column(String, ForeignKey("listings.id"), primary_key=True)
    agent_id = Column(String, ForeignKey("agents.id"), primary_key=True)
    position = Column(Integer, default=0, nullable=False)

    listing = relationship("Listing", back_populates="brokers")
    agent = relationship("Agent", back_populates="listings")


class FeatureOption(Base):
    """Selectable listing feature tag ("Drive-Thru", "Dock High", ...)."""

    __tablename__ = "feature_options"

    id = Column(String, primary_key=True, default=generate_uuid)
    label = Column(String(100), unique=True, nullable=False)


class News(AuditMixin, Base):
    """News post."""

    __tablename__ = "news"

    id = Column(String, primary_key=True, default=generate_uuid)
    slug = Column(String(255), unique=True, nullable=False, index=True)
    title = Column(String(255), nullable=False)
    excerpt = Column(Text)
    content = Column(Text, default="", nullable=False)
    image_url = Column(String(500))
    published_at = Column(DateTime)

    links = relationship(
        "NewsLink",
        back_populates="news",
        cascade="all, delete-orphan",
        order_by="NewsLink.order",
    )


class NewsLink(Base):
    """External link attached to a news post."""

    __tablename__ = "news_links"

    id = Column(String, primary_key=True, default=generate_uuid)
    news_id = Column(String, ForeignKey("news.id"), nullable=False)
    label = Column(String(255), nullable=False)
    url = Column(String(1000), nullable=False)
    order = Column(Integer, default=0, nullable=False)

    news = relationship("News", back_populates="links")


class ContactMessage(AuditMixin, Base):
    """Message from the public contact form."""

    __tablename__ = "contact_messages"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    service = Column(String(100))
    message = Column(Text, nullable=False)
    read = Column(Boolean, default=False, nullable=False)


class NdaSubmission(AuditMixin, Base):
    """Signed confidentiality agreement requesting a listing's financials."""

    __tablename__ = "nda_submissions"

    id = Column(String, primary_key=True, default=generate_uuid)
    listing_slug = Column(String(255), nullable=False, index=True)
    listing_title = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    phone = Column(String(50))
    company = Column(String(255))
    signature_name = Column(String(255), nullable=False)

    # pending -> approved | rejected
    status = Column(String(20), default="pending", nullable=False)
    approval_token = Column(String(255), unique=True, nullable=True, index=True)
    notes = Column(Text)


class LeaseApplication(AuditMixin, Base):
    """Tenant application for a lease listing."""

    __tablename__ = "lease_applications"

    id = Column(String, primary_key=True, default=generate_uuid)
    listing_slug = Column(String(255), nullable=False, index=True)
    listing_title = Column(String(255), nullable=False)

    # Applicant
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    business_name = Column(String(255))
    use = Column(String(255))
    date_of_birth = Column(String(20))
    phone = Column(String(50))
    email = Column(String(255), nullable=False)
    ssn = Column(String(9))  # digits only

    # Attachments (paths from the upload service)
    business_plan_path = Column(String(500))
    financials_paths = Column(JSON, default=list)

    credit_check_acknowledged = Column(Boolean, default=False, nullable=False)
    signature_name = Column(String(255), nullable=False)
    co_applicant = Column(JSON)

    # Application fee
    application_fee_cents = Column(Integer, nullable=False)
    payment_status = Column(String(20), default="pending", nullable=False)

    received = Column(Boolean, default=False, nullable=False)
