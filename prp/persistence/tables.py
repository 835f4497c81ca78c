"""SQLAlchemy table definitions for the Press Release Portal.

These tables are used with SQLAlchemy Core; rows are mapped to the
immutable domain models by hand in ``mappers``. They match the schema
defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    # Principal ID issued by the identity provider
    Column("id", String(128), primary_key=True),
    Column("email", String(320), nullable=False),
    Column("trust_state", String(32), nullable=False, server_default="pending_review"),
    Column("reputation_score", Integer, nullable=False, server_default="0"),
    Column(
        "endorsements_given_this_period", Integer, nullable=False, server_default="0"
    ),
    Column("period_reset_at", TIMESTAMP(timezone=True), nullable=False),
    Column("company_domain", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    CheckConstraint(
        "trust_state IN ('pending_review', 'approved', 'rejected')",
        name="ck_accounts_trust_state",
    ),
    CheckConstraint("reputation_score >= 0", name="ck_accounts_reputation"),
)

Index("idx_accounts_email", accounts_table.c.email, unique=True)
Index(
    "idx_accounts_trust_state",
    accounts_table.c.trust_state,
    accounts_table.c.created_at,
)

# ============================================================================
# INVITE CODES TABLE
# ============================================================================
invite_codes_table = Table(
    "invite_codes",
    metadata,
    Column("code", String(64), primary_key=True),
    # Moderators are configured principal IDs and need not have an account
    Column("issued_by", String(128), nullable=False),
    Column("max_uses", Integer, nullable=False, server_default="1"),
    Column("current_uses", Integer, nullable=False, server_default="0"),
    Column("invitee_domain", String(255), nullable=True),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=True),
    Column("active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    CheckConstraint("max_uses >= 1", name="ck_invite_codes_max_uses"),
    CheckConstraint(
        "current_uses >= 0 AND current_uses <= max_uses",
        name="ck_invite_codes_current_uses",
    ),
)

Index(
    "idx_invite_codes_issued_by",
    invite_codes_table.c.issued_by,
    invite_codes_table.c.created_at,
)

# ============================================================================
# ENDORSEMENT REQUESTS TABLE
# ============================================================================
endorsement_requests_table = Table(
    "endorsement_requests",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "requester_id",
        String(128),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "target_id",
        String(128),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("message", Text, nullable=False, server_default=""),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("resolved_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('pending', 'accepted', 'declined')",
        name="ck_endorsement_requests_status",
    ),
    CheckConstraint(
        "requester_id <> target_id", name="ck_endorsement_requests_not_self"
    ),
)

# At most one pending request per (requester, target)
Index(
    "uq_endorsement_requests_pending_pair",
    endorsement_requests_table.c.requester_id,
    endorsement_requests_table.c.target_id,
    unique=True,
    postgresql_where=text("status = 'pending'"),
)
Index(
    "idx_endorsement_requests_target",
    endorsement_requests_table.c.target_id,
    endorsement_requests_table.c.status,
)

# ============================================================================
# PRESS RELEASES TABLE
# ============================================================================
press_releases_table = Table(
    "press_releases",
    metadata,
    Column("id", UUID, primary_key=True, server_default=text("uuid_generate_v4()")),
    Column(
        "owner_id",
        String(128),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("status", String(32), nullable=False, server_default="pending_moderation"),
    Column("headline", Text, nullable=False),
    Column("location", Text, nullable=False),
    Column("date", Text, nullable=False),
    Column("what", Text, nullable=False),
    Column("who", Text, nullable=False),
    Column("when", Text, nullable=False),
    Column("where", Text, nullable=False),
    Column("why", Text, nullable=False),
    Column("how", Text, nullable=False),
    Column("website", Text, nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column("updated_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "status IN ('pending_moderation', 'approved', 'rejected')",
        name="ck_press_releases_status",
    ),
)

Index(
    "idx_press_releases_status",
    press_releases_table.c.status,
    press_releases_table.c.created_at.desc(),
)
Index(
    "idx_press_releases_owner",
    press_releases_table.c.owner_id,
    press_releases_table.c.created_at.desc(),
)
