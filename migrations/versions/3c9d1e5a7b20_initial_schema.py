"""initial_schema

Create the Press Release Portal schema:
- Accounts (one per identity provider principal, with trust state)
- Invite codes (peer elevation by code)
- Endorsement requests (peer elevation by vouching)
- Press releases (moderated submissions)

Revision ID: 3c9d1e5a7b20
Revises:
Create Date: 2026-10-18 09:12:44.501233

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c9d1e5a7b20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.TIMESTAMP(timezone=True),
        nullable=False,
        server_default=sa.text("NOW()"),
    )


def upgrade() -> None:
    """Upgrade schema."""
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(128), nullable=False),  # Principal ID
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column(
            "trust_state",
            sa.String(32),
            nullable=False,
            server_default="pending_review",
        ),
        sa.Column("reputation_score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column(
            "endorsements_given_this_period",
            sa.Integer(),
            nullable=False,
            server_default="0",
        ),
        sa.Column("period_reset_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("company_domain", sa.String(255), nullable=False),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "trust_state IN ('pending_review', 'approved', 'rejected')",
            name="ck_accounts_trust_state",
        ),
        sa.CheckConstraint("reputation_score >= 0", name="ck_accounts_reputation"),
    )
    op.create_index("idx_accounts_email", "accounts", ["email"], unique=True)
    op.create_index(
        "idx_accounts_trust_state", "accounts", ["trust_state", "created_at"]
    )

    # ========================================================================
    # INVITE_CODES table
    # ========================================================================
    op.create_table(
        "invite_codes",
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("issued_by", sa.String(128), nullable=False),
        sa.Column("max_uses", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("current_uses", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("invitee_domain", sa.String(255), nullable=True),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column("active", sa.Boolean(), nullable=False, server_default="true"),
        _created_at(),
        sa.PrimaryKeyConstraint("code"),
        sa.CheckConstraint("max_uses >= 1", name="ck_invite_codes_max_uses"),
        sa.CheckConstraint(
            "current_uses >= 0 AND current_uses <= max_uses",
            name="ck_invite_codes_current_uses",
        ),
    )
    op.create_index(
        "idx_invite_codes_issued_by", "invite_codes", ["issued_by", "created_at"]
    )

    # ========================================================================
    # ENDORSEMENT_REQUESTS table
    # ========================================================================
    op.create_table(
        "endorsement_requests",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("requester_id", sa.String(128), nullable=False),
        sa.Column("target_id", sa.String(128), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("message", sa.Text(), nullable=False, server_default=""),
        _created_at(),
        sa.Column("resolved_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(
            ["requester_id"], ["accounts.id"], ondelete="CASCADE"
        ),
        sa.ForeignKeyConstraint(["target_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('pending', 'accepted', 'declined')",
            name="ck_endorsement_requests_status",
        ),
        sa.CheckConstraint(
            "requester_id <> target_id", name="ck_endorsement_requests_not_self"
        ),
    )
    # At most one pending request per (requester, target)
    op.create_index(
        "uq_endorsement_requests_pending_pair",
        "endorsement_requests",
        ["requester_id", "target_id"],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        "idx_endorsement_requests_target",
        "endorsement_requests",
        ["target_id", "status"],
    )

    # ========================================================================
    # PRESS_RELEASES table
    # ========================================================================
    op.create_table(
        "press_releases",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.String(128), nullable=False),
        sa.Column(
            "status",
            sa.String(32),
            nullable=False,
            server_default="pending_moderation",
        ),
        *[
            sa.Column(name, sa.Text(), nullable=False)
            for name in (
                "headline",
                "location",
                "date",
                "what",
                "who",
                "when",
                "where",
                "why",
                "how",
                "website",
            )
        ],
        _created_at(),
        sa.Column("updated_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"], ondelete="CASCADE"),
        sa.CheckConstraint(
            "status IN ('pending_moderation', 'approved', 'rejected')",
            name="ck_press_releases_status",
        ),
    )
    op.create_index(
        "idx_press_releases_status",
        "press_releases",
        ["status", sa.text("created_at DESC")],
    )
    op.create_index(
        "idx_press_releases_owner",
        "press_releases",
        ["owner_id", sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Downgrade schema."""
    # Drop tables (in reverse order of dependencies)
    op.drop_table("press_releases")
    op.drop_table("endorsement_requests")
    op.drop_table("invite_codes")
    op.drop_table("accounts")
