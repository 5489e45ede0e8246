"""SQLAlchemy table definitions for Atlas.

Schema creation is owned by the deployment; these definitions describe the
expected tables for queries.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("email", String(255), nullable=False),
    Column("first_name", String(255), nullable=False),
    Column("last_name", String(255), nullable=False, server_default=""),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("last_login_at", TIMESTAMP(timezone=True), nullable=True),
    UniqueConstraint("email", name="uq_accounts_email"),
)

# ============================================================================
# FEDERATED IDENTITY LINKS TABLE
# ============================================================================
identity_links_table = Table(
    "federated_identity_links",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column(
        "account_id",
        BigInteger,
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(50), nullable=False),  # 'google', 'github', 'apple'
    Column("provider_user_id", String(255), nullable=False),  # Provider "sub"
    Column("provider_email", String(255), nullable=True),
    Column("provider_username", String(255), nullable=True),
    Column("is_primary", Boolean, nullable=False, server_default="false"),
    Column(
        "linked_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "last_used_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "provider_user_id", name="uq_provider_identity"),
)

Index("idx_identity_links_account_id", identity_links_table.c.account_id)
# At most one primary link per account
Index(
    "uq_primary_link_per_account",
    identity_links_table.c.account_id,
    unique=True,
    postgresql_where=identity_links_table.c.is_primary,
)

# ============================================================================
# METRIC EVENTS TABLE
# ============================================================================
metric_events_table = Table(
    "metric_events",
    metadata,
    Column("id", BigInteger, primary_key=True, autoincrement=True),
    Column("event", String(50), nullable=False),
    Column("account_id", BigInteger, nullable=True),
    Column("metadata", JSONB, nullable=False, server_default="{}"),
    Column(
        "event_time", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_metric_events_event_time", metric_events_table.c.event_time)
