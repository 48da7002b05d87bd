"""SQLAlchemy table definitions for Outpost.

The registry key is the primary key of ``user_identities`` and the
provider type/key pair carries its own unique constraint, so the database
refuses a second owner for an identity even when two processes race.
"""

from sqlalchemy import (
    JSON,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    UniqueConstraint,
)

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", String(64), primary_key=True),  # Generator-assigned hex token
    Column("email", String(320), nullable=False),  # Display/primary contact
)

Index("idx_users_email", users_table.c.email)

# ============================================================================
# USER IDENTITIES TABLE (one row per registry key)
# ============================================================================
user_identities_table = Table(
    "user_identities",
    metadata,
    Column("registry_key", String(1024), primary_key=True),
    Column(
        "user_id", String(64), ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("provider_type", String(255), nullable=False),  # 'email', 'phone', 'google'
    Column("provider_key", String(512), nullable=False),
    Column("position", Integer, nullable=False),  # Enumeration order within the user
    Column("credential", JSON, nullable=False),  # Tagged by its 'kind' field
    UniqueConstraint("provider_type", "provider_key", name="uq_provider_identity"),
)

Index("idx_user_identities_user_id", user_identities_table.c.user_id)
