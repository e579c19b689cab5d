"""SQLAlchemy Core table definitions: a Python-side mirror of the storefront's
Azure SQL tables.

Column names stay exactly as they are in the database (camelCase), since the
same tables are shared with the admin tooling. These are NOT ORM models, just
typed column references for the query builder.
"""

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    Integer,
    MetaData,
    Table,
    Unicode,
    UnicodeText,
)

metadata = MetaData(schema="dbo")

# ============================================================================
# Customers
# ============================================================================

customer_accounts = Table(
    "CustomerAccounts",
    metadata,
    Column("id", Unicode(64), primary_key=True),
    Column("name", Unicode(200), nullable=False),
    Column("email", Unicode(320), unique=True, nullable=False),
    Column("passwordHash", Unicode(256), nullable=False),
    Column("isActive", Boolean, nullable=False, server_default="1"),
    Column("createdAt", DateTime, nullable=False),
    Column("updatedAt", DateTime, nullable=False),
)

# CRM view of a customer; signup creates one if the email is new to the CRM.
customers = Table(
    "Customers",
    metadata,
    Column("id", Unicode(64), primary_key=True),
    Column("name", Unicode(200)),
    Column("email", Unicode(320)),
    Column("phone", Unicode(50)),
    Column("segment", Unicode(50)),
    Column("totalSpent", Float, server_default="0"),
    Column("orderCount", Integer, server_default="0"),
    Column("lastActive", DateTime),
    Column("joinedAt", DateTime),
    Column("tags", UnicodeText),
    Column("notes", UnicodeText),
)

# ============================================================================
# Promotions
# ============================================================================

discounts = Table(
    "Discounts",
    metadata,
    Column("id", Unicode(64), primary_key=True),
    Column("code", Unicode(64), unique=True, nullable=False),
    Column("description", UnicodeText),
    Column("type", Unicode(20), nullable=False),
    Column("value", Float, nullable=False),
    Column("currency", Unicode(8), server_default="'BDT'"),
    Column("appliesTo", Unicode(20), nullable=False, server_default="'all'"),
    Column("minPurchase", Float),
    Column("maxUses", Integer),
    Column("usedCount", Integer, nullable=False, server_default="0"),
    Column("startDate", DateTime, nullable=False),
    Column("endDate", DateTime, nullable=False),
    Column("isActive", Boolean, nullable=False, server_default="1"),
)
