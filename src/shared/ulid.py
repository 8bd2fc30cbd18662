"""ULID identifiers and the column helpers built on them."""

import ulid
from sqlalchemy import ForeignKey, String
from sqlalchemy.orm import mapped_column

ULID_LENGTH = 26


def generate_ulid() -> str:
    """Return a string ULID for primary keys."""
    return str(ulid.new())


def ulid_primary_key():
    return mapped_column(String(ULID_LENGTH), primary_key=True, default=generate_ulid)


def ulid_reference(target: str, ondelete: str = "CASCADE", nullable: bool = False, **kwargs):
    """ULID foreign key; by default non-null and removed together with its parent row."""
    return mapped_column(
        String(ULID_LENGTH),
        ForeignKey(target, ondelete=ondelete),
        nullable=nullable,
        **kwargs,
    )
