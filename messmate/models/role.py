"""Group role enum."""

from enum import Enum as PyEnum


class TenantRole(str, PyEnum):
    """
    Group membership roles.

    - OWNER: created the group, can add members
    - MEMBER: reads and writes the group's ledger

    Both roles have full access to the ledger itself.
    """

    OWNER = "owner"
    MEMBER = "member"
