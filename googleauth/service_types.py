"""
Service type definitions for Google OAuth scope resolution.

The declaration order of ``Service`` is the presentation order used for
listings, CSV defaults and generated documentation.
"""

from enum import Enum


class Service(str, Enum):
    """
    Google service identifiers understood by the scope registry.

    Values are the canonical (lowercase, trimmed) names. Use
    ``scope_registry.parse_service`` to turn free-form user input into a
    member.
    """

    GMAIL = "gmail"
    CALENDAR = "calendar"
    DRIVE = "drive"
    DOCS = "docs"
    CONTACTS = "contacts"
    TASKS = "tasks"
    SHEETS = "sheets"
    PEOPLE = "people"
    GROUPS = "groups"
    KEEP = "keep"

    def __str__(self) -> str:
        return self.value
