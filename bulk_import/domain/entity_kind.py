"""
bulk_import/domain/entity_kind.py

Closed set of entity kinds accepted by the batch-import endpoints.
"""

from __future__ import annotations

from enum import Enum


class EntityKind(str, Enum):
    """
    Domain type being imported; selects classifier table and endpoint.
    """

    PROPERTIES = "properties"
    USERS = "users"
    LEADS = "leads"
    DEVELOPERS = "developers"
    CITIES = "cities"
    LAUNCHES = "launches"
    GOVERNORATES = "governorates"
    AREAS = "areas"

    @property
    def label(self) -> str:
        return self.value.title()

    @property
    def path_segment(self) -> str:
        return self.value

    @classmethod
    def parse(cls, raw: str) -> "EntityKind":
        """
        Resolve a user-supplied tag, case-insensitively.
        """

        cleaned = str(raw or "").strip().lower()
        try:
            return cls(cleaned)
        except ValueError:
            allowed = ", ".join(kind.value for kind in cls)
            raise ValueError(f"Unknown entity kind '{raw}'. Allowed values: {allowed}.") from None
