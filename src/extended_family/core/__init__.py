"""Core models, graph navigation and the extended family engine."""

from extended_family.core.models import (
    Category,
    Family,
    Name,
    Pedigree,
    Person,
    Side,
)
from extended_family.core.graph import FamilyGraph
from extended_family.core.buckets import (
    AncestorBucket,
    DescendantBucket,
    DescendantGroup,
    SexCounts,
)
from extended_family.core.naming import display_name, family_role_label
from extended_family.core.gedcom import GedcomManager

__all__ = [
    "Category",
    "Family",
    "Name",
    "Pedigree",
    "Person",
    "Side",
    "FamilyGraph",
    "AncestorBucket",
    "DescendantBucket",
    "DescendantGroup",
    "SexCounts",
    "display_name",
    "family_role_label",
    "GedcomManager",
]
