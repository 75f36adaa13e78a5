"""
Extended Family

Computes the extended family of a person in a genealogical record graph:
grandparents, parents, uncles and aunts, siblings, partners, cousins,
nephews and nieces, children and grandchildren.
"""

__version__ = "0.1.0"

from extended_family.core.models import (
    Category,
    Family,
    Name,
    Person,
    Side,
)
from extended_family.core.graph import FamilyGraph
from extended_family.core.extended_family import (
    ExtendedFamily,
    ExtendedFamilyFinder,
    compute_extended_family,
)
from extended_family.config import EmptyBlockPolicy, ExtendedFamilyConfig

__all__ = [
    "Category",
    "Family",
    "Name",
    "Person",
    "Side",
    "FamilyGraph",
    "ExtendedFamily",
    "ExtendedFamilyFinder",
    "compute_extended_family",
    "EmptyBlockPolicy",
    "ExtendedFamilyConfig",
]
