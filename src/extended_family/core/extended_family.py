"""
Extended family of a proband.

Runs the walker of every enabled category and collects the buckets into
one result together with the proband's display name and a grand total.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from uuid import UUID

from extended_family.config import ExtendedFamilyConfig
from extended_family.core.buckets import AncestorBucket, DescendantBucket, FamilyPart
from extended_family.core.graph import FamilyGraph
from extended_family.core.models import Category, Person
from extended_family.core.naming import display_name, family_role_label
from extended_family.core.walkers import WALKERS

logger = logging.getLogger(__name__)


@dataclass
class ExtendedFamily:
    """Computed extended family. Disabled categories are absent from `parts`."""
    proband: Person
    display_name: str
    parts: dict[Category, FamilyPart] = field(default_factory=dict)
    total: int = 0
    # parental union key -> the proband's role label in that family
    role_labels: dict[str, str] = field(default_factory=dict)

    def part(self, category: Category) -> FamilyPart | None:
        return self.parts.get(category)

    def ancestors(self, category: Category) -> AncestorBucket | None:
        part = self.parts.get(category)
        return part if isinstance(part, AncestorBucket) else None

    def descendants(self, category: Category) -> DescendantBucket | None:
        part = self.parts.get(category)
        return part if isinstance(part, DescendantBucket) else None

    @property
    def is_empty(self) -> bool:
        return self.total == 0


def compute_extended_family(
    graph: FamilyGraph,
    proband: Person,
    config: ExtendedFamilyConfig | None = None,
) -> ExtendedFamily:
    """Compute every enabled category for `proband`."""
    config = config or ExtendedFamilyConfig()
    result = ExtendedFamily(proband=proband, display_name=display_name(proband))
    for union in graph.parental_unions_of(proband):
        result.role_labels[union.key] = family_role_label(graph, proband, union=union)

    for category in config.enabled_categories():
        part = WALKERS[category](graph, proband)
        result.parts[category] = part
        result.total += part.total
        logger.debug("%s of %s: %d", category.value, proband.key, part.total)

    return result


class ExtendedFamilyFinder:
    """Computes extended families against one graph and one configuration."""

    def __init__(self, graph: FamilyGraph, config: ExtendedFamilyConfig | None = None):
        self.graph = graph
        self.config = config or ExtendedFamilyConfig()

    def compute(self, proband: Person) -> ExtendedFamily:
        return compute_extended_family(self.graph, proband, self.config)

    def find(self, person_id: UUID | str) -> ExtendedFamily | None:
        """Extended family of the person with this id, or None if unknown."""
        proband = self.graph.get_person(person_id)
        if proband is None:
            return None
        return self.compute(proband)
