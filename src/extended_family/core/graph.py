"""
Read-only navigation over persons and family unions.

FamilyGraph is the only way the walkers reach the record store. Every
operation is a pure read and resolves missing or dangling links to an
empty result instead of raising.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Iterable
from uuid import UUID

from extended_family.core.models import Family, Pedigree, Person

if TYPE_CHECKING:
    from extended_family.core.gedcom import GedcomManager

logger = logging.getLogger(__name__)


class FamilyGraph:
    """
    Bipartite person/union graph built from Person and Family models.

    Links are taken from both directions: the ids a person declares
    (FAMC/FAMS) come first, followed by any family that lists the person
    as partner or child without a matching back-reference.
    """

    def __init__(
        self,
        persons: Iterable[Person] = (),
        families: Iterable[Family] = (),
    ):
        self._persons: dict[str, Person] = {}
        self._families: dict[str, Family] = {}

        # Reverse indexes derived from the families
        self._spouse_in: dict[str, list[str]] = defaultdict(list)
        self._child_in: dict[str, list[str]] = defaultdict(list)

        for person in persons:
            self.add_person(person)
        for family in families:
            self.add_family(family)

    @classmethod
    def from_gedcom(cls, manager: GedcomManager) -> FamilyGraph:
        """Build a graph from every INDI and FAM record of a GEDCOM file."""
        return cls(manager.persons(), manager.families_list())

    def add_person(self, person: Person) -> None:
        self._persons[person.key] = person

    def add_family(self, family: Family) -> None:
        self._families[family.key] = family
        for spouse_id in family.spouse_ids:
            self._spouse_in[str(spouse_id)].append(family.key)
        for child_id in family.children_ids:
            self._child_in[str(child_id)].append(family.key)

    def __len__(self) -> int:
        return len(self._persons)

    def __repr__(self) -> str:
        return f"FamilyGraph({len(self._persons)} persons, {len(self._families)} families)"

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def get_person(self, person_id: UUID | str | None) -> Person | None:
        if person_id is None:
            return None
        person = self._persons.get(str(person_id))
        if person is None:
            logger.debug("Dangling person reference: %s", person_id)
        return person

    def get_family(self, family_id: UUID | str | None) -> Family | None:
        if family_id is None:
            return None
        family = self._families.get(str(family_id))
        if family is None:
            logger.debug("Dangling family reference: %s", family_id)
        return family

    def _resolve_families(self, declared: Iterable[UUID | str], derived: Iterable[str]) -> list[Family]:
        seen: set[str] = set()
        families = []
        for family_id in [*map(str, declared), *derived]:
            if family_id in seen:
                continue
            seen.add(family_id)
            family = self.get_family(family_id)
            if family is not None:
                families.append(family)
        return families

    # -------------------------------------------------------------------------
    # Navigation primitives
    # -------------------------------------------------------------------------

    def parental_unions_of(self, person: Person) -> list[Family]:
        """Families in which the person is a child."""
        return self._resolve_families(person.parent_family_ids, self._child_in.get(person.key, ()))

    def parental_union_of(self, person: Person) -> Family | None:
        """The person's first parental family, if any."""
        unions = self.parental_unions_of(person)
        return unions[0] if unions else None

    def marital_unions_of(self, person: Person) -> list[Family]:
        """Families in which the person is a partner, in recorded order."""
        return self._resolve_families(person.spouse_family_ids, self._spouse_in.get(person.key, ()))

    def husband_of(self, union: Family) -> Person | None:
        return self.get_person(union.husband_id)

    def wife_of(self, union: Family) -> Person | None:
        return self.get_person(union.wife_id)

    def spouses_of(self, union: Family) -> list[Person]:
        """Recorded partners of a union, father role first."""
        return [p for p in (self.husband_of(union), self.wife_of(union)) if p is not None]

    def children_of(self, union: Family) -> list[Person]:
        """Recorded children of a union, in recorded order."""
        children = []
        for child_id in union.children_ids:
            child = self.get_person(child_id)
            if child is not None:
                children.append(child)
        return children

    def pedigree_of(self, person: Person, union: Family) -> Pedigree | None:
        """PEDI code of the person's link to a parental union, if recorded."""
        return person.pedigrees.get(union.key)
