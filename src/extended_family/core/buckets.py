"""
Accumulators for traversal results.

Ancestor-oriented categories collect persons into three disjoint lineage
sequences (father's side, mother's side, both sides). Descendant-oriented
categories collect persons into groups keyed by the union at the proband's
own generation through which they were reached.

All membership checks compare Person/Family keys, never object identity.
Counts are derived from the current contents on every access.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from extended_family.core.models import Family, Person, Side


@dataclass(frozen=True)
class SexCounts:
    """Male / female / other tallies for a sequence of persons."""
    male: int = 0
    female: int = 0
    other: int = 0

    @property
    def total(self) -> int:
        return self.male + self.female + self.other

    @classmethod
    def of(cls, persons: Iterable[Person | None]) -> SexCounts:
        """Tally by sex; absent entries are skipped."""
        male = female = other = 0
        for person in persons:
            if person is None:
                continue
            if person.sex == "M":
                male += 1
            elif person.sex == "F":
                female += 1
            else:
                other += 1
        return cls(male=male, female=female, other=other)

    def __add__(self, other: SexCounts) -> SexCounts:
        return SexCounts(
            male=self.male + other.male,
            female=self.female + other.female,
            other=self.other + other.other,
        )


def _contains(persons: list[Person], person: Person) -> bool:
    key = person.key
    return any(p.key == key for p in persons)


def _remove(persons: list[Person], person: Person) -> None:
    key = person.key
    persons[:] = [p for p in persons if p.key != key]


class FamilyPart(ABC):
    """Common read interface of both bucket kinds."""

    @abstractmethod
    def members(self) -> list[Person]:
        """All collected persons, each exactly once."""

    @property
    def counts(self) -> SexCounts:
        return SexCounts.of(self.members())

    @property
    def total(self) -> int:
        return self.counts.total

    @property
    def is_empty(self) -> bool:
        return self.total == 0


@dataclass
class AncestorBucket(FamilyPart):
    """
    Side-tagged result set for grandparents, parents, uncles/aunts and cousins.

    `father` and `mother` are the partners of the proband's parental union
    that seeded the walk; both are None when the proband has no parents
    recorded.
    """
    father: Person | None = None
    mother: Person | None = None
    father_side: list[Person] = field(default_factory=list)
    mother_side: list[Person] = field(default_factory=list)
    both_sides: list[Person] = field(default_factory=list)

    def _side(self, side: Side) -> list[Person]:
        return self.father_side if side is Side.FATHER else self.mother_side

    def insert(self, person: Person, side: Side) -> None:
        """Add a person reached via `side`, keeping the three sequences disjoint."""
        if _contains(self.both_sides, person):
            return
        other = self._side(side.other)
        if _contains(other, person):
            _remove(other, person)
            self.both_sides.append(person)
            return
        this = self._side(side)
        if not _contains(this, person):
            this.append(person)

    @property
    def has_parents(self) -> bool:
        return self.father is not None or self.mother is not None

    def members(self) -> list[Person]:
        return [*self.father_side, *self.mother_side, *self.both_sides]

    @property
    def father_side_counts(self) -> SexCounts:
        return SexCounts.of(self.father_side)

    @property
    def mother_side_counts(self) -> SexCounts:
        return SexCounts.of(self.mother_side)

    @property
    def both_sides_counts(self) -> SexCounts:
        return SexCounts.of(self.both_sides)

    @property
    def counts(self) -> SexCounts:
        return self.father_side_counts + self.mother_side_counts + self.both_sides_counts


@dataclass
class DescendantGroup:
    """Persons reached through one union of the proband's generation."""
    union: Family
    members: list[Person] = field(default_factory=list)

    @property
    def counts(self) -> SexCounts:
        return SexCounts.of(self.members)


@dataclass
class DescendantBucket(FamilyPart):
    """
    Union-grouped result set for siblings, partners, nephews/nieces,
    children and grandchildren.

    A person belongs to at most one group and a union keys at most one
    group; the first discovery wins.
    """
    groups: list[DescendantGroup] = field(default_factory=list)

    def insert(self, person: Person, union: Family) -> None:
        """Add a person reached through `union` unless already grouped."""
        if any(_contains(group.members, person) for group in self.groups):
            return
        for group in self.groups:
            if group.union.key == union.key:
                group.members.append(person)
                return
        self.groups.append(DescendantGroup(union=union, members=[person]))

    def group_for(self, union: Family) -> DescendantGroup | None:
        for group in self.groups:
            if group.union.key == union.key:
                return group
        return None

    def members(self) -> list[Person]:
        return [person for group in self.groups for person in group.members]
