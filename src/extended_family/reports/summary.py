"""
Extended family summary report.

Turns the counts of a computed extended family into English sentences
and member listings, formatted as Markdown.
"""

from __future__ import annotations

from dataclasses import dataclass

from extended_family.config import EmptyBlockPolicy
from extended_family.core.buckets import (
    AncestorBucket,
    DescendantBucket,
    DescendantGroup,
    FamilyPart,
    SexCounts,
)
from extended_family.core.extended_family import ExtendedFamily
from extended_family.core.models import Category, Person


@dataclass(frozen=True)
class Terms:
    """Words used to describe the members of one category."""
    title: str
    male: str
    males: str
    female: str
    females: str
    neutral: str
    nobody: str


TERMS: dict[Category, Terms] = {
    Category.GRANDPARENTS: Terms(
        "Grandparents", "grandfather", "grandfathers", "grandmother", "grandmothers",
        "grandparent", "grandparents"),
    Category.PARENTS: Terms(
        "Parents", "father", "fathers", "mother", "mothers", "parent", "parents"),
    Category.UNCLES_AND_AUNTS: Terms(
        "Uncles and Aunts", "uncle", "uncles", "aunt", "aunts",
        "uncle or aunt", "uncles or aunts"),
    Category.SIBLINGS: Terms(
        "Siblings", "brother", "brothers", "sister", "sisters",
        "brother or sister", "siblings"),
    Category.PARTNERS: Terms(
        "Partners", "male partner", "male partners", "female partner", "female partners",
        "partner", "partners"),
    Category.COUSINS: Terms(
        "Cousins", "male first cousin", "male first cousins",
        "female first cousin", "female first cousins",
        "first cousin", "first cousins"),
    Category.NEPHEWS_AND_NIECES: Terms(
        "Nephews and Nieces", "nephew", "nephews", "niece", "nieces",
        "nephew or niece", "nephews or nieces"),
    Category.CHILDREN: Terms(
        "Children", "son", "sons", "daughter", "daughters", "child", "children"),
    Category.GRANDCHILDREN: Terms(
        "Grandchildren", "grandson", "grandsons", "granddaughter", "granddaughters",
        "grandchild", "grandchildren"),
}


# Descendant categories grouped by the proband's parental families
PARENTAL_FAMILY_CATEGORIES = frozenset({Category.SIBLINGS, Category.NEPHEWS_AND_NIECES})


def _plural(n: int, singular: str, plural: str) -> str:
    return f"{n} {singular if n == 1 else plural}"


def count_sentence(name: str, category: Category, counts: SexCounts) -> str:
    """
    One sentence describing how many members a category has.

    "Anna has no siblings recorded."
    "Anna has one sister recorded."
    "Anna has 2 brothers recorded."
    "Anna has 1 brother and 2 sisters recorded (3 in total)."

    Members of unknown sex get the neutral word; empty clauses are left out.
    """
    terms = TERMS[category]
    total = counts.total

    if total == 0:
        return f"{name} has no {terms.nobody} recorded."
    if total == 1:
        if counts.male:
            word = terms.male
        elif counts.female:
            word = terms.female
        else:
            word = terms.neutral
        return f"{name} has one {word} recorded."

    clauses = [
        _plural(n, singular, plural)
        for n, singular, plural in (
            (counts.male, terms.male, terms.males),
            (counts.female, terms.female, terms.females),
            (counts.other, terms.neutral, terms.nobody),
        )
        if n
    ]
    if len(clauses) == 1:
        return f"{name} has {clauses[0]} recorded."
    listed = ", ".join(clauses[:-1]) + f" and {clauses[-1]}"
    return f"{name} has {listed} recorded ({total} in total)."


class ExtendedFamilySummary:
    """Markdown summary of an extended family."""

    def __init__(
        self,
        family: ExtendedFamily,
        policy: EmptyBlockPolicy = EmptyBlockPolicy.NEVER,
    ):
        self.family = family
        self.policy = policy

    def generate(self) -> str:
        lines: list[str] = []
        deferred: list[str] = []
        name = self.family.display_name

        lines.append(f"# Extended family of {self.family.proband.label()}")
        lines.append("")

        for category, part in self.family.parts.items():
            # no parental family: ancestor parts are absent, not empty
            if isinstance(part, AncestorBucket) and not part.has_parents:
                continue

            sentence = count_sentence(name, category, part.counts)

            if part.is_empty:
                if self.policy == EmptyBlockPolicy.STANDARD:
                    lines.append(f"## {TERMS[category].title}")
                    lines.append("")
                    lines.append(sentence)
                    lines.append("")
                elif self.policy == EmptyBlockPolicy.END:
                    deferred.append(sentence)
                continue

            lines.append(f"## {TERMS[category].title}")
            lines.append("")
            lines.append(sentence)
            lines.append("")
            lines.extend(self._format_part(category, part))

        if deferred:
            lines.append("## Empty categories")
            lines.append("")
            lines.extend(f"- {sentence}" for sentence in deferred)
            lines.append("")

        if not self.family.parts:
            lines.append("*No categories selected*")
            lines.append("")
        elif self.family.is_empty:
            lines.append("*No family available*")
            lines.append("")

        return "\n".join(lines)

    def _format_part(self, category: Category, part: FamilyPart) -> list[str]:
        if isinstance(part, AncestorBucket):
            return self._format_ancestors(part)
        if isinstance(part, DescendantBucket):
            return self._format_descendants(category, part)
        return self._format_members(part.members())

    def _format_ancestors(self, bucket: AncestorBucket) -> list[str]:
        lines = []
        blocks = [
            ("Father's family", bucket.father_side),
            ("Mother's family", bucket.mother_side),
            ("Father's and Mother's family", bucket.both_sides),
        ]
        for heading, persons in blocks:
            if not persons:
                continue
            lines.append(f"### {heading} ({len(persons)})")
            lines.append("")
            lines.extend(self._format_members(persons))
        return lines

    def _format_descendants(self, category: Category, bucket: DescendantBucket) -> list[str]:
        lines = []
        for group in bucket.groups:
            lines.append(f"### {self._group_heading(category, group)} ({len(group.members)})")
            lines.append("")
            lines.extend(self._format_members(group.members))
        return lines

    def _group_heading(self, category: Category, group: DescendantGroup) -> str:
        """Family id; groups of the proband's parental families also get the role label."""
        heading = f"Family {group.union.gedcom_id or group.union.key}"
        if category in PARENTAL_FAMILY_CATEGORIES:
            label = self.family.role_labels.get(group.union.key)
            if label:
                heading = f"{heading}: {label}"
        return heading

    def _format_members(self, persons: list[Person]) -> list[str]:
        lines = [f"- {person.label()} ({person.sex})" for person in persons]
        lines.append("")
        return lines
