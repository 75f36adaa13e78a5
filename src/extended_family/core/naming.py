"""
Short display names and family role labels.

display_name picks the name a relative would use when talking about the
person, falling back through nickname, called-by name, first given name,
an honorific with the surname, and finally a pronoun.
"""

from __future__ import annotations

from typing import Mapping

from extended_family.core.graph import FamilyGraph
from extended_family.core.models import Family, Name, Pedigree, Person

CALLED_BY_MARKER = "*"

HONORIFICS = {"M": "Mr.", "F": "Mrs."}
PRONOUNS = {"M": "He", "F": "She", "U": "He or she"}

# PEDI code -> label by sex (M, F, U)
PEDIGREE_LABELS: dict[Pedigree, dict[str, str]] = {
    Pedigree.BIRTH: {"M": "Birth", "F": "Birth", "U": "Birth"},
    Pedigree.ADOPTED: {"M": "Adopted son", "F": "Adopted daughter", "U": "Adopted child"},
    Pedigree.FOSTER: {"M": "Foster son", "F": "Foster daughter", "U": "Foster child"},
    Pedigree.SEALING: {"M": "Sealed son", "F": "Sealed daughter", "U": "Sealed child"},
    Pedigree.RADA: {"M": "Rada son", "F": "Rada daughter", "U": "Rada child"},
}


def called_by_name(name: Name) -> str:
    """
    The customary given name, or "" if none is recorded.

    An explicit called_by value wins. Otherwise the given names are
    searched for the marker and the given name written immediately
    before it is used: "Karl Heinz* Otto" -> "Heinz".
    """
    if name.called_by and name.called_by.strip():
        return name.called_by.strip()
    if CALLED_BY_MARKER not in name.given:
        return ""
    before_marker = name.given.split(CALLED_BY_MARKER, 1)[0].split()
    return before_marker[-1] if before_marker else ""


def display_name(person: Person) -> str:
    """Short, friendly name for a person. Only the first name record is used."""
    sex = person.sex if person.sex in ("M", "F") else "U"
    name = person.first_name
    if name is None:
        return PRONOUNS[sex]

    if name.nickname and name.nickname.strip():
        return name.nickname.strip()

    called_by = called_by_name(name)
    if called_by:
        return called_by

    given = name.given_names()
    if given:
        return given[0]

    surname = name.surname.strip()
    if surname:
        honorific = HONORIFICS.get(sex)
        return f"{honorific} {surname}" if honorific else surname

    return PRONOUNS[sex]


def family_role_label(
    graph: FamilyGraph,
    person: Person,
    labels: Mapping[Pedigree, Mapping[str, str]] | None = None,
    union: Family | None = None,
) -> str:
    """
    Label for how the person entered a parental family, by default the first.

    The pedigree defaults to birth when none is recorded or the person has
    no parental family at all.
    """
    labels = PEDIGREE_LABELS if labels is None else labels
    if union is None:
        union = graph.parental_union_of(person)
    pedigree = graph.pedigree_of(person, union) if union is not None else None
    if pedigree is None:
        pedigree = Pedigree.BIRTH

    by_sex = labels.get(pedigree) or labels.get(Pedigree.BIRTH, {})
    sex = person.sex if person.sex in ("M", "F") else "U"
    return by_sex.get(sex, by_sex.get("U", pedigree.value))
