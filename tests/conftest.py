"""Pytest configuration and shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from extended_family.core.gedcom import GedcomManager
from extended_family.core.graph import FamilyGraph
from extended_family.core.models import Family, Name, Pedigree, Person


# =============================================================================
# Synthetic Graph Builder
# =============================================================================

class TreeBuilder:
    """Builds small person/union graphs with consistent FAMC/FAMS links."""

    def __init__(self):
        self.persons: dict[str, Person] = {}
        self.families: list[Family] = []

    def person(self, pid: str, given: str = "", sex: str = "U", surname: str = "") -> Person:
        person = Person(id=pid, sex=sex)
        if given or surname:
            person.names.append(Name(given=given, surname=surname))
        self.persons[pid] = person
        return person

    def union(
        self,
        fid: str,
        husband: Person | None = None,
        wife: Person | None = None,
        children: tuple[Person, ...] = (),
        pedigree: Pedigree | None = None,
    ) -> Family:
        family = Family(
            id=fid,
            husband_id=husband.id if husband else None,
            wife_id=wife.id if wife else None,
            children_ids=[child.id for child in children],
        )
        for spouse in (husband, wife):
            if spouse is not None:
                spouse.spouse_family_ids.append(fid)
        for child in children:
            child.parent_family_ids.append(fid)
            if pedigree is not None:
                child.pedigrees[fid] = pedigree
        self.families.append(family)
        return family

    def graph(self) -> FamilyGraph:
        return FamilyGraph(self.persons.values(), self.families)


@pytest.fixture
def tree() -> TreeBuilder:
    """Empty tree builder."""
    return TreeBuilder()


# =============================================================================
# GEDCOM Fixtures
# =============================================================================

@pytest.fixture
def sample_gedcom_content() -> str:
    """
    Three generations around Lena Mueller (I8).

    Her paternal grandfather Johann remarried (half-uncle Otto), her father
    Karl remarried (half-brother Felix, step-mother Ute) and her mother has
    no parents recorded.
    """
    return """0 HEAD
1 SOUR TEST
1 GEDC
2 VERS 5.5.1
2 FORM LINEAGE-LINKED
1 CHAR UTF-8
0 @I1@ INDI
1 NAME Johann /Mueller/
1 SEX M
1 FAMS @F1@
1 FAMS @F2@
0 @I2@ INDI
1 NAME Anna /Schmidt/
1 SEX F
1 FAMS @F1@
0 @I3@ INDI
1 NAME Berta /Klein/
1 SEX F
1 FAMS @F2@
0 @I4@ INDI
1 NAME Karl Heinz* /Mueller/
1 SEX M
1 FAMC @F1@
1 FAMS @F3@
1 FAMS @F5@
0 @I5@ INDI
1 NAME Greta /Mueller/
1 SEX F
1 FAMC @F1@
1 FAMS @F4@
0 @I6@ INDI
1 NAME Otto /Mueller/
1 SEX M
1 FAMC @F2@
0 @I7@ INDI
1 NAME Maria /Weber/
2 NICK Mia
1 SEX F
1 FAMS @F3@
0 @I8@ INDI
1 NAME Lena /Mueller/
1 SEX F
1 FAMC @F3@
1 FAMS @F6@
0 @I9@ INDI
1 NAME Ute /Bauer/
1 SEX F
1 FAMS @F5@
0 @I10@ INDI
1 NAME Paul /Mueller/
1 SEX M
1 FAMC @F3@
1 FAMS @F7@
0 @I11@ INDI
1 NAME Felix /Mueller/
1 SEX M
1 FAMC @F5@
0 @I12@ INDI
1 NAME Tom /Fischer/
1 SEX M
1 FAMS @F6@
0 @I13@ INDI
1 NAME Mira /Fischer/
2 _RUFNAME Mimi
1 SEX F
1 FAMC @F6@
2 PEDI adopted
0 @I14@ INDI
1 NAME Hans /Wolf/
1 SEX M
1 FAMS @F4@
0 @I15@ INDI
1 NAME Jonas /Wolf/
1 SEX M
1 FAMC @F4@
0 @I16@ INDI
1 NAME Eva /Roth/
1 SEX F
1 FAMS @F7@
0 @I17@ INDI
1 NAME Noah /Mueller/
1 SEX M
1 FAMC @F7@
0 @F1@ FAM
1 HUSB @I1@
1 WIFE @I2@
1 CHIL @I4@
1 CHIL @I5@
0 @F2@ FAM
1 HUSB @I1@
1 WIFE @I3@
1 CHIL @I6@
0 @F3@ FAM
1 HUSB @I4@
1 WIFE @I7@
1 CHIL @I8@
1 CHIL @I10@
0 @F4@ FAM
1 HUSB @I14@
1 WIFE @I5@
1 CHIL @I15@
0 @F5@ FAM
1 HUSB @I4@
1 WIFE @I9@
1 CHIL @I11@
0 @F6@ FAM
1 HUSB @I12@
1 WIFE @I8@
1 CHIL @I13@
0 @F7@ FAM
1 HUSB @I10@
1 WIFE @I16@
1 CHIL @I17@
0 TRLR
"""


@pytest.fixture
def broken_gedcom_content() -> str:
    """GEDCOM with dangling and one-sided links."""
    return """0 HEAD
1 CHAR UTF-8
0 @I1@ INDI
1 NAME John /Smith/
1 SEX M
1 FAMS @F1@
1 FAMC @F9@
0 @I2@ INDI
1 NAME Jane /Doe/
1 SEX F
1 FAMC @F1@
0 @F1@ FAM
1 HUSB @I1@
1 CHIL @I3@
0 TRLR
"""


@pytest.fixture
def sample_gedcom_file(tmp_path: Path, sample_gedcom_content: str) -> Path:
    """Write the sample GEDCOM to a temporary file."""
    gedcom_file = tmp_path / "family.ged"
    gedcom_file.write_text(sample_gedcom_content, encoding="utf-8")
    return gedcom_file


@pytest.fixture
def broken_gedcom_file(tmp_path: Path, broken_gedcom_content: str) -> Path:
    gedcom_file = tmp_path / "broken.ged"
    gedcom_file.write_text(broken_gedcom_content, encoding="utf-8")
    return gedcom_file


@pytest.fixture
def gedcom_manager(sample_gedcom_content: str) -> GedcomManager:
    manager = GedcomManager()
    manager.loads(sample_gedcom_content)
    return manager


@pytest.fixture
def sample_graph(gedcom_manager: GedcomManager) -> FamilyGraph:
    """Family graph of the sample GEDCOM."""
    return FamilyGraph.from_gedcom(gedcom_manager)
