"""Tests for GEDCOM reading."""

from __future__ import annotations

from pathlib import Path

from extended_family.core.gedcom import (
    GedcomLine,
    GedcomManager,
    from_xref,
    parse_name,
    to_xref,
)
from extended_family.core.models import Pedigree
from extended_family.core.naming import display_name


class TestXref:
    """Tests for xref helpers."""

    def test_to_xref(self):
        assert to_xref("I1") == "@I1@"
        assert to_xref("@I1@") == "@I1@"

    def test_from_xref(self):
        assert from_xref("@F12@") == "F12"


class TestGedcomLine:
    """Tests for line parsing."""

    def test_record_line(self):
        line = GedcomLine.parse("0 @I1@ INDI")
        assert line.level == 0
        assert line.xref == "@I1@"
        assert line.tag == "INDI"
        assert line.value == ""

    def test_value_line(self):
        line = GedcomLine.parse("1 NAME Karl Heinz* /Mueller/")
        assert line.tag == "NAME"
        assert line.value == "Karl Heinz* /Mueller/"

    def test_blank_line(self):
        assert GedcomLine.parse("   ") is None


class TestParseName:
    """Tests for NAME structures."""

    def test_given_and_surname(self):
        name = parse_name("Karl Heinz* /Mueller/", [])
        assert name.given == "Karl Heinz*"
        assert name.surname == "Mueller"

    def test_subordinates(self):
        children = [
            GedcomLine(level=2, tag="NICK", value="Kalle"),
            GedcomLine(level=2, tag="_RUFNAME", value="Heinz"),
            GedcomLine(level=2, tag="SURN", value="Müller"),
        ]
        name = parse_name("Karl Heinz /Mueller/", children)
        assert name.nickname == "Kalle"
        assert name.called_by == "Heinz"
        assert name.surname == "Müller"

    def test_givn_without_marker_keeps_marker(self):
        """The called-by marker in the NAME value survives a plain GIVN."""
        children = [GedcomLine(level=2, tag="GIVN", value="Karl Heinz")]
        name = parse_name("Karl Heinz* /Mueller/", children)
        assert name.given == "Karl Heinz*"

    def test_givn_with_marker(self):
        children = [GedcomLine(level=2, tag="GIVN", value="Karl* Heinz")]
        name = parse_name("Karl Heinz* /Mueller/", children)
        assert name.given == "Karl* Heinz"

    def test_givn_replaces_plain_given(self):
        children = [GedcomLine(level=2, tag="GIVN", value="Carl")]
        assert parse_name("Karl /Mueller/", children).given == "Carl"

    def test_name_type(self):
        children = [GedcomLine(level=2, tag="TYPE", value="married")]
        assert parse_name("Anna /Weber/", children).name_type == "married"
        assert parse_name("Anna /Weber/", []).name_type == "birth"

    def test_married_name_listed_under_birth_name(self):
        manager = GedcomManager()
        manager.loads(
            "0 @I1@ INDI\n1 NAME Anna /Weber/\n2 TYPE married\n"
            "1 NAME Anna /Schmidt/\n2 TYPE birth\n1 SEX F\n"
        )
        assert manager.get_person("I1").label() == "Anna Schmidt"

    def test_no_surname(self):
        name = parse_name("Anna", [])
        assert name.given == "Anna"
        assert name.surname == ""


class TestGedcomManager:
    """Tests for GedcomManager class."""

    def test_load_gedcom(self, sample_gedcom_file: Path):
        manager = GedcomManager()
        manager.load(sample_gedcom_file)

        stats = manager.get_statistics()
        assert stats["individuals"] == 17
        assert stats["families"] == 7

    def test_get_person(self, gedcom_manager: GedcomManager):
        person = gedcom_manager.get_person("I4")
        assert person is not None
        assert person.id == "I4"
        assert person.gedcom_id == "@I4@"
        assert person.sex == "M"
        assert person.parent_family_ids == ["F1"]
        assert person.spouse_family_ids == ["F3", "F5"]
        assert person.first_name.given == "Karl Heinz*"

    def test_get_person_with_xref(self, gedcom_manager: GedcomManager):
        assert gedcom_manager.get_person("@I8@").key == "I8"

    def test_unknown_person(self, gedcom_manager: GedcomManager):
        assert gedcom_manager.get_person("I99") is None

    def test_pedigree(self, gedcom_manager: GedcomManager):
        child = gedcom_manager.get_person("I13")
        assert child.pedigrees == {"F6": Pedigree.ADOPTED}
        assert child.first_name.called_by == "Mimi"

    def test_called_by_marker_with_givn(self):
        manager = GedcomManager()
        manager.loads(
            "0 @I1@ INDI\n1 NAME Karl Heinz* /Mueller/\n2 GIVN Karl Heinz\n"
            "2 SURN Mueller\n1 SEX M\n"
        )
        assert display_name(manager.get_person("I1")) == "Heinz"

    def test_unknown_pedigree_ignored(self):
        manager = GedcomManager()
        manager.loads(
            "0 @I1@ INDI\n1 FAMC @F1@\n2 PEDI unknown\n"
            "0 @F1@ FAM\n1 CHIL @I1@\n"
        )
        assert manager.get_person("I1").pedigrees == {}

    def test_get_family(self, gedcom_manager: GedcomManager):
        family = gedcom_manager.get_family("F3")
        assert family.husband_id == "I4"
        assert family.wife_id == "I7"
        assert family.children_ids == ["I8", "I10"]

    def test_persons_in_file_order(self, gedcom_manager: GedcomManager):
        persons = gedcom_manager.persons()
        assert [p.key for p in persons[:3]] == ["I1", "I2", "I3"]
        assert len(gedcom_manager.families_list()) == 7

    def test_validate_sample(self, gedcom_manager: GedcomManager):
        assert gedcom_manager.validate() == []

    def test_validate_broken(self, broken_gedcom_content: str):
        manager = GedcomManager()
        manager.loads(broken_gedcom_content)

        issues = manager.validate()
        messages = [str(issue) for issue in issues]

        assert any("FAMC references non-existent family: @F9@" in m for m in messages)
        assert any("CHIL references non-existent individual: @I3@" in m for m in messages)
        assert any(m.startswith("WARNING: @I2@") for m in messages)
        assert len(manager.errors) == 2
        assert manager.get_statistics()["warnings"] == 1

    def test_duplicate_ids(self):
        manager = GedcomManager()
        manager.loads("0 @I1@ INDI\n1 SEX M\n0 @I1@ INDI\n1 SEX F\n")
        issues = manager.validate()
        assert [i.message for i in issues] == ["Duplicate ID: @I1@"]

    def test_find_person_by_name(self, gedcom_manager: GedcomManager):
        assert gedcom_manager.find_person_by_name(given="Lena") == ["@I8@"]
        assert len(gedcom_manager.find_person_by_name(surname="Wolf")) == 2
