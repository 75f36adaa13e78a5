"""
GEDCOM 5.5.1 reading for the extended family record store.

Handles:
- Reading and parsing GEDCOM files or strings
- Converting INDI/FAM records into Person and Family models
- Cross-reference validation (FAMC/FAMS, CHIL/HUSB/WIFE)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Iterator

from extended_family.core.models import Family, Name, Pedigree, Person

logger = logging.getLogger(__name__)


def to_xref(record_id: str) -> str:
    """Normalize "I1" or "@I1@" to the "@I1@" form."""
    record_id = record_id.strip()
    if record_id.startswith("@") and record_id.endswith("@"):
        return record_id
    return f"@{record_id.strip('@')}@"


def from_xref(xref: str) -> str:
    """Strip the @ delimiters: "@I1@" -> "I1"."""
    return xref.strip().strip("@")


@dataclass
class GedcomLine:
    """A single parsed GEDCOM line."""
    level: int
    tag: str
    value: str = ""
    xref: str | None = None  # @I123@ style ID

    @classmethod
    def parse(cls, line: str) -> GedcomLine | None:
        """Parse a GEDCOM line."""
        line = line.strip()
        if not line:
            return None

        # Pattern: level [xref] tag [value]
        # Examples:
        #   0 @I1@ INDI
        #   1 NAME John /Smith/
        #   2 PEDI adopted
        match = re.match(
            r'^(\d+)\s+(?:(@[^@]+@)\s+)?(\S+)(?:\s+(.*))?$',
            line
        )
        if not match:
            return None

        return cls(
            level=int(match.group(1)),
            tag=match.group(3),
            value=match.group(4) or "",
            xref=match.group(2),
        )


@dataclass
class GedcomRecord:
    """A complete GEDCOM record (level 0 + subordinates)."""
    id: str | None  # @I123@ style
    tag: str  # INDI, FAM, ...
    lines: list[GedcomLine] = field(default_factory=list)

    def get_all_values(self, tag: str) -> list[str]:
        """Values of all level 1 lines with this tag."""
        return [line.value for line in self.lines[1:] if line.level == 1 and line.tag == tag]

    def structures(self, tag: str) -> Iterator[tuple[GedcomLine, list[GedcomLine]]]:
        """Yield each level 1 `tag` line with its subordinate lines."""
        body = self.lines[1:]
        for idx, line in enumerate(body):
            if line.level != 1 or line.tag != tag:
                continue
            children = []
            for sub in body[idx + 1:]:
                if sub.level <= line.level:
                    break
                children.append(sub)
            yield line, children


@dataclass
class GedcomValidationError:
    """Validation problem in a GEDCOM file."""
    severity: str  # "error", "warning"
    record_id: str | None
    message: str

    def __str__(self) -> str:
        return f"{self.severity.upper()}: {self.record_id or '-'}: {self.message}"


# NAME TYPE values -> Name.name_type; anything else is read as birth
NAME_TYPES = {
    "birth": "birth",
    "maiden": "birth",
    "married": "married",
    "adopted": "adopted",
    "aka": "alias",
    "immigrant": "immigrant",
}


def _sub_value(children: Iterable[GedcomLine], tag: str) -> str | None:
    """First value of a level 2 subordinate tag."""
    for sub in children:
        if sub.level == 2 and sub.tag == tag:
            return sub.value
    return None


def parse_name(value: str, children: list[GedcomLine]) -> Name:
    """Build a Name from a NAME line and its subordinates.

    GIVN/SURN subordinates win over the "Given /Surname/" value, except
    that a GIVN without the called-by marker (`*`) does not replace given
    names that carry one.
    """
    given, surname = value, ""
    match = re.match(r'^([^/]*)/([^/]*)/?(.*)$', value)
    if match:
        given = match.group(1)
        surname = match.group(2)

    givn = _sub_value(children, "GIVN")
    if givn and ("*" in givn or "*" not in given):
        given = givn
    surname = _sub_value(children, "SURN") or surname

    name_type = NAME_TYPES.get((_sub_value(children, "TYPE") or "").lower(), "birth")

    return Name(
        name_type=name_type,
        given=given.strip(),
        surname=surname.strip(),
        nickname=_sub_value(children, "NICK") or None,
        called_by=_sub_value(children, "_RUFNAME") or None,
        prefix=_sub_value(children, "NPFX") or None,
        suffix=_sub_value(children, "NSFX") or None,
    )


class GedcomManager:
    """
    GEDCOM record store.

    Reads a GEDCOM file into indexed records and converts them into the
    Person and Family models navigated by the family graph.
    """

    def __init__(self):
        self.records: dict[str, GedcomRecord] = {}
        self.header: GedcomRecord | None = None

        # Indexes for fast lookup
        self.individuals: dict[str, GedcomRecord] = {}
        self.families: dict[str, GedcomRecord] = {}

        self.errors: list[GedcomValidationError] = []
        self.warnings: list[GedcomValidationError] = []

        self._duplicate_ids: list[str] = []

    def load(self, path: str | Path) -> None:
        """Load a GEDCOM file."""
        path = Path(path)
        with path.open("r", encoding="utf-8-sig") as f:
            self._parse(f)
        self._build_indexes()
        logger.info(
            "Loaded %s: %d individuals, %d families",
            path, len(self.individuals), len(self.families),
        )

    def loads(self, content: str) -> None:
        """Load GEDCOM content from a string."""
        self._parse(content.splitlines())
        self._build_indexes()

    def _parse(self, lines: Iterable[str]) -> None:
        """Parse GEDCOM content."""
        current_record: GedcomRecord | None = None

        for line in lines:
            parsed = GedcomLine.parse(line)
            if not parsed:
                continue

            if parsed.level == 0:
                if current_record:
                    self._store(current_record)

                current_record = GedcomRecord(
                    id=parsed.xref,
                    tag=parsed.tag,
                    lines=[parsed],
                )
                if parsed.tag == "HEAD":
                    self.header = current_record

            elif current_record:
                current_record.lines.append(parsed)

        if current_record:
            self._store(current_record)

    def _store(self, record: GedcomRecord) -> None:
        key = record.id or record.tag
        if record.id and key in self.records:
            self._duplicate_ids.append(key)
        self.records[key] = record

    def _build_indexes(self) -> None:
        """Build indexes by record type."""
        for key, record in self.records.items():
            if record.tag == "INDI":
                self.individuals[key] = record
            elif record.tag == "FAM":
                self.families[key] = record

    def validate(self) -> list[GedcomValidationError]:
        """
        Validate cross references.

        Checks:
        - ID uniqueness
        - FAMC/FAMS point to existing families
        - HUSB/WIFE/CHIL point to existing individuals
        - FAMC and CHIL are reciprocal
        """
        self.errors = []
        self.warnings = []

        for dup in self._duplicate_ids:
            self.errors.append(GedcomValidationError("error", dup, f"Duplicate ID: {dup}"))

        for indi_id, indi in self.individuals.items():
            for fam_ref in indi.get_all_values("FAMC"):
                family = self.families.get(fam_ref)
                if family is None:
                    self.errors.append(GedcomValidationError(
                        "error", indi_id, f"FAMC references non-existent family: {fam_ref}",
                    ))
                elif indi_id not in family.get_all_values("CHIL"):
                    self.warnings.append(GedcomValidationError(
                        "warning", indi_id, f"FAMC {fam_ref} does not list this person as CHIL",
                    ))
            for fam_ref in indi.get_all_values("FAMS"):
                if fam_ref not in self.families:
                    self.errors.append(GedcomValidationError(
                        "error", indi_id, f"FAMS references non-existent family: {fam_ref}",
                    ))

        for fam_id, fam in self.families.items():
            for spouse_ref in fam.get_all_values("HUSB") + fam.get_all_values("WIFE"):
                if spouse_ref not in self.individuals:
                    self.errors.append(GedcomValidationError(
                        "error", fam_id, f"Spouse references non-existent individual: {spouse_ref}",
                    ))
            for child_ref in fam.get_all_values("CHIL"):
                if child_ref not in self.individuals:
                    self.errors.append(GedcomValidationError(
                        "error", fam_id, f"CHIL references non-existent individual: {child_ref}",
                    ))

        return self.errors + self.warnings

    def get_person(self, person_id: str) -> Person | None:
        """Convert a GEDCOM individual to a Person model."""
        xref = to_xref(person_id)
        record = self.individuals.get(xref)
        if not record:
            return None

        sex_values = record.get_all_values("SEX")
        person = Person(
            id=from_xref(xref),
            gedcom_id=xref,
            sex=sex_values[0] if sex_values else "U",
        )

        for line, children in record.structures("NAME"):
            person.names.append(parse_name(line.value, children))

        for line, children in record.structures("FAMC"):
            fam_id = from_xref(line.value)
            person.parent_family_ids.append(fam_id)
            pedi = (_sub_value(children, "PEDI") or "").lower()
            if pedi:
                try:
                    person.pedigrees[fam_id] = Pedigree(pedi)
                except ValueError:
                    logger.debug("Ignoring unknown PEDI %r on %s", pedi, xref)

        person.spouse_family_ids = [from_xref(v) for v in record.get_all_values("FAMS")]

        return person

    def get_family(self, family_id: str) -> Family | None:
        """Convert a GEDCOM family to a Family model."""
        xref = to_xref(family_id)
        record = self.families.get(xref)
        if not record:
            return None

        husb = record.get_all_values("HUSB")
        wife = record.get_all_values("WIFE")

        return Family(
            id=from_xref(xref),
            gedcom_id=xref,
            husband_id=from_xref(husb[0]) if husb else None,
            wife_id=from_xref(wife[0]) if wife else None,
            children_ids=[from_xref(c) for c in record.get_all_values("CHIL")],
        )

    def persons(self) -> list[Person]:
        """All individuals as Person models, in file order."""
        return [p for p in (self.get_person(key) for key in self.individuals) if p]

    def families_list(self) -> list[Family]:
        """All families as Family models, in file order."""
        return [f for f in (self.get_family(key) for key in self.families) if f]

    def get_statistics(self) -> dict:
        """Get GEDCOM file statistics."""
        return {
            "individuals": len(self.individuals),
            "families": len(self.families),
            "total_records": len(self.records),
            "errors": len(self.errors),
            "warnings": len(self.warnings),
        }

    def find_person_by_name(
        self,
        given: str | None = None,
        surname: str | None = None,
    ) -> list[str]:
        """Find individuals by name, returning their xrefs."""
        results = []

        for indi_id, record in self.individuals.items():
            for name in record.get_all_values("NAME"):
                match_given = given is None or given.lower() in name.lower()
                match_surname = surname is None or surname.lower() in name.lower()
                if match_given and match_surname:
                    results.append(indi_id)
                    break

        return results
