"""
Core data models for extended family computation.

These models mirror the GEDCOM lineage-linked structure:
- Individuals with name records and sex
- Families (unions) linking up to two partners and their children
- Pedigree codes describing how a child entered a family
"""

from __future__ import annotations

from enum import Enum
from typing import Literal
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator, AliasChoices


class Side(str, Enum):
    """Lineage side used for ancestor-oriented categories."""
    FATHER = "father"
    MOTHER = "mother"

    @property
    def other(self) -> Side:
        return Side.MOTHER if self is Side.FATHER else Side.FATHER


class Category(str, Enum):
    """The nine parts of the extended family, in display order."""
    GRANDPARENTS = "grandparents"              # generation +2
    PARENTS = "parents"                        # generation +1
    UNCLES_AND_AUNTS = "uncles_and_aunts"      # generation +1
    SIBLINGS = "siblings"                      # generation  0
    PARTNERS = "partners"                      # generation  0
    COUSINS = "cousins"                        # generation  0
    NEPHEWS_AND_NIECES = "nephews_and_nieces"  # generation -1
    CHILDREN = "children"                      # generation -1
    GRANDCHILDREN = "grandchildren"            # generation -2

    @property
    def is_ancestor_oriented(self) -> bool:
        """Whether results are attributed to the father's or mother's side."""
        return self in ANCESTOR_CATEGORIES


ANCESTOR_CATEGORIES = frozenset({
    Category.GRANDPARENTS,
    Category.PARENTS,
    Category.UNCLES_AND_AUNTS,
    Category.COUSINS,
})


class Pedigree(str, Enum):
    """GEDCOM PEDI codes for a child-to-family link."""
    BIRTH = "birth"
    ADOPTED = "adopted"
    FOSTER = "foster"
    SEALING = "sealing"
    RADA = "rada"


def _coerce_id(v):
    """Accept string IDs, converting to UUID where possible."""
    if isinstance(v, str):
        try:
            return UUID(v)
        except ValueError:
            return v
    return v


class Name(BaseModel):
    """
    A single name record of a person.

    `given` may carry a called-by marker (`*`) after the customary name,
    e.g. "Karl Heinz* Otto". `called_by` holds an explicit GEDCOM
    _RUFNAME value when one was recorded.
    """
    given: str = ""
    surname: str = ""
    suffix: str | None = None
    prefix: str | None = None
    nickname: str | None = None
    called_by: str | None = Field(
        default=None,
        validation_alias=AliasChoices("called_by", "rufname")
    )

    name_type: Literal["birth", "married", "adopted", "alias", "immigrant"] = "birth"

    model_config = ConfigDict(populate_by_name=True)

    def given_names(self) -> list[str]:
        """Given names in recorded order, without called-by markers."""
        return self.given.replace("*", " ").split()

    def full_name(self) -> str:
        """Return full name string.

        Format: Given [Nickname] [Prefix] SURNAME [Suffix]
        """
        parts = list(self.given_names())
        if self.nickname:
            parts.append(f'"{self.nickname}"')
        if self.prefix:
            parts.append(self.prefix)
        if self.surname:
            parts.append(self.surname)
        if self.suffix:
            parts.append(self.suffix)
        return " ".join(parts)


class Person(BaseModel):
    """
    Individual person in the record graph.

    Family links follow GEDCOM: FAMC entries are `parent_family_ids`,
    FAMS entries are `spouse_family_ids`.
    """
    id: UUID | str = Field(default_factory=uuid4)
    gedcom_id: str | None = None  # @I###@ format

    names: list[Name] = Field(default_factory=list)
    sex: Literal["M", "F", "U"] = "U"

    parent_family_ids: list[UUID | str] = Field(default_factory=list)  # FAMC
    spouse_family_ids: list[UUID | str] = Field(default_factory=list)  # FAMS

    # PEDI per parental family; a missing entry means birth
    pedigrees: dict[str, Pedigree] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def validate_id(cls, v):
        return _coerce_id(v)

    @field_validator("parent_family_ids", "spouse_family_ids", mode="before")
    @classmethod
    def validate_family_ids(cls, v):
        if not v:
            return []
        return [_coerce_id(item) for item in v]

    @field_validator("sex", mode="before")
    @classmethod
    def validate_sex(cls, v):
        """Anything other than M or F is recorded as unknown."""
        if v is None:
            return "U"
        v = str(v).upper()
        return v if v in ("M", "F") else "U"

    @property
    def key(self) -> str:
        """Stable comparable identity."""
        return str(self.id)

    @property
    def first_name(self) -> Name | None:
        """The first recorded name record."""
        return self.names[0] if self.names else None

    @property
    def primary_name(self) -> Name | None:
        """Get the primary (birth) name."""
        for name in self.names:
            if name.name_type == "birth":
                return name
        return self.first_name

    def label(self) -> str:
        """Full name for listings, falling back to the record id."""
        name = self.primary_name
        if name and name.full_name():
            return name.full_name()
        return self.gedcom_id or self.key


class Family(BaseModel):
    """
    Family unit (union) linking partners and their children.

    A union may record zero, one or two partners and any number of children.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: UUID | str = Field(default_factory=uuid4)
    gedcom_id: str | None = None  # @F###@ format

    # Partners: husband is the father role, wife the mother role
    husband_id: UUID | str | None = None
    wife_id: UUID | str | None = None

    children_ids: list[UUID | str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("children_ids", "child_ids")
    )

    @field_validator("id", "husband_id", "wife_id", mode="before")
    @classmethod
    def validate_ids(cls, v):
        if v is None:
            return v
        return _coerce_id(v)

    @field_validator("children_ids", mode="before")
    @classmethod
    def validate_children_ids(cls, v):
        if not v:
            return []
        return [_coerce_id(item) for item in v]

    @property
    def key(self) -> str:
        """Stable comparable identity."""
        return str(self.id)

    @property
    def spouse_ids(self) -> list[UUID | str]:
        """Partner ids, father role first."""
        return [pid for pid in (self.husband_id, self.wife_id) if pid is not None]
