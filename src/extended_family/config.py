"""Extended family settings.

Loads the enabled categories and the empty-block policy from YAML.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, field_validator

from extended_family.core.models import Category

DEFAULT_SETTINGS_PATH = Path(__file__).parent / "data" / "settings.yaml"


class EmptyBlockPolicy(str, Enum):
    """How the summary presents categories without members."""
    STANDARD = "standard"  # at the category's usual position
    END = "end"            # collected at the end of the summary
    NEVER = "never"


class ExtendedFamilyConfig(BaseModel):
    """Which categories to compute and how to present empty ones."""

    categories: dict[Category, bool] = Field(
        default_factory=lambda: {category: True for category in Category}
    )
    empty_block_policy: EmptyBlockPolicy = EmptyBlockPolicy.NEVER

    @field_validator("categories", mode="after")
    @classmethod
    def fill_missing_categories(cls, v: dict[Category, bool]) -> dict[Category, bool]:
        """Categories not mentioned are enabled."""
        return {category: v.get(category, True) for category in Category}

    @classmethod
    def from_yaml(cls, path: Path | str | None = None) -> ExtendedFamilyConfig:
        """Load settings from YAML, defaulting to the bundled settings.yaml."""
        if path is None:
            path = DEFAULT_SETTINGS_PATH
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.model_validate(data)

    @classmethod
    def only(cls, *categories: Category | str, **kwargs) -> ExtendedFamilyConfig:
        """Settings with just the given categories enabled."""
        wanted = {Category(c) for c in categories}
        return cls(categories={c: c in wanted for c in Category}, **kwargs)

    def is_enabled(self, category: Category) -> bool:
        return self.categories.get(category, False)

    def enabled_categories(self) -> list[Category]:
        """Enabled categories in display order."""
        return [category for category in Category if self.is_enabled(category)]
