"""
Package catalog — what gets installed, per category and per variant.

The catalog is loaded from ``core/data/packages.yml``. Base names are
written once; each variant may replace a name or omit it entirely via
the override map, which is resolved ONCE into a PackageRequestSet.

Override scopes:
    all       → applies to every variant
    <variant> → applies to that variant only, wins over ``all``

An override value of ``null`` omits the package (it is built from
source or provided some other way).
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

from debsetup.core.models.variant import Variant

# Install order of the categories during a run
CATEGORIES: tuple[str, ...] = ("general", "apps", "tools", "distro", "hyprland")

ALL_VARIANTS = "all"


def dedupe(names: list[str]) -> list[str]:
    """Drop repeated names, keeping the first occurrence."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        if name in seen:
            continue
        seen.add(name)
        result.append(name)
    return result


class PackageRequestSet(BaseModel):
    """Final, variant-resolved package names per category."""

    variant: Variant
    categories: dict[str, list[str]] = Field(default_factory=dict)

    def get(self, category: str) -> list[str]:
        """Packages of one category (empty if the category is unknown)."""
        return list(self.categories.get(category, []))

    def all_packages(self) -> list[str]:
        """Every package across categories, in install order."""
        names: list[str] = []
        for category in CATEGORIES:
            names.extend(self.get(category))
        return dedupe(names)

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.categories.values())


class PackageCatalog(BaseModel):
    """Declarative package lists plus per-variant overrides."""

    categories: dict[str, list[str]] = Field(default_factory=dict)
    overrides: dict[str, dict[str, str | None]] = Field(default_factory=dict)

    @field_validator("categories")
    @classmethod
    def _known_categories(cls, value: dict[str, list[str]]) -> dict[str, list[str]]:
        unknown = sorted(set(value) - set(CATEGORIES))
        if unknown:
            raise ValueError(f"unknown package categories: {', '.join(unknown)}")
        return value

    @field_validator("overrides")
    @classmethod
    def _known_scopes(
        cls, value: dict[str, dict[str, str | None]]
    ) -> dict[str, dict[str, str | None]]:
        allowed = {ALL_VARIANTS} | {v.value for v in Variant}
        unknown = sorted(set(value) - allowed)
        if unknown:
            raise ValueError(f"unknown override scopes: {', '.join(unknown)}")
        return value

    def overrides_for(self, variant: Variant) -> dict[str, str | None]:
        """Merged override map for one variant."""
        merged = dict(self.overrides.get(ALL_VARIANTS, {}))
        merged.update(self.overrides.get(variant.value, {}))
        return merged

    def resolve(
        self,
        variant: Variant,
        extra: dict[str, list[str]] | None = None,
    ) -> PackageRequestSet:
        """Apply overrides/omissions and return the final request set.

        Args:
            variant: The detected distribution variant.
            extra: Additional names per category (from setup.yml). These
                go through the same override map as the base names.
        """
        mapping = self.overrides_for(variant)
        resolved: dict[str, list[str]] = {}

        for category in CATEGORIES:
            names = list(self.categories.get(category, []))
            if extra:
                names.extend(extra.get(category, []))

            final: list[str] = []
            for name in names:
                if name in mapping:
                    replacement = mapping[name]
                    if replacement is None:
                        continue
                    final.append(replacement)
                else:
                    final.append(name)
            resolved[category] = dedupe(final)

        return PackageRequestSet(variant=variant, categories=resolved)
