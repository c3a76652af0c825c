"""Manifest models — the validated shape of a package dependency document.

A manifest is a JSON object with a single ``packages`` list; each entry
names a package and its direct dependencies::

    {"packages": [{"name": "A", "dependencies": ["B", "C"]}]}
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class PackageEntry(BaseModel):
    """One ``packages[]`` entry."""

    model_config = {"frozen": True}

    name: str
    dependencies: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, value: str) -> str:
        if not value.strip():
            msg = "Package name must not be empty"
            raise ValueError(msg)
        return value

    @field_validator("dependencies")
    @classmethod
    def _dependencies_not_blank(cls, value: list[str]) -> list[str]:
        for dep in value:
            if not dep.strip():
                msg = "Dependency names must not be empty"
                raise ValueError(msg)
        return value


class PackageManifest(BaseModel):
    """Top-level manifest document."""

    model_config = {"frozen": True}

    packages: list[PackageEntry] = Field(default_factory=list)

    def as_mapping(self) -> dict[str, list[str]]:
        """Return ``{name: [dependencies]}`` in document order.

        A package listed twice keeps its first position; the dependency
        lists of both entries are concatenated.
        """
        mapping: dict[str, list[str]] = {}
        for entry in self.packages:
            mapping.setdefault(entry.name, []).extend(entry.dependencies)
        return mapping
