from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

SectionName = Literal["summary", "skills", "experience", "education", "projects", "certifications"]
SECTION_NAMES: tuple[SectionName, ...] = (
    "summary",
    "skills",
    "experience",
    "education",
    "projects",
    "certifications",
)


class ResumeSections(BaseModel):
    """Parsed résumé sections as raw text. A missing or blank section is treated as absent."""

    model_config = ConfigDict(frozen=True)

    summary: str | None = None
    skills: str | None = None
    experience: str | None = None
    education: str | None = None
    projects: str | None = None
    certifications: str | None = None

    def get(self, name: str) -> str | None:
        value = getattr(self, name, None)
        if value is None or not str(value).strip():
            return None
        return str(value)

    def has(self, name: str) -> bool:
        return self.get(name) is not None

    def present_sections(self) -> list[str]:
        return [name for name in SECTION_NAMES if self.has(name)]
