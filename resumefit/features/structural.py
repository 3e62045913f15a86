from __future__ import annotations

import logging
import re
from typing import Any, Callable, Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from resumefit.core.config.scoring import get_scoring_value
from resumefit.schemas.candidate import CandidateType
from resumefit.schemas.resume import ResumeSections
from resumefit.schemas.suggestions import StructuralSuggestion

logger = logging.getLogger(__name__)


class StructuralInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    candidate_type: CandidateType
    sections: ResumeSections
    section_order: tuple[str, ...] = ()
    raw_resume_text: str | None = None

    def index_of(self, name: str) -> int:
        try:
            return self.section_order.index(name)
        except ValueError:
            return -1


StructuralRule = Callable[[StructuralInput], Optional[StructuralSuggestion]]


def _coop_experience_before_education(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop":
        return None
    experience, education = data.index_of("experience"), data.index_of("education")
    if experience == -1 or education == -1 or experience > education:
        return None
    return StructuralSuggestion(
        id="rule-coop-exp-before-edu",
        category="section_order",
        priority="warning",
        sections=("education", "experience"),
        message="For co-op/internship resumes, Education should come before Experience",
        current_state="Experience section appears before Education section",
        recommended_action=(
            "Move Education section above Experience. Co-op candidates benefit from showcasing "
            "their academic credentials before work history."
        ),
    )


def _coop_skills_not_first(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop":
        return None
    skills_missing = not data.sections.has("skills")
    skills_not_first = bool(data.section_order) and data.section_order[0] != "skills"
    if not (skills_missing or skills_not_first):
        return None
    return StructuralSuggestion(
        id="rule-coop-no-skills-at-top",
        category="section_presence",
        priority="critical",
        sections=("skills",),
        message="Co-op resumes must lead with Skills section",
        current_state="Skills section is missing" if skills_missing else "Skills section is not positioned first",
        recommended_action=(
            "Add or move Skills section to the top of your resume (right after header). This maximizes "
            "keyword density for ATS systems and immediately demonstrates your technical capabilities."
        ),
    )


def _coop_has_summary(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop" or not data.sections.has("summary"):
        return None
    return StructuralSuggestion(
        id="rule-coop-generic-summary",
        category="section_presence",
        priority="warning",
        sections=("summary",),
        message="Co-op resumes typically should not include a Professional Summary",
        current_state="Professional Summary section is present",
        recommended_action=(
            "Consider removing the summary to save space; co-op/internship resumes benefit from leading "
            "with Skills instead. Use the extra space for Projects or relevant coursework."
        ),
    )


def _coop_projects_heading(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "coop" or not data.sections.has("projects"):
        return None
    return StructuralSuggestion(
        id="rule-coop-projects-heading",
        category="section_heading",
        priority="suggestion",
        sections=("projects",),
        message='Use "Project Experience" heading instead of "Projects"',
        current_state='Section is likely titled "Projects"',
        recommended_action=(
            'Rename the section heading to "Project Experience" for better ATS recognition '
            "and professional presentation."
        ),
    )


def _fulltime_education_before_experience(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "fulltime":
        return None
    experience, education = data.index_of("experience"), data.index_of("education")
    if experience == -1 or education == -1 or education > experience:
        return None
    return StructuralSuggestion(
        id="rule-fulltime-edu-before-exp",
        category="section_order",
        priority="warning",
        sections=("experience", "education"),
        message="For full-time positions, Experience should come before Education",
        current_state="Education section appears before Experience section",
        recommended_action=(
            "Move Experience section above Education. Full-time candidates should emphasize "
            "professional experience over academic credentials."
        ),
    )


def _career_changer_missing_summary(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "career_changer" or data.sections.has("summary"):
        return None
    return StructuralSuggestion(
        id="rule-career-changer-no-summary",
        category="section_presence",
        priority="critical",
        sections=("summary",),
        message="Career changers must include a Professional Summary",
        current_state="Professional Summary section is missing",
        recommended_action=(
            "Add a Professional Summary at the top of your resume to explain your career transition and "
            "highlight transferable skills. This section is essential for career changers to frame your narrative."
        ),
    )


def _career_changer_education_after_experience(data: StructuralInput) -> StructuralSuggestion | None:
    if data.candidate_type != "career_changer":
        return None
    experience, education = data.index_of("experience"), data.index_of("education")
    if experience == -1 or education == -1 or education < experience:
        return None
    return StructuralSuggestion(
        id="rule-career-changer-edu-below-exp",
        category="section_order",
        priority="warning",
        sections=("education", "experience"),
        message="For career changers, Education should come before Experience",
        current_state="Education section appears after Experience section",
        recommended_action=(
            "Move Education section above Experience. Your degree is the pivot credential for your "
            "career change and should be prominently positioned."
        ),
    )


def find_non_standard_headings(raw_resume_text: str | None) -> list[tuple[str, str]]:
    """(heading, standard replacement) pairs for informal headings that sit on their own line."""
    if not raw_resume_text:
        return []
    lowered = raw_resume_text.lower()
    found: list[tuple[str, str]] = []
    for heading, standard in (get_scoring_value("section_order.unsafe_headers", {}) or {}).items():
        if re.search(rf"^\s*{re.escape(str(heading))}\s*:?\s*$", lowered, re.MULTILINE):
            found.append((str(heading), str(standard)))
    return found


def _non_standard_headings(data: StructuralInput) -> StructuralSuggestion | None:
    detected = find_non_standard_headings(data.raw_resume_text)
    if not detected:
        return None
    return StructuralSuggestion(
        id="rule-non-standard-headers",
        category="section_heading",
        priority="suggestion",
        sections=(),
        message="Non-standard section headings detected",
        current_state="Detected: " + ", ".join(f'"{heading}" → "{standard}"' for heading, standard in detected),
        recommended_action=(
            "Replace creative or informal section headings with standard ATS-friendly headers. "
            "This ensures proper categorization by applicant tracking systems."
        ),
    )


# Every rule is evaluated; output order follows this table.
STRUCTURAL_RULES: tuple[StructuralRule, ...] = (
    _coop_experience_before_education,
    _coop_skills_not_first,
    _coop_has_summary,
    _coop_projects_heading,
    _fulltime_education_before_experience,
    _career_changer_missing_summary,
    _career_changer_education_after_experience,
    _non_standard_headings,
)


def generate_structural_suggestions(
    candidate_type: CandidateType,
    parsed_resume_sections: ResumeSections | Mapping[str, Any] | None,
    section_order: Iterable[str] = (),
    raw_resume_text: str | None = None,
) -> list[StructuralSuggestion]:
    if parsed_resume_sections is None:
        sections = ResumeSections()
    elif isinstance(parsed_resume_sections, ResumeSections):
        sections = parsed_resume_sections
    else:
        sections = ResumeSections.model_validate(parsed_resume_sections)

    data = StructuralInput(
        candidate_type=candidate_type,
        sections=sections,
        section_order=tuple(str(name).strip().lower() for name in section_order),
        raw_resume_text=raw_resume_text,
    )
    suggestions: list[StructuralSuggestion] = []
    for rule in STRUCTURAL_RULES:
        suggestion = rule(data)
        if suggestion is not None:
            suggestions.append(suggestion)
    logger.debug(
        "structural_suggestions_generated candidate_type=%s rules=%s",
        candidate_type,
        [suggestion.id for suggestion in suggestions],
    )
    return suggestions
