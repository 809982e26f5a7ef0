"""Stage B: Deterministic normalization of extracted resume fields into a CanonicalCandidate."""

import math

from src.errors import MalformedInputError
from src.models import (
    CandidateName,
    CanonicalCandidate,
    DateRange,
    Education,
    Skill,
    WorkExperience,
)


def _text(value) -> str:
    """Coerce to a stripped string; None and non-scalars become ''."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    return str(value).strip()


def _as_list(value) -> list:
    """Single values become one-element lists; None becomes []."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def _years(value) -> float:
    """Non-negative finite float; anything unparseable is 0."""
    if isinstance(value, bool):
        return 0.0
    try:
        years = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(years) or years < 0:
        return 0.0
    return years


def _flag(value) -> bool:
    """Booleans pass through; strings count only when they spell a true value."""
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return value is True or (isinstance(value, (int, float)) and value == 1)


def _contacts(value) -> list[str]:
    """Ordered, non-empty contact strings. Dict entries may carry the value under 'value'."""
    out = []
    for item in _as_list(value):
        if isinstance(item, dict):
            item = item.get("value") or item.get("raw")
        text = _text(item)
        if text:
            out.append(text)
    return out


def _work_experience(value) -> list[WorkExperience]:
    jobs = []
    for job in _as_list(value):
        job = _mapping(job)
        if not job:
            continue
        dates = _mapping(job.get("dates"))
        end = _text(dates.get("endDate")) or None
        jobs.append(WorkExperience(
            title=_text(job.get("jobTitle")),
            organization=_text(job.get("organization")),
            date_range=DateRange(
                start=_text(dates.get("startDate")),
                end=end,
                is_current=_flag(dates.get("isCurrent")),
            ),
            description=_text(job.get("jobDescription")),
        ))
    return jobs


def _education(value) -> list[Education]:
    entries = []
    for edu in _as_list(value):
        edu = _mapping(edu)
        if not edu:
            continue
        accreditation = _mapping(edu.get("accreditation"))
        entries.append(Education(
            accreditation=_text(accreditation.get("education")),
            level=_text(accreditation.get("educationLevel")),
        ))
    return entries


def _skills(value) -> list[Skill]:
    """Dedupe by exact name preserving first occurrence. Empty names are kept."""
    seen: set[str] = set()
    skills = []
    for item in _as_list(value):
        name = _text(item.get("name")) if isinstance(item, dict) else _text(item)
        if name in seen:
            continue
        seen.add(name)
        skills.append(Skill(name=name))
    return skills


def normalize_candidate(raw: dict) -> CanonicalCandidate:
    """
    Map raw extraction output to the canonical candidate shape.
    - Missing optional fields get type-appropriate defaults ('', [], 0)
    - Scalar emails/phones become one-element lists; first entry is primary
    - Years of experience coerced to a non-negative number
    Raises MalformedInputError only if both name parts are absent.
    """
    if not isinstance(raw, dict):
        raise MalformedInputError(f"Extraction output must be an object, got {type(raw).__name__}")

    name = _mapping(raw.get("candidateName"))
    first = _text(name.get("firstName"))
    family = _text(name.get("familyName"))
    if not first and not family:
        raise MalformedInputError("Candidate name missing: neither first nor family name was extracted")

    return CanonicalCandidate(
        name=CandidateName(first=first, family=family),
        emails=_contacts(raw.get("email")),
        phones=_contacts(raw.get("phoneNumber")),
        summary=_text(raw.get("summary")),
        total_years_experience=_years(raw.get("totalYearsExperience")),
        work_experience=_work_experience(raw.get("workExperience")),
        education=_education(raw.get("education")),
        skills=_skills(raw.get("skills")),
    )
