"""Candidate, evaluation and record shapes shared by every pipeline stage.

Wire names (``to_dict``/``from_dict``) are camelCase because they are what the
dashboard reads and what is stored in the JSON blobs of the candidates table.
"""

from dataclasses import dataclass, field

STAGE_NEW = "new"
STAGE_REVIEWING = "reviewing"
STAGE_DECISION = "decision"
STAGES = (STAGE_NEW, STAGE_REVIEWING, STAGE_DECISION)
INITIAL_STAGE = STAGE_NEW
STAGE_TITLES = {
    STAGE_NEW: "New Applications",
    STAGE_REVIEWING: "Under Review",
    STAGE_DECISION: "Decision Stage",
}

RECOMMENDATIONS = ("strong", "moderate", "weak")


@dataclass(frozen=True)
class CandidateName:
    first: str = ""
    family: str = ""

    @property
    def full(self) -> str:
        return " ".join(p for p in (self.first, self.family) if p)


@dataclass(frozen=True)
class DateRange:
    start: str = ""
    end: str | None = None
    is_current: bool = False


@dataclass(frozen=True)
class WorkExperience:
    title: str = ""
    organization: str = ""
    date_range: DateRange = field(default_factory=DateRange)
    description: str = ""


@dataclass(frozen=True)
class Education:
    accreditation: str = ""
    level: str = ""


@dataclass(frozen=True)
class Skill:
    name: str = ""


@dataclass(frozen=True)
class CanonicalCandidate:
    name: CandidateName
    emails: list[str] = field(default_factory=list)
    phones: list[str] = field(default_factory=list)
    summary: str = ""
    total_years_experience: float = 0.0
    work_experience: list[WorkExperience] = field(default_factory=list)
    education: list[Education] = field(default_factory=list)
    skills: list[Skill] = field(default_factory=list)

    @property
    def primary_email(self) -> str:
        return self.emails[0] if self.emails else ""

    @property
    def primary_phone(self) -> str:
        return self.phones[0] if self.phones else ""

    def display_skills(self) -> list[str]:
        """Skill names for display; empty names are dropped here, not at storage time."""
        return [s.name for s in self.skills if s.name.strip()]

    def to_dict(self) -> dict:
        return {
            "name": {"first": self.name.first, "family": self.name.family},
            "emails": list(self.emails),
            "phones": list(self.phones),
            "summary": self.summary,
            "totalYearsExperience": self.total_years_experience,
            "workExperience": [
                {
                    "title": w.title,
                    "organization": w.organization,
                    "dateRange": {
                        "start": w.date_range.start,
                        "end": w.date_range.end,
                        "isCurrent": w.date_range.is_current,
                    },
                    "description": w.description,
                }
                for w in self.work_experience
            ],
            "education": [{"accreditation": e.accreditation, "level": e.level} for e in self.education],
            "skills": [{"name": s.name} for s in self.skills],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CanonicalCandidate":
        """Rebuild from the stored blob. Blob was written by to_dict, so keys are trusted."""
        name = data.get("name") or {}
        return cls(
            name=CandidateName(first=name.get("first", ""), family=name.get("family", "")),
            emails=list(data.get("emails") or []),
            phones=list(data.get("phones") or []),
            summary=data.get("summary", ""),
            total_years_experience=data.get("totalYearsExperience", 0.0),
            work_experience=[
                WorkExperience(
                    title=w.get("title", ""),
                    organization=w.get("organization", ""),
                    date_range=DateRange(
                        start=(w.get("dateRange") or {}).get("start", ""),
                        end=(w.get("dateRange") or {}).get("end"),
                        is_current=bool((w.get("dateRange") or {}).get("isCurrent", False)),
                    ),
                    description=w.get("description", ""),
                )
                for w in data.get("workExperience") or []
            ],
            education=[
                Education(accreditation=e.get("accreditation", ""), level=e.get("level", ""))
                for e in data.get("education") or []
            ],
            skills=[Skill(name=s.get("name", "")) for s in data.get("skills") or []],
        )


@dataclass(frozen=True)
class RoleSuitability:
    role: str
    score: float
    reasoning: str


@dataclass(frozen=True)
class Evaluation:
    overall_score: float
    recommendation: str
    evaluation_summary: str = ""
    role_suitability: list[RoleSuitability] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    skill_gaps: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "overallScore": self.overall_score,
            "roleSuitability": [
                {"role": r.role, "score": r.score, "reasoning": r.reasoning} for r in self.role_suitability
            ],
            "strengths": list(self.strengths),
            "weaknesses": list(self.weaknesses),
            "skillGaps": list(self.skill_gaps),
            "recommendation": self.recommendation,
            "evaluationSummary": self.evaluation_summary,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Evaluation":
        return cls(
            overall_score=data["overallScore"],
            recommendation=data["recommendation"],
            evaluation_summary=data.get("evaluationSummary", ""),
            role_suitability=[
                RoleSuitability(role=r["role"], score=r["score"], reasoning=r["reasoning"])
                for r in data.get("roleSuitability", [])
            ],
            strengths=list(data.get("strengths", [])),
            weaknesses=list(data.get("weaknesses", [])),
            skill_gaps=list(data.get("skillGaps", [])),
        )


@dataclass(frozen=True)
class CandidateRecord:
    id: int
    candidate: CanonicalCandidate
    applied_role: str
    evaluation: Evaluation | None
    overall_score: float
    recommendation: str
    stage: str
    created_at: str

    def to_dict(self) -> dict:
        """Dashboard row shape."""
        c = self.candidate
        return {
            "id": self.id,
            "firstName": c.name.first,
            "familyName": c.name.family,
            "email": c.primary_email,
            "phone": c.primary_phone,
            "summary": c.summary,
            "totalYearsExperience": c.total_years_experience,
            "skills": c.display_skills(),
            "appliedRole": self.applied_role,
            "overallScore": self.overall_score,
            "recommendation": self.recommendation,
            "stage": self.stage,
            "evaluation": self.evaluation.to_dict() if self.evaluation else None,
            "rawData": c.to_dict(),
            "createdAt": self.created_at,
        }
