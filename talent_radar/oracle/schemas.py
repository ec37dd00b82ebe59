"""Pydantic validation models for oracle replies."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


def _clean_strings(v):
    """Strip strings, dropping blanks and non-string items."""
    if isinstance(v, list):
        return [item.strip() for item in v if isinstance(item, str) and item.strip()]
    return v


class RequirementsAnalysis(BaseModel):
    """Structured hiring requirements."""

    model_config = ConfigDict(populate_by_name=True)

    essential_skills: list[str] = Field(alias="essentialSkills", min_length=1)
    tech_stack: list[str] = Field(alias="techStack", default_factory=list)
    expertise: list[str] = Field(default_factory=list)
    role: str = Field(default="Developer")

    @field_validator("essential_skills", mode="before")
    @classmethod
    def normalize_skills(cls, v):
        """Lowercase and dedupe skills; they become search keywords."""
        cleaned = _clean_strings(v)
        if not isinstance(cleaned, list):
            return cleaned
        seen: set[str] = set()
        skills = []
        for item in cleaned:
            lowered = item.lower()
            if lowered not in seen:
                seen.add(lowered)
                skills.append(lowered)
        return skills

    @field_validator("tech_stack", "expertise", mode="before")
    @classmethod
    def filter_empty_strings(cls, v):
        return _clean_strings(v)

    @field_validator("role", mode="before")
    @classmethod
    def default_role(cls, v):
        if not isinstance(v, str) or not v.strip():
            return "Developer"
        return v.strip()


class CodeQualityReport(BaseModel):
    """Code-quality review of a single repository."""

    model_config = ConfigDict(populate_by_name=True)

    overall_score: float = Field(alias="overallScore", ge=0, le=100)
    code_structure: str = Field(alias="codeStructure")
    documentation: str
    test_coverage: str = Field(alias="testCoverage")
    best_practices: str = Field(alias="bestPractices")

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


class RepositoryAssessmentReport(BaseModel):
    """Assessment of a repository against job requirements."""

    model_config = ConfigDict(populate_by_name=True)

    match_score: float = Field(alias="matchScore", ge=0, le=100)
    strengths: list[str]
    gaps: list[str]
    recommendations: list[str]
    summary: str
    technical_skills: list[str] = Field(alias="technicalSkills")
    project_complexity: str = Field(alias="projectComplexity")

    @field_validator("strengths", "gaps", "recommendations", "technical_skills", mode="before")
    @classmethod
    def filter_empty_strings(cls, v):
        return _clean_strings(v)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)
