from app.domain.resume.schemas.base import (
    Certification,
    Education,
    Experience,
    PersonalInfo,
    Project,
    ResumeData,
    ResumeDraft,
    Skills,
    new_item_id,
    normalize_skills,
)
from app.domain.resume.schemas.inputs import (
    CertificationInput,
    EducationInput,
    ExperienceInput,
    PersonalInfoInput,
    ProjectInput,
    ResumeDataInput,
    validate_resume_data,
)

__all__ = [
    "PersonalInfo",
    "Experience",
    "Education",
    "Skills",
    "Project",
    "Certification",
    "ResumeData",
    "ResumeDraft",
    "new_item_id",
    "normalize_skills",
    "PersonalInfoInput",
    "ExperienceInput",
    "EducationInput",
    "ProjectInput",
    "CertificationInput",
    "ResumeDataInput",
    "validate_resume_data",
]
