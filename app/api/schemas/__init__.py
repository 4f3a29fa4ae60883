from app.api.schemas.resume import (
    RenderRequest,
    ResumeCreate,
    ResumeOut,
    ResumeUpdate,
    serialize_resume,
    success_body,
)

__all__ = [
    "ResumeCreate",
    "ResumeUpdate",
    "RenderRequest",
    "ResumeOut",
    "serialize_resume",
    "success_body",
]
