
#backend/app/models/job_models.py

from datetime import datetime, timezone
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from enum import Enum

class OptimizationStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"

    @property
    def is_terminal(self) -> bool:
        return self in (OptimizationStatus.COMPLETED, OptimizationStatus.FAILED)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OptimizationJob(BaseModel):
    """One resume / job description pair and everything the pipeline derived from it."""
    id: Optional[str] = None
    resume_text: str
    job_description: str
    status: OptimizationStatus = OptimizationStatus.PENDING
    extracted_keywords: List[str] = Field(default_factory=list)
    ats_score: Optional[int] = Field(default=None, ge=0, le=100)
    optimized_bullet_points: Optional[str] = None
    tailored_cover_letter: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def touch(self) -> None:
        self.updated_at = utcnow()


class OptimizationRequest(BaseModel):
    resume_text: str = Field(..., description="Plain text resume")
    job_description: str = Field(..., description="Plain text job description")

    @field_validator("resume_text", "job_description")
    @classmethod
    def _not_blank(cls, value: str, info):
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} is required")
        return value

class DocumentUploadResponse(BaseModel):
    extracted_text: str

class OptimizationSubmissionResponse(BaseModel):
    id: str
    status: OptimizationStatus

class OptimizationResultResponse(BaseModel):
    id: str
    status: OptimizationStatus
    ats_score: Optional[int] = None
    extracted_keywords: List[str] = Field(default_factory=list)
    optimized_bullet_points: Optional[str] = None
    tailored_cover_letter: Optional[str] = None
    error_message: Optional[str] = None

    @classmethod
    def from_job(cls, job: OptimizationJob) -> "OptimizationResultResponse":
        return cls(
            id=job.id,
            status=job.status,
            ats_score=job.ats_score,
            extracted_keywords=job.extracted_keywords,
            optimized_bullet_points=job.optimized_bullet_points,
            tailored_cover_letter=job.tailored_cover_letter,
            error_message=job.error_message,
        )
