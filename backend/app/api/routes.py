#backend/app/api/routes.py

import logging
from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from backend.app.core.documents import DocumentParser, JobDescriptionFetcher
from backend.app.core.errors import InputValidationError
from backend.app.core.optimization_service import ResumeOptimizationService
from backend.app.dependencies import get_document_parser, get_job_fetcher, get_optimization_service
from backend.app.models.job_models import (
    OptimizationRequest,
    DocumentUploadResponse,
    OptimizationSubmissionResponse,
    OptimizationResultResponse,
)

logger = logging.getLogger(__name__)

api_router = APIRouter()
optimizations_router = APIRouter(prefix="/api/optimizations", tags=["Optimizations"])


@api_router.get("/health", tags=["Health"])
def health_check():
    return {"status": "ok"}

@api_router.post("/parse-document", response_model=DocumentUploadResponse, tags=["Parsing"])
async def parse_document_endpoint(
    file: UploadFile = File(...),
    parser: DocumentParser = Depends(get_document_parser),
):
    """Extract text from an uploaded PDF, DOCX or TXT file."""
    content = await file.read()
    text = parser.extract_text(file.filename, content)
    return DocumentUploadResponse(extracted_text=text)

# ---------------- Submission ----------------

@optimizations_router.post("", response_model=OptimizationSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
def submit_optimization(
    request: OptimizationRequest,
    service: ResumeOptimizationService = Depends(get_optimization_service),
):
    """Submit resume and job description as plain text."""
    job = service.submit(request.resume_text, request.job_description)
    return OptimizationSubmissionResponse(id=job.id, status=job.status)

@optimizations_router.post("/upload", response_model=OptimizationSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
def submit_with_file_and_url(
    resume_file: UploadFile = File(...),
    job_url: str = Form(...),
    parser: DocumentParser = Depends(get_document_parser),
    fetcher: JobDescriptionFetcher = Depends(get_job_fetcher),
    service: ResumeOptimizationService = Depends(get_optimization_service),
):
    """Resume file plus a link to the job posting."""
    resume_text = parser.extract_text(resume_file.filename, resume_file.file.read())
    job_description = fetcher.fetch(job_url)
    return _submit(service, resume_text, job_description)

@optimizations_router.post("/upload-resume", response_model=OptimizationSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
def submit_with_file(
    resume_file: UploadFile = File(...),
    job_description: str = Form(...),
    parser: DocumentParser = Depends(get_document_parser),
    service: ResumeOptimizationService = Depends(get_optimization_service),
):
    """Resume file plus the job description as text."""
    resume_text = parser.extract_text(resume_file.filename, resume_file.file.read())
    return _submit(service, resume_text, job_description)

@optimizations_router.post("/fetch-job", response_model=OptimizationSubmissionResponse, status_code=status.HTTP_202_ACCEPTED)
def submit_with_url(
    resume_text: str = Form(...),
    job_url: str = Form(...),
    fetcher: JobDescriptionFetcher = Depends(get_job_fetcher),
    service: ResumeOptimizationService = Depends(get_optimization_service),
):
    """Resume as text plus a link to the job posting."""
    job_description = fetcher.fetch(job_url)
    return _submit(service, resume_text, job_description)

# ---------------- Results ----------------

@optimizations_router.get("/{job_id}", response_model=OptimizationResultResponse)
def get_optimization_result(
    job_id: str,
    service: ResumeOptimizationService = Depends(get_optimization_service),
):
    """Current state of a job; result fields are only meaningful once status is COMPLETED."""
    job = service.get_by_id(job_id)
    return OptimizationResultResponse.from_job(job)


def _submit(service: ResumeOptimizationService, resume_text: str, job_description: str) -> OptimizationSubmissionResponse:
    # File and URL inputs skip the JSON model, so re-check them here
    if not (resume_text or "").strip():
        raise InputValidationError("resume_text is required")
    if not (job_description or "").strip():
        raise InputValidationError("job_description is required")
    job = service.submit(resume_text, job_description)
    logger.info("Optimization submitted - job id=%s", job.id)
    return OptimizationSubmissionResponse(id=job.id, status=job.status)


api_router.include_router(optimizations_router)
