# backend/app/core/optimization_service.py

import logging
from typing import Callable, Optional, Sequence, Tuple

from backend.app.core.errors import OptimizationNotFoundError, PipelineFailure
from backend.app.core.generation import ContentGenerator, FallbackContentGenerator
from backend.app.core.job_store import JobStore
from backend.app.core.keywords import KeywordExtractor
from backend.app.core.results import Err, Ok, Result, attempt
from backend.app.core.scoring import AtsScorer
from backend.app.models.job_models import OptimizationJob, OptimizationStatus, utcnow

logger = logging.getLogger(__name__)

Stage = Tuple[str, Callable[[OptimizationJob], None]]


class ResumeOptimizationService:
    """
    Owns the optimization job state machine.

    submit() stores a PENDING job and hands its id to the scheduler;
    process() is what the scheduler eventually runs, off the request path:

        PENDING -> PROCESSING -> extract keywords -> score -> bullets -> cover letter
                -> COMPLETED  (or FAILED at the first stage that errors)

    The job is persisted on entering PROCESSING and once more on reaching a
    terminal state.
    """

    def __init__(
        self,
        store: JobStore,
        scheduler,
        extractor: Optional[KeywordExtractor] = None,
        scorer: Optional[AtsScorer] = None,
        generator: Optional[ContentGenerator] = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.extractor = extractor or KeywordExtractor()
        self.scorer = scorer or AtsScorer()
        self.generator = generator or FallbackContentGenerator()

    # ---------- Synchronous API ----------
    def submit(self, resume_text: str, job_description: str) -> OptimizationJob:
        logger.info(
            "Received optimization request - resume length=%d, job description length=%d",
            len(resume_text or ""), len(job_description or ""),
        )
        now = utcnow()
        job = OptimizationJob(
            resume_text=resume_text, job_description=job_description, created_at=now, updated_at=now
        )
        saved = self.store.save(job)
        logger.info("Job %s saved with status %s", saved.id, saved.status.value)

        self.scheduler.schedule(saved.id)
        logger.info("Processing scheduled for job %s", saved.id)
        return saved

    def get_by_id(self, job_id: str) -> OptimizationJob:
        job = self.store.find_by_id(job_id)
        if job is None:
            logger.error("Job not found with id %s", job_id)
            raise OptimizationNotFoundError(job_id)
        return job

    # ---------- Background processing ----------
    def process(self, job_id: str) -> OptimizationJob:
        """
        Run the pipeline for one job and persist the terminal state.
        Stage errors end up in the job record, never in the caller.
        """
        job = self.get_by_id(job_id)
        if job.status is not OptimizationStatus.PENDING:
            logger.warning("Job %s is already %s, skipping", job_id, job.status.value)
            return job

        logger.info("Processing job %s", job_id)
        job.status = OptimizationStatus.PROCESSING
        job.touch()
        job = self.store.save(job)

        outcome = self.run_pipeline(job)
        if isinstance(outcome, Err):
            job.status = OptimizationStatus.FAILED
            job.error_message = outcome.reason
            logger.error(
                "Job %s failed at stage '%s': %s", job_id, outcome.error.stage, outcome.reason,
                exc_info=outcome.error.cause,
            )
        else:
            job.status = OptimizationStatus.COMPLETED
            job.error_message = None
            logger.info("Job %s completed - ATS score %s", job_id, job.ats_score)

        job.touch()
        return self.store.save(job)

    def run_pipeline(self, job: OptimizationJob) -> Result[OptimizationJob]:
        """Run every stage in order on the in-memory job; stop at the first Err."""
        for name, stage in self.stages():
            logger.info("Job %s: %s", job.id, name)
            result = attempt(stage, job)
            if isinstance(result, Err):
                failure = PipelineFailure(name, cause=result.error, message=result.reason)
                return Err(reason=result.reason, error=failure)
        return Ok(job)

    def stages(self) -> Sequence[Stage]:
        return (
            ("extract_keywords", self._extract_keywords),
            ("score_resume", self._score_resume),
            ("generate_bullets", self._generate_bullets),
            ("generate_cover_letter", self._generate_cover_letter),
        )

    def _extract_keywords(self, job: OptimizationJob) -> None:
        job.extracted_keywords = list(self.extractor.extract(job.job_description))

    def _score_resume(self, job: OptimizationJob) -> None:
        job.ats_score = self.scorer.score(job.resume_text, job.extracted_keywords)

    def _generate_bullets(self, job: OptimizationJob) -> None:
        job.optimized_bullet_points = self.generator.generate_bullets(
            job.resume_text, job.job_description, job.extracted_keywords
        )

    def _generate_cover_letter(self, job: OptimizationJob) -> None:
        job.tailored_cover_letter = self.generator.generate_cover_letter(
            job.resume_text, job.job_description, job.extracted_keywords
        )
