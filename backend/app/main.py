#backend/app/main.py

import logging
import os
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from backend.app.api.routes import api_router
from backend.app.config import settings
from backend.app.core.errors import InputValidationError, JobFetchError, OptimizationNotFoundError
from backend.app.logging_config import configure_logging

logger = logging.getLogger(__name__)

class MatchIQApp:
    def __init__(self):
        configure_logging(settings.LOG_LEVEL)
        self.app = FastAPI(
            title="MatchIQ Resume Optimization API",
            description="Scores resumes against job descriptions and generates ATS-optimized bullets and cover letters.",
            version="0.3.0"
        )
        self._configure_cors()
        self._register_exception_handlers()
        self.include_routers()

    def _configure_cors(self):
        origins_env = os.getenv("BACKEND_CORS_ORIGINS", "http://localhost:8501,http://127.0.0.1:8501")
        origins = [o.strip() for o in origins_env.split(",") if o.strip()]
        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    def _register_exception_handlers(self):
        @self.app.exception_handler(OptimizationNotFoundError)
        async def _not_found(request: Request, exc: OptimizationNotFoundError):
            return JSONResponse(status_code=404, content={"detail": str(exc)})

        @self.app.exception_handler(InputValidationError)
        async def _invalid_input(request: Request, exc: InputValidationError):
            logger.warning("Rejected input on %s: %s", request.url.path, exc)
            return JSONResponse(status_code=400, content={"detail": str(exc)})

        @self.app.exception_handler(JobFetchError)
        async def _fetch_failed(request: Request, exc: JobFetchError):
            return JSONResponse(status_code=502, content={"detail": str(exc)})

    def include_routers(self):
        self.app.include_router(api_router)

def get_app():
    """Entrypoint for ASGI"""
    return MatchIQApp().app

# Run with 'uvicorn backend.app.main:get_app --factory'
app = get_app()
