# backend/app/config.py

from pydantic import BaseModel, Field
import os
from dotenv import load_dotenv

from backend.app.core.generation import GeneratorConfig

load_dotenv()

class Settings(BaseModel):
    # LLM config
    # "api" calls the remote endpoint (falling back when it misbehaves), "fallback" never calls out
    LLM_PROVIDER: str = Field(default=os.getenv("LLM_PROVIDER", "api"))
    LLM_API_URL: str = Field(default=os.getenv("LLM_API_URL", ""))
    LLM_API_KEY: str = Field(default=os.getenv("LLM_API_KEY", ""))
    LLM_MODEL_NAME: str = Field(default=os.getenv("LLM_MODEL_NAME", "gpt-4o-mini"))
    LLM_TEMPERATURE: float = Field(default=float(os.getenv("LLM_TEMPERATURE", "0.7")))
    LLM_MAX_TOKENS: int = Field(default=int(os.getenv("LLM_MAX_TOKENS", "1000")))
    # Connect / read timeouts in seconds for the generation endpoint
    LLM_CONNECT_TIMEOUT: float = Field(default=float(os.getenv("LLM_CONNECT_TIMEOUT", "30")))
    LLM_READ_TIMEOUT: float = Field(default=float(os.getenv("LLM_READ_TIMEOUT", "60")))

    # Job store: "redis" in deployment, "memory" for a single process
    JOB_STORE_BACKEND: str = Field(default=os.getenv("JOB_STORE_BACKEND", "redis"))
    # Who runs the pipeline: "celery" workers, or a "thread" pool inside the API process
    JOB_SCHEDULER: str = Field(default=os.getenv("JOB_SCHEDULER", "celery"))
    JOB_WORKER_THREADS: int = Field(default=int(os.getenv("JOB_WORKER_THREADS", "4")))

    # Celery/Redis
    REDIS_URL: str = Field(default=os.getenv("REDIS_URL", "redis://host.docker.internal:6379/0"))
    CELERY_SOFT_TIME_LIMIT: int = Field(default=int(os.getenv("CELERY_SOFT_TIME_LIMIT", "600")))  #10 min
    CELERY_HARD_TIME_LIMIT: int = Field(default=int(os.getenv("CELERY_HARD_TIME_LIMIT", "660")))  # soft + buffer

    # Text sources
    MAX_UPLOAD_BYTES: int = Field(default=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))))
    JOB_FETCH_TIMEOUT: float = Field(default=float(os.getenv("JOB_FETCH_TIMEOUT", "10")))

    LOG_LEVEL: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))


    def generator_config(self) -> GeneratorConfig:
        """
        Snapshot of the generation settings, handed to the content generator
        at construction so it never reads the environment itself.
        """
        return GeneratorConfig(
            provider=self.LLM_PROVIDER.strip().lower(),
            api_url=self.LLM_API_URL.strip(),
            api_key=self.LLM_API_KEY.strip(),
            model=self.LLM_MODEL_NAME,
            temperature=self.LLM_TEMPERATURE,
            max_tokens=self.LLM_MAX_TOKENS,
            connect_timeout=self.LLM_CONNECT_TIMEOUT,
            read_timeout=self.LLM_READ_TIMEOUT,
        )


settings = Settings()
