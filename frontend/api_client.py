# frontend/api_client.py

import os
import time
from typing import Optional, Dict, Any
import requests

TERMINAL_STATUSES = ("COMPLETED", "FAILED")

class BackendClient:
    def __init__(self, base_url: Optional[str] = None, timeout: float = 30.0):
        self.base_url = (base_url or os.getenv("BACKEND_URL") or "http://localhost:8000").rstrip("/")
        self.timeout = timeout

    # -------- Parsing --------
    def parse_document(self, file_bytes: bytes, filename: str = "resume.pdf") -> str:
        url = f"{self.base_url}/parse-document"
        files = {"file": (filename, file_bytes)}
        resp = requests.post(url, files=files, timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        return data.get("extracted_text", "") or ""

    # -------- Optimizations --------
    def submit_text(self, resume_text: str, job_description: str) -> str:
        url = f"{self.base_url}/api/optimizations"
        payload = {"resume_text": resume_text, "job_description": job_description}
        resp = requests.post(url, json=payload, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()["id"]

    def submit_with_job_url(self, resume_text: str, job_url: str) -> str:
        url = f"{self.base_url}/api/optimizations/fetch-job"
        data = {"resume_text": resume_text, "job_url": job_url}
        resp = requests.post(url, data=data, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()["id"]

    def get_result(self, job_id: str) -> Dict[str, Any]:
        url = f"{self.base_url}/api/optimizations/{job_id}"
        resp = requests.get(url, timeout=self.timeout)
        resp.raise_for_status()
        return resp.json()

    # -------- Convenience: poll with progress callback --------
    def wait_with_progress(
        self,
        job_id: str,
        total_wait: float = 120.0,
        poll_interval: float = 1.5,
        on_tick=None,
        sleep=time.sleep,
    ) -> Dict[str, Any]:
        elapsed = 0.0
        while elapsed < total_wait:
            try:
                res = self.get_result(job_id)
            except requests.RequestException as e:
                res = {"status": "UNKNOWN", "error_message": str(e)}
            if on_tick:
                on_tick(elapsed, res.get("status"))
            if res.get("status") in TERMINAL_STATUSES:
                return res
            sleep(poll_interval)
            elapsed += poll_interval
        # Fallback: final status fetch
        return self.get_result(job_id)
