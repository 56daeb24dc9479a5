
#backend/app/core/documents.py
import logging
import re
from io import BytesIO
from typing import Optional

import docx
import requests
from bs4 import BeautifulSoup
from PyPDF2 import PdfReader

from backend.app.core.errors import InputValidationError, JobFetchError

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB


class DocumentParser:
    """Handles PDF, Word and plain text resume extraction."""

    SUPPORTED = ("pdf", "doc", "docx", "txt")

    def __init__(self, max_bytes: int = MAX_FILE_SIZE):
        self.max_bytes = max_bytes

    def extract_text(self, filename: Optional[str], content: bytes) -> str:
        logger.info("Extracting text from resume file %s (%d bytes)", filename, len(content or b""))
        if not content:
            raise InputValidationError("Uploaded file is empty")
        if len(content) > self.max_bytes:
            raise InputValidationError(f"File size exceeds maximum allowed size of {self.max_bytes // (1024 * 1024)}MB")
        if not filename:
            raise InputValidationError("File name is missing")

        extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else ""
        if extension == "pdf":
            text = self._extract_pdf(content)
        elif extension in ("doc", "docx"):
            text = self._extract_word(content)
        elif extension == "txt":
            text = content.decode("utf-8", errors="replace")
        else:
            raise InputValidationError(
                f"Unsupported file type: {extension or 'none'}. Please upload PDF, DOCX, or TXT file."
            )

        text = text.strip()
        logger.info("Extracted %d characters from %s", len(text), filename)
        return text

    def _extract_pdf(self, content: bytes) -> str:
        try:
            reader = PdfReader(BytesIO(content))
        except Exception as e:
            raise InputValidationError(f"Could not read PDF: {e}") from e
        text = ""
        for page in reader.pages:
            page_text = page.extract_text()
            if page_text:
                text += page_text + "\n"
        return text

    def _extract_word(self, content: bytes) -> str:
        try:
            document = docx.Document(BytesIO(content))
        except Exception as e:
            raise InputValidationError(f"Could not read Word document: {e}") from e
        lines = [para.text for para in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                lines.append(" ".join(cell.text for cell in row.cells))
        return "\n".join(lines)


class JobDescriptionFetcher:
    """Downloads a job posting and pulls the description text out of the page."""

    USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"

    SITE_SELECTORS = {
        "linkedin.com": ("div.description__text", "div.show-more-less-html__markup"),
        "indeed.com": ("div#jobDescriptionText", "div.jobsearch-jobDescriptionText"),
        "glassdoor.com": ("div.jobDescriptionContent", "div[class*='JobDetails']"),
    }
    GENERIC_SELECTORS = (
        "div[class*='job-description']",
        "div[class*='jobDescription']",
        "div[class*='job_description']",
        "div[id*='job-description']",
        "div[id*='jobDescription']",
        "section[class*='description']",
        "article[class*='description']",
        "div.description",
        "div.job-details",
        "div.posting-description",
    )
    MIN_GENERIC_LENGTH = 100

    def __init__(self, timeout: float = 10.0, http=None):
        self.timeout = timeout
        self.http = http or requests

    def fetch(self, url: Optional[str]) -> str:
        url = (url or "").strip()
        if not url:
            raise InputValidationError("Job URL cannot be empty")
        if not url.startswith(("http://", "https://")):
            raise InputValidationError("Invalid URL format. URL must start with http:// or https://")

        logger.info("Fetching job description from %s", url)
        try:
            resp = self.http.get(url, headers={"User-Agent": self.USER_AGENT}, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            logger.error("Failed to fetch job description from %s: %s", url, e)
            raise JobFetchError(f"Failed to fetch job description: {e}") from e

        text = self.extract_description(resp.text, url)
        logger.info("Extracted %d characters from job posting", len(text))
        return text

    def extract_description(self, html: str, url: str = "") -> str:
        soup = BeautifulSoup(html or "", "html.parser")
        text = self._from_selectors(soup, url)
        if not text:
            logger.warning("No job description selector matched, falling back to body text")
            body = soup.body or soup
            text = body.get_text(" ")
        return clean_text(text)

    def _from_selectors(self, soup: BeautifulSoup, url: str) -> str:
        for host, selectors in self.SITE_SELECTORS.items():
            if host not in url:
                continue
            for selector in selectors:
                node = soup.select_one(selector)
                if node is not None:
                    logger.debug("Matched %s selector %s", host, selector)
                    return node.get_text(" ")

        for selector in self.GENERIC_SELECTORS:
            node = soup.select_one(selector)
            if node is not None:
                text = node.get_text(" ")
                if len(text.strip()) > self.MIN_GENERIC_LENGTH:
                    logger.debug("Matched generic selector %s", selector)
                    return text
        return ""


def clean_text(text: Optional[str]) -> str:
    return re.sub(r"\s+", " ", text or "").strip()
