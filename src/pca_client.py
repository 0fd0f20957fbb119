"""
Client for the remote PCA analysis API.

Uploads the selected point-cloud files as one multipart POST and returns the
validated ``AnalysisResult``. Uses the REST endpoint directly via requests.
Endpoint: set PCA_API_URL env var or pass via ApiConfig.
"""
import os
import logging
from dataclasses import dataclass
from typing import Optional, Sequence

import requests

from analysis_result import AnalysisResult
from file_selection import SelectedFile

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://render-pd-homcloud-api.onrender.com/process_pca"
PLACEHOLDER_MARKER = "your-service-name"
UPLOAD_FIELD_NAME = "xyz_files"
GENERIC_FAILURE_MESSAGE = "API request failed"

API_URL_ENV = "PCA_API_URL"
API_TIMEOUT_ENV = "PCA_API_TIMEOUT"


class AnalysisApiError(Exception):
    """Base exception for analysis API errors."""
    pass


class ApiConfigurationError(AnalysisApiError):
    """Endpoint is unset or still the placeholder."""
    pass


class ApiTransportError(AnalysisApiError):
    """Request never produced an HTTP response."""
    pass


class ApiResponseError(AnalysisApiError):
    """API answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResultError(AnalysisApiError):
    """API answered 2xx but the body is not a valid analysis result."""
    pass


@dataclass
class ApiConfig:
    """Configuration for the analysis API client."""
    api_url: str = DEFAULT_API_URL
    timeout_seconds: Optional[float] = None     # None waits indefinitely
    field_name: str = UPLOAD_FIELD_NAME

    @classmethod
    def from_env(cls, api_url: Optional[str] = None) -> "ApiConfig":
        """Build a config from an explicit URL, falling back to env vars."""
        url = (api_url or "").strip() or os.environ.get(API_URL_ENV, "").strip()
        timeout_raw = os.environ.get(API_TIMEOUT_ENV, "").strip()
        timeout = None
        if timeout_raw:
            try:
                timeout = float(timeout_raw)
            except ValueError:
                logger.warning("Ignoring invalid %s=%r", API_TIMEOUT_ENV, timeout_raw)
            else:
                if timeout <= 0:
                    timeout = None
        return cls(api_url=url or DEFAULT_API_URL, timeout_seconds=timeout)

    @property
    def is_placeholder(self) -> bool:
        return not self.api_url.strip() or PLACEHOLDER_MARKER in self.api_url


class PcaApiClient:
    """Sends point-cloud files to the PCA endpoint."""

    def __init__(self, config: Optional[ApiConfig] = None):
        self.config = config or ApiConfig()

    def analyze(self, files: Sequence[SelectedFile]) -> AnalysisResult:
        """Upload *files* and return the parsed analysis.

        Raises:
            ValueError: If *files* is empty. No request is made.
            ApiConfigurationError: If the endpoint is the placeholder.
            ApiTransportError: If the request fails before a response.
            ApiResponseError: If the API returns a non-success status.
            MalformedResultError: If a success body does not parse.
        """
        if not files:
            raise ValueError("No files selected")
        self.check_configured()

        url = self.config.api_url
        multipart = [
            (self.config.field_name, (f.name, f.data, "application/octet-stream"))
            for f in files
        ]

        logger.info("Uploading %d file(s) to %s", len(files), url)
        try:
            resp = requests.post(
                url, files=multipart, timeout=self.config.timeout_seconds
            )
        except requests.RequestException as e:
            logger.warning("Request to %s failed: %s", url, e)
            raise ApiTransportError(f"Could not reach the analysis API: {e}") from e

        self._check_response(resp)

        try:
            payload = resp.json()
        except ValueError as e:
            raise MalformedResultError(f"Response is not valid JSON: {e}") from e
        try:
            result = AnalysisResult.from_payload(payload)
        except ValueError as e:
            raise MalformedResultError(f"Unexpected response shape: {e}") from e

        logger.info(
            "Analysis returned %d points, %d components",
            result.n_points, result.n_components,
        )
        return result

    def check_configured(self) -> None:
        if self.config.is_placeholder:
            raise ApiConfigurationError(
                "Replace the API URL placeholder with your analysis service "
                f"URL (settings, --api-url, or the {API_URL_ENV} env var)."
            )

    def _check_response(self, resp):
        """Check HTTP response for errors."""
        if resp.ok:
            return
        message = GENERIC_FAILURE_MESSAGE
        try:
            body = resp.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("error"):
            message = str(body["error"])
        logger.warning("Analysis API error %s: %s", resp.status_code, message)
        raise ApiResponseError(message, status_code=resp.status_code)
