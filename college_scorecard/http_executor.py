"""Single GET request against the Scorecard API, reported as a value instead of an exception."""

from __future__ import annotations

import requests

from college_scorecard.results import HttpResponse
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="http_executor")


class HttpRequestExecutor:
    """Performs one network call with a bounded timeout. Never raises."""

    def __init__(
        self,
        *,
        timeout_ms: int = 30000,
        user_agent: str = "CollegeScorecardClient",
        session: requests.Session | None = None,
    ) -> None:
        self.timeout_seconds = timeout_ms / 1000.0
        self.user_agent = user_agent
        self.session = session or requests.Session()

    def execute(self, url: str) -> HttpResponse:
        """GET `url` and return status/body, or status 0 with the transport error."""
        try:
            resp = self.session.get(
                url,
                headers={"User-Agent": self.user_agent, "Accept": "application/json"},
                timeout=self.timeout_seconds,
            )
        except requests.exceptions.RequestException as exc:
            logger.warning("GET %s failed before a response: %s", mask_url(url), exc)
            return HttpResponse(success=False, status_code=0, error=str(exc) or exc.__class__.__name__)

        logger.debug("GET %s -> %d", mask_url(url), resp.status_code)
        return HttpResponse(
            success=resp.status_code == 200,
            status_code=resp.status_code,
            body=resp.text,
        )
