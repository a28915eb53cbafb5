"""Client for the daily quota endpoints, as the game UI uses them.

Quota bookkeeping must never block play: if the server cannot be reached
or answers with garbage, the client reports zero attempts used and a zero
best score rather than locking the player out.

Usage:
    client = QuotaClient(httpx.Client(base_url="http://127.0.0.1:8000"), post_id="t3_abc")
    status = client.fetch_status()
    status = client.record_attempt(42)
"""

import logging

import httpx

from models.quota import DailyStatus

logger = logging.getLogger(__name__)

DAILY_STATUS_URL = "/api/daily-status"
DAILY_ATTEMPT_URL = "/api/daily-attempt"


class QuotaClient:
    """Fetches and records a user's attempts for one puzzle."""

    def __init__(
        self,
        client: httpx.Client,
        post_id: str = "",
        user_id: str | None = None,
    ) -> None:
        self.client = client
        self.post_id = post_id
        self.headers = {"X-User-Id": user_id} if user_id else {}
        self.status = DailyStatus()

    def fetch_status(self) -> DailyStatus:
        """Refresh the cached status, falling back to zeros on any failure."""
        params = {"post_id": self.post_id} if self.post_id else None
        try:
            resp = self.client.get(DAILY_STATUS_URL, params=params, headers=self.headers)
            resp.raise_for_status()
            self.status = DailyStatus.model_validate(resp.json())
        except (httpx.HTTPError, ValueError) as e:  # Bad JSON or shape
            logger.warning("Could not fetch daily status for %r: %s", self.post_id, e)
            self.status = DailyStatus()
        return self.status

    def record_attempt(self, score: int) -> DailyStatus:
        """Submit a finished game, then refetch the status once.

        A failed submission is logged and otherwise ignored; the refetch
        still runs so the cached status reflects whatever the server holds.
        """
        try:
            resp = self.client.post(
                DAILY_ATTEMPT_URL,
                json={"score": score, "post_id": self.post_id or None},
                headers=self.headers,
            )
            resp.raise_for_status()
        except httpx.HTTPError as e:
            logger.warning("Could not record attempt for %r: %s", self.post_id, e)
        return self.fetch_status()
