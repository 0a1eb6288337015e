import logging
from datetime import datetime
from typing import Any, Optional, Protocol, Tuple

import requests

from errors import SinkError

logger = logging.getLogger(__name__)

HQ_DATETIME_FORMAT = "%d.%m.%y %H:%M"
REQUEST_TIMEOUT = 30


class WorktimeSink(Protocol):
    """Anything that can durably record one work time interval."""

    def log_worktime(self, start: datetime, end: datetime) -> None: ...


def format_datetime(value: datetime) -> str:
    return value.strftime(HQ_DATETIME_FORMAT)


class HQClient:
    """
    Simple HelloHQ client that logs work time through a JSON endpoint.

    The endpoint must be an API answering with JSON (or an empty body); an HTML
    page in response to a submission is treated as a failed submission.
    """

    def __init__(self, endpoint: str, session: Tuple[str, str]):
        """
        Initialize HQ client.

        Args:
            endpoint: URL of the time log API endpoint.
            session: Login session as (key, value); sent as a cookie with every request.
        """
        if not endpoint:
            raise SinkError("HQ endpoint is required.")

        self.endpoint = endpoint.rstrip("/")
        session_key, session_value = session

        self.session = requests.Session()
        self.session.cookies.set(session_key, session_value)
        self.session.headers.update({"Accept": "application/json"})

        self._verified = False

    def _make_request(self, method: str, expect_json: bool = False, **kwargs) -> Any:
        """Make HTTP request to the HQ endpoint."""
        kwargs.setdefault("timeout", REQUEST_TIMEOUT)
        try:
            response = self.session.request(method, self.endpoint, **kwargs)
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            if e.response is not None and e.response.status_code in (401, 403):
                raise SinkError(
                    f"Request was rejected: {e}\n\n"
                    "Maybe your credentials have been expired or you might not have "
                    "added the time log widget to your dashboard."
                ) from e
            raise SinkError(f"Request failed: {e}") from e
        except requests.exceptions.RequestException as e:
            raise SinkError(f"Could not reach {self.endpoint}: {e}") from e

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError:
            if expect_json:
                raise SinkError(
                    f"Unexpected non-JSON response from {self.endpoint}; "
                    "the endpoint does not look like the time log API."
                ) from None
            return response.text

    def verify_session(self) -> None:
        """Check once that the session is accepted before logging anything."""
        if self._verified:
            return
        logger.info("Checking login session ...")
        self._make_request("GET")
        self._verified = True

    def log_worktime(self, start: datetime, end: datetime) -> Optional[Any]:
        """
        Log one work time interval.

        Args:
            start: Start date and time.
            end: End date and time.

        Returns:
            The response body of the endpoint, if any.
        """
        self.verify_session()

        logger.info("Submitting work time ...")
        data = {"start": format_datetime(start), "end": format_datetime(end)}
        result = self._make_request("POST", expect_json=True, json=data)

        logger.info("Successfully logged work time!")
        return result
