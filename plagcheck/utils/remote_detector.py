from typing import Any, Dict, Optional
import logging
import threading

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from plagcheck.config import (
    RAPIDAPI_HOST,
    RAPIDAPI_LANGUAGE,
    RAPIDAPI_URL,
    REQUEST_TIMEOUT,
    get_rapidapi_credentials,
)
from plagcheck.errors import RemoteError
from plagcheck.schemas.credential_schemas import RapidApiCredentials

logger = logging.getLogger("plagcheck.remote")


# ---- Session ----
def _make_session() -> requests.Session:
    s = requests.Session()
    retries = Retry(
        total=2,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["POST"],
        raise_on_status=False,
    )
    s.mount("https://", HTTPAdapter(max_retries=retries))
    s.mount("http://", HTTPAdapter(max_retries=retries))
    s.headers.update({"Content-Type": "application/json"})
    return s


def _response_data(response: requests.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class RapidApiDetector:
    """
    Client for the RapidAPI "plagiarism checker and auto citation generator" endpoint.

    ``check`` may be called from several worker threads at once. Without an
    injected ``session`` each thread gets its own retrying session.
    """

    def __init__(
        self,
        credentials: Optional[RapidApiCredentials] = None,
        url: str = RAPIDAPI_URL,
        host: str = RAPIDAPI_HOST,
        language: str = RAPIDAPI_LANGUAGE,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.credentials = credentials or get_rapidapi_credentials()
        self.url = url
        self.host = host
        self.language = language
        self.timeout = timeout
        self._session = session
        self._local = threading.local()

    @property
    def session(self) -> requests.Session:
        if self._session is not None:
            return self._session
        s = getattr(self._local, "session", None)
        if s is None:
            s = self._local.session = _make_session()
        return s

    def check(
        self,
        text: str,
        include_citations: bool = False,
        scrape_sources: bool = False,
    ) -> Dict[str, Any]:
        headers = {
            "x-rapidapi-host": self.host,
            "x-rapidapi-key": self.credentials.api_key,
        }
        payload = {
            "text": text,
            "language": self.language,
            "includeCitations": include_citations,
            "scrapeSources": scrape_sources,
        }

        try:
            r = self.session.post(self.url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteError(str(e)) from e

        if not r.ok:
            raise RemoteError(
                f"Request failed with status code {r.status_code}",
                status_code=r.status_code,
                response_data=_response_data(r),
            )

        try:
            data = r.json()
        except ValueError as e:
            raise RemoteError("Response is not valid JSON", status_code=r.status_code) from e
        if not isinstance(data, dict):
            raise RemoteError(
                "Unexpected response shape",
                status_code=r.status_code,
                response_data=data,
            )

        logger.debug(f"RapidAPI check completed. Plagiarism: {data.get('totalPlagiarismPercentage')}%")
        return data
