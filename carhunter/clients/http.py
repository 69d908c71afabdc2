import logging
import random
import time
from typing import Any

import requests

from carhunter.core.config import SETTINGS


logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "CarHunter/0.1 (+https://github.com/carhunter)",
}


class HttpRequestError(Exception):
    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: int | None = None,
        retryable: bool = False,
        error_kind: str | None = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.retryable = retryable
        self.error_kind = error_kind


class HttpClient:
    def __init__(
        self,
        *,
        session: requests.Session | None = None,
        max_retries: int = SETTINGS.http_max_retries,
        connect_timeout: float = SETTINGS.http_connect_timeout_seconds,
        read_timeout: float = SETTINGS.http_read_timeout_seconds,
        backoff_seconds: float = SETTINGS.http_backoff_seconds,
        backoff_jitter_seconds: float = SETTINGS.http_backoff_jitter_seconds,
    ) -> None:
        self._session = session or requests.Session()
        self._max_retries = max(1, max_retries)
        self._timeout = (connect_timeout, read_timeout)
        self._backoff_seconds = backoff_seconds
        self._backoff_jitter_seconds = backoff_jitter_seconds

    def get_json(self, url: str, *, params: dict[str, Any] | None = None) -> Any:
        response = self._request_with_retries(url, params=params)
        try:
            return response.json()
        except ValueError as exc:
            raise HttpRequestError(
                "Response body is not valid JSON",
                url=url,
                status_code=response.status_code,
                retryable=False,
                error_kind="invalid_json",
            ) from exc

    def _request_with_retries(self, url: str, *, params: dict[str, Any] | None) -> requests.Response:
        last_error: HttpRequestError | None = None

        for attempt in range(1, self._max_retries + 1):
            try:
                response = self._session.get(
                    url,
                    params=params,
                    headers=DEFAULT_HEADERS,
                    timeout=self._timeout,
                    allow_redirects=True,
                )

                if response.status_code >= 500:
                    raise HttpRequestError(
                        f"HTTP {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                        retryable=True,
                        error_kind="http_5xx",
                    )

                if response.status_code >= 400:
                    raise HttpRequestError(
                        f"HTTP {response.status_code}",
                        url=url,
                        status_code=response.status_code,
                        retryable=False,
                        error_kind="http_4xx",
                    )

                return response

            except HttpRequestError as exc:
                last_error = exc
                if not exc.retryable or attempt >= self._max_retries:
                    break
                self._sleep_retry(url, attempt, exc)
            except requests.Timeout as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=True, error_kind="timeout")
                if attempt >= self._max_retries:
                    break
                self._sleep_retry(url, attempt, last_error)
            except requests.ConnectionError as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=True, error_kind="connection")
                if attempt >= self._max_retries:
                    break
                self._sleep_retry(url, attempt, last_error)
            except requests.RequestException as exc:
                last_error = HttpRequestError(str(exc), url=url, retryable=False, error_kind="request")
                break

        if last_error is None:
            raise HttpRequestError("Unknown HTTP error", url=url, retryable=False)
        raise last_error

    def _sleep_retry(self, url: str, attempt: int, exc: Exception) -> None:
        sleep_seconds = (self._backoff_seconds * (2 ** (attempt - 1))) + random.uniform(
            0.0, self._backoff_jitter_seconds
        )
        logger.warning(
            "Request failed (%s/%s) for %s: %s. Retrying in %.2fs",
            attempt,
            self._max_retries,
            url,
            exc,
            sleep_seconds,
        )
        time.sleep(sleep_seconds)
