"""HTTP client for the habit API."""

from __future__ import annotations

from typing import Any

import requests

from ..config import BaseConfig
from ..logging_config import get_logger

logger = get_logger(__name__)


class ApiError(RuntimeError):
    """Raised when the habit API cannot be reached or answers with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ApiClient:
    """Thin wrapper over the REST endpoints exposed by the backend."""

    def __init__(
        self,
        base_url: str = BaseConfig.DEFAULT_API_URL,
        *,
        timeout: float | None = None,
        session: requests.Session | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: BaseConfig) -> "ApiClient":
        return cls(config.API_URL, timeout=config.API_TIMEOUT)

    def request(self, endpoint: str, method: str = "GET", **kwargs: Any) -> Any:
        url = f"{self.base_url}{endpoint}"
        headers = {"Content-Type": "application/json", **kwargs.pop("headers", {})}
        try:
            response = self.session.request(
                method, url, headers=headers, timeout=self.timeout, **kwargs
            )
        except requests.RequestException as exc:
            logger.warning("API request failed", extra={"url": url, "error": str(exc)})
            raise ApiError(f"Request to {url} failed: {exc}") from exc

        if not response.ok:
            logger.warning(
                "API request returned an error status",
                extra={"url": url, "status": response.status_code},
            )
            raise ApiError(
                f"HTTP error! status: {response.status_code}", status_code=response.status_code
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(f"Invalid JSON from {url}") from exc

    def get_habit(self) -> dict[str, Any]:
        return self.request("/habit")

    def complete_habit(self) -> dict[str, Any]:
        return self.request("/habit/complete", method="POST")

    def reset_habit(self) -> dict[str, Any]:
        return self.request("/habit/reset", method="POST")

    def get_habit_history(self) -> list[dict[str, Any]]:
        return self.request("/habit/history")

    def health_check(self) -> dict[str, Any]:
        return self.request("/health")

    def is_backend_available(self) -> bool:
        try:
            self.health_check()
        except ApiError:
            return False
        return True


__all__ = ["ApiClient", "ApiError"]
