from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, NoReturn, Optional

import httpx
import typer

from cli.config import CLIConfig


class ApiClient:
    """Minimal HTTP client for the power analytics service."""

    def __init__(self, config: CLIConfig) -> None:
        self._config = config
        headers = {"Authorization": f"Bearer {config.token}"} if config.token else None
        self._client = httpx.Client(
            base_url=config.base_url, timeout=config.timeout, headers=headers
        )

    def close(self) -> None:
        self._client.close()

    def list_readings(
        self,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        min_value: Optional[int] = None,
        max_value: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {}
        if start_date is not None:
            params["startDate"] = start_date.isoformat()
        if end_date is not None:
            params["endDate"] = end_date.isoformat()
        if min_value is not None:
            params["minValue"] = min_value
        if max_value is not None:
            params["maxValue"] = max_value
        return self._request("GET", "/", params=params)

    def get_reading(self, reading_id: int) -> Dict[str, Any]:
        return self._request("GET", f"/{reading_id}")

    def create_readings(self, readings: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        return self._request("POST", "/", json=readings)

    def update_reading(self, reading_id: int, value: int, logged_at: datetime) -> Dict[str, Any]:
        payload = {"id": reading_id, "value": value, "loggedAt": logged_at.isoformat()}
        return self._request("PUT", f"/{reading_id}", json=payload)

    def delete_reading(self, reading_id: int) -> None:
        self._request("DELETE", f"/{reading_id}")

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = self._client.request(method, path, **kwargs)
            if response.status_code == 404:
                raise typer.BadParameter(f"Power reading at {path} was not found.")
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            self._handle_http_error(exc)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    @staticmethod
    def _handle_http_error(exc: httpx.HTTPStatusError) -> NoReturn:
        detail: str | None = None
        try:
            data = exc.response.json()
            detail = data.get("detail")
        except Exception:  # noqa: BLE001 - best effort parsing
            detail = exc.response.text.strip()
        message = (
            f"Request failed with status {exc.response.status_code}: {detail or 'no detail provided.'}"
        )
        typer.secho(message, fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)
