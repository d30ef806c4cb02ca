# fittrack/client.py
"""
Small synchronous client for the FitTrack API.

Reads are cached per client instance. A successful mutation writes the
server's answer through to the cache and drops the list keys it affects, so
the next read of those lists goes back to the server.
"""
import logging
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class FitTrackAPIError(Exception):
    def __init__(self, status_code: int, detail: Any):
        super().__init__(f"{status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class ResponseCache:
    def __init__(self):
        self._entries: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        return self._entries.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def invalidate(self, *keys: str) -> None:
        for key in keys:
            self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()


class FitTrackClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: Optional[str] = None,
        http_client: Optional[httpx.Client] = None,
        cache: Optional[ResponseCache] = None,
    ):
        self._http = http_client or httpx.Client(base_url=base_url, timeout=10.0)
        self.cache = cache if cache is not None else ResponseCache()
        self.token = token

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "FitTrackClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> Any:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = self._http.request(method, f"/api/v1{path}", headers=headers, **kwargs)
        if response.is_error:
            try:
                detail = response.json().get("detail")
            except ValueError:
                detail = response.text
            logger.warning(f"{method} {path} failed with {response.status_code}: {detail}")
            raise FitTrackAPIError(response.status_code, detail)
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    def _cached_get(self, key: str, path: str, **kwargs) -> Any:
        if key in self.cache:
            return self.cache.get(key)
        data = self._request("GET", path, **kwargs)
        self.cache.set(key, data)
        return data

    # Authentication

    def login(self, email: str, password: str) -> str:
        data = self._request(
            "POST",
            "/auth/jwt/login",
            data={"username": email, "password": password},
        )
        self.token = data["access_token"]
        self.cache.clear()
        return self.token

    # Goals

    def get_goals(self) -> List[dict]:
        return self._cached_get("goals", "/goals")

    def get_goal(self, goal_id: str) -> dict:
        return self._cached_get(f"goal:{goal_id}", f"/goals/{goal_id}")

    def create_goal(self, goal: Dict[str, Any]) -> dict:
        created = self._request("POST", "/goals", json=goal)
        self.cache.set(f"goal:{created['id']}", created)
        self.cache.invalidate("goals", "dashboard")
        return created

    def update_goal(self, goal_id: str, changes: Dict[str, Any]) -> dict:
        updated = self._request("PATCH", f"/goals/{goal_id}", json=changes)
        self.cache.set(f"goal:{goal_id}", updated)
        self.cache.invalidate("goals", "dashboard")
        return updated

    def delete_goal(self, goal_id: str) -> None:
        self._request("DELETE", f"/goals/{goal_id}")
        self.cache.invalidate(f"goal:{goal_id}", f"progress:{goal_id}", "goals", "dashboard")

    # Progress

    def get_progress(self, goal_id: str) -> List[dict]:
        return self._cached_get(f"progress:{goal_id}", "/progress", params={"goal_id": goal_id})

    def add_progress(self, goal_id: str, value: float, date: str, notes: Optional[str] = None) -> dict:
        payload = {"goal_id": goal_id, "value": value, "date": date}
        if notes is not None:
            payload["notes"] = notes
        entry = self._request("POST", "/progress", json=payload)
        self._progress_changed(goal_id)
        return entry

    def update_progress(self, progress_id: str, changes: Dict[str, Any]) -> dict:
        entry = self._request("PATCH", f"/progress/{progress_id}", json=changes)
        self._progress_changed(entry["goal_id"])
        return entry

    def delete_progress(self, progress_id: str, goal_id: str) -> None:
        self._request("DELETE", f"/progress/{progress_id}")
        self._progress_changed(goal_id)

    def _progress_changed(self, goal_id: str) -> None:
        # The goal's current value and status follow its entries
        self.cache.invalidate(f"progress:{goal_id}", f"goal:{goal_id}", "goals", "dashboard")

    # Profile

    def get_profile(self) -> dict:
        return self._cached_get("profile", "/users/me")

    def update_profile(self, changes: Dict[str, Any]) -> dict:
        profile = self._request("PATCH", "/users/me", json=changes)
        self.cache.set("profile", profile)
        return profile

    def dashboard(self) -> dict:
        return self._cached_get("dashboard", "/dashboard/summary")
