from __future__ import annotations

import os
from typing import Optional

import requests

API_BASE = os.getenv("EXPENSE_API_URL", "http://localhost:5000/api")


class ApiError(Exception):
    def __init__(self, status: Optional[int], message: str):
        super().__init__(message)
        self.status = status
        self.message = message


def _error_message(resp) -> str:
    try:
        payload = resp.json()
    except ValueError:
        return resp.reason or f"HTTP {resp.status_code}"
    if isinstance(payload, dict):
        if payload.get("message"):
            return payload["message"]
        if payload.get("errors"):
            return "; ".join(e.get("message", "") for e in payload["errors"])
    return f"HTTP {resp.status_code}"


class ApiClient:
    """Thin wrapper over the REST API; attaches the bearer token when set."""

    def __init__(self, base_url: str = API_BASE, token: Optional[str] = None,
                 session=None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def request(self, method, path, json=None, params=None):
        headers = {}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = self.base_url + path
        try:
            resp = self.session.request(
                method, url, headers=headers, json=json, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise ApiError(None, f"Connection failed: {e}") from e

        if not 200 <= resp.status_code < 300:
            raise ApiError(resp.status_code, _error_message(resp))
        return resp.json()

    # ---------------- Auth ----------------
    def register(self, name, email, password):
        data = self.request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        self.token = data["token"]
        return data["user"]

    def login(self, email, password):
        data = self.request("POST", "/auth/login", json={"email": email, "password": password})
        self.token = data["token"]
        return data["user"]

    def me(self):
        return self.request("GET", "/auth/me")["user"]

    # ---------------- Profile ----------------
    def get_profile(self):
        return self.request("GET", "/users/profile")

    def update_profile(self, **fields):
        return self.request("PUT", "/users/profile", json=fields)

    # ---------------- Expenses ----------------
    def list_expenses(self, **filters):
        params = {k: v for k, v in filters.items() if v not in (None, "")}
        return self.request("GET", "/expenses", params=params or None)

    def get_stats(self):
        return self.request("GET", "/expenses/stats")

    def get_expense(self, expense_id):
        return self.request("GET", f"/expenses/{expense_id}")

    def create_expense(self, payload):
        return self.request("POST", "/expenses", json=payload)

    def update_expense(self, expense_id, payload):
        return self.request("PUT", f"/expenses/{expense_id}", json=payload)

    def delete_expense(self, expense_id):
        return self.request("DELETE", f"/expenses/{expense_id}")
