from __future__ import annotations

import os
import sys
from pathlib import Path

# Allow running as: python scripts/users_smoketest.py
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from fastapi.testclient import TestClient

from user_management.main import app


def main() -> int:
    api_key = os.environ.setdefault("API_KEY", "smoketest-key")
    headers = {"api-key": api_key}

    c = TestClient(app)

    r = c.get("/users", headers=headers)
    print("/users(empty)", r.status_code, r.json())

    r = c.post(
        "/users",
        json={"name": " Jane Doe ", "username": "jane_doe", "email": "jane@example.com"},
        headers=headers,
    )
    print("POST /users", r.status_code, r.json())
    if r.status_code != 201:
        return 1
    user_id = r.json()["id"]

    r = c.post(
        "/users",
        json={"name": "Jane Again", "username": "JANE_DOE", "email": "other@example.com"},
        headers=headers,
    )
    print("POST /users(duplicate)", r.status_code, r.json())

    r = c.delete(f"/users/{user_id}", headers=headers)
    print("DELETE /users/{id}", r.status_code)

    r = c.get(f"/users/{user_id}", headers=headers)
    print("GET /users/{id}(deleted)", r.status_code, r.json())

    return 0 if r.status_code == 404 else 1


if __name__ == "__main__":
    raise SystemExit(main())
