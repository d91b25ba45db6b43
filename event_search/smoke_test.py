"""Tiny local smoke test for the FastAPI app.

Runs without starting Uvicorn: it imports the app and calls endpoints via
FastAPI's TestClient.  Search and chat requests are only sent when the Google
credentials are configured, since they reach the real services.

Usage:
  python -m event_search.smoke_test
"""

import os

from fastapi.testclient import TestClient

from event_search.main import app


def main() -> None:
    client = TestClient(app)

    r = client.get("/")
    assert r.status_code == 200, r.text

    r = client.get("/events", params={"field": "", "city": "Berlin"})
    assert r.status_code == 400, r.text
    assert r.json()["detail"] == "Field of interest cannot be empty."

    if os.getenv("GOOGLE_API_KEY") and os.getenv("GOOGLE_CSE_ID"):
        r = client.get("/events", params={"field": "AI conferences", "city": "San Francisco"})
        assert r.status_code == 200, r.text
        assert r.json()["query"] == '"AI conferences" events in "San Francisco"'

        r = client.get("/chat", params={"message": "Find tech meetups in Berlin this month"})
        assert r.status_code == 200, r.text
        assert r.json()["answer"].strip() != "", "Expected a non-empty answer"

    print("smoke_test.py: PASS")


if __name__ == "__main__":
    main()
