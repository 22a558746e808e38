"""Demo: register, build a roadmap, check every step, complete it.

Run with:
    python scripts/demo_roadmap_flow.py
"""

from __future__ import annotations

from fastapi.testclient import TestClient

from learnroute.main import app

USERNAME = "demo-learner"
PASSWORD = "demo-password"


def main() -> None:
    with TestClient(app) as client:
        r = client.post(
            "/api/register",
            json={
                "username": USERNAME,
                "password": PASSWORD,
                "email": "demo@example.com",
                "full_name": "Demo Learner",
            },
        )
        if r.status_code == 409:
            r = client.post(
                "/api/login", json={"username": USERNAME, "password": PASSWORD}
            )
        print(f"1. auth                    -> {r.status_code}")
        headers = {"Authorization": f"Bearer {r.json()['access_token']}"}

        r = client.post(
            "/api/roadmaps",
            json={"title": "Become a web developer", "category": "web-development"},
            headers=headers,
        )
        roadmap = r.json()
        print(f"2. POST /api/roadmaps      -> {r.status_code}  steps={len(roadmap['steps'])}")

        for step in roadmap["steps"]:
            r = client.patch(
                f"/api/roadmaps/{roadmap['id']}/steps/{step['id']}",
                json={"completed": True},
                headers=headers,
            )
            print(f"   step {step['title'][:28]:<28} -> progress={r.json()['progress']}")

        r = client.post(f"/api/roadmaps/{roadmap['id']}/complete", headers=headers)
        print(f"3. POST complete           -> {r.status_code}  completed={r.json()['completed']}")

        r = client.get("/api/user", headers=headers)
        print(f"4. GET  /api/user          -> points={r.json()['points']}")

        r = client.get("/api/leaderboard")
        print(f"5. GET  /api/leaderboard   -> {[(e['username'], e['points']) for e in r.json()]}")


if __name__ == "__main__":
    main()
