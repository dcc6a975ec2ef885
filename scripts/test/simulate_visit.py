# scripts/test/simulate_visit.py
"""
Walk one visit through a running backend:
request -> approve (by emailed link) -> guard verify -> exit.
Reads the token and code back through the API, so point it at a dev server.
Usage: python scripts/test/simulate_visit.py --backend http://localhost:5000 [--api-key KEY]
"""

import argparse
import requests


def main():
    parser = argparse.ArgumentParser(description="Simulate a full visitor workflow")
    parser.add_argument("--backend", default="http://localhost:5000")
    parser.add_argument("--api-key", default=None)
    parser.add_argument("--visitor-email", default="visitor@example.com")
    parser.add_argument("--resident-email", default="resident@example.com")
    parser.add_argument("--reject", action="store_true", help="Reject instead of approving")
    args = parser.parse_args()

    api = f"{args.backend.rstrip('/')}/api"
    headers = {"X-API-Key": args.api_key} if args.api_key else {}

    resp = requests.post(f"{api}/visitor-request", json={
        "visitorName": "Test Visitor",
        "visitorEmail": args.visitor_email,
        "residentName": "Test Resident",
        "residentEmail": args.resident_email,
        "visitReason": "Simulated visit",
        "carNumber": "SIM-001",
    }, timeout=10)
    resp.raise_for_status()
    visitor = resp.json()
    print(f"Request  → HTTP {resp.status_code}: id={visitor['id']} status={visitor['status']}")

    action = "reject" if args.reject else "approve"
    resp = requests.get(f"{api}/{action}/{visitor['id']}/{visitor['approvalToken']}", timeout=10)
    print(f"{action.title():8} → HTTP {resp.status_code} ({'Success' if 'Success!' in resp.text else 'Error'} page)")
    if args.reject:
        return

    resp = requests.post(f"{api}/guard-verify", headers=headers, timeout=10,
                         json={"visitorId": visitor["id"], "code": visitor["verificationCode"]})
    print(f"Verify   → HTTP {resp.status_code}: in={resp.json().get('formattedTime')}")

    resp = requests.put(f"{api}/visitor-exit/{visitor['id']}", headers=headers, timeout=10)
    print(f"Exit     → HTTP {resp.status_code}: out={resp.json().get('formattedOutTime')}")


if __name__ == "__main__":
    main()
