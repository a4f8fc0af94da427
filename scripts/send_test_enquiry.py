"""
Send a sample enquiry to a running relay.

Smoke test for deployments: posts a realistic contact form submission and
prints the status and body that came back.
"""

import argparse
import json
import sys
import time
from typing import Any, Dict, List, Optional

import requests

SAMPLE_ENQUIRY: Dict[str, Any] = {
    "name": "Jane Doe",
    "businessName": "Acme Ltd",
    "email": "jane@acme.com",
    "phone": "07000000000",
    "currentSupplier": "EDF",
    "marketingOptIn": False,
}


def build_payload(bot: bool = False, enquiry_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Build a submission that passes the timing check.

    With bot=True the honeypot field is filled, so the relay should answer
    with success without sending anything.
    """
    payload = dict(SAMPLE_ENQUIRY)
    payload["formStartedAt"] = int(time.time() * 1000) - 5000
    if enquiry_type:
        payload["enquiryType"] = enquiry_type
    if bot:
        payload["companyWebsite"] = "http://spam.example"
    return payload


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Post a sample enquiry to the relay",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Contact form on a local server
  python send_test_enquiry.py --url http://localhost:3001

  # CRM proxy
  python send_test_enquiry.py --url http://localhost:3001 --crm

  # Honeypot submission (should report success and send nothing)
  python send_test_enquiry.py --url http://localhost:3001 --bot
        """
    )
    parser.add_argument("--url", default="http://localhost:3001", help="Relay base URL")
    parser.add_argument("--crm", action="store_true", help="Post to /api/crm instead of /api/contact")
    parser.add_argument("--bot", action="store_true", help="Fill the honeypot field")
    parser.add_argument("--enquiry-type", help="Explicit enquiry type (skips currentSupplier)")

    args = parser.parse_args(argv)

    path = "/api/crm" if args.crm else "/api/contact"
    url = args.url.rstrip("/") + path
    payload = build_payload(bot=args.bot, enquiry_type=args.enquiry_type)

    print(f"POST {url}")
    try:
        response = requests.post(url, json=payload, timeout=30)
    except requests.RequestException as e:
        print(f"\nERROR: {e}", file=sys.stderr)
        return 1

    print(f"Status: {response.status_code}")
    try:
        print(json.dumps(response.json(), indent=2))
    except ValueError:
        print(response.text)

    return 0 if response.ok else 1


if __name__ == "__main__":
    sys.exit(main())
