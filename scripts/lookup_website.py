"""Look up a hotel website by its public unique id.

Usage: python scripts/lookup_website.py <unique-id> [--api-url URL] [--json]

Uses the same unauthenticated endpoint the public hotel sites call. Reads
HOTELHUB_API_URL (or API_URL) from the environment / .env when --api-url is
not given. Exit code 0 when found, 1 otherwise.
"""

from __future__ import annotations

import argparse
import json
import os
import sys

from dotenv import load_dotenv

# Ensure project root on sys.path when running as standalone script
ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT not in sys.path:
    sys.path.insert(0, ROOT)

from hotelhub.api import PublicApi, unwrap  # noqa: E402
from hotelhub.api_client import ApiClient  # noqa: E402
from hotelhub.config import Config  # noqa: E402
from hotelhub.errors import ApiError  # noqa: E402
from hotelhub.notifications import CollectingNotifier  # noqa: E402
from hotelhub.storage import Storage  # noqa: E402

SUMMARY_FIELDS = ("name", "domain", "subdomain", "uniqueId", "isActive")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Public website lookup by unique id")
    p.add_argument("unique_id")
    p.add_argument("--api-url", default=None, help="Backend base URL (default from env)")
    p.add_argument("--json", action="store_true", help="Print the full website document")
    return p


def main(argv: list[str] | None = None, http=None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    cfg = Config.from_env()
    notifier = CollectingNotifier()
    client = ApiClient(
        (args.api_url or cfg.api_base_url).rstrip("/"),
        Storage({}),
        http=http,
        notifier=notifier,
        timeout=cfg.api_timeout_seconds,
    )
    try:
        website = unwrap(PublicApi(client).get_website_by_unique_id(args.unique_id), "website")
    except ApiError as err:
        sys.stderr.write(f"[ERROR] Lookup failed ({err.status or 'network'}): {err.message}\n")
        return 1
    if not isinstance(website, dict):
        sys.stderr.write(f"[ERROR] No website with unique id {args.unique_id}\n")
        return 1
    if args.json:
        print(json.dumps(website, indent=2, ensure_ascii=False))
    else:
        for field in SUMMARY_FIELDS:
            print(f"{field}: {website.get(field, '')}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
