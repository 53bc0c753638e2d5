"""
Container health probe.

Exits 0 when the local server answers ``GET /health`` with 200 within two
seconds, 1 otherwise:

    python -m driving_school.healthcheck [--host HOST] [--port PORT]
"""
import argparse
import sys
from typing import List, Optional

import httpx

from driving_school.config import settings

PROBE_TIMEOUT = 2.0


def probe(url: str, timeout: float = PROBE_TIMEOUT) -> bool:
    try:
        response = httpx.get(url, timeout=timeout)
    except httpx.HTTPError:
        return False
    return response.status_code == 200


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Probe the API health endpoint")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=settings.port)
    args = parser.parse_args(argv)

    return 0 if probe(f"http://{args.host}:{args.port}/health") else 1


if __name__ == "__main__":
    sys.exit(main())
