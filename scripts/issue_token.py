#!/usr/bin/env python3
"""
Mint a development JWT accepted by a Meridian instance.

Usage:
    python scripts/issue_token.py --sub alice --role edit
"""
from __future__ import annotations

import argparse
import os
from datetime import datetime, timedelta, timezone

import jwt

from meridian.app.infra.auth import decode_secret


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Issue a signed bearer token.")
    parser.add_argument("--sub", required=True, help="Subject recorded as record owner")
    parser.add_argument(
        "--role",
        action="append",
        default=[],
        help="Role to grant; repeat for several (e.g. --role edit)",
    )
    parser.add_argument("--minutes", type=int, default=60)
    parser.add_argument("--secret", default=os.getenv("AUTH_SECRET", ""))
    parser.add_argument("--audience", default=os.getenv("AUTH_AUDIENCE"))
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    if not args.secret:
        print("AUTH_SECRET is not set (pass --secret).")
        return 1
    now = datetime.now(timezone.utc)
    claims = {
        "sub": args.sub,
        "roles": args.role,
        "iat": now,
        "exp": now + timedelta(minutes=args.minutes),
    }
    if args.audience:
        claims["aud"] = args.audience
    print(jwt.encode(claims, decode_secret(args.secret), algorithm="HS256"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
