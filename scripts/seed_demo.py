#!/usr/bin/env python3
"""Seed a Meridian DB with demo projects and indicators."""
from __future__ import annotations

import argparse
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import Session

from meridian.app.domain.models import Indicator, Project
from meridian.app.infra.db import init_db
from meridian.app.services.records import RecordStore

# (private, published) combinations, one record each
FLAG_COMBINATIONS = [
    (False, True),
    (True, True),
    (False, False),
    (True, False),
]


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Seed DB with demo records")
    parser.add_argument("--owner", default="demo-editor")
    parser.add_argument(
        "--database-url",
        default=os.getenv("DATABASE_URL", "sqlite:///./meridian.db"),
    )
    return parser.parse_args()


def seed(db: Session, owner: str) -> int:
    projects = RecordStore(db, Project)
    indicators = RecordStore(db, Indicator)
    count = 0
    for idx, (private, published) in enumerate(FLAG_COMBINATIONS, start=1):
        project = {
            "name": f"Demo Project {idx}",
            "private": private,
            "published": published,
            "category": ["demo"],
            "location": {"country": "NP", "district": f"district-{idx}"},
        }
        indicator = {
            "name": f"Demo Indicator {idx}",
            "private": private,
            "published": published,
            "unit": "percent",
        }
        for store, payload in ((projects, project), (indicators, indicator)):
            store.insert(
                name=payload["name"],
                owner=owner,
                data=payload,
                private=private,
                published=published,
            )
            count += 1
    return count


def main() -> int:
    args = parse_args()
    connect_args = {"check_same_thread": False} if args.database_url.startswith("sqlite") else {}
    engine = create_engine(args.database_url, future=True, connect_args=connect_args)
    init_db(engine)
    SessionLocal = sessionmaker(bind=engine, class_=Session, autoflush=False)
    with SessionLocal() as db:
        count = seed(db, args.owner)
        db.commit()
    print(f"Seeded {count} demo records.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
