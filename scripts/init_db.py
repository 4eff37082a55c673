"""
Create the scrape log and alert tables if they do not exist.
"""

from __future__ import annotations

import db.models  # noqa: F401  registers ORM models on Base.metadata
from db.base import Base
from db.session import get_engine


def main() -> int:
    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    print(f"Created tables: {', '.join(sorted(Base.metadata.tables))}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
