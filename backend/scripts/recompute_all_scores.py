from __future__ import annotations

import argparse
import logging
import sys
from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from app.db.session import SessionLocal
from app.models.user import User
from app.services.recompute import recompute_scores
from app.services.storage import SqlAlchemyStorage
from app.utils.months import month_start


logger = logging.getLogger("twealth.jobs")


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Recompute Twealth scores for every active user.")
    parser.add_argument(
        "--month",
        type=date.fromisoformat,
        default=None,
        help="Any date inside the target month (YYYY-MM-DD). Defaults to the current month.",
    )
    return parser.parse_args(argv)


def recompute_all(month: date) -> tuple[int, list[int]]:
    with SessionLocal() as db:
        user_ids = list(db.scalars(select(User.id).where(User.is_active.is_(True)).order_by(User.id)).all())

    failed: list[int] = []
    for user_id in user_ids:
        with SessionLocal() as db:
            try:
                recompute_scores(SqlAlchemyStorage(db), user_id, month)
                db.commit()
            except (SQLAlchemyError, ValueError, ArithmeticError):
                db.rollback()
                logger.exception("Recompute failed for user %s month %s.", user_id, month.isoformat())
                failed.append(user_id)
    return len(user_ids), failed


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    args = _parse_args(argv)
    month = month_start(args.month or date.today())
    total, failed = recompute_all(month)
    logger.info("Recomputed %s users for %s; %s failed.", total, month.isoformat(), len(failed))
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
