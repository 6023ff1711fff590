"""Recompute cached decayed vote weights.

Usage::

    python -m roadmap_pulse.scripts.refresh_weights [--feedback-id ID]
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from roadmap_pulse.core.logging import configure_logging
from roadmap_pulse.db.session import SessionLocal
from roadmap_pulse.services.weight_refresh import DecayedWeightRefresher


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Refresh cached decayed vote weights.")
    parser.add_argument(
        "--feedback-id",
        help="Only refresh votes on this feedback item (default: every voted item).",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL for this run.")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    with SessionLocal() as session:
        refresher = DecayedWeightRefresher(session)
        if args.feedback_id:
            report = refresher.refresh_feedback(args.feedback_id)
        else:
            report = refresher.refresh_all()
        session.commit()

    print(f"[refresh_weights] updated {report.updated} vote(s); {len(report.failed)} failed")
    if report.failed:
        print("[refresh_weights] failed vote ids: " + ", ".join(str(vote_id) for vote_id in report.failed))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
