"""
NutriPlan Quiz Card Seeding Script

Replaces the truth-or-dare card bank with the built-in 30 truth and 30 dare
cards. Existing quiz attempts are deleted first.

Usage:
    python scripts/seed_quiz_cards.py            # reseed (clears attempts)
    python scripts/seed_quiz_cards.py --if-empty # only seed an empty bank
"""
import argparse
import logging
import sys
from pathlib import Path

# Add backend to path
backend_root = Path(__file__).parent.parent
sys.path.insert(0, str(backend_root))

from nutriplan.database import get_session_factory, init_db  # noqa: E402
from nutriplan.services.quiz import ensure_quiz_cards, seed_quiz_cards  # noqa: E402

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    """Create tables if needed and load the card bank."""
    parser = argparse.ArgumentParser(description="Seed NutriPlan quiz cards")
    parser.add_argument(
        "--if-empty",
        action="store_true",
        help="Skip seeding when cards already exist"
    )
    args = parser.parse_args(argv)

    init_db()
    db = get_session_factory()()
    try:
        if args.if_empty:
            count = ensure_quiz_cards(db)
        else:
            count = seed_quiz_cards(db)
    finally:
        db.close()

    print(f"✓ {count} quiz cards seeded")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print("\n\nSeeding cancelled by user")
        sys.exit(1)
