"""
NutriPlan API - Truth or Dare Quiz Service.

Random card draws that skip the user's most recently completed cards,
attempt recording and play statistics (totals, day streak, categories).
"""

import logging
import random
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.orm import Session, selectinload

from settings import settings
from nutriplan.models import CARD_TYPES, QuizAttempt, QuizCard
from nutriplan.services.quiz_cards import all_cards
from nutriplan.utils.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


MAX_STREAK_DAYS = 365
RECENT_ATTEMPTS_SHOWN = 10


def _active_cards(db: Session, card_type: Optional[str], exclude_ids: Iterable[int] = ()) -> List[QuizCard]:
    query = select(QuizCard).where(QuizCard.is_active.is_(True))
    if card_type:
        query = query.where(QuizCard.type == card_type)
    exclude = list(exclude_ids)
    if exclude:
        query = query.where(QuizCard.id.not_in(exclude))
    return list(db.scalars(query))


def recent_card_ids(db: Session, user_id: UUID, window: Optional[int] = None) -> List[int]:
    """Card ids of the user's most recent attempts (completed or not)."""
    window = window or settings.QUIZ_RECENT_WINDOW
    return list(db.scalars(
        select(QuizAttempt.card_id)
        .where(QuizAttempt.user_id == user_id)
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
        .limit(window)
    ))


def draw_card(
    db: Session,
    user_id: UUID,
    card_type: Optional[str] = None,
    rng: Optional[random.Random] = None
) -> QuizCard:
    """
    Pick a random active card, avoiding recently seen ones.

    When every matching card was seen recently the exclusion is dropped.

    Raises:
        ValidationError: card_type is not truth/dare.
        NotFoundError: No active card of that type exists.
    """
    if card_type and card_type not in CARD_TYPES:
        raise ValidationError('Invalid card type. Must be "truth" or "dare"')

    rng = rng or random
    candidates = _active_cards(db, card_type, recent_card_ids(db, user_id))
    if not candidates:
        candidates = _active_cards(db, card_type)
    if not candidates:
        raise NotFoundError("No quiz cards available")

    return rng.choice(candidates)


def record_attempt(db: Session, user_id: UUID, card_id: int, completed: Optional[bool] = True) -> QuizAttempt:
    """
    Record an attempt at a card. ``completed`` defaults to True.

    Raises:
        NotFoundError: Unknown card.
    """
    if db.get(QuizCard, card_id) is None:
        raise NotFoundError("Quiz card not found")

    attempt = QuizAttempt(
        user_id=user_id,
        card_id=card_id,
        completed=completed is not False,
        completed_at=datetime.now(timezone.utc),
    )
    db.add(attempt)
    db.commit()
    db.refresh(attempt)
    return attempt


def _local_date(moment: datetime) -> date:
    # SQLite hands back naive datetimes holding the stored UTC clock
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone().date()


def calculate_streak(completion_times: Iterable[datetime], today: Optional[date] = None) -> int:
    """
    Consecutive local days, counting back from today, with at least one
    completion. A day without one ends the streak.
    """
    days = {_local_date(moment) for moment in completion_times}
    current = today or datetime.now().astimezone().date()

    streak = 0
    while current in days and streak < MAX_STREAK_DAYS:
        streak += 1
        current -= timedelta(days=1)
    return streak


def quiz_stats(db: Session, user_id: UUID) -> Dict[str, Any]:
    """Completion totals, streak, last played, per-category counts and recent attempts."""
    attempts = list(db.scalars(
        select(QuizAttempt)
        .options(selectinload(QuizAttempt.card))
        .where(QuizAttempt.user_id == user_id, QuizAttempt.completed.is_(True))
        .order_by(QuizAttempt.completed_at.desc(), QuizAttempt.id.desc())
    ))

    types = Counter(attempt.card.type for attempt in attempts)
    return {
        "total_completed": len(attempts),
        "truths_completed": types.get("truth", 0),
        "dares_completed": types.get("dare", 0),
        "streak": calculate_streak(attempt.completed_at for attempt in attempts),
        "last_played": attempts[0].completed_at if attempts else None,
        "category_stats": dict(Counter(attempt.card.category for attempt in attempts)),
        "recent_attempts": [
            {
                "id": attempt.id,
                "card_type": attempt.card.type,
                "category": attempt.card.category,
                "completed_at": attempt.completed_at,
            }
            for attempt in attempts[:RECENT_ATTEMPTS_SHOWN]
        ],
    }


def seed_quiz_cards(db: Session) -> int:
    """Replace the card bank (and all attempts) with the built-in cards."""
    db.execute(delete(QuizAttempt))
    db.execute(delete(QuizCard))
    cards = [QuizCard(**card) for card in all_cards()]
    db.add_all(cards)
    db.commit()
    logger.info(f"Seeded {len(cards)} quiz cards")
    return len(cards)


def ensure_quiz_cards(db: Session) -> int:
    """Seed the card bank only when it is empty. Returns cards added."""
    if db.scalar(select(QuizCard.id).limit(1)) is not None:
        return 0
    return seed_quiz_cards(db)
