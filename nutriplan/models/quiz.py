"""
NutriPlan API - Quiz ORM Models.

Static truth-or-dare question bank plus per-user attempt log.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from nutriplan.database import Base


CARD_TYPES = ("truth", "dare")


class QuizCard(Base):
    """
    A truth question or a dare challenge.

    Attributes:
        type: "truth" or "dare".
        question: Card text.
        difficulty: easy/medium/hard.
        category: Topic slug, e.g. "hydration".
        is_active: Inactive cards are never drawn.
    """

    __tablename__ = "quiz_cards"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(10), nullable=False, index=True)
    question = Column(Text, nullable=False)
    difficulty = Column(String(10), nullable=False, default="easy")
    category = Column(String(50), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    attempts = relationship(
        "QuizAttempt",
        back_populates="card",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of QuizCard."""
        return f"<QuizCard(id={self.id}, type={self.type}, category={self.category})>"


class QuizAttempt(Base):
    """A user's attempt at a card, used for dedup and streak statistics."""

    __tablename__ = "quiz_attempts"
    __table_args__ = (
        Index("ix_quiz_attempts_user_completed_at", "user_id", "completed_at"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False
    )
    card_id = Column(
        Integer,
        ForeignKey("quiz_cards.id", ondelete="CASCADE"),
        nullable=False
    )

    completed = Column(Boolean, nullable=False, default=True)
    completed_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )

    user = relationship("User", back_populates="quiz_attempts")
    card = relationship("QuizCard", back_populates="attempts")

    def __repr__(self) -> str:
        """String representation of QuizAttempt."""
        return f"<QuizAttempt(id={self.id}, card_id={self.card_id}, completed={self.completed})>"
