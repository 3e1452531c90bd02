"""
NutriPlan API - User ORM Model.

User model with profile information, dietary targets and relationships
to all user-owned entities.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Float, Integer, JSON, String, Uuid
from sqlalchemy.orm import relationship

from nutriplan.database import Base


class User(Base):
    """
    User model representing application users.

    Stores authentication credentials, physical stats, dietary preferences
    and the macro targets derived from them.

    Attributes:
        id: Unique identifier (UUID).
        email: User's email address (unique, indexed).
        password_hash: Bcrypt-hashed password.
        name: User's display name.
        age: Age in years.
        sex: male/female/other.
        height_cm: Height in centimetres.
        weight_kg: Weight in kilograms.
        activity_level: sedentary/light/moderate/active/very_active.
        goal: lose_weight/maintain_weight/gain_weight/gain_muscle.
        diet_type: omnivore/vegetarian/vegan/keto/paleo/mediterranean/low_carb.
        allergies: JSON list of allergens.
        dislikes: JSON list of disliked foods.
        target_calories: Daily calorie target.
        target_protein: Daily protein target (g).
        target_carbs: Daily carbohydrate target (g).
        target_fat: Daily fat target (g).
        profile_completed: Whether every required profile field is set.
        created_at: Account creation timestamp.
        updated_at: Last profile update timestamp.
    """

    __tablename__ = "users"

    # Primary key
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid4,
        nullable=False
    )

    # Authentication
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True
    )
    password_hash = Column(
        String(255),
        nullable=False
    )
    name = Column(
        String(255),
        nullable=False,
        default=""
    )

    # Physical stats
    age = Column(Integer, nullable=True)
    sex = Column(String(20), nullable=True)
    height_cm = Column(Float, nullable=True)
    weight_kg = Column(Float, nullable=True)
    activity_level = Column(String(50), nullable=True)

    # Goals and diet
    goal = Column(String(50), nullable=True)
    diet_type = Column(String(50), nullable=True)
    allergies = Column(JSON, nullable=True)  # ["peanuts", "shellfish"]
    dislikes = Column(JSON, nullable=True)  # ["olives"]

    # Computed macro targets
    target_calories = Column(Integer, nullable=True)
    target_protein = Column(Float, nullable=True)
    target_carbs = Column(Float, nullable=True)
    target_fat = Column(Float, nullable=True)

    profile_completed = Column(
        Boolean,
        nullable=False,
        default=False
    )

    # Timestamps
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc)
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc)
    )

    # Relationships
    plans = relationship(
        "Plan",
        back_populates="user",
        cascade="all, delete-orphan"
    )
    quiz_attempts = relationship(
        "QuizAttempt",
        back_populates="user",
        cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email={self.email})>"
