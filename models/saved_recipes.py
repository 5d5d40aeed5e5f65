"""
Recipe Box Saved Recipe Models
Per-user saved recipe metadata and display position
"""

from sqlalchemy import String, Integer, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime, timezone
from enum import Enum as PyEnum
from typing import TYPE_CHECKING
import uuid

from core.database import Base

if TYPE_CHECKING:
    from models.users import User


class MealCategory(str, PyEnum):
    """Meal slot a saved recipe is filed under"""
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class SavedRecipe(Base):
    """A provider recipe bookmarked by a user"""
    __tablename__ = "saved_recipes"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    recipe_id: Mapped[str] = mapped_column(String(64), nullable=False)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    image: Mapped[str] = mapped_column(String(1000), nullable=False)
    category: Mapped[MealCategory] = mapped_column(
        Enum(MealCategory, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="saved_recipes")

    def __repr__(self):
        return f"<SavedRecipe(id={self.id}, recipe_id={self.recipe_id}, position={self.position})>"
