"""
Recipe Box User Models
Credential store: user identity and bcrypt password hash
"""

from sqlalchemy import String, DateTime
from sqlalchemy.orm import relationship, Mapped, mapped_column
from datetime import datetime, timezone
from typing import List, TYPE_CHECKING
import uuid

from core.database import Base

if TYPE_CHECKING:
    from models.saved_recipes import SavedRecipe


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    """Registered user account"""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    username: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow, nullable=False)

    # Saved recipes are owned through SavedRecipe.user_id
    saved_recipes: Mapped[List["SavedRecipe"]] = relationship(
        "SavedRecipe",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="SavedRecipe.position",
    )

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email})>"
