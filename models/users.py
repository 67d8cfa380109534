"""
RecipeBox User Models
Database models for user accounts
"""

from sqlalchemy import String, Boolean, Text, false
from sqlalchemy.orm import relationship, Mapped, mapped_column

from core.database import Base


class User(Base):
    """Main user account model"""
    __tablename__ = "users"

    username: Mapped[str] = mapped_column(String(25), primary_key=True)
    password: Mapped[str] = mapped_column(Text, nullable=False)
    first_name: Mapped[str] = mapped_column(Text, nullable=False)
    last_name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    is_admin: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false(), nullable=False)

    # Relationships
    saved_recipes = relationship(
        "SavedRecipe", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    authored_recipes = relationship(
        "AuthoredRecipe", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    def __repr__(self):
        return f"<User(username={self.username}, is_admin={self.is_admin})>"
