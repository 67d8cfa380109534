"""
RecipeBox Recipe Models
Saved catalog recipes and user-authored recipes
"""

from sqlalchemy import Integer, String, Text, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, Mapped, mapped_column

from core.database import Base


class SavedRecipe(Base):
    """Snapshot of an external catalog recipe saved by a user"""
    __tablename__ = "saved_recipes"
    __table_args__ = (
        UniqueConstraint("username", "recipe_id", name="uq_saved_recipes_username_recipe_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    recipe_id: Mapped[int] = mapped_column(Integer, nullable=False)

    # Captured at save time, not kept in sync with the catalog
    name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=True)
    area: Mapped[str] = mapped_column(Text, nullable=True)

    username: Mapped[str] = mapped_column(
        String(25), ForeignKey("users.username", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="saved_recipes")

    def __repr__(self):
        return f"<SavedRecipe(id={self.id}, recipe_id={self.recipe_id}, username={self.username})>"


class AuthoredRecipe(Base):
    """Freeform recipe written by a user"""
    __tablename__ = "authored_recipes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    ingredients: Mapped[str] = mapped_column(Text, nullable=False)
    instructions: Mapped[str] = mapped_column(Text, nullable=False)

    username: Mapped[str] = mapped_column(
        String(25), ForeignKey("users.username", ondelete="CASCADE"), nullable=False, index=True
    )

    user = relationship("User", back_populates="authored_recipes")

    def __repr__(self):
        return f"<AuthoredRecipe(id={self.id}, name={self.name}, username={self.username})>"
