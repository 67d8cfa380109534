"""
RecipeBox Account Service
Data access for user accounts, saved catalog recipes and authored recipes
"""

from typing import Any, Dict, List, Optional
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
import structlog

from core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from schemas.recipe_schemas import AuthoredRecipe, AuthoredRecipeSummary, SavedRecipe
from schemas.user_schemas import UserDetail, UserPublic
from services.auth_service import PasswordHasher
from services.recipe_gateway import RecipeGateway
from utils.sql import bind_params, sql_for_partial_update

logger = structlog.get_logger()

USER_COLUMNS = 'username, first_name AS "firstName", last_name AS "lastName", email, is_admin AS "isAdmin"'

# Fields a partial update may touch, and their column names where they differ
USER_UPDATE_FIELDS = ("firstName", "lastName", "password", "email", "isAdmin")
USER_UPDATE_COLUMNS = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}


class AccountService:
    """Account store; every method runs on the caller's session"""

    def __init__(self, hasher: PasswordHasher):
        self.hasher = hasher

    async def authenticate(self, db: AsyncSession, username: str, password: str) -> UserPublic:
        """
        Authenticate user with username, password

        Raises:
            UnauthorizedError: the same error whether the user is unknown or
            the password is wrong
        """
        result = await db.execute(
            text(f"""SELECT {USER_COLUMNS}, password
                     FROM users
                     WHERE username = :username"""),
            {"username": username}
        )
        row = result.mappings().first()

        if row and self.hasher.verify(password, row["password"]):
            return UserPublic.model_validate(dict(row))

        logger.info("Authentication failed", username=username)
        raise UnauthorizedError("Invalid username/password")

    async def register(
        self,
        db: AsyncSession,
        *,
        username: str,
        password: str,
        first_name: str,
        last_name: str,
        email: str,
        is_admin: bool = False
    ) -> UserPublic:
        """
        Register user with data

        Raises:
            BadRequestError: on duplicate username or email
        """
        if await self._username_taken(db, username):
            raise BadRequestError(f"Duplicate username: {username}")

        hashed_password = self.hasher.hash(password)

        try:
            result = await db.execute(
                text(f"""INSERT INTO users
                         (username, password, first_name, last_name, email, is_admin)
                         VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
                         RETURNING {USER_COLUMNS}"""),
                {
                    "username": username,
                    "password": hashed_password,
                    "first_name": first_name,
                    "last_name": last_name,
                    "email": email,
                    "is_admin": is_admin,
                }
            )
            row = result.mappings().one()
            await db.commit()
        except IntegrityError as e:
            await db.rollback()
            # Both constraint names (uq_users_email, users.email) mention the column
            if "email" in str(e.orig):
                raise BadRequestError(f"Duplicate email: {email}")
            raise BadRequestError(f"Duplicate username: {username}")

        logger.info("User registered", username=username, is_admin=is_admin)
        return UserPublic.model_validate(dict(row))

    async def find_all(self, db: AsyncSession) -> List[UserPublic]:
        """Find all users, ordered by username"""
        result = await db.execute(
            text(f"""SELECT {USER_COLUMNS}
                     FROM users
                     ORDER BY username""")
        )
        return [UserPublic.model_validate(dict(row)) for row in result.mappings().all()]

    async def get(self, db: AsyncSession, username: str) -> UserDetail:
        """
        Given a username, return the user with saved and authored recipes

        Raises:
            NotFoundError: if the user does not exist
        """
        user = await self._get_public(db, username)
        saved = await self._saved_recipes(db, username)
        authored = await self._authored_recipes(db, username)

        return UserDetail(
            **user.model_dump(),
            saved_recipes=saved,
            authored_recipes=authored,
        )

    async def update(self, db: AsyncSession, username: str, data: Dict[str, Any]) -> UserPublic:
        """
        Partial update of a user; only the provided fields change

        Data can include: firstName, lastName, password, email, isAdmin.
        This can set a new password or grant admin, so routes must have
        authorized the caller first.

        Raises:
            BadRequestError: on empty data, fields outside the allow-list or a
            duplicate email
            NotFoundError: if the user does not exist
        """
        unknown = [key for key in data if key not in USER_UPDATE_FIELDS]
        if unknown:
            raise BadRequestError(f"Cannot update fields: {', '.join(unknown)}")

        data = dict(data)
        if "password" in data:
            data["password"] = self.hasher.hash(data["password"])

        set_cols, values = sql_for_partial_update(data, USER_UPDATE_COLUMNS)
        username_idx = len(values) + 1

        query = text(f"""UPDATE users
                         SET {set_cols}
                         WHERE username = :p{username_idx}
                         RETURNING {USER_COLUMNS}""")
        try:
            result = await db.execute(query, bind_params([*values, username]))
            row = result.mappings().first()
        except IntegrityError:
            await db.rollback()
            raise BadRequestError(f"Duplicate email: {data.get('email')}")

        if not row:
            raise NotFoundError(f"No user: {username}")

        await db.commit()
        logger.info("User updated", username=username, fields=list(data.keys()))
        return UserPublic.model_validate(dict(row))

    async def remove(self, db: AsyncSession, username: str) -> None:
        """Delete given user; saved and authored recipes go with it"""
        result = await db.execute(
            text("""DELETE
                    FROM users
                    WHERE username = :username
                    RETURNING username"""),
            {"username": username}
        )
        if not result.first():
            raise NotFoundError(f"No user: {username}")

        await db.commit()
        logger.info("User removed", username=username)

    async def save_recipe(
        self,
        db: AsyncSession,
        username: str,
        recipe_id: int,
        gateway: RecipeGateway
    ) -> Optional[SavedRecipe]:
        """
        Save a catalog recipe for a user

        Returns the new entry, or None when the user already saved it.
        """
        recipe = await gateway.get_by_id(recipe_id)
        await self._ensure_user(db, username)

        result = await db.execute(
            text("""INSERT INTO saved_recipes (recipe_id, name, category, area, username)
                    VALUES (:recipe_id, :name, :category, :area, :username)
                    ON CONFLICT (username, recipe_id) DO NOTHING
                    RETURNING id, recipe_id AS "recipeId", name, category, area"""),
            {
                "recipe_id": recipe.id,
                "name": recipe.name,
                "category": recipe.category,
                "area": recipe.area,
                "username": username,
            }
        )
        row = result.mappings().first()
        await db.commit()

        if row is None:
            logger.info("Recipe already saved", username=username, recipe_id=recipe.id)
            return None

        logger.info("Recipe saved", username=username, recipe_id=recipe.id)
        return SavedRecipe.model_validate(dict(row))

    async def list_saved_recipes(self, db: AsyncSession, username: str) -> List[SavedRecipe]:
        """Saved recipes of an existing user"""
        await self._ensure_user(db, username)
        return await self._saved_recipes(db, username)

    async def remove_saved_recipe(self, db: AsyncSession, username: str, entry_id: int) -> None:
        """
        Delete a saved entry owned by ``username``

        Raises:
            NotFoundError: if no such entry belongs to the user
        """
        result = await db.execute(
            text("""DELETE
                    FROM saved_recipes
                    WHERE id = :id AND username = :username
                    RETURNING id"""),
            {"id": entry_id, "username": username}
        )
        if not result.first():
            raise NotFoundError(f"No saved recipe: {entry_id}")

        await db.commit()
        logger.info("Saved recipe removed", username=username, entry_id=entry_id)

    async def create_authored_recipe(
        self,
        db: AsyncSession,
        username: str,
        *,
        name: str,
        ingredients: str,
        instructions: str
    ) -> AuthoredRecipe:
        """Create a recipe written by ``username``"""
        await self._ensure_user(db, username)

        result = await db.execute(
            text("""INSERT INTO authored_recipes (name, ingredients, instructions, username)
                    VALUES (:name, :ingredients, :instructions, :username)
                    RETURNING id, name, ingredients, instructions, username"""),
            {
                "name": name,
                "ingredients": ingredients,
                "instructions": instructions,
                "username": username,
            }
        )
        row = result.mappings().one()
        await db.commit()

        logger.info("Authored recipe created", username=username, entry_id=row["id"])
        return AuthoredRecipe.model_validate(dict(row))

    async def list_authored_recipes(self, db: AsyncSession, username: str) -> List[AuthoredRecipeSummary]:
        """Authored recipes of an existing user"""
        await self._ensure_user(db, username)
        return await self._authored_recipes(db, username)

    async def get_authored_recipe(self, db: AsyncSession, username: str, entry_id: int) -> AuthoredRecipe:
        """
        Get a single authored recipe owned by ``username``

        Raises:
            BadRequestError: if no such recipe belongs to the user
        """
        result = await db.execute(
            text("""SELECT id, name, ingredients, instructions, username
                    FROM authored_recipes
                    WHERE id = :id AND username = :username"""),
            {"id": entry_id, "username": username}
        )
        row = result.mappings().first()
        if not row:
            raise BadRequestError(f"Can't find recipe: {entry_id}")

        return AuthoredRecipe.model_validate(dict(row))

    async def remove_authored_recipe(self, db: AsyncSession, username: str, entry_id: int) -> None:
        """
        Delete a single authored recipe owned by ``username``

        Raises:
            NotFoundError: if no such recipe belongs to the user
        """
        result = await db.execute(
            text("""DELETE
                    FROM authored_recipes
                    WHERE id = :id AND username = :username
                    RETURNING id"""),
            {"id": entry_id, "username": username}
        )
        if not result.first():
            raise NotFoundError(f"You don't have this recipe: {entry_id}")

        await db.commit()
        logger.info("Authored recipe removed", username=username, entry_id=entry_id)

    async def _get_public(self, db: AsyncSession, username: str) -> UserPublic:
        result = await db.execute(
            text(f"""SELECT {USER_COLUMNS}
                     FROM users
                     WHERE username = :username"""),
            {"username": username}
        )
        row = result.mappings().first()
        if not row:
            raise NotFoundError(f"No user: {username}")
        return UserPublic.model_validate(dict(row))

    async def _username_taken(self, db: AsyncSession, username: str) -> bool:
        result = await db.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": username}
        )
        return result.first() is not None

    async def _ensure_user(self, db: AsyncSession, username: str) -> None:
        result = await db.execute(
            text("SELECT username FROM users WHERE username = :username"),
            {"username": username}
        )
        if not result.first():
            raise NotFoundError(f"No user: {username}")

    async def _saved_recipes(self, db: AsyncSession, username: str) -> List[SavedRecipe]:
        result = await db.execute(
            text("""SELECT id, recipe_id AS "recipeId", name, category, area
                    FROM saved_recipes
                    WHERE username = :username
                    ORDER BY id"""),
            {"username": username}
        )
        return [SavedRecipe.model_validate(dict(row)) for row in result.mappings().all()]

    async def _authored_recipes(self, db: AsyncSession, username: str) -> List[AuthoredRecipeSummary]:
        result = await db.execute(
            text("""SELECT id, name
                    FROM authored_recipes
                    WHERE username = :username
                    ORDER BY id"""),
            {"username": username}
        )
        return [AuthoredRecipeSummary.model_validate(dict(row)) for row in result.mappings().all()]
