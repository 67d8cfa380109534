"""
RecipeBox User Management Endpoints
Accounts, saved catalog recipes and authored recipes
"""

from fastapi import APIRouter, status

from core.dependencies import (
    Accounts, AdminOnly, DBSession, LoggedIn, Recipes, SelfOrAdmin, SelfOrAdminClaims
)
from core.exceptions import ForbiddenError
from schemas.recipe_schemas import AuthoredRecipeNew
from schemas.user_schemas import UserNew, UserUpdate

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED, dependencies=[AdminOnly])
async def create_user(payload: UserNew, db: DBSession, accounts: Accounts):
    """
    Add a new user; not the registration endpoint

    Only admins may add users here, and the new user may be an admin.
    """
    user = await accounts.register(db, **payload.model_dump())
    return {"user": user}


@router.get("", dependencies=[AdminOnly])
async def list_users(db: DBSession, accounts: Accounts):
    """List all users"""
    users = await accounts.find_all(db)
    return {"users": users}


@router.get("/{username}", dependencies=[SelfOrAdmin])
async def get_user(username: str, db: DBSession, accounts: Accounts):
    """User profile with saved and authored recipes"""
    user = await accounts.get(db, username)
    return {"user": user}


@router.patch("/{username}", dependencies=[SelfOrAdmin])
async def update_user(
    username: str,
    payload: UserUpdate,
    claims: SelfOrAdminClaims,
    db: DBSession,
    accounts: Accounts
):
    """
    Partial update of firstName, lastName, password or email

    Only admins may change isAdmin, for themselves or anyone else.
    """
    if payload.is_admin is not None and not claims.is_admin:
        raise ForbiddenError("Only admins may change isAdmin")

    user = await accounts.update(db, username, payload.to_update_data())
    return {"user": user}


@router.delete("/{username}", dependencies=[SelfOrAdmin])
async def delete_user(username: str, db: DBSession, accounts: Accounts):
    await accounts.remove(db, username)
    return {"deleted": username}


@router.get("/{username}/createRecipe", dependencies=[SelfOrAdmin])
async def list_authored_recipes(username: str, db: DBSession, accounts: Accounts):
    recipes = await accounts.list_authored_recipes(db, username)
    return {"recipes": recipes}


@router.get("/{username}/createRecipe/{recipe_id}", dependencies=[SelfOrAdmin])
async def get_authored_recipe(username: str, recipe_id: int, db: DBSession, accounts: Accounts):
    recipe = await accounts.get_authored_recipe(db, username, recipe_id)
    return {"recipe": recipe}


@router.post("/{username}/createRecipe", status_code=status.HTTP_201_CREATED, dependencies=[LoggedIn])
async def create_authored_recipe(
    username: str,
    payload: AuthoredRecipeNew,
    db: DBSession,
    accounts: Accounts
):
    recipe = await accounts.create_authored_recipe(db, username, **payload.model_dump())
    return {"recipe": recipe}


@router.delete("/{username}/createRecipe/{recipe_id}", dependencies=[SelfOrAdmin])
async def delete_authored_recipe(username: str, recipe_id: int, db: DBSession, accounts: Accounts):
    await accounts.remove_authored_recipe(db, username, recipe_id)
    return {"deleted": recipe_id}


@router.post("/{username}/savedRecipe/{recipe_id}", dependencies=[LoggedIn])
async def save_recipe(
    username: str,
    recipe_id: int,
    db: DBSession,
    accounts: Accounts,
    gateway: Recipes
):
    """Save a catalog recipe; saving it again is a no-op returning null"""
    recipe = await accounts.save_recipe(db, username, recipe_id, gateway)
    return {"recipe": recipe}


@router.get("/{username}/savedRecipe", dependencies=[SelfOrAdmin])
async def list_saved_recipes(username: str, db: DBSession, accounts: Accounts):
    recipes = await accounts.list_saved_recipes(db, username)
    return {"recipes": recipes}


@router.delete("/{username}/savedRecipe/{entry_id}", dependencies=[SelfOrAdmin])
async def delete_saved_recipe(username: str, entry_id: int, db: DBSession, accounts: Accounts):
    await accounts.remove_saved_recipe(db, username, entry_id)
    return {"deleted": entry_id}
