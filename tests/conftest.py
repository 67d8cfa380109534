import os

# Selects the fast bcrypt cost and the in-memory database before settings load
os.environ["ENVIRONMENT"] = "test"

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

import models  # noqa: F401
from core.database import Base, create_engine, get_db
from core.dependencies import get_password_hasher, get_recipe_gateway, get_token_codec
from main import app
from schemas.auth_schemas import TokenClaims
from services.account_service import AccountService
from services.recipe_gateway import RecipeGateway


CATALOG_URL = "https://catalog.test/api/json/v1/1"

MEALS = {
    52772: {
        "idMeal": "52772",
        "strMeal": "Teriyaki Chicken Casserole",
        "strCategory": "Chicken",
        "strArea": "Japanese",
        "strMealThumb": "https://catalog.test/images/teriyaki.jpg",
        "strInstructions": "Preheat oven to 350F.",
    },
    52959: {
        "idMeal": "52959",
        "strMeal": "Baked salmon with fennel & tomatoes",
        "strCategory": "Seafood",
        "strArea": "British",
        "strMealThumb": "https://catalog.test/images/salmon.jpg",
        "strInstructions": "Heat oven to 200C.",
    },
}

INGREDIENTS = {
    "chicken": [52772],
    "salmon": [52959],
}


def _summary(meal):
    return {"strMeal": meal["strMeal"], "strMealThumb": meal["strMealThumb"], "idMeal": meal["idMeal"]}


def catalog_handler(request: httpx.Request) -> httpx.Response:
    """Answers like the public meal catalog does, including its null ``meals`` for misses"""
    endpoint = request.url.path.rsplit("/", 1)[-1]
    params = request.url.params
    meals = None

    if endpoint == "random.php":
        meals = [MEALS[52772]]
    elif endpoint == "list.php" and "c" in params:
        meals = [{"strCategory": "Chicken"}, {"strCategory": "Seafood"}]
    elif endpoint == "list.php" and "a" in params:
        meals = [{"strArea": "British"}, {"strArea": "Japanese"}]
    elif endpoint == "lookup.php":
        meal = MEALS.get(int(params["i"]))
        meals = [meal] if meal else None
    elif endpoint == "filter.php":
        if "c" in params:
            found = [m for m in MEALS.values() if m["strCategory"] == params["c"]]
        elif "a" in params:
            found = [m for m in MEALS.values() if m["strArea"] == params["a"]]
        else:
            found = [MEALS[i] for i in INGREDIENTS.get(params["i"], [])]
        meals = [_summary(m) for m in found] or None
    else:
        return httpx.Response(404, text="Not Found")

    return httpx.Response(200, json={"meals": meals})


def auth(token):
    return {"Authorization": f"Bearer {token}"}


def make_token(username, is_admin=False):
    return get_token_codec().issue(TokenClaims(username=username, is_admin=is_admin))


@pytest.fixture
async def engine():
    db_engine = create_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield db_engine
    await db_engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def gateway():
    recipe_gateway = RecipeGateway(
        CATALOG_URL,
        client=httpx.AsyncClient(transport=httpx.MockTransport(catalog_handler))
    )
    yield recipe_gateway
    await recipe_gateway.aclose()


@pytest.fixture
def accounts():
    return AccountService(get_password_hasher())


@pytest.fixture
async def users(db, accounts):
    """u1 and u2 are regular users; admin is an admin"""
    for username, is_admin in (("u1", False), ("u2", False), ("admin", True)):
        await accounts.register(
            db,
            username=username,
            password="password1",
            first_name=f"{username}-first",
            last_name=f"{username}-last",
            email=f"{username}@recipebox.io",
            is_admin=is_admin,
        )


@pytest.fixture
def u1_token():
    return make_token("u1")


@pytest.fixture
def u2_token():
    return make_token("u2")


@pytest.fixture
def admin_token():
    return make_token("admin", is_admin=True)


@pytest.fixture
async def client(session_factory, gateway):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_recipe_gateway] = lambda: gateway

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as ac:
        yield ac

    app.dependency_overrides.clear()
