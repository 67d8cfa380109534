import pytest
from sqlalchemy import text

from core.exceptions import BadRequestError, NotFoundError, UnauthorizedError

pytestmark = pytest.mark.usefixtures("users")


async def count(db, sql, **params):
    result = await db.execute(text(sql), params)
    return result.scalar_one()


async def test_authenticate_returns_profile_without_password(db, accounts):
    user = await accounts.authenticate(db, "u1", "password1")

    assert user.username == "u1"
    assert user.is_admin is False
    assert "password" not in user.model_dump(by_alias=True)


async def test_authenticate_failures_are_indistinguishable(db, accounts):
    with pytest.raises(UnauthorizedError) as wrong_password:
        await accounts.authenticate(db, "u1", "wrong-password")
    with pytest.raises(UnauthorizedError) as no_user:
        await accounts.authenticate(db, "nobody", "password1")

    assert wrong_password.value.message == no_user.value.message
    assert wrong_password.value.status_code == no_user.value.status_code == 401


async def test_register_duplicate_username_keeps_one_row(db, accounts):
    with pytest.raises(BadRequestError) as exc_info:
        await accounts.register(
            db,
            username="u1",
            password="password2",
            first_name="Other",
            last_name="Person",
            email="other@recipebox.io",
        )

    assert exc_info.value.message == "Duplicate username: u1"
    assert await count(db, "SELECT COUNT(*) FROM users WHERE username = :u", u="u1") == 1


async def test_register_duplicate_email_is_bad_request(db, accounts):
    with pytest.raises(BadRequestError) as exc_info:
        await accounts.register(
            db,
            username="u3",
            password="password3",
            first_name="Third",
            last_name="User",
            email="u1@recipebox.io",
        )

    assert "Duplicate email" in exc_info.value.message
    assert await count(db, "SELECT COUNT(*) FROM users WHERE username = :u", u="u3") == 0


async def test_register_stores_a_hash(db, accounts):
    result = await db.execute(text("SELECT password FROM users WHERE username = 'u1'"))
    stored = result.scalar_one()

    assert stored != "password1"
    assert accounts.hasher.verify("password1", stored)


async def test_find_all_is_ordered_by_username(db, accounts):
    users = await accounts.find_all(db)

    assert [u.username for u in users] == ["admin", "u1", "u2"]


async def test_get_nonexistent_user_is_not_found(db, accounts):
    with pytest.raises(NotFoundError):
        await accounts.get(db, "nonexistent")


async def test_get_without_children_has_empty_lists(db, accounts):
    user = await accounts.get(db, "u2")

    assert user.saved_recipes == []
    assert user.authored_recipes == []


async def test_get_assembles_saved_and_authored_recipes(db, accounts, gateway):
    await accounts.save_recipe(db, "u1", 52772, gateway)
    await accounts.create_authored_recipe(
        db, "u1", name="Toast", ingredients="bread", instructions="toast it"
    )

    user = await accounts.get(db, "u1")

    assert [r.recipe_id for r in user.saved_recipes] == [52772]
    assert [r.name for r in user.authored_recipes] == ["Toast"]


async def test_update_changes_only_given_fields(db, accounts):
    user = await accounts.update(db, "u1", {"firstName": "Aliya", "isAdmin": True})

    assert user.first_name == "Aliya"
    assert user.is_admin is True
    assert user.last_name == "u1-last"
    assert user.email == "u1@recipebox.io"


async def test_update_with_empty_data_changes_nothing(db, accounts):
    with pytest.raises(BadRequestError):
        await accounts.update(db, "u1", {})

    user = await accounts.get(db, "u1")
    assert user.first_name == "u1-first"


async def test_update_rejects_fields_outside_allow_list(db, accounts):
    with pytest.raises(BadRequestError) as exc_info:
        await accounts.update(db, "u1", {"username": "hijack"})

    assert "username" in exc_info.value.message
    assert await count(db, "SELECT COUNT(*) FROM users WHERE username = 'u1'") == 1


async def test_update_password_is_hashed_and_never_returned(db, accounts):
    user = await accounts.update(db, "u1", {"password": "new-password"})

    assert "password" not in user.model_dump(by_alias=True)
    assert await accounts.authenticate(db, "u1", "new-password")
    with pytest.raises(UnauthorizedError):
        await accounts.authenticate(db, "u1", "password1")


async def test_update_nonexistent_user_is_not_found(db, accounts):
    with pytest.raises(NotFoundError):
        await accounts.update(db, "nonexistent", {"firstName": "Nobody"})


async def test_update_to_taken_email_is_bad_request(db, accounts):
    with pytest.raises(BadRequestError):
        await accounts.update(db, "u1", {"email": "u2@recipebox.io"})

    user = await accounts.get(db, "u1")
    assert user.email == "u1@recipebox.io"


async def test_remove_cascades_to_recipes(db, accounts, gateway):
    await accounts.save_recipe(db, "u1", 52772, gateway)
    await accounts.create_authored_recipe(
        db, "u1", name="Toast", ingredients="bread", instructions="toast it"
    )

    await accounts.remove(db, "u1")

    with pytest.raises(NotFoundError):
        await accounts.get(db, "u1")
    assert await count(db, "SELECT COUNT(*) FROM saved_recipes WHERE username = 'u1'") == 0
    assert await count(db, "SELECT COUNT(*) FROM authored_recipes WHERE username = 'u1'") == 0


async def test_remove_nonexistent_user_is_not_found(db, accounts):
    with pytest.raises(NotFoundError):
        await accounts.remove(db, "nonexistent")


async def test_save_recipe_snapshots_catalog_fields(db, accounts, gateway):
    saved = await accounts.save_recipe(db, "u1", 52959, gateway)

    assert saved.recipe_id == 52959
    assert saved.name == "Baked salmon with fennel & tomatoes"
    assert saved.category == "Seafood"
    assert saved.area == "British"


async def test_save_recipe_twice_is_a_no_op(db, accounts, gateway):
    first = await accounts.save_recipe(db, "u1", 52772, gateway)
    second = await accounts.save_recipe(db, "u1", 52772, gateway)

    assert first is not None
    assert second is None
    assert await count(db, "SELECT COUNT(*) FROM saved_recipes WHERE username = 'u1'") == 1


async def test_same_recipe_can_be_saved_by_different_users(db, accounts, gateway):
    await accounts.save_recipe(db, "u1", 52772, gateway)
    other = await accounts.save_recipe(db, "u2", 52772, gateway)

    assert other is not None


async def test_save_unknown_catalog_recipe_is_not_found(db, accounts, gateway):
    with pytest.raises(NotFoundError):
        await accounts.save_recipe(db, "u1", 1, gateway)


async def test_save_recipe_for_unknown_user_is_not_found(db, accounts, gateway):
    with pytest.raises(NotFoundError):
        await accounts.save_recipe(db, "nobody", 52772, gateway)


async def test_remove_saved_recipe_checks_owner(db, accounts, gateway):
    saved = await accounts.save_recipe(db, "u1", 52772, gateway)

    with pytest.raises(NotFoundError):
        await accounts.remove_saved_recipe(db, "u2", saved.id)
    assert len(await accounts.list_saved_recipes(db, "u1")) == 1

    await accounts.remove_saved_recipe(db, "u1", saved.id)
    assert await accounts.list_saved_recipes(db, "u1") == []


async def test_get_authored_recipe_missing_is_bad_request(db, accounts):
    with pytest.raises(BadRequestError) as exc_info:
        await accounts.get_authored_recipe(db, "u1", 999)

    assert exc_info.value.message == "Can't find recipe: 999"


async def test_get_authored_recipe_of_other_user_is_bad_request(db, accounts):
    recipe = await accounts.create_authored_recipe(
        db, "u1", name="Toast", ingredients="bread", instructions="toast it"
    )

    with pytest.raises(BadRequestError):
        await accounts.get_authored_recipe(db, "u2", recipe.id)


async def test_remove_authored_recipe_leaves_siblings(db, accounts):
    first = await accounts.create_authored_recipe(
        db, "u1", name="Toast", ingredients="bread", instructions="toast it"
    )
    second = await accounts.create_authored_recipe(
        db, "u1", name="Tea", ingredients="leaves, water", instructions="steep"
    )

    await accounts.remove_authored_recipe(db, "u1", first.id)

    remaining = await accounts.list_authored_recipes(db, "u1")
    assert [r.id for r in remaining] == [second.id]


async def test_remove_authored_recipe_missing_is_not_found(db, accounts):
    with pytest.raises(NotFoundError) as exc_info:
        await accounts.remove_authored_recipe(db, "u1", 999)

    assert exc_info.value.message == "You don't have this recipe: 999"


async def test_list_recipes_for_unknown_user_is_not_found(db, accounts):
    with pytest.raises(NotFoundError):
        await accounts.list_saved_recipes(db, "nobody")
    with pytest.raises(NotFoundError):
        await accounts.list_authored_recipes(db, "nobody")


async def test_register_reports_username_collision_from_constraint(db, accounts, monkeypatch):
    async def username_free(db, username):
        return False

    monkeypatch.setattr(accounts, "_username_taken", username_free)

    with pytest.raises(BadRequestError) as exc_info:
        await accounts.register(
            db,
            username="u1",
            password="password2",
            first_name="Other",
            last_name="Person",
            email="fresh@recipebox.io",
        )

    assert exc_info.value.message == "Duplicate username: u1"
    assert await count(db, "SELECT COUNT(*) FROM users WHERE username = :u", u="u1") == 1
