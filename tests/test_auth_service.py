import pytest

from todo.core.errors import DuplicateUsername, InvalidCredentials, NotFound, ValidationError
from todo.services.auth import AuthService


async def test_register_hashes_password(db):
    user = await AuthService(db).register("bob", "builder", full_name="Bob B")
    assert user.id is not None
    assert user.username == "bob"
    assert user.full_name == "Bob B"
    assert user.hashed_password != "builder"


async def test_duplicate_username_keeps_first_user(db):
    auth = AuthService(db)
    first = await auth.register("bob", "builder")

    with pytest.raises(DuplicateUsername):
        await auth.register("bob", "other")

    assert (await auth.login("bob", "builder")).id == first.id
    assert (await auth.find_by_id(first.id)).username == "bob"


@pytest.mark.parametrize("username, password", [("", "pw"), ("   ", "pw"), ("carol", "")])
async def test_register_requires_username_and_password(db, username, password):
    with pytest.raises(ValidationError):
        await AuthService(db).register(username, password)


async def test_login_with_correct_credentials(db):
    auth = AuthService(db)
    user = await auth.register("dave", "s3cret")
    assert (await auth.login("dave", "s3cret")).id == user.id


@pytest.mark.parametrize("username, password", [("dave", "wrong"), ("nobody", "s3cret")])
async def test_login_rejects_bad_credentials(db, username, password):
    auth = AuthService(db)
    await auth.register("dave", "s3cret")
    with pytest.raises(InvalidCredentials):
        await auth.login(username, password)


async def test_find_by_id_missing(db):
    with pytest.raises(NotFound):
        await AuthService(db).find_by_id(999)


async def test_unique_constraint_catches_concurrent_signup(db, monkeypatch):
    auth = AuthService(db)
    first = await auth.register("erin", "first")

    async def lookup_misses(username):
        # the other request's row is not visible yet
        return None

    monkeypatch.setattr(auth.users, "get_by_username", lookup_misses)
    with pytest.raises(DuplicateUsername):
        await auth.register("erin", "second")
    monkeypatch.undo()

    assert (await auth.login("erin", "first")).id == first.id
