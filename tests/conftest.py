"""Pytest configuration and fixtures."""

import os

# Set test environment variables BEFORE importing anything that loads settings
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "warning")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from training_log_api.config import Settings
from training_log_api.errors import DuplicateRecordError, PersistenceError
from training_log_api.models import (
    Animal,
    AnimalCreate,
    TrainingLog,
    TrainingLogCreate,
    User,
    UserPublic,
)
from training_log_api.storage.database import new_id

TEST_PASSWORD = "correct horse battery staple"


class FakeDatabase:
    """In-memory stand-in for :class:`Database` with the same async interface.

    Every call is recorded in ``calls`` so tests can assert that a request
    never reached persistence.
    """

    def __init__(self):
        self.users: dict[str, User] = {}
        self.animals: dict[str, Animal] = {}
        self.training_logs: dict[str, TrainingLog] = {}
        self.calls: list[str] = []
        self.fail_with: Exception | None = None

    def _record(self, name: str) -> None:
        self.calls.append(name)
        if self.fail_with is not None:
            raise self.fail_with

    async def create_user(self, first_name, last_name, email, password_hash, profile_picture=None):
        self._record("create_user")
        if any(u.email == email for u in self.users.values()):
            raise DuplicateRecordError("A user with this email already exists")
        user = User(
            id=new_id(),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password=password_hash,
            profile_picture=profile_picture,
        )
        self.users[user.id] = user
        return user

    async def get_user(self, user_id):
        self._record("get_user")
        return self.users.get(user_id)

    async def get_user_by_email(self, email):
        self._record("get_user_by_email")
        return next((u for u in self.users.values() if u.email == email), None)

    async def list_users(self, limit=10, offset=0):
        self._record("list_users")
        users = list(self.users.values())[offset : offset + limit]
        return [UserPublic.model_validate(u.model_dump()) for u in users]

    async def set_user_profile_picture(self, user_id, url):
        self._record("set_user_profile_picture")
        if user_id not in self.users:
            return False
        self.users[user_id] = self.users[user_id].model_copy(update={"profile_picture": url})
        return True

    async def count_users(self):
        self._record("count_users")
        return len(self.users)

    async def create_animal(self, animal: AnimalCreate, owner: str):
        self._record("create_animal")
        created = Animal(
            id=new_id(),
            name=animal.name,
            hours_trained=animal.hours_trained,
            owner=owner,
            date_of_birth=animal.date_of_birth,
            profile_picture=animal.profile_picture,
        )
        self.animals[created.id] = created
        return created

    async def get_animal(self, animal_id):
        self._record("get_animal")
        return self.animals.get(animal_id)

    async def list_animals(self, limit=10, offset=0):
        self._record("list_animals")
        return list(self.animals.values())[offset : offset + limit]

    async def set_animal_profile_picture(self, animal_id, url):
        self._record("set_animal_profile_picture")
        if animal_id not in self.animals:
            return False
        self.animals[animal_id] = self.animals[animal_id].model_copy(
            update={"profile_picture": url}
        )
        return True

    async def create_training_log(self, log: TrainingLogCreate, user: str):
        self._record("create_training_log")
        created = TrainingLog(
            id=new_id(),
            date=log.date,
            description=log.description,
            hours=log.hours,
            animal=log.animal,
            user=user,
            training_log_video=log.training_log_video,
        )
        self.training_logs[created.id] = created
        return created

    async def get_training_log(self, log_id):
        self._record("get_training_log")
        return self.training_logs.get(log_id)

    async def list_training_logs(self, limit=10, offset=0):
        self._record("list_training_logs")
        return list(self.training_logs.values())[offset : offset + limit]

    async def set_training_log_video(self, log_id, url):
        self._record("set_training_log_video")
        if log_id not in self.training_logs:
            return False
        self.training_logs[log_id] = self.training_logs[log_id].model_copy(
            update={"training_log_video": url}
        )
        return True


class FakeBlobStore:
    """In-memory stand-in for :class:`BlobStore`."""

    def __init__(self):
        self.objects: dict[str, tuple[bytes, str | None]] = {}
        self.deleted: list[str] = []
        self.fail_delete = False

    @staticmethod
    def new_key() -> str:
        return new_id()

    async def put(self, key, data, content_type=None):
        self.objects[key] = (data, content_type)

    async def delete(self, key):
        if self.fail_delete:
            raise PersistenceError("Delete failed: bucket unavailable")
        self.objects.pop(key, None)
        self.deleted.append(key)

    def public_url(self, key):
        return f"https://storage.test/training-media/{key}"


@pytest.fixture
def anyio_backend():
    """Use asyncio backend for async tests."""
    return "asyncio"


@pytest.fixture
def test_settings() -> Settings:
    """Settings with a fixed key and a cheap bcrypt cost."""
    return Settings(
        _env_file=None,
        secret_key="test-secret-key",
        bcrypt_rounds=4,
        max_upload_size_mb=1,
    )


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def fake_blobs() -> FakeBlobStore:
    return FakeBlobStore()


@pytest.fixture
def test_app(test_settings, fake_db, fake_blobs):
    """Application wired to in-memory collaborators."""
    from training_log_api.main import create_app

    return create_app(test_settings, db=fake_db, blob_store=fake_blobs)


@pytest_asyncio.fixture(scope="function")
async def client(test_app):
    """Create test client against the in-memory application."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
        timeout=5.0,
    ) as test_client:
        yield test_client


@pytest_asyncio.fixture(scope="function")
async def registered_user(client) -> dict:
    """Register a user through the API and return the response body plus password."""
    response = await client.post(
        "/api/users",
        json={
            "firstName": "Ada",
            "lastName": "Lovelace",
            "email": "ada@example.com",
            "password": TEST_PASSWORD,
        },
    )
    assert response.status_code == 200
    return {**response.json(), "plainPassword": TEST_PASSWORD}


@pytest_asyncio.fixture(scope="function")
async def auth_headers(client, registered_user) -> dict[str, str]:
    """Authorization header carrying a token for ``registered_user``."""
    response = await client.post(
        "/api/user/verify",
        json={"email": registered_user["email"], "password": TEST_PASSWORD},
    )
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.text}"}
