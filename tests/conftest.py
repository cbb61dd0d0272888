"""
Shared fixtures: in-memory database, signed test tokens and fake collaborators
"""

from datetime import datetime, timedelta, timezone
from io import BytesIO

import docx
import jwt
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from covercraft.core.errors import StorageError
from covercraft.core.security import TokenVerifier, get_token_verifier
from covercraft.db.session import Base, get_db, init_db
from covercraft.services.generation_client import get_generation_client
from covercraft.tools.file_uploader import ResumeStore, get_resume_store

TEST_SECRET = "test-jwt-secret-with-enough-length-for-hs256"
TEST_AUDIENCE = "authenticated"


def make_token(user_id="user-1", email="jane@example.com", provider="email", secret=TEST_SECRET, expires_in=3600):
    """Sign an access token shaped like the identity provider's."""
    claims = {
        "sub": user_id,
        "email": email,
        "aud": TEST_AUDIENCE,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
        "app_metadata": {"provider": provider},
    }
    return jwt.encode(claims, secret, algorithm="HS256")


def auth_headers(user_id="user-1", **kwargs):
    return {"Authorization": f"Bearer {make_token(user_id, **kwargs)}"}


def make_docx_bytes(*paragraphs):
    document = docx.Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


class EchoGenerationClient:
    """Returns the final prompt unchanged."""

    def __init__(self):
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        return prompt


class FakeResumeStore:
    """In-memory stand-in for the Cloudinary-backed store."""

    def __init__(self):
        self.folder = "resumes"
        self.files = {}
        self.deleted = []
        self.fail_download = False
        self.fail_delete = False

    def build_path(self, owner_id, extension):
        return f"resumes/{owner_id}/file-{len(self.files) + 1}.{extension}"

    def is_owned_by(self, storage_path, owner_id):
        return ResumeStore.is_owned_by(self, storage_path, owner_id)

    def upload(self, data, storage_path):
        self.files[storage_path] = data
        return storage_path

    def signed_url(self, storage_path, expires_in=None):
        return f"https://storage.example.com/{storage_path}?signature=abc"

    def download(self, storage_path):
        if self.fail_download or storage_path not in self.files:
            raise StorageError("Failed to download resume file")
        return self.files[storage_path]

    def delete(self, storage_path):
        if self.fail_delete:
            raise StorageError("Failed to delete resume file")
        self.deleted.append(storage_path)
        self.files.pop(storage_path, None)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def generation_client():
    return EchoGenerationClient()


@pytest.fixture
def resume_store():
    return FakeResumeStore()


@pytest.fixture
def client(engine, generation_client, resume_store):
    """TestClient wired to the in-memory database and fake collaborators.

    The lifespan is not entered, so nothing touches the configured database.
    """
    from main import app

    TestingSession = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_verifier] = lambda: TokenVerifier(TEST_SECRET, audience=TEST_AUDIENCE)
    app.dependency_overrides[get_generation_client] = lambda: generation_client
    app.dependency_overrides[get_resume_store] = lambda: resume_store

    yield TestClient(app)

    app.dependency_overrides.clear()
