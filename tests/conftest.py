import atexit
import os
import shutil
import tempfile

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# keep the app's import-time engine away from the working directory
_scratch = tempfile.mkdtemp(prefix="profile_api_tests_")
atexit.register(shutil.rmtree, _scratch, ignore_errors=True)
os.environ.setdefault("DATABASE_URL", f"sqlite:///{os.path.join(_scratch, 'app.db')}")
os.environ.setdefault("IMAGES_DIR", os.path.join(_scratch, "images"))

from profile_api.core.storage import ImageStorage  # noqa: E402
from profile_api.main import app  # noqa: E402
from profile_api.models.database import Base, get_db  # noqa: E402
from profile_api.models.user import User  # noqa: E402
from profile_api.routers.users import get_image_storage  # noqa: E402


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def images_dir(tmp_path):
    # not created up front: storing must create it
    return tmp_path / "images"


@pytest.fixture
def storage(images_dir):
    return ImageStorage(images_dir)


@pytest.fixture
def client(engine, storage):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_image_storage] = lambda: storage
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def all_users(db):
    def _all_users():
        db.expire_all()
        return db.query(User).order_by(User.id).all()

    return _all_users


@pytest.fixture
def png_bytes():
    # PNG signature plus some filler; content is never inspected
    return b"\x89PNG\r\n\x1a\n" + os.urandom(256)
