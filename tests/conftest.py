import inspect
import os
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, MagicMock

# Settings are read when app.db.engine is imported; give them a test secret
# and an in-memory database before anything from app is loaded.
os.environ.setdefault("JWT_SECRET_KEY", "test-jwt-secret-key-0123456789")
os.environ.setdefault("DATABASE_URL", "sqlite://")

import anyio  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import Session, SQLModel, create_engine  # noqa: E402
from sqlmodel.pool import StaticPool  # noqa: E402

from app.auth.tokens import TokenService  # noqa: E402
from app.core.security import hash_password  # noqa: E402
from app.core.settings import Settings, get_settings  # noqa: E402
from app.db.engine import get_session  # noqa: E402
from app.gateway.client import WahaClient  # noqa: E402
from app.gateway.dependencies import get_waha_client  # noqa: E402
from app.main import app  # noqa: E402
from app.site.models import SITE_SETTINGS_ID, SiteSettings  # noqa: E402
from app.user.models import AuthMethod, User  # noqa: E402

TEST_PASSWORD = "correct-horse-battery"


def pytest_configure(config: pytest.Config) -> None:
    # Tests use @pytest.mark.asyncio, but we intentionally rely on anyio.
    config.addinivalue_line(
        "markers",
        "asyncio: run async tests using anyio (project-local hook)",
    )


@pytest.hookimpl(tryfirst=True)
def pytest_pyfunc_call(pyfuncitem: pytest.Function) -> bool | None:
    """Run @pytest.mark.asyncio tests with anyio.

    This avoids adding an external pytest-asyncio dependency.
    """
    if pyfuncitem.get_closest_marker("asyncio") is None:
        return None

    test_func = pyfuncitem.obj
    if not inspect.iscoroutinefunction(test_func):
        return None

    funcargs = {
        name: pyfuncitem.funcargs[name] for name in pyfuncitem._fixtureinfo.argnames
    }

    async def _run_async_test() -> None:
        await test_func(**funcargs)

    anyio.run(_run_async_test)
    return True


class FrozenClock:
    """Callable clock for services that take ``clock=``; advance it by hand."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture(name="clock")
def clock_fixture():
    return FrozenClock(datetime(2025, 1, 15, 12, 0, 0, tzinfo=UTC))


@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory SQLite engine shared by every connection in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture(name="session")
def session_fixture(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture(name="settings")
def settings_fixture():
    return Settings(
        env_name="test",
        app_name="TestApp",
        database_url="sqlite://",
        jwt_secret_key="test-jwt-secret-key-0123456789",
        token_expires_days=30,
        otp_expires_minutes=5,
        otp_resend_cooldown_seconds=30,
        reset_token_expires_minutes=60,
        waha_default_api_key="env-default-key",
        session_secret_key="test-session-secret",
    )


@pytest.fixture(name="token_service")
def token_service_fixture(settings: Settings):
    return TokenService(
        secret_key=settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=settings.token_expires_in,
    )


def _save(session: Session, instance):
    session.add(instance)
    session.commit()
    session.refresh(instance)
    return instance


@pytest.fixture(name="test_user")
def test_user_fixture(session: Session):
    """Email/password account without admin rights."""
    return _save(
        session,
        User.new_full_account(
            name="Test User",
            email="test@example.com",
            password_hash=hash_password(TEST_PASSWORD),
        ),
    )


@pytest.fixture(name="admin_user")
def admin_user_fixture(session: Session):
    user = User.new_full_account(
        name="Admin",
        email="admin@example.com",
        password_hash=hash_password(TEST_PASSWORD),
    )
    user.is_admin = True
    return _save(session, user)


@pytest.fixture(name="mobile_user")
def mobile_user_fixture(session: Session):
    """Verified mobile-only account with no outstanding code."""
    return _save(
        session,
        User(
            name="Mobile User",
            mobile="+919812345678",
            auth_method=AuthMethod.mobile,
            is_verified=True,
        ),
    )


@pytest.fixture(name="site_settings")
def site_settings_fixture(session: Session):
    """Gateway connection fully configured."""
    return _save(
        session,
        SiteSettings(
            id=SITE_SETTINGS_ID,
            waha_base_url="http://waha.test:3000",
            waha_session_name="default",
            waha_api_key="site-key",
        ),
    )


@pytest.fixture(name="user_headers")
def user_headers_fixture(test_user: User, token_service: TokenService):
    return {"Authorization": f"Bearer {token_service.issue_for_user(test_user)}"}


@pytest.fixture(name="admin_headers")
def admin_headers_fixture(admin_user: User, token_service: TokenService):
    return {"Authorization": f"Bearer {token_service.issue_for_user(admin_user)}"}


@pytest.fixture(name="mock_waha")
def mock_waha_fixture():
    """WahaClient double; send_text succeeds unless a test says otherwise."""
    mock = MagicMock(spec=WahaClient)
    mock.send_text = AsyncMock(return_value=True)
    return mock


@pytest.fixture(name="client")
def client_fixture(session: Session, settings: Settings, mock_waha: MagicMock):
    """Test client with database, settings and gateway overridden."""

    def get_session_override():
        return session

    def get_settings_override():
        return settings

    def get_waha_client_override():
        return mock_waha

    app.dependency_overrides[get_session] = get_session_override
    app.dependency_overrides[get_settings] = get_settings_override
    app.dependency_overrides[get_waha_client] = get_waha_client_override

    client = TestClient(app)
    yield client

    app.dependency_overrides.clear()


@pytest.fixture(name="password")
def password_fixture():
    """Plain-text password of test_user and admin_user."""
    return TEST_PASSWORD
