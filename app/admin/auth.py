from sqladmin.authentication import AuthenticationBackend
from sqlmodel import Session
from starlette.requests import Request

from app.core.security import verify_password
from app.core.settings import get_settings
from app.db.engine import engine
from app.user.models import User
from app.user.service import get_user_by_email


def check_admin_credentials(session: Session, email: str, password: str) -> User | None:
    """Return the admin account matching email/password, or None."""
    user = get_user_by_email(session, email.strip())
    if user is None or not user.is_admin:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


class AdminAuth(AuthenticationBackend):
    """SQLAdmin auth backed by admin accounts in the credential store."""

    def __init__(self) -> None:
        # SQLAdmin uses this secret internally (e.g. login form protection).
        # It must be stable and should match the session middleware secret.
        settings = get_settings()
        super().__init__(secret_key=settings.session_secret_key)

    async def login(self, request: Request) -> bool:
        form = await request.form()
        email = str(form.get("username", form.get("email", "")))
        password = str(form.get("password", ""))

        with Session(engine) as session:
            user = check_admin_credentials(session, email, password)
            if user is None:
                return False
            request.session["admin_user_id"] = str(user.id)
        return True

    async def logout(self, request: Request) -> bool:
        request.session.clear()
        return True

    async def authenticate(self, request: Request) -> bool:
        return bool(request.session.get("admin_user_id"))
