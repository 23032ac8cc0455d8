from contextlib import asynccontextmanager

from fastapi import FastAPI
from sqladmin import Admin

from app.admin.auth import AdminAuth
from app.admin.views import SiteSettingsAdmin, UserAdmin
from app.core.constants import ADMIN_UI_PATH
from app.core.cors import add_cors_middleware
from app.core.email import init_resend
from app.core.exception_handlers import register_exception_handlers
from app.core.http import close_gateway_client
from app.core.logging import configure_logging
from app.core.request_logging import add_request_logging_middleware
from app.db.engine import engine, init_db
from app.router import api_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    init_db()
    init_resend()
    yield
    await close_gateway_client()


app = FastAPI(title="OTPGate", version="0.1.0", lifespan=lifespan)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Mount SQLAdmin UI apart from the /admin API routes
admin = Admin(
    app=app,
    engine=engine,
    base_url=ADMIN_UI_PATH,
    authentication_backend=AdminAuth(),
)
admin.add_view(UserAdmin)
admin.add_view(SiteSettingsAdmin)
