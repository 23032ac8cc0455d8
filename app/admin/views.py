from sqladmin import ModelView

from app.site.models import SiteSettings
from app.user.models import User


class UserAdmin(ModelView, model=User):
    name = "User"
    name_plural = "Users"
    can_delete = False

    column_list = [
        User.name,
        User.email,
        User.mobile,
        User.auth_method,
        User.is_verified,
        User.is_admin,
        User.id,
        User.created_at,
        User.updated_at,
    ]

    column_searchable_list = [User.name, User.email, User.mobile]

    column_sortable_list = [
        User.name,
        User.email,
        User.mobile,
        User.is_admin,
        User.created_at,
        User.updated_at,
    ]

    # Secrets and one-time codes stay out of the UI entirely.
    form_excluded_columns = [
        User.password_hash,
        User.credential_version,
        User.otp,
        User.otp_expiry,
        User.otp_requested_at,
        User.reset_token,
        User.reset_token_expiry,
    ]
    column_details_exclude_list = form_excluded_columns


class SiteSettingsAdmin(ModelView, model=SiteSettings):
    name = "Site Settings"
    name_plural = "Site Settings"
    can_create = False
    can_delete = False

    column_list = [
        SiteSettings.waha_base_url,
        SiteSettings.waha_session_name,
        SiteSettings.updated_at,
    ]
    column_details_exclude_list = [SiteSettings.waha_api_key]
