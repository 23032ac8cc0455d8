"""
Model package.

`init_db()` calls `SQLModel.metadata.create_all`, which only sees table
models that have been imported. This module must import every SQLModel
`table=True` model to register it.
"""

# Import table models so SQLModel registers them in metadata.
from app.site.models import SiteSettings  # noqa: F401
from app.user.models import User  # noqa: F401
