"""Storefront FastAPI application.

Web server that processes commands synchronously via HTTP.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

# PROTEAN_ENV selects the config overlay from storefront/domain.toml:
#   - unset        → in-memory providers
#   - "production" → SQLite via SQLAlchemy (run `python src/manage.py setup-db` first)
from storefront.api.application import create_app
from storefront.domain import storefront

storefront.init()

app = create_app(storefront)
