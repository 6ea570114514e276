"""
tagalog_app.db

Persistence package (SQLAlchemy async).

Responsibilities:
- Provide ORM models, column types, engine/session setup, and repositories.
"""

# Package marker.
