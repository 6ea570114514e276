"""
tagalog_app.services

Service layer.

Responsibilities:
- Own transactions (commit/rollback) around repository calls.
- Log state changes.
"""

# Package marker.
