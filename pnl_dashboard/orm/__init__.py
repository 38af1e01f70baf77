"""SQLAlchemy ORM models that have no Pydantic counterpart in ``pnl_dashboard.models``."""

from pnl_dashboard.orm.models import User

__all__ = ["User"]
