# portfolio/schemas/__init__.py
from portfolio.schemas.base import CamelModel, not_null

__all__ = ["CamelModel", "not_null"]
