"""Models module containing SQLAlchemy ORM models."""
from models.sitter import SitterProfile
from models.owner import Owner
from models.review import Review
from models.restaurant import Restaurant

__all__ = ["SitterProfile", "Owner", "Review", "Restaurant"]
