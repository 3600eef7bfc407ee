"""
Declarative base for SQLAlchemy ORM models.
"""

from sqlalchemy.orm import declarative_base


# SQLAlchemy declarative base for all ORM models
Base = declarative_base()
