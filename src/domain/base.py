"""Shared base for persisted domain entities"""

import uuid
from sqlmodel import SQLModel


def generate_uuid() -> str:
    """Generate a string UUID for text primary keys"""
    return str(uuid.uuid4())


class BaseModel(SQLModel):
    """Base class for all SQLModel tables in this service"""
    pass
