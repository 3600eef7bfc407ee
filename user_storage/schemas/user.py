"""
Domain model for users.
"""

import uuid as uuid_lib
from uuid import UUID

from pydantic import BaseModel, Field


class User(BaseModel):
    """
    A stored user.

    Attributes:
        uuid: Unique identifier, immutable once stored
        firstname: Given name
        lastname: Family name
        username: Login name
        password: Password exactly as supplied (not hashed)
        email: Email address
        ip: IP address
        mac_address: MAC address
        website: Personal website URL
        image: Avatar/image reference
    """
    uuid: UUID
    firstname: str
    lastname: str
    username: str
    password: str = Field(repr=False)
    email: str
    ip: str
    mac_address: str
    website: str
    image: str

    class Config:
        from_attributes = True
        json_schema_extra = {
            "example": {
                "uuid": "8a48aee3-1359-4a5e-a052-6523aca2d0b1",
                "firstname": "Ada",
                "lastname": "Lovelace",
                "username": "ada",
                "password": "analytical",
                "email": "ada@example.com",
                "ip": "192.168.0.10",
                "mac_address": "00:1B:44:11:3A:B7",
                "website": "https://example.com/ada",
                "image": "https://example.com/ada.png",
            }
        }


def new_user(**fields) -> User:
    """Build a User with a freshly generated uuid4."""
    return User(uuid=uuid_lib.uuid4(), **fields)
