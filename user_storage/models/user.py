"""
Table definition for stored users.

The repository talks to this table through hand-written SQL; the ORM class
exists so the schema can be created with Base.metadata.create_all().
"""

from sqlalchemy import Column, String

from user_storage.models.base import Base


class UserRecord(Base):
    """
    Row of the ``users`` table.

    Attributes:
        uuid: Canonical UUID string, primary key
        firstname, lastname, username, email: Identity fields
        password: Stored exactly as given (no hashing)
        ip, mac_address: Network identifiers (column ``macAddress``)
        website, image: Profile links
    """

    __tablename__ = "users"

    uuid = Column(String(36), primary_key=True, doc="UUID primary key")
    firstname = Column(String(255), nullable=False)
    lastname = Column(String(255), nullable=False)
    username = Column(String(255), nullable=False)
    password = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    ip = Column(String(64), nullable=False)
    mac_address = Column("macAddress", String(64), nullable=False)
    website = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False)

    def __repr__(self) -> str:
        """String representation (without the password)."""
        return f"UserRecord(uuid={self.uuid!r}, username={self.username!r})"
