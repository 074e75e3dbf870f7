import uuid
from sqlalchemy import Column, String, DateTime, Text
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()

# Fields safe to return to clients, in response order
PUBLIC_FIELDS = ('id', 'name', 'email', 'photo', 'phone', 'bio')


class User(Base):
    __tablename__ = 'users'

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False)

    # The unique index is the authority on email uniqueness
    email = Column(String(255), unique=True, nullable=False, index=True)

    # Security Columns
    password_hash = Column(String(255), nullable=False)  # argon2id encoded

    # Profile
    photo = Column(Text, nullable=True)  # URL
    phone = Column(String(32), nullable=True)
    bio = Column(Text, nullable=True)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    def to_public(self) -> dict:
        """Public representation of the account. Never includes the hash."""
        return {field: getattr(self, field) for field in PUBLIC_FIELDS}

    def __repr__(self):
        return f"<User id={self.id} email={self.email}>"
