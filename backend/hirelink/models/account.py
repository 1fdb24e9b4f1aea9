from sqlalchemy import Boolean, Column, DateTime, Integer, String, func

from hirelink.core.base import Base


class Account(Base):
    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    department = Column(String(100), nullable=True)
    password_hash = Column(String(255), nullable=False)

    # Reserved for an email-confirmation flow; nothing sets it yet.
    is_verified = Column(Boolean, nullable=False, default=False, server_default="false")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
