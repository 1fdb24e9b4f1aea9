# hirelink/services/accounts.py
"""
Account registration and login against stored credentials.

Passwords are hashed with passlib; the plaintext never reaches the store or
the logs. Email uniqueness is left to the store's unique index.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from hirelink.core.database import StoreError
from hirelink.core.security import hash_password, verify_password
from hirelink.models.account import Account

logger = logging.getLogger(__name__)


class LoginError(Exception):
    """Base exception for rejected logins. Reported as a 400."""


class AccountNotFound(LoginError):
    pass


class InvalidPassword(LoginError):
    pass


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def get_account_by_email(db: Session, email: str) -> Optional[Account]:
    """Look up an account by email address."""
    return db.query(Account).filter(Account.email == normalize_email(email)).first()


def register_account(
    db: Session,
    *,
    name: str,
    email: str,
    department: str,
    password: str,
) -> Account:
    """
    Create a new account.

    Raises:
        StoreError: on any persistence failure, including a duplicate email.
    """
    try:
        account = Account(
            name=(name or "").strip(),
            email=normalize_email(email),
            department=(department or "").strip(),
            password_hash=hash_password(password),
            is_verified=False,
        )
        db.add(account)
        db.commit()
        db.refresh(account)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.warning("Account registration failed: %s", type(exc).__name__)
        raise StoreError("Error registering user") from exc

    logger.info("Registered account id=%s", account.id)
    return account


def authenticate(db: Session, *, email: str, password: str) -> Account:
    try:
        account = get_account_by_email(db, email)
    except SQLAlchemyError as exc:
        logger.exception("Account lookup failed during login")
        raise StoreError("Error during login") from exc

    if account is None:
        raise AccountNotFound("User not found")

    if not verify_password(password, account.password_hash):
        raise InvalidPassword("Invalid credentials")

    return account
