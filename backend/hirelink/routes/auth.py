# hirelink/routes/auth.py
from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from hirelink.core.config import settings
from hirelink.core.database import StoreError, get_db
from hirelink.core.rate_limit import limiter
from hirelink.core.security import create_session_token, session_tokens_enabled
from hirelink.schemas.auth import AccountOut, LoginIn, LoginOut, MessageOut, RegisterIn
from hirelink.services.accounts import LoginError, authenticate, register_account

router = APIRouter(tags=["auth"])


def _maybe_limit(rule: str):
    if not settings.ENABLE_RATE_LIMITING:
        def passthrough(fn):
            return fn
        return passthrough
    return limiter.limit(rule)


@router.post("/register", response_model=MessageOut, status_code=status.HTTP_201_CREATED)
@_maybe_limit(settings.AUTH_RATE_LIMIT)
def register(request: Request, payload: RegisterIn, db: Session = Depends(get_db)):
    try:
        register_account(
            db,
            name=payload.name,
            email=payload.email,
            department=payload.department,
            password=payload.password,
        )
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return {"message": "User registered successfully!"}


@router.post("/login", response_model=LoginOut, response_model_exclude_none=True)
@_maybe_limit(settings.AUTH_RATE_LIMIT)
def login(request: Request, payload: LoginIn, db: Session = Depends(get_db)):
    try:
        account = authenticate(db, email=payload.email, password=payload.password)
    except LoginError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StoreError as e:
        raise HTTPException(status_code=500, detail=str(e))

    body = {"message": "Login successful", "user": AccountOut.model_validate(account)}
    if session_tokens_enabled():
        body["token"] = create_session_token(account.id, account.email)
    return body
