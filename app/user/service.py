"""Credential store lookups shared by the auth, OTP and admin flows."""

import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, and_, select

from app.user.exceptions import EmailExistsError, MobileExistsError, UserNotFoundError
from app.user.models import User


def get_user_by_email(session: Session, email: str) -> User | None:
    return session.exec(select(User).where(User.email == email)).first()


def get_user_by_mobile(session: Session, mobile: str) -> User | None:
    return session.exec(select(User).where(User.mobile == mobile)).first()


def get_user_or_404(session: Session, user_id: uuid.UUID) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise UserNotFoundError()
    return user


def email_owned_by_other(session: Session, email: str, user_id: uuid.UUID) -> bool:
    return (
        session.exec(
            select(User.id).where(and_(User.email == email, User.id != user_id))
        ).first()
        is not None
    )


def mobile_owned_by_other(session: Session, mobile: str, user_id: uuid.UUID) -> bool:
    return (
        session.exec(
            select(User.id).where(and_(User.mobile == mobile, User.id != user_id))
        ).first()
        is not None
    )


def save_user(session: Session, user: User) -> User:
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def save_unique_user(
    session: Session, user: User, *, email_message: str = "Email already in use"
) -> User:
    """Save a user, reporting a lost race on email/mobile as a conflict.

    The caller checks uniqueness first; a concurrent write can still claim the
    value before the commit. The rollback leaves the stored record unchanged.
    """
    user_id, email, mobile = user.id, user.email, user.mobile
    try:
        return save_user(session, user)
    except IntegrityError:
        session.rollback()
        if email is not None and email_owned_by_other(session, email, user_id):
            raise EmailExistsError(email_message) from None
        if mobile is not None and mobile_owned_by_other(session, mobile, user_id):
            raise MobileExistsError() from None
        raise
