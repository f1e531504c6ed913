from typing import Optional, Tuple
from flask import current_app
from sqlalchemy.exc import IntegrityError
from family_logbook.extensions import db
from family_logbook.models.logbook_member import LogbookMember
from family_logbook.models.user import User
from family_logbook.domain.exceptions import ValidationError, ConflictError, AuthenticationError
from family_logbook.application.logbooks.invites import validate_invite_code, redeem_in_transaction
from family_logbook.utils.transaction import transactional

MIN_PASSWORD_LENGTH = 8


def _optional_str(value, name: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{name} must be a string")
    return value


def _new_user(email, password, display_name) -> User:
    """
    Validated, unsaved account.

    Edge cases handled:
    - Missing or non-string email or password
    - Short password
    - Email already registered (case-insensitive)
    """
    email = (_optional_str(email, "email") or "").strip().lower()
    password = _optional_str(password, "password")
    display_name = _optional_str(display_name, "display_name")

    if not email or "@" not in email:
        raise ValidationError("A valid email is required")
    if not password or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")

    if User.query.filter_by(email=email).first():
        raise ConflictError("Email already in use")

    user = User()
    user.email = email
    user.display_name = (display_name or "").strip() or email.split("@", 1)[0]
    user.set_password(password)
    return user


def create_user(
    *,
    email: Optional[str],
    password: Optional[str],
    display_name: Optional[str] = None,
) -> User:
    user = _new_user(email, password, display_name)

    try:
        with transactional():
            db.session.add(user)
    except IntegrityError as exc:
        raise ConflictError("Email already in use") from exc

    current_app.logger.info("User %s registered", user.id)
    return user


def sign_up(
    *,
    email: Optional[str],
    password: Optional[str],
    display_name: Optional[str] = None,
    invite_code: Optional[str] = None,
) -> Tuple[User, Optional[LogbookMember]]:
    """
    Register an account and, with an invite code, join its logbook.

    Account and membership commit together: if the code is unknown,
    expired or used up by the time it is redeemed, no account is kept.
    """
    if invite_code:
        # Cheap early answer; redemption below re-checks under lock
        validate_invite_code(invite_code)

    user = _new_user(email, password, display_name)
    membership = None

    try:
        with transactional():
            db.session.add(user)
            db.session.flush()

            if invite_code:
                membership = redeem_in_transaction(code=invite_code, user_id=user.id)
    except IntegrityError as exc:
        raise ConflictError("Email already in use") from exc

    if membership is not None:
        current_app.logger.info("User %s registered into logbook %s as %s", user.id, membership.logbook_id, membership.role)
    else:
        current_app.logger.info("User %s registered", user.id)
    return user, membership


def authenticate(*, email: Optional[str], password: Optional[str]) -> User:
    if not isinstance(email, str) or not isinstance(password, str) or not email or not password:
        raise ValidationError("Email and password required")

    user = User.query.filter_by(email=email.strip().lower()).first()

    if not user or not user.check_password(password):
        raise AuthenticationError("Invalid credentials")

    if not user.is_active:
        raise AuthenticationError("User account disabled")

    return user
