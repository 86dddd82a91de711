import logging

from nivaasi.enums import UserType
from nivaasi.errors import Conflict, InvalidCredentials, NotFound, ValidationError
from nivaasi.models import User
from nivaasi.store import transaction
from nivaasi.validators import (
    is_valid_email, is_valid_phone, normalize_email, parse_enum, utcnow
)

logger = logging.getLogger(__name__)


def get_user_by_email(email):
    return User.query.filter_by(email=normalize_email(email)).first()


def find_owner(email):
    return User.query.filter_by(
        email=normalize_email(email),
        user_type=UserType.OWNER.value
    ).first()


def sign_up(name, email, password, user_type):
    """Register a new owner or tenant account with a hashed password."""
    email = normalize_email(email)
    if not is_valid_email(email):
        raise ValidationError('Invalid email format')
    if len(password) < 6:
        raise ValidationError('Password must be at least 6 characters long')
    user_type = parse_enum(UserType, user_type, 'userType')

    with transaction() as session:
        if get_user_by_email(email):
            logger.warning(f"Signup rejected, email already registered: {email}")
            raise Conflict('User already exists')

        user = User(
            name=str(name).strip(),
            email=email,
            user_type=user_type.value
        )
        user.set_password(password)
        session.add(user)

    logger.info(f"User registered: {email} ({user.user_type})")
    return user


def sign_in(email, password):
    user = get_user_by_email(email)
    if not user or not user.check_password(password):
        raise InvalidCredentials()
    return user


def get_user(email):
    user = get_user_by_email(email)
    if not user:
        raise NotFound('User not found')
    return user


def get_user_by_id(user_id):
    user = User.query.filter_by(id=user_id).first()
    if not user:
        raise NotFound('User not found')
    return user


def update_profile(email, name=None, phone=None):
    with transaction():
        user = get_user(email)

        if name is not None and str(name).strip():
            user.name = str(name).strip()
        if phone is not None:
            phone = str(phone).strip()
            if phone and not is_valid_phone(phone):
                raise ValidationError('Invalid phone number format')
            user.phone = phone or None
        user.updated_at = utcnow()

    return user
