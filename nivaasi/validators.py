import math
import re
from datetime import date, datetime, timezone

from nivaasi.errors import ValidationError


#Email validation function
def is_valid_email(email):
    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return re.match(pattern, email) is not None


#Phone number validation function
def is_valid_phone(phone):
    pattern = r'^\+?1?\d{9,15}$'
    return re.match(pattern, phone) is not None


def normalize_email(email):
    return str(email).lower().strip()


def utcnow():
    # Naive UTC, matching what the DateTime columns store
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_id(value, field):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')


def parse_amount(value, field='amount'):
    try:
        amount = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number')
    if not math.isfinite(amount):
        raise ValidationError(f'{field} must be a number')
    if amount < 0:
        raise ValidationError(f'{field} must not be negative')
    return amount


def parse_units(value, default=1):
    """Unit counts fall back to the default when missing or unparsable."""
    try:
        units = int(value)
    except (TypeError, ValueError):
        return default
    return units if units > 0 else default


def parse_datetime(value, field):
    """Accept ISO 8601 strings (including a trailing Z) and return naive UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).strip().replace('Z', '+00:00'))
        except ValueError:
            raise ValidationError(f'{field} must be an ISO 8601 date')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_date(value, field):
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    return parse_datetime(value, field).date()


def parse_enum(enum_cls, value, field):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        allowed = ', '.join(member.value for member in enum_cls)
        raise ValidationError(f'{field} must be one of: {allowed}')
