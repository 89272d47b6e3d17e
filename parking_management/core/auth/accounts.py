import logging

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError

from parking_management.core.exceptions import AuthenticationFailed, ConflictError, ValidationError
from parking_management.core.models import Role, User

logger = logging.getLogger(__name__)


def _validate_password(password: str, user: User = None) -> None:
    try:
        validate_password(password, user)
    except DjangoValidationError as e:
        raise ValidationError(e.messages[0])


def register_user(email: str, password: str, firstname: str = '', lastname: str = '', role: str = Role.USER) -> User:
    if User.objects.filter(email__iexact=email).exists():
        raise ConflictError('User already exists with this email')
    _validate_password(password)

    user = User.objects.create_user(
        email=email,
        password=password,
        firstname=firstname,
        lastname=lastname,
        role=role,
    )
    logger.info('Registered user %s with role %s', user.id, user.role)
    return user


def authenticate_user(email: str, password: str) -> User:
    user = User.objects.filter(email__iexact=email).first()
    if user is None or not user.is_active or not user.check_password(password):
        raise AuthenticationFailed('Invalid email or password')
    return user


def reset_password(user: User, password: str) -> User:
    _validate_password(password, user)
    user.set_password(password)
    user.save(update_fields=['password', 'updated_at'])
    logger.info('Password reset for user %s', user.id)
    return user
