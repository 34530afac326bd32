"""User registration service."""

from django.db import IntegrityError, transaction
from django.contrib.auth import get_user_model

from .exceptions import EmailAlreadyRegisteredError

User = get_user_model()


def register_user(
    *,
    email: str,
    password: str,
    name: str = ""
) -> User:
    """
    Register a new user.

    Args:
        email: User's email address
        password: User's password (will be hashed)
        name: Optional display name

    Returns:
        Created User instance

    Raises:
        EmailAlreadyRegisteredError: If the email is taken (including by a
            soft-deleted account, whose row still holds the address)
    """
    email = User.objects.normalize_email(email).strip()

    try:
        with transaction.atomic():
            return User.objects.create_user(
                email=email,
                password=password,
                name=name.strip()
            )
    except IntegrityError:
        raise EmailAlreadyRegisteredError("An account with this email already exists")
