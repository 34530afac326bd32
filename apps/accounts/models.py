from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)

    def active(self):
        """Users that have not been soft-deleted."""
        return self.filter(deleted_at__isnull=True)


class User(AbstractBaseUser, PermissionsMixin):
    """Custom user model with email authentication."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    name = models.CharField(max_length=100, blank=True)

    # Notification preferences
    email_notifications = models.BooleanField(default=True)
    group_notifications = models.BooleanField(default=True)
    vote_notifications = models.BooleanField(default=True)

    # Login lockout
    failed_login_attempts = models.PositiveIntegerField(default=0)
    locked_until = models.DateTimeField(null=True, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)

    # Soft delete
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['email']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return self.email

    def get_display_name(self):
        """Return name or email prefix."""
        return self.name or self.email.split('@')[0]

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def is_locked(self, now=None):
        now = now or timezone.now()
        return self.locked_until is not None and self.locked_until > now

    def soft_delete(self):
        """Mark the account deleted; it disappears from every lookup."""
        self.deleted_at = timezone.now()
        self.is_active = False
        self.set_unusable_password()
        self.save(update_fields=['deleted_at', 'is_active', 'password'])
