"""User domain models for Rentnest.

The marketplace knows two kinds of accounts: tenants, who browse
listings, and owners, who publish them. A user signs in with either an
email address or a Bangladesh mobile number, so at least one of the two
must be present on every account.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.core.validators import RegexValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils import timezone  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


MOBILE_VALIDATOR = RegexValidator(
    regex=r"^01[0-9]{9}$",
    message=_("Please provide a valid Bangladesh mobile number (01XXXXXXXXX)"),
)


class AccountType(models.TextChoices):
    TENANT = "tenant", _("Tenant")
    OWNER = "owner", _("Owner")


class CustomUserManager(BaseUserManager):
    """Manager that creates users identified by email or mobile number."""

    use_in_migrations = True

    def _create_user(
        self,
        password: str | None,
        email: str | None = None,
        mobile: str | None = None,
        **extra_fields: Any,
    ):
        email = self.normalize_email(email).lower() if email else None
        mobile = self.normalize_mobile(mobile) if mobile else None
        if not email and not mobile:
            raise ValueError("Please provide either email or mobile number")

        extra_fields.setdefault("username", email or mobile)
        user = self.model(email=email, mobile=mobile, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(
        self,
        email: str | None = None,
        password: str | None = None,
        mobile: str | None = None,
        **extra_fields: Any,
    ):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("account_type", AccountType.TENANT)
        return self._create_user(password, email=email, mobile=mobile, **extra_fields)

    def create_superuser(
        self,
        username: str | None = None,
        email: str | None = None,
        password: str | None = None,
        **extra_fields: Any,
    ):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("account_type", AccountType.OWNER)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        if username:
            extra_fields["username"] = username
            if not email and "@" in username:
                email = username
        return self._create_user(password, email=email, **extra_fields)

    def get_by_login(self, login: str):
        """Look a user up by email (anything containing ``@``) or mobile."""
        login = (login or "").strip()
        if "@" in login:
            return self.get(email__iexact=login)
        return self.get(mobile=self.normalize_mobile(login))

    @staticmethod
    def normalize_mobile(mobile: str) -> str:
        return mobile.strip().replace(" ", "").replace("-", "")


class CustomUser(AbstractUser):
    """Tenant or owner account."""

    full_name = models.CharField(_("Full name"), max_length=150)
    email = models.EmailField(_("Email"), unique=True, null=True, blank=True)
    mobile = models.CharField(
        _("Mobile"),
        max_length=11,
        unique=True,
        null=True,
        blank=True,
        validators=[MOBILE_VALIDATOR],
    )
    account_type = models.CharField(
        _("Account type"),
        max_length=10,
        choices=AccountType.choices,
        default=AccountType.TENANT,
    )
    created_at = models.DateTimeField(default=timezone.now)

    objects = CustomUserManager()

    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = _("User")
        verbose_name_plural = _("Users")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email or self.mobile} ({self.get_account_type_display()})"

    def is_owner(self) -> bool:
        return self.account_type == AccountType.OWNER

    def is_tenant(self) -> bool:
        return self.account_type == AccountType.TENANT


# Backwards compatibility alias used in tests
User = CustomUser
