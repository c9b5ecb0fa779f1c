"""User domain models for Emlaknomi.

Only staff of the brokerage log in: administrators and managers run the
back office, consultants own listings inside a branch. The public site is
anonymous, so there is no customer account here.
"""

from __future__ import annotations

from typing import Any

from django.contrib.auth.models import AbstractUser, BaseUserManager  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore


class CustomUserManager(BaseUserManager):
    """User manager that logs in by e-mail."""

    use_in_migrations = True

    def _create_user(self, email: str, password: str | None, **extra_fields: Any):
        if not email:
            raise ValueError("E-posta adresi zorunludur.")
        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_user(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", False)
        extra_fields.setdefault("is_superuser", False)
        extra_fields.setdefault("role", CustomUser.RoleChoices.CONSULTANT)
        return self._create_user(email, password, **extra_fields)

    def create_superuser(self, email: str, password: str | None = None, **extra_fields: Any):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("role", CustomUser.RoleChoices.ADMIN)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True.")

        return self._create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    """Back-office user identified by e-mail."""

    class RoleChoices(models.TextChoices):
        ADMIN = "ADMIN", _("Yönetici")
        MANAGER = "MANAGER", _("Müdür")
        CONSULTANT = "CONSULTANT", _("Danışman")
        USER = "USER", _("Kullanıcı")

    username = None
    first_name = None
    last_name = None
    name = models.CharField(_("Ad Soyad"), max_length=150, blank=True)
    email = models.EmailField(_("E-posta"), unique=True)
    role = models.CharField(
        _("Rol"),
        max_length=20,
        choices=RoleChoices.choices,
        default=RoleChoices.CONSULTANT,
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = CustomUserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS: list[str] = []

    class Meta:
        verbose_name = _("Kullanıcı")
        verbose_name_plural = _("Kullanıcılar")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.email} ({self.get_role_display()})"

    def get_full_name(self) -> str:
        return self.name or self.email

    def get_short_name(self) -> str:
        return self.name or self.email

    # --- Domain helpers -----------------------------------------------------
    def is_admin(self) -> bool:
        return self.role == self.RoleChoices.ADMIN or self.is_superuser

    def is_manager(self) -> bool:
        return self.role == self.RoleChoices.MANAGER

    def is_consultant(self) -> bool:
        return self.role == self.RoleChoices.CONSULTANT

    def can_manage_content(self) -> bool:
        """Admins and managers edit branches, cities, settings and pages."""
        return self.is_admin() or self.is_manager() or self.is_staff


# Backwards compatibility alias used in tests
User = CustomUser
