"""Admin registrations for the users domain."""

from __future__ import annotations

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as BaseUserAdmin
from django.utils.translation import gettext_lazy as _

from .models import CustomUser


@admin.register(CustomUser)
class CustomUserAdmin(BaseUserAdmin):
    fieldsets = (
        (None, {"fields": ("username", "password")}),
        (_("Personal info"), {"fields": ("full_name", "email", "mobile")}),
        (_("Account"), {"fields": ("account_type",)}),
        (
            _("Permissions"),
            {"fields": ("is_active", "is_staff", "is_superuser", "groups", "user_permissions")},
        ),
        (_("Important dates"), {"fields": ("last_login", "date_joined", "created_at")}),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": (
                    "username",
                    "password1",
                    "password2",
                    "full_name",
                    "email",
                    "mobile",
                    "account_type",
                ),
            },
        ),
    )
    list_display = ("username", "full_name", "email", "mobile", "account_type", "is_active")
    list_filter = ("account_type", "is_active", "is_staff")
    search_fields = ("email", "mobile", "full_name")
    ordering = ("-created_at",)
    readonly_fields = ("created_at", "date_joined")
