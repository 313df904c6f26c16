from django.apps import AppConfig
from django.core.signals import setting_changed


class ListingsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "apps.listings"
    verbose_name = "Listings"

    def ready(self) -> None:
        from .moderation import reset_moderation_engine
        from .storage import reset_blob_store

        setting_changed.connect(reset_moderation_engine, dispatch_uid="listings.reset_moderation_engine")
        setting_changed.connect(reset_blob_store, dispatch_uid="listings.reset_blob_store")
