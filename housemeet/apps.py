from django.apps import AppConfig


class HouseMeetConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "housemeet"
    verbose_name = "Inter-House Sports Meet"
