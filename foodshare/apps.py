from django.apps import AppConfig


class FoodshareConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "foodshare"
    verbose_name = "Campus Foodshare"

    def ready(self):
        from foodshare import signals  # noqa: F401
