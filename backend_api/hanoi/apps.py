from django.apps import AppConfig


class HanoiConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "hanoi"
    verbose_name = "Towers of Hanoi"
