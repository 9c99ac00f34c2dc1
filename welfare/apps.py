from django.apps import AppConfig


class WelfareConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'welfare'
    verbose_name = 'Senior Welfare'
