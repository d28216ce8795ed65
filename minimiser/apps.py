from django.apps import AppConfig


class MinimiserConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'minimiser'
    verbose_name = 'DFA minimiser'
