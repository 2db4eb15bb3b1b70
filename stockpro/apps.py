"""Django app configuration for StockPro."""

from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class StockProConfig(AppConfig):
    """Configuration for StockPro app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "stockpro"
    verbose_name = _("Controle de Estoque")
