"""
Enums for StockPro models.
"""

from django.db import models
from django.utils.translation import gettext_lazy as _


class MovementType(models.TextChoices):
    """Direction of a stock movement."""
    IN = 'in', _('Entrada')
    OUT = 'out', _('Saída')


class ExitReason(models.TextChoices):
    """
    Classification of stock exits.

    Stored verbatim in StockMovement.reason.
    """
    SALE = 'Venda', _('Venda')
    LOSS = 'Perda', _('Perda')
    RETURN = 'Devolução', _('Devolução')
    TRANSFER = 'Transferência', _('Transferência')
    INTERNAL_USE = 'Uso interno', _('Uso interno')
    DISPOSAL = 'Descarte', _('Descarte')


class StockStatus(models.TextChoices):
    """
    Severity tiers of a product's stock, most severe first.

    OUT_OF_STOCK: nothing on hand
    CRITICAL:     at or below half of the configured minimum
    LOW:          at or below the configured minimum
    NORMAL:       above the minimum, or no minimum configured
    """
    OUT_OF_STOCK = 'out_of_stock', _('Sem Estoque')
    CRITICAL = 'critical', _('Crítico')
    LOW = 'low', _('Baixo')
    NORMAL = 'normal', _('Normal')
