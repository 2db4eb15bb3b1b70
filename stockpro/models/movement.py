"""
StockMovement model — Immutable ledger of stock entries and exits.
"""

from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db import models, transaction
from django.db.models import F, Value
from django.db.models.functions import Coalesce
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from stockpro.models.enums import MovementType


CENTS = Decimal('0.01')


def line_total(quantity, unit_price) -> Decimal | None:
    """quantity × unit_price rounded to cents (None without a price)."""
    if unit_price is None:
        return None
    return (Decimal(quantity) * Decimal(unit_price)).quantize(CENTS, rounding=ROUND_HALF_UP)


class StockMovementQuerySet(models.QuerySet):
    """QuerySet helpers for StockMovement."""

    def for_owner(self, owner):
        return self.filter(owner=owner)

    def entries(self):
        return self.filter(movement_type=MovementType.IN)

    def exits(self):
        return self.filter(movement_type=MovementType.OUT)


class StockMovement(models.Model):
    """
    Immutable record of a stock entry or exit.

    Rules:
    - NEVER update() or delete()
    - Corrections are new movements in the opposite direction
    - Updates Product.current_stock atomically on save()
    - total_value is derived from quantity × unit_price when omitted

    This is the ONLY model that changes Product.current_stock.
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('Proprietário'),
    )
    product = models.ForeignKey(
        'stockpro.Product',
        on_delete=models.PROTECT,
        related_name='movements',
        verbose_name=_('Produto'),
    )
    supplier = models.ForeignKey(
        'stockpro.Supplier',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Fornecedor'),
    )
    customer = models.ForeignKey(
        'stockpro.Customer',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='movements',
        verbose_name=_('Cliente'),
    )

    movement_type = models.CharField(
        max_length=3,
        choices=MovementType.choices,
        verbose_name=_('Tipo'),
    )
    quantity = models.PositiveIntegerField(verbose_name=_('Quantidade'))
    unit_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Preço Unitário'),
    )
    total_value = models.DecimalField(
        max_digits=14,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Valor Total'),
    )

    movement_date = models.DateTimeField(default=timezone.now, db_index=True, verbose_name=_('Data'))
    reason = models.CharField(
        max_length=50,
        blank=True,
        default='',
        verbose_name=_('Motivo'),
        help_text=_('Saídas: Venda, Perda, Devolução, Transferência, Uso interno, Descarte'),
    )
    notes = models.TextField(blank=True, default='', verbose_name=_('Observações'))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Registrado em'))

    objects = StockMovementQuerySet.as_manager()

    class Meta:
        verbose_name = _('Movimentação')
        verbose_name_plural = _('Movimentações')
        ordering = ['-movement_date', '-id']
        indexes = [
            models.Index(fields=['owner', 'movement_type'], name='stockpro_move_owner_type'),
            models.Index(fields=['product', 'movement_date'], name='stockpro_move_product_date'),
        ]

    @property
    def delta(self) -> int:
        """Signed effect on stock: positive = entrada, negative = saída."""
        if self.movement_type == MovementType.OUT:
            return -self.quantity
        return self.quantity

    def save(self, *args, **kwargs):
        """Save movement and update the product's stock cache atomically."""
        if self.pk:
            raise ValueError(
                "Movimentações são imutáveis. "
                "Para corrigir, registre uma nova movimentação no sentido inverso."
            )

        if self.movement_type not in MovementType.values:
            raise ValueError(f"Tipo de movimentação inválido: {self.movement_type!r}")
        if not self.quantity or self.quantity <= 0:
            raise ValueError("Quantidade deve ser positiva")

        # Supplied values are checked by StockMovements before reaching here
        if self.total_value is None:
            self.total_value = line_total(self.quantity, self.unit_price)

        with transaction.atomic():
            super().save(*args, **kwargs)

            # Import here to avoid circular import
            from stockpro.models.product import Product

            Product.objects.filter(pk=self.product_id).update(
                current_stock=Coalesce(F('current_stock'), Value(0)) + self.delta,
                updated_at=timezone.now(),
            )

    def delete(self, *args, **kwargs):
        """Prevent deletion — movements are immutable."""
        raise ValueError(
            "Movimentações são imutáveis. "
            "Para estornar, registre uma nova movimentação no sentido inverso."
        )

    def __str__(self) -> str:
        signal = '+' if self.delta > 0 else ''
        return f"{signal}{self.delta} {self.product_id} | {self.reason or self.get_movement_type_display()}"
