"""
Product model — catalog item with a cached stock projection.
"""

import logging

from django.conf import settings
from django.db import models
from django.db.models import Q, Sum
from django.db.models.functions import Coalesce
from django.utils.translation import gettext_lazy as _

from stockpro.models.enums import MovementType

logger = logging.getLogger('stockpro')


class ProductQuerySet(models.QuerySet):
    """QuerySet helpers for Product."""

    def for_owner(self, owner):
        return self.filter(owner=owner)

    def with_ledger_balance(self):
        """Annotate ``_ledger_in`` and ``_ledger_out`` (Σ entries, Σ exits)."""
        return self.annotate(
            _ledger_in=Coalesce(
                Sum('movements__quantity', filter=Q(movements__movement_type=MovementType.IN)), 0
            ),
            _ledger_out=Coalesce(
                Sum('movements__quantity', filter=Q(movements__movement_type=MovementType.OUT)), 0
            ),
        )


class Product(models.Model):
    """
    A stocked item.

    current_stock is a cache of the movement ledger:
    - updated atomically by StockMovement.save()
    - never written by catalog edits
    - use recalculate() for audit/correction
    """

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('Proprietário'),
    )
    code = models.CharField(
        max_length=50,
        verbose_name=_('Código'),
        help_text=_('Único por proprietário (ex: MSE001)'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    description = models.TextField(blank=True, default='', verbose_name=_('Descrição'))
    category = models.ForeignKey(
        'stockpro.Category',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='products',
        verbose_name=_('Categoria'),
    )
    unit_measure = models.CharField(max_length=10, default='un', verbose_name=_('Unidade'))

    cost_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Preço de Custo'),
    )
    sale_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        null=True,
        blank=True,
        verbose_name=_('Preço de Venda'),
    )

    current_stock = models.PositiveIntegerField(
        null=True,
        default=0,
        verbose_name=_('Estoque Atual'),
    )
    min_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        default=0,
        verbose_name=_('Estoque Mínimo'),
    )
    max_stock = models.PositiveIntegerField(
        null=True,
        blank=True,
        verbose_name=_('Estoque Máximo'),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Criado em'))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_('Atualizado em'))

    objects = ProductQuerySet.as_manager()

    class Meta:
        verbose_name = _('Produto')
        verbose_name_plural = _('Produtos')
        ordering = ['name']
        constraints = [
            models.UniqueConstraint(
                fields=['owner', 'code'],
                name='unique_product_code_per_owner',
            ),
        ]
        indexes = [
            models.Index(fields=['owner', 'name'], name='stockpro_product_owner_name'),
        ]

    @property
    def stock_status(self) -> str:
        """Stock severity tier (see stockpro.aggregator.status)."""
        from stockpro.aggregator.status import classify
        return classify(self.current_stock, self.min_stock)

    def recalculate(self) -> int:
        """
        Recalculate current_stock from the movement ledger.

        Use for:
        - Integrity audit
        - Correction after detected inconsistency

        Returns:
            New calculated stock
        """
        totals = self.movements.aggregate(
            entries=Coalesce(Sum('quantity', filter=Q(movement_type=MovementType.IN)), 0),
            exits=Coalesce(Sum('quantity', filter=Q(movement_type=MovementType.OUT)), 0),
        )
        total = totals['entries'] - totals['exits']

        if total != self.current_stock:
            old = self.current_stock
            self.current_stock = total
            self.save(update_fields=['current_stock', 'updated_at'])
            logger.warning(
                "stock.reconciled",
                extra={
                    "product_id": self.pk,
                    "old": old,
                    "new": total,
                },
            )

        return total

    def __str__(self) -> str:
        return f"{self.code} — {self.name}"
