"""
Category model — display grouping for products.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Category(models.Model):
    """Product category, owned by a single user."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('Proprietário'),
    )
    name = models.CharField(max_length=100, verbose_name=_('Nome'))
    description = models.TextField(blank=True, default='', verbose_name=_('Descrição'))
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Criado em'))

    class Meta:
        verbose_name = _('Categoria')
        verbose_name_plural = _('Categorias')
        ordering = ['name']

    def __str__(self) -> str:
        return self.name
