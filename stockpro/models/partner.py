"""
Supplier and Customer models — provenance of stock movements.

Referenced by movements for display only; never used in calculations.
"""

from django.conf import settings
from django.db import models
from django.utils.translation import gettext_lazy as _


class Partner(models.Model):
    """Contact fields shared by suppliers and customers."""

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='+',
        verbose_name=_('Proprietário'),
    )
    name = models.CharField(max_length=200, verbose_name=_('Nome'))
    email = models.EmailField(blank=True, default='', verbose_name=_('E-mail'))
    phone = models.CharField(max_length=30, blank=True, default='', verbose_name=_('Telefone'))
    address = models.TextField(blank=True, default='', verbose_name=_('Endereço'))
    city = models.CharField(max_length=100, blank=True, default='', verbose_name=_('Cidade'))
    state = models.CharField(max_length=2, blank=True, default='', verbose_name=_('UF'))
    zip_code = models.CharField(max_length=10, blank=True, default='', verbose_name=_('CEP'))

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_('Criado em'))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_('Atualizado em'))

    class Meta:
        abstract = True
        ordering = ['name']

    def __str__(self) -> str:
        return self.name


class Supplier(Partner):
    """Where entries come from."""

    cnpj_cpf = models.CharField(max_length=20, blank=True, default='', verbose_name=_('CNPJ/CPF'))

    class Meta(Partner.Meta):
        verbose_name = _('Fornecedor')
        verbose_name_plural = _('Fornecedores')


class Customer(Partner):
    """Where exits go to."""

    cpf_cnpj = models.CharField(max_length=20, blank=True, default='', verbose_name=_('CPF/CNPJ'))

    class Meta(Partner.Meta):
        verbose_name = _('Cliente')
        verbose_name_plural = _('Clientes')
