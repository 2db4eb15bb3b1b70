"""
StockPro Admin.

Provides views for production debugging:
- Category, Supplier, Customer: list + edit
- Product: editable catalog fields, current_stock read-only with status
- StockMovement: read-only audit trail (append-only ledger)
- "Reconciliar estoque" action on products
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from stockpro.models import Category, Customer, Product, StockMovement, Supplier
from stockpro.services.movements import reconcile_products


# =========================================================================
# REGISTRIES
# =========================================================================

@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ['name', 'owner', 'created_at']
    search_fields = ['name']
    readonly_fields = ['created_at']


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    list_display = ['name', 'cnpj_cpf', 'city', 'state', 'owner']
    list_filter = ['state']
    search_fields = ['name', 'cnpj_cpf', 'email']
    readonly_fields = ['created_at', 'updated_at']


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ['name', 'cpf_cnpj', 'city', 'state', 'owner']
    list_filter = ['state']
    search_fields = ['name', 'cpf_cnpj', 'email']
    readonly_fields = ['created_at', 'updated_at']


# =========================================================================
# PRODUCT ADMIN
# =========================================================================

@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Product admin — stock only changes via movements."""

    list_display = ['code', 'name', 'category', 'current_stock', 'min_stock',
                    'status_display', 'cost_price', 'sale_price']
    list_filter = ['category']
    search_fields = ['code', 'name']
    readonly_fields = ['current_stock', 'created_at', 'updated_at']
    actions = ['reconcile_stock']

    @admin.display(description=_('Situação'))
    def status_display(self, obj):
        return obj.stock_status.label

    @admin.action(description=_('Reconciliar estoque com as movimentações'))
    def reconcile_stock(self, request, queryset):
        drifted = reconcile_products(queryset.order_by('pk'))
        self.message_user(
            request, _('{count} produto(s) corrigido(s).').format(count=len(drifted))
        )


# =========================================================================
# MOVEMENT ADMIN (read-only audit trail)
# =========================================================================

@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    """StockMovement admin — read-only. Immutable audit trail."""

    list_display = ['movement_date', 'movement_type', 'product', 'quantity',
                    'unit_price', 'total_value', 'reason', 'supplier', 'customer']
    list_filter = ['movement_type', 'reason', 'movement_date']
    search_fields = ['product__code', 'product__name', 'notes']
    readonly_fields = ['owner', 'product', 'supplier', 'customer', 'movement_type',
                       'quantity', 'unit_price', 'total_value', 'movement_date',
                       'reason', 'notes', 'created_at']
    date_hierarchy = 'movement_date'

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
