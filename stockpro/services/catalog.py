"""
Catalog services — CRUD for products, categories, suppliers and customers.

Every write is scoped to the session owner. Records of other owners are
reported as NOT_FOUND. Edits are last-write-wins.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import IntegrityError, transaction
from django.db.models import ProtectedError

from stockpro.conf import stockpro_settings
from stockpro.exceptions import StockError
from stockpro.models import Category, Customer, Product, Supplier

logger = logging.getLogger('stockpro')

# Never set through the catalog API
PROTECTED_FIELDS = {'id', 'pk', 'owner', 'owner_id', 'created_at', 'updated_at'}

PRODUCT_FIELDS = {
    'code', 'name', 'description', 'category', 'unit_measure',
    'cost_price', 'sale_price', 'min_stock', 'max_stock',
}


def _get_owned(model, session, obj_or_pk):
    pk = getattr(obj_or_pk, 'pk', obj_or_pk)
    obj = model.objects.filter(owner=session.owner, pk=pk).first()
    if obj is None:
        raise StockError('NOT_FOUND', model=model.__name__, pk=pk)
    return obj


def _check_fields(fields: dict, allowed: set) -> None:
    unknown = set(fields) - allowed
    if unknown:
        raise StockError('INVALID_VALUE', fields=sorted(unknown))


def _clean_price(name: str, value):
    if value is None:
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise StockError('INVALID_PRICE', field=name, value=value) from exc
    if price < 0:
        raise StockError('INVALID_PRICE', field=name, value=price)
    return price


def _clean_count(name: str, value):
    if value is None:
        return None
    try:
        count = int(value.strip()) if isinstance(value, str) else int(value)
    except (TypeError, ValueError) as exc:
        raise StockError('INVALID_VALUE', field=name, value=value) from exc
    # 2.5 is not a count
    if count < 0 or (not isinstance(value, str) and count != value):
        raise StockError('INVALID_VALUE', field=name, value=value)
    return count


def _clean_product_fields(session, fields: dict) -> dict:
    for name in ('cost_price', 'sale_price'):
        if name in fields:
            fields[name] = _clean_price(name, fields[name])

    for name in ('min_stock', 'max_stock'):
        if name in fields:
            fields[name] = _clean_count(name, fields[name])

    category = fields.get('category')
    if category is not None:
        fields['category'] = _get_owned(Category, session, category)

    return fields


def _partner_fields(model) -> set:
    return {f.name for f in model._meta.concrete_fields} - PROTECTED_FIELDS


def _delete(model, session, obj_or_pk) -> None:
    obj = _get_owned(model, session, obj_or_pk)
    pk = obj.pk
    try:
        with transaction.atomic():
            obj.delete()
    except ProtectedError as exc:
        raise StockError('REFERENCED_RECORD', model=model.__name__, pk=pk) from exc
    logger.info("catalog.delete", extra={"model": model.__name__, "pk": pk})


class CatalogService:
    """CRUD for catalog and registry records."""

    # ══════════════════════════════════════════════════════════════
    # PRODUCTS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_product(cls, session, code: str, name: str,
                       initial_stock: int = 0, **fields) -> Product:
        """
        Create a product.

        An opening balance is recorded as an entry movement
        (reason "Saldo inicial") priced at cost_price, so the ledger
        stays the source of current_stock.

        Raises:
            StockError('DUPLICATE_CODE'): If the owner already has this code
            StockError('INVALID_PRICE' | 'INVALID_VALUE' | 'NOT_FOUND')
        """
        _check_fields(fields, PRODUCT_FIELDS)
        fields = _clean_product_fields(session, fields)
        fields.setdefault('unit_measure', stockpro_settings.DEFAULT_UNIT_MEASURE)

        if initial_stock < 0:
            raise StockError('INVALID_QUANTITY', requested=initial_stock)

        if Product.objects.for_owner(session.owner).filter(code=code).exists():
            raise StockError('DUPLICATE_CODE', product_code=code)

        try:
            with transaction.atomic():
                product = Product.objects.create(
                    owner=session.owner,
                    code=code,
                    name=name,
                    current_stock=0,
                    **fields,
                )
                if initial_stock:
                    from stockpro.services.movements import StockMovements

                    StockMovements.record_entry(
                        session, product, initial_stock,
                        unit_price=product.cost_price,
                        reason='Saldo inicial',
                    )
                    product.refresh_from_db()
        except IntegrityError as exc:
            raise StockError('DUPLICATE_CODE', product_code=code) from exc

        logger.info(
            "catalog.product.create",
            extra={"product_id": product.pk, "code": code},
        )
        return product

    @classmethod
    def update_product(cls, session, product, **fields) -> Product:
        """
        Update catalog fields of a product.

        current_stock is not editable here: it only changes through
        movements.
        """
        _check_fields(fields, PRODUCT_FIELDS)
        product = _get_owned(Product, session, product)
        fields = _clean_product_fields(session, fields)

        code = fields.get('code')
        if code and code != product.code:
            clash = Product.objects.for_owner(session.owner).filter(code=code).exclude(pk=product.pk)
            if clash.exists():
                raise StockError('DUPLICATE_CODE', product_code=code)

        for name, value in fields.items():
            setattr(product, name, value)

        try:
            with transaction.atomic():
                product.save(update_fields=[*fields, 'updated_at'])
        except IntegrityError as exc:
            raise StockError('DUPLICATE_CODE', product_code=code) from exc
        return product

    @classmethod
    def delete_product(cls, session, product) -> None:
        """
        Raises:
            StockError('REFERENCED_RECORD'): If the product has movements
        """
        _delete(Product, session, product)

    # ══════════════════════════════════════════════════════════════
    # CATEGORIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_category(cls, session, name: str, description: str = '') -> Category:
        return Category.objects.create(owner=session.owner, name=name, description=description)

    @classmethod
    def update_category(cls, session, category, **fields) -> Category:
        _check_fields(fields, {'name', 'description'})
        category = _get_owned(Category, session, category)
        for name, value in fields.items():
            setattr(category, name, value)
        category.save(update_fields=list(fields))
        return category

    @classmethod
    def delete_category(cls, session, category) -> None:
        _delete(Category, session, category)

    # ══════════════════════════════════════════════════════════════
    # SUPPLIERS / CUSTOMERS
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def create_supplier(cls, session, name: str, **fields) -> Supplier:
        _check_fields(fields, _partner_fields(Supplier))
        return Supplier.objects.create(owner=session.owner, name=name, **fields)

    @classmethod
    def update_supplier(cls, session, supplier, **fields) -> Supplier:
        _check_fields(fields, _partner_fields(Supplier))
        supplier = _get_owned(Supplier, session, supplier)
        for name, value in fields.items():
            setattr(supplier, name, value)
        supplier.save(update_fields=[*fields, 'updated_at'])
        return supplier

    @classmethod
    def delete_supplier(cls, session, supplier) -> None:
        _delete(Supplier, session, supplier)

    @classmethod
    def create_customer(cls, session, name: str, **fields) -> Customer:
        _check_fields(fields, _partner_fields(Customer))
        return Customer.objects.create(owner=session.owner, name=name, **fields)

    @classmethod
    def update_customer(cls, session, customer, **fields) -> Customer:
        _check_fields(fields, _partner_fields(Customer))
        customer = _get_owned(Customer, session, customer)
        for name, value in fields.items():
            setattr(customer, name, value)
        customer.save(update_fields=[*fields, 'updated_at'])
        return customer

    @classmethod
    def delete_customer(cls, session, customer) -> None:
        _delete(Customer, session, customer)
