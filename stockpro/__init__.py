"""
StockPro — Controle de estoque para pequenos negócios.

Catálogo de produtos, fornecedores e clientes, entradas e saídas de estoque,
e relatórios de saldo e valorização.

Uso:
    from stockpro import inventory, Session, StockError

    session = Session(owner=user)
    inventory.record_entry(session, mouse, 50, unit_price=Decimal('45.90'))
    inventory.record_exit(session, mouse, 12, reason='Venda')
    inventory.dashboard(session).summary
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from stockpro.service import Inventory
        return Inventory
    elif name == 'Session':
        from stockpro.session import Session
        return Session
    elif name == 'StockError':
        from stockpro.exceptions import StockError
        return StockError
    elif name == 'Product':
        from stockpro.models.product import Product
        return Product
    elif name == 'StockMovement':
        from stockpro.models.movement import StockMovement
        return StockMovement
    elif name == 'Category':
        from stockpro.models.category import Category
        return Category
    elif name == 'Supplier':
        from stockpro.models.partner import Supplier
        return Supplier
    elif name == 'Customer':
        from stockpro.models.partner import Customer
        return Customer
    elif name == 'MovementType':
        from stockpro.models.enums import MovementType
        return MovementType
    elif name == 'ExitReason':
        from stockpro.models.enums import ExitReason
        return ExitReason
    elif name == 'StockStatus':
        from stockpro.models.enums import StockStatus
        return StockStatus
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'Session',
    'StockError',
    'Product',
    'StockMovement',
    'Category',
    'Supplier',
    'Customer',
    'MovementType',
    'ExitReason',
    'StockStatus',
]

__version__ = '0.1.0'
