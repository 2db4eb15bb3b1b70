"""
Exceptions for StockPro.

All errors are StockError with a structured code for programmatic handling.
"""

from decimal import Decimal
from typing import Any


class BaseError(Exception):
    """
    Error with a machine-readable code, a message and context data.

    The message defaults to the class's ``_default_messages[code]``.
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, /, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class StockError(BaseError):
    """
    Structured exception for inventory operations.

    Usage:
        try:
            inventory.record_exit(session, produto, 10, reason='Venda')
        except StockError as e:
            if e.code == 'INSUFFICIENT_QUANTITY':
                print(f"Só tem {e.available} em estoque")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_QUANTITY': 'Quantidade inválida (deve ser positiva)',
        'INSUFFICIENT_QUANTITY': 'Quantidade insuficiente no estoque',
        'INVALID_PRICE': 'Preço inválido (não pode ser negativo)',
        'REASON_REQUIRED': 'Motivo da saída é obrigatório',
        'TOTAL_VALUE_MISMATCH': 'Valor total difere de quantidade × preço unitário',
        'NOT_FOUND': 'Registro não encontrado',
        'DUPLICATE_CODE': 'Já existe um produto com este código',
        'REFERENCED_RECORD': 'Registro possui movimentações ou vínculos e não pode ser excluído',
        'INVALID_VALUE': 'Valor inválido',
        'FETCH_FAILED': 'Falha ao carregar dados',
    }

    @property
    def available(self) -> int:
        """Shortcut for data['available']."""
        return self.data.get('available', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {
                k: str(v) if isinstance(v, Decimal) else v
                for k, v in self.data.items()
            }
        }
