"""
Inventoria Exceptions — Exceções do motor de IDs customizados.

Todas as exceções seguem o padrão:
- code: Código máquina do erro (ex.: "invalid_type", "exhausted_retries")
- message: Mensagem legível para humanos
- context: Dados adicionais sobre o erro
"""

from __future__ import annotations


class InventoriaError(Exception):
    """
    Classe base para todas as exceções do Inventoria.

    Attributes:
        code: Código máquina do erro
        message: Mensagem legível para humanos
        context: Dados adicionais sobre o erro
    """

    retryable = False

    def __init__(self, code: str = "error", message: str = "", context: dict | None = None):
        self.code = code
        self.message = message
        self.context = context or {}
        super().__init__(message)

    def as_dict(self) -> dict:
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "retryable": self.retryable,
        }


class ValidationError(InventoriaError):
    """
    FormatSpec malformado. Rejeitado antes de chegar à geração.

    Codes: "invalid_json", "missing_elements", "too_few_elements", "too_many_elements",
    "invalid_type", "missing_value", "value_too_long", "invalid_min_digits",
    "missing_min_digits", "invalid_case", "invalid_datetime_format", "invalid_options"
    """


class CompileError(InventoriaError):
    """
    Falha ao compilar um FormatSpec.

    Só deveria acontecer se a validação foi pulada: é violação de invariante interna.
    """


class CollisionError(InventoriaError):
    """
    Candidato já existe no namespace do inventário.

    Transitório: é tratado dentro do loop de retry e só aparece para o chamador
    quando o ID foi informado manualmente (não há o que regenerar).
    """


class UniqueConstraintViolation(CollisionError):
    """
    Constraint (inventory, custom_id) violada no INSERT.

    Entra no mesmo orçamento de tentativas que CollisionError.
    """


class ExhaustedRetries(InventoriaError):
    """
    Todas as tentativas de geração colidiram.

    Terminal para a requisição, mas o usuário pode tentar novamente.
    """

    retryable = True

    def __init__(self, attempts: int, inventory_id=None, last_candidate: str | None = None):
        self.attempts = attempts
        super().__init__(
            code="exhausted_retries",
            message=f"Não foi possível gerar um ID único após {attempts} tentativas",
            context={
                "attempts": attempts,
                "inventory_id": str(inventory_id) if inventory_id is not None else None,
                "last_candidate": last_candidate,
            },
        )
