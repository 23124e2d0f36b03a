# app/core/exceptions.py
from typing import TYPE_CHECKING, List, Optional

from fastapi import status

if TYPE_CHECKING:
    from app.schemas.cliente_schemas import Violacao


class ClienteError(Exception):
    """Base para as falhas de negócio e de persistência de clientes."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    mensagem: str = "Erro ao processar cliente."

    def __init__(self, mensagem: Optional[str] = None):
        if mensagem is not None:
            self.mensagem = mensagem
        super().__init__(self.mensagem)


class ValidationFailed(ClienteError):
    """O cliente viola uma ou mais regras de domínio. Nunca chega ao banco."""

    mensagem = "Dados do cliente inválidos."

    def __init__(self, violacoes: List["Violacao"]):
        self.violacoes = list(violacoes)
        super().__init__()


class DuplicateEmail(ClienteError):
    status_code = status.HTTP_409_CONFLICT
    mensagem = "Este e-mail já está cadastrado."


class ClienteNotFound(ClienteError):
    status_code = status.HTTP_404_NOT_FOUND
    mensagem = "Cliente não encontrado."


class StoreError(ClienteError):
    """Falha de infraestrutura (conexão, constraint não prevista, escrita parcial)."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    mensagem = "Erro interno ao acessar o banco de dados."
