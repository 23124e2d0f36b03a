# app/services/cliente_validator.py
from typing import List, Optional

from app.models.cliente import Cliente
from app.schemas.cliente_schemas import Violacao

NOME_MIN = 2
NOME_MAX = 100


def _vazio(valor: Optional[str]) -> bool:
    return valor is None or not valor.strip()


def _email_valido(email: str) -> bool:
    # Gramática permissiva: um único "@", que não pode ser o primeiro nem o último
    # caractere. Não exige ponto no domínio e tolera espaços internos.
    posicao = email.find("@")
    return 0 < posicao < len(email) - 1 and posicao == email.rfind("@")


def validar_cliente(cliente: Cliente) -> List[Violacao]:
    """
    Aplica as regras de domínio do cliente e devolve todas as violações encontradas.
    Lista vazia significa que o cliente pode ser persistido.
    Não acessa o banco.
    """
    violacoes: List[Violacao] = []

    nome = cliente.nome
    if _vazio(nome):
        violacoes.append(Violacao(campo="nome", mensagem="O nome é obrigatório."))
    if nome is not None and not NOME_MIN <= len(nome) <= NOME_MAX:
        violacoes.append(
            Violacao(campo="nome", mensagem=f"O nome deve ter entre {NOME_MIN} e {NOME_MAX} caracteres.")
        )

    email = cliente.email
    if _vazio(email):
        violacoes.append(Violacao(campo="email", mensagem="O e-mail é obrigatório."))
    elif not _email_valido(email):
        violacoes.append(Violacao(campo="email", mensagem="E-mail inválido."))

    if cliente.logotipo is not None and len(cliente.logotipo) == 0:
        violacoes.append(
            Violacao(campo="logotipo", mensagem="O arquivo de logotipo não pode estar vazio.")
        )

    return violacoes
