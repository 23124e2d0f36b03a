# app/services/cliente_service.py
from typing import List

from sqlalchemy.orm import Session

from app import crud
from app.core.exceptions import ClienteNotFound, DuplicateEmail, ValidationFailed
from app.core.logging import logger
from app.crud.crud_cliente import CRUDCliente
from app.models.cliente import Cliente, Logradouro
from app.schemas.cliente_schemas import (
    ClienteCreate,
    ClienteDetalhe,
    ClienteResult,
    ClienteResumo,
    ClienteUpdate,
)
from app.services.cliente_validator import validar_cliente


class ClienteService:
    """
    Orquestra validação, unicidade de e-mail e persistência de clientes.

    Nas escritas a ordem é fixa: montar o agregado, validar, (no cadastro)
    verificar o e-mail e só então gravar.
    """

    def __init__(self, db: Session, repositorio: CRUDCliente = crud.cliente):
        self.db = db
        self.repositorio = repositorio

    def listar(self, *, skip: int = 0, limit: int = 100) -> List[ClienteResumo]:
        clientes = self.repositorio.query.get_multi(self.db, skip=skip, limit=limit)
        return [ClienteResumo.model_validate(c) for c in clientes]

    def obter(self, id: int) -> ClienteDetalhe:
        cliente = self.repositorio.query.get(self.db, id=id)
        if not cliente:
            raise ClienteNotFound()
        return ClienteDetalhe.model_validate(cliente)

    def criar(self, dados: ClienteCreate) -> ClienteResult:
        cliente = self._montar_cliente(dados)
        self._validar(cliente)

        if self.repositorio.query.email_exists(self.db, email=cliente.email):
            logger.warning(f"Cadastro recusado: e-mail {cliente.email} já existe")
            raise DuplicateEmail()

        cliente = self.repositorio.command.create(self.db, cliente=cliente)
        logger.info(f"Cliente {cliente.id} criado com {len(cliente.logradouros)} logradouro(s)")
        return ClienteResult(id=cliente.id, nome=cliente.nome)

    def atualizar(self, id: int, dados: ClienteUpdate) -> ClienteDetalhe:
        # A unicidade do e-mail não é reverificada aqui; um conflito só aparece
        # pela constraint do banco, como DuplicateEmail vindo do repositório.
        cliente = self._montar_cliente(dados, id=id)
        self._validar(cliente)

        self.repositorio.command.update(self.db, cliente=cliente)
        logger.info(f"Cliente {id} atualizado; logradouros substituídos ({len(cliente.logradouros)})")
        return self.obter(id)

    def remover(self, id: int) -> None:
        self.repositorio.command.remove(self.db, id=id)
        logger.info(f"Cliente {id} removido")

    @staticmethod
    def _montar_cliente(dados: ClienteCreate, id: int = 0) -> Cliente:
        cliente = Cliente(
            nome=dados.nome,
            email=dados.email,
            telefone=dados.telefone,
            logotipo=dados.logotipo,
        )
        if id:
            cliente.id = id
        cliente.logradouros = [
            Logradouro(
                endereco=l.endereco,
                complemento=l.complemento,
                bairro=l.bairro,
                cidade=l.cidade,
                estado=l.estado,
                cep=l.cep,
            )
            for l in dados.logradouros
        ]
        return cliente

    @staticmethod
    def _validar(cliente: Cliente) -> None:
        violacoes = validar_cliente(cliente)
        if violacoes:
            logger.warning(f"Cliente inválido: {[v.campo for v in violacoes]}")
            raise ValidationFailed(violacoes)
