# app/crud/crud_cliente.py
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy import delete, exists, insert, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, load_only, selectinload, undefer

from app.core.exceptions import ClienteError, ClienteNotFound, DuplicateEmail, StoreError
from app.core.logging import logger
from app.models.cliente import Cliente, Logradouro

clientes_table = Cliente.__table__
logradouros_table = Logradouro.__table__


class ClienteQuery:
    """Lado de leitura: consultas pelo ORM."""

    def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Cliente]:
        # O logotipo (BLOB) não entra no SELECT da listagem.
        try:
            return (
                db.query(Cliente)
                .options(
                    load_only(Cliente.id, Cliente.nome, Cliente.email, Cliente.telefone),
                    selectinload(Cliente.logradouros),
                )
                .order_by(Cliente.id)
                .offset(skip)
                .limit(limit)
                .populate_existing()
                .all()
            )
        except SQLAlchemyError as e:
            raise _erro_de_leitura(db, e, consulta="listar clientes") from e

    def get(self, db: Session, id: int) -> Optional[Cliente]:
        try:
            return (
                db.query(Cliente)
                .options(undefer(Cliente.logotipo), selectinload(Cliente.logradouros))
                .filter(Cliente.id == id)
                .populate_existing()
                .first()
            )
        except SQLAlchemyError as e:
            raise _erro_de_leitura(db, e, consulta=f"buscar cliente {id}") from e

    def email_exists(self, db: Session, *, email: str) -> bool:
        try:
            return bool(db.query(exists().where(Cliente.email == email)).scalar())
        except SQLAlchemyError as e:
            raise _erro_de_leitura(db, e, consulta="verificar e-mail") from e


def _erro_de_leitura(db: Session, e: SQLAlchemyError, *, consulta: str) -> StoreError:
    db.rollback()
    logger.error(f"Erro ao {consulta} no banco: {str(e)}")
    return StoreError()


class ClienteCommand:
    """
    Lado de escrita: comandos parametrizados direto nas tabelas.

    Cada método é uma unidade atômica (commit único, rollback em qualquer falha),
    de modo que nunca sobra um cliente gravado sem os logradouros enviados.
    """

    def create(self, db: Session, *, cliente: Cliente) -> Cliente:
        try:
            resultado = db.execute(
                insert(clientes_table).values(
                    nome=cliente.nome,
                    email=cliente.email,
                    telefone=cliente.telefone,
                    logotipo=cliente.logotipo,
                )
            )
            cliente.id = resultado.inserted_primary_key[0]
            self._inserir_logradouros(db, cliente_id=cliente.id, logradouros=cliente.logradouros)
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise self._traduzir_erro(e, operacao="inserir") from e
        return cliente

    def update(self, db: Session, *, cliente: Cliente) -> Cliente:
        valores: Dict[str, Any] = {
            "nome": cliente.nome,
            "email": cliente.email,
            "telefone": cliente.telefone,
        }
        # Sem logotipo novo, o armazenado é mantido.
        if cliente.logotipo is not None:
            valores["logotipo"] = cliente.logotipo

        try:
            resultado = db.execute(
                update(clientes_table).where(clientes_table.c.id == cliente.id).values(**valores)
            )
            if resultado.rowcount == 0:
                raise ClienteNotFound()
            self._substituir_logradouros(db, cliente_id=cliente.id, logradouros=cliente.logradouros)
            db.commit()
        except ClienteError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise self._traduzir_erro(e, operacao="atualizar") from e
        return cliente

    def remove(self, db: Session, *, id: int) -> None:
        # Os logradouros saem pelo ON DELETE CASCADE da chave estrangeira.
        try:
            resultado = db.execute(delete(clientes_table).where(clientes_table.c.id == id))
            if resultado.rowcount == 0:
                raise ClienteNotFound()
            db.commit()
        except ClienteError:
            db.rollback()
            raise
        except SQLAlchemyError as e:
            db.rollback()
            raise self._traduzir_erro(e, operacao="remover") from e

    def _substituir_logradouros(
        self, db: Session, *, cliente_id: int, logradouros: Iterable[Logradouro]
    ) -> None:
        """
        Substituição completa: apaga todos os logradouros do cliente e insere de novo
        os que vieram na requisição. Os ids antigos não são preservados.
        """
        db.execute(delete(logradouros_table).where(logradouros_table.c.cliente_id == cliente_id))
        self._inserir_logradouros(db, cliente_id=cliente_id, logradouros=logradouros)

    def _inserir_logradouros(
        self, db: Session, *, cliente_id: int, logradouros: Iterable[Logradouro]
    ) -> None:
        for logradouro in logradouros:
            # cliente_id vem sempre do cliente gravado, nunca da entrada
            logradouro.cliente_id = cliente_id
            resultado = db.execute(
                insert(logradouros_table).values(
                    cliente_id=cliente_id,
                    endereco=logradouro.endereco,
                    complemento=logradouro.complemento,
                    bairro=logradouro.bairro,
                    cidade=logradouro.cidade,
                    estado=logradouro.estado,
                    cep=logradouro.cep,
                )
            )
            logradouro.id = resultado.inserted_primary_key[0]

    @staticmethod
    def _traduzir_erro(e: SQLAlchemyError, *, operacao: str) -> ClienteError:
        if isinstance(e, IntegrityError) and "email" in str(e.orig).lower():
            logger.warning(f"Violação da unicidade de e-mail ao {operacao} cliente")
            return DuplicateEmail()
        logger.error(f"Erro ao {operacao} cliente no banco: {str(e)}")
        return StoreError()


class CRUDCliente:
    def __init__(self) -> None:
        self.query = ClienteQuery()
        self.command = ClienteCommand()


cliente = CRUDCliente()
