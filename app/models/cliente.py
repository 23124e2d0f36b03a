# app/models/cliente.py
from sqlalchemy import Column, ForeignKey, Integer, LargeBinary, String, UniqueConstraint
from sqlalchemy.orm import deferred, relationship

from app.db.base_class import Base


class Cliente(Base):
    __table_args__ = (
        # A unicidade do e-mail também é garantida no banco (corrida entre dois cadastros)
        UniqueConstraint("email", name="uq_clientes_email"),
        {"sqlite_autoincrement": True},
    )

    nome = Column(String(100), nullable=False, index=True)
    email = Column(String(100), nullable=False)
    telefone = Column(String, nullable=True)
    # BLOB do logotipo: só é carregado quando pedido explicitamente (undefer)
    logotipo = deferred(Column(LargeBinary, nullable=True))

    # Relacionamentos
    logradouros = relationship(
        "Logradouro",
        back_populates="cliente",
        order_by="Logradouro.id",
        passive_deletes=True,
    )


class Logradouro(Base):
    # Ids nunca reaproveitados: após a substituição dos logradouros os novos ids são outros
    __table_args__ = {"sqlite_autoincrement": True}

    cliente_id = Column(
        Integer,
        ForeignKey("clientes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    endereco = Column(String(200), nullable=False)
    complemento = Column(String(100), nullable=True)
    bairro = Column(String(50), nullable=False)
    cidade = Column(String(50), nullable=False)
    estado = Column(String(2), nullable=False) # UF
    cep = Column(String(10), nullable=False)

    cliente = relationship("Cliente", back_populates="logradouros")
