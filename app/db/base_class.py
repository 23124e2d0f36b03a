from sqlalchemy import Column, DateTime, Integer, func
from sqlalchemy.orm import as_declarative, declared_attr


@as_declarative()
class Base:
    """
    Base class which provides automated table name
    and surrogate primary key column.
    """

    @declared_attr
    def __tablename__(cls) -> str:
        return cls.__name__.lower() + "s" # Ex: Cliente -> clientes

    # Chave inteira autoincrementável, gerada pelo banco na inserção.
    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    data_criacao = Column(DateTime(timezone=True), server_default=func.now())
    data_atualizacao = Column(DateTime(timezone=True), onupdate=func.now())
