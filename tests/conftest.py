import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from app.database import get_db, make_engine, make_sessionmaker  # noqa: E402
from app.db.base_class import Base  # noqa: E402
from app.main import app  # noqa: E402
from app.models import Cliente, Logradouro  # noqa: E402

# Banco SQLite em memória, compartilhado pela mesma conexão (StaticPool)
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

test_engine = make_engine(SQLALCHEMY_DATABASE_URL, poolclass=StaticPool)
TestingSessionLocal = make_sessionmaker(test_engine)


@pytest.fixture
def db_session():
    """
    Cria um banco novo para cada teste e o destrói ao final.
    """
    Base.metadata.create_all(bind=test_engine)

    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def client(db_session):
    """
    TestClient do FastAPI usando a sessão de teste.
    """

    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    client = TestClient(app)
    yield client

    app.dependency_overrides = {}


@pytest.fixture
def novo_cliente():
    """Fábrica de agregados transitórios (ainda não gravados)."""

    def _fabricar(nome="Acme Ltda", email="contato@acme.com", telefone=None, logotipo=None, logradouros=None):
        cliente = Cliente(nome=nome, email=email, telefone=telefone, logotipo=logotipo)
        cliente.logradouros = list(logradouros or [])
        return cliente

    return _fabricar


@pytest.fixture
def novo_logradouro():
    def _fabricar(endereco="Rua das Flores, 123", cidade="São Paulo", estado="SP", **campos):
        return Logradouro(
            endereco=endereco,
            complemento=campos.get("complemento"),
            bairro=campos.get("bairro", "Centro"),
            cidade=cidade,
            estado=estado,
            cep=campos.get("cep", "01001-000"),
            cliente_id=campos.get("cliente_id"),
        )

    return _fabricar


@pytest.fixture
def sql_emitido():
    """Captura os comandos SQL enviados ao banco durante o teste."""
    comandos = []

    def _capturar(conn, cursor, statement, parameters, context, executemany):
        comandos.append(statement)

    event.listen(test_engine, "before_cursor_execute", _capturar)
    yield comandos
    event.remove(test_engine, "before_cursor_execute", _capturar)


@pytest.fixture
def tabelas_removidas(db_session):
    """Remove as tabelas por baixo da sessão, simulando um banco fora do ar."""
    Base.metadata.drop_all(bind=test_engine)
    return db_session
