from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from sqlalchemy.orm import Session

from app.core.exceptions import ClienteNotFound, DuplicateEmail, StoreError, ValidationFailed
from app.models import Logradouro
from app.schemas import ClienteCreate, ClienteUpdate, LogradouroIn
from app.services.cliente_service import ClienteService


def _logradouro_in(endereco="Rua das Flores, 123", **campos):
    return LogradouroIn(
        endereco=endereco,
        complemento=campos.get("complemento"),
        bairro=campos.get("bairro", "Centro"),
        cidade=campos.get("cidade", "São Paulo"),
        estado=campos.get("estado", "SP"),
        cep=campos.get("cep", "01001-000"),
        id=campos.get("id"),
    )


@pytest.fixture
def repositorio():
    """Repositório falso para verificar a orquestração sem banco."""
    repo = MagicMock()
    repo.query.email_exists.return_value = False
    repo.query.get.return_value = SimpleNamespace(
        id=7, nome="Acme", email="a@acme.com", telefone=None, logotipo=None, logradouros=[]
    )

    def _create(db, *, cliente):
        cliente.id = 42
        return cliente

    repo.command.create.side_effect = _create
    return repo


@pytest.fixture
def service(db_session: Session) -> ClienteService:
    return ClienteService(db_session)


# ---------------------------------------------------------------------------
# Orquestração (repositório falso)
# ---------------------------------------------------------------------------


def test_criar_valida_depois_verifica_email_depois_grava(repositorio):
    service = ClienteService(MagicMock(), repositorio)

    resultado = service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    assert resultado.id == 42
    assert resultado.nome == "Acme"
    assert [c[0] for c in repositorio.mock_calls] == ["query.email_exists", "command.create"]


def test_criar_invalido_nunca_chega_ao_repositorio(repositorio):
    service = ClienteService(MagicMock(), repositorio)

    with pytest.raises(ValidationFailed):
        service.criar(ClienteCreate(nome="", email="bad"))

    assert repositorio.mock_calls == []


def test_criar_com_email_existente_nao_grava(repositorio):
    repositorio.query.email_exists.return_value = True
    service = ClienteService(MagicMock(), repositorio)

    with pytest.raises(DuplicateEmail):
        service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    repositorio.command.create.assert_not_called()


def test_atualizar_invalido_nunca_chega_ao_repositorio(repositorio):
    service = ClienteService(MagicMock(), repositorio)

    with pytest.raises(ValidationFailed):
        service.atualizar(1, ClienteUpdate(nome="A", email="a@acme.com"))

    repositorio.command.update.assert_not_called()


def test_atualizar_nao_reverifica_unicidade_do_email(repositorio):
    service = ClienteService(MagicMock(), repositorio)

    service.atualizar(7, ClienteUpdate(nome="Acme", email="a@acme.com"))

    repositorio.query.email_exists.assert_not_called()
    repositorio.command.update.assert_called_once()
    enviado = repositorio.command.update.call_args.kwargs["cliente"]
    assert enviado.id == 7


def test_monta_logradouros_sem_confiar_no_id_da_entrada(repositorio):
    service = ClienteService(MagicMock(), repositorio)

    service.criar(ClienteCreate(nome="Acme", email="a@acme.com", logradouros=[_logradouro_in(id=55)]))

    enviado = repositorio.command.create.call_args.kwargs["cliente"]
    assert len(enviado.logradouros) == 1
    assert isinstance(enviado.logradouros[0], Logradouro)
    assert enviado.logradouros[0].id is None


# ---------------------------------------------------------------------------
# Cenários contra o banco em memória
# ---------------------------------------------------------------------------


def test_cenario_cadastro_valido(service: ClienteService):
    resultado = service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    assert resultado.id > 0
    assert resultado.nome == "Acme"


def test_cenario_email_duplicado(service: ClienteService):
    service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    with pytest.raises(DuplicateEmail):
        service.criar(ClienteCreate(nome="Acme2", email="a@acme.com"))


def test_cenario_nome_e_email_invalidos(service: ClienteService):
    with pytest.raises(ValidationFailed) as exc_info:
        service.criar(ClienteCreate(nome="", email="bad"))

    campos = {v.campo for v in exc_info.value.violacoes}
    assert campos == {"nome", "email"}


def test_cenario_cliente_inexistente(service: ClienteService):
    with pytest.raises(ClienteNotFound):
        service.obter(999999)


def test_cenario_logotipo_vazio(service: ClienteService):
    with pytest.raises(ValidationFailed) as exc_info:
        service.criar(ClienteCreate(nome="Logo Co", email="l@co.com", logotipo=b""))

    assert [v.campo for v in exc_info.value.violacoes] == ["logotipo"]


def test_corrida_no_cadastro_resolvida_pela_constraint(service: ClienteService, monkeypatch):
    # Simula dois cadastros que passaram pela verificação antes de qualquer gravação
    monkeypatch.setattr(service.repositorio.query, "email_exists", lambda db, email: False)
    service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    with pytest.raises(DuplicateEmail):
        service.criar(ClienteCreate(nome="Acme2", email="a@acme.com"))

    assert len(service.listar()) == 1


def test_listagem_sem_logotipo_e_detalhe_com_logotipo(service: ClienteService):
    logo = b"\x89PNG\r\n\x1a\n" + bytes(range(256))
    criado = service.criar(ClienteCreate(nome="Logo Co", email="l@co.com", logotipo=logo))

    resumo = service.listar()[0]
    assert resumo.id == criado.id
    assert "logotipo" not in resumo.model_dump()

    assert service.obter(criado.id).logotipo == logo


def test_atualizar_substitui_logradouros(service: ClienteService):
    criado = service.criar(
        ClienteCreate(
            nome="Acme",
            email="a@acme.com",
            logradouros=[_logradouro_in("Rua Y"), _logradouro_in("Rua Z")],
        )
    )
    antigos = {l.id for l in service.obter(criado.id).logradouros}

    detalhe = service.atualizar(
        criado.id,
        ClienteUpdate(nome="Acme", email="a@acme.com", logradouros=[_logradouro_in("Rua X")]),
    )

    assert [l.endereco for l in detalhe.logradouros] == ["Rua X"]
    assert detalhe.logradouros[0].id not in antigos
    assert detalhe.logradouros[0].cliente_id == criado.id


def test_atualizar_inexistente(service: ClienteService):
    with pytest.raises(ClienteNotFound):
        service.atualizar(999999, ClienteUpdate(nome="Acme", email="a@acme.com"))


def test_atualizar_mantem_o_proprio_email(service: ClienteService):
    criado = service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))

    detalhe = service.atualizar(criado.id, ClienteUpdate(nome="Acme SA", email="a@acme.com", telefone="1199"))

    assert detalhe.nome == "Acme SA"
    assert detalhe.telefone == "1199"


def test_remover(service: ClienteService):
    criado = service.criar(
        ClienteCreate(nome="Acme", email="a@acme.com", logradouros=[_logradouro_in()])
    )

    service.remover(criado.id)

    with pytest.raises(ClienteNotFound):
        service.obter(criado.id)
    assert service.db.query(Logradouro).filter(Logradouro.cliente_id == criado.id).count() == 0


def test_falha_do_banco_na_leitura_vira_store_error(tabelas_removidas: Session):
    service = ClienteService(tabelas_removidas)

    with pytest.raises(StoreError):
        service.listar()
    with pytest.raises(StoreError):
        service.obter(1)
    with pytest.raises(StoreError):
        service.criar(ClienteCreate(nome="Acme", email="a@acme.com"))
