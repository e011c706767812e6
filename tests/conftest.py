"""
Clausonus - Fixtures compartilhadas dos testes
"""

import os
from contextlib import asynccontextmanager

# Precisa acontecer antes de qualquer import de config.settings
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SEED_DEV_DATA", "false")

import pytest
from fastapi.testclient import TestClient

from app.auth.password import hash_password
from app.core.models import Funcionario, FuncionarioDTO, Loja, LojaDTO
from config.settings import settings


@pytest.fixture
def client(tmp_path, monkeypatch):
    """TestClient sobre um banco SQLite temporário, recriado a cada teste"""
    monkeypatch.setattr(settings, "database_url", f"sqlite+aiosqlite:///{tmp_path / 'clausonus.db'}")
    from app.main import app
    with TestClient(app) as c:
        yield c


@pytest.fixture
def fake_session():
    """session_factory que não abre conexão (para testes de serviço com repositório mockado)"""
    @asynccontextmanager
    async def factory():
        yield object()
    return factory


@pytest.fixture
def loja_payload() -> dict:
    return {
        "nome": "Loja Teste",
        "endereco": "Rua das Flores, 123, Campinas - SP",
        "cnpj": "45.678.901/0001-04",
        "telefone": "(19) 3333-4444",
    }


@pytest.fixture
def funcionario_payload() -> dict:
    return {
        "nome": "Maria da Silva",
        "cpf": "123.456.789-00",
        "cargo": "Vendedora",
        "login": "maria",
        "senha": "senha123",
        "ativo": True,
    }


@pytest.fixture
def sample_loja() -> Loja:
    return Loja(
        id=1,
        nome="Loja Central",
        endereco="Av. Paulista, 1000, São Paulo - SP",
        cnpj="12.345.678/0001-01",
        telefone="(11) 3456-7890",
    )


@pytest.fixture
def sample_funcionario() -> Funcionario:
    """Funcionário persistido com a senha 'senha123'"""
    return Funcionario(
        id=1,
        nome="Maria da Silva",
        cpf="123.456.789-00",
        cargo="Vendedora",
        login="maria",
        senha=hash_password("senha123"),
        ativo=True,
    )


@pytest.fixture
def loja_dto(loja_payload) -> LojaDTO:
    return LojaDTO(**loja_payload)


@pytest.fixture
def funcionario_dto(funcionario_payload) -> FuncionarioDTO:
    return FuncionarioDTO(**funcionario_payload)
