"""
Clausonus - Modelos de dados
DTOs Pydantic de entrada/saída das APIs de lojas e funcionários
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_core import PydanticCustomError


def _texto(
    value: Any,
    obrigatorio: str | None,
    max_len: int,
    msg_tamanho: str,
    min_len: int = 0,
) -> Any:
    """Validação de campo texto com as mensagens em português usadas na API"""
    if value is None or (isinstance(value, str) and not value.strip()):
        if obrigatorio:
            raise PydanticCustomError("not_blank", obrigatorio)
        return value
    if not min_len <= len(value) <= max_len:
        raise PydanticCustomError("size", msg_tamanho)
    return value


def _senha_codificavel(value: str | None) -> str | None:
    """A senha precisa ser representável em UTF-8 para entrar no hash"""
    if value is None:
        return value
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        raise PydanticCustomError("encoding", "A senha contém caracteres inválidos")
    return value


# ═══════════════════════════════════════════════════════════════════════════
# Loja
# ═══════════════════════════════════════════════════════════════════════════


class LojaDTO(BaseModel):
    """Dados de uma loja"""
    model_config = {"validate_default": True}

    id: int | None = None
    nome: str | None = None
    endereco: str | None = None
    cnpj: str | None = None
    telefone: str | None = None

    @field_validator("nome")
    @classmethod
    def _validar_nome(cls, v):
        return _texto(v, "O nome é obrigatório", 100, "O nome deve ter no máximo 100 caracteres")

    @field_validator("endereco")
    @classmethod
    def _validar_endereco(cls, v):
        return _texto(v, "O endereço é obrigatório", 200, "O endereço deve ter no máximo 200 caracteres")

    @field_validator("cnpj")
    @classmethod
    def _validar_cnpj(cls, v):
        return _texto(v, "O CNPJ é obrigatório", 18, "CNPJ inválido", min_len=14)

    @field_validator("telefone")
    @classmethod
    def _validar_telefone(cls, v):
        return _texto(v, None, 20, "O telefone deve ter no máximo 20 caracteres")


class CnpjCheckResponse(BaseModel):
    """Resultado da verificação de CNPJ"""
    exists: bool
    message: str


# ═══════════════════════════════════════════════════════════════════════════
# Funcionário
# ═══════════════════════════════════════════════════════════════════════════


class FuncionarioDTO(BaseModel):
    """
    Dados de um funcionário.

    A senha só é aceita na entrada; nunca é serializada nas respostas.
    """
    model_config = {"validate_default": True}

    id: int | None = None
    nome: str | None = None
    cpf: str | None = None
    cargo: str | None = None
    login: str | None = None
    senha: str | None = Field(default=None, exclude=True)
    ativo: bool = True

    @field_validator("nome")
    @classmethod
    def _validar_nome(cls, v):
        return _texto(v, "O nome é obrigatório", 100, "O nome deve ter no máximo 100 caracteres")

    @field_validator("cpf")
    @classmethod
    def _validar_cpf(cls, v):
        return _texto(v, "O CPF é obrigatório", 14, "CPF inválido", min_len=11)

    @field_validator("cargo")
    @classmethod
    def _validar_cargo(cls, v):
        return _texto(v, "O cargo é obrigatório", 50, "O cargo deve ter no máximo 50 caracteres")

    @field_validator("login")
    @classmethod
    def _validar_login(cls, v):
        return _texto(v, "O login é obrigatório", 20, "O login deve ter entre 3 e 20 caracteres", min_len=3)

    @field_validator("senha")
    @classmethod
    def _validar_senha(cls, v):
        if v is None:
            return v
        if not 6 <= len(v) <= 100:
            raise PydanticCustomError("size", "A senha deve ter no mínimo 6 caracteres")
        return _senha_codificavel(v)


class SenhaDTO(BaseModel):
    """Alteração de senha"""
    model_config = {"validate_default": True}

    senha_atual: str | None = None
    nova_senha: str | None = None

    @field_validator("senha_atual")
    @classmethod
    def _validar_senha_atual(cls, v):
        v = _texto(v, "A senha atual é obrigatória", 100, "A senha atual deve ter no máximo 100 caracteres")
        return _senha_codificavel(v)

    @field_validator("nova_senha")
    @classmethod
    def _validar_nova_senha(cls, v):
        v = _texto(
            v, "A nova senha é obrigatória", 100,
            "A nova senha deve ter no mínimo 6 caracteres", min_len=6,
        )
        return _senha_codificavel(v)


# ═══════════════════════════════════════════════════════════════════════════
# Entidades (linhas das tabelas loja / funcionario)
# ═══════════════════════════════════════════════════════════════════════════


class Loja(BaseModel):
    id: int | None = None
    nome: str
    endereco: str
    cnpj: str
    telefone: str | None = None

    def to_dto(self) -> LojaDTO:
        return LojaDTO(
            id=self.id,
            nome=self.nome,
            endereco=self.endereco,
            cnpj=self.cnpj,
            telefone=self.telefone,
        )

    @classmethod
    def from_dto(cls, dto: LojaDTO) -> Loja:
        return cls(
            nome=dto.nome,
            endereco=dto.endereco,
            cnpj=dto.cnpj,
            telefone=dto.telefone,
        )

    def update_from_dto(self, dto: LojaDTO) -> Loja:
        self.nome = dto.nome
        self.endereco = dto.endereco
        self.cnpj = dto.cnpj
        self.telefone = dto.telefone
        return self


class Funcionario(BaseModel):
    id: int | None = None
    nome: str
    cpf: str
    cargo: str
    login: str
    senha: str                   # credencial armazenada, nunca o texto puro
    ativo: bool = True

    def to_dto(self) -> FuncionarioDTO:
        # A senha não é transferida para o DTO
        return FuncionarioDTO(
            id=self.id,
            nome=self.nome,
            cpf=self.cpf,
            cargo=self.cargo,
            login=self.login,
            ativo=self.ativo,
        )

    @classmethod
    def from_dto(cls, dto: FuncionarioDTO, senha_criptografada: str) -> Funcionario:
        return cls(
            nome=dto.nome,
            cpf=dto.cpf,
            cargo=dto.cargo,
            login=dto.login,
            senha=senha_criptografada,
            ativo=dto.ativo,
        )

    def update_from_dto(self, dto: FuncionarioDTO, senha_criptografada: str | None = None) -> Funcionario:
        """Sobrescreve os campos; a credencial só muda quando uma nova é informada"""
        self.nome = dto.nome
        self.cpf = dto.cpf
        self.cargo = dto.cargo
        self.login = dto.login
        if senha_criptografada:
            self.senha = senha_criptografada
        self.ativo = dto.ativo
        return self


# ═══════════════════════════════════════════════════════════════════════════
# Erros
# ═══════════════════════════════════════════════════════════════════════════


class ErrorMessage(BaseModel):
    """Corpo padrão das respostas de erro"""
    status: int
    message: str
    developer_message: str | None = None
