"""
Clausonus - Definição das tabelas (SQLAlchemy Core)
As consultas são escritas à mão com text(); aqui ficam apenas DDL e restrições.
"""

from sqlalchemy import Boolean, Column, Integer, MetaData, String, Table, true

metadata = MetaData()


loja_table = Table(
    "loja",
    metadata,
    Column("id_loja", Integer, primary_key=True, autoincrement=True),
    Column("nome", String(100), nullable=False),
    Column("endereco", String(200), nullable=False),
    Column("cnpj", String(18), nullable=False, unique=True),
    Column("telefone", String(20)),
)


funcionario_table = Table(
    "funcionario",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("nome", String(100), nullable=False),
    Column("cpf", String(14), nullable=False, unique=True),
    Column("cargo", String(50), nullable=False),
    Column("login", String(20), nullable=False, unique=True),
    Column("senha", String(100), nullable=False),   # base64(salt || digest)
    Column("ativo", Boolean, nullable=False, server_default=true()),
)
