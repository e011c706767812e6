"""
Clausonus - Persistência de funcionários
Consultas SQL sobre a tabela funcionario
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import Funcionario

_COLUMNS = "id, nome, cpf, cargo, login, senha, ativo"


class FuncionarioRepository:
    """Repositório da tabela funcionario; cada método recebe a sessão da transação corrente"""

    async def listar_todos(self, session: AsyncSession) -> list[Funcionario]:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM funcionario ORDER BY id")
        )
        return [_row_to_funcionario(row) for row in result.fetchall()]

    async def listar_ativos(self, session: AsyncSession) -> list[Funcionario]:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM funcionario WHERE ativo = :ativo ORDER BY id"),
            {"ativo": True},
        )
        return [_row_to_funcionario(row) for row in result.fetchall()]

    async def buscar_por_id(self, session: AsyncSession, funcionario_id: int) -> Funcionario | None:
        return await self._buscar_um(session, "id", funcionario_id)

    async def buscar_por_cpf(self, session: AsyncSession, cpf: str) -> Funcionario | None:
        return await self._buscar_um(session, "cpf", cpf)

    async def buscar_por_login(self, session: AsyncSession, login: str) -> Funcionario | None:
        return await self._buscar_um(session, "login", login)

    async def buscar_por_nome(self, session: AsyncSession, nome: str) -> list[Funcionario]:
        """Busca parcial (LIKE %nome%)"""
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM funcionario WHERE nome LIKE :padrao ORDER BY id"),
            {"padrao": f"%{nome}%"},
        )
        return [_row_to_funcionario(row) for row in result.fetchall()]

    async def buscar_por_cargo(self, session: AsyncSession, cargo: str) -> list[Funcionario]:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM funcionario WHERE cargo = :cargo ORDER BY id"),
            {"cargo": cargo},
        )
        return [_row_to_funcionario(row) for row in result.fetchall()]

    async def inserir(self, session: AsyncSession, funcionario: Funcionario) -> Funcionario:
        result = await session.execute(
            text("""
                INSERT INTO funcionario (nome, cpf, cargo, login, senha, ativo)
                VALUES (:nome, :cpf, :cargo, :login, :senha, :ativo)
                RETURNING id
            """),
            _params(funcionario),
        )
        funcionario.id = result.scalar_one()
        return funcionario

    async def atualizar(self, session: AsyncSession, funcionario: Funcionario) -> Funcionario:
        await session.execute(
            text("""
                UPDATE funcionario
                SET nome = :nome, cpf = :cpf, cargo = :cargo, login = :login,
                    senha = :senha, ativo = :ativo
                WHERE id = :id
            """),
            {"id": funcionario.id, **_params(funcionario)},
        )
        return funcionario

    async def deletar(self, session: AsyncSession, funcionario_id: int) -> bool:
        result = await session.execute(
            text("DELETE FROM funcionario WHERE id = :id RETURNING id"),
            {"id": funcionario_id},
        )
        return result.fetchone() is not None

    async def _buscar_um(self, session: AsyncSession, coluna: str, valor) -> Funcionario | None:
        # coluna vem sempre de uma constante interna
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM funcionario WHERE {coluna} = :valor"),
            {"valor": valor},
        )
        row = result.fetchone()
        return _row_to_funcionario(row) if row else None


def _params(funcionario: Funcionario) -> dict:
    return {
        "nome": funcionario.nome,
        "cpf": funcionario.cpf,
        "cargo": funcionario.cargo,
        "login": funcionario.login,
        "senha": funcionario.senha,
        "ativo": funcionario.ativo,
    }


def _row_to_funcionario(row) -> Funcionario:
    return Funcionario(
        id=row[0],
        nome=row[1],
        cpf=row[2],
        cargo=row[3],
        login=row[4],
        senha=row[5],
        ativo=bool(row[6]),
    )
