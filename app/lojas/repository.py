"""
Clausonus - Persistência de lojas
Consultas SQL sobre a tabela loja
"""

from __future__ import annotations

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.models import Loja

_COLUMNS = "id_loja, nome, endereco, cnpj, telefone"


class LojaRepository:
    """Repositório da tabela loja; cada método recebe a sessão da transação corrente"""

    async def listar_todas(self, session: AsyncSession) -> list[Loja]:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM loja ORDER BY id_loja")
        )
        return [_row_to_loja(row) for row in result.fetchall()]

    async def buscar_por_id(self, session: AsyncSession, loja_id: int) -> Loja | None:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM loja WHERE id_loja = :id"),
            {"id": loja_id},
        )
        row = result.fetchone()
        return _row_to_loja(row) if row else None

    async def buscar_por_cnpj(self, session: AsyncSession, cnpj: str) -> Loja | None:
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM loja WHERE cnpj = :cnpj"),
            {"cnpj": cnpj},
        )
        row = result.fetchone()
        return _row_to_loja(row) if row else None

    async def buscar_por_nome(self, session: AsyncSession, nome: str) -> list[Loja]:
        """Busca parcial (LIKE %nome%)"""
        result = await session.execute(
            text(f"SELECT {_COLUMNS} FROM loja WHERE nome LIKE :padrao ORDER BY id_loja"),
            {"padrao": f"%{nome}%"},
        )
        return [_row_to_loja(row) for row in result.fetchall()]

    async def contar(self, session: AsyncSession) -> int:
        result = await session.execute(text("SELECT COUNT(*) FROM loja"))
        return result.scalar() or 0

    async def inserir(self, session: AsyncSession, loja: Loja) -> Loja:
        result = await session.execute(
            text("""
                INSERT INTO loja (nome, endereco, cnpj, telefone)
                VALUES (:nome, :endereco, :cnpj, :telefone)
                RETURNING id_loja
            """),
            {
                "nome": loja.nome,
                "endereco": loja.endereco,
                "cnpj": loja.cnpj,
                "telefone": loja.telefone,
            },
        )
        loja.id = result.scalar_one()
        return loja

    async def atualizar(self, session: AsyncSession, loja: Loja) -> Loja:
        await session.execute(
            text("""
                UPDATE loja
                SET nome = :nome, endereco = :endereco, cnpj = :cnpj, telefone = :telefone
                WHERE id_loja = :id
            """),
            {
                "id": loja.id,
                "nome": loja.nome,
                "endereco": loja.endereco,
                "cnpj": loja.cnpj,
                "telefone": loja.telefone,
            },
        )
        return loja

    async def deletar(self, session: AsyncSession, loja_id: int) -> bool:
        result = await session.execute(
            text("DELETE FROM loja WHERE id_loja = :id RETURNING id_loja"),
            {"id": loja_id},
        )
        return result.fetchone() is not None


def _row_to_loja(row) -> Loja:
    return Loja(
        id=row[0],
        nome=row[1],
        endereco=row[2],
        cnpj=row[3],
        telefone=row[4],
    )
