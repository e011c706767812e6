"""
Script de inicialização do banco
Cria as tabelas loja e funcionario e, opcionalmente, as lojas de exemplo
Execução: python -m scripts.init_db [--seed]
"""

import asyncio
import sys

sys.path.insert(0, ".")
from app.core.infrastructure import close_all, init_schema
from app.lojas.service import loja_service
from config.settings import settings


async def init_db(seed: bool = False):
    print(f"🔧 Initializing schema on {settings.db_dsn.split('@')[-1]} ...")
    await init_schema()
    print("  ✅ Tables ready: loja, funcionario")

    if seed:
        inserted = await loja_service.carregar_dados_iniciais()
        if inserted:
            print(f"  ✅ {inserted} sample stores inserted.")
        else:
            print("  ⏩ Table 'loja' is not empty, skipping sample data.")


def main():
    print("=" * 60)
    print("Clausonus - Database Initialization")
    print("=" * 60)

    seed = "--seed" in sys.argv[1:]
    try:
        asyncio.run(_run(seed))
    except Exception as e:
        print(f"  ❌ Database init failed: {e}")
        sys.exit(1)

    print("=" * 60)


async def _run(seed: bool):
    try:
        await init_db(seed)
    finally:
        await close_all()


if __name__ == "__main__":
    main()
