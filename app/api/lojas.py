"""
Clausonus - API de lojas
Listagem, busca, cadastro, atualização e exclusão de lojas
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Query, Request, Response

from app.core.models import CnpjCheckResponse, ErrorMessage, LojaDTO
from app.lojas.service import loja_service

router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# Consultas
# ═══════════════════════════════════════════════════════════════════════════


@router.get("", response_model=list[LojaDTO])
async def listar_todas():
    """Lista todas as lojas cadastradas"""
    return await loja_service.listar_todas()


@router.get("/busca", response_model=list[LojaDTO])
async def buscar_por_nome(nome: str = Query(..., min_length=1, description="Nome ou parte do nome da loja")):
    """Lojas cujo nome contém o texto informado"""
    return await loja_service.buscar_por_nome(nome)


# CNPJ formatado contém "/", por isso o conversor path
@router.get(
    "/cnpj/{cnpj:path}",
    response_model=LojaDTO,
    responses={404: {"model": ErrorMessage}},
)
async def buscar_por_cnpj(cnpj: str):
    loja = await loja_service.buscar_por_cnpj(cnpj)
    if loja is None:
        raise HTTPException(status_code=404, detail=f"Loja não encontrada com o CNPJ: {cnpj}")
    return loja


@router.get("/verificar-cnpj/{cnpj:path}", response_model=CnpjCheckResponse)
async def verificar_cnpj(cnpj: str):
    """Indica se já existe loja cadastrada com o CNPJ"""
    return await loja_service.verificar_cnpj(cnpj)


@router.get("/{loja_id}", response_model=LojaDTO, responses={404: {"model": ErrorMessage}})
async def buscar_por_id(loja_id: int):
    return await loja_service.buscar_por_id(loja_id)


# ═══════════════════════════════════════════════════════════════════════════
# Cadastro / alteração
# ═══════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    response_model=LojaDTO,
    status_code=201,
    responses={400: {"model": ErrorMessage}},
)
async def criar(data: LojaDTO, request: Request, response: Response):
    """Cadastra uma nova loja; CNPJ duplicado retorna 400"""
    loja = await loja_service.salvar(data)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{loja.id}"
    return loja


@router.put(
    "/{loja_id}",
    response_model=LojaDTO,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}},
)
async def atualizar(loja_id: int, data: LojaDTO):
    return await loja_service.atualizar(loja_id, data)


@router.delete("/{loja_id}", status_code=204, responses={404: {"model": ErrorMessage}})
async def excluir(loja_id: int):
    await loja_service.excluir(loja_id)
    return Response(status_code=204)
