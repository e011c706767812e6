"""
Clausonus - API de funcionários
Cadastro de funcionários, alteração de senha e de status
"""

from __future__ import annotations

from fastapi import APIRouter, Query, Request, Response

from app.core.models import ErrorMessage, FuncionarioDTO, SenhaDTO
from app.funcionarios.service import funcionario_service

router = APIRouter()


# ═══════════════════════════════════════════════════════════════════════════
# Consultas
# ═══════════════════════════════════════════════════════════════════════════


@router.get("", response_model=list[FuncionarioDTO])
async def listar_todos(ativos: bool | None = None):
    """Lista os funcionários; ?ativos=true restringe aos ativos"""
    if ativos:
        return await funcionario_service.listar_ativos()
    return await funcionario_service.listar_todos()


@router.get("/busca", response_model=list[FuncionarioDTO])
async def buscar_por_nome(nome: str = Query(..., min_length=1, description="Nome ou parte do nome")):
    return await funcionario_service.buscar_por_nome(nome)


@router.get("/cargo/{cargo}", response_model=list[FuncionarioDTO])
async def buscar_por_cargo(cargo: str):
    return await funcionario_service.buscar_por_cargo(cargo)


@router.get("/{funcionario_id}", response_model=FuncionarioDTO, responses={404: {"model": ErrorMessage}})
async def buscar_por_id(funcionario_id: int):
    return await funcionario_service.buscar_por_id(funcionario_id)


# ═══════════════════════════════════════════════════════════════════════════
# Cadastro / alteração
# ═══════════════════════════════════════════════════════════════════════════


@router.post(
    "",
    response_model=FuncionarioDTO,
    status_code=201,
    responses={400: {"model": ErrorMessage}},
)
async def salvar(data: FuncionarioDTO, request: Request, response: Response):
    """Cadastra um novo funcionário; CPF ou login duplicado retorna 400"""
    funcionario = await funcionario_service.salvar(data)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{funcionario.id}"
    return funcionario


@router.put(
    "/{funcionario_id}",
    response_model=FuncionarioDTO,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}},
)
async def atualizar(funcionario_id: int, data: FuncionarioDTO):
    return await funcionario_service.atualizar(funcionario_id, data)


@router.put(
    "/{funcionario_id}/senha",
    status_code=204,
    responses={400: {"model": ErrorMessage}, 404: {"model": ErrorMessage}},
)
async def atualizar_senha(funcionario_id: int, data: SenhaDTO):
    """Troca a senha; a senha atual precisa conferir com a credencial armazenada"""
    await funcionario_service.atualizar_senha(funcionario_id, data.senha_atual, data.nova_senha)
    return Response(status_code=204)


@router.put(
    "/{funcionario_id}/status",
    response_model=FuncionarioDTO,
    responses={404: {"model": ErrorMessage}},
)
async def alterar_status(funcionario_id: int, ativo: bool = Query(..., description="true=ativo, false=inativo")):
    return await funcionario_service.alterar_status(funcionario_id, ativo)


@router.delete("/{funcionario_id}", status_code=204, responses={404: {"model": ErrorMessage}})
async def excluir(funcionario_id: int):
    await funcionario_service.excluir(funcionario_id)
    return Response(status_code=204)
