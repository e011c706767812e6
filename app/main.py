"""
Clausonus - Entrada da aplicação FastAPI
Inicialização: uvicorn app.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import ClausonusError, NotFoundError
from app.core.infrastructure import close_all, init_schema
from app.core.models import ErrorMessage
from app.lojas.service import loja_service
from config.settings import settings

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Ciclo de vida da aplicação"""
    logger.info("Starting Clausonus", env=settings.app_env)
    await init_schema()
    if settings.seed_dev_data and settings.app_env == "development":
        inserted = await loja_service.carregar_dados_iniciais()
        logger.info("Development data loaded", lojas=inserted)
    yield
    logger.info("Shutting down Clausonus")
    await close_all()


app = FastAPI(
    title=settings.app_name,
    version="0.1.0",
    description="Cadastro de lojas e funcionários",
    lifespan=lifespan,
)

# CORS (desenvolvimento libera todas as origens)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.debug else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── Tratamento de erros ──

def _error_response(status: int, message: str, developer_message: str | None = None) -> JSONResponse:
    body = ErrorMessage(status=status, message=message, developer_message=developer_message)
    return JSONResponse(status_code=status, content=body.model_dump())


@app.exception_handler(ClausonusError)
async def domain_error_handler(request: Request, exc: ClausonusError):
    if isinstance(exc, NotFoundError):
        developer_message = "O recurso solicitado não foi encontrado"
    else:
        developer_message = "Erro de negócio"
    logger.info("Request rejected", path=request.url.path, status=exc.status_code, reason=exc.message)
    return _error_response(exc.status_code, exc.message, developer_message)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    violations = ", ".join(err.get("msg", "") for err in exc.errors())
    return _error_response(
        400,
        f"Violações de validação: {violations}",
        "Os dados fornecidos não passaram na validação",
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return _error_response(exc.status_code, str(exc.detail))


UNHANDLED_DEVELOPER_MESSAGE = "Erro inesperado; consulte os logs do servidor"


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    # O detalhe da exceção fica só no log
    logger.error("Unhandled error", path=request.url.path, error_type=type(exc).__name__, error=str(exc))
    return _error_response(500, "Ocorreu um erro interno no sistema", UNHANDLED_DEVELOPER_MESSAGE)


# ── Health check ──

@app.get("/health")
async def health_check():
    return {"status": "ok", "service": settings.app_name}


# ── Rotas ──
from app.api import funcionarios, lojas
app.include_router(lojas.router, prefix=f"{settings.api_prefix}/lojas", tags=["lojas"])
app.include_router(funcionarios.router, prefix=f"{settings.api_prefix}/funcionarios", tags=["funcionarios"])
