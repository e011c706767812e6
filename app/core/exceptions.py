"""
Clausonus - Exceções de domínio
Traduzidas para respostas HTTP pelos handlers registrados em app.main
"""

from __future__ import annotations


class ClausonusError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class NotFoundError(ClausonusError):
    """Recurso solicitado não existe"""
    status_code = 404


class BusinessError(ClausonusError):
    """Regra de negócio violada (CNPJ/CPF/login duplicado, senha incorreta...)"""
    status_code = 400
