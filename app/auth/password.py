"""
Clausonus - Hash de senhas

Formato armazenado: base64(salt || digest), onde
    digest_0 = SHA-256(salt || senha)
    digest_i = SHA-256(digest_{i-1})   para i = 1..1000
O salt entra apenas na rodada 0. O formato precisa continuar estável para
que credenciais já gravadas continuem válidas.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import secrets

import structlog

logger = structlog.get_logger()

HASH_ALGORITHM = "sha256"
SALT_LENGTH = 16
ITERATIONS = 1000


class PasswordHashingError(RuntimeError):
    """Algoritmo de hash indisponível no runtime (erro fatal de configuração)"""


def hash_password(plain_password: str) -> str:
    """
    Gera o valor armazenável (base64 de salt + digest) para a senha.

    Senha que não pode ser codificada em UTF-8 (surrogate isolado) gera
    UnicodeEncodeError; PasswordHashingError fica reservado ao algoritmo ausente.
    """
    data = plain_password.encode("utf-8")
    salt = secrets.token_bytes(SALT_LENGTH)
    digest = _digest_with_salt(data, salt)
    return base64.b64encode(salt + digest).decode("ascii")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verifica se a senha corresponde ao valor armazenado.

    Nunca lança exceção: valor malformado, salt incompleto ou qualquer falha
    interna resultam em False, sem distinguir senha errada de dado corrompido.
    """
    try:
        combined = base64.b64decode(hashed_password, validate=True)
    except (binascii.Error, TypeError, ValueError):
        return False

    if len(combined) <= SALT_LENGTH:
        return False

    salt, expected = combined[:SALT_LENGTH], combined[SALT_LENGTH:]
    try:
        actual = _digest_with_salt(plain_password.encode("utf-8"), salt)
    except Exception as e:
        logger.warning("Password verification error", error_type=type(e).__name__)
        return False

    return hmac.compare_digest(expected, actual)


def _new_hash(data: bytes = b""):
    try:
        return hashlib.new(HASH_ALGORITHM, data)
    except ValueError as e:
        raise PasswordHashingError(
            f"Algoritmo de hash indisponível: {HASH_ALGORITHM}"
        ) from e


def _digest_with_salt(data: bytes, salt: bytes) -> bytes:
    h = _new_hash(salt)
    h.update(data)
    digest = h.digest()
    for _ in range(ITERATIONS):
        digest = _new_hash(digest).digest()
    return digest
