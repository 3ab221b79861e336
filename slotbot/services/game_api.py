# slotbot/services/game_api.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, TypeVar

from slotbot.database.session import Database
from slotbot.errors import ValidationError
from slotbot.services.leaderboard import LeaderboardService
from slotbot.services.ledger import LedgerService
from slotbot.services.signature import MAX_SIGNATURE_LENGTH
from slotbot.utils.wallet import MISSING_WALLET_MESSAGE, normalize_wallet, try_normalize_wallet

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_LIMIT = 50
MAX_LIMIT = 100
GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


@dataclass(frozen=True, slots=True)
class ApiResponse(Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T) -> "ApiResponse[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, error: str, message: str | None = None) -> "ApiResponse[T]":
        return cls(success=False, error=error, message=message)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"success": self.success}
        for key in ("data", "error", "message"):
            value = getattr(self, key)
            if value is not None:
                out[key] = value
        return out


# -------------------------------------------------
# Input parsing
# -------------------------------------------------

def _parse_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool):
        raise ValidationError(field_name, "Expected an integer")
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError as e:
        raise ValidationError(field_name, "Expected an integer") from e


def parse_pagination(limit: Any = None, offset: Any = None) -> tuple[int, int]:
    lim = DEFAULT_LIMIT if limit is None or limit == "" else _parse_int(limit, "limit")
    off = 0 if offset is None or offset == "" else _parse_int(offset, "offset")

    if not 1 <= lim <= MAX_LIMIT:
        raise ValidationError("limit", f"Number must be between 1 and {MAX_LIMIT}")
    if off < 0:
        raise ValidationError("offset", "Number must be greater than or equal to 0")
    return lim, off


def parse_signature(signature: Any) -> str | None:
    if signature is None or signature == "":
        return None
    if not isinstance(signature, str):
        raise ValidationError("signature", "Expected a string")
    if len(signature) > MAX_SIGNATURE_LENGTH:
        raise ValidationError("signature", f"Must be at most {MAX_SIGNATURE_LENGTH} characters")
    return signature


def _validation_response(e: ValidationError) -> ApiResponse[Any]:
    if e.field == "address":
        error = "Missing wallet address" if e.message == MISSING_WALLET_MESSAGE else "Invalid wallet address"
        return ApiResponse.fail(error, e.message)
    return ApiResponse.fail("Validation error", f"{e.field}: {e.message}")


# -------------------------------------------------
# Operations
# -------------------------------------------------

class GameApi:
    """
    Transport-agnostic game operations. Every call returns an envelope;
    only validation failures (and genuine bugs) produce success=False.
    """

    def __init__(
        self,
        ledger: LedgerService,
        leaderboard: LeaderboardService,
        *,
        db: Database | None = None,
        expose_errors: bool = False,
    ) -> None:
        self.ledger = ledger
        self.leaderboard = leaderboard
        self.db = db
        self.expose_errors = expose_errors

    async def _guard(self, op: str, fn: Callable[[], Awaitable[T]]) -> ApiResponse[T]:
        try:
            return ApiResponse.ok(await fn())
        except ValidationError as e:
            return _validation_response(e)
        except Exception as e:
            log.exception("API error in %s", op)
            message = str(e) or GENERIC_ERROR_MESSAGE
            return ApiResponse.fail(
                "Internal server error",
                message if self.expose_errors else GENERIC_ERROR_MESSAGE,
            )

    async def get_state(self, address: str | None) -> ApiResponse[dict[str, Any]]:
        async def _run() -> dict[str, Any]:
            wallet = normalize_wallet(address)
            state = await self.ledger.load_state(wallet)
            return state.to_dict()

        return await self._guard("get_state", _run)

    async def spin(
        self,
        address: str | None,
        signature: str | None = None,
        symbols: Any = None,
    ) -> ApiResponse[dict[str, Any]]:
        """`symbols` is accepted for client compatibility and ignored."""

        async def _run() -> dict[str, Any]:
            wallet = normalize_wallet(address)
            sig = parse_signature(signature)
            if symbols is not None:
                log.debug("Ignoring client-supplied symbols from %s", wallet)
            outcome = await self.ledger.record_spin(wallet, sig)
            return outcome.to_dict()

        return await self._guard("spin", _run)

    async def get_leaderboard(
        self,
        limit: Any = None,
        offset: Any = None,
        address: str | None = None,
    ) -> ApiResponse[dict[str, Any]]:
        async def _run() -> dict[str, Any]:
            lim, off = parse_pagination(limit, offset)
            entries = await self.leaderboard.rank(limit=lim, offset=off)

            wallet = try_normalize_wallet(address)
            user_rank = await self.leaderboard.rank_of(wallet) if wallet else None

            return {
                "entries": [e.to_dict() for e in entries],
                "userRank": user_rank,
                "total": await self.leaderboard.total(),
            }

        return await self._guard("get_leaderboard", _run)

    async def health(self) -> dict[str, Any]:
        connected = await self.db.ping() if self.db is not None else False
        return {
            "status": "ok",
            "database": "connected" if connected else "disconnected",
        }
