"""EVM multi-chain token scan endpoint.

Implements GET /api/evm-tokens using the application-layer
ScanEvmTokensUseCase.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse

from app.dustsweep.application.dto.token_dto import EvmTokensDTO
from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.application.use_cases.scan_evm_tokens import ScanEvmTokensUseCase
from app.dustsweep.domain.value_objects.origin_policy import OriginPolicy
from app.dustsweep.presentation.api.dependencies import (
    cors_headers,
    get_evm_use_case,
    get_origin_policy,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/evm-tokens", response_model=EvmTokensDTO)
async def scan_evm_tokens(
    addr: Annotated[Optional[str], Query(description="Wallet address (0x + 40 hex)")] = None,
    origin: Annotated[Optional[str], Header()] = None,
    use_case: ScanEvmTokensUseCase = Depends(get_evm_use_case),
    policy: OriginPolicy = Depends(get_origin_policy),
) -> JSONResponse:
    """Scan every configured EVM chain for non-dust token balances.

    Provider failures never fail the request: they show up in the
    per-chain reports, and a crash of the whole pipeline is reported as
    an empty token list with `source` "error".

    Args:
        addr: Wallet address to scan.
        origin: Request Origin header, matched against the allow-list.
        use_case: Aggregation use case (injected).
        policy: Cross-origin allow-list (injected).

    Returns:
        JSON body matching EvmTokensDTO, or 400 `{"error": ...}` for a bad
        address.
    """
    headers = cors_headers(policy, origin)

    try:
        result = await use_case.execute(addr)
    except InvalidAddressError as e:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": e.message},
            headers=headers,
        )
    except Exception as e:
        logger.exception(f"EVM scan crashed for {addr}")
        result = EvmTokensDTO(tokens=[], source="error", error=str(e) or type(e).__name__)

    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )
