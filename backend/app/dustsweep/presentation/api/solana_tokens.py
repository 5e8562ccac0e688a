"""Solana wallet scan endpoint.

Implements GET /api/tokens using the application-layer
ScanSolanaTokensUseCase.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse

from app.dustsweep.application.dto.token_dto import SolanaTokensDTO
from app.dustsweep.application.exceptions import InvalidAddressError
from app.dustsweep.application.use_cases.scan_solana_tokens import ScanSolanaTokensUseCase
from app.dustsweep.domain.value_objects.origin_policy import OriginPolicy
from app.dustsweep.presentation.api.dependencies import (
    cors_headers,
    get_origin_policy,
    get_solana_use_case,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/tokens", response_model=SolanaTokensDTO)
async def scan_solana_tokens(
    addr: Annotated[Optional[str], Query(description="Base58 wallet address")] = None,
    origin: Annotated[Optional[str], Header()] = None,
    use_case: ScanSolanaTokensUseCase = Depends(get_solana_use_case),
    policy: OriginPolicy = Depends(get_origin_policy),
) -> JSONResponse:
    """Read SOL and merged SPL token balances for a wallet.

    Returns:
        JSON body matching SolanaTokensDTO; 400 for a bad address and
        500 `{"error": ...}` if the scan crashes.
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
        logger.exception(f"Solana scan crashed for {addr}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(e) or type(e).__name__},
            headers=headers,
        )

    return JSONResponse(
        content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        headers=headers,
    )
