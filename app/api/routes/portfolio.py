from fastapi import APIRouter

from app.services.portfolio import PORTFOLIO_DATA

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("")
async def get_portfolio():
    return PORTFOLIO_DATA
