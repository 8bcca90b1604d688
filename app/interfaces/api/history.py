"""History API route — order extrato with running balance."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends

from app.application.services.ledger_service import get_extrato
from app.domain.models.user import User
from app.domain.repositories.order_repository import OrderRepository
from app.domain.schemas.ledger import ExtratoRead, LedgerEntryRead, LedgerSummaryRead
from app.interfaces.api.deps import get_current_user
from app.interfaces.deps import get_order_repository

router = APIRouter(prefix="/api/historico", tags=["Histórico"])


@router.get("/extrato", response_model=ExtratoRead)
def extrato(
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    cliente_id: Optional[int] = None,
    status: Optional[str] = None,
    repo: OrderRepository = Depends(get_order_repository),
    user: User = Depends(get_current_user),
):
    entries, resumo = get_extrato(repo, data_inicio, data_fim, cliente_id, status)
    return ExtratoRead(
        entries=[LedgerEntryRead.from_entry(e) for e in entries],
        resumo=LedgerSummaryRead(
            total_vendas=resumo.total_vendas,
            total_efetivado=resumo.total_efetivado,
            saldo_periodo=resumo.saldo_periodo,
        ),
    )
