"""Reports API routes — production, routes, top clients and exchanges."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.application.services.report_service import (
    build_filter,
    exchanges_report,
    production_report,
    routes_report,
    top_clients_report,
)
from app.domain.models.user import User
from app.domain.schemas.report import ReportFilter
from app.infrastructure.database import get_db
from app.interfaces.api.deps import get_current_user

router = APIRouter(prefix="/api/relatorios", tags=["Relatórios"])


def report_filter(
    data_inicio: Optional[date] = None,
    data_fim: Optional[date] = None,
    status: Optional[str] = None,
) -> ReportFilter:
    return build_filter(data_inicio, data_fim, status)


@router.get("/producao")
def production(
    user: User = Depends(get_current_user),
    filtro: ReportFilter = Depends(report_filter),
    db: Session = Depends(get_db),
):
    """Total quantity ordered per product."""
    return production_report(db, filtro)


@router.get("/rotas")
def routes(
    user: User = Depends(get_current_user),
    filtro: ReportFilter = Depends(report_filter),
    db: Session = Depends(get_db),
):
    return routes_report(db, filtro)


@router.get("/top-clientes")
def top_clients(
    user: User = Depends(get_current_user),
    filtro: ReportFilter = Depends(report_filter),
    db: Session = Depends(get_db),
):
    return top_clients_report(db, filtro)


@router.get("/trocas")
def exchanges(
    user: User = Depends(get_current_user),
    filtro: ReportFilter = Depends(report_filter),
    db: Session = Depends(get_db),
):
    return exchanges_report(db, filtro)
