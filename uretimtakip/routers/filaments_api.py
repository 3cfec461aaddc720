"""
Filament (bobin) REST API Router'i.

Endpoint'ler:
    GET  /                    -> Bobin listesi (tip / renk filtresi)
    POST /                    -> Yeni bobin
    GET  /critical            -> Kritik seviyedeki bobinler
    GET  /usage               -> Filament kullanim gecmisi
    GET  /{spool_id}          -> Bobin detay
    POST /{spool_id}/add-stock -> Satin alma ile stok ekleme
"""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from uretimtakip.database import get_db
from uretimtakip.schemas.filament import (
    FilamentStockAdd, FilamentUsageResponse, SpoolCreate, SpoolResponse,
)
from uretimtakip.services import filament as filament_service

router = APIRouter()


@router.get("", response_model=list[SpoolResponse])
def list_spools(
    db: Annotated[Session, Depends(get_db)],
    type: str | None = Query(default=None, description="Filament tipi (PLA, PETG ...)"),
    color: str | None = Query(default=None),
):
    return filament_service.list_spools(db, filament_type=type, color=color)


@router.post("", response_model=SpoolResponse, status_code=status.HTTP_201_CREATED)
def create_spool(
    data: SpoolCreate,
    db: Annotated[Session, Depends(get_db)],
):
    return filament_service.create_spool(db, data)


@router.get("/critical", response_model=list[SpoolResponse])
def critical_spools(db: Annotated[Session, Depends(get_db)]):
    return filament_service.get_critical_spools(db)


@router.get("/usage", response_model=list[FilamentUsageResponse])
def filament_usage(
    db: Annotated[Session, Depends(get_db)],
    filament_id: uuid.UUID | None = Query(default=None),
    order_id: uuid.UUID | None = Query(default=None),
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
):
    return filament_service.get_filament_usage(
        db, filament_id=filament_id, order_id=order_id, skip=skip, limit=limit,
    )


@router.get("/{spool_id}", response_model=SpoolResponse)
def get_spool(
    spool_id: uuid.UUID,
    db: Annotated[Session, Depends(get_db)],
):
    return filament_service.get_spool(db, spool_id)


@router.post("/{spool_id}/add-stock", response_model=SpoolResponse, status_code=status.HTTP_201_CREATED)
def add_stock(
    spool_id: uuid.UUID,
    data: FilamentStockAdd,
    db: Annotated[Session, Depends(get_db)],
):
    """Bobine satin alinan filamenti ekler, gram fiyatini gunceller."""
    return filament_service.add_filament_stock(db, spool_id, data)
