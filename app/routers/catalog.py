# app/routers/catalog.py
"""Lookup endpoints: alert taxonomy and demo account sampling."""

from fastapi import APIRouter, Depends

from app.schemas.alert_type import AlertTypeOut
from app.schemas.user import AccountSampleOut
from app.services.alert_service import AlertService, get_alert_service

router = APIRouter()


@router.get("/random-user", response_model=AccountSampleOut, summary="One random user")
async def random_user(service: AlertService = Depends(get_alert_service)):
    return await service.sample_user()


@router.get("/random-admin", response_model=AccountSampleOut, summary="One random admin")
async def random_admin(service: AlertService = Depends(get_alert_service)):
    return await service.sample_admin()


@router.get("/tipo-alerta", response_model=list[AlertTypeOut], summary="Alert type taxonomy")
async def alert_types(service: AlertService = Depends(get_alert_service)):
    return await service.list_alert_types()
