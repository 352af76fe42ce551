# app/routers/alerts.py
"""
Alert lifecycle endpoints used by the mobile clients and the dashboard.
Paths and field names follow the existing client apps (Spanish payload keys).
"""

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.config import settings
from app.schemas.alert import (AlertDetailOut, AlertOut, AlertSummaryOut, FeedbackIn,
                               MessageOut, PanicIn, PanicOut, StateIn)
from app.services.alert_service import AlertService, get_alert_service, serialize_alert
from app.services.media_uploader import Photo

router = APIRouter()


@router.post("/trigger-panic-button", response_model=PanicOut, summary="Panic button — minimal alert")
async def trigger_panic_button(body: PanicIn, service: AlertService = Depends(get_alert_service)):
    alert_id = await service.trigger_panic(body.id_usuario, body.latitud, body.longitud)
    return {"id": alert_id}


@router.post("/send-alert", response_model=AlertOut, summary="Submit an alert with optional photo")
async def send_alert(
    id_usuario: Optional[int] = Form(None),
    id_tipo: Optional[int] = Form(None),
    mensaje: Optional[str] = Form(None),
    latitud: Optional[float] = Form(None),
    longitud: Optional[float] = Form(None),
    foto: Optional[UploadFile] = File(None),
    service: AlertService = Depends(get_alert_service),
):
    """
    multipart/form-data. The `foto` part is optional; when present it is stored
    on the media service and its URL is returned as `photo_url`.
    """
    photo = None
    if foto is not None:
        # One byte past the limit is enough for the service to reject it
        content = await foto.read(settings.MAX_UPLOAD_BYTES + 1)
        if content:
            photo = Photo(content=content, filename=foto.filename or "foto.jpg",
                          content_type=foto.content_type or "image/jpeg")

    alert = await service.submit_alert(id_usuario, id_tipo, mensaje, latitud, longitud, photo)
    return serialize_alert(alert)


@router.get("/active-alarms", response_model=list[AlertSummaryOut], summary="All alerts still active")
async def active_alarms(service: AlertService = Depends(get_alert_service)):
    return await service.get_active_alerts()


@router.get("/alarmas/{alert_id}", response_model=AlertDetailOut, summary="Alert detail")
async def get_alarm(alert_id: int, service: AlertService = Depends(get_alert_service)):
    return await service.get_alert(alert_id)


@router.get("/ultima-alerta", response_model=AlertDetailOut, summary="Most recent alert, any state")
async def latest_alert(service: AlertService = Depends(get_alert_service)):
    return await service.get_latest_alert()


@router.post("/feedback/{alert_id}", response_model=MessageOut, summary="Resolve an alert with feedback")
async def resolve_with_feedback(alert_id: int, body: FeedbackIn,
                                service: AlertService = Depends(get_alert_service)):
    await service.resolve_alert(alert_id, body.feedback)
    return {"message": f"Alert {alert_id} resolved"}


@router.post("/estado/{alert_id}", response_model=MessageOut, summary="Set alert state (0 resolved, 1 active)")
async def set_state(alert_id: int, body: StateIn, service: AlertService = Depends(get_alert_service)):
    await service.set_alert_state(alert_id, body.estado)
    return {"message": f"Alert {alert_id} state updated"}


@router.post("/sirena_2/{alert_id}", response_model=MessageOut, summary="Switch the dashboard siren for an alert")
async def switch_dashboard_siren(alert_id: int, body: StateIn,
                                 service: AlertService = Depends(get_alert_service)):
    siren_id = settings.DASHBOARD_SIREN_ID
    await service.assign_siren(siren_id, alert_id, body.estado)
    return {"message": f"Siren {siren_id} set to {body.estado} and linked to alert {alert_id}"}
