# app/services/alert_service.py
"""
Alert lifecycle: submission, panic presses, resolution, siren assignment and the
read views used by the dashboard.

Every operation works on the session it was given and never keeps alert state
between requests. Writes commit immediately; a failed commit rolls back and
surfaces as StorageError. Events are pushed to the notifier only after the
row is committed.
"""

import random
from contextlib import contextmanager
from datetime import datetime
from typing import List, Optional

from fastapi import Depends
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.errors import NotFoundError, StorageError, ValidationError
from app.models.alert import Alert, AlertState
from app.models.alert_type import AlertType
from app.models.georeference import Georeference
from app.models.siren import Siren
from app.models.user import Admin, User
from app.schemas.alert import AlertDetailOut, AlertOut, AlertResolvedEvent, AlertSummaryOut
from app.schemas.alert_type import AlertTypeOut
from app.schemas.user import AccountSampleOut
from app.services.media_uploader import CloudinaryUploader, Photo, get_uploader
from app.services.notifier import ALERT_CREATED, ALERT_RESOLVED, AlertNotifier, get_notifier
from app.utils.logger import get_logger

logger = get_logger(__name__)

ALLOWED_STATES = (AlertState.RESOLVED, AlertState.ACTIVE)


def serialize_alert(alert: Alert) -> AlertOut:
    return AlertOut(
        id=alert.id,
        reporting_user_id=alert.reporting_user_id,
        alert_type_id=alert.alert_type_id,
        message=alert.message,
        latitude=alert.latitude,
        longitude=alert.longitude,
        photo_url=alert.photo_url,
        georeference_id=alert.georeference_id,
        siren_id=alert.siren_id,
        state=AlertState(alert.state).label,
        feedback=alert.feedback,
        created_at=alert.created_at,
        resolved_at=alert.resolved_at,
    )


def _check_state(value, field: str = "estado") -> int:
    # bool is an int subclass; only the literal 0 / 1 are valid
    if isinstance(value, bool) or value not in ALLOWED_STATES:
        raise ValidationError("State must be 0 or 1", field=field)
    return int(value)


class AlertService:
    def __init__(self, db: Session, uploader: CloudinaryUploader, notifier: AlertNotifier):
        self.db = db
        self.uploader = uploader
        self.notifier = notifier

    @contextmanager
    def _storage(self, action: str):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[STORAGE] Could not {action}: {e}")
            raise StorageError(f"Could not {action}") from e

    def _require(self, model, entity_id, resource: str):
        """Reject references the joined views could not resolve (FKs are not enforced on SQLite)."""
        with self._storage(f"look up {resource.lower()}"):
            found = self.db.query(model.id).filter(model.id == entity_id).first()
        if found is None:
            raise NotFoundError(resource, id=entity_id)

    # ── Writes ────────────────────────────────────────────────────────────

    async def submit_alert(self, reporting_user_id: Optional[int], alert_type_id: Optional[int],
                           message: Optional[str] = None, latitude: Optional[float] = None,
                           longitude: Optional[float] = None, photo: Optional[Photo] = None) -> Alert:
        """
        Persist a new active alert and announce it to the dashboards.
        If a photo is attached it is uploaded first; an upload failure aborts
        the submission before anything is written.
        """
        if not reporting_user_id:
            raise ValidationError("id_usuario is required", field="id_usuario")
        if not alert_type_id:
            raise ValidationError("id_tipo is required", field="id_tipo")
        self._require(User, reporting_user_id, "User")
        self._require(AlertType, alert_type_id, "AlertType")

        photo_url = None
        if photo is not None:
            if len(photo.content) > settings.MAX_UPLOAD_BYTES:
                raise ValidationError(f"Photo exceeds {settings.MAX_UPLOAD_BYTES} bytes", field="foto")
            photo_url = await self.uploader.upload(photo)

        alert = Alert(
            reporting_user_id=reporting_user_id,
            alert_type_id=alert_type_id,
            message=message,
            latitude=latitude,
            longitude=longitude,
            photo_url=photo_url,
            state=AlertState.ACTIVE,
            created_at=datetime.utcnow(),
        )
        with self._storage("save alert"):
            self.db.add(alert)
            self.db.commit()
            self.db.refresh(alert)

        logger.warning(f"[ALERT][NEW] #{alert.id} type={alert_type_id} user={reporting_user_id} "
                       f"photo={'yes' if photo_url else 'no'}")
        await self.notifier.broadcast(ALERT_CREATED, serialize_alert(alert).model_dump())
        return alert

    async def trigger_panic(self, reporting_user_id: Optional[int], latitude: Optional[float] = None,
                            longitude: Optional[float] = None) -> int:
        """Panic button fast path: fixed alert type, no photo, no dashboard push."""
        if not reporting_user_id:
            raise ValidationError("id_usuario is required", field="id_usuario")
        self._require(User, reporting_user_id, "User")
        self._require(AlertType, settings.PANIC_ALERT_TYPE_ID, "AlertType")

        alert = Alert(
            reporting_user_id=reporting_user_id,
            alert_type_id=settings.PANIC_ALERT_TYPE_ID,
            latitude=latitude,
            longitude=longitude,
            state=AlertState.ACTIVE,
            created_at=datetime.utcnow(),
        )
        with self._storage("save panic alert"):
            self.db.add(alert)
            self.db.commit()
            self.db.refresh(alert)

        logger.warning(f"[ALERT][PANIC] #{alert.id} user={reporting_user_id} at ({latitude}, {longitude})")
        return alert.id

    async def resolve_alert(self, alert_id: int, feedback: Optional[str]) -> Alert:
        """
        Mark an alert resolved with the operator's feedback.
        Calling it again on a resolved alert overwrites the feedback.
        """
        if feedback is None or not feedback.strip():
            raise ValidationError("Feedback cannot be empty", field="feedback")

        with self._storage("resolve alert"):
            alert = self.db.query(Alert).filter(Alert.id == alert_id).first()
            if not alert:
                raise NotFoundError("Alert", id=alert_id)
            if alert.state == AlertState.RESOLVED:
                logger.info(f"[ALERT] #{alert_id} already resolved, overwriting feedback")
            alert.state = AlertState.RESOLVED
            alert.feedback = feedback
            alert.resolved_at = datetime.utcnow()
            self.db.commit()
            self.db.refresh(alert)

        logger.info(f"[ALERT][RESOLVED] #{alert_id}: {feedback}")
        event = AlertResolvedEvent(id=alert.id, state=AlertState.RESOLVED.label, feedback=alert.feedback)
        await self.notifier.broadcast(ALERT_RESOLVED, event.model_dump())
        return alert

    async def set_alert_state(self, alert_id: int, state) -> None:
        """
        Administrative override of the active flag. No event is emitted.
        Reactivation clears resolved_at; the last feedback note is kept.
        """
        state = _check_state(state)
        values = {Alert.state: state}
        if state == AlertState.ACTIVE:
            values[Alert.resolved_at] = None
        with self._storage("update alert state"):
            rows = (self.db.query(Alert).filter(Alert.id == alert_id)
                    .update(values, synchronize_session=False))
            if rows == 0:
                raise NotFoundError("Alert", id=alert_id)
            self.db.commit()
        logger.info(f"[ALERT] #{alert_id} state set to {AlertState(state).label}")

    async def assign_siren(self, siren_id: int, alert_id: int, desired_state) -> None:
        """
        Switch a siren and stamp it on the alert. Two separate commits:
        if the alert update fails the siren keeps its new state.
        """
        desired_state = _check_state(desired_state)

        with self._storage("update siren"):
            rows = (self.db.query(Siren).filter(Siren.id == siren_id)
                    .update({Siren.state: desired_state}, synchronize_session=False))
            if rows == 0:
                raise NotFoundError("Siren", id=siren_id)
            self.db.commit()
        logger.info(f"[SIREN] #{siren_id} state → {desired_state}")

        try:
            rows = (self.db.query(Alert).filter(Alert.id == alert_id)
                    .update({Alert.siren_id: siren_id}, synchronize_session=False))
            if rows:
                self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"[SIREN] Partial update: siren #{siren_id} switched but alert #{alert_id} not stamped: {e}")
            raise StorageError("Siren updated but the alert could not be linked") from e

        if rows == 0:
            logger.warning(f"[SIREN] Partial update: siren #{siren_id} switched but alert #{alert_id} does not exist")
            raise NotFoundError("Alert", id=alert_id)

    # ── Reads ─────────────────────────────────────────────────────────────

    def _joined(self):
        return (
            self.db.query(Alert, User, AlertType, Georeference)
            .join(User, Alert.reporting_user_id == User.id)
            .join(AlertType, Alert.alert_type_id == AlertType.id)
            .outerjoin(Georeference, Alert.georeference_id == Georeference.id)
        )

    @staticmethod
    def _summary(alert: Alert, user: User, alert_type: AlertType,
                 geo: Optional[Georeference]) -> AlertSummaryOut:
        return AlertSummaryOut(
            id=alert.id,
            reporter_first_name=user.first_name,
            reporter_last_name=user.last_name,
            reporter_role=user.role,
            georeference_description=geo.description if geo else None,
            alert_type_description=alert_type.description,
            created_at=alert.created_at,
        )

    @staticmethod
    def _detail(alert: Alert, user: User, alert_type: AlertType,
                geo: Optional[Georeference]) -> AlertDetailOut:
        summary = AlertService._summary(alert, user, alert_type, geo)
        return AlertDetailOut(
            **summary.model_dump(),
            message=alert.message,
            latitude=alert.latitude,
            longitude=alert.longitude,
            photo_url=alert.photo_url,
            reporter_phone=user.phone,
            reporter_department=user.department,
            state=AlertState(alert.state).label,
            feedback=alert.feedback,
        )

    async def get_active_alerts(self) -> List[AlertSummaryOut]:
        with self._storage("load active alerts"):
            rows = self._joined().filter(Alert.state == AlertState.ACTIVE).all()
        return [self._summary(*row) for row in rows]

    async def get_alert(self, alert_id: int) -> AlertDetailOut:
        with self._storage("load alert"):
            row = self._joined().filter(Alert.id == alert_id).first()
        if not row:
            raise NotFoundError("Alert", id=alert_id)
        return self._detail(*row)

    async def get_latest_alert(self) -> AlertDetailOut:
        with self._storage("load latest alert"):
            row = self._joined().order_by(Alert.created_at.desc(), Alert.id.desc()).first()
        if not row:
            raise NotFoundError("Alert")
        return self._detail(*row)

    async def _sample(self, model, resource: str) -> AccountSampleOut:
        with self._storage(f"sample {resource.lower()}"):
            total = self.db.query(func.count(model.id)).scalar()
            row = None
            if total:
                row = self.db.query(model).order_by(model.id).offset(random.randrange(total)).first()
        if row is None:
            raise NotFoundError(resource)
        return AccountSampleOut.model_validate(row)

    async def sample_user(self) -> AccountSampleOut:
        return await self._sample(User, "User")

    async def sample_admin(self) -> AccountSampleOut:
        return await self._sample(Admin, "Admin")

    async def list_alert_types(self) -> List[AlertTypeOut]:
        with self._storage("load alert types"):
            types = self.db.query(AlertType).order_by(AlertType.id).all()
        return [AlertTypeOut.model_validate(t) for t in types]


def get_alert_service(db: Session = Depends(get_db),
                      uploader: CloudinaryUploader = Depends(get_uploader),
                      notifier: AlertNotifier = Depends(get_notifier)) -> AlertService:
    """FastAPI dependency — one service per request, bound to that request's session."""
    return AlertService(db, uploader, notifier)
