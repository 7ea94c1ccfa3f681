from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.orm import Session

from .. import models, schemas
from ..utils.errors import NotFoundError, coerce_id

logger = logging.getLogger(__name__)


def normalize_email(email: Optional[str]) -> str:
    return (email or "").strip().lower()


def create_client(db: Session, client_in: schemas.ClientCreate) -> models.Client:
    data = client_in.model_dump()
    data["status"] = data.get("status") or models.ClientStatus.CLIENT
    if data.get("email"):
        data["email"] = data["email"].strip()
    client = models.Client(**data)
    client.stamp_created()
    db.add(client)
    db.commit()
    db.refresh(client)
    logger.info("Created %s %s (source=%s)", client.status.value, client.id, client.source)
    return client


def create_prospect(db: Session, client_in: schemas.ClientCreate) -> models.Client:
    """``create_client`` with the status forced to prospect."""
    return create_client(
        db, client_in.model_copy(update={"status": models.ClientStatus.PROSPECT})
    )


def find_by_email(db: Session, email: Optional[str]) -> Optional[models.Client]:
    wanted = normalize_email(email)
    if not wanted:
        return None
    return (
        db.query(models.Client)
        .filter(func.lower(func.trim(models.Client.email)) == wanted)
        .order_by(models.Client.id)
        .first()
    )


def get_client(db: Session, client_id) -> models.Client:
    numeric_id = coerce_id(client_id, "client_id", "Client")
    client = db.query(models.Client).filter(models.Client.id == numeric_id).first()
    if client is None:
        raise NotFoundError("Client not found", {"client_id": "not_found"})
    return client


def get_clients(
    db: Session, status: Optional[models.ClientStatus] = None
) -> List[models.Client]:
    query = db.query(models.Client)
    if status is not None:
        query = query.filter(models.Client.status == status)
    return query.order_by(models.Client.id).all()
