# app/ticket/services.py
from sqlalchemy.orm import Session
from app.core.database import fits_id
from app.core.exceptions import InvalidRecord, RecordNotFound
from app.core.logging import get_logger
from app.organization.models import Organization
from app.region.models import Region
from app.resource_category.models import ResourceCategory
from app.ticket import scopes
from app.ticket.models import Ticket
from app.ticket.schemas import TicketCreate, TicketScope

logger = get_logger(__name__)

_UNBOUND_SCOPES = {
    TicketScope.open: scopes.open_,
    TicketScope.closed: scopes.closed,
    TicketScope.all_organization: scopes.all_organization,
}


def _parse_id(record_id) -> int | None:
    try:
        pk = int(record_id)
    except (TypeError, ValueError):
        return None
    return pk if fits_id(pk) else None


def _find(db: Session, model, record_id):
    pk = _parse_id(record_id)
    return db.get(model, pk) if pk is not None else None


def get_ticket(db: Session, ticket_id) -> Ticket:
    """Load a ticket or raise ``RecordNotFound``; ids like ``"Fake"`` are simply missing."""
    ticket = _find(db, Ticket, ticket_id)
    if ticket is None:
        raise RecordNotFound("Ticket", ticket_id)
    return ticket


def list_tickets(
    db: Session,
    scope: TicketScope | None = None,
    organization_id: int | None = None,
    region_id: int | None = None,
    resource_category_id: int | None = None,
) -> list[Ticket]:
    """Compose the named scopes.

    ``organization_id`` only means something to the two organization scopes and
    is rejected alongside any other scope rather than silently dropped.
    """
    bound = scope in (TicketScope.organization, TicketScope.closed_organization)
    if bound and organization_id is None:
        raise InvalidRecord({"organization_id": ["can't be blank"]})
    if not bound and organization_id is not None:
        raise InvalidRecord({"organization_id": ["is only allowed with an organization scope"]})

    # ids no row can hold match nothing
    if any(
        value is not None and not fits_id(value)
        for value in (organization_id, region_id, resource_category_id)
    ):
        return []

    stmt = None
    if scope in _UNBOUND_SCOPES:
        stmt = _UNBOUND_SCOPES[scope]()
    elif bound:
        if scope == TicketScope.organization:
            stmt = scopes.organization(organization_id)
        else:
            stmt = scopes.closed_organization(organization_id)

    if region_id is not None:
        stmt = scopes.region(region_id, stmt)
    if resource_category_id is not None:
        stmt = scopes.resource_category(resource_category_id, stmt)
    return scopes.all_of(db, stmt)


def create_ticket(db: Session, payload: TicketCreate) -> Ticket:
    data = payload.model_dump()
    region_id = data.pop("region_id")
    resource_category_id = data.pop("resource_category_id")

    db_ticket = Ticket(
        **data,
        closed=False,
        region=_find(db, Region, region_id),
        resource_category=_find(db, ResourceCategory, resource_category_id),
    )
    errors = db_ticket.validation_errors()
    if errors:
        raise InvalidRecord(errors)

    db.add(db_ticket)
    _commit(db)
    db.refresh(db_ticket)
    logger.info("created %s in region %s", db_ticket, region_id)
    return db_ticket


def capture_ticket(db: Session, ticket_id, organization_id: int) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    org = _find(db, Organization, organization_id)
    if org is None:
        raise RecordNotFound("Organization", organization_id)
    db_ticket.organization = org
    _commit(db)
    logger.info("%s captured by organization %s", db_ticket, org.id)
    return db_ticket


def release_ticket(db: Session, ticket_id) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    db_ticket.organization = None
    _commit(db)
    logger.info("%s released", db_ticket)
    return db_ticket


def close_ticket(db: Session, ticket_id) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    db_ticket.closed = True
    _commit(db)
    logger.info("%s closed", db_ticket)
    return db_ticket


def delete_ticket(db: Session, ticket_id) -> Ticket:
    db_ticket = get_ticket(db, ticket_id)
    label = str(db_ticket)
    db.delete(db_ticket)
    _commit(db)
    logger.info("%s deleted", label)
    return db_ticket


def _commit(db: Session) -> None:
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
