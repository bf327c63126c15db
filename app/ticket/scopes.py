# app/ticket/scopes.py
"""Named ticket filters.

Each scope takes a ``Select`` over ``Ticket`` (a fresh one when omitted) and
returns a narrowed ``Select``, so scopes chain:

    stmt = scopes.region(region, scopes.open_())
    tickets = scopes.all_of(db, stmt)
"""
from sqlalchemy import Select, select
from sqlalchemy.orm import Session
from app.ticket.models import Ticket


def _base(stmt: Select | None) -> Select:
    return select(Ticket) if stmt is None else stmt


def _id(value) -> int | None:
    return getattr(value, "id", value)


def open_(stmt: Select | None = None) -> Select:
    return _base(stmt).where(Ticket.closed.is_(False))


def closed(stmt: Select | None = None) -> Select:
    return _base(stmt).where(Ticket.closed.is_(True))


def all_organization(stmt: Select | None = None) -> Select:
    """Open tickets captured by any organization."""
    return open_(stmt).where(Ticket.organization_id.is_not(None))


def organization(org, stmt: Select | None = None) -> Select:
    """Open tickets captured by ``org``."""
    return open_(stmt).where(Ticket.organization_id == _id(org))


def closed_organization(org, stmt: Select | None = None) -> Select:
    return closed(stmt).where(Ticket.organization_id == _id(org))


def region(r, stmt: Select | None = None) -> Select:
    return _base(stmt).where(Ticket.region_id == _id(r))


def resource_category(rc, stmt: Select | None = None) -> Select:
    return _base(stmt).where(Ticket.resource_category_id == _id(rc))


def all_of(db: Session, stmt: Select | None = None) -> list[Ticket]:
    return list(db.scalars(_base(stmt).order_by(Ticket.id)))
