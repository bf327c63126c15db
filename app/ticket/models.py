# app/ticket/models.py
import re

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, event, inspect
from sqlalchemy.orm import Session, relationship
from sqlalchemy.sql import func
from app.core.database import Base
from app.core.exceptions import InvalidRecord
from app.organization.models import Organization
from app.region.models import Region
from app.resource_category.models import ResourceCategory

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1020
PHONE_MAX_LENGTH = 255

# digits and the usual separators, with an optional "x123" / "ext. 123" suffix
PHONE_RE = re.compile(
    r"(?P<number>\+?[\d ().-]+?)(?: *(?:x|ext\.?) *(?P<ext>\d{1,6}))?",
    re.I,
)
PHONE_MIN_DIGITS = 7
PHONE_MAX_DIGITS = 15

BLANK = "can't be blank"
MISSING = "must exist"


def _too_long(limit: int) -> str:
    return f"is too long (maximum is {limit} characters)"


def is_valid_phone(value: str) -> bool:
    match = PHONE_RE.fullmatch(value)
    if not match:
        return False
    digits = sum(ch.isdigit() for ch in match.group("number"))
    return PHONE_MIN_DIGITS <= digits <= PHONE_MAX_DIGITS


class Ticket(Base):
    __tablename__ = "tickets"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(NAME_MAX_LENGTH), nullable=False)
    description = Column(String(DESCRIPTION_MAX_LENGTH))
    phone = Column(String(PHONE_MAX_LENGTH), nullable=False)
    closed = Column(Boolean, default=False, nullable=False, index=True)

    region_id = Column(Integer, ForeignKey("regions.id"), nullable=False, index=True)
    resource_category_id = Column(Integer, ForeignKey("resource_categories.id"), nullable=False, index=True)
    organization_id = Column(Integer, ForeignKey("organizations.id"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    region = relationship(Region)
    resource_category = relationship(ResourceCategory)
    organization = relationship(Organization)

    @property
    def is_open(self) -> bool:
        return not self.closed

    @property
    def is_captured(self) -> bool:
        return not self._missing("organization", "organization_id")

    def _missing(self, relation: str, foreign_key: str) -> bool:
        state = inspect(self)
        # a foreign key cleared by hand wins over an attached object
        if state.attrs[foreign_key].history.has_changes() and getattr(self, foreign_key) is None:
            return True
        if getattr(self, relation) is not None:
            return False
        # an explicit assignment of None wins over a stale foreign key
        if state.attrs[relation].history.has_changes():
            return True
        return getattr(self, foreign_key) is None

    def validation_errors(self) -> dict[str, list[str]]:
        """Collect every failed rule, keyed by field. Empty means valid."""
        errors: dict[str, list[str]] = {}

        def add(field, message):
            errors.setdefault(field, []).append(message)

        if not self.name or not self.name.strip():
            add("name", BLANK)
        elif len(self.name) > NAME_MAX_LENGTH:
            add("name", _too_long(NAME_MAX_LENGTH))

        if self.description is not None and len(self.description) > DESCRIPTION_MAX_LENGTH:
            add("description", _too_long(DESCRIPTION_MAX_LENGTH))

        if not self.phone or not self.phone.strip():
            add("phone", BLANK)
        elif len(self.phone) > PHONE_MAX_LENGTH:
            add("phone", _too_long(PHONE_MAX_LENGTH))
        elif not is_valid_phone(self.phone):
            add("phone", "is an invalid number")

        if self._missing("region", "region_id"):
            add("region", MISSING)
        if self._missing("resource_category", "resource_category_id"):
            add("resource_category", MISSING)

        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors()

    def __str__(self):
        return f"Ticket {self.id}"

    def __repr__(self):
        return f"<Ticket {self.id} closed={self.closed} organization_id={self.organization_id}>"


@event.listens_for(Session, "before_flush")
def _validate_tickets(session, flush_context, instances):
    for obj in list(session.new) + list(session.dirty):
        if not isinstance(obj, Ticket):
            continue
        errors = obj.validation_errors()
        if errors:
            raise InvalidRecord(errors)
