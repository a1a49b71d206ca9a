"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/models/records.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Pydantic models for the records a payment slip is built from:
                contacts, their underage dependents, the receiving
                organization and stored payment templates.
------------------------------------------------------------------------------
"""

from datetime import date
from decimal import Decimal
from typing import Any, ClassVar, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
import logging

# Internal Imports
from hubslip.utils.text import join_nonempty
from hubslip.utils.validation import clean_iban, validate_iban

logger = logging.getLogger("hubslip.records")


def _text(value: Any) -> str:
    """Renders an attribute for template output. None becomes ''."""
    if value is None:
        return ""
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


class UnderagedMember(BaseModel):
    """A minor linked to a contact (the contact pays on their behalf)."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birth_date: Optional[date] = None
    age: int = 0
    pin: Optional[str] = None
    gender: Optional[str] = None
    is_member: bool = False
    member_since: Optional[date] = None
    member_until: Optional[date] = None
    note: Optional[str] = None
    contact_id: Optional[int] = None

    # Names addressable via {{underaged_attributes.<name>}}
    TEMPLATE_ATTRIBUTES: ClassVar[Tuple[str, ...]] = (
        "first_name", "last_name", "birth_date", "age", "pin", "gender",
        "is_member", "member_since", "member_until", "note",
    )

    @property
    def full_name(self) -> str:
        return join_nonempty(self.first_name, self.last_name)

    def attribute(self, name: str) -> Optional[str]:
        """
        Returns the template text for an attribute.
        None means the attribute name is unknown.
        """
        if name not in self.TEMPLATE_ATTRIBUTES:
            return None
        if name == "is_member":
            return "Yes" if self.is_member else "No"
        return _text(getattr(self, name))


class Contact(BaseModel):
    """A paying contact, optionally with underage dependents."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birthday: Optional[date] = None
    pin: Optional[str] = None
    street_name: Optional[str] = None
    street_num: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    email: Optional[str] = None
    phone_num: Optional[str] = None
    is_member: bool = False
    member_since: Optional[date] = None
    member_until: Optional[date] = None
    dependents: List[UnderagedMember] = Field(default_factory=list)

    # Names addressable via {{contact_attributes.<name>}}
    TEMPLATE_ATTRIBUTES: ClassVar[Tuple[str, ...]] = (
        "first_name", "last_name", "email", "phone_num", "birthday", "pin",
        "street_name", "street_num", "postal_code", "city",
        "member_since", "member_until",
    )

    @property
    def full_name(self) -> str:
        return join_nonempty(self.first_name, self.last_name)

    def attribute(self, name: str) -> Optional[str]:
        """
        Returns the template text for an attribute.
        None means the attribute name is unknown.
        """
        if name not in self.TEMPLATE_ATTRIBUTES:
            return None
        return _text(getattr(self, name))

    def is_underage(self, today: Optional[date] = None) -> bool:
        """True if the contact is younger than 18. Unknown birthday counts as adult."""
        if self.birthday is None:
            return False
        today = today or date.today()
        try:
            cutoff = today.replace(year=today.year - 18)
        except ValueError:
            # 29 February in a non-leap target year
            cutoff = today.replace(year=today.year - 18, day=28)
        return self.birthday > cutoff

    def active_dependents(self) -> List[UnderagedMember]:
        """Dependents flagged as members, in stored order."""
        return [d for d in self.dependents if d.is_member]


class Organization(BaseModel):
    """The receiving organization (payee) of a payment slip."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")
    id: Optional[int] = None
    name: Optional[str] = None
    iban: Optional[str] = None
    street_name: Optional[str] = None
    street_num: Optional[str] = None
    postal_code: Optional[str] = None
    city: Optional[str] = None
    email: Optional[str] = None
    phone_num: Optional[str] = None

    @field_validator("iban", mode="before")
    @classmethod
    def clean_bank_fields(cls, v: Any) -> Optional[str]:
        """Removes spaces and ensures uppercase for the IBAN."""
        if v is None:
            return None
        cleaned = clean_iban(str(v))
        return cleaned if cleaned else None

    @model_validator(mode="after")
    def validate_bank_integrity(self) -> 'Organization':
        """Checksum check for the IBAN. Logging only, never blocks."""
        if self.iban and not validate_iban(self.iban):
            logger.warning(f"Invalid IBAN detected for '{self.name}': {self.iban}")
        return self


class PaymentTemplate(BaseModel):
    """A stored payment template: amount plus reference/description templates."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore", protected_namespaces=())
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    amount: Decimal
    model_of_payment: Optional[str] = None
    poziv_na_broj: Optional[str] = Field(None, alias="reference")
    is_active: bool = True
