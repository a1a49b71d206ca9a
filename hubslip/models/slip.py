"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/models/slip.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Per-call types of the HUB-3 pipeline: the slip request fed
                to the builder and the resolved 14 line payload it returns.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict

from hubslip.errors import ResolutionWarning
from hubslip.models.records import Contact, Organization, PaymentTemplate, UnderagedMember
from hubslip.utils.text import join_nonempty

DEFAULT_BANK_CODE = "HRVHUB30"
DEFAULT_CURRENCY = "EUR"

PAYLOAD_LINE_COUNT = 14

# Line positions inside the payload (0-based)
LINE_BANK_CODE = 0
LINE_CURRENCY = 1
LINE_AMOUNT = 2
LINE_PAYER_NAME = 3
LINE_PAYER_ADDRESS = 4
LINE_PAYER_CITY = 5
LINE_RECIPIENT_NAME = 6
LINE_RECIPIENT_ADDRESS = 7
LINE_RECIPIENT_CITY = 8
LINE_RECIPIENT_IBAN = 9
LINE_MODEL = 10
LINE_REFERENCE = 11
LINE_PURPOSE = 12
LINE_DESCRIPTION = 13


class PaymentSlipRequest(BaseModel):
    """Everything needed to build one payment slip."""
    model_config = ConfigDict(extra="ignore")

    amount: Decimal
    payer: Contact
    recipient: Organization
    bank_code: str = DEFAULT_BANK_CODE
    currency: str = DEFAULT_CURRENCY
    payment_model: str = ""
    reference_template: str = ""
    description_template: str = ""
    dependent: Optional[UnderagedMember] = None
    auto_reference: bool = False

    @classmethod
    def from_template(
        cls,
        template: PaymentTemplate,
        contact: Contact,
        organization: Organization,
        dependent: Optional[UnderagedMember] = None,
        bank_code: str = DEFAULT_BANK_CODE,
        currency: str = DEFAULT_CURRENCY,
        auto_reference: bool = False,
    ) -> "PaymentSlipRequest":
        """
        Creates a request from a stored payment template.
        An underage payer without an explicit dependent gets their first
        member dependent.
        """
        if dependent is None and contact.is_underage():
            active = contact.active_dependents()
            if active:
                dependent = active[0]
        return cls(
            amount=template.amount,
            payer=contact,
            recipient=organization,
            bank_code=bank_code,
            currency=currency,
            payment_model=template.model_of_payment or "",
            reference_template=template.poziv_na_broj or "",
            description_template=template.description or "",
            dependent=dependent,
            auto_reference=auto_reference,
        )

    @property
    def payer_name(self) -> str:
        return self.payer.full_name

    @property
    def payer_address(self) -> str:
        return join_nonempty(self.payer.street_name, self.payer.street_num)

    @property
    def payer_city(self) -> str:
        return join_nonempty(self.payer.postal_code, self.payer.city)

    @property
    def recipient_name(self) -> str:
        return (self.recipient.name or "").strip()

    @property
    def recipient_address(self) -> str:
        return join_nonempty(self.recipient.street_name, self.recipient.street_num)

    @property
    def recipient_city(self) -> str:
        return join_nonempty(self.recipient.postal_code, self.recipient.city)

    @property
    def recipient_iban(self) -> str:
        return self.recipient.iban or ""


@dataclass(frozen=True)
class ResolvedPayload:
    """The 14 HUB-3 lines plus any template warnings collected on the way."""
    lines: Tuple[str, ...]
    warnings: Tuple[ResolutionWarning, ...] = ()

    def __post_init__(self):
        if len(self.lines) != PAYLOAD_LINE_COUNT:
            raise ValueError(f"HUB-3 payload needs {PAYLOAD_LINE_COUNT} lines, got {len(self.lines)}")

    @property
    def text(self) -> str:
        """Encoder input: lines joined by newline, last line unterminated."""
        return "\n".join(self.lines)

    @property
    def amount_line(self) -> str:
        return self.lines[LINE_AMOUNT]

    @property
    def reference(self) -> str:
        return self.lines[LINE_REFERENCE]

    @property
    def description(self) -> str:
        return self.lines[LINE_DESCRIPTION]

    def __str__(self) -> str:
        return self.text
