"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/batch.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Bulk slip generation: decides which slips a payment template
                yields for a list of contacts and builds them one by one,
                so that a single bad record does not stop the batch.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from hubslip.errors import HubSlipError
from hubslip.hub3 import Hub3PayloadBuilder
from hubslip.logger import get_logger
from hubslip.models.records import Contact, Organization, PaymentTemplate
from hubslip.models.slip import DEFAULT_BANK_CODE, DEFAULT_CURRENCY, PaymentSlipRequest, ResolvedPayload
from hubslip.resolver import template_uses_dependent

logger = get_logger("batch")


@dataclass
class SlipOutcome:
    """Result of one batch item: either a payload or the error that stopped it."""
    request: PaymentSlipRequest
    payload: Optional[ResolvedPayload] = None
    error: Optional[HubSlipError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def template_needs_dependent(template: PaymentTemplate) -> bool:
    """True if description or reference use {{underaged_attributes.*}}."""
    return template_uses_dependent(template.description) or template_uses_dependent(template.poziv_na_broj)


def plan_slips(
    template: PaymentTemplate,
    contacts: Iterable[Contact],
    organization: Organization,
    bank_code: str = DEFAULT_BANK_CODE,
    currency: str = DEFAULT_CURRENCY,
) -> List[PaymentSlipRequest]:
    """
    Expands contacts into slip requests.

    Templates using dependent data produce one slip per member dependent;
    a contact without member dependents falls back to a single slip if the
    contact itself is a member. Other templates produce one slip per member
    contact. Non-members get nothing.
    """
    if not template.is_active:
        logger.warning(f"Payment template '{template.name}' is inactive, no slips planned")
        return []

    per_dependent = template_needs_dependent(template)
    requests: List[PaymentSlipRequest] = []
    for contact in contacts:
        dependents = contact.active_dependents() if per_dependent else []
        if dependents:
            for dependent in dependents:
                requests.append(PaymentSlipRequest.from_template(
                    template, contact, organization, dependent=dependent,
                    bank_code=bank_code, currency=currency,
                ))
        elif contact.is_member:
            requests.append(PaymentSlipRequest.from_template(
                template, contact, organization, bank_code=bank_code, currency=currency,
            ))
        else:
            logger.debug(f"Skipping contact {contact.id}: not a member")

    logger.info(f"Planned {len(requests)} slips for template '{template.name}'")
    return requests


def generate_slips(
    requests: Iterable[PaymentSlipRequest],
    builder: Optional[Hub3PayloadBuilder] = None,
) -> List[SlipOutcome]:
    """Builds every request independently. Fatal errors are kept per item."""
    builder = builder or Hub3PayloadBuilder()
    outcomes: List[SlipOutcome] = []
    for request in requests:
        try:
            outcomes.append(SlipOutcome(request=request, payload=builder.build(request)))
        except HubSlipError as e:
            logger.error(f"Slip for contact {request.payer.id} failed: {e}")
            outcomes.append(SlipOutcome(request=request, error=e))
    return outcomes
