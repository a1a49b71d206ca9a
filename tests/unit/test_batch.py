from decimal import Decimal
import pytest
from hubslip.batch import generate_slips, plan_slips, template_needs_dependent
from hubslip.errors import InvalidAmount
from hubslip.models import Contact, UnderagedMember


@pytest.fixture
def dependent_template(template):
    return template.model_copy(update={
        "description": "Trening {{underaged_attributes.first_name}}",
        "poziv_na_broj": "{{underaged_attributes.pin}}",
    })


@pytest.fixture
def family():
    return Contact(
        id=10, first_name="Marija", last_name="Babić", is_member=False,
        dependents=[
            UnderagedMember(id=1, first_name="Ema", pin="11111111111", is_member=True),
            UnderagedMember(id=2, first_name="Jan", pin="22222222222", is_member=False),
            UnderagedMember(id=3, first_name="Tea", pin="33333333333", is_member=True),
        ],
    )


def test_template_needs_dependent(template, dependent_template):
    assert not template_needs_dependent(template)
    assert template_needs_dependent(dependent_template)
    ref_only = template.model_copy(update={"poziv_na_broj": "{{underaged_attributes.pin}}"})
    assert template_needs_dependent(ref_only)


def test_plan_one_slip_per_member_dependent(dependent_template, family, contact, organization):
    loner = Contact(id=11, first_name="Petar", is_member=False)
    requests = plan_slips(dependent_template, [family, contact, loner], organization)

    assert [(r.payer.id, r.dependent.id if r.dependent else None) for r in requests] == [
        (10, 1), (10, 3), (42, None)
    ]


def test_plan_member_contacts_only(template, family, contact, organization):
    requests = plan_slips(template, [family, contact], organization)
    assert len(requests) == 1
    assert requests[0].payer.id == 42
    assert requests[0].dependent is None
    assert requests[0].amount == Decimal("12.34")


def test_plan_uses_bank_code_and_currency(template, contact, organization):
    requests = plan_slips(template, [contact], organization, bank_code="HRVHUB30", currency="HRK")
    assert requests[0].currency == "HRK"


def test_inactive_template_plans_nothing(template, contact, organization, caplog):
    inactive = template.model_copy(update={"is_active": False})
    assert plan_slips(inactive, [contact], organization) == []
    assert "inactive" in caplog.text


def test_generate_slips_continues_after_failure(dependent_template, family, organization, caplog):
    requests = plan_slips(dependent_template, [family], organization)
    broken = requests[0].model_copy(update={"amount": Decimal("0")})

    outcomes = generate_slips([broken, requests[1]])

    assert [o.ok for o in outcomes] == [False, True]
    assert isinstance(outcomes[0].error, InvalidAmount)
    assert outcomes[0].payload is None
    assert outcomes[1].payload.reference == "33333333333"
    assert outcomes[1].payload.description == "Trening Tea"
    assert "failed" in caplog.text


def test_generate_slips_empty():
    assert generate_slips([]) == []
