"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           tests/unit/test_hub3.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Unit tests for the HUB-3 payload builder.
------------------------------------------------------------------------------
"""

from decimal import Decimal
import pytest
from hubslip.errors import InvalidAmount, MissingOrganizationData, UnsupportedCharacters, WarningKind
from hubslip.hub3 import BarcodeSettings, Hub3PayloadBuilder, build, format_amount, render_barcode
from hubslip.models import Contact, Organization, ResolvedPayload


class TestFormatAmount:

    @pytest.mark.parametrize("amount, expected", [
        (Decimal("12.34"), "000000000001234"),
        (Decimal("12.340"), "000000000001234"),
        (Decimal("0.01"), "000000000000001"),
        (Decimal("100"), "000000000010000"),
        ("25.5", "000000000002550"),
        (12.34, "000000000001234"),
        (7, "000000000000700"),
        (Decimal("9999999999999.99"), "999999999999999"),
    ])
    def test_valid(self, amount, expected):
        assert format_amount(amount) == expected

    @pytest.mark.parametrize("amount", [
        Decimal("0"), Decimal("-5"), Decimal("12.345"), Decimal("0.001"),
        Decimal("10000000000000"), Decimal("NaN"), Decimal("Infinity"),
        "abc", None, True,
    ])
    def test_invalid(self, amount):
        with pytest.raises(InvalidAmount):
            format_amount(amount)


class TestHub3PayloadBuilder:

    def test_full_payload(self, request_factory, expected_payload):
        payload = build(request_factory())
        assert isinstance(payload, ResolvedPayload)
        assert payload.text == expected_payload
        assert not payload.text.endswith("\n")
        assert payload.warnings == ()
        assert payload.amount_line == "000000000001234"
        assert payload.reference == "12345678903"
        assert payload.description == "Clanarina 2025 Ivan"

    def test_line_count_with_empty_optional_fields(self, request_factory):
        payload = build(request_factory(
            payer=Contact(id=3),
            recipient=Organization(name="Klub", iban="HR1210010051863000160"),
            payment_model="",
            reference_template="",
            description_template="",
        ))
        assert len(payload.lines) == 14
        assert len(payload.text.split("\n")) == 14
        assert payload.lines[3:6] == ("", "", "")
        assert payload.lines[7:9] == ("", "")
        assert payload.reference == ""
        assert payload.description == ""

    def test_partial_address_parts(self, request_factory):
        payer = Contact(id=3, first_name="Ana", street_num="7", city="Osijek")
        payload = build(request_factory(payer=payer))
        assert payload.lines[3] == "Ana"
        assert payload.lines[4] == "7"
        assert payload.lines[5] == "Osijek"

    def test_line_breaks_do_not_add_lines(self, request_factory):
        payer = Contact(id=3, first_name="Ana\nMarija", last_name="Kovač")
        payload = build(request_factory(payer=payer, description_template="Line one\r\nline two"))
        assert len(payload.text.split("\n")) == 14
        assert payload.lines[3] == "Ana Marija Kovac"
        assert payload.description == "Line one line two"

    def test_identifier_fields_are_not_normalized(self, request_factory):
        payload = build(request_factory(payment_model="HR00", reference_template="2025{contact_id}"))
        assert payload.lines[10] == "HR00"
        assert payload.reference == "202542"
        assert payload.lines[9] == "HR1210010051863000160"

    def test_bank_code_and_currency_from_request(self, request_factory):
        payload = build(request_factory(bank_code="HRVHUB30", currency="HRK"))
        assert payload.lines[:2] == ("HRVHUB30", "HRK")

    def test_purpose_line_is_empty(self, request_factory):
        assert build(request_factory()).lines[12] == ""

    def test_dependent_values(self, request_factory, dependent):
        payload = build(request_factory(
            dependent=dependent,
            reference_template="{{underaged_attributes.pin}}",
            description_template="Trening {{underaged_attributes.first_name}} {{underaged_attributes.last_name}}",
        ))
        assert payload.reference == "98765432109"
        assert payload.description == "Trening Luka Horvat"

    def test_reference_warnings_are_collected(self, request_factory):
        payload = build(request_factory(reference_template="REF-1", description_template="{{bogus}}"))
        assert payload.reference == "42"
        assert [w.kind for w in payload.warnings] == [
            WarningKind.NON_NUMERIC_REFERENCE, WarningKind.UNRESOLVED_PLACEHOLDER
        ]

    def test_auto_reference(self, request_factory):
        payload = build(request_factory(reference_template="", auto_reference=True))
        assert payload.reference == "00000000426"

    def test_auto_reference_only_for_empty_template(self, request_factory):
        payload = build(request_factory(reference_template="777", auto_reference=True))
        assert payload.reference == "777"

    def test_invalid_amount(self, request_factory):
        with pytest.raises(InvalidAmount):
            build(request_factory(amount=Decimal("-1.00")))
        with pytest.raises(InvalidAmount):
            build(request_factory(amount=Decimal("1.999")))

    @pytest.mark.parametrize("org", [
        Organization(name="Klub", iban=None),
        Organization(name="  ", iban="HR1210010051863000160"),
        Organization(),
    ])
    def test_missing_organization_data(self, request_factory, org):
        with pytest.raises(MissingOrganizationData):
            build(request_factory(recipient=org))

    def test_unsupported_characters(self, request_factory):
        with pytest.raises(UnsupportedCharacters) as exc:
            build(request_factory(description_template="Uplata ☃"))
        assert "☃" in str(exc.value)

    def test_latin2_characters_are_accepted(self, request_factory):
        payload = Hub3PayloadBuilder(charset="ISO-8859-2").build(
            request_factory(description_template="Größe")
        )
        assert payload.description == "Größe"

    def test_payload_is_not_fourteen_lines_rejected(self):
        with pytest.raises(ValueError):
            ResolvedPayload(lines=("a", "b"))


def test_render_barcode(request_factory):
    pytest.importorskip("pdf417gen")
    settings = BarcodeSettings()
    image = render_barcode(build(request_factory()), settings)
    assert image.size == (settings.width, settings.height)


def test_render_barcode_without_extra(monkeypatch, caplog):
    import builtins
    real_import = builtins.__import__

    def fake_import(name, *args, **kwargs):
        if name == "pdf417gen":
            raise ImportError(name)
        return real_import(name, *args, **kwargs)

    monkeypatch.setattr(builtins, "__import__", fake_import)
    assert render_barcode("HRVHUB30") is None
    assert "pdf417gen" in caplog.text
