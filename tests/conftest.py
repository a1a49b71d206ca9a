import logging
from datetime import date
from decimal import Decimal

import pytest
from PyQt6.QtCore import QSettings

from hubslip.config import AppConfig
from hubslip.models import Contact, Organization, PaymentSlipRequest, PaymentTemplate, UnderagedMember


@pytest.fixture(autouse=True)
def reset_hubslip_logging():
    """Leaves the 'hubslip' logger as it was found after each test."""
    root = logging.getLogger("hubslip")
    level = root.level
    handlers = root.handlers[:]
    yield
    for handler in root.handlers[:]:
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("hubslip."):
            logging.getLogger(name).setLevel(logging.NOTSET)


@pytest.fixture
def config(tmp_path, monkeypatch):
    """AppConfig backed by a throw-away INI file instead of the user's settings."""
    monkeypatch.setattr(AppConfig, "_active_profile", None)
    app_config = AppConfig()
    app_config.settings = QSettings(str(tmp_path / "hubslip.ini"), QSettings.Format.IniFormat)
    monkeypatch.setattr(app_config, "get_log_file_path", lambda: tmp_path / "hubslip.log")
    return app_config


@pytest.fixture
def contact():
    return Contact(
        id=42,
        first_name="Ivan",
        last_name="Horvat",
        birthday=date(1985, 3, 14),
        pin="12345678903",
        street_name="Ilica",
        street_num="12",
        postal_code="10000",
        city="Zagreb",
        email="ivan.horvat@example.com",
        is_member=True,
    )


@pytest.fixture
def dependent():
    return UnderagedMember(
        id=7,
        first_name="Luka",
        last_name="Horvat",
        birth_date=date(2014, 6, 1),
        age=11,
        pin="98765432109",
        is_member=True,
        contact_id=42,
    )


@pytest.fixture
def organization():
    return Organization(
        id=1,
        name="Udruga Šišmiš",
        iban="HR12 1001 0051 8630 0016 0",
        street_name="Vukovarska",
        street_num="5",
        postal_code="21000",
        city="Split",
    )


@pytest.fixture
def template():
    return PaymentTemplate(
        id=3,
        name="Članarina",
        description="Članarina {{custom_text.2025}} {{contact_attributes.first_name}}",
        amount=Decimal("12.34"),
        model_of_payment="HR01",
        poziv_na_broj="{{contact_attributes.pin}}",
    )


@pytest.fixture
def request_factory(template, contact, organization):
    def _make(**overrides):
        req = PaymentSlipRequest.from_template(template, contact, organization)
        return req.model_copy(update=overrides)
    return _make


@pytest.fixture
def expected_payload():
    """HUB-3 text for the sample template, contact and organization."""
    return "\n".join([
        "HRVHUB30",
        "EUR",
        "000000000001234",
        "Ivan Horvat",
        "Ilica 12",
        "10000 Zagreb",
        "Udruga Sismis",
        "Vukovarska 5",
        "21000 Split",
        "HR1210010051863000160",
        "HR01",
        "12345678903",
        "",
        "Clanarina 2025 Ivan",
    ])
