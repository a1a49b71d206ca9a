"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/hub3.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Builds the HUB-3 payload, the 14 line text block encoded into
                the PDF417 barcode of Croatian payment slips ("uplatnica"),
                and optionally renders that barcode.
------------------------------------------------------------------------------
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, List, Optional, Union

from hubslip.errors import InvalidAmount, MissingOrganizationData, UnsupportedCharacters
from hubslip.logger import get_logger
from hubslip.models.slip import PaymentSlipRequest, ResolvedPayload
from hubslip.resolver import resolve_description, resolve_reference
from hubslip.utils.reference import generate_reference
from hubslip.utils.text import normalize, single_line

logger = get_logger("hub3")

BARCODE_CHARSET = "ISO-8859-2"
AMOUNT_WIDTH = 15
MAX_MINOR_UNITS = 10 ** AMOUNT_WIDTH - 1


@dataclass(frozen=True)
class BarcodeSettings:
    """PDF417 encoder parameters for HUB-3 slips."""
    charset: str = BARCODE_CHARSET
    error_correction: int = 2
    margin: int = 10
    width: int = 450
    height: int = 150
    columns: int = 9


def format_amount(amount: Any) -> str:
    """
    Converts an amount to minor units, zero-padded to 15 digits.
    12.34 -> '000000000001234'. The conversion multiplies by 100 and truncates.

    Raises:
        InvalidAmount: Non-numeric, non-finite, non-positive, more than two
            decimals, or more than 15 digits in minor units.
    """
    try:
        if isinstance(amount, bool):
            raise TypeError("bool is not an amount")
        if isinstance(amount, float):
            amount = str(amount)
        value = amount if isinstance(amount, Decimal) else Decimal(amount)
    except (InvalidOperation, TypeError, ValueError) as e:
        raise InvalidAmount(f"Amount is not a number: {amount!r}") from e

    if not value.is_finite():
        raise InvalidAmount(f"Amount must be finite: {amount!r}")
    if value <= 0:
        raise InvalidAmount(f"Amount must be positive: {value}")

    scaled = value * 100
    if scaled != scaled.to_integral_value():
        raise InvalidAmount(f"Amount has more than two decimals: {value}")

    minor_units = int(scaled)
    if minor_units > MAX_MINOR_UNITS:
        raise InvalidAmount(f"Amount does not fit {AMOUNT_WIDTH} digits: {value}")
    return f"{minor_units:0{AMOUNT_WIDTH}d}"


def _free_text(value: Optional[str]) -> str:
    return normalize(single_line(value))


class Hub3PayloadBuilder:
    """
    Assembles HUB-3 payloads.
    Reference: HUB-3 standard of the Croatian Banking Association (HUB).
    """

    def __init__(self, charset: str = BARCODE_CHARSET) -> None:
        self.charset = charset

    def build(self, request: PaymentSlipRequest) -> ResolvedPayload:
        """
        Builds the 14 payload lines for one slip.

        Free text (names, addresses, cities, description) is folded to ASCII
        for Croatian letters. Amount, IBAN, model and reference are emitted
        without normalization.

        Raises:
            InvalidAmount: See format_amount.
            MissingOrganizationData: Recipient name or IBAN is blank.
            UnsupportedCharacters: Payload is not encodable in the charset.
        """
        # 1. Validation of required data
        amount_line = format_amount(request.amount)

        recipient_name = _free_text(request.recipient_name)
        iban = single_line(request.recipient_iban)
        missing = [label for label, val in (("name", recipient_name), ("IBAN", iban)) if not val]
        if missing:
            raise MissingOrganizationData(
                f"Organization is missing required data: {', '.join(missing)}"
            )

        # 2. Template resolution (never fatal)
        if not (request.reference_template or "").strip() and request.auto_reference \
                and request.payer.id is not None:
            reference = generate_reference(request.payer.id)
            reference_warnings = ()
        else:
            resolution = resolve_reference(request.reference_template, request.payer, request.dependent)
            reference, reference_warnings = resolution.value, resolution.warnings

        description = resolve_description(request.description_template, request.payer, request.dependent)

        # 3. Construct Payload Lines
        lines: List[str] = [
            single_line(request.bank_code),           # Bank code (HRVHUB30)
            single_line(request.currency),            # Currency
            amount_line,                              # Amount in minor units
            _free_text(request.payer_name),           # Payer name
            _free_text(request.payer_address),        # Payer street + number
            _free_text(request.payer_city),           # Payer postal code + city
            recipient_name,                           # Recipient name
            _free_text(request.recipient_address),    # Recipient street + number
            _free_text(request.recipient_city),       # Recipient postal code + city
            iban,                                     # Recipient IBAN
            single_line(request.payment_model),       # Payment model (e.g. HR01)
            reference,                                # Reference number
            "",                                       # Purpose code (reserved)
            _free_text(description.value),            # Description
        ]

        payload = ResolvedPayload(
            lines=tuple(lines),
            warnings=tuple(reference_warnings) + description.warnings,
        )
        self._check_charset(payload.text)

        logger.debug(
            f"Built HUB-3 payload for payer '{lines[3]}' "
            f"(amount {amount_line}, reference '{reference}', {len(payload.warnings)} warnings)"
        )
        return payload

    def _check_charset(self, text: str) -> None:
        try:
            text.encode(self.charset)
        except UnicodeEncodeError:
            bad = sorted({ch for ch in text if not _encodable(ch, self.charset)})
            raise UnsupportedCharacters(
                f"Payload contains characters outside {self.charset}: {''.join(bad)!r}"
            ) from None


def _encodable(char: str, charset: str) -> bool:
    try:
        char.encode(charset)
        return True
    except UnicodeEncodeError:
        return False


def build(request: PaymentSlipRequest) -> ResolvedPayload:
    """Builds a payload with the default builder."""
    return Hub3PayloadBuilder().build(request)


def render_barcode(payload: Union[ResolvedPayload, str], settings: Optional[BarcodeSettings] = None):
    """
    Attempts to generate a PIL Image of the PDF417 barcode.
    Requires the 'pdf417gen' and 'Pillow' packages (barcode extra).
    """
    settings = settings or BarcodeSettings()
    text = payload.text if isinstance(payload, ResolvedPayload) else payload
    try:
        import pdf417gen
        from PIL import Image
    except ImportError:
        logger.warning("Package 'pdf417gen' not found. Cannot generate image.")
        return None

    codes = pdf417gen.encode(
        text,
        columns=settings.columns,
        security_level=settings.error_correction,
        encoding=settings.charset.lower(),
    )
    image = pdf417gen.render_image(codes, scale=3, ratio=3, padding=settings.margin)
    if settings.width and settings.height:
        image = image.resize((settings.width, settings.height), Image.NEAREST)
    return image
