"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           main.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Command line entry point. Loads a payment job (template,
                contact, organization) from JSON, prints the HUB-3 payload
                and optionally renders the PDF417 barcode.
------------------------------------------------------------------------------
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from hubslip.config import AppConfig
from hubslip.errors import HubSlipError
from hubslip.hub3 import Hub3PayloadBuilder, render_barcode
from hubslip.logger import setup_logging, get_logger
from hubslip.models import Contact, Organization, PaymentSlipRequest, PaymentTemplate, UnderagedMember


def load_job(path: Path, app_config: AppConfig) -> PaymentSlipRequest:
    """
    Reads a job file and turns it into a slip request.

    Expected keys: 'template', 'contact', 'organization' and optionally
    'dependent'. Bank code and currency come from the configuration.
    """
    with open(path, "r", encoding="utf-8") as f:
        job = json.load(f)

    dependent = job.get("dependent")
    return PaymentSlipRequest.from_template(
        PaymentTemplate.model_validate(job["template"]),
        Contact.model_validate(job["contact"]),
        Organization.model_validate(job["organization"]),
        dependent=UnderagedMember.model_validate(dependent) if dependent else None,
        bank_code=app_config.get_bank_code(),
        currency=app_config.get_currency(),
        auto_reference=app_config.get_auto_reference(),
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    HubSlip Entry Point.
    Returns the process exit code.
    """
    parser = argparse.ArgumentParser(description="HubSlip - HUB-3 payment slip payload encoder")
    parser.add_argument("job", type=Path, help="JSON file with template, contact and organization")
    parser.add_argument("-P", "--profile", type=str, help="Configuration profile for isolation (e.g. 'dev')")
    parser.add_argument("--png", type=Path, help="Write the PDF417 barcode to this PNG file")
    args = parser.parse_args(argv)

    app_config = AppConfig(profile=args.profile)

    setup_logging(
        level=app_config.get_log_level(),
        log_file=str(app_config.get_log_file_path()),
        component_levels=app_config.get_log_components()
    )
    logger = get_logger("main")

    barcode_settings = app_config.get_barcode_settings()
    try:
        request = load_job(args.job, app_config)
        payload = Hub3PayloadBuilder(charset=barcode_settings.charset).build(request)
    except (OSError, KeyError, json.JSONDecodeError, ValidationError) as e:
        logger.error(f"Invalid job file '{args.job}': {e}")
        return 1
    except (HubSlipError, LookupError) as e:
        logger.error(f"Cannot build payment slip: {e}")
        return 1

    print(payload.text)

    if args.png:
        try:
            image = render_barcode(payload, barcode_settings)
            if image is None:
                return 1
            args.png.parent.mkdir(parents=True, exist_ok=True)
            image.save(str(args.png))
        except (ValueError, LookupError, OSError) as e:
            logger.error(f"Cannot render barcode to '{args.png}': {e}")
            return 1
        logger.info(f"Barcode written to {args.png}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
