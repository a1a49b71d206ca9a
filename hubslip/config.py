"""
------------------------------------------------------------------------------
Project:        HubSlip
File:           hubslip/config.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Manages configuration using QSettings: bank code, currency,
                PDF417 encoder parameters and logging. Standardizes paths
                for configuration and data (XDG standards on Linux).
------------------------------------------------------------------------------
"""

import codecs
import json
from pathlib import Path
from typing import Any, Optional

from PyQt6.QtCore import QSettings, QStandardPaths

from hubslip.hub3 import BarcodeSettings
from hubslip.logger import get_logger
from hubslip.models.slip import DEFAULT_BANK_CODE, DEFAULT_CURRENCY

logger = get_logger("config")


class AppConfig:
    """
    Manages configuration using QSettings.
    Singleton-like usage via class methods or single instance.
    """

    # Keys (Simple names, groups handled in methods)
    KEY_BANK_CODE: str = "bank_code"
    KEY_CURRENCY: str = "currency"
    KEY_CHARSET: str = "charset"
    KEY_ERROR_CORRECTION: str = "error_correction"
    KEY_MARGIN: str = "margin"
    KEY_WIDTH: str = "width"
    KEY_HEIGHT: str = "height"
    KEY_COLUMNS: str = "columns"
    KEY_AUTO_REFERENCE: str = "auto_reference"
    KEY_LOG_LEVEL: str = "log_level"
    KEY_LOG_COMPONENTS: str = "log_components"

    APP_ID: str = "hubslip"
    _active_profile: Optional[str] = None

    def __init__(self, profile: Optional[str] = None) -> None:
        """
        Initializes the configuration manager.

        Args:
            profile: Optional profile name (e.g. 'dev', 'test').
                    If provided, all paths and settings are isolated (e.g. hubslip-dev).
        """
        # If no profile provided, use the last active one (Global Singleton-like)
        if profile is None:
            profile = AppConfig._active_profile
        else:
            AppConfig._active_profile = profile

        self.profile = profile
        self.active_id = self.APP_ID
        if profile:
            self.active_id = f"{self.APP_ID}-{profile}"

        self.settings = QSettings(self.active_id, self.active_id)

    def get_data_dir(self) -> Path:
        """
        Returns the path to the data directory.
        Forces a flat structure: ~/.local/share/hubslip[-profile]/
        """
        base_path = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericDataLocation)
        data_dir = Path(base_path) / self.active_id
        data_dir.mkdir(parents=True, exist_ok=True)
        return data_dir

    def _get_setting(self, group: str, key: str, default: Any = None) -> Any:
        """
        Helper to retrieve a setting value from a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            default: The default value if not found.

        Returns:
            The retrieved value or default.
        """
        if group:
            self.settings.beginGroup(group)
        val = self.settings.value(key, default)
        if group:
            self.settings.endGroup()
        return val

    def _set_setting(self, group: str, key: str, value: Any) -> None:
        """
        Helper to save a setting value into a specific group.

        Args:
            group: The configuration group name.
            key: The setting key.
            value: The value to save.
        """
        if isinstance(value, str):
            value = value.strip()

        if group:
            self.settings.beginGroup(group)
        self.settings.setValue(key, value)
        if group:
            self.settings.endGroup()

    def _get_int(self, group: str, key: str, default: int) -> int:
        try:
            return int(self._get_setting(group, key, default))
        except (TypeError, ValueError):
            return default

    def get_bank_code(self) -> str:
        """
        Retrieves the HUB-3 bank code written as first payload line.

        Returns:
            The bank code string.
        """
        val = str(self._get_setting("Payment", self.KEY_BANK_CODE, DEFAULT_BANK_CODE))
        return val if val else DEFAULT_BANK_CODE

    def set_bank_code(self, code: str) -> None:
        """
        Saves the HUB-3 bank code.

        Args:
            code: The bank code string.
        """
        self._set_setting("Payment", self.KEY_BANK_CODE, code.upper())

    def get_currency(self) -> str:
        """Retrieves the payment currency code."""
        val = str(self._get_setting("Payment", self.KEY_CURRENCY, DEFAULT_CURRENCY))
        return val if val else DEFAULT_CURRENCY

    def set_currency(self, currency: str) -> None:
        """Saves the payment currency code."""
        self._set_setting("Payment", self.KEY_CURRENCY, currency.upper())

    def get_auto_reference(self) -> bool:
        """Whether an empty reference template gets a MOD-11 reference from the contact id."""
        val = self._get_setting("Payment", self.KEY_AUTO_REFERENCE, False)
        if isinstance(val, str):
            return val.lower() in ("true", "1", "yes")
        return bool(val)

    def set_auto_reference(self, enabled: bool) -> None:
        """Saves the auto reference flag."""
        self._set_setting("Payment", self.KEY_AUTO_REFERENCE, bool(enabled))

    def get_barcode_settings(self) -> BarcodeSettings:
        """
        Retrieves the PDF417 encoder parameters.

        Returns:
            A BarcodeSettings instance, defaults for anything unset.
        """
        defaults = BarcodeSettings()
        charset = str(self._get_setting("Barcode", self.KEY_CHARSET, defaults.charset)) or defaults.charset
        try:
            codecs.lookup(charset)
        except LookupError:
            logger.warning(f"Unknown barcode charset '{charset}', using {defaults.charset}")
            charset = defaults.charset
        return BarcodeSettings(
            charset=charset,
            error_correction=self._get_int("Barcode", self.KEY_ERROR_CORRECTION, defaults.error_correction),
            margin=self._get_int("Barcode", self.KEY_MARGIN, defaults.margin),
            width=self._get_int("Barcode", self.KEY_WIDTH, defaults.width),
            height=self._get_int("Barcode", self.KEY_HEIGHT, defaults.height),
            columns=self._get_int("Barcode", self.KEY_COLUMNS, defaults.columns),
        )

    def set_barcode_settings(self, barcode: BarcodeSettings) -> None:
        """
        Saves the PDF417 encoder parameters.

        Args:
            barcode: The settings to persist.
        """
        self._set_setting("Barcode", self.KEY_CHARSET, barcode.charset)
        self._set_setting("Barcode", self.KEY_ERROR_CORRECTION, barcode.error_correction)
        self._set_setting("Barcode", self.KEY_MARGIN, barcode.margin)
        self._set_setting("Barcode", self.KEY_WIDTH, barcode.width)
        self._set_setting("Barcode", self.KEY_HEIGHT, barcode.height)
        self._set_setting("Barcode", self.KEY_COLUMNS, barcode.columns)

    def get_log_level(self) -> str:
        """Retrieves the global log level."""
        return str(self._get_setting("Logging", self.KEY_LOG_LEVEL, "WARNING"))

    def set_log_level(self, level: str) -> None:
        """Saves the global log level."""
        self._set_setting("Logging", self.KEY_LOG_LEVEL, level.upper())

    def get_log_components(self) -> dict:
        """Retrieves a dictionary of component-specific log levels."""
        raw = str(self._get_setting("Logging", self.KEY_LOG_COMPONENTS, "{}"))
        try:
            components = json.loads(raw)
        except json.JSONDecodeError:
            return {}
        return components if isinstance(components, dict) else {}

    def set_log_components(self, components: dict) -> None:
        """Saves a dictionary of component-specific log levels."""
        self._set_setting("Logging", self.KEY_LOG_COMPONENTS, json.dumps(components))

    def get_log_file_path(self) -> Path:
        """Returns the absolute path to the log file."""
        return self.get_data_dir() / "hubslip.log"
