from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

_EIN_RE = re.compile(r"^\d{9}$")
_REGISTRY_RE = re.compile(r"^BWC-[A-Z]{2}-\d+$")
_STATE_RE = re.compile(r"^[A-Z]{2}$")
_ZIP_RE = re.compile(r"^\d{5}(-\d{4})?$")


def _text(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def validate_winery_registration(data: Mapping[str, Any]) -> dict[str, str]:
    """Return field -> error message; an empty dict means the registration is valid."""
    errors: dict[str, str] = {}

    if not _text(data, "operated_by"):
        errors["operated_by"] = "Business name is required"

    ein = _text(data, "ein")
    if not ein:
        errors["ein"] = "EIN is required"
    elif not _EIN_RE.match(ein.replace("-", "")):
        errors["ein"] = "EIN must be 9 digits (XX-XXXXXXX)"

    registry = _text(data, "registry_number")
    if not registry:
        errors["registry_number"] = "TTB Registry Number is required"
    elif not _REGISTRY_RE.match(registry):
        errors["registry_number"] = "Registry number format: BWC-XX-####"

    if not _text(data, "premises_address"):
        errors["premises_address"] = "Premises address is required"

    if not _text(data, "premises_city"):
        errors["premises_city"] = "City is required"

    state = _text(data, "premises_state")
    if not state:
        errors["premises_state"] = "State is required"
    elif not _STATE_RE.match(state):
        errors["premises_state"] = "Use 2-letter state code"

    zip_code = _text(data, "premises_zip")
    if not zip_code:
        errors["premises_zip"] = "ZIP code is required"
    elif not _ZIP_RE.match(zip_code):
        errors["premises_zip"] = "ZIP must be 5 or 9 digits"

    return errors


def format_ein(ein: str | None) -> str:
    if not ein:
        return ""
    digits = re.sub(r"\D", "", ein)
    if len(digits) != 9:
        return ein
    return f"{digits[:2]}-{digits[2:]}"
