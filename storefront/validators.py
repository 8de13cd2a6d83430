import re
from typing import Dict

from .schemas import ShippingAddress

PHONE_REGEX = re.compile(r"^[0-9]{10}$")
PINCODE_REGEX = re.compile(r"^[0-9]{6}$")

REQUIRED = {
    "name": "Name is required",
    "phone": "Phone is required",
    "address": "Address is required",
    "city": "City is required",
    "state": "State is required",
    "pincode": "Pincode is required",
}

def validate_phone(phone: str) -> bool:
    return bool(PHONE_REGEX.match((phone or "").strip()))

def validate_pincode(pincode: str) -> bool:
    return bool(PINCODE_REGEX.match((pincode or "").strip()))

def validate_shipping_address(address: ShippingAddress) -> Dict[str, str]:
    """Per-field error messages for the shipping form; empty when it can be submitted."""
    errors: Dict[str, str] = {}
    for field, message in REQUIRED.items():
        if not (getattr(address, field) or "").strip():
            errors[field] = message
    if "phone" not in errors and not validate_phone(address.phone):
        errors["phone"] = "Enter valid 10-digit phone"
    if "pincode" not in errors and not validate_pincode(address.pincode):
        errors["pincode"] = "Enter valid 6-digit pincode"
    return errors
