import pytest

from storefront.schemas import ShippingAddress
from storefront.validators import validate_phone, validate_pincode, validate_shipping_address


GOOD = dict(name="Asha Rao", phone="9876543210", address="12 MG Road", city="Bengaluru",
            state="Karnataka", pincode="560001")


class TestFieldChecks:

    @pytest.mark.parametrize("phone,ok", [
        ("9876543210", True),
        (" 9876543210 ", True),
        ("987654321", False),
        ("98765432100", False),
        ("98765-43210", False),
        ("\u0660\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669", False),
        ("", False),
    ])
    def test_phone(self, phone, ok):
        assert validate_phone(phone) is ok

    @pytest.mark.parametrize("pincode,ok", [
        ("560001", True),
        ("56001", False),
        ("5600011", False),
        ("56OO01", False),
        ("\u0661\u0662\u0663\u0664\u0665\u0666", False),
    ])
    def test_pincode(self, pincode, ok):
        assert validate_pincode(pincode) is ok


class TestShippingAddress:

    def test_valid_address_has_no_errors(self):
        assert validate_shipping_address(ShippingAddress(**GOOD)) == {}

    def test_blank_form_flags_every_field(self):
        errors = validate_shipping_address(ShippingAddress())
        assert set(errors) == {"name", "phone", "address", "city", "state", "pincode"}
        assert errors["phone"] == "Phone is required"

    def test_whitespace_counts_as_missing(self):
        errors = validate_shipping_address(ShippingAddress(**{**GOOD, "city": "   "}))
        assert errors == {"city": "City is required"}

    def test_format_messages(self):
        errors = validate_shipping_address(ShippingAddress(**{**GOOD, "phone": "12345", "pincode": "12"}))
        assert errors == {
            "phone": "Enter valid 10-digit phone",
            "pincode": "Enter valid 6-digit pincode",
        }

    def test_non_ascii_digits_rejected(self):
        address = ShippingAddress(**{**GOOD, "phone": "\u0660\u0661\u0662\u0663\u0664\u0665\u0666\u0667\u0668\u0669",
                                     "pincode": "\u0661\u0662\u0663\u0664\u0665\u0666"})
        assert validate_shipping_address(address) == {
            "phone": "Enter valid 10-digit phone",
            "pincode": "Enter valid 6-digit pincode",
        }
