import unittest

from quickchat.config import (
    RECIPIENT_PHONE_PATTERN, REGISTRATION_PHONE_PATTERN, REGISTRATION_SUCCESS, VALIDATION_MESSAGES
)
from quickchat.validators import registration_outcome, valid_password, valid_phone, valid_username


class TestUsername(unittest.TestCase):
    def test_valid_username(self):
        self.assertTrue(valid_username("ab_cd"))
        self.assertTrue(valid_username("_"))
        self.assertTrue(valid_username("kyl_1"))

    def test_invalid_username(self):
        self.assertFalse(valid_username(None))
        self.assertFalse(valid_username(""))
        self.assertFalse(valid_username("abcd"))      # no underscore
        self.assertFalse(valid_username("abc_de"))    # too long
        self.assertFalse(valid_username("kyle!!!!!!"))

    def test_matches_rule_for_sample_inputs(self):
        for u in [None, "", "_", "a_", "a_b_c", "a_b_cd", "admin", "ab cd", "__________"]:
            expected = u is not None and "_" in u and len(u) <= 5
            self.assertEqual(valid_username(u), expected, u)


class TestPassword(unittest.TestCase):
    def test_valid_password(self):
        self.assertTrue(valid_password("Pass123!"))
        self.assertTrue(valid_password("Ch&&sec@ke99!"))

    def test_too_short(self):
        self.assertFalse(valid_password("Pa1!"))
        self.assertFalse(valid_password(None))

    def test_removing_any_class_fails(self):
        self.assertFalse(valid_password("pass123!"))   # no uppercase
        self.assertFalse(valid_password("Password!"))  # no digit
        self.assertFalse(valid_password("Pass1234"))   # no special

    def test_special_at_end_is_found(self):
        self.assertTrue(valid_password("Aaaaaaaaaaaa1#"))


class TestPhone(unittest.TestCase):
    def test_registration_pattern(self):
        self.assertTrue(valid_phone("+27838968976", REGISTRATION_PHONE_PATTERN))
        self.assertFalse(valid_phone("08966553", REGISTRATION_PHONE_PATTERN))
        self.assertFalse(valid_phone("+2783896897", REGISTRATION_PHONE_PATTERN))    # too short
        self.assertFalse(valid_phone("+278389689761", REGISTRATION_PHONE_PATTERN))  # too long
        self.assertFalse(valid_phone("+44838968976", REGISTRATION_PHONE_PATTERN))
        self.assertFalse(valid_phone(None, REGISTRATION_PHONE_PATTERN))

    def test_recipient_pattern_is_broader(self):
        self.assertTrue(valid_phone("+4412345678901", RECIPIENT_PHONE_PATTERN))
        self.assertTrue(valid_phone("+1234567890", RECIPIENT_PHONE_PATTERN))
        self.assertFalse(valid_phone("+123456789", RECIPIENT_PHONE_PATTERN))
        self.assertFalse(valid_phone("+1234567890123456", RECIPIENT_PHONE_PATTERN))
        self.assertFalse(valid_phone("4412345678901", RECIPIENT_PHONE_PATTERN))
        self.assertFalse(valid_phone("+4412345678901", REGISTRATION_PHONE_PATTERN))

    def test_non_ascii_digits_rejected(self):
        arabic_indic = "+27٨٢١١١٢٢٢٢"
        fullwidth = "+" + "１" * 11
        self.assertFalse(valid_phone(arabic_indic, REGISTRATION_PHONE_PATTERN))
        self.assertFalse(valid_phone(fullwidth, RECIPIENT_PHONE_PATTERN))
        self.assertFalse(valid_phone("+" + "١" * 11, RECIPIENT_PHONE_PATTERN))

    def test_default_pattern_is_registration(self):
        self.assertTrue(valid_phone("+27821112222"))
        self.assertFalse(valid_phone("+4412345678901"))


class TestRegistrationOutcome(unittest.TestCase):
    def test_success(self):
        self.assertEqual(registration_outcome("ab_cd", "Pass123!", "+27821112222"), REGISTRATION_SUCCESS)

    def test_username_error_reported_first(self):
        self.assertEqual(registration_outcome("abcdef", "weak", "123"), VALIDATION_MESSAGES['username'])
        self.assertEqual(registration_outcome("abcdef", "Pass123!", "+27821112222"), VALIDATION_MESSAGES['username'])

    def test_password_before_phone(self):
        self.assertEqual(registration_outcome("ab_cd", "weak", "123"), VALIDATION_MESSAGES['password'])

    def test_phone_error(self):
        self.assertEqual(registration_outcome("ab_cd", "Pass123!", "0821112222"), VALIDATION_MESSAGES['phone'])


if __name__ == '__main__':
    unittest.main()
