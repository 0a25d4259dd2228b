import pytest
from protean.exceptions import ValidationError
from storefront.identity.shared.email import normalize_email, validate_email
from storefront.identity.shared.passwords import hash_password, validate_password, verify_password


class TestEmail:
    @pytest.mark.parametrize(
        "email",
        ["jane@example.com", "jane.doe+shop@mail.example.co.uk", "j@x.io"],
    )
    def test_valid(self, email):
        validate_email(email)

    @pytest.mark.parametrize(
        "email",
        [
            "",
            "plainaddress",
            "two@@example.com",
            "@example.com",
            "jane@",
            "jane@localhost",
            "jane@example..com",
            ".jane@example.com",
            "jane doe@example.com",
            "jane@-example.com",
        ],
    )
    def test_invalid(self, email):
        with pytest.raises(ValidationError) as exc:
            validate_email(email)
        assert "email" in exc.value.messages

    def test_normalize(self):
        assert normalize_email("  Jane@Example.COM\n") == "jane@example.com"


class TestPasswords:
    def test_short_password_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_password("short")
        assert "password" in exc.value.messages

    def test_field_name_is_configurable(self):
        with pytest.raises(ValidationError) as exc:
            validate_password("", field="new_password")
        assert "new_password" in exc.value.messages

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret-pass")
        assert hashed != "s3cret-pass"
        assert hashed.startswith("$argon2")

    def test_verify(self):
        hashed = hash_password("s3cret-pass")
        assert verify_password(hashed, "s3cret-pass") is True
        assert verify_password(hashed, "wrong-pass") is False

    def test_malformed_hash_never_matches(self):
        assert verify_password("not-a-hash", "s3cret-pass") is False
