"""Tests for the declarative validator — rules, bindings, recursion."""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta

import pytest

from custreg.domain.customer import Address, ContactInfo, Customer, TaxInfo
from custreg.domain.types import State
from custreg.domain.validation import (
    FIELD_RULES,
    STATE_RULES,
    FieldViolation,
    RuleContext,
    ValidationResult,
    Validator,
    parse_rules,
)
from tests.conftest import make_org, make_person

FIXED_NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def validator() -> Validator:
    return Validator(clock=lambda: FIXED_NOW)


class TestParseRules:
    def test_splits_names_and_params(self) -> None:
        assert parse_rules("required,min=1,max=3") == (
            ("required", ""),
            ("min", "1"),
            ("max", "3"),
        )

    def test_ignores_blank_tokens(self) -> None:
        assert parse_rules(" required ,, ") == (("required", ""),)

    def test_param_with_spaces(self) -> None:
        assert parse_rules("required_without_all=mobile email") == (
            ("required_without_all", "mobile email"),
        )


class TestValidationResult:
    def test_empty_is_valid(self) -> None:
        assert ValidationResult().valid

    def test_accessors(self) -> None:
        vr = ValidationResult([FieldViolation("ssn", "required", "ssn is required")])
        assert not vr.valid
        assert vr.fields == ["ssn"]
        assert vr.errors == ["ssn is required"]


class TestValidInfo:
    def test_valid_person(self, validator: Validator) -> None:
        assert validator.validate(make_person()).valid

    def test_valid_org(self, validator: Validator) -> None:
        assert validator.validate(make_org()).valid

    def test_valid_customers(self, validator: Validator) -> None:
        assert validator.validate(Customer(id=1, state=State.PROSPECT, info=make_person())).valid
        assert validator.validate(Customer(id=1, state=State.PROSPECT, info=make_org())).valid


class TestPersonRules:
    def test_missing_ssn(self, validator: Validator) -> None:
        vr = validator.validate(make_person(ssn=""))
        assert vr.fields == ["ssn"]
        assert vr.violations[0].rule == "required"

    def test_reports_every_violation(self, validator: Validator) -> None:
        vr = validator.validate(
            make_person(given_name="", ssn="", date_of_birth=None, citizenship="EUR")
        )
        assert set(vr.fields) == {"given_name", "ssn", "date_of_birth", "citizenship"}

    def test_root_prefix(self, validator: Validator) -> None:
        vr = validator.validate(make_person(ssn=""), root="info")
        assert vr.fields == ["info.ssn"]
        assert vr.errors == ["info.ssn is required"]

    @pytest.mark.parametrize(
        "name",
        ["A", "Ann", "Anna-Liisa", "Ågot", "Jürgen", "Zoë", "李", "given-name"],
    )
    def test_person_names_accepted(self, validator: Validator, name: str) -> None:
        assert validator.validate(make_person(given_name=name)).valid

    @pytest.mark.parametrize(
        "name",
        [
            "", "-Ann", "Ann-", "Ann Marie", "Ann1", "O'Brien", "-", "Ann\n",
            "A\u00b2B",  # superscript two
            "\u216b",  # roman numeral twelve
            "Ann\u0301",  # combining acute accent
        ],
    )
    def test_person_names_rejected(self, validator: Validator, name: str) -> None:
        vr = validator.validate(make_person(family_name=name))
        assert vr.fields == ["family_name"]
        assert vr.violations[0].rule == "person-name"

    def test_lowercase_country_rejected(self, validator: Validator) -> None:
        vr = validator.validate(make_person(citizenship="us"))
        assert vr.fields == ["citizenship"]
        assert vr.violations[0].rule == "iso3166_1_alpha2"

    def test_empty_country_reports_only_required(self, validator: Validator) -> None:
        vr = validator.validate(make_person(citizenship=""))
        assert [v.rule for v in vr.violations] == ["required"]

    def test_missing_date_stops_before_later_rules(self, validator: Validator) -> None:
        vr = validator.validate(make_person(date_of_birth=None))
        assert [(v.field, v.rule) for v in vr.violations] == [("date_of_birth", "required")]


class TestOrgRules:
    @pytest.mark.parametrize("name", ["A", "7", "Acme", "Smith & Sons", "X-Corp 2000", "Ålö"])
    def test_org_names_accepted(self, validator: Validator, name: str) -> None:
        assert validator.validate(make_org(name=name)).valid

    @pytest.mark.parametrize(
        "name",
        ["", " Acme", "Acme ", "&Co", "Acme-", "Acme.", "Acme_1", "\u0663\u0664", "Acme\u00bd"],
    )
    def test_org_names_rejected(self, validator: Validator, name: str) -> None:
        vr = validator.validate(make_org(name=name))
        assert vr.fields == ["name"]

    def test_missing_legal_id_and_form(self, validator: Validator) -> None:
        vr = validator.validate(make_org(legal_id="", form=""))
        assert set(vr.fields) == {"legal_id", "form"}

    def test_invalid_country(self, validator: Validator) -> None:
        vr = validator.validate(make_org(registration_country="EUR"))
        assert vr.fields == ["registration_country"]


class TestBeforeRule:
    def test_future_date_rejected(self, validator: Validator) -> None:
        vr = validator.validate(make_person(date_of_birth=date(2030, 1, 1)))
        assert vr.fields == ["date_of_birth"]
        assert vr.violations[0].rule == "before"

    def test_today_counts_as_midnight(self, validator: Validator) -> None:
        assert validator.validate(make_person(date_of_birth=FIXED_NOW.date())).valid

    def test_tomorrow_rejected(self, validator: Validator) -> None:
        tomorrow = FIXED_NOW.date() + timedelta(days=1)
        assert not validator.validate(make_org(registration_date=tomorrow)).valid

    def test_datetime_values(self, validator: Validator) -> None:
        ctx = RuleContext(parent=None, now=FIXED_NOW)
        rule = validator._rules["before"]
        assert rule(FIXED_NOW - timedelta(seconds=1), "", ctx)
        assert not rule(FIXED_NOW, "", ctx)
        assert rule(datetime(2000, 1, 1), "", ctx)  # naive is read as UTC
        assert not rule("2000-01-01", "", ctx)


class TestStateRules:
    @pytest.mark.parametrize("state", [1, 2, 3, State.PASSIVE])
    def test_in_range(self, validator: Validator, state: int) -> None:
        assert validator.validate_value(state, STATE_RULES, field="state").valid

    @pytest.mark.parametrize("state", [0, 4, -1, "2", 2.0, True, None])
    def test_out_of_range_or_wrong_type(self, validator: Validator, state: object) -> None:
        vr = validator.validate_value(state, STATE_RULES, field="state")
        assert not vr.valid
        assert set(vr.fields) == {"state"}

    def test_customer_state_bound(self, validator: Validator) -> None:
        c = Customer.model_construct(id=1, state=0, info=make_person())
        vr = validator.validate(c)
        assert vr.fields == ["state"]


class TestCustomerRecursion:
    def test_nested_info_paths(self, validator: Validator) -> None:
        c = Customer(id=1, info=make_person(ssn=""))
        vr = validator.validate(c)
        assert vr.fields == ["info.ssn"]

    def test_zero_id(self, validator: Validator) -> None:
        vr = validator.validate(Customer(id=0, info=make_org()))
        assert vr.fields == ["id"]

    def test_id_over_uint32(self, validator: Validator) -> None:
        vr = validator.validate(Customer(id=2**32, info=make_org()))
        assert [v.rule for v in vr.violations] == ["uint32"]

    def test_sub_record_paths(self, validator: Validator) -> None:
        c = Customer(
            id=1,
            info=make_person(),
            addresses=[
                Address(street="Main 1", postal_code="00100", city="Helsinki", country="FI"),
                Address(street="Side 2", postal_code="", city="Espoo", country="XX"),
            ],
            contacts=[ContactInfo()],
            tax_infos=[TaxInfo(country="FI", tax_id="")],
        )
        vr = validator.validate(c)
        assert set(vr.fields) == {
            "addresses[1].postal_code",
            "addresses[1].country",
            "contacts[0].phone",
            "tax_infos[0].tax_id",
        }

    def test_none_is_missing(self, validator: Validator) -> None:
        vr = validator.validate(None, root="info")
        assert vr.fields == ["info"]
        assert vr.violations[0].rule == "required"

    def test_unbound_type_raises(self, validator: Validator) -> None:
        with pytest.raises(TypeError):
            validator.validate(object())

    def test_does_not_mutate(self, validator: Validator) -> None:
        c = Customer(id=1, info=make_person(ssn=""))
        before = c.model_copy(deep=True)
        validator.validate(c)
        assert c == before


class TestContactRules:
    def test_one_channel_enough(self, validator: Validator) -> None:
        assert validator.validate(ContactInfo(email="first.last@example.co.uk")).valid
        assert validator.validate(ContactInfo(mobile="+358401234567")).valid
        assert validator.validate(ContactInfo(phone="0912345")).valid

    def test_no_channel(self, validator: Validator) -> None:
        vr = validator.validate(ContactInfo())
        assert vr.fields == ["phone"]
        assert vr.violations[0].rule == "required_without_all"

    @pytest.mark.parametrize("phone", ["12", "+", "12-34-56", "++123456", "０１２３４５", "1234567890123456"])
    def test_bad_phone(self, validator: Validator, phone: str) -> None:
        vr = validator.validate(ContactInfo(phone=phone))
        assert vr.fields == ["phone"]
        assert vr.violations[0].rule == "phone"

    @pytest.mark.parametrize("email", ["plain", "a@", "@b.com", "a b@c.com", "a@-b.com", "a@b..com"])
    def test_bad_email(self, validator: Validator, email: str) -> None:
        vr = validator.validate(ContactInfo(email=email))
        assert vr.fields == ["email"]

    def test_bad_mobile_reported_with_good_email(self, validator: Validator) -> None:
        vr = validator.validate(ContactInfo(mobile="abc", email="a@b.fi"))
        assert vr.fields == ["mobile"]


class TestEngine:
    def test_unknown_rule_is_an_error(self) -> None:
        v = Validator(bindings={TaxInfo: {"country": "no-such-rule"}})
        with pytest.raises(ValueError, match="no-such-rule"):
            v.validate(TaxInfo(country="FI", tax_id="1"))

    def test_register_rule(self) -> None:
        v = Validator(bindings={TaxInfo: {"tax_id": "required,fi-tax-id"}})
        v.register_rule(
            "fi-tax-id",
            lambda value, param, ctx: isinstance(value, str) and value.startswith("FI"),
            "{field} must start with FI",
        )
        assert v.validate(TaxInfo(country="FI", tax_id="FI123")).valid
        vr = v.validate(TaxInfo(country="FI", tax_id="123"))
        assert vr.errors == ["tax_id must start with FI"]

    def test_default_bindings_cover_models(self, validator: Validator) -> None:
        for model in FIELD_RULES:
            assert validator.has_bindings(model)

    def test_omitempty_skips_rest(self, validator: Validator) -> None:
        assert validator.validate_value("", "omitempty,email").valid
        assert not validator.validate_value("x", "omitempty,email").valid
