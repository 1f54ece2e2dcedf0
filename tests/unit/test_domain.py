"""Unit tests for domain entities and enums."""

from decimal import Decimal

import pytest

from holding_query.domain.entities import Account, Company, Holding, User
from holding_query.domain.enums import AccountType, Currency, Sex


class TestCurrency:
    """Tests for the Currency enum and its bound rates."""

    def test_reference_rate_is_one(self):
        assert Currency.PLN.rate == Decimal("1.0")

    def test_every_currency_has_code_and_rate(self):
        for currency in Currency:
            assert currency.code == currency.name
            assert isinstance(currency.rate, Decimal)
            assert currency.rate > 0

    def test_str_is_code(self):
        assert str(Currency.CHF) == "CHF"

    def test_from_code(self):
        assert Currency.from_code("eur") is Currency.EUR
        assert Currency.from_code(" USD ") is Currency.USD

    def test_from_unknown_code(self):
        with pytest.raises(ValueError, match="Unknown currency code"):
            Currency.from_code("GBP")


class TestEntities:
    """Tests for the immutable hierarchy entities."""

    def test_user_full_name(self):
        assert User("Zosia", "Psikuta", 34, Sex.WOMAN).full_name == "Zosia Psikuta"

    def test_negative_age_rejected(self):
        with pytest.raises(ValueError):
            User("Jan", "Nowak", -1, Sex.MAN)

    def test_entities_frozen(self):
        account = Account("1", Decimal("1"), Currency.PLN, AccountType.PERSONAL)

        with pytest.raises(AttributeError):
            account.amount = Decimal("2")

    def test_defaults_are_empty_tuples(self):
        assert Holding("H").companies == ()
        assert Company("C").users == ()
        assert User("A", "B", 1, Sex.OTHER).accounts == ()

    def test_value_equality(self):
        assert Company("C") == Company("C")
        assert hash(User("A", "B", 1, Sex.MAN)) == hash(User("A", "B", 1, Sex.MAN))
