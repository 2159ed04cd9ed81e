import datetime

import pytest

from libtdl.normalizer import normalize, normalize_datetime, normalize_monetary_amount

NOW = datetime.datetime(2020, 6, 15, 8, 30, tzinfo=datetime.timezone.utc)


@pytest.mark.parametrize('parsed, utc_offset, iso', [
    ({'day': 19, 'month': 12, 'year': 2017}, 0, '2017-12-19T00:00:00.000+00:00'),
    ({'day': 19, 'month': 12, 'year': 2017, 'timezone': '+01:00'}, 0, '2017-12-19T00:00:00.000+01:00'),
    ({'day': 19, 'month': 12, 'year': 2017, 'timezone': '-05:30'}, 120, '2017-12-19T00:00:00.000-05:30'),
    ({'day': 19, 'month': 12, 'year': 2017}, 120, '2017-12-19T00:00:00.000+02:00'),
    ({'day': 19, 'month': 12, 'year': 2017}, -300, '2017-12-19T00:00:00.000-05:00'),
    ({'day': 1, 'month': 2, 'year': 2021, 'hour': 10, 'minute': 30, 'second': 5, 'millisecond': 250}, 0, '2021-02-01T10:30:05.250+00:00'),
    ({'day': 3, 'month': 4}, 0, '2020-04-03T00:00:00.000+00:00'),
    ({'hour': 9}, 0, '2020-06-15T09:00:00.000+00:00'),
])
def test_normalize_datetime(parsed, utc_offset, iso):
    assert normalize_datetime({'$class': 'ParsedDateTime', **parsed}, utc_offset, NOW) == iso


@pytest.mark.parametrize('parsed', [{'day': 30, 'month': 2, 'year': 2021}, {'day': 31, 'month': 4, 'year': 2021}])
def test_invalid_datetime(parsed):
    with pytest.raises(ValueError):
        normalize_datetime({'$class': 'ParsedDateTime', **parsed}, 0, NOW)


@pytest.mark.parametrize('parsed, code', [({'doubleValue': 1.5, 'currencyCode': 'EUR'}, 'EUR'), ({'doubleValue': 1.5, 'currencySymbol': 'GBP'}, 'GBP'),
                                          ({'doubleValue': 1.5, 'currencySymbol': 'USD', 'currencyCode': 'USD'}, 'USD')])
def test_normalize_monetary_amount(parsed, code):
    assert normalize_monetary_amount({'$class': 'ParsedMonetaryAmount', **parsed}) == {
        '$class': 'org.accordproject.money.MonetaryAmount', 'doubleValue': 1.5, 'currencyCode': code}


def test_incompatible_currencies():
    with pytest.raises(ValueError, match='Currency symbol USD and currency code EUR are incompatible'):
        normalize_monetary_amount({'$class': 'ParsedMonetaryAmount', 'doubleValue': 1.5, 'currencySymbol': 'USD', 'currencyCode': 'EUR'})


def test_normalize_nested():
    value = {
        '$class': 'org.acme.LateDelivery',
        'deliveryDate': {'$class': 'ParsedDateTime', 'day': 19, 'month': 12, 'year': 2017},
        'fee': {'$class': 'ParsedAmount', 'doubleValue': 1000.5},
        'prices': [{'$class': 'ParsedMonetaryAmount', 'doubleValue': 2.0, 'currencySymbol': 'EUR'}],
        'seller': {'$class': 'org.acme.Party', 'name': 'ACME'},
        'penalty': 10.5,
        'note': None,
    }
    assert normalize(value, 0, NOW) == {
        '$class': 'org.acme.LateDelivery',
        'deliveryDate': '2017-12-19T00:00:00.000+00:00',
        'fee': 1000.5,
        'prices': [{'$class': 'org.accordproject.money.MonetaryAmount', 'doubleValue': 2.0, 'currencyCode': 'EUR'}],
        'seller': {'$class': 'org.acme.Party', 'name': 'ACME'},
        'penalty': 10.5,
        'note': None,
    }


@pytest.mark.parametrize('value', ['text', 1, 2.5, True, None])
def test_normalize_scalars(value):
    assert normalize(value) == value
