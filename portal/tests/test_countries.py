import pytest

from portal.services import countries


def test_all_countries():
    codes = [c['code'] for c in countries.all_countries()]
    assert codes == ['IN', 'TH', 'SG']


def test_get_country_normalises_code():
    assert countries.get_country(' th ')['name'] == 'Thailand'


def test_missing_and_unknown_codes():
    with pytest.raises(ValueError, match='Country code required'):
        countries.get_country('')
    with pytest.raises(LookupError, match='Country not found'):
        countries.get_country('FR')


def test_hospitals_with_city_specific_block():
    data = countries.country_hospitals('IN', 'chennai')
    assert data['citySpecific']['airportCode'] == 'MAA'
    assert 'citySpecific' not in countries.country_hospitals('IN', 'Pune')


def test_results_are_copies():
    countries.get_country('SG')['name'] = 'changed'
    assert countries.get_country('SG')['name'] == 'Singapore'


def test_hotels():
    assert countries.country_hotels('SG')['popularChains'][0] == 'Marina Bay Sands'


def test_invalid_action():
    with pytest.raises(ValueError, match='Invalid action'):
        countries.dispatch('get-weather', 'IN')


@pytest.mark.django_db
@pytest.mark.parametrize('params,status', [
    ({'action': 'get-all-countries'}, 200),
    ({'action': 'get-country', 'country': 'in'}, 200),
    ({'action': 'get-hotels', 'country': 'TH'}, 200),
    ({'action': 'get-country'}, 400),
    ({'action': 'get-country', 'country': 'ZZ'}, 404),
    ({'action': 'nope'}, 400),
    ({}, 400),
])
def test_country_endpoint(api_client, params, status):
    assert api_client.get('/api/countries', params).status_code == status
