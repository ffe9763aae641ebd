from decimal import Decimal

import pytest

from clinic.models import Tax
from clinic.services.taxes import active_tax_ratios

pytestmark = pytest.mark.django_db


def test_active_ratios_filter_by_category(settings):
    Tax.objects.create(name='VAT', category='VAT', ratio=Decimal('10'))
    Tax.objects.create(name='VAT old', category='VAT', ratio=Decimal('7'), active=False)
    Tax.objects.create(name='Service tax', category='Service', ratio=Decimal('2'))

    assert active_tax_ratios() == [Decimal('10')]
    assert active_tax_ratios('Service') == [Decimal('2')]

    settings.CLINIC_BILLING = {**settings.CLINIC_BILLING, 'TAX_CATEGORY': 'Service'}
    assert active_tax_ratios() == [Decimal('2')]


def test_tax_crud(api_client, admin_client):
    r = api_client.post('/api/taxes', {
        'name': '<b>VAT</b>',
        'category': 'VAT',
        'ratio': '5.5',
        'isDefault': True,
        'registrationNumber': 'TRN-100',
    }, format='json')
    assert r.status_code == 201
    tax = r.data['data']
    assert tax['name'] == 'VAT'
    assert tax['ratio'] == '5.5000'
    assert tax['active'] is True

    assert api_client.get('/api/taxes/default').data['data']['id'] == tax['id']

    r = api_client.put(f"/api/taxes/{tax['id']}", {'name': 'VAT', 'category': 'VAT', 'ratio': '5', 'active': False},
                       format='json')
    assert r.status_code == 200
    assert r.data['data']['active'] is False
    assert r.data['data']['isDefault'] is False

    assert len(api_client.get('/api/taxes').data['data']) == 1
    assert api_client.delete(f"/api/taxes/{tax['id']}").status_code == 403
    assert admin_client.delete(f"/api/taxes/{tax['id']}").status_code == 204
    assert api_client.get('/api/taxes/default').data['data'] is None


def test_tax_requires_name(api_client):
    r = api_client.post('/api/taxes', {'name': '  ', 'category': 'VAT', 'ratio': '5'}, format='json')
    assert r.status_code == 400


def test_non_admin_delete_of_missing_tax_is_forbidden(api_client):
    assert api_client.delete('/api/taxes/9999').status_code == 403
