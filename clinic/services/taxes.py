from __future__ import annotations

from decimal import Decimal
from typing import Optional

from django.conf import settings

from clinic.models import Tax


def billing_tax_category(category: Optional[str] = None) -> str:
    """The tax category to bill: the request's choice, else the configured one."""
    return (category or '').strip() or settings.CLINIC_BILLING.get('TAX_CATEGORY', 'VAT')


def active_tax_ratios(category: Optional[str] = None) -> list[Decimal]:
    """Ratios of every active tax row in ``category``.

    Rows are not de-duplicated: two active VAT rows both count.  An empty
    list means no tax is charged.
    """
    category = billing_tax_category(category)
    return list(
        Tax.objects.filter(category=category, active=True).order_by('id').values_list('ratio', flat=True)
    )


def default_tax() -> Optional[Tax]:
    return Tax.objects.filter(is_default=True).order_by('id').first()


def format_tax(tax: Tax) -> dict:
    return {
        'id': tax.id,
        'name': tax.name,
        'category': tax.category,
        'type': tax.type,
        'isDefault': tax.is_default,
        'isRegisteredAuthority': tax.is_registered_authority,
        'registrationNumber': tax.registration_number,
        'registrationDate': tax.registration_date.isoformat() if tax.registration_date else None,
        'ratio': str(tax.ratio),
        'active': tax.active,
    }
