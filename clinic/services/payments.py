"""
Payment ledger and outstanding dues.

Payment rows are free-standing: they record the bill at the time money was
taken but carry no link back to the appointment or service assignment that
produced them.  Dues per patient are therefore read from the appointment and
service-assignment balances, not from payments.
"""
from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from django.db import transaction

from clinic.models import Appointment, Payment, ServiceAssignment
from clinic.services.audit import log_action
from clinic.services.billing import BillingResult, compute_billing, format_money
from clinic.services.taxes import active_tax_ratios

logger = logging.getLogger(__name__)


def write_payment(scope: str, billing: BillingResult) -> Payment:
    return Payment.objects.create(
        scope=scope,
        total=billing.subtotal,
        discount=billing.discount,
        vat=billing.tax_amount,
        grand_total=billing.grand_total,
        paying_amount=billing.paying_amount,
        balance=billing.balance,
    )


def _price(total: Decimal, discount: Decimal, paying_amount: Decimal, tax_category: Optional[str]) -> BillingResult:
    return compute_billing(
        [total],
        discount=discount,
        tax_rates=active_tax_ratios(tax_category),
        paying_amount=paying_amount,
    )


def record_payment(*, scope: str, total: Decimal, discount: Decimal = Decimal('0'),
                   paying_amount: Decimal = Decimal('0'), tax_category: Optional[str] = None,
                   user=None) -> Payment:
    billing = _price(total, discount, paying_amount, tax_category)
    payment = write_payment(scope, billing)
    logger.info(f"payment {payment.id} recorded ({scope}): grand_total={billing.grand_total} balance={billing.balance}")
    log_action(user=user, action='payment_create', object_type='payment', object_id=payment.id, detail=billing.as_dict())
    return payment


def update_payment(payment: Payment, *, scope: str, total: Decimal, discount: Decimal = Decimal('0'),
                   paying_amount: Decimal = Decimal('0'), tax_category: Optional[str] = None,
                   user=None) -> Payment:
    billing = _price(total, discount, paying_amount, tax_category)
    with transaction.atomic():
        payment.scope = scope
        payment.total = billing.subtotal
        payment.discount = billing.discount
        payment.vat = billing.tax_amount
        payment.grand_total = billing.grand_total
        payment.paying_amount = billing.paying_amount
        payment.balance = billing.balance
        payment.save()
    logger.info(f"payment {payment.id} updated: grand_total={billing.grand_total} balance={billing.balance}")
    log_action(user=user, action='payment_update', object_type='payment', object_id=payment.id, detail=billing.as_dict())
    return payment


def delete_payment(payment: Payment, *, user=None) -> None:
    payment_id = payment.id
    payment.delete()
    logger.info(f"payment {payment_id} deleted")
    log_action(user=user, action='payment_delete', object_type='payment', object_id=payment_id)


def list_payments() -> list[dict]:
    return [format_payment(p) for p in Payment.objects.order_by('-id')]


def list_dues() -> list[dict]:
    """Payments that still have money owed on them."""
    return [format_payment(p) for p in Payment.objects.filter(balance__gt=0).order_by('-id')]


def patient_dues(patient_id: int) -> list[dict]:
    dues: list[dict] = []
    for appt in Appointment.objects.filter(patient_id=patient_id, balance__gt=0).order_by('id'):
        dues.append({
            'id': appt.id,
            'scope': Payment.SCOPE_APPOINTMENT,
            'total': format_money(appt.consultation_cost),
            'discount': format_money(appt.discount),
            'vat': format_money(appt.vat),
            'grandTotal': format_money(appt.grand_total),
            'payingAmount': format_money(appt.paying_amount),
            'balance': format_money(appt.balance),
        })
    assignments = ServiceAssignment.objects.filter(appointment__patient_id=patient_id, balance__gt=0).order_by('id')
    for sa in assignments:
        dues.append({
            'id': sa.id,
            'scope': Payment.SCOPE_SERVICE,
            'total': format_money(sa.total_cost),
            'discount': format_money(sa.discount),
            'vat': format_money(sa.vat),
            'grandTotal': format_money(sa.grand_total),
            'payingAmount': format_money(sa.paying_amount),
            'balance': format_money(sa.balance),
        })
    return dues


def format_payment(p: Payment) -> dict:
    return {
        'id': p.id,
        'scope': p.scope,
        'total': format_money(p.total),
        'discount': format_money(p.discount),
        'vat': format_money(p.vat),
        'grandTotal': format_money(p.grand_total),
        'payingAmount': format_money(p.paying_amount),
        'balance': format_money(p.balance),
        'createdAt': p.created_at.isoformat() if p.created_at else None,
    }
