import logging

from nivaasi.enums import PaymentStatus, RentStatus
from nivaasi.errors import Conflict, NotFound
from nivaasi.models import Payment
from nivaasi.services.tenants import find_tenant_by_email
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_amount, parse_date, utcnow

logger = logging.getLogger(__name__)


def _apply_to_rent(payment):
    """
    Mark the tenant paid when a completed payment covers the full rent.
    Partial payments leave the rent status alone.
    """
    tenant = find_tenant_by_email(payment.tenant_email)
    if tenant and payment.amount >= tenant.rent_amount:
        tenant.rent_status = RentStatus.PAID.value
        logger.info(f"Rent marked paid for {tenant.email}")


def record_payment(tenant_email, amount, payment_date=None, payment_method=None, notes=None):
    """Owner-recorded payment, completed on entry."""
    with transaction() as session:
        payment = Payment(
            tenant_email=normalize_email(tenant_email),
            amount=parse_amount(amount),
            payment_method=payment_method or 'cash',
            paid_date=parse_date(payment_date, 'paymentDate') if payment_date else utcnow().date(),
            status=PaymentStatus.COMPLETED.value,
            notes=notes or 'Payment recorded via owner dashboard'
        )
        session.add(payment)
        session.flush()
        _apply_to_rent(payment)

    logger.info(f"Payment {payment.id} of {payment.amount} recorded for {payment.tenant_email}")
    return payment


def submit_payment(tenant_email, amount, payment_method=None, notes=None):
    """Tenant-submitted payment; stays pending until the owner approves it."""
    with transaction() as session:
        payment = Payment(
            tenant_email=normalize_email(tenant_email),
            amount=parse_amount(amount),
            payment_method=payment_method or 'cash',
            paid_date=utcnow().date(),
            status=PaymentStatus.PENDING.value,
            notes=notes or 'Payment submitted by tenant'
        )
        session.add(payment)

    logger.info(f"Payment {payment.id} of {payment.amount} submitted by {payment.tenant_email}")
    return payment


def approve_payment(payment_id):
    with transaction():
        payment = Payment.query.filter_by(id=payment_id).first()
        if not payment:
            raise NotFound('Payment not found')
        if payment.status != PaymentStatus.PENDING.value:
            raise Conflict(f'Payment is already {payment.status}')

        payment.status = PaymentStatus.COMPLETED.value
        _apply_to_rent(payment)

    logger.info(f"Payment {payment_id} approved")
    return payment


def payment_history(tenant_email):
    return Payment.query.filter_by(
        tenant_email=normalize_email(tenant_email)
    ).order_by(Payment.id).all()
