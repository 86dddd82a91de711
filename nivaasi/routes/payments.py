from flask import Blueprint, request, jsonify

from nivaasi.services import payments
from nivaasi.validators import parse_id

payments_bp = Blueprint('payments', __name__, url_prefix='/api/payments')


def _missing_payment_fields(data):
    return not data.get('tenantEmail') or data.get('amount') in (None, '')


# ==================== OWNER ROUTES ====================

@payments_bp.route('/record', methods=['POST'])
def record_payment():
    """
    Owner records a payment received outside the app.
    Marks the tenant paid when the amount covers the rent.
    """
    data = request.get_json(silent=True) or {}
    if _missing_payment_fields(data):
        return jsonify({'error': 'Tenant email and amount are required'}), 400

    payment = payments.record_payment(
        data['tenantEmail'],
        data['amount'],
        payment_date=data.get('paymentDate'),
        payment_method=data.get('paymentMethod'),
        notes=data.get('notes')
    )
    return jsonify({'message': 'Payment recorded successfully', 'payment': payment.to_dict()}), 201


@payments_bp.route('/approve', methods=['POST'])
def approve_payment():
    data = request.get_json(silent=True) or {}
    if not data.get('paymentId'):
        return jsonify({'error': 'Payment ID is required'}), 400

    payment = payments.approve_payment(parse_id(data['paymentId'], 'paymentId'))
    return jsonify({'message': 'Payment approved', 'payment': payment.to_dict()}), 200


# ==================== TENANT ROUTES ====================

@payments_bp.route('/submit', methods=['POST'])
def submit_payment():
    data = request.get_json(silent=True) or {}
    if _missing_payment_fields(data):
        return jsonify({'error': 'Tenant email and amount are required'}), 400

    payment = payments.submit_payment(
        data['tenantEmail'],
        data['amount'],
        payment_method=data.get('paymentMethod'),
        notes=data.get('notes')
    )
    return jsonify({
        'message': 'Payment submitted successfully. Waiting for owner approval.',
        'payment': payment.to_dict()
    }), 201


@payments_bp.route('/history', methods=['GET'])
def payment_history():
    tenant_email = request.args.get('tenantEmail')
    if not tenant_email:
        return jsonify({'error': 'Tenant email is required'}), 400

    history = payments.payment_history(tenant_email)
    return jsonify({'payments': [p.to_dict() for p in history]}), 200
