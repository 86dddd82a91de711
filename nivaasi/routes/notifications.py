from flask import Blueprint, request, jsonify

from nivaasi.services import notifications
from nivaasi.validators import parse_id

notifications_bp = Blueprint('notifications', __name__, url_prefix='/api/notifications')
reminders_bp = Blueprint('reminders', __name__, url_prefix='/api/reminders')


@reminders_bp.route('/send', methods=['POST'])
def send_reminder():
    data = request.get_json(silent=True) or {}
    if not data.get('tenantId') or not data.get('message'):
        return jsonify({'error': 'Tenant ID and message are required'}), 400

    reminder, tenant = notifications.send_reminder(
        parse_id(data['tenantId'], 'tenantId'),
        data['message'],
        reminder_type=data.get('reminderType'),
        due_date=data.get('dueDate')
    )
    return jsonify({
        'message': 'Reminder sent successfully',
        'reminder': {
            'id': reminder.id,
            'tenant': {
                'name': tenant.name,
                'email': tenant.email
            },
            'type': reminder.reminder_type,
            'dueDate': reminder.due_date.isoformat() if reminder.due_date else None,
            'sentAt': reminder.sent_at.isoformat()
        }
    }), 201


@notifications_bp.route('/owner', methods=['GET'])
def owner_notifications():
    owner_email = request.args.get('ownerEmail')
    if not owner_email:
        return jsonify({'error': 'Owner email is required'}), 400

    return jsonify(notifications.owner_notifications(owner_email)), 200


@notifications_bp.route('/tenant', methods=['GET'])
def tenant_notifications():
    tenant_email = request.args.get('tenantEmail')
    if not tenant_email:
        return jsonify({'error': 'Tenant email is required'}), 400

    return jsonify(notifications.tenant_notifications(tenant_email)), 200


@notifications_bp.route('/mark-read', methods=['POST'])
def mark_read():
    data = request.get_json(silent=True) or {}
    if not data.get('notificationId'):
        return jsonify({'error': 'Notification ID is required'}), 400

    notifications.mark_read(parse_id(data['notificationId'], 'notificationId'))
    return jsonify({'message': 'Notification marked as read'}), 200
