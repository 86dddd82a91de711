import logging

from nivaasi.enums import NotificationAudience
from nivaasi.errors import NotFound
from nivaasi.models import Notification, Reminder
from nivaasi.services.tenants import get_tenant
from nivaasi.store import transaction
from nivaasi.validators import normalize_email, parse_datetime, utcnow

logger = logging.getLogger(__name__)


def notify(session, recipient_email, audience, title, message,
           notification_type='general', priority=None, related_id=None, related_type=None):
    """Queue an in-app notification on the caller's session."""
    notification = Notification(
        recipient_email=normalize_email(recipient_email),
        audience=audience.value,
        notification_type=notification_type,
        title=title,
        message=message,
        priority=priority,
        related_id=related_id,
        related_type=related_type
    )
    session.add(notification)
    logger.info(f"Created {audience.value} notification for {notification.recipient_email}")
    return notification


def send_reminder(tenant_id, message, reminder_type=None, due_date=None):
    with transaction() as session:
        tenant = get_tenant(tenant_id)
        now = utcnow()
        reminder = Reminder(
            tenant_id=tenant.id,
            tenant_email=tenant.email,
            tenant_name=tenant.name,
            message=message,
            reminder_type=reminder_type or 'general',
            status='sent',
            due_date=parse_datetime(due_date, 'dueDate') if due_date else None,
            sent_at=now,
            created_at=now
        )
        session.add(reminder)
        session.flush()

        notify(
            session,
            tenant.email,
            NotificationAudience.TENANT,
            title='New Reminder from Owner',
            message=message,
            notification_type=reminder.reminder_type,
            related_id=reminder.id,
            related_type='reminder'
        )

    return reminder, tenant


def _inbox(recipient_email, audience):
    notifications = Notification.query.filter_by(
        recipient_email=normalize_email(recipient_email),
        audience=audience.value
    ).order_by(Notification.created_at.desc(), Notification.id.desc()).all()
    return {
        'notifications': [n.to_dict() for n in notifications],
        'unreadCount': sum(1 for n in notifications if not n.is_read)
    }


def tenant_notifications(tenant_email):
    return _inbox(tenant_email, NotificationAudience.TENANT)


def owner_notifications(owner_email):
    return _inbox(owner_email, NotificationAudience.OWNER)


def mark_read(notification_id):
    with transaction():
        notification = Notification.query.filter_by(id=notification_id).first()
        if not notification:
            raise NotFound('Notification not found')
        notification.is_read = True
    return notification
