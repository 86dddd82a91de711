from nivaasi.config import db, bcrypt
from nivaasi.enums import (
    UserType, RentStatus, PaymentStatus, MaintenancePriority, MaintenanceStatus
)
from nivaasi.validators import utcnow


def _iso(value):
    return value.isoformat() if value else None


class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(20))
    user_type = db.Column(db.String(20), nullable=False, default=UserType.TENANT.value)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    properties = db.relationship('Property', backref='owner', lazy=True)

    def set_password(self, password):
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        return bcrypt.check_password_hash(self.password_hash, password)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'phone': self.phone,
            'userType': self.user_type
        }


class Property(db.Model):
    __tablename__ = 'properties'

    id = db.Column(db.Integer, primary_key=True)
    owner_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    owner_email = db.Column(db.String(255), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.Text, nullable=False)
    property_type = db.Column(db.String(100), default='apartment')
    total_units = db.Column(db.Integer, nullable=False, default=1)
    occupied_units = db.Column(db.Integer, nullable=False, default=0)
    available_units = db.Column(db.Integer, nullable=False, default=1)
    rent_amount = db.Column(db.Numeric(10, 2, asdecimal=False), default=0)
    created_at = db.Column(db.DateTime, default=utcnow)

    # Relationships
    tenants = db.relationship('Tenant', backref='property', lazy=True)
    connection_codes = db.relationship('ConnectionCode', backref='property', lazy=True)

    def occupy_unit(self):
        self.occupied_units = (self.occupied_units or 0) + 1
        self.available_units = self.total_units - self.occupied_units

    def vacate_unit(self):
        self.occupied_units = max(0, (self.occupied_units or 0) - 1)
        self.available_units = self.total_units - self.occupied_units

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'address': self.address,
            'propertyType': self.property_type,
            'totalUnits': self.total_units,
            'occupiedUnits': self.occupied_units,
            'availableUnits': self.available_units,
            'ownerId': self.owner_id,
            'ownerEmail': self.owner_email,
            'rentAmount': self.rent_amount or 0,
            'createdAt': _iso(self.created_at)
        }


class Tenant(db.Model):
    __tablename__ = 'tenants'
    __table_args__ = (
        db.UniqueConstraint('property_id', 'unit'),
    )

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(255), nullable=False, index=True)
    name = db.Column(db.String(255), nullable=False)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id'), nullable=False)
    unit = db.Column(db.String(50), nullable=False)
    rent_amount = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    rent_due_date = db.Column(db.DateTime, nullable=False)
    rent_status = db.Column(db.String(20), nullable=False, default=RentStatus.PENDING.value)
    move_in_date = db.Column(db.DateTime, default=utcnow)
    connection_code = db.Column(db.String(6))
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'propertyId': self.property_id,
            'unit': self.unit,
            'rentAmount': self.rent_amount,
            'rentDueDate': _iso(self.rent_due_date),
            'rentStatus': self.rent_status,
            'moveInDate': _iso(self.move_in_date),
            'connectionCode': self.connection_code,
            'createdAt': _iso(self.created_at)
        }


class Payment(db.Model):
    __tablename__ = 'payments'

    id = db.Column(db.Integer, primary_key=True)
    tenant_email = db.Column(db.String(255), nullable=False, index=True)
    amount = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    payment_method = db.Column(db.String(50), default='cash')
    paid_date = db.Column(db.Date, nullable=False)
    status = db.Column(db.String(20), nullable=False, default=PaymentStatus.PENDING.value)
    notes = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'tenantEmail': self.tenant_email,
            'amount': self.amount,
            'paymentMethod': self.payment_method,
            'paidDate': _iso(self.paid_date),
            'status': self.status,
            'notes': self.notes,
            'createdAt': _iso(self.created_at)
        }


class MaintenanceRequest(db.Model):
    __tablename__ = 'maintenance_requests'

    id = db.Column(db.Integer, primary_key=True)
    tenant_email = db.Column(db.String(255), nullable=False, index=True)
    # Kept as plain ids so requests outlive the tenancy they were raised under
    tenant_id = db.Column(db.Integer)
    property_id = db.Column(db.Integer, index=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), nullable=False, default=MaintenancePriority.MEDIUM.value)
    status = db.Column(db.String(20), nullable=False, default=MaintenanceStatus.PENDING.value)
    response = db.Column(db.Text)
    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow)
    completed_at = db.Column(db.DateTime)

    def to_dict(self):
        return {
            'id': self.id,
            'tenantEmail': self.tenant_email,
            'tenantId': self.tenant_id,
            'propertyId': self.property_id,
            'title': self.title,
            'description': self.description,
            'priority': self.priority,
            'status': self.status,
            'response': self.response,
            'createdAt': _iso(self.created_at),
            'updatedAt': _iso(self.updated_at),
            'completedAt': _iso(self.completed_at)
        }


class Reminder(db.Model):
    __tablename__ = 'reminders'

    id = db.Column(db.Integer, primary_key=True)
    tenant_id = db.Column(db.Integer)
    tenant_email = db.Column(db.String(255), nullable=False, index=True)
    tenant_name = db.Column(db.String(255))
    message = db.Column(db.Text, nullable=False)
    reminder_type = db.Column(db.String(50), default='general')
    status = db.Column(db.String(20), default='sent')
    due_date = db.Column(db.DateTime)
    sent_at = db.Column(db.DateTime, default=utcnow)
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'tenantId': self.tenant_id,
            'tenantEmail': self.tenant_email,
            'tenantName': self.tenant_name,
            'message': self.message,
            'type': self.reminder_type,
            'status': self.status,
            'dueDate': _iso(self.due_date),
            'sentAt': _iso(self.sent_at),
            'createdAt': _iso(self.created_at)
        }


class ConnectionCode(db.Model):
    __tablename__ = 'connection_codes'

    id = db.Column(db.Integer, primary_key=True)
    code = db.Column(db.String(6), unique=True, nullable=False)
    property_id = db.Column(db.Integer, db.ForeignKey('properties.id'), nullable=False)
    unit = db.Column(db.String(50), nullable=False)
    rent_amount = db.Column(db.Numeric(10, 2, asdecimal=False), nullable=False)
    is_used = db.Column(db.Boolean, nullable=False, default=False)
    expires_at = db.Column(db.DateTime, nullable=False)
    used_at = db.Column(db.DateTime)
    used_by = db.Column(db.String(255))
    created_at = db.Column(db.DateTime, default=utcnow)

    def is_expired(self, now=None):
        return (now or utcnow()) > self.expires_at

    def to_dict(self):
        return {
            'code': self.code,
            'propertyId': self.property_id,
            'unit': self.unit,
            'rentAmount': self.rent_amount,
            'isUsed': self.is_used,
            'expiresAt': _iso(self.expires_at),
            'usedAt': _iso(self.used_at),
            'usedBy': self.used_by,
            'createdAt': _iso(self.created_at)
        }


class Notification(db.Model):
    __tablename__ = 'notifications'

    id = db.Column(db.Integer, primary_key=True)
    recipient_email = db.Column(db.String(255), nullable=False, index=True)
    audience = db.Column(db.String(20), nullable=False)
    notification_type = db.Column(db.String(50), default='general')
    title = db.Column(db.String(255))
    message = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20))
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    related_id = db.Column(db.Integer)
    related_type = db.Column(db.String(50))
    created_at = db.Column(db.DateTime, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'recipientEmail': self.recipient_email,
            'audience': self.audience,
            'type': self.notification_type,
            'title': self.title,
            'message': self.message,
            'priority': self.priority,
            'read': self.is_read,
            'relatedId': self.related_id,
            'relatedType': self.related_type,
            'createdAt': _iso(self.created_at)
        }
