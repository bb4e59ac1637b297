from salon_app.extensions import db
from datetime import datetime

ALERT_TYPES = ("low_stock", "expiring_soon")
SEVERITIES = ("info", "success", "warning", "error", "critical")

class Alert(db.Model):
    __tablename__ = "alerts"
    __table_args__ = (
        db.Index("idx_alerts_entity", "entity_type", "entity_id"),
    )

    id = db.Column(db.Integer, primary_key=True)
    type = db.Column(db.String(50), nullable=False, index=True) # e.g., low_stock, expiring_soon
    title = db.Column(db.String(200), nullable=False)
    message = db.Column(db.Text, nullable=False)
    severity = db.Column(db.String(20), nullable=False, default="info", index=True)
    entity_type = db.Column(db.String(50)) # e.g., inventory_item
    entity_id = db.Column(db.Integer)
    is_read = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    expires_at = db.Column(db.DateTime, nullable=True)

    def to_dict(self):
        return {
            "id": self.id,
            "type": self.type,
            "title": self.title,
            "message": self.message,
            "severity": self.severity,
            "entity_type": self.entity_type,
            "entity_id": self.entity_id,
            "is_read": self.is_read,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "expires_at": self.expires_at.isoformat() if self.expires_at else None,
        }

    def __repr__(self):
        return f"<Alert {self.id} Type: {self.type} Entity: {self.entity_id} Read: {self.is_read}>"
