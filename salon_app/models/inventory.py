from salon_app.extensions import db
from datetime import datetime

TRANSACTION_TYPES = ("stock_in", "stock_out")

class InventoryItem(db.Model):
    __tablename__ = "inventory_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    current_stock = db.Column(db.Integer, nullable=False, default=0)
    min_stock_level = db.Column(db.Integer, nullable=False, default=0)
    max_stock_level = db.Column(db.Integer, nullable=False, default=100)
    unit_price = db.Column(db.Float, nullable=False, default=0.0)
    expiry_date = db.Column(db.Date, nullable=True)
    supplier = db.Column(db.String(100))
    barcode = db.Column(db.String(50))
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    transactions = db.relationship("InventoryTransaction", backref="item", lazy=True, cascade="all, delete-orphan")

    @property
    def is_low_stock(self):
        return self.current_stock <= self.min_stock_level

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "current_stock": self.current_stock,
            "min_stock_level": self.min_stock_level,
            "max_stock_level": self.max_stock_level,
            "unit_price": self.unit_price,
            "expiry_date": self.expiry_date.isoformat() if self.expiry_date else None,
            "supplier": self.supplier,
            "barcode": self.barcode,
            "is_low_stock": self.is_low_stock,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"InventoryItem(ID: {self.id}, Name: {self.name}, Stock: {self.current_stock}, Min: {self.min_stock_level})"


class InventoryTransaction(db.Model):
    __tablename__ = "inventory_transactions"

    id = db.Column(db.Integer, primary_key=True)
    item_id = db.Column(db.Integer, db.ForeignKey("inventory_items.id"), nullable=False, index=True)
    transaction_type = db.Column(db.String(20), nullable=False) # "stock_in" or "stock_out"
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=True)
    total_amount = db.Column(db.Float, nullable=True)
    reason = db.Column(db.String(200))
    reference_number = db.Column(db.String(50))
    created_by = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    def to_dict(self):
        return {
            "id": self.id,
            "item_id": self.item_id,
            "transaction_type": self.transaction_type,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_amount": self.total_amount,
            "reason": self.reason,
            "reference_number": self.reference_number,
            "created_by": self.created_by,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f"<InventoryTransaction {self.id} {self.transaction_type} x{self.quantity} Item: {self.item_id}>"
