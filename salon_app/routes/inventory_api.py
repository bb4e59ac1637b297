from flask import Blueprint, jsonify, current_app
from flask_login import login_required
from salon_app.extensions import db
from salon_app.forms import InventoryItemForm, StockTransactionForm
from salon_app.inventory_alerts import run_inventory_checks, ENTITY_TYPE
from salon_app.models.alert import Alert
from salon_app.models.inventory import InventoryItem, InventoryTransaction
from .utils import bind_form, validation_error, current_user_id

inventory_bp = Blueprint("inventory_api", __name__, url_prefix="/api")


def _apply_form(item, form):
    item.name = form.name.data.strip()
    item.current_stock = form.current_stock.data or 0
    item.min_stock_level = form.min_stock_level.data or 0
    item.max_stock_level = form.max_stock_level.data if form.max_stock_level.data is not None else 100
    item.unit_price = form.unit_price.data or 0.0
    item.expiry_date = form.expiry_date.data
    item.supplier = form.supplier.data or None
    item.barcode = form.barcode.data or None


@inventory_bp.route("/inventory", methods=["GET"])
@login_required
def get_inventory_items():
    try:
        items = InventoryItem.query.order_by(InventoryItem.created_at.desc(), InventoryItem.id.desc()).all()
        return jsonify([i.to_dict() for i in items])
    except Exception as e:
        current_app.logger.error(f"Error fetching inventory: {e}", exc_info=True)
        return jsonify({"error": "Failed to load inventory data"}), 500


@inventory_bp.route("/inventory/<int:item_id>", methods=["GET"])
@login_required
def get_inventory_item(item_id):
    item = InventoryItem.query.get_or_404(item_id)
    return jsonify(item.to_dict())


@inventory_bp.route("/inventory", methods=["POST"])
@login_required
def add_inventory_item():
    form = bind_form(InventoryItemForm)
    if not form.validate():
        return validation_error(form)
    try:
        item = InventoryItem(created_by=current_user_id())
        _apply_form(item, form)
        db.session.add(item)
        db.session.commit()
        return jsonify({"message": "Item created successfully", "item": item.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error adding inventory item: {e}", exc_info=True)
        return jsonify({"error": "Failed to save item"}), 500


@inventory_bp.route("/inventory/<int:item_id>", methods=["PUT"])
@login_required
def update_inventory_item(item_id):
    item = InventoryItem.query.get_or_404(item_id)
    form = bind_form(InventoryItemForm)
    if not form.validate():
        return validation_error(form)
    try:
        _apply_form(item, form)
        db.session.commit()
        return jsonify({"message": "Item updated successfully", "item": item.to_dict()})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating inventory item {item_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to save item"}), 500


@inventory_bp.route("/inventory/<int:item_id>", methods=["DELETE"])
@login_required
def delete_inventory_item(item_id):
    item = InventoryItem.query.get_or_404(item_id)
    try:
        # Alerts only reference the item by id
        Alert.query.filter_by(entity_type=ENTITY_TYPE, entity_id=item.id).delete(synchronize_session=False)
        db.session.delete(item)
        db.session.commit()
        return jsonify({"message": "Item deleted successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting inventory item {item_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to delete item"}), 500


@inventory_bp.route("/inventory/<int:item_id>/transactions", methods=["GET"])
@login_required
def get_item_transactions(item_id):
    item = InventoryItem.query.get_or_404(item_id)
    transactions = InventoryTransaction.query.filter_by(item_id=item.id) \
        .order_by(InventoryTransaction.created_at.desc(), InventoryTransaction.id.desc()).limit(50).all()
    return jsonify([t.to_dict() for t in transactions])


@inventory_bp.route("/inventory/<int:item_id>/transactions", methods=["POST"])
@login_required
def record_transaction(item_id):
    """Move stock in or out of an item and keep a record of the movement."""
    item = InventoryItem.query.get_or_404(item_id)
    form = bind_form(StockTransactionForm)
    if not form.validate():
        return validation_error(form)

    quantity = form.quantity.data
    is_stock_in = form.transaction_type.data == "stock_in"
    new_stock = item.current_stock + quantity if is_stock_in else item.current_stock - quantity
    if new_stock < 0:
        return jsonify({"error": "Cannot remove more stock than available"}), 400

    try:
        unit_price = form.unit_price.data
        transaction = InventoryTransaction(
            item_id=item.id,
            transaction_type=form.transaction_type.data,
            quantity=quantity,
            unit_price=unit_price,
            total_amount=unit_price * quantity if unit_price is not None else None,
            reason=form.reason.data or None,
            reference_number=form.reference_number.data or None,
            created_by=current_user_id(),
        )
        item.current_stock = new_stock
        db.session.add(transaction)
        db.session.commit()
        return jsonify({"message": "Transaction recorded successfully", "transaction": transaction.to_dict(), "item": item.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error recording transaction for item {item_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to record transaction"}), 500


@inventory_bp.route("/inventory/check-alerts", methods=["POST"])
@login_required
def check_inventory_alerts():
    """Run the low-stock and expiry checks right away."""
    result = run_inventory_checks()
    return jsonify({"message": "Inventory checks completed", "created": result})
