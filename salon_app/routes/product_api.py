from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required
from sqlalchemy import or_
from salon_app.extensions import db
from salon_app.forms import ProductForm
from salon_app.models.product import Product
from .utils import bind_form, validation_error, current_user_id

product_bp = Blueprint("product_api", __name__, url_prefix="/api")


def _apply_form(product, form):
    product.name = form.name.data.strip()
    product.category = form.category.data.strip()
    product.unit_price = form.unit_price.data
    product.description = form.description.data or None


@product_bp.route("/products", methods=["GET"])
@login_required
def get_products():
    """List products, newest first. ``q`` filters by name or category."""
    try:
        query = Product.query
        search = request.args.get("q", "").strip()
        if search:
            pattern = f"%{search}%"
            query = query.filter(or_(Product.name.ilike(pattern), Product.category.ilike(pattern)))
        products = query.order_by(Product.created_at.desc(), Product.id.desc()).all()
        return jsonify([p.to_dict() for p in products])
    except Exception as e:
        current_app.logger.error(f"Error fetching products: {e}", exc_info=True)
        return jsonify({"error": "Failed to load products"}), 500


@product_bp.route("/products/<int:product_id>", methods=["GET"])
@login_required
def get_product(product_id):
    product = Product.query.get_or_404(product_id)
    return jsonify(product.to_dict())


@product_bp.route("/products", methods=["POST"])
@login_required
def add_product():
    form = bind_form(ProductForm)
    if not form.validate():
        return validation_error(form)
    try:
        product = Product(created_by=current_user_id())
        _apply_form(product, form)
        db.session.add(product)
        db.session.commit()
        return jsonify({"message": "Product created successfully", "product": product.to_dict()}), 201
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error adding product: {e}", exc_info=True)
        return jsonify({"error": "Failed to save product"}), 500


@product_bp.route("/products/<int:product_id>", methods=["PUT"])
@login_required
def update_product(product_id):
    product = Product.query.get_or_404(product_id)
    form = bind_form(ProductForm)
    if not form.validate():
        return validation_error(form)
    try:
        _apply_form(product, form)
        db.session.commit()
        return jsonify({"message": "Product updated successfully", "product": product.to_dict()})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to save product"}), 500


@product_bp.route("/products/<int:product_id>", methods=["DELETE"])
@login_required
def delete_product(product_id):
    product = Product.query.get_or_404(product_id)
    try:
        db.session.delete(product)
        db.session.commit()
        return jsonify({"message": "Product deleted successfully"})
    except Exception as e:
        db.session.rollback()
        current_app.logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
        return jsonify({"error": "Failed to delete product"}), 500
