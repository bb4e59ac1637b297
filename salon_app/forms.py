from datetime import date

from flask_wtf import FlaskForm
from wtforms import StringField, TextAreaField, EmailField, FloatField, IntegerField, SelectField, DateField, DateTimeField
from wtforms.validators import DataRequired, InputRequired, Email, Length, Optional, NumberRange

from salon_app.models.worker import PAYMENT_TYPES
from salon_app.models.service import SERVICE_STATUSES
from salon_app.models.inventory import TRANSACTION_TYPES

ISO_DATETIME_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]


class ProductForm(FlaskForm):
    name = StringField("Product Name", validators=[DataRequired(), Length(min=1, max=100)])
    category = StringField("Category", validators=[DataRequired(), Length(max=50)])
    unit_price = FloatField("Unit Price", validators=[InputRequired(), NumberRange(min=0)])
    description = TextAreaField("Description", validators=[Optional()])


class WorkerForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(min=2, max=100)])
    email = EmailField("Email", validators=[Optional(), Email(), Length(max=120)])
    phone = StringField("Phone", validators=[Optional(), Length(max=20)])
    role = StringField("Role", validators=[DataRequired(), Length(max=50)])
    salary = FloatField("Monthly Salary", validators=[Optional(), NumberRange(min=0)], default=0.0)
    payment_type = SelectField("Payment Type", choices=[(p, p.capitalize()) for p in PAYMENT_TYPES], default="monthly")
    commission_rate = FloatField("Commission Rate (%)", validators=[Optional(), NumberRange(min=0, max=100)], default=10.0)
    payment_status = SelectField("Payment Status", choices=[("pending", "Pending"), ("paid", "Paid")], default="pending")
    hire_date = DateField("Hire Date", validators=[Optional()], default=date.today)


class ServiceForm(FlaskForm):
    service_name = StringField("Service", validators=[DataRequired(), Length(max=100)])
    service_category = StringField("Category", validators=[DataRequired(), Length(max=50)])
    service_price = FloatField("Price", validators=[InputRequired(), NumberRange(min=0)])
    staff_member_id = IntegerField("Staff Member", validators=[Optional()])
    customer_name = StringField("Customer", validators=[Optional(), Length(max=100)])
    status = SelectField("Status", choices=[(s, s.capitalize()) for s in SERVICE_STATUSES], default="scheduled")
    date_time = DateTimeField("Date & Time", format=ISO_DATETIME_FORMATS, validators=[Optional()])
    notes = TextAreaField("Notes", validators=[Optional()])


class InventoryItemForm(FlaskForm):
    name = StringField("Item Name", validators=[DataRequired(), Length(max=100)])
    current_stock = IntegerField("Current Stock", validators=[Optional(), NumberRange(min=0)], default=0)
    min_stock_level = IntegerField("Minimum Stock Level", validators=[Optional(), NumberRange(min=0)], default=0)
    max_stock_level = IntegerField("Maximum Stock Level", validators=[Optional(), NumberRange(min=0)], default=100)
    unit_price = FloatField("Unit Price", validators=[Optional(), NumberRange(min=0)], default=0.0)
    expiry_date = DateField("Expiry Date", validators=[Optional()])
    supplier = StringField("Supplier", validators=[Optional(), Length(max=100)])
    barcode = StringField("Barcode", validators=[Optional(), Length(max=50)])


class StockTransactionForm(FlaskForm):
    transaction_type = SelectField("Transaction Type", choices=[(t, t.replace("_", " ").title()) for t in TRANSACTION_TYPES], validators=[DataRequired()])
    quantity = IntegerField("Quantity", validators=[InputRequired(), NumberRange(min=1)])
    unit_price = FloatField("Unit Price", validators=[Optional(), NumberRange(min=0)])
    reason = StringField("Reason", validators=[Optional(), Length(max=200)])
    reference_number = StringField("Reference Number", validators=[Optional(), Length(max=50)])


class NotificationForm(FlaskForm):
    type = SelectField("Type", choices=[("info", "Info"), ("success", "Success"), ("warning", "Warning")], default="info")
    title = StringField("Title", validators=[DataRequired(), Length(max=200)])
    message = TextAreaField("Message", validators=[DataRequired()])
