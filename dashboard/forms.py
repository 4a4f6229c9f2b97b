from decimal import InvalidOperation

from wtforms import DecimalField, Form, RadioField, StringField
from wtforms.validators import AnyOf, DataRequired, ValidationError

from dashboard.models import INVOICE_STATUSES
from dashboard.utils.numeric import (
    MAX_AMOUNT,
    MAX_MINOR_UNITS,
    parse_decimal,
    to_minor_units,
)

CUSTOMER_REQUIRED_MESSAGE = "Please select a customer."
AMOUNT_INVALID_MESSAGE = "Please enter an amount greater than $0."
AMOUNT_TOO_LARGE_MESSAGE = f"Please enter an amount no greater than ${MAX_AMOUNT:,.2f}."
STATUS_INVALID_MESSAGE = "Please select an invoice status."


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class AmountField(DecimalField):
    """Decimal field whose parse failures are left to the form validators.

    An unparsable amount reports the same single message as a non-positive
    one instead of the generic "Not a valid decimal value.".
    """

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        self.data = parse_decimal(valuelist[0])


def positive_amount(form, field):
    """Require an amount of at least one minor unit that fits the column."""
    if field.data is None or field.data <= 0:
        raise ValidationError(AMOUNT_INVALID_MESSAGE)
    if field.data > MAX_AMOUNT:
        raise ValidationError(AMOUNT_TOO_LARGE_MESSAGE)
    try:
        cents = to_minor_units(field.data)
    except InvalidOperation as exc:
        raise ValidationError(AMOUNT_TOO_LARGE_MESSAGE) from exc
    if cents <= 0:
        raise ValidationError(AMOUNT_INVALID_MESSAGE)
    if cents > MAX_MINOR_UNITS:
        raise ValidationError(AMOUNT_TOO_LARGE_MESSAGE)


class InvoiceForm(Form):
    """Schema for submitted invoice fields.

    A plain WTForms form so it validates any mapping of field data, inside
    or outside a request. CSRF is enforced for routes by ``CSRFProtect``.
    Only ``customerId``, ``amount`` and ``status`` are declared: ``id`` and
    ``date`` are never taken from the caller.
    """

    customer_id = StringField(
        "Customer",
        name="customerId",
        filters=[_strip],
        validators=[DataRequired(message=CUSTOMER_REQUIRED_MESSAGE)],
    )
    amount = AmountField("Amount", validators=[positive_amount])
    status = RadioField(
        "Status",
        choices=[(status, status.title()) for status in INVOICE_STATUSES],
        validate_choice=False,
        validators=[AnyOf(INVOICE_STATUSES, message=STATUS_INVALID_MESSAGE)],
    )

    @property
    def field_errors(self):
        """Errors keyed by the submitted field names."""
        return {field.name: list(field.errors) for field in self if field.errors}
