"""Payment lines for a monthly calculation request."""

from typing import List, Sequence

from .engine.schemas import PaymentLine
from .schemas import ExtraPayment

BASE_PAYMENT_NAME = "Maas"
BASE_PAYMENT_REF = "1"


def base_payment_line() -> PaymentLine:
    """Regular pay line; the engine derives its amount from the wage."""
    return PaymentLine(
        payment_amount=None,
        payment_name=BASE_PAYMENT_NAME,
        payment_type="RegularPayment",
        payment_ref=BASE_PAYMENT_REF,
    )


def build_payments(extra_payments: Sequence[ExtraPayment] = ()) -> List[PaymentLine]:
    """Build the ordered payment lines for one month.

    The base pay line always comes first with ref "1". Extra payment i
    (0-based) follows with ref "extra_<i+2>", in input order. Only a
    payment typed exactly "Net" is sent as Net; everything else is Gross.

    Args:
        extra_payments: Payments due in the month being calculated

    Returns:
        Payment lines, base line first
    """
    payments = [base_payment_line()]
    for i, extra in enumerate(extra_payments):
        payments.append(PaymentLine(
            payment_amount=extra.amount,
            payment_name=extra.name,
            payment_type=extra.payment_type,
            payment_ref=f"extra_{i + 2}",
            calculation_type="Net" if extra.type == "Net" else "Gross",
        ))
    return payments
