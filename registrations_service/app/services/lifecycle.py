"""Registration payment lifecycle.

A registration is created once by the student with ``confirmed = False`` and a
``payment_status`` derived from the chosen payment option. After that the only
transition is an admin setting ``confirmed = True``, which is terminal.
``payment_status`` never changes after creation.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ..models import PaymentOption, PaymentStatus, Registration

STATUS_LABELS = {
	PaymentStatus.SEAT_LOCK_PENDING.value: "Seat locked - balance due",
	PaymentStatus.FULL_PAYMENT_PENDING.value: "Payment under verification",
}
CONFIRMED_LABEL = "Confirmed"


class LifecycleError(Exception):
	pass


@dataclass(frozen=True)
class PaymentTerms:
	payment_option: PaymentOption
	payment_status: PaymentStatus
	price_offered: int
	amount_paid: int


def resolve_payment_terms(
	payment_option: PaymentOption,
	*,
	price_offered: int,
	seat_lock_amount: int,
) -> PaymentTerms:
	"""Amounts and initial status recorded for a new registration.

	``amount_paid`` is what the student says they paid; it is only checked by a
	person before the registration is confirmed.

	A seat lock has to leave a balance due, so it is refused for courses priced
	at or below ``seat_lock_amount``.
	"""
	if payment_option == PaymentOption.SEAT_LOCK:
		if price_offered <= seat_lock_amount:
			raise LifecycleError("Seat lock is not available for this course, please pay the full amount")
		return PaymentTerms(
			payment_option=payment_option,
			payment_status=PaymentStatus.SEAT_LOCK_PENDING,
			price_offered=price_offered,
			amount_paid=seat_lock_amount,
		)
	return PaymentTerms(
		payment_option=PaymentOption.FULL,
		payment_status=PaymentStatus.FULL_PAYMENT_PENDING,
		price_offered=price_offered,
		amount_paid=price_offered,
	)


def status_label(payment_status: str, confirmed: bool) -> str:
	if confirmed:
		return CONFIRMED_LABEL
	return STATUS_LABELS.get(payment_status, payment_status)


def confirm(registration: Registration, *, now: datetime | None = None) -> None:
	if registration.confirmed:
		raise LifecycleError("Registration is already confirmed")
	registration.confirmed = True
	registration.confirmed_at = now or datetime.now(timezone.utc)
