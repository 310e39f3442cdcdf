"""Promotion status lifecycle.

    draft -> scheduled -> active -> expired
    active <-> paused   (owner controlled, while not expired)

The automatic recompute runs on every insert/update of a promotion. It only
ever promotes ``draft`` or ``scheduled`` to ``active``; an owner's ``paused``
is left alone until the promotion ends.
"""
from bizhub.utils.errors import ValidationError
from bizhub.utils.helper import utcnow

STATUS_DRAFT = "draft"
STATUS_SCHEDULED = "scheduled"
STATUS_ACTIVE = "active"
STATUS_PAUSED = "paused"
STATUS_EXPIRED = "expired"


def derive_status(start_date, end_date, current_status, now):
    if start_date is not None and start_date > now:
        return STATUS_SCHEDULED
    if end_date is not None and end_date < now:
        return STATUS_EXPIRED
    if current_status in (STATUS_DRAFT, STATUS_SCHEDULED) and start_date is not None and start_date <= now:
        return STATUS_ACTIVE
    return current_status


def is_active(status, start_date, end_date, now):
    return (
        status == STATUS_ACTIVE
        and start_date <= now
        and (end_date is None or end_date > now)
    )


def pause(promotion):
    if promotion.status != STATUS_ACTIVE:
        raise ValidationError(f"Only active promotions can be paused (status is {promotion.status})")
    promotion.status = STATUS_PAUSED
    return promotion


def resume(promotion, now=None):
    if promotion.status != STATUS_PAUSED:
        raise ValidationError(f"Only paused promotions can be resumed (status is {promotion.status})")
    promotion.status = STATUS_ACTIVE
    # A promotion that ended while paused resumes straight into expired
    promotion.status = derive_status(promotion.start_date, promotion.end_date, promotion.status, now or utcnow())
    return promotion
