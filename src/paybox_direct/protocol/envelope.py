"""Request envelope: session fields merged with operation fields."""

from datetime import datetime, timezone
from typing import Callable, Mapping

from paybox_direct.config import PayboxSettings
from paybox_direct.protocol.fields import FieldSet, pad

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def question_number(moment: datetime) -> str:
    """NUMQUESTION: UTC time of day with milliseconds, e.g. 13:32:51.000 -> 0133251000."""
    millis = moment.microsecond // 1000
    return pad(f"{moment:%H%M%S}{millis:03d}", 10)


def build_envelope(
    settings: PayboxSettings,
    operation_fields: Mapping[str, str],
    clock: Clock = utc_now,
) -> FieldSet:
    """
    Build the field set to transmit for one request.

    Session fields come first; operation fields are merged on top of them.

    Args:
        settings: Session settings (never modified)
        operation_fields: Fields produced by the field encoder
        clock: Returns the current time; converted to UTC

    Returns:
        The complete field set
    """
    moment = clock().astimezone(timezone.utc)

    fields: FieldSet = {
        "VERSION": pad(settings.version, 5),
        "SITE": pad(settings.site, 7),
        "RANG": pad(settings.rank, 2),
        "CLE": settings.password,
        "DATEQ": moment.strftime("%d%m%Y%H%M%S"),
        "NUMQUESTION": question_number(moment),
    }
    if settings.activity is not None:
        fields["ACTIVITE"] = pad(settings.activity, 3)
    if settings.bank is not None:
        fields["ACQUEREUR"] = settings.bank

    fields.update(operation_fields)
    return fields
