import logging

import spectrum_accounts.domain.services as domain_services
from spectrum_accounts.domain.entities import OneTimeCode, VerificationOutcome
from spectrum_accounts.domain.errors import (
    NotificationFailure,
    UserNotFound,
    ValidationFailure,
)
from spectrum_accounts.domain.ports.notifier import NotifierPort
from spectrum_accounts.domain.ports.unit_of_work import UnitOfWorkPort
from spectrum_accounts.domain.ports.verification_cache import VerificationCachePort

logger = logging.getLogger(__name__)


async def issue_code(
    uow: UnitOfWorkPort,
    cache: VerificationCachePort,
    notifier: NotifierPort,
    email: str,
    code_ttl_seconds: int = 600,
) -> VerificationOutcome:
    """
    Generate a one-time code for the account behind `email`, record it and
    mail it.

    The cache write must succeed before anything is sent: a StorageFailure
    propagates and no mail goes out. A NotificationFailure does not abort the
    call; the code stays valid and the error is reported in the outcome.
    """
    normalized_email = email.strip().lower()
    if not normalized_email:
        raise ValidationFailure("no input entered")

    async with uow as transaction:
        user = await transaction.db_users.get_by_email(normalized_email)
    if user is None:
        raise UserNotFound(normalized_email)

    issued = OneTimeCode(user.id, domain_services.generate_code(), code_ttl_seconds)
    await cache.put(issued.subject_id, issued.value, issued.ttl_seconds)

    send_error: str | None = None
    try:
        await notifier.send(to=user.email, code=issued.value)
    except NotificationFailure as e:
        send_error = str(e) or "notification failed"

    outcome = VerificationOutcome(
        user_id=user.id,
        generated_code=issued.value,
        expires_in_seconds=code_ttl_seconds,
        email=user.email,
        send_error=send_error,
    )
    logger.info(
        "verification code issued",
        extra={"user_id": user.id, "delivered": outcome.delivered},
    )
    return outcome
