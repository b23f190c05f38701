import logging

import spectrum_accounts.domain.services as domain_services
from spectrum_accounts.domain.errors import CodeNotFound, InvalidCode, StorageFailure
from spectrum_accounts.domain.ports.verification_cache import VerificationCachePort

logger = logging.getLogger(__name__)


async def verify_code(
    cache: VerificationCachePort,
    user_id: int,
    code: str,
) -> None:
    # Expiry is whatever the cache says it is: an expired entry reads as absent.
    stored = await cache.get(user_id)
    if stored is None:
        raise CodeNotFound()
    if not domain_services.secure_compare(stored, code):
        raise InvalidCode()

    try:
        await cache.delete(user_id)
    except StorageFailure:
        logger.warning(
            "could not delete redeemed verification code",
            extra={"user_id": user_id},
            exc_info=True,
        )
