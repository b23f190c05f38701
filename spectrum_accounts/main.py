import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from spectrum_accounts.domain.ports.notifier import MailTransportPort
from spectrum_accounts.infrastructure.db.pool import close_pool, create_pool
from spectrum_accounts.infrastructure.email.http_smtp_adapter import HttpMailTransport
from spectrum_accounts.infrastructure.email.notifier import TemplateNotifier
from spectrum_accounts.infrastructure.email.smtp_transport import SmtpMailTransport
from spectrum_accounts.infrastructure.redis_cache.client import close_redis, create_redis
from spectrum_accounts.logging import setup_logging
from spectrum_accounts.presentation.api import api
from spectrum_accounts.presentation.errors import setup_exception_handlers
from spectrum_accounts.settings import Settings, get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def build_mail_transport(settings: Settings) -> MailTransportPort:
    if settings.mail_transport == "http":
        return HttpMailTransport(
            settings.mail_relay_url, timeout=settings.mail_timeout_seconds
        )
    return SmtpMailTransport(
        settings.smtp_host,
        settings.smtp_port,
        username=settings.smtp_username,
        password=settings.smtp_password,
        sender=settings.mail_sender or None,
        timeout=settings.mail_timeout_seconds,
    )


def build_notifier(settings: Settings) -> TemplateNotifier:
    return TemplateNotifier(
        build_mail_transport(settings),
        template_path=settings.verification_template_path,
        subject=settings.mail_subject,
        timeout=settings.mail_deadline_seconds,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    cfg: Settings = app.state.settings

    # startup
    pool = create_pool(cfg)
    await pool.open()
    app.state.pool = pool

    # the verification cache handle; routes reach it through app.state
    app.state.redis = create_redis(cfg)

    notifier = build_notifier(cfg)
    app.state.notifier = notifier
    logger.info(
        "app started",
        extra={"env": cfg.app_env, "mail_transport": cfg.mail_transport},
    )

    try:
        yield
    finally:
        # shutdown
        await notifier.aclose()
        await close_redis(app.state.redis)
        await close_pool(pool)
        logger.info("app stopped")


def create_app(app_settings: Settings | None = None) -> FastAPI:
    cfg = app_settings or settings
    setup_logging(cfg.log_level)
    app = FastAPI(title="Spectrum Shelf Accounts API", version="0.1.0", lifespan=lifespan)
    app.state.settings = cfg
    setup_exception_handlers(app)
    app.include_router(api)
    return app


app = create_app()
