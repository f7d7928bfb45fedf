"""Notification service (Mailgun/SendGrid email, new-inquiry notice)."""
import html
import logging

import httpx

from app.config import Settings, get_settings
from app.models.inquiry import Inquiry

log = logging.getLogger("uvicorn.error")

MAILGUN_US_BASE = "https://api.mailgun.net"
MAILGUN_EU_BASE = "https://api.eu.mailgun.net"


def send_email(to_email: str, subject: str, html_content: str, text_content: str | None = None) -> bool:
    """Send email via Mailgun (preferred) or SendGrid. Returns True only if the provider accepted it."""
    settings = get_settings()
    if settings.mailgun_api_key and settings.mailgun_domain:
        log.info("[Email] Calling Mailgun API: to=%s subject=%s domain=%s", to_email, subject, settings.mailgun_domain)
        return _send_email_mailgun(to_email, subject, html_content, text_content=text_content, settings=settings)
    if settings.sendgrid_api_key:
        return _send_email_sendgrid(to_email, subject, html_content, text_content=text_content, settings=settings)
    log.warning(
        "[Email] NOT SENT: to=%s subject=%s. Set MAILGUN_API_KEY and MAILGUN_DOMAIN (or SENDGRID_API_KEY) in .env and restart.",
        to_email,
        subject,
    )
    return False


def _send_email_mailgun(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str | None = None,
    settings: Settings | None = None,
) -> bool:
    if settings is None:
        settings = get_settings()
    base = (settings.mailgun_base_url or MAILGUN_US_BASE).strip().rstrip("/")
    domain = (settings.mailgun_domain or "").strip().lower()
    from_addr = (settings.mailgun_from_email or "").strip()
    from_domain = from_addr.split("@")[-1].lower() if "@" in from_addr else ""
    if domain and from_domain != domain:
        from_addr = f"noreply@{domain}"
        log.info("[Mailgun] Using from=%s (must match domain %s for delivery)", from_addr, domain)
    data = {
        "from": f"{settings.mailgun_from_name} <{from_addr}>",
        "to": to_email,
        "subject": subject,
        "text": text_content or "",
        "html": html_content or "",
    }
    try:
        with httpx.Client(timeout=10.0) as client:
            r = client.post(f"{base}/v3/{domain}/messages", auth=("api", settings.mailgun_api_key), data=data)
            if 200 <= r.status_code < 300:
                log.info("[Mailgun] API success: to=%s status=%s", to_email, r.status_code)
                return True
            if r.status_code == 401 and base == MAILGUN_US_BASE:
                log.info("[Mailgun] 401 with US endpoint. Retrying with EU endpoint...")
                r2 = client.post(f"{MAILGUN_EU_BASE}/v3/{domain}/messages", auth=("api", settings.mailgun_api_key), data=data)
                if 200 <= r2.status_code < 300:
                    log.info("[Mailgun] API success (EU): to=%s", to_email)
                    return True
                log.error("[Mailgun] EU request failed: status=%s body=%s", r2.status_code, r2.text[:500])
                return False
            log.error("[Mailgun] API failed: status=%s to=%s body=%s", r.status_code, to_email, r.text[:500])
            return False
    except httpx.HTTPError as e:
        log.error("[Mailgun] Exception: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False


def _send_email_sendgrid(
    to_email: str,
    subject: str,
    html_content: str,
    text_content: str | None = None,
    settings: Settings | None = None,
) -> bool:
    if settings is None:
        settings = get_settings()
    from sendgrid import SendGridAPIClient
    from sendgrid.helpers.mail import Mail

    message = Mail(
        from_email=(settings.sendgrid_from_email, settings.sendgrid_from_name),
        to_emails=to_email,
        subject=subject,
        html_content=html_content,
        plain_text_content=text_content or "",
    )
    try:
        response = SendGridAPIClient(settings.sendgrid_api_key).send(message)
    except Exception as e:  # sendgrid raises python_http_client errors for non-2xx responses
        log.error("[SendGrid] Exception: to=%s error=%s: %s", to_email, type(e).__name__, e)
        return False
    return 200 <= response.status_code < 300


def send_inquiry_reply(to_email: str, name: str, body: str) -> bool:
    """Email an operator's reply to a visitor inquiry."""
    settings = get_settings()
    subject = f"Re: Your inquiry to {settings.mailgun_from_name}"
    paragraphs = "".join(f"<p>{html.escape(p)}</p>" for p in body.strip().split("\n") if p.strip())
    html_content = f"""
    <p>Dear {html.escape(name)},</p>
    {paragraphs}
    <p>— {html.escape(settings.mailgun_from_name)}</p>
    """
    text_content = f"Dear {name},\n\n{body.strip()}\n\n— {settings.mailgun_from_name}"
    return send_email(to_email, subject, html_content, text_content=text_content)


def notify_new_inquiry(inquiry: Inquiry) -> None:
    """Announce a new inquiry in the server log. Not delivered over any transport."""
    log.info(
        "[Inquiry] NEW INQUIRY RECEIVED id=%s name=%s email=%s phone=%s tour_date=%s message=%s",
        inquiry.id,
        inquiry.name,
        inquiry.email,
        inquiry.phone or "-",
        inquiry.tour_date or "-",
        (inquiry.message or "-")[:500],
    )
