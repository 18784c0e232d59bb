"""
Email delivery via Resend API for notification system.

Renders a notification record about a piece of content into an HTML/text
email and sends it to each subscription target that has email enabled.
"""

import os
from html import escape
from typing import Any, Dict, List, Optional

import resend
from html2text import html2text

from config.notification_settings import EMAIL_NOTIFIER, EnvConfigProvider
from models import (
    ContentEntity,
    NotificationRecord,
    SubscribeOptions,
    SubscriptionTarget,
    TemplateKind,
)
from notifications.mail_filters import absolutize_urls, inline_css, load_mail_css
from notifications.stores import SubscriberDirectory
from notifications.unsubscribe_tokens import build_unsubscribe_url
from shared.utils import format_date


# Initialize Resend with API key from environment
resend.api_key = os.getenv("RESEND_API_KEY")

SUBJECTS = {
    TemplateKind.CREATE_CONTENT: "New {bundle}: {title}",
    TemplateKind.PUBLISH_CONTENT: "Published: {title}",
    TemplateKind.UPDATE_CONTENT: "Updated: {title}",
    TemplateKind.CREATE_COMMENT: "New comment on {title}",
}

INTROS = {
    TemplateKind.CREATE_CONTENT: "A new {bundle} was created.",
    TemplateKind.PUBLISH_CONTENT: "A {bundle} has been published.",
    TemplateKind.UPDATE_CONTENT: "A {bundle} you follow has been updated.",
    TemplateKind.CREATE_COMMENT: "Someone commented on a {bundle}.",
}


def content_path(entity: ContentEntity) -> str:
    return entity.path or f"/node/{entity.id}"


def diff_path(record: NotificationRecord, entity: ContentEntity) -> Optional[str]:
    """Site-relative link to the revision comparison, None for creates."""
    if record.original_revision_id is None or record.new_revision_id is None:
        return None
    if record.original_revision_id == record.new_revision_id:
        return None
    return (
        f"/node/{entity.id}/revisions/view/"
        f"{record.original_revision_id}/{record.new_revision_id}"
    )


def build_subject(record: NotificationRecord, entity: ContentEntity) -> str:
    title = entity.title or "Untitled"
    return SUBJECTS[record.template].format(bundle=entity.bundle, title=title)


def _build_notification_html(
    record: NotificationRecord,
    entity: ContentEntity,
    unsubscribe_url: Optional[str],
) -> str:
    """
    Build the HTML body. Links are site-relative and styling is class-based;
    render_notification() resolves both.
    """
    title = escape(entity.title or "Untitled")
    intro = INTROS[record.template].format(bundle=escape(entity.bundle))

    html = f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="utf-8">
    <title>{title}</title>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>{title}</h1>
            <p class="meta">{intro} Last changed {format_date(entity.changed)}.</p>
        </div>
        <p><a href="{content_path(entity)}" class="read-more">View {escape(entity.bundle)} →</a></p>
"""

    changes = diff_path(record, entity)
    if changes:
        html += f"""        <p><a href="{changes}" class="read-more">See what changed →</a></p>
"""

    html += """        <div class="footer">
            <p>You received this email because you are subscribed to site notifications.</p>
"""
    if unsubscribe_url:
        html += f"""            <p><a href="{unsubscribe_url}">Unsubscribe</a></p>
"""
    html += """        </div>
    </div>
</body>
</html>
"""
    return html


def render_notification(
    record: NotificationRecord,
    entity: ContentEntity,
    base_url: str,
    unsubscribe_url: Optional[str] = None,
) -> Dict[str, str]:
    """
    Render a notification email.

    Returns:
        Dictionary with 'subject', 'html' (absolute links, inlined CSS) and 'text'
    """
    html = _build_notification_html(record, entity, unsubscribe_url)
    html = absolutize_urls(html, base_url)
    html = inline_css(html, load_mail_css())

    return {
        "subject": build_subject(record, entity),
        "html": html,
        "text": html2text(html, baseurl=base_url),
    }


class EmailDeliveryService:
    """
    Delivery service that emails a notification record to subscription targets.

    Args:
        directory: Subscriber directory for recipients and their addresses
        config: Configuration provider (site URL, sender address)
    """

    def __init__(
        self,
        directory: SubscriberDirectory,
        config: Optional[EnvConfigProvider] = None,
    ):
        self._directory = directory
        self._config = config or EnvConfigProvider()

    def send(
        self,
        context_entity: ContentEntity,
        notification: NotificationRecord,
        extra_options: Dict[str, Any],
        subscribe_options: SubscribeOptions,
    ) -> List[str]:
        """
        Email the notification to every target with the email notifier.

        Args:
            context_entity: Content the notification is about
            notification: Saved notification record
            extra_options: Extra Resend parameters (e.g. 'reply_to', 'tags')
            subscribe_options: Explicit targets; empty falls back to the directory

        Returns:
            Resend email ids, one per email sent

        Raises:
            EntityNotFoundError: If a target has no usable profile
            Exception: Transport errors from Resend are propagated
        """
        email_ids = []
        for target in self._resolve_targets(notification, subscribe_options):
            if EMAIL_NOTIFIER not in target.notifiers:
                continue

            profile = self._directory.get_profile(target.uid)
            unsubscribe_url = self._unsubscribe_url(target.uid)
            email = render_notification(
                notification,
                context_entity,
                self._config.site_base_url,
                unsubscribe_url,
            )

            params: Dict[str, Any] = {
                "from": self._config.from_email,
                "to": profile.email,
                "subject": email["subject"],
                "html": email["html"],
                "text": email["text"],
            }
            if unsubscribe_url:
                params["headers"] = {"List-Unsubscribe": f"<{unsubscribe_url}>"}
            params.update(extra_options)

            response = resend.Emails.send(params)
            email_ids.append(response.get("id"))

        return email_ids

    def _resolve_targets(
        self, notification: NotificationRecord, options: SubscribeOptions
    ) -> List[SubscriptionTarget]:
        if options.uids:
            return list(options.uids.values())

        targets = []
        for uid in self._directory.active_user_ids():
            if uid == notification.owner_id and not options.notify_owner:
                continue
            targets.append(SubscriptionTarget(uid=uid))
        return targets

    def _unsubscribe_url(self, uid: int) -> Optional[str]:
        if not os.getenv("UNSUBSCRIBE_SECRET_KEY"):
            return None
        return build_unsubscribe_url(self._config.site_base_url, uid)
