"""Email templates: template id + data bag -> HTML document (Jinja).

All templates extend one base layout (orange header, white card, grey
footer). Autoescaping is on, so every value taken from ``data`` is
HTML-escaped; queue records may carry audience-written text.
"""

from __future__ import annotations

from typing import Any

from jinja2 import DictLoader, Environment

from askfreely.domain.enums import EmailTemplate
from askfreely.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

FALLBACK_TEMPLATE = EmailTemplate.ANNOUNCEMENT.value

_BASE = """\
<div style="font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, 'Helvetica Neue', Arial, sans-serif; background-color: #f5f5f5; padding: 40px 20px;">
  <div style="max-width: 600px; margin: 0 auto; background: white; border-radius: 12px; box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1); overflow: hidden;">
    <div style="background: linear-gradient(135deg, #FF6B35 0%, #e55a2b 100%); padding: 30px; text-align: center;">
      <h1 style="color: white; margin: 0; font-size: 24px;">{% block heading %}{% endblock %}</h1>
    </div>
    <div style="padding: 30px; color: #333; line-height: 1.6;">
{% block content %}{% endblock %}
    </div>
    <div style="background: #f9fafb; padding: 20px 30px; text-align: center; color: #666; font-size: 12px;">
{% block footer %}      <p>Ask Freely - Making every voice heard</p>
{% endblock %}
    </div>
  </div>
</div>
"""

_MACROS = """\
{% macro button(href, label) -%}
      <p style="text-align: center; margin-top: 30px;">
        <a href="{{ href }}" style="display: inline-block; background: #FF6B35; color: white; padding: 12px 30px; border-radius: 8px; text-decoration: none; font-weight: 600;">{{ label }}</a>
      </p>
{%- endmacro %}"""

_TEMPLATES: dict[str, str] = {
    "_base.html": _BASE,
    "_macros.html": _MACROS,
    EmailTemplate.WELCOME.value: """\
{% extends "_base.html" %}
{% block heading %}Welcome to Ask Freely{% endblock %}
{% block content %}{% from "_macros.html" import button %}
      <p>Hi {{ data.name or "there" }}!</p>
      <p>Thanks for joining Ask Freely. Create an event, share the link with your audience and collect their questions in one place.</p>
{{ button(site_url ~ "/organizer/dashboard", "Open Dashboard") }}
{% endblock %}
""",
    EmailTemplate.ANNOUNCEMENT.value: """\
{% extends "_base.html" %}
{% block heading %}📢 {{ data.title or "Announcement" }}{% endblock %}
{% block content %}
      <p>{{ data.message or "" }}</p>
{% endblock %}
{% block footer %}
      <p>This message was sent by Ask Freely</p>
      <p><a href="{{ site_url }}" style="color: #FF6B35;">Visit Ask Freely</a></p>
{% endblock %}
""",
    EmailTemplate.ACCOUNT_WARNING.value: """\
{% extends "_base.html" %}
{% block heading %}⚠️ Account Warning{% endblock %}
{% block content %}
      <p>We are contacting you about activity on your Ask Freely account.</p>
      {% if data.reason %}<p><strong>Reason:</strong> {{ data.reason }}</p>{% endif %}
      <p>Please review our community guidelines. Further violations may lead to your account being disabled.</p>
{% endblock %}
{% block footer %}
      <p>Ask Freely Team</p>
{% endblock %}
""",
    EmailTemplate.ACCOUNT_DISABLED.value: """\
{% extends "_base.html" %}
{% block heading %}Account Notice{% endblock %}
{% block content %}
      <p>Your Ask Freely account has been disabled.</p>
      {% if data.reason %}<p><strong>Reason:</strong> {{ data.reason }}</p>{% endif %}
      <p>If you believe this is a mistake, please contact our support team.</p>
{% endblock %}
{% block footer %}
      <p>Ask Freely Team</p>
{% endblock %}
""",
    EmailTemplate.ACCOUNT_ENABLED.value: """\
{% extends "_base.html" %}
{% block heading %}Account Re-enabled{% endblock %}
{% block content %}{% from "_macros.html" import button %}
      <p>Good news! Your Ask Freely account has been re-enabled.</p>
      <p>You can now log in and continue using all features.</p>
{{ button(site_url ~ "/login", "Log In Now") }}
{% endblock %}
{% block footer %}
      <p>Ask Freely Team</p>
{% endblock %}
""",
    EmailTemplate.NEW_QUESTION.value: """\
{% extends "_base.html" %}
{% block heading %}❓ New Question{% endblock %}
{% block content %}{% from "_macros.html" import button %}
      <p>You have a new question on <strong>{{ data.eventTitle or "your event" }}</strong></p>
      <div style="background: #f5f5f5; padding: 15px; border-radius: 8px; margin: 20px 0; border-left: 4px solid #FF6B35;">
        <p style="margin: 0; font-style: italic;">"{{ data.questionPreview or "" }}"</p>
      </div>
{{ button(site_url ~ "/organizer/dashboard", "View Questions") }}
{% endblock %}
""",
    EmailTemplate.EVENT_REMINDER.value: """\
{% extends "_base.html" %}
{% block heading %}⏰ Event Reminder{% endblock %}
{% block content %}{% from "_macros.html" import button %}
      <p><strong>{{ data.eventTitle or "Your event" }}</strong> is coming up{% if data.eventDate %} on {{ data.eventDate }}{% endif %}.</p>
      <p>Make sure questions are open and share the event link with your audience.</p>
{{ button(site_url ~ "/organizer/dashboard", "Go to Dashboard") }}
{% endblock %}
""",
    EmailTemplate.VERIFICATION_REMINDER.value: """\
{% extends "_base.html" %}
{% block heading %}📧 Verify Your Email{% endblock %}
{% block content %}{% from "_macros.html" import button %}
      <p>Hi there!</p>
      <p>We noticed you haven't verified your email address yet. To access your Ask Freely dashboard and start creating events, please verify your email.</p>
      <p><strong>How to verify:</strong></p>
      <ol style="padding-left: 20px;">
        <li>Check your inbox for the original verification email from Ask Freely</li>
        <li>Click the verification link in that email</li>
        <li>If you can't find it, try logging in and we'll send a new verification email</li>
      </ol>
{{ button(site_url ~ "/login", "Go to Login") }}
      <p style="margin-top: 20px; color: #666; font-size: 14px;">Once logged in, you can request a new verification email if needed.</p>
{% endblock %}
{% block footer %}
      <p>Ask Freely - Making every voice heard</p>
      <p style="color: #999; font-size: 11px;">If you didn't create an account, you can safely ignore this email.</p>
{% endblock %}
""",
}


class EmailTemplateRenderer:
    """Renders queue records into HTML. Unknown template ids render the announcement."""

    def __init__(
        self,
        site_url: str = "https://askfreely.live",
        templates: dict[str, str] | None = None,
    ) -> None:
        """Initialize with the public site URL used in links and optional template overrides."""
        self._site_url = site_url.rstrip("/")
        self._env = Environment(
            loader=DictLoader(templates or _TEMPLATES),
            autoescape=True,
            keep_trailing_newline=True,
        )
        self.template_ids = frozenset(
            name for name in self._env.list_templates() if not name.startswith("_")
        )

    def render(self, template_id: str | None, data: dict[str, Any] | None) -> str:
        """Render HTML for template_id. Never fails on an unknown id."""
        name = template_id if template_id in self.template_ids else FALLBACK_TEMPLATE
        if name != template_id:
            logger.warning(
                "Unknown email template %r, using %s", template_id, FALLBACK_TEMPLATE
            )
        return self._env.get_template(name).render(
            data=data or {},
            site_url=self._site_url,
        )
