"""Infrastructure services (template rendering)."""

from askfreely.infrastructure.services.email_template_renderer import EmailTemplateRenderer

__all__ = ["EmailTemplateRenderer"]
