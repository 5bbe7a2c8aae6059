"""Tests for EmailTemplateRenderer (Jinja, autoescaped)."""

import logging

import pytest

from askfreely.domain.enums import EmailTemplate
from askfreely.infrastructure.services import EmailTemplateRenderer


@pytest.fixture
def renderer() -> EmailTemplateRenderer:
    return EmailTemplateRenderer()


def test_all_templates_are_registered(renderer: EmailTemplateRenderer) -> None:
    assert renderer.template_ids == {t.value for t in EmailTemplate}


@pytest.mark.parametrize("template", [t.value for t in EmailTemplate])
def test_each_template_renders_layout(renderer: EmailTemplateRenderer, template: str) -> None:
    html = renderer.render(template, {})
    assert "#FF6B35" in html
    assert "<h1" in html


def test_unknown_template_falls_back_to_announcement(
    renderer: EmailTemplateRenderer, caplog: pytest.LogCaptureFixture
) -> None:
    """Unknown ids render the announcement template (and log a warning)."""
    with caplog.at_level(logging.WARNING):
        fallback = renderer.render("nonexistent_template", {})
    assert fallback == renderer.render("announcement", {})
    assert "nonexistent_template" in caplog.text


def test_missing_template_falls_back(renderer: EmailTemplateRenderer) -> None:
    assert renderer.render(None, None) == renderer.render("announcement", {})


def test_announcement_defaults_and_values(renderer: EmailTemplateRenderer) -> None:
    assert "Announcement" in renderer.render("announcement", {})
    html = renderer.render("announcement", {"title": "Maintenance", "message": "Back soon"})
    assert "Maintenance" in html
    assert "<p>Back soon</p>" in html
    assert 'href="https://askfreely.live"' in html


def test_data_values_are_escaped(renderer: EmailTemplateRenderer) -> None:
    html = renderer.render(
        "new_question",
        {"eventTitle": "<script>alert(1)</script>", "questionPreview": 'a "quote" & more'},
    )
    assert "<script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
    assert "&amp; more" in html


def test_account_disabled_reason_is_optional(renderer: EmailTemplateRenderer) -> None:
    assert "Reason:" not in renderer.render("account_disabled", {})
    assert "Reason:</strong> Spam" in renderer.render("account_disabled", {"reason": "Spam"})


def test_links_use_site_url() -> None:
    renderer = EmailTemplateRenderer(site_url="https://staging.askfreely.live/")
    html = renderer.render("account_enabled", {})
    assert 'href="https://staging.askfreely.live/login"' in html
    assert "Log In Now" in html
