"""Tests for email body rendering."""

from __future__ import annotations

from authmail.schemas.email import RenderedTemplate, TemplateArgs, TokenPurpose
from authmail.services.templates import EmailTemplateRenderer

ARGS = TemplateArgs(email="user@email.com", link="http://mysite.com/confirm-email?token=abc123")


def test_default_confirm_template_embeds_email_and_link() -> None:
    """Test the default confirmation template."""
    rendered = EmailTemplateRenderer().render(TokenPurpose.CONFIRM_EMAIL, ARGS)

    assert rendered.text == (
        "Confirm your email user@email.com by clicking on the following link: "
        "http://mysite.com/confirm-email?token=abc123"
    )
    assert '<a href="http://mysite.com/confirm-email?token=abc123">Confirm email</a>' in rendered.html


def test_default_reset_template_embeds_email_and_link() -> None:
    """Test the default password reset template."""
    rendered = EmailTemplateRenderer().render(TokenPurpose.RESET_PASSWORD, ARGS)

    assert rendered.text.startswith("Reset your password for email user@email.com")
    assert rendered.text.endswith(ARGS.link)
    assert ">Reset password</a>" in rendered.html


def test_custom_template_output_is_used() -> None:
    """Test rendering with a custom template."""
    def confirm_template(args: TemplateArgs) -> RenderedTemplate:
        return RenderedTemplate(
            text=f"This is the confirm email template for email: {args.email}, link: {args.link}",
            html=f'This is the confirm email template for email: {args.email}, <a href="{args.link}">link</a>',
        )

    renderer = EmailTemplateRenderer({TokenPurpose.CONFIRM_EMAIL: confirm_template})
    rendered = renderer.render(TokenPurpose.CONFIRM_EMAIL, ARGS)

    assert rendered.text == f"This is the confirm email template for email: user@email.com, link: {ARGS.link}"
    assert rendered.html.endswith(f'<a href="{ARGS.link}">link</a>')


def test_custom_template_only_applies_to_its_purpose() -> None:
    """Test that a custom template does not leak into another purpose."""
    renderer = EmailTemplateRenderer(
        {TokenPurpose.CONFIRM_EMAIL: lambda args: RenderedTemplate(text="custom", html="<b>custom</b>")}
    )

    rendered = renderer.render(TokenPurpose.RESET_PASSWORD, ARGS)

    assert rendered.text.startswith("Reset your password")


def test_empty_custom_field_falls_back_to_default() -> None:
    """Test that an empty custom field falls back to the default."""
    renderer = EmailTemplateRenderer(
        {TokenPurpose.RESET_PASSWORD: lambda args: {"text": f"Reset here: {args.link}", "html": ""}}
    )

    rendered = renderer.render(TokenPurpose.RESET_PASSWORD, ARGS)

    assert rendered.text == f"Reset here: {ARGS.link}"
    assert ">Reset password</a>" in rendered.html


def test_custom_template_returning_none_uses_defaults() -> None:
    """Test a custom template that renders nothing falls back to the default bodies."""
    renderer = EmailTemplateRenderer({TokenPurpose.CONFIRM_EMAIL: lambda args: None})

    rendered = renderer.render(TokenPurpose.CONFIRM_EMAIL, ARGS)

    assert rendered == EmailTemplateRenderer().render(TokenPurpose.CONFIRM_EMAIL, ARGS)
