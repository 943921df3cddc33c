"""Email body templates for verification links."""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from authmail.schemas.email import RenderedTemplate, TemplateArgs, TokenPurpose
from authmail.services.options import TemplateFunction
from authmail.services.resolvers import first_match


def default_confirm_email_template(args: TemplateArgs) -> RenderedTemplate:
    return RenderedTemplate(
        text=f"Confirm your email {args.email} by clicking on the following link: {args.link}",
        html=(
            f"<p>Confirm your email {args.email} by clicking on the following link: "
            f"<a href=\"{args.link}\">Confirm email</a></p>"
        ),
    )


def default_reset_password_template(args: TemplateArgs) -> RenderedTemplate:
    return RenderedTemplate(
        text=f"Reset your password for email {args.email} by clicking on the following link: {args.link}",
        html=(
            f"<p>Reset your password for email {args.email} by clicking on the following link: "
            f"<a href=\"{args.link}\">Reset password</a></p>"
        ),
    )


DEFAULT_TEMPLATES: Mapping[TokenPurpose, Callable[[TemplateArgs], RenderedTemplate]] = {
    TokenPurpose.CONFIRM_EMAIL: default_confirm_email_template,
    TokenPurpose.RESET_PASSWORD: default_reset_password_template,
}


class EmailTemplateRenderer:
    """Render bodies with caller templates, falling back to the defaults per field."""

    def __init__(self, templates: Mapping[TokenPurpose, TemplateFunction] | None = None) -> None:
        self._templates = dict(templates or {})

    def render(self, purpose: TokenPurpose, args: TemplateArgs) -> RenderedTemplate:
        default = DEFAULT_TEMPLATES[purpose](args)
        custom = self._render_custom(purpose, args)

        return RenderedTemplate(
            text=first_match([lambda: custom and custom.text], default.text),
            html=first_match([lambda: custom and custom.html], default.html),
        )

    def _render_custom(self, purpose: TokenPurpose, args: TemplateArgs) -> Optional[RenderedTemplate]:
        template = self._templates.get(purpose)
        if template is None:
            return None

        rendered = template(args)
        if rendered is None:
            return None
        if isinstance(rendered, RenderedTemplate):
            return rendered
        return RenderedTemplate.model_validate(rendered)


__all__ = [
    "DEFAULT_TEMPLATES",
    "EmailTemplateRenderer",
    "default_confirm_email_template",
    "default_reset_password_template",
]
