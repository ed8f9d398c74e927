"""
Base classes for Unfold admin in Stockkeeper.

Provides BaseModelAdmin with a compact textarea for the movement notes
and a signed number formatter for ledger deltas.
"""

from django import forms
from django.contrib.admin.widgets import AdminTextareaWidget
from unfold.admin import ModelAdmin
from unfold.widgets import UnfoldAdminTextareaWidget


TEXTAREA_WIDGETS = (forms.Textarea, AdminTextareaWidget, UnfoldAdminTextareaWidget)


def format_signed(value: int | None) -> str:
    """
    Format a stock delta with an explicit sign.

    Returns:
        "+12", "-3", "0" or "-" for None
    """
    if value is None:
        return "-"
    return f"{value:+d}" if value else "0"


class BaseModelAdmin(ModelAdmin):
    """
    ModelAdmin base with sensible defaults.

    Textareas are halved in height and capped at 42rem wide so they line
    up with the other form fields.
    """

    compressed_fields = True

    def get_form(self, request, obj=None, **kwargs):
        form = super().get_form(request, obj, **kwargs)

        for field in form.base_fields.values():
            widget = field.widget
            if not isinstance(widget, TEXTAREA_WIDGETS):
                continue

            style_parts = [
                s for s in widget.attrs.get("style", "").split(";")
                if s.strip() and "height" not in s.lower() and "width" not in s.lower()
            ]
            style_parts.append("height: 50%; max-height: 50%;")
            style_parts.append("width: 100%; max-width: 42rem;")
            widget.attrs["style"] = "; ".join(s.strip() for s in style_parts)

            try:
                widget.attrs["rows"] = max(1, int(widget.attrs.get("rows", 4)) // 2)
            except (ValueError, TypeError):
                widget.attrs["rows"] = 2

        return form
