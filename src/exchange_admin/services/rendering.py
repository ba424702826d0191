"""HTML rendering for preview views."""

from html import escape

from exchange_admin.domain.preview import PreviewView


def render_preview_html(view: PreviewView) -> str:
    """Render the modal body for a preview view."""
    heading = f"<h2 class=\"preview-title\">{escape(view.title)}</h2>"
    return f"<div class=\"document-preview\">{heading}{_render_body(view)}</div>"


def _render_body(view: PreviewView) -> str:
    if view.kind == "loading":
        return '<div class="preview-loading" role="progressbar"></div>'
    if view.kind == "empty":
        return f'<p class="preview-empty">{escape(view.message or "")}</p>'
    if view.kind == "error":
        return (
            '<div class="preview-error">'
            f"<p>{escape(view.message or '')}</p>"
            f"{_download_button(view)}"
            "</div>"
        )
    media_url = escape(view.media_url or "", quote=True)
    if view.kind == "pdf":
        media = (
            f'<iframe class="preview-pdf" src="{media_url}" '
            'data-preview-error="media"></iframe>'
        )
    else:
        alt = escape(view.title, quote=True)
        media = (
            f'<img class="preview-image" src="{media_url}" alt="{alt}" '
            'data-preview-error="media" />'
        )
    return f"{media}{_download_button(view)}"


def _download_button(view: PreviewView) -> str:
    if not view.download_locator:
        return ""
    locator = escape(view.download_locator, quote=True)
    label = escape(view.download_label or "Download")
    return (
        f'<button type="button" class="preview-download" '
        f'data-download="{locator}">{label}</button>'
    )
