"""
Export Routes - v1.0
Article download as HTML / Markdown / TXT / DOCX.

Body: {"html": "...", "filename": "optional-name"}
"""

import io
import logging
import re

from flask import Blueprint, Response, jsonify, request

# Document generation
from docx import Document
from docx.shared import Pt

from html_to_markdown import html_to_markdown

logger = logging.getLogger(__name__)

export_routes = Blueprint("export_routes", __name__)

DOCX_MIMETYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

_BLOCK_RE = re.compile(
    r"<(h[1-4]|p|li)(?:\s[^>]*)?>(.*?)</\1>",
    re.IGNORECASE | re.DOTALL,
)
_FIGCAPTION_RE = re.compile(r"<figcaption[^>]*>.*?</figcaption>", re.IGNORECASE | re.DOTALL)


def html_to_text(html: str) -> str:
    """Convert article HTML to plain text."""
    text = re.sub(r'<h1[^>]*>(.*?)</h1>', r'\n\n\1\n\n', html, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'<h2[^>]*>(.*?)</h2>', r'\n\n## \1\n\n', text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'<h3[^>]*>(.*?)</h3>', r'\n\n### \1\n\n', text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'<p[^>]*>(.*?)</p>', r'\1\n\n', text, flags=re.IGNORECASE | re.DOTALL)
    text = re.sub(r'<br\s*/?>', '\n', text, flags=re.IGNORECASE)
    text = re.sub(r'<li[^>]*>(.*?)</li>', r'• \1\n', text, flags=re.IGNORECASE | re.DOTALL)
    text = _FIGCAPTION_RE.sub('', text)
    text = re.sub(r'<[^>]+>', '', text)
    text = re.sub(r'\n{3,}', '\n\n', text)
    return text.strip()


def _inline_text(fragment: str) -> str:
    return re.sub(r"\s+", " ", re.sub(r"<[^>]+>", "", fragment)).strip()


def parse_article_structure(html: str) -> list:
    """Headings, paragraphs and list items in document order."""
    elements = []
    for match in _BLOCK_RE.finditer(html):
        tag = match.group(1).lower()
        content = _inline_text(match.group(2))
        if not content:
            continue
        if tag.startswith("h"):
            elements.append({"type": "heading", "level": int(tag[1]), "content": content})
        elif tag == "li":
            elements.append({"type": "bullet", "content": content})
        else:
            elements.append({"type": "paragraph", "content": content})
    return elements


def build_docx(html: str) -> bytes:
    document = Document()
    for el in parse_article_structure(html):
        if el["type"] == "heading":
            document.add_heading(el["content"], level=el["level"])
        elif el["type"] == "bullet":
            document.add_paragraph(el["content"], style="List Bullet")
        else:
            p = document.add_paragraph(el["content"])
            p.style.font.size = Pt(11)

    buffer = io.BytesIO()
    document.save(buffer)
    buffer.seek(0)
    return buffer.getvalue()


def wrap_html_document(html: str, title: str) -> str:
    return f"""<!DOCTYPE html>
<html>
<head>
    <meta charset="UTF-8">
    <title>{title}</title>
    <style>
        body {{ font-family: Arial, sans-serif; max-width: 800px; margin: 0 auto; padding: 20px; line-height: 1.6; }}
        h1 {{ color: #333; }}
        h2 {{ color: #444; margin-top: 30px; }}
        h3 {{ color: #555; }}
        p {{ margin: 15px 0; }}
        figure.article-image img {{ max-width: 100%; height: auto; }}
    </style>
</head>
<body>
{html}
</body>
</html>"""


def safe_filename(name: str) -> str:
    # Content-Disposition must stay ASCII
    cleaned = re.sub(r'[^\w\s-]', '', name or "", flags=re.ASCII).strip()
    cleaned = re.sub(r'\s+', '-', cleaned)[:50]
    return cleaned or "article"


def _title_of(html: str) -> str:
    match = re.search(r"<h1[^>]*>(.*?)</h1>", html, re.IGNORECASE | re.DOTALL)
    return _inline_text(match.group(1)) if match else "Article"


EXPORT_FORMATS = {
    "html": ("html", "text/html; charset=utf-8", lambda html: wrap_html_document(html, _title_of(html))),
    "md": ("md", "text/markdown; charset=utf-8", html_to_markdown),
    "txt": ("txt", "text/plain; charset=utf-8", html_to_text),
    "docx": ("docx", DOCX_MIMETYPE, build_docx),
}


# ================================================================
# EXPORT
# ================================================================
@export_routes.post("/api/export/<fmt>")
def export_article(fmt):
    """Render the posted article HTML as a downloadable file."""
    if fmt not in EXPORT_FORMATS:
        return jsonify({"error": f"Unknown export format '{fmt}'", "formats": sorted(EXPORT_FORMATS)}), 400

    data = request.get_json(silent=True) or {}
    html = data.get("html") if isinstance(data, dict) else None
    if not html or not isinstance(html, str):
        return jsonify({"error": "No content to export"}), 400

    extension, mimetype, render = EXPORT_FORMATS[fmt]
    filename = f"{safe_filename(data.get('filename') or _title_of(html))}.{extension}"
    body = render(html)

    logger.info(f"[EXPORT] {fmt} export: {filename}")
    return Response(
        body,
        mimetype=mimetype,
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )
