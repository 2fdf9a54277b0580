"""
Document rendering module.

Fills a ``.docx`` template with the protocol fields using docxtpl. Template
tags are Jinja2 (``{{ name }}``, ``{%tr for pr in prs %}`` to repeat a table
row once per pull request). Newlines in field values become Word line breaks.
"""

import io
import logging
import re
import zipfile
from typing import Any, Dict

import jinja2
from docx.opc.exceptions import PackageNotFoundError
from docxtpl import DocxTemplate
from markupsafe import Markup, escape

from .exceptions import TemplateError

logger = logging.getLogger("work-protocol.renderer")

LINE_BREAK_XML = Markup('</w:t><w:br/><w:t xml:space="preserve">')
NEWLINE_RE = re.compile(r"\r\n|\r|\n")


def docx_text(value: Any) -> Any:
    """Jinja2 ``finalize`` hook: escape multi-line strings and join the lines with ``<w:br/>``."""
    if not isinstance(value, str) or isinstance(value, Markup) or not NEWLINE_RE.search(value):
        return value
    return LINE_BREAK_XML.join(escape(line) for line in NEWLINE_RE.split(value))


class DocxTemplateRenderer:
    """
    Render protocol fields into a docx template.

    Args:
        template: Raw bytes of the ``.docx`` template

    Raises:
        TemplateError: If the bytes are not a docx archive
    """

    def __init__(self, template: bytes) -> None:
        if not zipfile.is_zipfile(io.BytesIO(template)):
            raise TemplateError("Template is not a docx (zip) file")
        with zipfile.ZipFile(io.BytesIO(template)) as zf:
            if "word/document.xml" not in zf.namelist():
                raise TemplateError("Template has no word/document.xml part")
        self._template = template
        self._env = jinja2.Environment(autoescape=True, finalize=docx_text)

    def render(self, context: Dict[str, Any]) -> bytes:
        """
        Render the template.

        Args:
            context: Flat field map, e.g. from ``DocumentPayload.to_template_context``

        Returns:
            Bytes of the rendered ``.docx`` file

        Raises:
            TemplateError: If the template cannot be opened or fails to render
        """
        try:
            doc = DocxTemplate(io.BytesIO(self._template))
            doc.render(context, jinja_env=self._env, autoescape=True)
            out = io.BytesIO()
            doc.save(out)
        except (jinja2.TemplateError, PackageNotFoundError, KeyError, ValueError) as e:
            raise TemplateError(f"Failed to render template: {e}") from e

        logger.debug("Rendered docx with %d pull requests", len(context.get("prs", [])))
        return out.getvalue()
