
# Copyright 2026 Justin Cook
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
Exports the rendered resume to downloadable files.

PDF: the preview surface is captured as a raster in headless Chromium and
placed on a single A4 page. DOCX: the rendered tree is written with python-docx.
"""

import base64
import io
import logging
from pathlib import Path
from typing import Tuple

from docx import Document
from docx.enum.text import WD_PARAGRAPH_ALIGNMENT
from docx.shared import Pt
from pypdf import PdfReader, PdfWriter

from resume_studio.models import FontChoice
from resume_studio.renderer import RenderedNode, resolve_font

logger = logging.getLogger(__name__)

# A4 in millimetres
PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0

DOCX_FONTS = {
    FontChoice.SANS: "Calibri",
    FontChoice.SERIF: "Times New Roman",
    FontChoice.MONOSPACE: "Courier New",
}


class ExportError(Exception):
    """Raised when capture or file generation fails."""


def export_file_name(base: str, extension: str = "pdf") -> str:
    """'Alex Doe' -> 'Alex_Doe_Resume.pdf'"""
    safe = (base or "").replace(" ", "_") or "Untitled"
    return f"{safe}_Resume.{extension}"


def fit_to_page(image_width: float, image_height: float,
                page_width: float = PAGE_WIDTH_MM, page_height: float = PAGE_HEIGHT_MM) -> Tuple[float, float]:
    """
    Scales an image to fit inside the page, preserving aspect ratio.
    Width is fitted first; if that makes it too tall, height is fitted instead.
    """
    if image_width <= 0 or image_height <= 0:
        raise ExportError(f"Cannot place an image of size {image_width}x{image_height}")

    width = page_width
    height = image_height * page_width / image_width
    if height > page_height:
        height = page_height
        width = image_width * page_height / image_height
    return width, height


def _image_page_html(png: bytes, width_mm: float, height_mm: float) -> str:
    encoded = base64.b64encode(png).decode("ascii")
    return (
        "<!DOCTYPE html><html><head><style>"
        "@page { size: A4; margin: 0; } body { margin: 0; }"
        "</style></head><body>"
        f'<img src="data:image/png;base64,{encoded}" '
        f'style="display:block;width:{width_mm:.3f}mm;height:{height_mm:.3f}mm">'
        "</body></html>"
    )


async def capture_surface(html: str, surface_id: str) -> Tuple[bytes, bytes]:
    """
    Renders `html` in headless Chromium and captures element `#surface_id`.

    Returns:
        tuple: (PNG screenshot bytes, single-page A4 PDF bytes embedding it)
    """
    try:
        from playwright.async_api import async_playwright
    except ImportError as e:
        raise ExportError(
            "Playwright is not installed. Install it with:\n"
            "  pip install playwright && python -m playwright install chromium"
        ) from e

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=True)
        try:
            page = await browser.new_page(device_scale_factor=2)
            await page.set_content(html, wait_until="load")

            element = await page.query_selector(f"#{surface_id}")
            if element is None:
                raise ExportError(f"Surface '#{surface_id}' not found in the rendered page")

            box = await element.bounding_box()
            if not box:
                raise ExportError(f"Surface '#{surface_id}' is not visible")
            png = await element.screenshot(type="png")

            width_mm, height_mm = fit_to_page(box["width"], box["height"])
            logger.debug(f"Placing {box['width']:.0f}x{box['height']:.0f}px capture at {width_mm:.1f}x{height_mm:.1f}mm")

            await page.set_content(_image_page_html(png, width_mm, height_mm), wait_until="load")
            pdf = await page.pdf(format="A4", print_background=True,
                                 margin={"top": "0", "right": "0", "bottom": "0", "left": "0"})
        finally:
            await browser.close()

    return png, pdf


def _write_pdf(pdf: bytes, path: Path, title: str) -> None:
    """Keeps only the first page and stamps document metadata."""
    reader = PdfReader(io.BytesIO(pdf))
    if not reader.pages:
        raise ExportError("Generated PDF has no pages")
    writer = PdfWriter()
    writer.add_page(reader.pages[0])
    writer.add_metadata({"/Title": title, "/Creator": "Resume Studio"})
    with open(path, "wb") as f:
        writer.write(f)


async def export_to_pdf(html: str, surface_id: str, file_name_base: str, output_dir: Path) -> Path:
    """
    Captures the preview surface and writes '<base>_Resume.pdf' into output_dir.

    Raises:
        ExportError: if capture or file generation fails.
    """
    path = Path(output_dir) / export_file_name(file_name_base, "pdf")

    logger.info(f"Exporting PDF to: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        _, pdf = await capture_surface(html, surface_id)
        _write_pdf(pdf, path, f"{file_name_base} Resume")
    except ExportError:
        raise
    except Exception as e:
        raise ExportError(f"PDF export failed: {e}") from e

    logger.info(f"    > Saved {path}")
    return path


class DocxExporter:
    """
    Writes a rendered resume tree as a Word document.
    The modern layout becomes a two-column table; other layouts flow top to bottom.
    """
    def __init__(self):
        self.document = Document()

    def _setup_styles(self, font: FontChoice):
        style = self.document.styles['Normal']
        style.font.name = DOCX_FONTS[font]
        style.font.size = Pt(11)

    def _write_node(self, container, rendered: RenderedNode, centered: bool = False):
        tag = rendered.tag
        centered = centered or "centered" in rendered.classes

        if tag == "div" and "two-column" in rendered.classes:
            table = self.document.add_table(rows=1, cols=len(rendered.children))
            for cell, column in zip(table.rows[0].cells, rendered.children):
                # Drop the empty paragraph a new cell starts with
                cell._element.remove(cell.paragraphs[0]._element)
                self._write_node(cell, column)
            return

        if tag == "h1":
            p = container.add_paragraph(rendered.text, style='Title')
        elif tag == "h2":
            p = container.add_paragraph(rendered.text.upper(), style='Heading 1')
            p.paragraph_format.keep_with_next = True
        elif tag == "h3":
            p = container.add_paragraph()
            p.add_run(rendered.text).bold = True
            p.paragraph_format.keep_with_next = True
        elif tag == "li":
            p = container.add_paragraph(rendered.text, style='List Bullet')
            p.paragraph_format.widow_control = True
        elif "entry-org" in rendered.classes:
            p = container.add_paragraph()
            p.add_run(rendered.text).italic = True
        elif "contact" in rendered.classes or "tags" in rendered.classes:
            separator = " | " if "contact" in rendered.classes else ", "
            p = container.add_paragraph(separator.join(child.text for child in rendered.children))
        elif tag in ("p", "span") and rendered.text:
            p = container.add_paragraph(rendered.text)
        else:
            for child in rendered.children:
                self._write_node(container, child, centered)
            return

        if centered:
            p.alignment = WD_PARAGRAPH_ALIGNMENT.CENTER

    def generate(self, root: RenderedNode, output_filename: str):
        font_class = next((c for c in root.classes if c.startswith("font-")), "")
        self._setup_styles(resolve_font(font_class[len("font-"):]))
        self._write_node(self.document, root)
        self.document.save(output_filename)


def export_to_docx(root: RenderedNode, file_name_base: str, output_dir: Path) -> Path:
    """Writes '<base>_Resume.docx' into output_dir."""
    path = Path(output_dir) / export_file_name(file_name_base, "docx")

    logger.info(f"Generating DOCX to: {path}")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        DocxExporter().generate(root, str(path))
    except Exception as e:
        raise ExportError(f"DOCX export failed: {e}") from e
    return path
