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

import io
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch, AsyncMock

from docx import Document
from pypdf import PdfReader, PdfWriter

from resume_studio import export, models
from resume_studio.export import ExportError, export_file_name, fit_to_page
from resume_studio.models import SEED_DOCUMENT
from resume_studio.renderer import render


def blank_pdf(pages: int = 1) -> bytes:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=595, height=842)
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


class TestFileName(unittest.TestCase):

    def test_spaces_replaced(self):
        self.assertEqual(export_file_name("Alex Doe"), "Alex_Doe_Resume.pdf")
        self.assertEqual(export_file_name("Alex  Doe"), "Alex__Doe_Resume.pdf")
        self.assertEqual(export_file_name("Mary Jane Watson"), "Mary_Jane_Watson_Resume.pdf")
        self.assertEqual(export_file_name("Alex Doe", "docx"), "Alex_Doe_Resume.docx")
        self.assertEqual(export_file_name(""), "Untitled_Resume.pdf")


class TestFitToPage(unittest.TestCase):

    def test_wide_image_fits_width(self):
        width, height = fit_to_page(1000, 500)
        self.assertAlmostEqual(width, 210.0)
        self.assertAlmostEqual(height, 105.0)

    def test_tall_image_fits_height(self):
        width, height = fit_to_page(500, 1000)
        self.assertAlmostEqual(height, 297.0)
        self.assertAlmostEqual(width, 148.5)

    def test_exact_page_ratio(self):
        width, height = fit_to_page(210, 297)
        self.assertAlmostEqual(width, 210.0)
        self.assertAlmostEqual(height, 297.0)

    def test_zero_size_raises(self):
        with self.assertRaises(ExportError):
            fit_to_page(0, 100)


class TestExportToPdf(unittest.IsolatedAsyncioTestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    async def test_writes_single_page_with_metadata(self):
        capture = AsyncMock(return_value=(b"png", blank_pdf(pages=2)))
        with patch('resume_studio.export.capture_surface', new=capture):
            path = await export.export_to_pdf("<html></html>", "resume-preview", "Alex Doe", self.test_dir)

        self.assertEqual(path, Path(self.test_dir) / "Alex_Doe_Resume.pdf")
        reader = PdfReader(str(path))
        self.assertEqual(len(reader.pages), 1)
        self.assertEqual(reader.metadata.title, "Alex Doe Resume")
        capture.assert_awaited_once_with("<html></html>", "resume-preview")

    async def test_capture_failure_raises_export_error(self):
        capture = AsyncMock(side_effect=RuntimeError("browser crashed"))
        with patch('resume_studio.export.capture_surface', new=capture):
            with self.assertRaises(ExportError):
                await export.export_to_pdf("<html></html>", "resume-preview", "Alex Doe", self.test_dir)
        self.assertFalse(os.path.exists(os.path.join(self.test_dir, "Alex_Doe_Resume.pdf")))

    async def test_creates_output_dir(self):
        target = os.path.join(self.test_dir, "nested", "out")
        with patch('resume_studio.export.capture_surface', new=AsyncMock(return_value=(b"", blank_pdf()))):
            path = await export.export_to_pdf("<html></html>", "resume-preview", "Alex", target)
        self.assertTrue(path.exists())


class TestExportToDocx(unittest.TestCase):

    def setUp(self):
        self.test_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.test_dir)

    def _texts(self, path):
        doc = Document(str(path))
        texts = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for cell in table.rows[0].cells:
                texts.extend(p.text for p in cell.paragraphs if p.text.strip())
        return doc, texts

    def test_classic_flows_sections_in_order(self):
        doc_data = models.set_template(SEED_DOCUMENT, "classic")
        doc_data = models.set_font(doc_data, "serif")
        path = export.export_to_docx(render(doc_data), "Alex Doe", self.test_dir)

        doc, texts = self._texts(path)
        self.assertEqual(doc.tables, [])
        self.assertEqual(texts[0], "Alex Doe")
        headings = [t for t in texts if t in ("SUMMARY", "EXPERIENCE", "EDUCATION", "SKILLS")]
        self.assertEqual(headings, ["SUMMARY", "EXPERIENCE", "EDUCATION", "SKILLS"])
        self.assertIn("Optimized application performance, reducing page load times by 40%.", texts)
        self.assertEqual(doc.styles['Normal'].font.name, "Times New Roman")

    def test_modern_uses_two_column_table(self):
        path = export.export_to_docx(render(SEED_DOCUMENT), "Alex Doe", self.test_dir)
        doc = Document(str(path))
        self.assertEqual(len(doc.tables), 1)
        sidebar, content = doc.tables[0].rows[0].cells
        self.assertEqual(sidebar.paragraphs[0].text, "Alex Doe")
        self.assertIn("SUMMARY", [p.text for p in content.paragraphs])
        skills = [p.text for p in content.paragraphs if p.text.startswith("JavaScript")]
        self.assertEqual(len(skills), 1)

    def test_output_dir_blocked_by_file_raises_export_error(self):
        blocker = os.path.join(self.test_dir, "blocker")
        with open(blocker, "w") as f:
            f.write("")
        with self.assertRaises(ExportError):
            export.export_to_docx(render(SEED_DOCUMENT), "Alex Doe", blocker)


if __name__ == '__main__':
    unittest.main()
