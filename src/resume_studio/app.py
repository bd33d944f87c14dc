
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
Application shell: owns the live ResumeDocument and coordinates the editors,
the renderer and the two asynchronous collaborators.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, List, Optional

from resume_studio import export
from resume_studio.config import Settings, MIN_JOB_DESCRIPTION_LENGTH
from resume_studio.editors import (
    IdentityEditor,
    SummaryEditor,
    ExperienceEditor,
    EducationEditor,
    SkillsEditor,
    DesignEditor,
)
from resume_studio.llm_client import SuggestionClient, SuggestionResult
from resume_studio.models import ResumeDocument, SEED_DOCUMENT, SECTIONS, section_text
from resume_studio.renderer import RenderedNode, render, to_html, SURFACE_ID

logger = logging.getLogger(__name__)


class ResumeApp:
    """
    Holds the single live document. All changes go through `apply`, which
    swaps in the new document returned by a model update operation.

    One suggestion and one export may be in flight at a time; a second
    trigger while one is pending is refused.
    """
    def __init__(self, settings: Settings = None, document: ResumeDocument = None,
                 suggestion_client: SuggestionClient = None):
        self.settings = settings or Settings.from_env()
        self.document = document or SEED_DOCUMENT
        self.suggestion_client = suggestion_client or SuggestionClient(self.settings)

        self.suggestion_in_progress = False
        self.export_in_progress = False
        self.last_suggestion: Optional[SuggestionResult] = None
        self.notifications: List[str] = []
        self.field_errors: Dict[str, str] = {}

        self.identity = IdentityEditor(self)
        self.summary = SummaryEditor(self)
        self.experience = ExperienceEditor(self)
        self.education = EducationEditor(self)
        self.skills = SkillsEditor(self)
        self.design = DesignEditor(self)

    def apply(self, operation: Callable[..., ResumeDocument], *args) -> ResumeDocument:
        self.document = operation(self.document, *args)
        return self.document

    def render(self) -> RenderedNode:
        return render(self.document)

    def preview_html(self) -> str:
        return to_html(self.render(), title=f"{self.document.identity.name} - Resume")

    def notify(self, message: str):
        logger.info(message)
        self.notifications.append(message)

    # --- Suggestions ---

    def validate_job_description(self, job_description: str) -> bool:
        if len(job_description or "") < MIN_JOB_DESCRIPTION_LENGTH:
            self.field_errors["job_description"] = (
                f"Job description must be at least {MIN_JOB_DESCRIPTION_LENGTH} characters."
            )
            return False
        self.field_errors.pop("job_description", None)
        return True

    async def request_suggestion(self, job_description: str, section: str = "summary",
                                 current_content: Optional[str] = None) -> Optional[SuggestionResult]:
        """
        Asks for a rewrite of one section. The result is stored in
        `last_suggestion` for the user to copy; the document is never changed.

        Returns None when the request was not issued (guard failed or busy).
        """
        if self.suggestion_in_progress:
            logger.warning("A suggestion request is already in progress.")
            return None
        if not self.validate_job_description(job_description):
            return None
        if section not in SECTIONS:
            self.field_errors["section"] = f"Unknown section '{section}'."
            return None
        self.field_errors.pop("section", None)

        if current_content is None:
            current_content = section_text(self.document, section)

        self.suggestion_in_progress = True
        self.last_suggestion = None
        try:
            result = await self.suggestion_client.request_suggestion(job_description, section, current_content)
        except Exception as e:
            # The client reports failures as results; this guards against programming errors
            logger.exception("Suggestion client raised unexpectedly")
            result = SuggestionResult(success=False, error=f"Failed to get suggestions. {e}")
        finally:
            self.suggestion_in_progress = False

        self.last_suggestion = result
        if not result.success:
            self.notify(result.error or "An unknown error occurred.")
        return result

    # --- Export ---

    async def export_pdf(self, output_dir: Path = None) -> Optional[Path]:
        """Exports the current preview to PDF. Returns the path, or None on failure or when busy."""
        if self.export_in_progress:
            logger.warning("An export is already in progress.")
            return None

        self.export_in_progress = True
        try:
            return await export.export_to_pdf(
                self.preview_html(),
                SURFACE_ID,
                self.document.identity.name,
                output_dir or self.settings.output_dir,
            )
        except Exception as e:
            logger.error(f"Error exporting PDF: {e}")
            self.notify("Export failed. Please try again.")
            return None
        finally:
            self.export_in_progress = False

    def export_docx(self, output_dir: Path = None) -> Optional[Path]:
        try:
            return export.export_to_docx(
                self.render(),
                self.document.identity.name,
                output_dir or self.settings.output_dir,
            )
        except export.ExportError as e:
            logger.error(f"Error exporting DOCX: {e}")
            self.notify("Export failed. Please try again.")
            return None
