
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
Section editors. Each one reads its slice of the live document and turns
user input into calls to the model's update operations via `app.apply`.
"""

import logging
from dataclasses import asdict
from typing import Dict, List

from resume_studio import models
from resume_studio.models import TemplateChoice, FontChoice

logger = logging.getLogger(__name__)


class SectionEditor:
    section = ""

    def __init__(self, app):
        self.app = app

    @property
    def document(self) -> models.ResumeDocument:
        return self.app.document


class IdentityEditor(SectionEditor):
    section = "identity"

    def values(self) -> Dict[str, str]:
        return {**asdict(self.document.identity), **asdict(self.document.contact)}

    def on_identity_change(self, key: str, value: str):
        self.app.apply(models.set_identity_field, key, value)

    def on_contact_change(self, key: str, value: str):
        self.app.apply(models.set_contact_field, key, value)


class SummaryEditor(SectionEditor):
    section = "summary"

    def value(self) -> str:
        return self.document.summary

    def on_change(self, value: str):
        self.app.apply(models.set_summary, value)


class SkillsEditor(SectionEditor):
    section = "skills"

    def value(self) -> str:
        return self.document.skills

    def on_change(self, raw_csv: str):
        self.app.apply(models.set_skills, raw_csv)


class _EntryListEditor(SectionEditor):
    """Shared list behaviour for experience and education."""
    fields = ()
    _add = None
    _update = None
    _remove = None

    def entries(self) -> List:
        return list(getattr(self.document, self.section))

    def ids(self) -> List[str]:
        return [entry.id for entry in self.entries()]

    def add(self) -> str:
        """Appends an empty entry and returns its id."""
        self.app.apply(type(self)._add)
        new_id = self.entries()[-1].id
        logger.debug(f"Added {self.section} entry {new_id}")
        return new_id

    def on_change(self, entry_id: str, field_name: str, value: str):
        self.app.apply(type(self)._update, entry_id, field_name, value)

    def remove(self, entry_id: str):
        self.app.apply(type(self)._remove, entry_id)


class ExperienceEditor(_EntryListEditor):
    section = "experience"
    fields = models.EXPERIENCE_FIELDS
    _add = models.add_experience_entry
    _update = models.update_experience_entry
    _remove = models.remove_experience_entry


class EducationEditor(_EntryListEditor):
    section = "education"
    fields = models.EDUCATION_FIELDS
    _add = models.add_education_entry
    _update = models.update_education_entry
    _remove = models.remove_education_entry


class DesignEditor(SectionEditor):
    section = "design"

    def options(self) -> Dict[str, List[str]]:
        return {
            "template": [t.value for t in TemplateChoice],
            "font": [f.value for f in FontChoice],
        }

    def choose_template(self, choice: str):
        self.app.apply(models.set_template, choice)

    def choose_font(self, choice: str):
        self.app.apply(models.set_font, choice)
