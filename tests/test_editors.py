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

import unittest
from unittest.mock import MagicMock

from resume_studio.app import ResumeApp
from resume_studio.config import Settings
from resume_studio.models import SEED_DOCUMENT


class TestSectionEditors(unittest.TestCase):

    def setUp(self):
        self.app = ResumeApp(Settings(gemini_api_key="k"), suggestion_client=MagicMock())

    def test_identity_values(self):
        values = self.app.identity.values()
        self.assertEqual(values["name"], "Alex Doe")
        self.assertEqual(values["job_title"], "Software Engineer")
        self.assertEqual(values["email"], "alex.doe@email.com")

    def test_contact_key_does_not_leak_into_identity(self):
        self.app.identity.on_identity_change("email", "nope@example.com")
        self.assertIs(self.app.document, SEED_DOCUMENT)

    def test_experience_add_edit_remove(self):
        editor = self.app.experience
        new_id = editor.add()
        self.assertEqual(editor.ids(), ["exp1", "exp2", new_id])

        editor.on_change(new_id, "title", "Intern")
        editor.on_change("missing", "title", "Ghost")
        self.assertEqual(editor.entries()[-1].title, "Intern")
        self.assertEqual(editor.entries()[:2], list(SEED_DOCUMENT.experience))

        editor.remove("exp1")
        self.assertEqual(editor.ids(), ["exp2", new_id])
        editor.remove("exp1")
        self.assertEqual(editor.ids(), ["exp2", new_id])

    def test_education_editor(self):
        editor = self.app.education
        new_id = editor.add()
        editor.on_change(new_id, "degree", "M.Sc.")
        self.assertEqual([e.degree for e in editor.entries()], ["B.S. in Computer Science", "M.Sc."])
        self.assertEqual(self.app.experience.ids(), ["exp1", "exp2"])

    def test_design_options_and_rejection(self):
        self.assertEqual(self.app.design.options(), {
            "template": ["classic", "modern", "creative"],
            "font": ["sans", "serif", "monospace"],
        })
        self.app.design.choose_template("brutalist")
        self.assertEqual(self.app.document.template.value, "modern")

    def test_summary_and_skills_values(self):
        self.app.summary.on_change("")
        self.app.skills.on_change("")
        self.assertEqual(self.app.summary.value(), "")
        self.assertEqual(self.app.skills.value(), "")


if __name__ == '__main__':
    unittest.main()
