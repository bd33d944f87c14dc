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
from dataclasses import replace

from bs4 import BeautifulSoup

from resume_studio import models
from resume_studio.models import SEED_DOCUMENT, ResumeDocument, Identity
from resume_studio.renderer import (
    render,
    to_html,
    find_all,
    find_section,
    section_body,
    iter_nodes,
    SURFACE_ID,
)


def section_order(tree):
    return [n.attr("data-section") for n in find_all(tree, lambda n: n.tag == "section")]


def tags_of(tree):
    return [n.text for n in find_all(tree, lambda n: "tag" in n.classes)]


class TestRender(unittest.TestCase):

    def test_render_is_pure(self):
        self.assertEqual(render(SEED_DOCUMENT), render(SEED_DOCUMENT))

    def test_sections_in_fixed_order_for_every_template(self):
        for template in ("classic", "modern", "creative"):
            doc = models.set_template(SEED_DOCUMENT, template)
            tree = render(doc)
            self.assertEqual(section_order(tree), ["summary", "experience", "education", "skills"], template)
            self.assertIn(f"template-{template}", tree.classes)

    def test_skills_tags(self):
        doc = models.set_skills(SEED_DOCUMENT, "JavaScript, TypeScript,  , Go")
        self.assertEqual(tags_of(render(doc)), ["JavaScript", "TypeScript", "Go"])

    def test_no_skill_tokens_renders_no_tags(self):
        doc = models.set_skills(SEED_DOCUMENT, " , ")
        self.assertEqual(tags_of(render(doc)), [])

    def test_description_bullets_rendered(self):
        doc = models.update_experience_entry(SEED_DOCUMENT, "exp1", "description", "- Did X\n- Did Y\n")
        entry = find_all(render(doc), lambda n: n.attr("data-key") == "exp1")[0]
        items = [n.text for n in iter_nodes(entry) if n.tag == "li"]
        self.assertEqual(items, ["Did X", "Did Y"])
        # Stored description is untouched
        self.assertEqual(doc.experience[0].description, "- Did X\n- Did Y\n")

    def test_empty_sections(self):
        doc = ResumeDocument(identity=Identity(name="Empty"))
        tree = render(doc)
        summary = section_body(find_section(tree, "summary"))
        self.assertEqual(len(summary.children), 1)
        self.assertEqual(summary.children[0].tag, "p")
        self.assertEqual(summary.children[0].text, "")
        self.assertEqual(section_body(find_section(tree, "experience")).children, ())
        self.assertEqual(section_body(find_section(tree, "education")).children, ())
        self.assertEqual(tags_of(tree), [])

    def test_remove_entry_drops_one_item(self):
        before = section_body(find_section(render(SEED_DOCUMENT), "experience"))
        doc = models.remove_experience_entry(SEED_DOCUMENT, "exp1")
        after = section_body(find_section(render(doc), "experience"))
        self.assertEqual(len(after.children), len(before.children) - 1)
        self.assertEqual(after.children[0], before.children[1])

    def test_scalar_update_only_changes_target_node(self):
        doc = models.set_summary(SEED_DOCUMENT, "New summary")
        old_nodes = list(iter_nodes(render(SEED_DOCUMENT)))
        new_nodes = list(iter_nodes(render(doc)))
        self.assertEqual(len(old_nodes), len(new_nodes))
        changed = [(a, b) for a, b in zip(old_nodes, new_nodes) if a.text != b.text]
        self.assertEqual(len(changed), 1)
        self.assertEqual(changed[0][1].text, "New summary")

    def test_classic_layout(self):
        tree = render(models.set_template(SEED_DOCUMENT, "classic"))
        header, contact = tree.children[0], tree.children[1]
        self.assertEqual(header.tag, "header")
        self.assertIn("centered", header.classes)
        self.assertIn("centered", contact.classes)
        titles = find_all(tree, lambda n: n.tag == "h2")
        self.assertTrue(all("underline" in t.classes for t in titles))

    def test_modern_layout(self):
        tree = render(SEED_DOCUMENT)  # seed uses modern
        self.assertEqual(len(tree.children), 1)
        columns = tree.children[0].children
        self.assertEqual([c.tag for c in columns], ["aside", "main"])
        self.assertIn("inverted", columns[0].classes)
        self.assertIn("column-one-third", columns[0].classes)
        # Identity rendered exactly once, in the sidebar
        names = find_all(tree, lambda n: n.tag == "h1")
        self.assertEqual(len(names), 1)
        self.assertEqual(len(find_all(columns[0], lambda n: n.tag == "h1")), 1)
        bodies = find_all(columns[1], lambda n: "section-body" in n.classes)
        self.assertTrue(all("indented" in b.classes for b in bodies))
        titles = find_all(columns[1], lambda n: n.tag == "h2")
        self.assertTrue(all("tinted" in t.classes for t in titles))

    def test_creative_layout(self):
        tree = render(models.set_template(SEED_DOCUMENT, "creative"))
        self.assertIn("top-band", tree.children[0].classes)
        header = tree.children[1]
        self.assertIn("left-aligned", header.classes)
        self.assertIn("letter-spacing-wide", header.classes)
        titles = find_all(tree, lambda n: n.tag == "h2")
        self.assertTrue(all("letter-spacing-wide" in t.classes for t in titles))

    def test_font_only_changes_root_class(self):
        serif = render(models.set_font(SEED_DOCUMENT, "serif"))
        sans = render(SEED_DOCUMENT)
        self.assertIn("font-serif", serif.classes)
        self.assertEqual(serif.children, sans.children)

    def test_invalid_choices_fall_back(self):
        doc = replace(SEED_DOCUMENT, template="fancy", font="comic")
        tree = render(doc)
        self.assertIn("template-classic", tree.classes)
        self.assertIn("font-sans", tree.classes)

    def test_empty_contact_items_omitted(self):
        doc = models.set_contact_field(SEED_DOCUMENT, "website", "")
        items = find_all(render(doc), lambda n: "contact-item" in n.classes)
        self.assertEqual(len(items), 3)
        self.assertNotIn("contact-website", [c for n in items for c in n.classes])

    def test_end_to_end_add_entry_and_switch_to_modern(self):
        doc = models.set_template(SEED_DOCUMENT, "classic")
        doc = models.add_experience_entry(doc)
        new_id = doc.experience[-1].id
        for field_name, value in (("title", "Intern"), ("company", "Startup"),
                                  ("dates", "2017"), ("description", "- Fixed bugs")):
            doc = models.update_experience_entry(doc, new_id, field_name, value)
        doc = models.set_template(doc, "modern")

        tree = render(doc)
        self.assertEqual(tree.children[0].classes, ("two-column",))
        entries = find_all(tree, lambda n: "experience-entry" in n.classes)
        self.assertEqual([e.attr("data-key") for e in entries], ["exp1", "exp2", new_id])
        last = entries[-1]
        texts = {c.classes[0]: c.text for c in last.children if c.text}
        self.assertEqual(texts, {"entry-title": "Intern", "entry-dates": "2017", "entry-org": "Startup"})
        self.assertEqual([n.text for n in iter_nodes(last) if n.tag == "li"], ["Fixed bugs"])


class TestToHtml(unittest.TestCase):

    def test_html_contains_surface_and_content(self):
        html = to_html(render(SEED_DOCUMENT), title="Alex Doe - Resume")
        soup = BeautifulSoup(html, "html.parser")
        surface = soup.find(id=SURFACE_ID)
        self.assertIsNotNone(surface)
        self.assertIn("template-modern", surface["class"])
        self.assertEqual(soup.title.string, "Alex Doe - Resume")
        self.assertEqual(soup.find("h1").get_text(), "Alex Doe")
        self.assertEqual(len(soup.select("section[data-section]")), 4)

    def test_html_escapes_text(self):
        doc = models.set_summary(SEED_DOCUMENT, "<script>alert(1)</script>")
        html = to_html(render(doc))
        self.assertNotIn("<script>", html)
        self.assertIn("&lt;script&gt;", html)


if __name__ == '__main__':
    unittest.main()
