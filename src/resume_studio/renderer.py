
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
Projects a ResumeDocument into a styled document tree.

render() is pure: it keeps no state between calls and equal documents yield
equal trees. The tree can be serialised to HTML (to_html) for the preview
surface, or walked by the exporters.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterator, List, Tuple

from bs4 import BeautifulSoup

from resume_studio.models import (
    ResumeDocument,
    TemplateChoice,
    FontChoice,
    coerce_template,
    coerce_font,
    tokenize_skills,
    description_bullets,
)

logger = logging.getLogger(__name__)

SURFACE_ID = "resume-preview"

SECTION_TITLES = (
    ("summary", "Summary"),
    ("experience", "Experience"),
    ("education", "Education"),
    ("skills", "Skills"),
)

CONTACT_ORDER = ("email", "phone", "linkedin", "website")


@dataclass(frozen=True)
class RenderedNode:
    """One element of the rendered tree. Tuples keep it hashable and comparable."""
    tag: str
    classes: Tuple[str, ...] = ()
    text: str = ""
    children: Tuple["RenderedNode", ...] = ()
    attrs: Tuple[Tuple[str, str], ...] = ()

    def attr(self, name: str, default: str = None) -> str:
        for key, value in self.attrs:
            if key == name:
                return value
        return default


def node(tag: str, *children: RenderedNode, classes=(), text: str = "", **attrs) -> RenderedNode:
    return RenderedNode(
        tag=tag,
        classes=tuple(classes),
        text=text,
        children=tuple(children),
        attrs=tuple(sorted((k.replace("_", "-"), v) for k, v in attrs.items())),
    )


# --- Tree helpers ---

def iter_nodes(root: RenderedNode) -> Iterator[RenderedNode]:
    """Depth-first, document order."""
    yield root
    for child in root.children:
        yield from iter_nodes(child)


def find_all(root: RenderedNode, predicate: Callable[[RenderedNode], bool]) -> List[RenderedNode]:
    return [n for n in iter_nodes(root) if predicate(n)]


def find_section(root: RenderedNode, name: str) -> RenderedNode:
    matches = find_all(root, lambda n: n.tag == "section" and n.attr("data-section") == name)
    return matches[0] if matches else None


def section_body(section: RenderedNode) -> RenderedNode:
    for child in section.children:
        if "section-body" in child.classes:
            return child
    return None


def text_content(root: RenderedNode) -> str:
    parts = [n.text for n in iter_nodes(root) if n.text]
    return " ".join(parts)


# --- Template styling ---

def resolve_template(value) -> TemplateChoice:
    template = coerce_template(value)
    if template is None:
        logger.warning(f"Unknown template {value!r}, using {list(TemplateChoice)[0].value}")
        return list(TemplateChoice)[0]
    return template


def resolve_font(value) -> FontChoice:
    font = coerce_font(value)
    if font is None:
        logger.warning(f"Unknown font {value!r}, using {list(FontChoice)[0].value}")
        return list(FontChoice)[0]
    return font


TITLE_CLASSES = {
    TemplateChoice.CLASSIC: ("section-title", "underline"),
    TemplateChoice.MODERN: ("section-title", "tinted"),
    TemplateChoice.CREATIVE: ("section-title", "tinted", "letter-spacing-wide"),
}

BODY_CLASSES = {
    TemplateChoice.CLASSIC: ("section-body",),
    TemplateChoice.MODERN: ("section-body", "indented"),
    TemplateChoice.CREATIVE: ("section-body",),
}

TAG_CLASSES = {
    TemplateChoice.CLASSIC: ("tag", "tag-muted"),
    TemplateChoice.MODERN: ("tag", "tag-tinted"),
    TemplateChoice.CREATIVE: ("tag", "tag-outline"),
}


# --- Section renderers ---

def _render_summary(doc: ResumeDocument, template: TemplateChoice) -> Tuple[RenderedNode, ...]:
    return (node("p", classes=("summary",), text=doc.summary),)


def _render_experience(doc: ResumeDocument, template: TemplateChoice) -> Tuple[RenderedNode, ...]:
    items = []
    for entry in doc.experience:
        bullets = tuple(node("li", text=line) for line in description_bullets(entry.description))
        items.append(node(
            "article",
            node("h3", classes=("entry-title",), text=entry.title),
            node("span", classes=("entry-dates",), text=entry.dates),
            node("p", classes=("entry-org",), text=entry.company),
            node("ul", *bullets, classes=("bullets",)),
            classes=("entry", "experience-entry"),
            data_key=entry.id,
        ))
    return tuple(items)


def _render_education(doc: ResumeDocument, template: TemplateChoice) -> Tuple[RenderedNode, ...]:
    return tuple(
        node(
            "article",
            node("h3", classes=("entry-title",), text=entry.degree),
            node("p", classes=("entry-org",), text=entry.school),
            node("span", classes=("entry-dates",), text=entry.dates),
            classes=("entry", "education-entry"),
            data_key=entry.id,
        )
        for entry in doc.education
    )


def _render_skills(doc: ResumeDocument, template: TemplateChoice) -> Tuple[RenderedNode, ...]:
    tags = tuple(node("span", classes=TAG_CLASSES[template], text=token) for token in tokenize_skills(doc.skills))
    return (node("div", *tags, classes=("tags",)),)


SECTION_RENDERERS = {
    "summary": _render_summary,
    "experience": _render_experience,
    "education": _render_education,
    "skills": _render_skills,
}


def _render_sections(doc: ResumeDocument, template: TemplateChoice) -> Tuple[RenderedNode, ...]:
    sections = []
    for key, title in SECTION_TITLES:
        body = SECTION_RENDERERS[key](doc, template)
        sections.append(node(
            "section",
            node("h2", classes=TITLE_CLASSES[template], text=title),
            node("div", *body, classes=BODY_CLASSES[template]),
            classes=("section",),
            data_section=key,
        ))
    return tuple(sections)


def _render_contact(doc: ResumeDocument, classes) -> RenderedNode:
    items = []
    for key in CONTACT_ORDER:
        value = getattr(doc.contact, key)
        if value:
            items.append(node("span", classes=("contact-item", f"contact-{key}"), text=value))
    return node("div", *items, classes=classes)


def _render_header(doc: ResumeDocument, classes) -> RenderedNode:
    return node(
        "header",
        node("h1", classes=("name",), text=doc.identity.name),
        node("p", classes=("job-title",), text=doc.identity.job_title),
        classes=classes,
    )


# --- Layouts ---

def _layout_classic(doc: ResumeDocument) -> Tuple[RenderedNode, ...]:
    return (
        _render_header(doc, ("header", "centered", "rule-below")),
        _render_contact(doc, ("contact", "centered")),
    ) + _render_sections(doc, TemplateChoice.CLASSIC)


def _layout_modern(doc: ResumeDocument) -> Tuple[RenderedNode, ...]:
    sidebar = node(
        "aside",
        _render_header(doc, ("header", "centered")),
        _render_contact(doc, ("contact", "stacked")),
        classes=("column", "column-one-third", "inverted"),
    )
    content = node(
        "main",
        *_render_sections(doc, TemplateChoice.MODERN),
        classes=("column", "column-two-thirds"),
    )
    return (node("div", sidebar, content, classes=("two-column",)),)


def _layout_creative(doc: ResumeDocument) -> Tuple[RenderedNode, ...]:
    return (
        node("div", classes=("top-band",)),
        _render_header(doc, ("header", "left-aligned", "letter-spacing-wide")),
        _render_contact(doc, ("contact", "left-aligned")),
    ) + _render_sections(doc, TemplateChoice.CREATIVE)


LAYOUTS = {
    TemplateChoice.CLASSIC: _layout_classic,
    TemplateChoice.MODERN: _layout_modern,
    TemplateChoice.CREATIVE: _layout_creative,
}


def render(doc: ResumeDocument) -> RenderedNode:
    """
    Renders the document with its selected template and font.

    Args:
        doc (ResumeDocument): The document to project.

    Returns:
        RenderedNode: Root of the rendered tree.
    """
    template = resolve_template(doc.template)
    font = resolve_font(doc.font)
    return node(
        "div",
        *LAYOUTS[template](doc),
        classes=("resume", f"template-{template.value}", f"font-{font.value}"),
        id=SURFACE_ID,
    )


# --- HTML serialisation ---

STYLESHEET = """
body { margin: 0; background: #ffffff; }
.resume { width: 816px; min-height: 1056px; padding: 48px; box-sizing: border-box; color: #111827; background: #ffffff; }
.font-sans { font-family: "Inter", "Helvetica Neue", Arial, sans-serif; }
.font-serif { font-family: "Times New Roman", Georgia, serif; }
.font-monospace { font-family: "Courier New", Courier, monospace; }
.centered { text-align: center; }
.left-aligned { text-align: left; }
.rule-below { border-bottom: 2px solid #d1d5db; padding-bottom: 16px; margin-bottom: 16px; }
.name { font-size: 2.25rem; margin: 0; }
.job-title { font-size: 1.25rem; color: #4b5563; margin: 4px 0 0; }
.contact { font-size: 0.875rem; color: #4b5563; margin-bottom: 24px; }
.contact-item { margin: 0 12px; }
.contact.stacked .contact-item { display: block; margin: 8px 0; }
.section { margin-bottom: 24px; }
.section-title { font-size: 1.25rem; margin: 0 0 8px; }
.underline { border-bottom: 1px solid #e5e7eb; padding-bottom: 4px; }
.tinted { color: #2563eb; }
.letter-spacing-wide { letter-spacing: 0.1em; }
.indented { padding-left: 32px; }
.section-body { font-size: 0.875rem; }
.entry { margin-bottom: 12px; }
.entry-title { font-size: 1rem; margin: 0; display: inline-block; }
.entry-dates { float: right; font-size: 0.75rem; color: #6b7280; }
.entry-org { font-style: italic; color: #4b5563; margin: 2px 0; }
.tags { display: flex; flex-wrap: wrap; gap: 8px; }
.tag { font-size: 0.75rem; border-radius: 9999px; padding: 4px 12px; }
.tag-muted { background: #e5e7eb; color: #1f2937; }
.tag-tinted { background: #dbeafe; color: #2563eb; }
.tag-outline { border: 1px solid #93c5fd; color: #2563eb; }
.two-column { display: flex; margin: -48px; min-height: 1056px; }
.column-one-third { width: 33.333%; padding: 24px; box-sizing: border-box; }
.column-two-thirds { width: 66.667%; padding: 24px; box-sizing: border-box; }
.inverted { background: #2563eb; color: #ffffff; }
.inverted .job-title, .inverted .contact { color: #dbeafe; }
.top-band { height: 8px; background: #2563eb; margin: -48px -48px 40px; }
"""


def _to_tag(soup: BeautifulSoup, rendered: RenderedNode):
    tag = soup.new_tag(rendered.tag)
    if rendered.classes:
        tag["class"] = list(rendered.classes)
    for key, value in rendered.attrs:
        tag[key] = value
    if rendered.text:
        tag.string = rendered.text
    for child in rendered.children:
        tag.append(_to_tag(soup, child))
    return tag


def to_html(root: RenderedNode, title: str = "Resume") -> str:
    """Serialises a rendered tree into a standalone HTML page."""
    soup = BeautifulSoup("<!DOCTYPE html><html><head></head><body></body></html>", "html.parser")
    meta = soup.new_tag("meta", charset="utf-8")
    soup.head.append(meta)
    title_tag = soup.new_tag("title")
    title_tag.string = title
    soup.head.append(title_tag)
    style = soup.new_tag("style")
    style.string = STYLESHEET
    soup.head.append(style)
    soup.body.append(_to_tag(soup, root))
    return str(soup)
