
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
Data models for the Resume Studio editor.

The document is immutable: every update operation below takes the current
ResumeDocument and returns a new one with only the targeted field changed.
Unknown keys, ids and fields are treated as no-ops rather than errors.
"""

import logging
import uuid
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class TemplateChoice(str, Enum):
    CLASSIC = "classic"
    MODERN = "modern"
    CREATIVE = "creative"


class FontChoice(str, Enum):
    SANS = "sans"
    SERIF = "serif"
    MONOSPACE = "monospace"


# Sections in the fixed order every template renders them
SECTIONS = ("summary", "experience", "education", "skills")

IDENTITY_FIELDS = ("name", "job_title")
CONTACT_FIELDS = ("email", "phone", "linkedin", "website")
EXPERIENCE_FIELDS = ("title", "company", "dates", "description")
EDUCATION_FIELDS = ("degree", "school", "dates")


@dataclass(frozen=True)
class Identity:
    """Name and headline shown at the top of the resume."""
    name: str
    job_title: str = ""


@dataclass(frozen=True)
class Contact:
    email: str = ""
    phone: str = ""
    linkedin: str = ""
    website: str = ""


@dataclass(frozen=True)
class ExperienceEntry:
    """A single role. `description` holds one bullet per line."""
    id: str
    title: str = ""
    company: str = ""
    dates: str = ""
    description: str = ""


@dataclass(frozen=True)
class EducationEntry:
    id: str
    degree: str = ""
    school: str = ""
    dates: str = ""


@dataclass(frozen=True)
class ResumeDocument:
    """
    Structured data representing a complete resume.
    This is the object the renderer and exporters read.
    """
    identity: Identity
    contact: Contact = field(default_factory=Contact)
    summary: str = ""
    experience: Tuple[ExperienceEntry, ...] = ()
    education: Tuple[EducationEntry, ...] = ()
    skills: str = ""  # comma-delimited, tokenised at render time
    template: TemplateChoice = TemplateChoice.CLASSIC
    font: FontChoice = FontChoice.SANS


SEED_DOCUMENT = ResumeDocument(
    identity=Identity(name="Alex Doe", job_title="Software Engineer"),
    contact=Contact(
        email="alex.doe@email.com",
        phone="123-456-7890",
        linkedin="linkedin.com/in/alexdoe",
        website="alexdoe.dev",
    ),
    summary=(
        "Innovative Software Engineer with 5+ years of experience in developing, testing, "
        "and maintaining web applications. Proficient in JavaScript, React, and Node.js. "
        "Seeking to leverage my skills to contribute to a dynamic engineering team."
    ),
    experience=(
        ExperienceEntry(
            id="exp1",
            title="Senior Software Engineer",
            company="Tech Solutions Inc.",
            dates="Jan 2021 - Present",
            description=(
                "- Led a team of 5 engineers in developing a new e-commerce platform, resulting in a 30% increase in sales.\n"
                "- Optimized application performance, reducing page load times by 40%.\n"
                "- Implemented a CI/CD pipeline, automating the deployment process."
            ),
        ),
        ExperienceEntry(
            id="exp2",
            title="Software Engineer",
            company="Web Innovations LLC",
            dates="Jun 2018 - Dec 2020",
            description=(
                "- Developed and maintained client-side features for various web applications using React and Redux.\n"
                "- Collaborated with UX/UI designers to create responsive and user-friendly interfaces.\n"
                "- Wrote unit and integration tests to ensure code quality."
            ),
        ),
    ),
    education=(
        EducationEntry(
            id="edu1",
            degree="B.S. in Computer Science",
            school="University of Technology",
            dates="2014 - 2018",
        ),
    ),
    skills="JavaScript, TypeScript, React, Node.js, Express, MongoDB, SQL, HTML/CSS, Git, Docker, AWS",
    template=TemplateChoice.MODERN,
    font=FontChoice.SANS,
)


# --- Display transforms (never stored) ---

def tokenize_skills(raw: str) -> List[str]:
    """Splits the skills string on commas, trims each token and drops empties."""
    return [token.strip() for token in (raw or "").split(",") if token.strip()]


def description_bullets(text: str) -> List[str]:
    """
    Turns a free-text description into bullet items.
    Empty lines are dropped and a leading "- " is stripped.
    """
    bullets = []
    for line in (text or "").split("\n"):
        if not line:
            continue
        if line.startswith("- "):
            line = line[2:]
        bullets.append(line)
    return bullets


# --- Enumeration helpers ---

def coerce_template(value) -> Optional[TemplateChoice]:
    """Returns the matching TemplateChoice, or None if `value` is not one."""
    try:
        return TemplateChoice(value)
    except ValueError:
        return None


def coerce_font(value) -> Optional[FontChoice]:
    try:
        return FontChoice(value)
    except ValueError:
        return None


# --- Update operations ---

def set_identity_field(doc: ResumeDocument, key: str, value: str) -> ResumeDocument:
    if key not in IDENTITY_FIELDS or value is None:
        logger.debug(f"Ignoring identity update: {key}={value!r}")
        return doc
    if key == "name" and not value.strip():
        # Name must stay non-empty
        logger.debug("Ignoring empty name")
        return doc
    return replace(doc, identity=replace(doc.identity, **{key: value}))


def set_contact_field(doc: ResumeDocument, key: str, value: str) -> ResumeDocument:
    if key not in CONTACT_FIELDS or value is None:
        logger.debug(f"Ignoring contact update: {key}={value!r}")
        return doc
    return replace(doc, contact=replace(doc.contact, **{key: value}))


def set_summary(doc: ResumeDocument, value: str) -> ResumeDocument:
    if value is None:
        return doc
    return replace(doc, summary=value)


def set_skills(doc: ResumeDocument, raw_csv: str) -> ResumeDocument:
    if raw_csv is None:
        return doc
    return replace(doc, skills=raw_csv)


def set_template(doc: ResumeDocument, choice: Union[TemplateChoice, str]) -> ResumeDocument:
    template = coerce_template(choice)
    if template is None:
        logger.warning(f"Rejected unknown template: {choice!r}")
        return doc
    return replace(doc, template=template)


def set_font(doc: ResumeDocument, choice: Union[FontChoice, str]) -> ResumeDocument:
    font = coerce_font(choice)
    if font is None:
        logger.warning(f"Rejected unknown font: {choice!r}")
        return doc
    return replace(doc, font=font)


def _new_entry_id(prefix: str, existing) -> str:
    existing_ids = {entry.id for entry in existing}
    while True:
        candidate = f"{prefix}-{uuid.uuid4().hex[:8]}"
        if candidate not in existing_ids:
            return candidate


def _update_entries(entries, entry_id: str, field_name: str, value: str, allowed):
    """Returns a new tuple with one field changed, or None if nothing matched."""
    if field_name not in allowed or value is None:
        return None
    if not any(entry.id == entry_id for entry in entries):
        return None
    return tuple(
        replace(entry, **{field_name: value}) if entry.id == entry_id else entry
        for entry in entries
    )


def add_experience_entry(doc: ResumeDocument) -> ResumeDocument:
    entry = ExperienceEntry(id=_new_entry_id("exp", doc.experience))
    return replace(doc, experience=doc.experience + (entry,))


def update_experience_entry(doc: ResumeDocument, entry_id: str, field_name: str, value: str) -> ResumeDocument:
    updated = _update_entries(doc.experience, entry_id, field_name, value, EXPERIENCE_FIELDS)
    if updated is None:
        logger.debug(f"Ignoring experience update: {entry_id}.{field_name}")
        return doc
    return replace(doc, experience=updated)


def remove_experience_entry(doc: ResumeDocument, entry_id: str) -> ResumeDocument:
    remaining = tuple(entry for entry in doc.experience if entry.id != entry_id)
    if len(remaining) == len(doc.experience):
        return doc
    return replace(doc, experience=remaining)


def add_education_entry(doc: ResumeDocument) -> ResumeDocument:
    entry = EducationEntry(id=_new_entry_id("edu", doc.education))
    return replace(doc, education=doc.education + (entry,))


def update_education_entry(doc: ResumeDocument, entry_id: str, field_name: str, value: str) -> ResumeDocument:
    updated = _update_entries(doc.education, entry_id, field_name, value, EDUCATION_FIELDS)
    if updated is None:
        logger.debug(f"Ignoring education update: {entry_id}.{field_name}")
        return doc
    return replace(doc, education=updated)


def remove_education_entry(doc: ResumeDocument, entry_id: str) -> ResumeDocument:
    remaining = tuple(entry for entry in doc.education if entry.id != entry_id)
    if len(remaining) == len(doc.education):
        return doc
    return replace(doc, education=remaining)


def section_text(doc: ResumeDocument, section: str) -> str:
    """Plain-text view of one section, used to prefill suggestion requests."""
    if section == "summary":
        return doc.summary
    if section == "skills":
        return doc.skills
    if section == "experience":
        blocks = []
        for entry in doc.experience:
            blocks.append(f"{entry.title}, {entry.company} ({entry.dates})\n{entry.description}".strip())
        return "\n\n".join(blocks)
    if section == "education":
        return "\n".join(f"{e.degree}, {e.school} ({e.dates})" for e in doc.education)
    return ""
