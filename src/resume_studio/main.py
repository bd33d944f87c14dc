
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
Main entry point for the Resume Studio CLI.
"""

import argparse
import asyncio
import logging
import os
import shlex
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from resume_studio.app import ResumeApp
from resume_studio.config import Settings
from resume_studio.renderer import RenderedNode

logger = logging.getLogger(__name__)

HELP_TEXT = """\
show                                       Show the current resume data
set <name|job_title> <value>               Update name or job title
contact <email|phone|linkedin|website> <value>
summary <text>                             Replace the summary
skills <comma separated list>              Replace the skills
add <experience|education>                 Append an empty entry
edit <experience|education> <id> <field> <value>   (use \\n for new lines)
remove <experience|education> <id>         Delete an entry
template <classic|modern|creative>         Choose a template
font <sans|serif|monospace>                Choose a body font
preview [file]                             Write the HTML preview
tree                                       Print the rendered tree
suggest <section> <job description file or text>
export [dir]                               Export to PDF
docx [dir]                                 Export to DOCX
help | quit"""


def setup_logging(verbosity: int, quiet: bool = False, console: Console = None):
    """
    Configures logging:
    - File: user_content/logs/resume_studio.log (DEBUG)
    - Console: Default=WARNING, -q=ERROR, -v=INFO, -vv=DEBUG
    """
    log_dir = Path("user_content/logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "resume_studio.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root.addHandler(file_handler)

    if quiet:
        level = logging.ERROR
    elif verbosity == 0:
        level = logging.WARNING
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.DEBUG

    console_handler = RichHandler(console=console, show_path=False, show_time=False)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))
    root.addHandler(console_handler)

    # Silence some noisy libs if not in super debug
    if verbosity < 3:
        logging.getLogger("httpx").setLevel(logging.WARNING)
        logging.getLogger("httpcore").setLevel(logging.WARNING)


def build_tree(rendered: RenderedNode, tree: Tree = None) -> Tree:
    """Mirrors a rendered node tree as a rich Tree."""
    label = rendered.tag
    if rendered.classes:
        label += "." + ".".join(rendered.classes)
    if rendered.text:
        label += f"  [dim]{escape(rendered.text[:60])}[/dim]"
    branch = tree.add(label) if tree is not None else Tree(label)
    for child in rendered.children:
        build_tree(child, branch)
    return branch


class ShellError(Exception):
    """Bad command usage; reported to the user without ending the session."""


class CommandShell:
    """
    Line-oriented editing surface. Each command maps onto one section editor
    or one collaborator call on the ResumeApp.
    """
    LIST_SECTIONS = ("experience", "education")

    def __init__(self, app: ResumeApp, console: Console = None):
        self.app = app
        self.console = console or Console()
        self.commands = {
            "show": self.do_show,
            "set": self.do_set,
            "contact": self.do_contact,
            "summary": self.do_summary,
            "skills": self.do_skills,
            "add": self.do_add,
            "edit": self.do_edit,
            "remove": self.do_remove,
            "template": self.do_template,
            "font": self.do_font,
            "preview": self.do_preview,
            "tree": self.do_tree,
            "suggest": self.do_suggest,
            "export": self.do_export,
            "docx": self.do_docx,
            "help": self.do_help,
        }

    def execute(self, line: str) -> bool:
        """Runs one command. Returns False when the session should end."""
        try:
            parts = shlex.split(line)
        except ValueError as e:
            self.console.print(f"[red]Could not parse command: {escape(str(e))}[/red]")
            return True
        if not parts or parts[0].startswith("#"):
            return True

        name, args = parts[0].lower(), parts[1:]
        if name in ("quit", "exit"):
            return False

        handler = self.commands.get(name)
        if handler is None:
            self.console.print(f"[red]Unknown command '{name}'. Type 'help' for a list.[/red]")
            return True
        try:
            handler(args)
        except ShellError as e:
            self.console.print(f"[red]{escape(str(e))}[/red]")
        return True

    def loop(self):
        self.console.print("[bold]Resume Studio[/bold] - type 'help' for commands")
        while True:
            try:
                line = self.console.input("[bold cyan]resume>[/bold cyan] ")
            except EOFError:
                break
            if not self.execute(line):
                break

    def _list_section(self, args, min_args: int, usage: str):
        if len(args) < min_args or args[0] not in self.LIST_SECTIONS:
            raise ShellError(f"Usage: {usage}")
        return getattr(self.app, args[0])

    # --- Commands ---

    def do_help(self, args):
        self.console.print(HELP_TEXT, markup=False)

    def do_show(self, args):
        doc = self.app.document
        table = Table(title="Resume", show_header=False)
        for key, value in self.app.identity.values().items():
            table.add_row(key, escape(value))
        table.add_row("summary", escape(doc.summary))
        table.add_row("skills", escape(doc.skills))
        table.add_row("template", doc.template.value)
        table.add_row("font", doc.font.value)
        self.console.print(table)

        experience = Table(title="Experience")
        for column in ("id",) + self.app.experience.fields:
            experience.add_column(column)
        for entry in doc.experience:
            experience.add_row(*(escape(v) for v in (entry.id, entry.title, entry.company, entry.dates, entry.description)))
        self.console.print(experience)

        education = Table(title="Education")
        for column in ("id",) + self.app.education.fields:
            education.add_column(column)
        for entry in doc.education:
            education.add_row(*(escape(v) for v in (entry.id, entry.degree, entry.school, entry.dates)))
        self.console.print(education)

    def do_set(self, args):
        if len(args) < 2:
            raise ShellError("Usage: set <name|job_title> <value>")
        self.app.identity.on_identity_change(args[0], " ".join(args[1:]))

    def do_contact(self, args):
        if len(args) < 1:
            raise ShellError("Usage: contact <email|phone|linkedin|website> <value>")
        self.app.identity.on_contact_change(args[0], " ".join(args[1:]))

    def do_summary(self, args):
        self.app.summary.on_change(" ".join(args))

    def do_skills(self, args):
        self.app.skills.on_change(" ".join(args))

    def do_add(self, args):
        editor = self._list_section(args, 1, "add <experience|education>")
        new_id = editor.add()
        self.console.print(f"Added {args[0]} entry [bold]{new_id}[/bold]")

    def do_edit(self, args):
        editor = self._list_section(args, 3, "edit <experience|education> <id> <field> <value>")
        value = " ".join(args[3:]).replace("\\n", "\n")
        editor.on_change(args[1], args[2], value)

    def do_remove(self, args):
        editor = self._list_section(args, 2, "remove <experience|education> <id>")
        editor.remove(args[1])

    def do_template(self, args):
        if len(args) != 1:
            raise ShellError("Usage: template <classic|modern|creative>")
        self.app.design.choose_template(args[0])

    def do_font(self, args):
        if len(args) != 1:
            raise ShellError("Usage: font <sans|serif|monospace>")
        self.app.design.choose_font(args[0])

    def do_preview(self, args):
        path = Path(args[0]) if args else self.app.settings.output_dir / "preview.html"
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(self.app.preview_html(), encoding="utf-8")
        except OSError as e:
            logger.error(f"Error writing preview: {e}")
            raise ShellError(f"Could not write preview to {path}: {e}") from e
        self.console.print(f"Preview written to {path}")

    def do_tree(self, args):
        self.console.print(build_tree(self.app.render()))

    def do_suggest(self, args):
        if len(args) < 2:
            raise ShellError("Usage: suggest <section> <job description file or text>")
        section = args[0]
        source = " ".join(args[1:])
        if len(args) == 2 and os.path.isfile(args[1]):
            with open(args[1], "r", encoding="utf-8") as f:
                source = f.read()

        with self.console.status("Generating suggestions..."):
            result = asyncio.run(self.app.request_suggestion(source, section))

        for message in self.app.field_errors.values():
            self.console.print(f"[red]{escape(message)}[/red]")
        if result is None:
            return
        if result.success:
            self.console.print(Panel(escape(result.data.suggested_content), title="Suggested Content"))
            self.console.print(Panel(escape(result.data.reasoning), title="Reasoning", style="dim"))
        else:
            self.console.print(f"[red]{escape(result.error or '')}[/red]")

    def do_export(self, args):
        output_dir = Path(args[0]) if args else None
        with self.console.status("Exporting PDF..."):
            path = asyncio.run(self.app.export_pdf(output_dir))
        if path:
            self.console.print(f"Saved [bold]{path}[/bold]")
        else:
            self.console.print("[red]Export failed. Please try again.[/red]")

    def do_docx(self, args):
        path = self.app.export_docx(Path(args[0]) if args else None)
        if path:
            self.console.print(f"Saved [bold]{path}[/bold]")
        else:
            self.console.print("[red]Export failed. Please try again.[/red]")


def main():
    try:
        _main_cli()
    except KeyboardInterrupt:
        sys.stderr.write("\n\033[31m[-] Cancelled by user\033[0m\n")
        sys.exit(130)


def _main_cli(argv=None):
    """
    Parses arguments, builds the editor session and runs commands from a
    script, the flags, or an interactive prompt.
    """
    parser = argparse.ArgumentParser(description="Resume Studio - edit, preview and export a resume")
    parser.add_argument("--template", help="Initial template (classic, modern, creative)")
    parser.add_argument("--font", help="Initial body font (sans, serif, monospace)")
    parser.add_argument("--output-dir", help="Directory for previews and exports (default: user_content/exports)")
    parser.add_argument("--script", help="File of shell commands to run, one per line")
    parser.add_argument("--preview", action="store_true", help="Write the HTML preview and exit")
    parser.add_argument("--export", action="store_true", help="Export the resume to PDF and exit")
    parser.add_argument("--provider", choices=["gemini", "openai"], help="Suggestion provider")
    parser.add_argument("--model", help="Model name for the suggestion provider")
    parser.add_argument("--ca-bundle", help="Path to a custom CA certificate bundle for HTTPS verification (proxy environments)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase output verbosity (-v=INFO, -vv=DEBUG)")
    parser.add_argument("-q", "--quiet", action="store_true", help="Suppress status output (ERROR only)")

    args = parser.parse_args(argv)

    console = Console()
    setup_logging(args.verbose, quiet=args.quiet, console=console)

    settings = Settings.from_env(
        provider=args.provider,
        model=args.model,
        output_dir=args.output_dir,
        ca_bundle=args.ca_bundle,
    )
    app = ResumeApp(settings)
    if args.template:
        app.design.choose_template(args.template)
    if args.font:
        app.design.choose_font(args.font)

    shell = CommandShell(app, console)
    interactive = True

    if args.script:
        interactive = False
        try:
            with open(args.script, "r", encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            logger.error(f"Failed to read script: {e}")
            sys.exit(1)
        for line in lines:
            if not shell.execute(line):
                break

    if args.preview:
        interactive = False
        shell.execute("preview")
    if args.export:
        interactive = False
        shell.execute("export")

    if interactive:
        shell.loop()


if __name__ == "__main__":
    main()
