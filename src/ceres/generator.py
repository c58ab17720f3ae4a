"""
Render extracted modules as a static HTML documentation site.

Output layout:
- index.html        module list, project name and license
- search_index.js   client-side search entries
- <module>.html     one page per module (see serializer.page_filename)
"""
import logging
import re
from html import escape
from pathlib import Path
from typing import Sequence

from ceres.constants import (
    BUILTIN_TYPE_LINKS,
    DDOC_CODE_FENCE,
    DDOC_SECTIONS,
    DEFAULT_PROJECT_NAME,
    INDEX_PAGE,
)
from ceres.models import ClassDoc, EnumDoc, FieldDoc, FunctionDoc, ModuleDoc
from ceres.serializer import page_filename, write_search_index
from ceres.templates import INDEX_TEMPLATE, MODULE_TEMPLATE, STYLESHEET

logger = logging.getLogger(__name__)

__all__ = [
    "HTMLGenerator",
    "build_type_links",
    "linkify",
    "format_comment",
]

_WORD = re.compile(r"\b\w+\b")

_PARAMS_HEADING = "Params:"
_RETURNS_HEADING = "Returns:"


def build_type_links(modules: Sequence[ModuleDoc]) -> dict[str, str]:
    """
    Map type names to documentation URLs.

    Built-in types link to the language reference; classes and enums link to
    their anchor on the declaring module's page. Later modules win on
    duplicate names.
    """
    links = dict(BUILTIN_TYPE_LINKS)
    for module in modules:
        page = page_filename(module.name)
        for name in sorted(module.type_names):
            links[name] = f"{page}#{name}"
    return links


def linkify(code: str, type_links: dict[str, str]) -> str:
    """
    Escape code and turn known type names into links.

    Examples:
        'Widget make(string name)' -> '<a href="...#Widget">Widget</a> make(<a ...>string</a> name)'
    """
    parts: list[str] = []
    last = 0
    for match in _WORD.finditer(code):
        parts.append(escape(code[last:match.start()]))
        word = match.group()
        url = type_links.get(word)
        if url:
            parts.append(f'<a href="{escape(url)}">{escape(word)}</a>')
        else:
            parts.append(escape(word))
        last = match.end()
    parts.append(escape(code[last:]))
    return "".join(parts)


def _section_heading(line: str) -> tuple[str, str] | None:
    """Split ``Throws: text`` into its ddoc heading and remaining text."""
    head, sep, rest = line.partition(":")
    if sep and head in DDOC_SECTIONS:
        return head, rest.strip()
    return None


def format_comment(comments: Sequence[str]) -> str:
    """
    Render doc comment paragraphs as HTML.

    Understands a small subset of ddoc:
    - ``Params:`` followed by ``name = description`` lines
    - ``Returns: text`` rendered inline
    - other standard section headings (``Throws:``, ``See_Also:``...)
    - ``---`` fenced code examples

    Every other non-empty line becomes a paragraph. All text is escaped.
    """
    out: list[str] = []
    in_params = False
    in_code = False

    def close_params() -> None:
        nonlocal in_params
        if in_params:
            out.append("</ul>\n")
            in_params = False

    for line in comments:
        text = line.strip()

        if text == DDOC_CODE_FENCE:
            if in_code:
                out.append("</code></pre>\n")
            else:
                close_params()
                out.append('<pre class="example"><code>')
            in_code = not in_code
            continue

        if in_code:
            out.append(escape(line) + "\n")
            continue

        if text == _PARAMS_HEADING:
            close_params()
            out.append(f'<div class="ddoc-section">{_PARAMS_HEADING}</div>\n<ul class="params-list">\n')
            in_params = True
            continue

        if text.startswith(_RETURNS_HEADING):
            close_params()
            rest = text[len(_RETURNS_HEADING):].strip()
            out.append(
                f'<div class="returns"><span class="ddoc-section">{_RETURNS_HEADING}</span> '
                f'{escape(rest)}</div>\n'
            )
            continue

        section = _section_heading(text)
        if section:
            close_params()
            heading, rest = section
            out.append(f'<div class="ddoc-section">{escape(heading.replace("_", " "))}</div>\n')
            if rest:
                out.append(f"<p>{escape(rest)}</p>\n")
            continue

        if not text:
            continue

        if in_params:
            name, sep, description = text.partition("=")
            if sep:
                out.append(
                    f'<li><span class="param-name">{escape(name.strip())}</span> '
                    f'{escape(description.strip())}</li>\n'
                )
            else:
                out.append(f"<li>{escape(text)}</li>\n")
        else:
            out.append(f"<p>{escape(text)}</p>\n")

    close_params()
    if in_code:
        out.append("</code></pre>\n")

    return "".join(out)


def _private_class(is_private: bool) -> str:
    return " private" if is_private else ""


class HTMLGenerator:
    """
    Write the documentation site for a collection of modules.

    Type names in signatures and field declarations are linked across all
    modules passed in.
    """

    def __init__(
        self,
        modules: Sequence[ModuleDoc],
        output_dir: Path | str,
        project_name: str = "",
        license_type: str = "",
    ):
        self.modules = list(modules)
        self.output_dir = Path(output_dir)
        self.project_name = project_name or DEFAULT_PROJECT_NAME
        self.license_type = license_type
        self.type_links = build_type_links(self.modules)

    def generate(self) -> list[Path]:
        """
        Write every page and the search index.

        Returns:
            Paths of the written files
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        written = [self._write_index(), write_search_index(self.modules, self.output_dir)]
        for module in self.modules:
            written.append(self._write_module_page(module))

        logger.info("Wrote %d file(s) to %s", len(written), self.output_dir)
        return written

    # -------------------------------------------------------------------------
    # Pages
    # -------------------------------------------------------------------------

    def render_index(self) -> str:
        """HTML of the index page."""
        items = "".join(
            f'<li><a href="{escape(page_filename(m.name))}">{escape(m.name)}</a></li>\n'
            for m in self.modules
        )
        return INDEX_TEMPLATE.substitute(
            project_name=escape(self.project_name),
            license_info=escape(self.license_type),
            modules_list=items,
            stylesheet=STYLESHEET,
        )

    def render_module(self, module: ModuleDoc) -> str:
        """HTML of one module page."""
        content: list[str] = []

        if module.comments:
            content.append(f'<section class="module-doc">\n{format_comment(module.comments)}</section>\n')

        if module.classes:
            content.append("<section>\n<h2>Classes</h2>\n")
            content.extend(self._render_class(cls) for cls in module.classes)
            content.append("</section>\n")

        if module.enums:
            content.append("<section>\n<h2>Enums</h2>\n")
            content.extend(self._render_enum(enum) for enum in module.enums)
            content.append("</section>\n")

        if module.functions:
            content.append("<section>\n<h2>Functions</h2>\n")
            content.extend(self._render_function(func, func.name) for func in module.functions)
            content.append("</section>\n")

        return MODULE_TEMPLATE.substitute(
            module_name=escape(module.name),
            project_name=escape(self.project_name),
            content="".join(content),
            stylesheet=STYLESHEET,
        )

    def _write_index(self) -> Path:
        path = self.output_dir / INDEX_PAGE
        path.write_text(self.render_index(), encoding="utf-8")
        return path

    def _write_module_page(self, module: ModuleDoc) -> Path:
        path = self.output_dir / page_filename(module.name)
        path.write_text(self.render_module(module), encoding="utf-8")
        return path

    # -------------------------------------------------------------------------
    # Fragments
    # -------------------------------------------------------------------------

    def _render_doc(self, comments: Sequence[str]) -> str:
        if not comments:
            return ""
        return f'<div class="doc">\n{format_comment(comments)}</div>\n'

    def _render_signature(self, func: FunctionDoc) -> str:
        params = ", ".join(linkify(p, self.type_links) for p in func.parameters)
        return_type = ""
        if func.return_type:
            return_type = f'<span class="return-type">{linkify(func.return_type, self.type_links)}</span> '
        return (
            f'<div class="signature">{return_type}'
            f'<span class="name">{escape(func.name)}</span>'
            f'<span class="params">({params})</span></div>\n'
        )

    def _render_function(self, func: FunctionDoc, anchor: str) -> str:
        return (
            f'<div id="{escape(anchor)}" class="entry function{_private_class(func.is_private)}">\n'
            f"{self._render_signature(func)}"
            f"{self._render_doc(func.comments)}"
            "</div>\n"
        )

    def _render_field(self, field: FieldDoc) -> str:
        return (
            f'<div class="field{_private_class(field.is_private)}">\n'
            f'<div class="declaration">{linkify(field.declaration, self.type_links)}</div>\n'
            f"{self._render_doc(field.comments)}"
            "</div>\n"
        )

    def _render_class(self, cls: ClassDoc) -> str:
        parts = [
            f'<div class="entry class">\n'
            f'<h3 id="{escape(cls.name)}"><span class="kind">{escape(cls.type.value)}</span>'
            f"{escape(cls.name)}</h3>\n",
            self._render_doc(cls.comments),
        ]
        if cls.fields:
            parts.append("<h4>Fields</h4>\n")
            parts.extend(self._render_field(f) for f in cls.fields)
        # this and ~this are listed ahead of ordinary methods
        constructors = [m for m in cls.methods if m.is_constructor]
        methods = [m for m in cls.methods if not m.is_constructor]
        for heading, group in (("Constructors", constructors), ("Methods", methods)):
            if not group:
                continue
            parts.append(f"<h4>{heading}</h4>\n")
            parts.extend(
                self._render_function(m, f"{cls.name}.{m.name}") for m in group
            )
        parts.append("</div>\n")
        return "".join(parts)

    def _render_enum(self, enum: EnumDoc) -> str:
        parts = [
            f'<div class="entry enum">\n'
            f'<h3 id="{escape(enum.name)}"><span class="kind">enum</span>{escape(enum.name)}</h3>\n',
            self._render_doc(enum.comments),
        ]
        if enum.members:
            parts.append("<h4>Members</h4>\n")
            for member in enum.members:
                value = ""
                if member.value:
                    value = f' = <span class="value">{escape(member.value)}</span>'
                parts.append(
                    f'<div class="declaration"><span class="name">{escape(member.name)}</span>{value}</div>\n'
                    f"{self._render_doc(member.comments)}"
                )
        parts.append("</div>\n")
        return "".join(parts)
