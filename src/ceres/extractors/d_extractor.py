"""
Extract the documentation tree of a D module from its source text.

The driver walks the file line by line and hands each line to the comment
extractor, the container scanners or the signature classifier. Sub-scans take
``(lines, index)`` and return the index to resume at, so no cursor is shared.

Heuristic by nature: conventionally formatted code is handled well, unusual
formatting degrades to missing entries rather than errors.
"""
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from ceres.constants import ENUM_KEYWORD
from ceres.extractors.braces import is_filler, skip_body, split_line_comment
from ceres.extractors.comments import (
    DocCommentState,
    attach_comments,
    consume_doc_comment,
)
from ceres.extractors.containers import match_container_header, scan_class, scan_enum
from ceres.extractors.declarations import is_function, parse_function
from ceres.extractors.patterns import IMPORT_DECLARATION, MODULE_DECLARATION, SKIPPED_BLOCK
from ceres.models import ClassDoc, EnumDoc, FunctionDoc, ModuleDoc

logger = logging.getLogger(__name__)

__all__ = [
    "DModuleExtractor",
    "extract_from_source",
]


@dataclass
class _ModuleParts:
    """Mutable accumulator for one extraction run."""
    name: str
    comments: tuple[str, ...] = ()
    imports: list[str] = field(default_factory=list)
    functions: list[FunctionDoc] = field(default_factory=list)
    classes: list[ClassDoc] = field(default_factory=list)
    enums: list[EnumDoc] = field(default_factory=list)


class DModuleExtractor:
    """
    Extract a ModuleDoc from D source.

    Each call to extract() starts from fresh state, so extracting the same
    text twice yields equal results.
    """

    def __init__(self, filepath: Path):
        self.filepath = filepath

    def extract(self, source: str) -> ModuleDoc:
        """
        Parse source and build the module documentation tree.

        Args:
            source: Full text of one D file

        Returns:
            ModuleDoc named after the ``module`` declaration, or after the file
            when there is none
        """
        lines = source.splitlines()
        parts = _ModuleParts(name=self.filepath.stem)
        state = DocCommentState()

        index = 0
        while index < len(lines):
            next_index = consume_doc_comment(lines, index, state)
            if next_index is not None:
                index = next_index
                continue
            index = self._handle_line(lines, index, state, parts)

        logger.debug(
            "Extracted %s: %d classes, %d enums, %d functions",
            parts.name, len(parts.classes), len(parts.enums), len(parts.functions),
        )

        return ModuleDoc(
            name=parts.name,
            filepath=self.filepath,
            comments=parts.comments,
            imports=tuple(parts.imports),
            functions=tuple(parts.functions),
            classes=tuple(parts.classes),
            enums=tuple(parts.enums),
        )

    def _handle_line(
        self,
        lines: Sequence[str],
        index: int,
        state: DocCommentState,
        parts: _ModuleParts,
    ) -> int:
        """Classify one non-comment line and return the index to resume at."""
        code, trailing = split_line_comment(lines[index].strip())

        if is_filler(code):
            return index + 1

        module = MODULE_DECLARATION.match(code)
        if module:
            parts.name = module.group(1)
            parts.comments = attach_comments(state, trailing)
            return index + 1

        if IMPORT_DECLARATION.match(code):
            parts.imports.append(code)
            state.discard()
            return index + 1

        header = match_container_header(code)
        if header:
            return self._handle_container(lines, index, header.group("kind"), state, parts)

        if SKIPPED_BLOCK.match(code):
            state.discard()
            return skip_body(lines, index)

        if is_function(code):
            return self._handle_function(lines, index, code, trailing, state, parts)

        state.discard()
        return index + 1

    def _handle_container(
        self,
        lines: Sequence[str],
        index: int,
        kind: str,
        state: DocCommentState,
        parts: _ModuleParts,
    ) -> int:
        """Scan a class-like or enum body and record it if it has a name."""
        comments = state.pending
        if kind == ENUM_KEYWORD:
            enum_doc, next_index = scan_enum(lines, index, comments)
            if enum_doc is not None:
                parts.enums.append(enum_doc)
                state.attach()
            else:
                state.discard()
            return next_index

        class_doc, next_index = scan_class(lines, index, comments)
        if class_doc is not None:
            parts.classes.append(class_doc)
            state.attach()
        else:
            state.discard()
        return next_index

    def _handle_function(
        self,
        lines: Sequence[str],
        index: int,
        code: str,
        trailing: str,
        state: DocCommentState,
        parts: _ModuleParts,
    ) -> int:
        """Record a module-level function and skip its body."""
        func = parse_function(code, attach_comments(state, trailing), index + 1)
        if func is not None:
            parts.functions.append(func)
        return skip_body(lines, index)


# -----------------------------------------------------------------------------
# Module-level convenience functions
# -----------------------------------------------------------------------------

def extract_from_source(source: str, filepath: Path | str | None = None) -> ModuleDoc:
    """
    Extract the documentation tree of D source text.

    Args:
        source: D source code as string
        filepath: Path used for the fallback module name

    Returns:
        ModuleDoc for the source
    """
    extractor = DModuleExtractor(Path(filepath) if filepath else Path("<string>"))
    return extractor.extract(source)

