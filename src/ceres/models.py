"""
Data models for the documentation tree recovered from D source.

All models are immutable (frozen) dataclasses; sequences are stored as tuples
so a parsed tree can be shared, hashed and compared structurally.
"""
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class ContainerKind(Enum):
    """Introducer keyword of a class-like container."""
    CLASS = "class"
    STRUCT = "struct"
    INTERFACE = "interface"


@dataclass(frozen=True)
class FunctionDoc:
    """A free function or method signature. Immutable and hashable."""
    name: str
    return_type: str = ""
    parameters: tuple[str, ...] = ()
    comments: tuple[str, ...] = ()
    line_number: int = 0
    is_private: bool = False

    def __str__(self) -> str:
        prefix = f"{self.return_type} " if self.return_type else ""
        return f"{prefix}{self.name}({', '.join(self.parameters)})"

    @property
    def is_constructor(self) -> bool:
        """True for ``this`` and ``~this``."""
        return self.name in ("this", "~this")

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "return_type": self.return_type,
            "parameters": list(self.parameters),
            "comments": list(self.comments),
            "line_number": self.line_number,
            "is_private": self.is_private,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FunctionDoc":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            return_type=data.get("return_type", ""),
            parameters=tuple(data.get("parameters", ())),
            comments=tuple(data.get("comments", ())),
            line_number=data.get("line_number", 0),
            is_private=data.get("is_private", False),
        )


@dataclass(frozen=True)
class FieldDoc:
    """A field declaration inside a container. Immutable and hashable."""
    declaration: str
    comments: tuple[str, ...] = ()
    line_number: int = 0
    is_private: bool = False

    def __str__(self) -> str:
        return self.declaration

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "declaration": self.declaration,
            "comments": list(self.comments),
            "line_number": self.line_number,
            "is_private": self.is_private,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FieldDoc":
        """Reconstruct from dictionary."""
        return cls(
            declaration=data["declaration"],
            comments=tuple(data.get("comments", ())),
            line_number=data.get("line_number", 0),
            is_private=data.get("is_private", False),
        )


@dataclass(frozen=True)
class ClassDoc:
    """A class, struct or interface with its depth-1 members."""
    name: str
    type: ContainerKind
    comments: tuple[str, ...] = ()
    methods: tuple[FunctionDoc, ...] = ()
    fields: tuple[FieldDoc, ...] = ()
    line_number: int = 0

    def __str__(self) -> str:
        return f"{self.type.value} {self.name}"

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "type": self.type.value,
            "comments": list(self.comments),
            "methods": [m.to_dict() for m in self.methods],
            "fields": [f.to_dict() for f in self.fields],
            "line_number": self.line_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClassDoc":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            type=ContainerKind(data["type"]),
            comments=tuple(data.get("comments", ())),
            methods=tuple(FunctionDoc.from_dict(m) for m in data.get("methods", ())),
            fields=tuple(FieldDoc.from_dict(f) for f in data.get("fields", ())),
            line_number=data.get("line_number", 0),
        )


@dataclass(frozen=True)
class EnumMemberDoc:
    """One member of an enum. ``value`` is empty when implicit."""
    name: str
    value: str = ""
    comments: tuple[str, ...] = ()
    line_number: int = 0

    def __str__(self) -> str:
        if self.value:
            return f"{self.name} = {self.value}"
        return self.name

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "value": self.value,
            "comments": list(self.comments),
            "line_number": self.line_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EnumMemberDoc":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            value=data.get("value", ""),
            comments=tuple(data.get("comments", ())),
            line_number=data.get("line_number", 0),
        )


@dataclass(frozen=True)
class EnumDoc:
    """A named enum and its members."""
    name: str
    comments: tuple[str, ...] = ()
    members: tuple[EnumMemberDoc, ...] = ()
    line_number: int = 0

    def __str__(self) -> str:
        return f"enum {self.name}"

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "comments": list(self.comments),
            "members": [m.to_dict() for m in self.members],
            "line_number": self.line_number,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "EnumDoc":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            comments=tuple(data.get("comments", ())),
            members=tuple(EnumMemberDoc.from_dict(m) for m in data.get("members", ())),
            line_number=data.get("line_number", 0),
        )


@dataclass(frozen=True)
class ModuleDoc:
    """
    The documentation tree of one source file.

    ``name`` is the explicit ``module`` declaration when present, otherwise
    the file name without its extension.
    """
    name: str
    filepath: Path
    comments: tuple[str, ...] = ()
    imports: tuple[str, ...] = ()
    functions: tuple[FunctionDoc, ...] = ()
    classes: tuple[ClassDoc, ...] = ()
    enums: tuple[EnumDoc, ...] = ()

    def __str__(self) -> str:
        return (
            f"ModuleDoc({self.name}, {len(self.classes)} classes, "
            f"{len(self.enums)} enums, {len(self.functions)} functions)"
        )

    @property
    def type_names(self) -> frozenset[str]:
        """Names of all classes and enums declared in this module."""
        return frozenset(c.name for c in self.classes) | frozenset(e.name for e in self.enums)

    def to_dict(self) -> dict:
        """JSON-serializable representation."""
        return {
            "name": self.name,
            "filepath": str(self.filepath),
            "comments": list(self.comments),
            "imports": list(self.imports),
            "functions": [f.to_dict() for f in self.functions],
            "classes": [c.to_dict() for c in self.classes],
            "enums": [e.to_dict() for e in self.enums],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ModuleDoc":
        """Reconstruct from dictionary."""
        return cls(
            name=data["name"],
            filepath=Path(data["filepath"]),
            comments=tuple(data.get("comments", ())),
            imports=tuple(data.get("imports", ())),
            functions=tuple(FunctionDoc.from_dict(f) for f in data.get("functions", ())),
            classes=tuple(ClassDoc.from_dict(c) for c in data.get("classes", ())),
            enums=tuple(EnumDoc.from_dict(e) for e in data.get("enums", ())),
        )
