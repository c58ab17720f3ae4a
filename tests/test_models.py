"""
Tests for model serialization round-trips.

Verifies that all models can be serialized to dict and reconstructed
without data loss.
"""
import json
from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from ceres.models import (
    ClassDoc,
    ContainerKind,
    EnumDoc,
    EnumMemberDoc,
    FieldDoc,
    FunctionDoc,
    ModuleDoc,
)


def make_module() -> ModuleDoc:
    widget = ClassDoc(
        name="Widget",
        type=ContainerKind.CLASS,
        comments=("A widget.",),
        methods=(
            FunctionDoc("this", "", ("int size",), line_number=4),
            FunctionDoc("draw", "void", (), ("Draws it.",), 7),
        ),
        fields=(FieldDoc("private int size;", line_number=3, is_private=True),),
        line_number=2,
    )
    color = EnumDoc(
        name="Color",
        comments=("Colors.",),
        members=(EnumMemberDoc("Red", line_number=11), EnumMemberDoc("Blue", "3", ("Sky.",), 12)),
        line_number=10,
    )
    return ModuleDoc(
        name="ui.widget",
        filepath=Path("source/ui/widget.d"),
        comments=("Widgets.",),
        imports=("import std.stdio;",),
        functions=(FunctionDoc("make", "Widget", ("int size",), line_number=20),),
        classes=(widget,),
        enums=(color,),
    )


class TestFunctionDoc:
    """Tests for FunctionDoc model."""

    def test_round_trip(self):
        """All fields survive to_dict/from_dict."""
        original = FunctionDoc("add", "int", ("int a", "int b"), ("Adds.",), 5, True)
        assert FunctionDoc.from_dict(original.to_dict()) == original

    def test_to_dict_uses_lists(self):
        """Sequences become lists for JSON compatibility."""
        data = FunctionDoc("f", parameters=("int x",)).to_dict()
        assert data["parameters"] == ["int x"]
        assert data["comments"] == []

    def test_from_dict_defaults(self):
        """Missing optional keys fall back to defaults."""
        func = FunctionDoc.from_dict({"name": "f"})
        assert func.return_type == ""
        assert func.parameters == ()
        assert func.is_private is False

    def test_is_constructor(self):
        """this and ~this are constructors."""
        assert FunctionDoc("this").is_constructor
        assert FunctionDoc("~this").is_constructor
        assert not FunctionDoc("thisOne").is_constructor

    def test_str(self):
        """String form reads like a signature."""
        assert str(FunctionDoc("add", "int", ("int a", "int b"))) == "int add(int a, int b)"
        assert str(FunctionDoc("this", "", ("int x",))) == "this(int x)"

    def test_frozen(self):
        """Models are immutable."""
        func = FunctionDoc("f")
        with pytest.raises(FrozenInstanceError):
            func.name = "g"


class TestContainers:
    """Tests for ClassDoc and EnumDoc."""

    def test_class_round_trip(self):
        """Methods and fields are reconstructed."""
        widget = make_module().classes[0]
        restored = ClassDoc.from_dict(widget.to_dict())
        assert restored == widget
        assert restored.type is ContainerKind.CLASS

    def test_class_type_serialized_as_keyword(self):
        """Container kind is stored as its keyword."""
        assert make_module().classes[0].to_dict()["type"] == "class"

    def test_enum_round_trip(self):
        """Members keep values and comments."""
        color = make_module().enums[0]
        assert EnumDoc.from_dict(color.to_dict()) == color
        assert [m.name for m in color.members] == ["Red", "Blue"]
        assert str(color.members[1]) == "Blue = 3"

    def test_str(self):
        """Containers print as keyword and name."""
        module = make_module()
        assert str(module.classes[0]) == "class Widget"
        assert str(module.enums[0]) == "enum Color"


class TestModuleDoc:
    """Tests for ModuleDoc model."""

    def test_round_trip_through_json(self):
        """A module survives a JSON dump and load."""
        original = make_module()
        restored = ModuleDoc.from_dict(json.loads(json.dumps(original.to_dict())))
        assert restored == original
        assert isinstance(restored.filepath, Path)

    def test_to_dict_converts_path_to_string(self):
        """Paths are stored as strings."""
        assert make_module().to_dict()["filepath"] == str(Path("source/ui/widget.d"))

    def test_type_names(self):
        """Classes and enums both contribute linkable names."""
        assert make_module().type_names == frozenset({"Widget", "Color"})

    def test_hashable(self):
        """Frozen trees can be used as dict keys."""
        assert {make_module(): 1}[make_module()] == 1
