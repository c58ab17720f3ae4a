"""
Tests for function signature classification and parsing.
"""
import pytest

from ceres.extractors.declarations import (
    SIGNATURE_CHECKS,
    check_assignment,
    check_constructor,
    check_control_flow,
    check_parentheses,
    check_signature_shape,
    find_parameter_paren,
    is_function,
    is_private_declaration,
    is_valid_identifier,
    parse_function,
)


class TestIsFunction:
    """Tests for the full classifier."""

    @pytest.mark.parametrize("line", [
        "public int compute(int a, int b)",
        "auto run()",
        "this(string s)",
        "~this()",
        "private this(int x)",
        "static ~this()",
        "void draw();",
        "string[] names() const",
        "int* find(int key)",
        "Widget create(string name)",
        "@property int size()",
        "@safe void check()",
        "T max(T)(T a, T b)",
        'extern(C) int printf(const char* fmt, ...);',
        "synchronized void update()",
        "int getCount() { return count; } // inline",
        "run()",
    ])
    def test_accepts_signatures(self, line):
        """Signature lines are recognized."""
        assert is_function(line)

    @pytest.mark.parametrize("line", [
        "if (x > 0)",
        "} else if (y) {",
        "else if (y)",
        "return foo();",
        "x = bar(1,2);",
        "int x = f(y);",
        "auto w = new Widget(1);",
        "foreach (i; 0 .. 10)",
        "static if (is(T == int))",
        "static assert(x);",
        "synchronized (mutex)",
        "scope(exit) close();",
        "import std.stdio;",
        "class Foo(T)",
        "enum isSmall(T) = T.sizeof < 4;",
        "writer.put(x);",
        "int x;",
        "assert(a == b);",
        "mixin(code);",
    ])
    def test_rejects_non_signatures(self, line):
        """Statements and other declarations are rejected."""
        assert not is_function(line)


class TestSignatureChecks:
    """Each check is usable on its own."""

    def test_checks_are_ordered(self):
        """Checks run in a fixed priority order."""
        assert [name for name, _ in SIGNATURE_CHECKS] == [
            "parentheses",
            "constructor",
            "control_flow",
            "assignment",
            "signature_shape",
        ]

    def test_parentheses(self):
        """Lines need an opening and a later closing parenthesis."""
        assert check_parentheses("int x;") is False
        assert check_parentheses("void f(") is False
        assert check_parentheses(") (") is False
        assert check_parentheses("void f()") is None

    def test_constructor(self):
        """this/~this accept with or without access modifier."""
        assert check_constructor("this(int x)") is True
        assert check_constructor("public this()") is True
        assert check_constructor("~this()") is True
        assert check_constructor("thisThing()") is None

    def test_control_flow(self):
        """Keywords are matched as whole leading tokens."""
        assert check_control_flow("while (x)") is False
        assert check_control_flow("struct S(T)") is False
        assert check_control_flow("static foreach (x; xs)") is False
        assert check_control_flow("iffy()") is None
        assert check_control_flow("static int f()") is None

    def test_assignment(self):
        """Assignments before the parenthesis are rejected unless typed."""
        assert check_assignment("x = f()") is False
        assert check_assignment("auto x = f()") is None
        assert check_assignment("int f(int a = 1)") is None
        assert check_assignment("void f()") is None

    def test_signature_shape(self):
        """Shape check on the tokens before the parameter list."""
        assert check_signature_shape("a.b()") is False
        assert check_signature_shape("(x)") is False
        assert check_signature_shape("int f()") is True
        assert check_signature_shape("Foo bar()") is True
        assert check_signature_shape("3x()") is False
        assert check_signature_shape("int 3x()") is False


class TestHelpers:
    """Tests for identifier and parenthesis helpers."""

    @pytest.mark.parametrize("ident, valid", [
        ("foo", True),
        ("_bar9", True),
        ("Widget", True),
        ("9lives", False),
        ("a-b", False),
        ("", False),
        ("~this", False),
    ])
    def test_is_valid_identifier(self, ident, valid):
        """Letters, digits and underscores, not starting with a digit."""
        assert is_valid_identifier(ident) is valid

    def test_find_parameter_paren_skips_linkage(self):
        """extern(C) argument is not the parameter list."""
        line = "extern(C) int f(int x)"
        assert find_parameter_paren(line) == line.index("f(") + 1
        assert find_parameter_paren("int g(int x)") == 5
        assert find_parameter_paren("int x;") == -1

    def test_is_private_declaration(self):
        """Leading private keyword, but not private(pkg)."""
        assert is_private_declaration("private int x;")
        assert is_private_declaration("private static void f()")
        assert not is_private_declaration("public int x;")
        assert not is_private_declaration("private(pkg) int x;")
        assert not is_private_declaration("int privateCount;")


class TestParseFunction:
    """Tests for extracting signature parts."""

    def test_basic(self):
        """Name, return type and parameters."""
        func = parse_function("public int compute(int a, int b)", ["Adds."], 12)
        assert func.name == "compute"
        assert func.return_type == "public int"
        assert func.parameters == ("int a", "int b")
        assert func.comments == ("Adds.",)
        assert func.line_number == 12
        assert not func.is_private

    def test_constructor_has_no_return_type(self):
        """this and ~this have an empty return type."""
        assert parse_function("this(string s)").return_type == ""
        assert parse_function("static ~this()").return_type == ""
        assert parse_function("~this()").name == "~this"

    def test_lone_name_returns_void(self):
        """A name without type tokens defaults to void."""
        func = parse_function("run()")
        assert func.name == "run"
        assert func.return_type == "void"
        assert func.parameters == ()

    def test_template_function_uses_runtime_parameters(self):
        """The second parenthesis group holds the parameters."""
        func = parse_function("T max(T)(T a, T b)")
        assert func.name == "max"
        assert func.parameters == ("T a", "T b")

    def test_nested_parameter_commas(self):
        """Commas inside default values do not split parameters."""
        func = parse_function('void f(int[] xs = [1, 2], string s = "a,b")')
        assert func.parameters == ("int[] xs = [1, 2]", 'string s = "a,b"')

    def test_extern_linkage(self):
        """Linkage attribute is part of the return type."""
        func = parse_function("extern(C) int printf(const char* fmt, ...);")
        assert func.name == "printf"
        assert func.return_type == "extern(C) int"
        assert func.parameters == ("const char* fmt", "...")

    def test_private_method(self):
        """Privacy comes from the leading keyword."""
        assert parse_function("private void helper() {}").is_private

    def test_trailing_comment_ignored(self):
        """Line comments are not part of the signature."""
        func = parse_function("void f(int x) // (not params)")
        assert func.parameters == ("int x",)

    def test_no_parenthesis(self):
        """Lines without a parameter list do not parse."""
        assert parse_function("int x;") is None
