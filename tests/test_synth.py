import pytest

from gorepl.classify import Category
from gorepl.errors import UnsupportedDeclaration
from gorepl.synth import (
    detect_imports,
    local_var_names,
    package_var_name,
    render_imports,
    render_program,
)


def split_stores(types=(), package_vars=(), functions=(), local_vars=()):
    return {
        "types": list(types),
        "package_vars": list(package_vars),
        "functions": list(functions),
        "local_vars": list(local_vars),
    }


def test_package_var_name():
    assert package_var_name("var g = 10") == "g"
    assert package_var_name("var g int = 10") == "g"
    assert package_var_name("var g=10") == "g"


@pytest.mark.parametrize("fragment", ["var a, b = 1, 2", "var (\n    a = 1\n)", "var  "])
def test_unsupported_package_var(fragment):
    with pytest.raises(UnsupportedDeclaration):
        package_var_name(fragment)


def test_local_var_names():
    assert local_var_names("x := 5") == ["x"]
    assert local_var_names("a, b := 1, 2") == ["a", "b"]


def test_local_binding_inside_statement_is_unsupported():
    with pytest.raises(UnsupportedDeclaration):
        local_var_names("for i := 0; i < 3; i++ {\n}")


def test_detect_imports():
    assert detect_imports('strings.ToUpper("a") + math.Pi') == ["math", "strings"]
    assert detect_imports("rand.Intn(10)") == ["math/rand"]
    assert detect_imports("pos.x + 1") == []


def test_render_imports():
    assert render_imports([]) == ""
    assert render_imports(["fmt"]) == 'import "fmt"'
    assert render_imports(["fmt", "strings"]) == 'import (\n    "fmt"\n    "strings"\n)'


def test_type_declaration_program():
    source = render_program(
        split_stores(types=["type Point struct { X int; Y int }"]),
        Category.TYPE_DECL, "type Point struct { X int; Y int }")
    assert source == (
        "package main\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "type Point struct { X int; Y int }\n"
        "\n"
        "func main() {\n"
        '    fmt.Println("Type defined successfully")\n'
        "}\n"
    )


def test_local_var_program():
    source = render_program(split_stores(local_vars=["x := 5"]), Category.LOCAL_VAR, "x := 5")
    assert source == (
        "package main\n"
        "\n"
        'import "fmt"\n'
        "\n"
        "func main() {\n"
        "    x := 5\n"
        "    _ = x\n"
        '    fmt.Printf("Variable declared: %v\\n", x)\n'
        "}\n"
    )


def test_package_var_program():
    source = render_program(split_stores(package_vars=["var g = 10"]), Category.PACKAGE_VAR, "var g = 10")
    assert "var g = 10\n\nfunc main() {" in source
    assert '    fmt.Printf("Variable declared: %v\\n", g)\n' in source


def test_function_program():
    source = render_program(
        split_stores(functions=["func add(a, b int) int { return a + b }"]),
        Category.FUNCTION_DECL, "func add(a, b int) int { return a + b }")
    assert "func add(a, b int) int { return a + b }\n\nfunc main() {" in source
    assert 'fmt.Println("Function defined successfully")' in source


def test_statement_goes_last_in_main():
    source = render_program(
        split_stores(local_vars=["x := 5"]), Category.STATEMENT, "fmt.Println(x * 2)")
    assert source.endswith("    x := 5\n    _ = x\n    fmt.Println(x * 2)\n}\n")


def test_statement_without_imports():
    source = render_program(split_stores(), Category.STATEMENT, 'println("hi")')
    assert source == 'package main\n\nfunc main() {\n    println("hi")\n}\n'


def test_static_imports():
    source = render_program(split_stores(), Category.STATEMENT, 'println("hi")', static_imports=True)
    assert 'import "fmt"' in source


def test_imports_detected_across_stores():
    source = render_program(
        split_stores(functions=['func up(s string) string { return strings.ToUpper(s) }']),
        Category.STATEMENT, 'fmt.Println(up("go"))')
    assert 'import (\n    "fmt"\n    "strings"\n)' in source


def test_layering_order():
    source = render_program(
        split_stores(types=["type T int"], package_vars=["var g = 1"],
                     functions=["func f() {}"], local_vars=["x := 2"]),
        Category.STATEMENT, "f()")
    positions = [source.index(text) for text in
                 ("type T int", "var g = 1", "func f() {}", "func main() {", "x := 2", "f()\n}")]
    assert positions == sorted(positions)


def test_merged_layout_puts_vars_in_main():
    stores = {"types": [], "vars": ["var g = 10", "x := 5"], "functions": []}
    source = render_program(stores, Category.LOCAL_VAR, "x := 5", layout="merged")
    assert source.endswith(
        "func main() {\n"
        "    var g = 10\n"
        "    x := 5\n"
        "    _ = g\n"
        "    _ = x\n"
        '    fmt.Printf("Variable declared: %v\\n", x)\n'
        "}\n"
    )


def test_rendering_is_repeatable():
    stores = split_stores(types=["type T int"], local_vars=["x := T(1)"])
    first = render_program(stores, Category.STATEMENT, "fmt.Println(x)")
    second = render_program(stores, Category.STATEMENT, "fmt.Println(x)")
    assert first == second


def test_one_verb_per_local_name():
    stores = split_stores(local_vars=["a, b := 1, 2"])
    source = render_program(stores, Category.LOCAL_VAR, "a, b := 1, 2")
    line = next(l for l in source.splitlines() if "Variable declared" in l)
    assert line == '    fmt.Printf("Variable declared: %v, %v\\n", a, b)'
    assert line.count("%v") == len(local_var_names("a, b := 1, 2"))


@pytest.mark.parametrize("fragment", [
    "if x > 0 {\n  y := 1\n}",
    "for i := 0; i < 3; i++ {\n}",
    "switch v := f(); v {\n}",
])
def test_control_flow_binding_message(fragment):
    with pytest.raises(UnsupportedDeclaration, match="control-flow blocks containing := are not supported"):
        local_var_names(fragment)
