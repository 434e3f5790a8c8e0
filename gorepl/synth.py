"""Program synthesis: turn the accumulated declarations into a Go program.

Every submission renders a fresh `main.go`. All previously accepted
fragments are layered in store order beneath the new fragment; nothing is
parsed beyond the variable name needed for the diagnostic print.
"""
import re

from lark import Lark, Transformer
from lark.exceptions import LarkError

from .classify import Category
from .errors import UnsupportedDeclaration

INDENT = "    "

TYPE_DEFINED = 'fmt.Println("Type defined successfully")'
FUNCTION_DEFINED = 'fmt.Println("Function defined successfully")'
VARIABLE_DECLARED = 'fmt.Printf("Variable declared: {verbs}\\n", {names})'
CONTROL_KEYWORDS = ("if", "for", "switch", "select")

# import path -> qualifier looked for in the source
KNOWN_PACKAGES = {
    "bytes": "bytes",
    "errors": "errors",
    "fmt": "fmt",
    "math": "math",
    "math/rand": "rand",
    "os": "os",
    "sort": "sort",
    "strconv": "strconv",
    "strings": "strings",
    "time": "time",
    "unicode": "unicode",
}
STATIC_IMPORTS = ["fmt"]

binding_grammar = r"""
    start: NAME ("," NAME)*

    %import common.CNAME -> NAME
    %import common.WS_INLINE
    %ignore WS_INLINE
"""


class BindingNames(Transformer):
    def start(self, names):
        return [str(name) for name in names]


binding_parser = Lark(binding_grammar, parser="lalr", transformer=BindingNames())


def parse_names(text):
    try:
        return binding_parser.parse(text.strip())
    except LarkError:
        raise UnsupportedDeclaration(
            f"Unsupported declaration: cannot take a variable name from {text.strip()!r}")


def package_var_name(fragment):
    """`var g = 10` -> `g`. Only one name per `var` is supported."""
    words = fragment.strip().split()
    token = words[1].split("=")[0] if len(words) > 1 else ""
    names = parse_names(token)
    if len(names) != 1:
        raise UnsupportedDeclaration(
            f"Unsupported declaration: declare one variable per 'var' ({fragment.strip()!r})")
    return names[0]


def local_var_names(fragment):
    """`a, b := f()` -> ['a', 'b']"""
    words = fragment.strip().split()
    if words and words[0] in CONTROL_KEYWORDS:
        raise UnsupportedDeclaration(
            f"Unsupported declaration: control-flow blocks containing := are not supported ({words[0]!r})")
    return parse_names(fragment.split(":=")[0])


def binding_names(fragment):
    if fragment.strip().startswith("var "):
        return [package_var_name(fragment)]
    return local_var_names(fragment)


def detect_imports(code):
    found = []
    for path, qualifier in sorted(KNOWN_PACKAGES.items()):
        if re.search(r"\b%s\." % re.escape(qualifier), code):
            found.append(path)
    return found


def render_imports(paths):
    if not paths:
        return ""
    if len(paths) == 1:
        return f'import "{paths[0]}"'
    lines = "\n".join(f'{INDENT}"{path}"' for path in paths)
    return f"import (\n{lines}\n)"


def indent_block(entries):
    return [INDENT + entry for entry in entries]


def render_program(stores, category, fragment, layout="split", static_imports=False):
    """Render the Program Image for `fragment`.

    `stores` maps store names to their ordered fragment lists and must
    already include `fragment` when its category is persisted.
    """
    types = stores.get("types", [])
    functions = stores.get("functions", [])
    if layout == "merged":
        package_vars = []
        body_vars = stores.get("vars", [])
    else:
        package_vars = stores.get("package_vars", [])
        body_vars = stores.get("local_vars", [])

    body = indent_block(body_vars)
    # Go rejects unused locals, so every accepted binding gets touched once
    for entry in body_vars:
        body.extend(INDENT + f"_ = {name}" for name in binding_names(entry))

    if category is Category.TYPE_DECL:
        body.append(INDENT + TYPE_DEFINED)
    elif category is Category.FUNCTION_DECL:
        body.append(INDENT + FUNCTION_DEFINED)
    elif category in (Category.PACKAGE_VAR, Category.LOCAL_VAR):
        names = binding_names(fragment)
        verbs = ", ".join(["%v"] * len(names))
        body.append(INDENT + VARIABLE_DECLARED.format(verbs=verbs, names=", ".join(names)))
    else:
        body.append(INDENT + fragment)

    declarations = ["\n".join(store) for store in (types, package_vars, functions) if store]
    main_block = "func main() {\n" + "\n".join(body) + "\n}"

    if static_imports:
        imports = STATIC_IMPORTS
    else:
        imports = detect_imports("\n".join(declarations + [main_block]))

    sections = ["package main", render_imports(imports)] + declarations + [main_block]
    return "\n\n".join(section for section in sections if section) + "\n"
