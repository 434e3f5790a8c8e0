"""Fragment classification by lexical prefix, first matching rule wins."""
from enum import Enum


class Category(Enum):
    TYPE_DECL = "type"
    PACKAGE_VAR = "package_var"
    FUNCTION_DECL = "function"
    LOCAL_VAR = "local_var"
    STATEMENT = "statement"


ENTRY_POINT = "func main"

RULES = [
    (lambda code: code.startswith("type "), Category.TYPE_DECL),
    (lambda code: code.startswith("var "), Category.PACKAGE_VAR),
    (lambda code: code.startswith("func ") and not code.startswith(ENTRY_POINT),
     Category.FUNCTION_DECL),
    (lambda code: ":=" in code, Category.LOCAL_VAR),
]


def classify(fragment: str) -> Category:
    code = fragment.strip()
    for matches, category in RULES:
        if matches(code):
            return category
    return Category.STATEMENT
