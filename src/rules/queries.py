"""Read-only queries over a syntax tree shared by the detectors.

All helpers are pure functions of the tree they are given. Nothing is
cached between calls, so detectors stay idempotent and can run on
several files concurrently.
"""

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from src.lint.frontend import SyntaxTree, node_key
from src.models.diagnostics import Finding
from src.rules.vocabulary import HTML_TAGS

FUNCTION_TYPES = frozenset({
    "function_declaration",
    "function_expression",
    "function",
    "arrow_function",
    "method_definition",
    "generator_function_declaration",
    "generator_function",
})

JSX_ELEMENT_TYPES = frozenset({"jsx_element", "jsx_self_closing_element", "jsx_fragment"})

# Expression wrappers that never change the value of what they wrap
WRAPPER_TYPES = frozenset({
    "parenthesized_expression",
    "as_expression",
    "satisfies_expression",
    "non_null_expression",
    "type_assertion",
})

SCOPE_TYPES = FUNCTION_TYPES | {
    "program",
    "statement_block",
    "switch_body",
    "for_statement",
    "for_in_statement",
    "catch_clause",
}

DECLARATION_TYPES = frozenset({"lexical_declaration", "variable_declaration"})

CLASS_TYPES = frozenset({"class_declaration", "abstract_class_declaration", "class", "class_body"})

NAMED_DECLARATION_TYPES = frozenset({
    "function_declaration",
    "generator_function_declaration",
    "class_declaration",
    "abstract_class_declaration",
    "enum_declaration",
})


def report(tree: SyntaxTree, rule_id: str, node, message: str) -> Finding:
    """Build a finding located at ``node``."""
    return Finding(rule_id=rule_id, span=tree.span(node), message=message)


# ---------------------------------------------------------------------------
# Generic node access
# ---------------------------------------------------------------------------


def named_children(node) -> list:
    """Named children without comments."""
    if node is None:
        return []
    return [child for child in node.named_children if child.type != "comment"]


def first_named(node):
    children = named_children(node)
    return children[0] if children else None


def has_keyword(node, keyword: str) -> bool:
    """True if ``node`` has an anonymous child token ``keyword``."""
    return any(not child.is_named and child.type == keyword for child in node.children)


def same_node(a, b) -> bool:
    return a is not None and b is not None and node_key(a) == node_key(b)


def contains(outer, inner) -> bool:
    """True if ``inner`` lies within ``outer`` (inclusive)."""
    return outer.start_byte <= inner.start_byte and inner.end_byte <= outer.end_byte


def unwrap(node):
    """Strip parentheses, type assertions and non-null assertions."""
    while node is not None and node.type in WRAPPER_TYPES:
        children = named_children(node)
        if not children:
            return node
        node = children[-1] if node.type == "type_assertion" else children[0]
    return node


def parent_skipping_wrappers(node):
    parent = node.parent
    while parent is not None and parent.type in WRAPPER_TYPES:
        parent = parent.parent
    return parent


def ancestors(node) -> Iterator:
    parent = node.parent
    while parent is not None:
        yield parent
        parent = parent.parent


def member_path(tree: SyntaxTree, node) -> str | None:
    """Dotted path of an identifier or member chain such as ``Promise.reject``."""
    node = unwrap(node)
    if node is None:
        return None
    if node.type in ("identifier", "this"):
        return tree.text(node)
    if node.type == "member_expression":
        obj = member_path(tree, node.child_by_field_name("object"))
        prop = node.child_by_field_name("property")
        if obj is None or prop is None:
            return None
        return f"{obj}.{tree.text(prop)}"
    return None


def root_identifier(node):
    """The identifier at the base of a member or subscript chain."""
    node = unwrap(node)
    while node is not None and node.type in ("member_expression", "subscript_expression"):
        node = unwrap(node.child_by_field_name("object"))
    if node is not None and node.type == "identifier":
        return node
    return None


# ---------------------------------------------------------------------------
# Calls
# ---------------------------------------------------------------------------


def call_arguments(call) -> list:
    arguments = call.child_by_field_name("arguments")
    if arguments is None or arguments.type != "arguments":
        return []
    return named_children(arguments)


def callee_node(call):
    if call.type == "new_expression":
        return unwrap(call.child_by_field_name("constructor"))
    return unwrap(call.child_by_field_name("function"))


def callee_name(tree: SyntaxTree, call) -> str | None:
    """Name of the called function: ``f`` for ``f()`` and ``a.b.f()``."""
    callee = callee_node(call)
    if callee is None:
        return None
    if callee.type == "identifier":
        return tree.text(callee)
    if callee.type == "member_expression":
        prop = callee.child_by_field_name("property")
        return tree.text(prop) if prop is not None else None
    return None


def calls_named(tree: SyntaxTree, names, root=None) -> list:
    """Call expressions whose callee name is one of ``names``."""
    wanted = set(names)
    return [
        call for call in tree.find_nodes("call_expression", root=root)
        if callee_name(tree, call) in wanted
    ]


# ---------------------------------------------------------------------------
# Literals
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class StaticValue:
    """A value known at analysis time."""

    value: str | int | float | bool | None


def string_value(tree: SyntaxTree, node) -> str | None:
    """Contents of a string literal or a substitution-free template."""
    node = unwrap(node)
    if node is None:
        return None
    if node.type == "string":
        return tree.text(node)[1:-1]
    if node.type == "template_string":
        if any(child.type == "template_substitution" for child in node.named_children):
            return None
        return tree.text(node)[1:-1]
    return None


def _number(text: str) -> int | float | None:
    text = text.replace("_", "")
    try:
        return int(text, 0)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return None


def static_value(tree: SyntaxTree, node, resolve: bool = True, _depth: int = 0) -> StaticValue | None:
    """Statically known value of a literal, following ``const`` bindings.

    Returns None when the value cannot be known without running the code.
    """
    node = unwrap(node)
    if node is None:
        return None

    text = string_value(tree, node)
    if text is not None:
        return StaticValue(text)

    if node.type == "number":
        number = _number(tree.text(node))
        return StaticValue(number) if number is not None else None
    if node.type in ("true", "false"):
        return StaticValue(node.type == "true")
    if node.type == "null":
        return StaticValue(None)
    if node.type == "unary_expression" and tree.text(node.child_by_field_name("operator")) == "-":
        inner = static_value(tree, node.child_by_field_name("argument"), resolve, _depth)
        if inner is not None and isinstance(inner.value, (int, float)) and not isinstance(inner.value, bool):
            return StaticValue(-inner.value)
        return None

    if node.type == "identifier" and resolve and _depth < 8:
        declaration = resolve_binding(tree, node)
        if is_const_declarator(tree, declaration):
            name = declaration.child_by_field_name("name")
            value = declaration.child_by_field_name("value")
            if name is not None and name.type == "identifier" and value is not None:
                return static_value(tree, value, resolve, _depth + 1)
    return None


# ---------------------------------------------------------------------------
# Objects and patterns
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ObjectProperty:
    """One entry of an object literal."""

    name: str | None
    key: Any
    node: Any
    value: Any = None
    spread: bool = False


def property_name(tree: SyntaxTree, key) -> str | None:
    if key is None:
        return None
    if key.type in ("property_identifier", "identifier", "private_property_identifier",
                    "shorthand_property_identifier", "number"):
        return tree.text(key)
    if key.type == "string":
        return string_value(tree, key)
    if key.type == "computed_property_name":
        inner = static_value(tree, first_named(key), resolve=False)
        if inner is not None and isinstance(inner.value, str):
            return inner.value
    return None


def object_properties(tree: SyntaxTree, obj) -> list[ObjectProperty]:
    """Entries of an object literal in source order."""
    properties = []
    for child in named_children(obj):
        if child.type == "pair":
            key = child.child_by_field_name("key")
            properties.append(ObjectProperty(
                property_name(tree, key), key, child, child.child_by_field_name("value"),
            ))
        elif child.type == "shorthand_property_identifier":
            properties.append(ObjectProperty(tree.text(child), child, child, child))
        elif child.type == "method_definition":
            key = child.child_by_field_name("name")
            properties.append(ObjectProperty(property_name(tree, key), key, child, child))
        elif child.type == "spread_element":
            argument = unwrap(first_named(child))
            name = tree.text(argument) if argument is not None and argument.type == "identifier" else None
            properties.append(ObjectProperty(name, child, child, argument, spread=True))
    return properties


def find_property(tree: SyntaxTree, obj, name: str) -> ObjectProperty | None:
    for prop in object_properties(tree, obj):
        if prop.name == name and not prop.spread:
            return prop
    return None


def misordered_properties(
    props: Sequence[ObjectProperty],
    order: Sequence[tuple[Sequence[str], Sequence[str]]],
) -> list[tuple[ObjectProperty, ObjectProperty]]:
    """Properties that textually precede a property they must follow.

    ``order`` is a chain of ``(earlier, later)`` name groups; a name's rank
    is the first group in the flattened chain that contains it. Unranked
    names never participate. Each misplaced property is paired with the
    first later property that should have come before it.
    """
    groups = [group for pair in order for group in pair]

    def rank(name: str | None) -> int | None:
        for index, group in enumerate(groups):
            if name in group:
                return index
        return None

    ranks = [rank(prop.name) for prop in props]
    misplaced = []
    for i, prop in enumerate(props):
        if ranks[i] is None:
            continue
        for j in range(i + 1, len(props)):
            if ranks[j] is not None and ranks[j] < ranks[i]:
                misplaced.append((prop, props[j]))
                break
    return misplaced


def pattern_identifiers(pattern) -> list:
    """Identifier nodes bound by a (possibly destructuring) pattern."""
    if pattern is None:
        return []
    kind = pattern.type
    if kind in ("identifier", "shorthand_property_identifier_pattern"):
        return [pattern]
    if kind in ("required_parameter", "optional_parameter"):
        return pattern_identifiers(pattern.child_by_field_name("pattern"))
    if kind in ("object_assignment_pattern", "assignment_pattern"):
        return pattern_identifiers(pattern.child_by_field_name("left"))
    if kind == "pair_pattern":
        return pattern_identifiers(pattern.child_by_field_name("value"))
    if kind in ("object_pattern", "array_pattern", "rest_pattern"):
        found = []
        for child in named_children(pattern):
            found.extend(pattern_identifiers(child))
        return found
    return []


def is_destructuring(pattern) -> bool:
    return pattern is not None and pattern.type in ("object_pattern", "array_pattern")


def has_rest_element(pattern) -> bool:
    return pattern is not None and pattern.type == "object_pattern" and any(
        child.type == "rest_pattern" for child in named_children(pattern)
    )


# ---------------------------------------------------------------------------
# Scope resolution
# ---------------------------------------------------------------------------


def is_const_declarator(tree: SyntaxTree, declaration) -> bool:
    if declaration is None or declaration.type != "variable_declarator":
        return False
    statement = declaration.parent
    if statement is None or statement.type != "lexical_declaration":
        return False
    return tree.text(statement.child_by_field_name("kind")) == "const"


def _collect_statement(tree: SyntaxTree, statement, declarations: dict) -> None:
    kind = statement.type
    if kind in DECLARATION_TYPES:
        for declarator in named_children(statement):
            if declarator.type != "variable_declarator":
                continue
            for ident in pattern_identifiers(declarator.child_by_field_name("name")):
                declarations.setdefault(tree.text(ident), declarator)
    elif kind in NAMED_DECLARATION_TYPES:
        name = statement.child_by_field_name("name")
        if name is not None:
            declarations.setdefault(tree.text(name), statement)
    elif kind == "import_statement":
        for binding in _statement_imports(tree, statement):
            declarations.setdefault(binding.local, statement)
    elif kind == "export_statement":
        declaration = statement.child_by_field_name("declaration")
        if declaration is not None:
            _collect_statement(tree, declaration, declarations)
    elif kind == "ambient_declaration":
        for child in named_children(statement):
            _collect_statement(tree, child, declarations)


def scope_declarations(tree: SyntaxTree, scope) -> dict[str, Any]:
    """Names declared directly by ``scope``, mapped to their declaring node."""
    declarations: dict[str, Any] = {}
    kind = scope.type

    if kind in FUNCTION_TYPES:
        for param in function_parameters(scope):
            for ident in pattern_identifiers(param):
                declarations.setdefault(tree.text(ident), param)
        if kind in ("function_expression", "function", "generator_function"):
            name = scope.child_by_field_name("name")
            if name is not None:
                declarations.setdefault(tree.text(name), scope)
    elif kind == "for_statement":
        initializer = scope.child_by_field_name("initializer")
        if initializer is not None:
            _collect_statement(tree, initializer, declarations)
    elif kind == "for_in_statement":
        if scope.child_by_field_name("kind") is not None:
            for ident in pattern_identifiers(scope.child_by_field_name("left")):
                declarations.setdefault(tree.text(ident), scope)
    elif kind == "catch_clause":
        for ident in pattern_identifiers(scope.child_by_field_name("parameter")):
            declarations.setdefault(tree.text(ident), scope)
    elif kind == "switch_body":
        for case in named_children(scope):
            for statement in named_children(case):
                _collect_statement(tree, statement, declarations)
    else:
        for statement in named_children(scope):
            _collect_statement(tree, statement, declarations)
    return declarations


def resolve_binding(tree: SyntaxTree, ident):
    """Find the node declaring the name referenced by ``ident``.

    Returns a ``variable_declarator``, a parameter, a named declaration,
    an ``import_statement`` or a loop/catch clause, or None for globals.
    """
    if ident is None:
        return None
    name = tree.text(ident)
    scope = ident.parent
    while scope is not None:
        if scope.type in SCOPE_TYPES:
            declaration = scope_declarations(tree, scope).get(name)
            if declaration is not None:
                return declaration
        scope = scope.parent
    return None


def declarator_value(declaration):
    if declaration is None or declaration.type != "variable_declarator":
        return None
    return unwrap(declaration.child_by_field_name("value"))


def trace(tree: SyntaxTree, node, _depth: int = 0):
    """Follow identifiers through ``const x = value`` bindings to the value."""
    node = unwrap(node)
    while node is not None and node.type == "identifier" and _depth < 8:
        declaration = resolve_binding(tree, node)
        if not is_const_declarator(tree, declaration):
            break
        name = declaration.child_by_field_name("name")
        value = declarator_value(declaration)
        if name is None or name.type != "identifier" or value is None:
            break
        node = value
        _depth += 1
    return node


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ImportBinding:
    """A local name introduced by an import statement."""

    local: str
    imported: str
    source: str
    type_only: bool
    node: Any


def _statement_imports(tree: SyntaxTree, statement) -> list[ImportBinding]:
    source = string_value(tree, statement.child_by_field_name("source")) or ""
    statement_type_only = has_keyword(statement, "type")
    bindings = []
    for clause in named_children(statement):
        if clause.type != "import_clause":
            continue
        for part in named_children(clause):
            if part.type == "identifier":
                bindings.append(ImportBinding(tree.text(part), "default", source, statement_type_only, part))
            elif part.type == "namespace_import":
                ident = first_named(part)
                if ident is not None:
                    bindings.append(ImportBinding(tree.text(ident), "*", source, statement_type_only, part))
            elif part.type == "named_imports":
                for specifier in named_children(part):
                    if specifier.type != "import_specifier":
                        continue
                    name = specifier.child_by_field_name("name")
                    alias = specifier.child_by_field_name("alias")
                    imported = property_name(tree, name) or tree.text(name)
                    local = tree.text(alias) if alias is not None else imported
                    bindings.append(ImportBinding(
                        local,
                        imported,
                        source,
                        statement_type_only or has_keyword(specifier, "type"),
                        specifier,
                    ))
    return bindings


def import_statements(tree: SyntaxTree) -> list:
    return [node for node in named_children(tree.root) if node.type == "import_statement"]


def import_bindings(tree: SyntaxTree) -> dict[str, ImportBinding]:
    """Every imported local name in the file."""
    bindings = {}
    for statement in import_statements(tree):
        for binding in _statement_imports(tree, statement):
            bindings.setdefault(binding.local, binding)
    return bindings


def library_name(tree: SyntaxTree, ident, source: re.Pattern) -> str | None:
    """Name under which ``ident`` refers to a library export.

    An unbound global counts as the library export of the same name; an
    import from a matching source yields the imported name. A local
    declaration or an import from another source yields None.
    """
    if ident is None or ident.type != "identifier":
        return None
    name = tree.text(ident)
    declaration = resolve_binding(tree, ident)
    if declaration is None:
        return name
    if declaration.type == "import_statement":
        binding = import_bindings(tree).get(name)
        if binding is not None and source.match(binding.source):
            return binding.imported
    return None


def library_callee(tree: SyntaxTree, call, source: re.Pattern) -> str | None:
    """Library export name called by ``call``, if it is a plain identifier call."""
    callee = callee_node(call)
    if callee is None or callee.type != "identifier":
        return None
    return library_name(tree, callee, source)


# ---------------------------------------------------------------------------
# Functions and components
# ---------------------------------------------------------------------------


def is_function(node) -> bool:
    return node is not None and node.type in FUNCTION_TYPES


def is_async(node) -> bool:
    return has_keyword(node, "async")


def function_parameters(fn) -> list:
    """Parameter patterns of a function, unwrapped from their type annotations."""
    single = fn.child_by_field_name("parameter")
    if single is not None:
        return [single]
    params = fn.child_by_field_name("parameters")
    result = []
    for param in named_children(params):
        if param.type in ("required_parameter", "optional_parameter"):
            pattern = param.child_by_field_name("pattern")
            if pattern is not None:
                result.append(pattern)
        elif param.type != "this":
            result.append(param)
    return result


def parameter_nodes(fn) -> list:
    """Parameter nodes as written, including their type annotations."""
    single = fn.child_by_field_name("parameter")
    if single is not None:
        return [single]
    return [
        param for param in named_children(fn.child_by_field_name("parameters"))
        if param.type in ("required_parameter", "optional_parameter")
    ]


def annotated_type(node):
    """The type inside a node's ``: T`` annotation."""
    annotation = node.child_by_field_name("type")
    if annotation is None:
        return None
    if annotation.type == "type_annotation":
        return first_named(annotation)
    return annotation


def function_name(tree: SyntaxTree, fn) -> str | None:
    """Declared name of a function, or the name it is assigned to."""
    name = fn.child_by_field_name("name")
    if name is not None:
        return tree.text(name)
    parent = parent_skipping_wrappers(fn)
    if parent is None:
        return None
    if parent.type == "variable_declarator":
        target = parent.child_by_field_name("name")
        if target is not None and target.type == "identifier":
            return tree.text(target)
    if parent.type == "pair":
        return property_name(tree, parent.child_by_field_name("key"))
    if parent.type == "assignment_expression":
        return member_path(tree, parent.child_by_field_name("left"))
    return None


def enclosing_function(node):
    for ancestor in ancestors(node):
        if ancestor.type in FUNCTION_TYPES:
            return ancestor
    return None


def walk_own(fn) -> Iterator:
    """Nodes of a function body without descending into nested functions.

    Nested functions themselves are yielded so callers can see them.
    """
    body = fn.child_by_field_name("body")
    if body is None:
        return
    stack = [body]
    while stack:
        node = stack.pop()
        yield node
        if node.type in FUNCTION_TYPES:
            continue
        stack.extend(reversed(node.children))


def contains_own_jsx(fn) -> bool:
    return any(node.type in JSX_ELEMENT_TYPES for node in walk_own(fn))


def _inside_jsx_expression(fn) -> bool:
    parent = parent_skipping_wrappers(fn)
    return parent is not None and parent.type == "jsx_expression"


def _lowercase_call_argument(tree: SyntaxTree, fn) -> bool:
    parent = parent_skipping_wrappers(fn)
    if parent is None or parent.type != "arguments":
        return False
    call = parent.parent
    if call is None or call.type not in ("call_expression", "new_expression"):
        return False
    name = callee_name(tree, call)
    return name is not None and re.match(r"^[a-z]", name) is not None


def is_component(tree: SyntaxTree, fn) -> bool:
    """True for a function that renders markup as a component.

    It must contain JSX in its own body, must not be named in lower case,
    must not sit inside a JSX expression and must not be passed to a call
    of a lower-case function such as ``render`` or ``map``.
    """
    if fn.type not in FUNCTION_TYPES or fn.type == "method_definition":
        return False
    name = function_name(tree, fn)
    if name is not None and re.match(r"^[a-z]", name.rsplit(".", 1)[-1]):
        return False
    if _inside_jsx_expression(fn) or _lowercase_call_argument(tree, fn):
        return False
    return contains_own_jsx(fn)


def component_functions(tree: SyntaxTree) -> list:
    return [fn for fn in tree.find_nodes(*FUNCTION_TYPES) if is_component(tree, fn)]


def is_hook_or_component(tree: SyntaxTree, fn) -> bool:
    """Custom hooks (``useX``) and capitalized functions."""
    name = function_name(tree, fn)
    return name is not None and re.match(r"^(use|[A-Z])", name) is not None


def read_references(tree: SyntaxTree, root) -> list:
    """Identifier reads below ``root``.

    Callee names, ``new`` targets, ``instanceof`` operands, declared names
    and property keys are not reads.
    """
    reads = []
    for node in tree.walk(root):
        if node.type == "shorthand_property_identifier":
            reads.append(node)
            continue
        if node.type != "identifier":
            continue
        parent = parent_skipping_wrappers(node)
        if parent is None:
            continue
        if parent.type == "call_expression" and same_node(unwrap(parent.child_by_field_name("function")), node):
            continue
        if parent.type == "new_expression" and same_node(unwrap(parent.child_by_field_name("constructor")), node):
            continue
        if parent.type == "binary_expression" and tree.text(parent.child_by_field_name("operator")) == "instanceof":
            continue
        if parent.type == "variable_declarator" and same_node(parent.child_by_field_name("name"), node):
            continue
        if parent.type in ("required_parameter", "optional_parameter", "object_pattern",
                           "array_pattern", "rest_pattern", "pair_pattern",
                           "object_assignment_pattern", "assignment_pattern"):
            continue
        if parent.type in FUNCTION_TYPES and not same_node(unwrap(parent.child_by_field_name("body")), node):
            continue
        reads.append(node)
    return reads


# ---------------------------------------------------------------------------
# JSX
# ---------------------------------------------------------------------------


def jsx_tag(element):
    """The opening (or self-closing) tag of an element, None for fragments."""
    if element.type == "jsx_element":
        tag = element.child_by_field_name("open_tag")
        if tag is None:
            tag = next((c for c in element.named_children if c.type == "jsx_opening_element"), None)
        return tag
    if element.type in ("jsx_self_closing_element", "jsx_opening_element"):
        return element
    return None


def jsx_tag_name(tree: SyntaxTree, tag) -> str | None:
    if tag is None:
        return None
    name = tag.child_by_field_name("name")
    return tree.text(name) if name is not None else None


def jsx_tags(tree: SyntaxTree) -> list:
    """Every opening and self-closing tag that has a name."""
    return [
        tag for tag in tree.find_nodes("jsx_opening_element", "jsx_self_closing_element")
        if tag.child_by_field_name("name") is not None
    ]


def is_dom_element_name(name: str | None) -> bool:
    return name is not None and (name in HTML_TAGS or re.match(r"^[a-z]", name) is not None)


def jsx_attributes(tag) -> list:
    """Attributes of a tag in order; spread attributes are ``jsx_expression`` nodes."""
    return [
        child for child in named_children(tag)
        if child.type == "jsx_attribute" or (child.type == "jsx_expression" and _is_spread_attribute(child))
    ]


def _is_spread_attribute(node) -> bool:
    inner = first_named(node)
    return inner is not None and inner.type == "spread_element"


def jsx_attribute_name_node(attribute):
    return first_named(attribute)


def jsx_attribute_name(tree: SyntaxTree, attribute) -> str | None:
    if attribute.type != "jsx_attribute":
        return None
    name = jsx_attribute_name_node(attribute)
    return tree.text(name) if name is not None else None


def jsx_attribute_value(attribute):
    """Raw value node of an attribute: a string, a ``jsx_expression`` or an element."""
    children = named_children(attribute)
    return children[1] if len(children) > 1 else None


def jsx_expression_inner(node):
    """Expression inside ``{...}``, or None for an empty container."""
    if node is None or node.type != "jsx_expression":
        return None
    return unwrap(first_named(node))


def jsx_attribute_expression(attribute):
    """The attribute value with any ``{}`` container removed."""
    value = jsx_attribute_value(attribute)
    if value is not None and value.type == "jsx_expression":
        return jsx_expression_inner(value)
    return value


def find_jsx_attribute(tree: SyntaxTree, tag, name: str):
    for attribute in jsx_attributes(tag):
        if jsx_attribute_name(tree, attribute) == name:
            return attribute
    return None


def jsx_children(tree: SyntaxTree, element) -> list:
    """Meaningful children of an element, ignoring whitespace-only text."""
    if element.type not in ("jsx_element", "jsx_fragment"):
        return []
    children = []
    for child in named_children(element):
        if child.type in ("jsx_opening_element", "jsx_closing_element"):
            continue
        if child.type == "jsx_text" and not tree.text(child).strip():
            continue
        children.append(child)
    return children


def jsx_child_expressions(tree: SyntaxTree) -> list:
    """Expressions placed as children of an element, e.g. ``<p>{x}</p>``."""
    expressions = []
    for container in tree.find_nodes("jsx_expression"):
        parent = container.parent
        if parent is None or parent.type not in ("jsx_element", "jsx_fragment"):
            continue
        inner = jsx_expression_inner(container)
        if inner is not None and inner.type != "spread_element":
            expressions.append(inner)
    return expressions
