"""Reactive-component detectors.

Components in a fine-grained reactive UI run once; their props are lazy
getters and their state lives in signals. These rules catch patterns
carried over from re-render based frameworks that silently break that
model.
"""

import re
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.lint.frontend import SyntaxTree, node_key
from src.lint.registry import Rule
from src.models.diagnostics import Finding, RuleCategory, Severity
from src.rules.queries import (
    FUNCTION_TYPES,
    JSX_ELEMENT_TYPES,
    ancestors,
    call_arguments,
    callee_node,
    calls_named,
    component_functions,
    contains,
    contains_own_jsx,
    first_named,
    function_name,
    function_parameters,
    has_keyword,
    import_bindings,
    import_statements,
    is_async,
    is_dom_element_name,
    is_function,
    jsx_attribute_expression,
    jsx_attribute_name,
    jsx_attributes,
    jsx_child_expressions,
    jsx_expression_inner,
    jsx_tag_name,
    jsx_tags,
    library_callee,
    library_name,
    member_path,
    named_children,
    parent_skipping_wrappers,
    report,
    resolve_binding,
    same_node,
    string_value,
    trace,
    unwrap,
    walk_own,
)
from src.rules.vocabulary import (
    DEFERRED_CALLBACK_SCOPES,
    DEPENDENCY_FREE_SCOPES,
    DIRECT_ACCESSOR_CREATORS,
    FUNCTION_TRACKED_SCOPES,
    OBSERVER_CONSTRUCTORS,
    PROPS_DIRECT_CREATORS,
    PROPS_NAME,
    REACTIVE_FUNCTION_NAME,
    SIGNAL_SETTER_CREATORS,
    SIGNAL_TUPLE_CREATORS,
    SOLID_PRIMITIVE_SOURCES,
    SOLID_SOURCE,
    SOLID_TYPE_SOURCES,
    STORE_SOURCE,
    SYNC_CALLBACK_FUNCTIONS,
    SYNC_CALLBACK_METHODS,
    TIMER_FUNCTIONS,
    TRACKED_SCOPES,
    TUPLE_ACCESSOR_CREATORS,
    UNTRACKED_PROP_NAME,
)

COMPONENTS_RETURN_ONCE = "solid/components-return-once"
NO_DESTRUCTURE = "solid/no-destructure"
REACTIVITY = "solid/reactivity"
NO_REACT_DEPS = "solid/no-react-deps"
PREFER_FOR = "solid/prefer-for"
PREFER_SHOW = "solid/prefer-show"
IMPORTS = "solid/imports"
NO_PROXY_APIS = "solid/no-proxy-apis"


def _is_conditional(tree: SyntaxTree, node) -> bool:
    node = unwrap(node)
    if node is None:
        return False
    if node.type == "ternary_expression":
        return True
    return node.type == "binary_expression" and tree.text(node.child_by_field_name("operator")) in ("&&", "||", "??")


def detect_components_return_once(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag early returns and conditional returns in components."""
    early = (
        "Early returns in Solid components break reactivity because the component function is not re-run. "
        "Use <Show /> or <Switch /> / <Match /> instead."
    )
    conditional = (
        "Solid components run once, so a conditional return breaks reactivity. "
        "Move the condition inside a JSX element, such as a fragment or <Show />."
    )
    findings = []

    for fn in component_functions(tree):
        body = fn.child_by_field_name("body")
        if body is None:
            continue
        if body.type != "statement_block":
            if _is_conditional(tree, body):
                findings.append(report(tree, COMPONENTS_RETURN_ONCE, unwrap(body), conditional))
            continue

        statements = named_children(body)
        last = statements[-1] if statements else None
        for node in walk_own(fn):
            if node.type != "return_statement":
                continue
            if not same_node(node, last):
                findings.append(report(tree, COMPONENTS_RETURN_ONCE, node, early))
            elif _is_conditional(tree, first_named(node)):
                findings.append(report(tree, COMPONENTS_RETURN_ONCE, node, conditional))

    return findings


def detect_no_destructure(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag destructuring of a component's props, in the signature or the body."""
    message = (
        "Destructuring component props breaks Solid's reactivity; "
        "use property access instead."
    )
    findings = []

    for fn in component_functions(tree):
        params = function_parameters(fn)
        if not params:
            continue
        props = params[0]
        if props.type == "object_pattern":
            findings.append(report(tree, NO_DESTRUCTURE, props, message))
            continue
        if props.type != "identifier":
            continue

        for node in walk_own(fn):
            if node.type != "variable_declarator":
                continue
            pattern = node.child_by_field_name("name")
            value = unwrap(node.child_by_field_name("value"))
            if pattern is None or pattern.type != "object_pattern":
                continue
            if value is None or value.type != "identifier":
                continue
            if same_node(resolve_binding(tree, value), props):
                findings.append(report(tree, NO_DESTRUCTURE, pattern, message))

    return findings


class ReactivityOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    custom_reactive_functions: list[str] = Field(default_factory=list, alias="customReactiveFunctions")


@dataclass(frozen=True)
class ReactiveVariable:
    """A signal accessor or props-like object and the scope that owns it."""

    name: Any
    declaration: Any
    scope: Any
    kind: str  # "signal" or "props"


@dataclass(frozen=True)
class TrackedScope:
    """Code whose reads are tracked: a callback (``function``/``called-function``) or an ``expression``."""

    node: Any
    expect: str


def _accessor_bindings(tree: SyntaxTree) -> set[tuple]:
    """(declarator, name) pairs bound to a signal, resource or memo accessor."""
    accessors = set()
    for declarator in tree.find_nodes("variable_declarator"):
        value = unwrap(declarator.child_by_field_name("value"))
        pattern = declarator.child_by_field_name("name")
        if value is None or value.type != "call_expression" or pattern is None:
            continue
        creator = library_callee(tree, value, SOLID_SOURCE)
        if creator in TUPLE_ACCESSOR_CREATORS and pattern.type == "array_pattern":
            first = _tuple_element(pattern, 0)
            if first is not None:
                accessors.add((node_key(declarator), tree.text(first)))
        elif creator in DIRECT_ACCESSOR_CREATORS and pattern.type == "identifier":
            accessors.add((node_key(declarator), tree.text(pattern)))
    return accessors


def _is_accessor(tree: SyntaxTree, node, accessors: set[tuple]) -> bool:
    if node is None or node.type != "identifier":
        return False
    declaration = resolve_binding(tree, node)
    return declaration is not None and (node_key(declaration), tree.text(node)) in accessors


def _tuple_element(pattern, index: int):
    """Identifier at position ``index`` of an array pattern, honoring holes."""
    position = 0
    for child in pattern.children[1:]:
        if child.type == ",":
            position += 1
        elif child.type == "comment" or not child.is_named:
            continue
        elif position == index:
            return child if child.type == "identifier" else None
    return None


def _owner_scope(tree: SyntaxTree, node, sync: set):
    """Innermost function around ``node`` that is not a synchronous callback, else the program."""
    for ancestor in ancestors(node):
        if ancestor.type in FUNCTION_TYPES and node_key(ancestor) not in sync:
            return ancestor
    return tree.root


def _props_parameter(tree: SyntaxTree, fn):
    """The props parameter of a component or of a function taking ``props``."""
    if fn.type not in ("function_declaration", "function_expression", "function", "arrow_function"):
        return None
    params = function_parameters(fn)
    if len(params) != 1 or params[0].type != "identifier":
        return None
    parent = parent_skipping_wrappers(fn)
    if parent is not None and parent.type in ("jsx_expression", "template_substitution"):
        return None
    if PROPS_NAME.search(tree.text(params[0])):
        return params[0]
    name = function_name(tree, fn)
    if name is not None and not re.match(r"^[a-z]", name) and contains_own_jsx(fn):
        return params[0]
    return None


def _setter_bindings(tree: SyntaxTree) -> set[tuple]:
    setters = set()
    for declarator in tree.find_nodes("variable_declarator"):
        value = unwrap(declarator.child_by_field_name("value"))
        pattern = declarator.child_by_field_name("name")
        if value is None or value.type != "call_expression" or pattern is None or pattern.type != "array_pattern":
            continue
        if library_callee(tree, value, SOLID_SOURCE) in SIGNAL_SETTER_CREATORS:
            setter = _tuple_element(pattern, 1)
            if setter is not None:
                setters.add((node_key(declarator), tree.text(setter)))
    return setters


def _sync_callbacks(tree: SyntaxTree) -> set:
    """Keys of functions their caller runs synchronously, like ``items.map(fn)``."""
    setters = _setter_bindings(tree)
    sync = set()
    for call in tree.find_nodes("call_expression"):
        callee = callee_node(call)
        if callee is None:
            continue
        arguments = [unwrap(argument) for argument in call_arguments(call)]
        if is_function(callee):
            sync.add(node_key(callee))
        if len(arguments) == 1 and is_function(arguments[0]) and not is_async(arguments[0]):
            if callee.type == "identifier" and library_name(tree, callee, SOLID_SOURCE) in SYNC_CALLBACK_FUNCTIONS:
                sync.add(node_key(arguments[0]))
            elif callee.type == "member_expression":
                receiver = unwrap(callee.child_by_field_name("object"))
                if tree.text(callee.child_by_field_name("property")) in SYNC_CALLBACK_METHODS and (
                    receiver is not None and receiver.type != "object"
                ):
                    sync.add(node_key(arguments[0]))
        if callee.type != "identifier":
            continue
        declaration = resolve_binding(tree, callee)
        if declaration is not None and (node_key(declaration), tree.text(callee)) in setters:
            sync.update(node_key(argument) for argument in arguments if is_function(argument) and not is_async(argument))
        elif library_name(tree, callee, SOLID_SOURCE) in ("mapArray", "indexArray"):
            if len(arguments) > 1 and is_function(arguments[1]):
                sync.add(node_key(arguments[1]))
    return sync


def _reactive_variables(tree: SyntaxTree, sync: set) -> list[ReactiveVariable]:
    variables = []
    for declarator in tree.find_nodes("variable_declarator"):
        value = unwrap(declarator.child_by_field_name("value"))
        pattern = declarator.child_by_field_name("name")
        if value is None or value.type != "call_expression" or pattern is None:
            continue
        creator = library_callee(tree, value, SOLID_SOURCE)
        if creator is None:
            continue
        scope = _owner_scope(tree, declarator, sync)

        if pattern.type == "array_pattern":
            if creator in SIGNAL_TUPLE_CREATORS or creator == "createStore":
                names = [_tuple_element(pattern, 0)]
            elif creator == "splitProps":
                names = [child for child in named_children(pattern) if child.type == "identifier"]
            else:
                names = []
            kind = "signal" if creator in SIGNAL_TUPLE_CREATORS else "props"
            for name in names:
                if name is not None:
                    variables.append(ReactiveVariable(name, declarator, scope, kind))
        elif pattern.type == "identifier":
            if creator in DIRECT_ACCESSOR_CREATORS:
                variables.append(ReactiveVariable(pattern, declarator, scope, "signal"))
            elif creator in PROPS_DIRECT_CREATORS:
                variables.append(ReactiveVariable(pattern, declarator, scope, "props"))

    for fn in tree.find_nodes(*FUNCTION_TYPES):
        if node_key(fn) in sync:
            continue
        param = _props_parameter(tree, fn)
        if param is not None:
            variables.append(ReactiveVariable(param, param, fn, "props"))
    return variables


def _tracked_scopes(tree: SyntaxTree, options: ReactivityOptions) -> list[TrackedScope]:
    scopes = []

    def track(node, expect: str) -> None:
        if node is not None:
            scopes.append(TrackedScope(unwrap(node), expect))

    def track_permissively(node) -> None:
        # Arguments of create*/use* helpers: functions and bare names passed in
        stack = [node]
        while stack:
            current = unwrap(stack.pop())
            if current is None:
                continue
            if is_function(current):
                track(current, "called-function")
                continue
            if current.type == "identifier":
                parent = current.parent
                if parent is not None and parent.type in ("member_expression", "subscript_expression"):
                    continue
                if parent is not None and parent.type == "call_expression" and same_node(callee_node(parent), current):
                    continue
                traced = trace(tree, current)
                if is_function(traced) or traced.type == "identifier":
                    track(current, "called-function")
                continue
            stack.extend(named_children(current))

    custom = set(options.custom_reactive_functions)

    for container in tree.find_nodes("jsx_expression"):
        expression = jsx_expression_inner(container)
        if expression is None:
            continue
        if expression.type == "spread_element":
            track(first_named(expression), "expression")
            continue
        parent = container.parent
        if parent is not None and parent.type == "jsx_attribute":
            attribute = jsx_attribute_name(tree, parent) or ""
            tag_name = jsx_tag_name(tree, parent.parent) or ""
            if attribute.startswith("on") and is_dom_element_name(tag_name):
                track(expression, "called-function")
            elif attribute.startswith("use:") and is_function(expression):
                track(expression, "called-function")
            elif attribute == "value" and tag_name.endswith("Provider"):
                continue
            elif re.match(r"^static[A-Z]", attribute) and not is_dom_element_name(tag_name):
                continue
            elif attribute == "ref" and is_function(expression):
                track(expression, "called-function")
            else:
                track(expression, "expression")
        elif parent is not None and parent.type in ("jsx_element", "jsx_fragment") and is_function(expression):
            track(expression, "function")
        else:
            track(expression, "expression")

    for construction in tree.find_nodes("new_expression"):
        constructor = callee_node(construction)
        arguments = call_arguments(construction)
        if constructor is not None and tree.text(constructor) in OBSERVER_CONSTRUCTORS and arguments:
            track(arguments[0], "called-function")

    for call in tree.find_nodes("call_expression"):
        callee = callee_node(call)
        arguments = call_arguments(call)
        first = unwrap(arguments[0]) if arguments else None
        second = unwrap(arguments[1]) if len(arguments) > 1 else None
        if callee is None:
            continue

        if callee.type == "identifier":
            name = library_name(tree, callee, SOLID_SOURCE)
            written = tree.text(callee)
            if name in FUNCTION_TRACKED_SCOPES or (name == "createResource" and len(arguments) >= 2):
                track(first, "function")
            elif name in DEFERRED_CALLBACK_SCOPES or written in TIMER_FUNCTIONS:
                track(first, "called-function")
            elif name == "on":
                if first is not None and first.type == "array":
                    for element in named_children(first):
                        if element.type != "spread_element":
                            track(element, "function")
                else:
                    track(first, "function")
                track(second, "called-function")
            elif name == "createStore" and first is not None and first.type == "object":
                for member in named_children(first):
                    if member.type == "method_definition" and has_keyword(member, "get"):
                        track(member, "function")
            elif name == "runWithOwner":
                track(second, "function")
            elif REACTIVE_FUNCTION_NAME.match(written) or written in custom:
                for argument in arguments:
                    track_permissively(argument)
        elif callee.type == "member_expression":
            method = tree.text(callee.child_by_field_name("property"))
            if method == "addEventListener" and second is not None:
                track(second, "called-function")
            elif REACTIVE_FUNCTION_NAME.match(method) or method in custom:
                for argument in arguments:
                    track_permissively(argument)

    for assignment in tree.find_nodes("assignment_expression"):
        left = unwrap(assignment.child_by_field_name("left"))
        right = unwrap(assignment.child_by_field_name("right"))
        if left is not None and left.type == "member_expression" and is_function(right):
            if re.match(r"^on[a-z]+$", tree.text(left.child_by_field_name("property"))):
                track(right, "called-function")

    return scopes


def _is_write(ident) -> bool:
    parent = parent_skipping_wrappers(ident)
    if parent is None:
        return False
    if parent.type in ("assignment_expression", "augmented_assignment_expression"):
        return same_node(unwrap(parent.child_by_field_name("left")), ident)
    if parent.type == "update_expression":
        return same_node(unwrap(parent.child_by_field_name("argument")), ident)
    return False


def _is_member_object(parent, node) -> bool:
    return parent is not None and parent.type in ("member_expression", "subscript_expression") and same_node(
        unwrap(parent.child_by_field_name("object")), node,
    )


def _enclosing_call(ident):
    """The call ``ident`` is the callee or a direct argument of."""
    parent = parent_skipping_wrappers(ident)
    if parent is None:
        return None
    if parent.type == "call_expression" and same_node(callee_node(parent), ident):
        return parent
    if parent.type == "arguments" and parent.parent is not None and parent.parent.type == "call_expression":
        return parent.parent
    return None


def _in_call_array(ident) -> bool:
    parent = parent_skipping_wrappers(ident)
    if parent is None or parent.type != "array":
        return False
    holder = parent_skipping_wrappers(parent)
    return holder is not None and holder.type == "arguments"


def detect_reactivity(tree: SyntaxTree, options: ReactivityOptions | None) -> list[Finding]:
    """Flag reactive values that are read where changes go unnoticed.

    Signals and props-like objects must be read in markup, inside a
    tracked scope such as ``createEffect`` or in a callback like an event
    handler; they must never be reassigned. Tracked scopes must not be
    async, and markup must call accessors rather than pass them along.
    """
    options = options or ReactivityOptions()
    findings = []

    accessors = _accessor_bindings(tree)
    if accessors:
        candidates = list(jsx_child_expressions(tree))
        for tag in jsx_tags(tree):
            if not is_dom_element_name(jsx_tag_name(tree, tag)):
                continue
            for attribute in jsx_attributes(tag):
                name = jsx_attribute_name(tree, attribute)
                if name is None or name == "ref" or name.startswith(("on", "use:")):
                    continue
                candidates.append(jsx_attribute_expression(attribute))

        for node in candidates:
            if _is_accessor(tree, node, accessors):
                name = tree.text(node)
                findings.append(report(
                    tree, REACTIVITY, node,
                    f"The reactive variable '{name}' should be called as a function when used in JSX.",
                ))

    for call in tree.find_nodes("call_expression"):
        if library_callee(tree, call, SOLID_SOURCE) not in TRACKED_SCOPES:
            continue
        arguments = call_arguments(call)
        callback = unwrap(arguments[0]) if arguments else None
        if is_function(callback) and is_async(callback):
            findings.append(report(
                tree, REACTIVITY, callback,
                "This tracked scope should not be async. Solid's reactivity only tracks synchronously.",
            ))

    sync = _sync_callbacks(tree)
    variables = _reactive_variables(tree, sync)
    if not variables:
        return findings
    scopes = _tracked_scopes(tree, options)
    scope_owners = [_owner_scope(tree, scope.node, sync) for scope in scopes]

    def check_tracked(ident, owner, node, name: str) -> None:
        local = [scope for scope, scope_owner in zip(scopes, scope_owners) if same_node(scope_owner, owner)]
        for scope in local:
            if scope.expect == "expression" and contains(scope.node, ident):
                return
            if scope.expect != "expression" and same_node(scope.node, ident):
                return
        if any(contains(scope.node, ident) for scope in local):
            findings.append(report(
                tree, REACTIVITY, node,
                f"The reactive variable '{name}' should be wrapped in a function for reactivity. This includes "
                "event handler bindings on native elements, which are not reactive like other JSX props.",
            ))
        else:
            findings.append(report(
                tree, REACTIVITY, node,
                f"The reactive variable '{name}' should be used within JSX, a tracked scope (like createEffect), "
                "or inside an event handler function, or else changes will be ignored.",
            ))

    for variable in variables:
        name = tree.text(variable.name)
        for ident in tree.find_nodes("identifier", root=variable.scope):
            if tree.text(ident) != name or same_node(ident, variable.name):
                continue
            if not same_node(resolve_binding(tree, ident), variable.declaration):
                continue
            parent = parent_skipping_wrappers(ident)

            written = _is_write(ident)
            if not written and variable.kind == "props" and _is_member_object(parent, ident):
                written = parent.type == "member_expression" and _is_write(parent)
            if written:
                findings.append(report(
                    tree, REACTIVITY, ident,
                    f"The reactive variable '{name}' should not be reassigned or altered directly.",
                ))
                continue

            # Reads inside nested callbacks belong to those callbacks
            if not same_node(_owner_scope(tree, ident, sync), variable.scope):
                continue

            if variable.kind == "signal":
                call = _enclosing_call(ident)
                if call is not None:
                    check_tracked(ident, variable.scope, call, name)
                elif _in_call_array(ident):
                    check_tracked(ident, variable.scope, ident, name)
            elif _is_member_object(parent, ident):
                if parent.type == "member_expression" and UNTRACKED_PROP_NAME.match(
                    tree.text(parent.child_by_field_name("property")),
                ):
                    continue
                outer = parent
                while _is_member_object(parent_skipping_wrappers(outer), outer):
                    outer = parent_skipping_wrappers(outer)
                check_tracked(ident, variable.scope, outer, tree.text(outer))
            elif parent is not None and parent.type in ("variable_declarator", "assignment_expression"):
                findings.append(report(
                    tree, REACTIVITY, ident,
                    f"The reactive variable '{name}' should be used within JSX, a tracked scope (like createEffect), "
                    "or inside an event handler function, or else changes will be ignored.",
                ))

    return findings


def detect_no_react_deps(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag a dependency array passed to an auto-tracking primitive."""
    findings = []
    for call in tree.find_nodes("call_expression"):
        name = library_callee(tree, call, SOLID_SOURCE)
        if name not in DEPENDENCY_FREE_SCOPES:
            continue
        arguments = call_arguments(call)
        if len(arguments) != 2 or any(argument.type == "spread_element" for argument in arguments):
            continue
        # const-bound callbacks and arrays count as if written inline
        callback, deps = trace(tree, arguments[0]), trace(tree, arguments[1])
        if is_function(callback) and not function_parameters(callback) and deps is not None and deps.type == "array":
            findings.append(report(
                tree, NO_REACT_DEPS, arguments[1],
                f"In Solid, `{name}` doesn't accept a dependency array because it automatically tracks "
                "its dependencies. If you really need to override the list of dependencies, use `on`.",
            ))
    return findings


def detect_prefer_for(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for node in jsx_child_expressions(tree):
        if node.type != "call_expression":
            continue
        callee = callee_node(node)
        if callee is None or callee.type != "member_expression":
            continue
        if tree.text(callee.child_by_field_name("property")) != "map":
            continue
        arguments = call_arguments(node)
        mapper = unwrap(arguments[0]) if len(arguments) == 1 else None
        if not is_function(mapper):
            continue
        if len(function_parameters(mapper)) > 1:
            message = "Use Solid's `<For />` or `<Index />` component for rendering lists. Array#map causes DOM elements to be recreated."
        else:
            message = "Use Solid's `<For />` component for efficiently rendering lists. Array#map causes DOM elements to be recreated."
        findings.append(report(tree, PREFER_FOR, node, message))
    return findings


def _renders_conditionally(tree: SyntaxTree, node) -> bool:
    node = unwrap(node)
    if node is None:
        return False
    if node.type == "binary_expression":
        right = unwrap(node.child_by_field_name("right"))
        return tree.text(node.child_by_field_name("operator")) == "&&" and right is not None and right.type in JSX_ELEMENT_TYPES
    if node.type == "ternary_expression":
        branches = [unwrap(node.child_by_field_name(field)) for field in ("consequence", "alternative")]
        return any(branch is not None and branch.type in JSX_ELEMENT_TYPES for branch in branches)
    return False


def detect_prefer_show(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for node in jsx_child_expressions(tree):
        target = node
        if node.type == "arrow_function":
            target = unwrap(node.child_by_field_name("body"))
        if _renders_conditionally(tree, target):
            findings.append(report(
                tree, PREFER_SHOW, target, "Use Solid's `<Show />` component for conditionally showing content.",
            ))
    return findings


def detect_imports(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag Solid primitives imported from the wrong entry point."""
    findings = []
    for binding in import_bindings(tree).values():
        if not SOLID_SOURCE.match(binding.source) or binding.imported in ("default", "*"):
            continue
        if binding.type_only:
            expected = SOLID_TYPE_SOURCES.get(binding.imported)
        else:
            expected = SOLID_PRIMITIVE_SOURCES.get(binding.imported) or SOLID_TYPE_SOURCES.get(binding.imported)
        if expected is not None and expected != binding.source:
            findings.append(report(
                tree, IMPORTS, binding.node,
                f'"{binding.imported}" should be imported from "{expected}", not "{binding.source}".',
            ))
    return findings


def detect_no_proxy_apis(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag APIs that need Proxy support at runtime."""
    findings = []

    for statement in import_statements(tree):
        if string_value(tree, statement.child_by_field_name("source")) == STORE_SOURCE:
            findings.append(report(
                tree, NO_PROXY_APIS, statement,
                "Solid Store APIs use Proxies, which are incompatible with your target environment.",
            ))

    for construction in tree.find_nodes("new_expression"):
        constructor = callee_node(construction)
        if constructor is not None and tree.text(constructor) == "Proxy":
            findings.append(report(
                tree, NO_PROXY_APIS, construction, "Proxies are incompatible with your target environment.",
            ))

    for call in tree.find_nodes("call_expression"):
        if member_path(tree, call.child_by_field_name("function")) == "Proxy.revocable":
            findings.append(report(
                tree, NO_PROXY_APIS, call, "Proxies are incompatible with your target environment.",
            ))

    for tag in jsx_tags(tree):
        for attribute in jsx_attributes(tag):
            if attribute.type != "jsx_expression":
                continue
            spread = jsx_expression_inner(attribute)
            argument = unwrap(first_named(spread)) if spread is not None else None
            if argument is None:
                continue
            if argument.type == "call_expression":
                findings.append(report(
                    tree, NO_PROXY_APIS, attribute,
                    "Using a function call in JSX spread makes Solid use Proxies, "
                    "which are incompatible with your target environment.",
                ))
            elif argument.type == "member_expression":
                findings.append(report(
                    tree, NO_PROXY_APIS, attribute,
                    "Using a property access in JSX spread makes Solid use Proxies, "
                    "which are incompatible with your target environment.",
                ))

    for call in calls_named(tree, ["mergeProps"]):
        if library_callee(tree, call, SOLID_SOURCE) != "mergeProps":
            continue
        for argument in call_arguments(call):
            if is_function(unwrap(argument)):
                findings.append(report(
                    tree, NO_PROXY_APIS, argument,
                    "If you pass a function to `mergeProps`, it will create a Proxy, "
                    "which are incompatible with your target environment.",
                ))

    return findings


RULES = [
    Rule(COMPONENTS_RETURN_ONCE, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_components_return_once,
         "Components must have a single final return"),
    Rule(NO_DESTRUCTURE, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_destructure,
         "Disallow destructuring component props"),
    Rule(REACTIVITY, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_reactivity,
         "Require reactive values to be read where changes are tracked", ReactivityOptions),
    Rule(NO_REACT_DEPS, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_react_deps,
         "Disallow dependency arrays on auto-tracking primitives"),
    Rule(PREFER_FOR, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_prefer_for,
         "Prefer <For /> over Array#map in markup"),
    Rule(PREFER_SHOW, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_prefer_show,
         "Prefer <Show /> over inline conditionals in markup"),
    Rule(IMPORTS, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_imports,
         "Import Solid primitives from their own entry point"),
    Rule(NO_PROXY_APIS, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_proxy_apis,
         "Disallow APIs that require Proxy support"),
]
