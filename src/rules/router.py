"""Router detectors: path parameter names and route option order."""

from src.lint.frontend import SyntaxTree
from src.lint.registry import Rule
from src.models.diagnostics import Finding, RuleCategory, Severity
from src.rules.queries import (
    call_arguments,
    callee_node,
    find_property,
    library_callee,
    misordered_properties,
    object_properties,
    report,
    string_value,
    unwrap,
)
from src.rules.vocabulary import (
    BRACED_PARAM,
    CREATE_ROUTE_DIRECT,
    CREATE_ROUTE_INDIRECT,
    PATH_FIRST_ARG_FUNCTIONS,
    PATH_PROPERTY_FUNCTIONS,
    ROUTE_OPTION_ORDER,
    ROUTER_SOURCE,
    VALID_PARAM_NAME,
)

ROUTE_PARAM_NAMES = "router/route-param-names"
CREATE_ROUTE_PROPERTY_ORDER = "router/create-route-property-order"


def invalid_path_params(path: str) -> list[tuple[str, int, int]]:
    """Invalid dynamic segments of a route path.

    Returns ``(name, start, end)`` with character offsets of the segment
    token inside ``path``. ``$`` and ``{$}`` splats carry no name and are
    never invalid.
    """
    invalid = []
    offset = 0
    for segment in path.split("/"):
        braced = list(BRACED_PARAM.finditer(segment))
        if braced:
            for match in braced:
                name = match.group(2)
                if name and not VALID_PARAM_NAME.match(name):
                    invalid.append((name, offset + match.start(), offset + match.end()))
        elif segment.startswith("$") and len(segment) > 1:
            name = segment[1:]
            if not VALID_PARAM_NAME.match(name):
                invalid.append((name, offset, offset + len(segment)))
        offset += len(segment) + 1
    return invalid


def _route_paths(tree: SyntaxTree) -> list:
    """String literal nodes holding route paths."""
    paths = []
    for call in tree.find_nodes("call_expression"):
        function = library_callee(tree, call, ROUTER_SOURCE)
        arguments = call_arguments(call)
        if not arguments:
            continue
        first = unwrap(arguments[0])
        if function in PATH_FIRST_ARG_FUNCTIONS:
            if string_value(tree, first) is not None:
                paths.append(first)
        elif function in PATH_PROPERTY_FUNCTIONS and first.type == "object":
            path = find_property(tree, first, "path")
            value = unwrap(path.value) if path is not None else None
            if value is not None and string_value(tree, value) is not None:
                paths.append(value)
    return paths


def detect_route_param_names(tree: SyntaxTree, options=None) -> list[Finding]:
    """One finding per invalid parameter, located at its segment in the path string."""
    findings = []
    for literal in _route_paths(tree):
        path = string_value(tree, literal)
        content_start = literal.start_byte + 1
        for name, start, end in invalid_path_params(path):
            start_byte = content_start + len(path[:start].encode("utf-8"))
            end_byte = content_start + len(path[:end].encode("utf-8"))
            findings.append(Finding(
                rule_id=ROUTE_PARAM_NAMES,
                span=tree.span_for_range(start_byte, end_byte),
                message=(
                    f'Invalid param name "{name}" in route path. Param names must be valid identifiers '
                    "(match /[A-Za-z_][A-Za-z0-9_]*/)."
                ),
            ))
    return findings


def _route_options(tree: SyntaxTree) -> list[tuple[str, object]]:
    """(function name, options object) for every route definition call."""
    found = []
    for call in tree.find_nodes("call_expression"):
        function = library_callee(tree, call, ROUTER_SOURCE)
        if function not in CREATE_ROUTE_DIRECT:
            inner = callee_node(call)
            if inner is None or inner.type != "call_expression":
                continue
            function = library_callee(tree, inner, ROUTER_SOURCE)
            if function not in CREATE_ROUTE_INDIRECT:
                continue
        arguments = call_arguments(call)
        options = unwrap(arguments[0]) if arguments else None
        if options is not None and options.type == "object":
            found.append((function, options))
    return found


def detect_create_route_property_order(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for function, route_options in _route_options(tree):
        for prop, other in misordered_properties(object_properties(tree, route_options), ROUTE_OPTION_ORDER):
            findings.append(report(
                tree, CREATE_ROUTE_PROPERTY_ORDER, prop.key,
                f"Invalid order of properties for `{function}`: `{prop.name}` should come after `{other.name}`.",
            ))
    return findings


RULES = [
    Rule(CREATE_ROUTE_PROPERTY_ORDER, RuleCategory.ROUTER, Severity.WARNING, detect_create_route_property_order,
         "Enforce route option order"),
    Rule(ROUTE_PARAM_NAMES, RuleCategory.ROUTER, Severity.ERROR, detect_route_param_names,
         "Require valid route parameter names"),
]
