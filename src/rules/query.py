"""Data-fetching hook detectors for the query client library."""

from pydantic import BaseModel, ConfigDict, Field

from src.lint.frontend import SyntaxTree
from src.lint.registry import Rule
from src.models.diagnostics import Finding, RuleCategory, Severity
from src.rules.queries import (
    call_arguments,
    callee_name,
    callee_node,
    contains,
    enclosing_function,
    find_property,
    has_rest_element,
    is_async,
    is_function,
    is_hook_or_component,
    library_callee,
    library_name,
    misordered_properties,
    named_children,
    object_properties,
    read_references,
    report,
    resolve_binding,
    unwrap,
)
from src.rules.vocabulary import (
    DEPENDENCY_ARRAY_HOOKS,
    INFINITE_QUERY_FUNCTIONS,
    INFINITE_QUERY_ORDER,
    MULTI_QUERY_HOOKS,
    MUTATION_FUNCTIONS,
    MUTATION_ORDER,
    QUERY_CLIENT_CLASS,
    QUERY_HOOKS,
    QUERY_SOURCE,
    RESULT_OBJECT_HOOKS,
)

STABLE_QUERY_CLIENT = "query/stable-query-client"
NO_REST_DESTRUCTURING = "query/no-rest-destructuring"
MUTATION_PROPERTY_ORDER = "query/mutation-property-order"
INFINITE_QUERY_PROPERTY_ORDER = "query/infinite-query-property-order"
NO_UNSTABLE_DEPS = "query/no-unstable-deps"
EXHAUSTIVE_DEPS = "query/exhaustive-deps"


class ExhaustiveDepsOptions(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    allowlist: list[str] = Field(default_factory=list)


def _hook_call(tree: SyntaxTree, node, hooks) -> str | None:
    """Name of the query hook called by ``node``, if it is one of ``hooks``."""
    node = unwrap(node)
    if node is None or node.type != "call_expression":
        return None
    name = library_callee(tree, node, QUERY_SOURCE)
    return name if name in hooks else None


def detect_stable_query_client(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag a client constructed while rendering a component or running a hook."""
    findings = []
    for construction in tree.find_nodes("new_expression"):
        constructor = callee_node(construction)
        if constructor is None or library_name(tree, constructor, QUERY_SOURCE) != QUERY_CLIENT_CLASS:
            continue
        fn = enclosing_function(construction)
        if fn is None or is_async(fn) or not is_hook_or_component(tree, fn):
            continue
        findings.append(report(
            tree, STABLE_QUERY_CLIENT, construction,
            "QueryClient is not stable. It should be created outside the component or hook body.",
        ))
    return findings


def detect_no_rest_destructuring(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag rest destructuring of a query result, directly or through a variable."""
    message = (
        "Object rest destructuring on a query will observe all changes to the query, "
        "leading to excessive re-renders."
    )
    findings = []

    for declarator in tree.find_nodes("variable_declarator"):
        pattern = declarator.child_by_field_name("name")
        value = unwrap(declarator.child_by_field_name("value"))
        if pattern is None or value is None:
            continue

        if _hook_call(tree, value, QUERY_HOOKS):
            if has_rest_element(pattern):
                findings.append(report(tree, NO_REST_DESTRUCTURING, pattern, message))
            continue

        if _hook_call(tree, value, MULTI_QUERY_HOOKS):
            if pattern.type == "array_pattern":
                for element in named_children(pattern):
                    if has_rest_element(element):
                        findings.append(report(tree, NO_REST_DESTRUCTURING, element, message))
            continue

        if value.type == "identifier" and has_rest_element(pattern):
            source = resolve_binding(tree, value)
            if source is not None and source.type == "variable_declarator":
                source_pattern = source.child_by_field_name("name")
                if source_pattern is not None and source_pattern.type == "identifier" and _hook_call(
                    tree, source.child_by_field_name("value"), QUERY_HOOKS,
                ):
                    findings.append(report(tree, NO_REST_DESTRUCTURING, pattern, message))

    return findings


def _property_order_findings(tree: SyntaxTree, rule_id: str, functions, order) -> list[Finding]:
    findings = []
    for call in tree.find_nodes("call_expression"):
        function = library_callee(tree, call, QUERY_SOURCE)
        if function not in functions:
            continue
        arguments = call_arguments(call)
        options = unwrap(arguments[0]) if arguments else None
        if options is None or options.type != "object":
            continue
        for prop, other in misordered_properties(object_properties(tree, options), order):
            findings.append(report(
                tree, rule_id, prop.key,
                f"Invalid order of properties for `{function}`: `{prop.name}` should come after `{other.name}`.",
            ))
    return findings


def detect_mutation_property_order(tree: SyntaxTree, options=None) -> list[Finding]:
    return _property_order_findings(tree, MUTATION_PROPERTY_ORDER, MUTATION_FUNCTIONS, MUTATION_ORDER)


def detect_infinite_query_property_order(tree: SyntaxTree, options=None) -> list[Finding]:
    return _property_order_findings(tree, INFINITE_QUERY_PROPERTY_ORDER, INFINITE_QUERY_FUNCTIONS, INFINITE_QUERY_ORDER)


def detect_no_unstable_deps(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag whole query or mutation results inside a dependency array."""
    findings = []
    for call in tree.find_nodes("call_expression"):
        dependency_hook = callee_name(tree, call)
        if dependency_hook not in DEPENDENCY_ARRAY_HOOKS:
            continue
        arguments = call_arguments(call)
        deps = unwrap(arguments[-1]) if len(arguments) >= 2 else None
        if deps is None or deps.type != "array":
            continue

        for element in named_children(deps):
            element = unwrap(element)
            if element.type != "identifier":
                continue
            source = resolve_binding(tree, element)
            if source is None or source.type != "variable_declarator":
                continue
            pattern = source.child_by_field_name("name")
            hook = _hook_call(tree, source.child_by_field_name("value"), RESULT_OBJECT_HOOKS)
            if hook is None or pattern is None or pattern.type != "identifier":
                continue
            findings.append(report(
                tree, NO_UNSTABLE_DEPS, element,
                f"The result of {hook} is not referentially stable, so don't pass it directly into the "
                f"dependencies array of {dependency_hook}. Instead, destructure the return value of {hook} "
                f"and pass the destructured values into the dependency array of {dependency_hook}.",
            ))
    return findings


def detect_exhaustive_deps(tree: SyntaxTree, options: ExhaustiveDepsOptions | None) -> list[Finding]:
    """Flag query keys that omit local values read by the query function.

    Only identifiers declared in the function enclosing the options object
    count; module-level and global names are stable. One finding per key
    lists every missing name in order of first use.
    """
    options = options or ExhaustiveDepsOptions()
    findings = []

    for obj in tree.find_nodes("object"):
        key_prop = find_property(tree, obj, "queryKey")
        fn_prop = find_property(tree, obj, "queryFn")
        if key_prop is None or fn_prop is None:
            continue
        key = unwrap(key_prop.value)
        query_fn = unwrap(fn_prop.value)
        if key is None or key.type != "array" or not is_function(query_fn):
            continue
        scope = enclosing_function(obj)
        if scope is None:
            continue

        in_key = {
            tree.text(node) for node in tree.walk(key)
            if node.type in ("identifier", "shorthand_property_identifier")
        }
        missing: list[str] = []
        for ref in read_references(tree, query_fn):
            name = tree.text(ref)
            if name in in_key or name in missing or name in options.allowlist:
                continue
            declaration = resolve_binding(tree, ref)
            if declaration is None or contains(query_fn, declaration) or not contains(scope, declaration):
                continue
            missing.append(name)

        if missing:
            findings.append(report(
                tree, EXHAUSTIVE_DEPS, key,
                f"The following dependencies are missing in your queryKey: {', '.join(missing)}",
            ))

    return findings


RULES = [
    Rule(EXHAUSTIVE_DEPS, RuleCategory.DATA_FETCHING_HOOK, Severity.ERROR, detect_exhaustive_deps,
         "Require every query function dependency in the query key", ExhaustiveDepsOptions),
    Rule(INFINITE_QUERY_PROPERTY_ORDER, RuleCategory.DATA_FETCHING_HOOK, Severity.ERROR,
         detect_infinite_query_property_order, "Enforce infinite query option order"),
    Rule(MUTATION_PROPERTY_ORDER, RuleCategory.DATA_FETCHING_HOOK, Severity.ERROR, detect_mutation_property_order,
         "Enforce mutation option order"),
    Rule(NO_REST_DESTRUCTURING, RuleCategory.DATA_FETCHING_HOOK, Severity.WARNING, detect_no_rest_destructuring,
         "Disallow rest destructuring of query results"),
    Rule(NO_UNSTABLE_DEPS, RuleCategory.DATA_FETCHING_HOOK, Severity.ERROR, detect_no_unstable_deps,
         "Disallow whole query results in dependency arrays"),
    Rule(STABLE_QUERY_CLIENT, RuleCategory.DATA_FETCHING_HOOK, Severity.ERROR, detect_stable_query_client,
         "Require a stable QueryClient"),
]
