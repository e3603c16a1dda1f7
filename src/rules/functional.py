"""Functional-purity detectors.

These rules keep data immutable and control flow free of exceptions:
no mutable bindings, no throwing or rejecting, no in-place mutation of
``const`` values and readonly type shapes.
"""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.lint.frontend import SyntaxTree
from src.lint.registry import Rule
from src.models.diagnostics import Finding, RuleCategory, Severity
from src.rules.queries import (
    CLASS_TYPES,
    ancestors,
    annotated_type,
    call_arguments,
    callee_node,
    declarator_value,
    enclosing_function,
    first_named,
    function_name,
    function_parameters,
    has_keyword,
    is_async,
    is_const_declarator,
    is_function,
    member_path,
    named_children,
    parameter_nodes,
    report,
    resolve_binding,
    root_identifier,
    same_node,
    unwrap,
)
from src.rules.vocabulary import (
    ARRAY_MUTATOR_METHODS,
    COLLECTION_CONSTRUCTORS,
    COLLECTION_MUTATOR_METHODS,
    MUTABLE_GENERIC_TYPES,
    MUTABLE_TYPE_NAME,
    READONLY_GENERIC_TYPES,
)

NO_LET = "functional/no-let"
NO_THROW = "functional/no-throw-statements"
NO_PROMISE_REJECT = "functional/no-promise-reject"
IMMUTABLE_DATA = "functional/immutable-data"
READONLY_TYPE = "functional/readonly-type"
PREFER_PROPERTY_SIGNATURES = "functional/prefer-property-signatures"
PREFER_IMMUTABLE_TYPES = "functional/prefer-immutable-types"
TYPE_DECLARATION_IMMUTABILITY = "functional/type-declaration-immutability"


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class NoLetOptions(_Options):
    allow_in_for_loop_init: bool = Field(default=False, alias="allowInForLoopInit")
    ignore_identifier_pattern: list[str] = Field(default_factory=list, alias="ignoreIdentifierPattern")


class NoThrowOptions(_Options):
    allow_in_async_functions: bool = Field(default=False, alias="allowInAsyncFunctions")


class ImmutableDataOptions(_Options):
    ignore_identifier_pattern: list[str] = Field(default_factory=list, alias="ignoreIdentifierPattern")
    ignore_classes: bool = Field(default=False, alias="ignoreClasses")
    ignore_maps_and_sets: bool = Field(default=False, alias="ignoreMapsAndSets")


class PropertySignaturesOptions(_Options):
    ignore_if_readonly_wrapped: bool = Field(default=False, alias="ignoreIfReadonlyWrapped")


class TypeCategoryOptions(_Options):
    enforcement: Literal["ReadonlyShallow", "None"] = "ReadonlyShallow"
    ignore_name_pattern: list[str] = Field(default_factory=list, alias="ignoreNamePattern")


class PreferImmutableTypesOptions(_Options):
    parameters: TypeCategoryOptions = Field(default_factory=TypeCategoryOptions)
    return_types: TypeCategoryOptions = Field(default_factory=TypeCategoryOptions, alias="returnTypes")
    variables: TypeCategoryOptions = Field(default_factory=TypeCategoryOptions)


class TypeDeclarationOptions(_Options):
    # Declarations whose names match are skipped
    identifiers: list[str] = Field(default_factory=list)
    ignore_interfaces: bool = Field(default=False, alias="ignoreInterfaces")


def _ignored(name: str, patterns: list[str]) -> bool:
    return any(re.search(pattern, name) for pattern in patterns)


# ---------------------------------------------------------------------------
# Bindings and control flow
# ---------------------------------------------------------------------------


def detect_no_let(tree: SyntaxTree, options: NoLetOptions | None) -> list[Finding]:
    """One finding per ``let``/``var`` declarator, at its binding name."""
    options = options or NoLetOptions()
    findings = []

    for statement in tree.find_nodes("lexical_declaration", "variable_declaration"):
        if statement.type == "lexical_declaration":
            keyword = tree.text(statement.child_by_field_name("kind"))
        else:
            keyword = "var"
        if keyword not in ("let", "var"):
            continue
        parent = statement.parent
        if options.allow_in_for_loop_init and parent is not None and parent.type == "for_statement":
            continue

        for declarator in named_children(statement):
            if declarator.type != "variable_declarator":
                continue
            name = declarator.child_by_field_name("name")
            if _ignored(tree.text(name), options.ignore_identifier_pattern):
                continue
            findings.append(report(tree, NO_LET, name, f"Unexpected {keyword}, use const instead."))

    # for (let x of xs) keeps its declaration inline in the loop head
    for loop in tree.find_nodes("for_in_statement"):
        kind = loop.child_by_field_name("kind")
        keyword = tree.text(kind) if kind is not None else None
        if keyword not in ("let", "var") or options.allow_in_for_loop_init:
            continue
        left = loop.child_by_field_name("left")
        if left is None or _ignored(tree.text(left), options.ignore_identifier_pattern):
            continue
        findings.append(report(tree, NO_LET, left, f"Unexpected {keyword}, use const instead."))

    return findings


def detect_no_throw(tree: SyntaxTree, options: NoThrowOptions | None) -> list[Finding]:
    options = options or NoThrowOptions()
    findings = []
    for statement in tree.find_nodes("throw_statement"):
        if options.allow_in_async_functions:
            fn = enclosing_function(statement)
            if fn is not None and is_async(fn):
                continue
        findings.append(report(
            tree, NO_THROW, statement, "Unexpected throw, throwing exceptions is not functional.",
        ))
    return findings


def detect_no_promise_reject(tree: SyntaxTree, options=None) -> list[Finding]:
    """Flag ``Promise.reject(...)`` and calls of an executor's reject parameter."""
    message = "Unexpected rejection, resolve an error instead."
    findings = []

    for call in tree.find_nodes("call_expression"):
        if member_path(tree, call.child_by_field_name("function")) == "Promise.reject":
            findings.append(report(tree, NO_PROMISE_REJECT, call, message))

    for construction in tree.find_nodes("new_expression"):
        constructor = callee_node(construction)
        if constructor is None or tree.text(constructor) != "Promise":
            continue
        arguments = call_arguments(construction)
        executor = unwrap(arguments[0]) if arguments else None
        if not is_function(executor):
            continue
        params = function_parameters(executor)
        if len(params) < 2 or params[1].type != "identifier":
            continue
        reject = params[1]
        for call in tree.find_nodes("call_expression", root=executor):
            callee = callee_node(call)
            if callee is None or callee.type != "identifier":
                continue
            if same_node(resolve_binding(tree, callee), reject):
                findings.append(report(tree, NO_PROMISE_REJECT, call, message))

    return findings


# ---------------------------------------------------------------------------
# Immutable data
# ---------------------------------------------------------------------------


def _const_declaration(tree: SyntaxTree, target, options: ImmutableDataOptions):
    """Declarator of the ``const`` binding at the root of ``target``, if any."""
    root = root_identifier(target)
    if root is None or _ignored(tree.text(root), options.ignore_identifier_pattern):
        return None
    declaration = resolve_binding(tree, root)
    return declaration if is_const_declarator(tree, declaration) else None


def _is_collection(tree: SyntaxTree, declaration) -> bool:
    value = declarator_value(declaration)
    if value is None or value.type != "new_expression":
        return False
    constructor = callee_node(value)
    return constructor is not None and tree.text(constructor) in COLLECTION_CONSTRUCTORS


def _inside_class(node) -> bool:
    return any(ancestor.type in CLASS_TYPES for ancestor in ancestors(node))


def _is_array(tree: SyntaxTree, declaration) -> bool:
    value = declarator_value(declaration)
    if value is None:
        return False
    if value.type == "array":
        return True
    return value.type in ("new_expression", "call_expression") and (
        member_path(tree, callee_node(value)) in ("Array", "Array.from", "Array.of")
    )


def detect_immutable_data(tree: SyntaxTree, options: ImmutableDataOptions | None) -> list[Finding]:
    """Flag in-place mutation of values bound with ``const``.

    Spread copies build new values and are never reported.
    """
    options = options or ImmutableDataOptions()
    object_message = "Modifying properties of existing object not allowed."
    array_message = "Modifying an array is not allowed."
    collection_message = "Modifying a map or set is not allowed."
    findings = []

    def mutation_message(target, declaration) -> str:
        return array_message if target.type == "subscript_expression" and _is_array(tree, declaration) else object_message

    for node in tree.find_nodes(
        "assignment_expression", "augmented_assignment_expression", "update_expression", "unary_expression",
    ):
        if node.type == "unary_expression":
            if tree.text(node.child_by_field_name("operator")) != "delete":
                continue
            target = unwrap(node.child_by_field_name("argument"))
        elif node.type == "update_expression":
            target = unwrap(node.child_by_field_name("argument"))
        else:
            target = unwrap(node.child_by_field_name("left"))
        if target is None or target.type not in ("member_expression", "subscript_expression"):
            continue
        if options.ignore_classes and _inside_class(node):
            continue
        declaration = _const_declaration(tree, target, options)
        if declaration is not None:
            findings.append(report(tree, IMMUTABLE_DATA, node, mutation_message(target, declaration)))

    for call in tree.find_nodes("call_expression"):
        callee = callee_node(call)
        if callee is None or (options.ignore_classes and _inside_class(call)):
            continue

        if member_path(tree, callee) == "Object.assign":
            arguments = call_arguments(call)
            target = unwrap(arguments[0]) if arguments else None
            if target is not None and target.type in ("identifier", "member_expression"):
                if _const_declaration(tree, target, options) is not None:
                    findings.append(report(tree, IMMUTABLE_DATA, call, object_message))
            continue

        if callee.type != "member_expression":
            continue
        method = tree.text(callee.child_by_field_name("property"))
        receiver = unwrap(callee.child_by_field_name("object"))
        declaration = _const_declaration(tree, receiver, options)
        if declaration is None:
            continue

        if _is_collection(tree, declaration):
            if options.ignore_maps_and_sets:
                continue
            if method in COLLECTION_MUTATOR_METHODS and receiver.type == "identifier":
                findings.append(report(tree, IMMUTABLE_DATA, call, collection_message))
        elif method in ARRAY_MUTATOR_METHODS:
            findings.append(report(tree, IMMUTABLE_DATA, call, array_message))

    return findings


# ---------------------------------------------------------------------------
# Type shapes
# ---------------------------------------------------------------------------


def _shape_members(shape) -> list:
    return [member for member in named_children(shape) if member.type != "comment"]


def _is_mutable_member(member) -> bool:
    return member.type in ("property_signature", "index_signature") and not has_keyword(member, "readonly")


def _declared_shapes(tree: SyntaxTree) -> list:
    """Object type bodies written inside type alias or interface declarations."""
    shapes = []
    for shape in tree.find_nodes("object_type", "interface_body"):
        node = shape.parent
        while node is not None and node.type not in ("type_alias_declaration", "interface_declaration"):
            if is_function(node) or node.type in ("formal_parameters", "statement_block"):
                node = None
                break
            node = node.parent
        if node is not None:
            shapes.append(shape)
    return shapes


def detect_readonly_type(tree: SyntaxTree, options=None) -> list[Finding]:
    return [
        report(tree, READONLY_TYPE, member, "A readonly modifier is required.")
        for shape in _declared_shapes(tree)
        for member in _shape_members(shape)
        if _is_mutable_member(member)
    ]


def _readonly_wrapped(tree: SyntaxTree, node) -> bool:
    return any(
        ancestor.type == "generic_type" and tree.text(ancestor.child_by_field_name("name")) == "Readonly"
        for ancestor in ancestors(node)
    )


def detect_prefer_property_signatures(tree: SyntaxTree, options: PropertySignaturesOptions | None) -> list[Finding]:
    options = options or PropertySignaturesOptions()
    return [
        report(tree, PREFER_PROPERTY_SIGNATURES, member, "Use a property signature instead of a method signature.")
        for shape in tree.find_nodes("object_type", "interface_body")
        for member in _shape_members(shape)
        if member.type == "method_signature"
        and not (options.ignore_if_readonly_wrapped and _readonly_wrapped(tree, member))
    ]


def type_mutability(tree: SyntaxTree, node) -> bool | None:
    """Whether a type permits mutation: True, False, or None when unknown."""
    if node is None:
        return None
    kind = node.type
    if kind in ("object_type", "interface_body"):
        return any(_is_mutable_member(member) for member in _shape_members(node))
    if kind in ("array_type", "tuple_type"):
        return True
    if kind == "readonly_type":
        return False
    if kind == "generic_type":
        name = tree.text(node.child_by_field_name("name"))
        if name in MUTABLE_GENERIC_TYPES:
            return True
        if name in READONLY_GENERIC_TYPES:
            return False
        return None
    if kind in ("union_type", "intersection_type"):
        verdicts = [type_mutability(tree, member) for member in named_children(node)]
        if any(verdict is True for verdict in verdicts):
            return True
        return False if all(verdict is False for verdict in verdicts) else None
    if kind == "parenthesized_type":
        return type_mutability(tree, first_named(node))
    if kind in ("predefined_type", "literal_type", "function_type", "template_literal_type"):
        return False
    return None


def _return_type(fn):
    annotation = fn.child_by_field_name("return_type")
    if annotation is not None and annotation.type == "type_annotation":
        return first_named(annotation)
    return annotation


def _pattern_name(tree: SyntaxTree, node) -> str | None:
    if node is None or node.type not in ("identifier", "property_identifier"):
        return None
    return tree.text(node)


def detect_prefer_immutable_types(tree: SyntaxTree, options: PreferImmutableTypesOptions | None) -> list[Finding]:
    """Flag mutable types written for parameters, return types and variables.

    Each category can be switched off with ``enforcement: "None"`` or
    narrowed with ``ignoreNamePattern``. Properties of object types count
    as variables. Only types known to be mutable are reported.
    """
    options = options or PreferImmutableTypesOptions()
    findings = []

    def check(category: TypeCategoryOptions, node, type_node, name: str | None, message: str) -> None:
        if category.enforcement == "None":
            return
        if name is not None and _ignored(name, category.ignore_name_pattern):
            return
        if type_mutability(tree, type_node) is True:
            findings.append(report(tree, PREFER_IMMUTABLE_TYPES, node, message))

    for fn in tree.find_nodes("function_declaration", "function_expression", "function",
                              "arrow_function", "method_definition"):
        for param in parameter_nodes(fn):
            name = _pattern_name(tree, param.child_by_field_name("pattern"))
            check(options.parameters, param, annotated_type(param), name, "Parameter should be a readonly type.")
        return_type = _return_type(fn)
        if return_type is not None:
            check(options.return_types, fn.child_by_field_name("return_type"), return_type,
                  function_name(tree, fn), "Return type should be a readonly type.")

    for declarator in tree.find_nodes("variable_declarator"):
        name = _pattern_name(tree, declarator.child_by_field_name("name"))
        check(options.variables, declarator, annotated_type(declarator), name, "Variable should be a readonly type.")

    for member in tree.find_nodes("property_signature"):
        name = _pattern_name(tree, member.child_by_field_name("name"))
        check(options.variables, member, annotated_type(member), name, "Property should be a readonly type.")

    return findings


def detect_type_declaration_immutability(
    tree: SyntaxTree, options: TypeDeclarationOptions | None,
) -> list[Finding]:
    """Declared types must be fully readonly unless named ``Mutable...``."""
    options = options or TypeDeclarationOptions()
    findings = []
    for declaration in tree.find_nodes("type_alias_declaration", "interface_declaration"):
        if options.ignore_interfaces and declaration.type == "interface_declaration":
            continue
        name_node = declaration.child_by_field_name("name")
        name = tree.text(name_node)
        if _ignored(name, options.identifiers):
            continue
        if declaration.type == "interface_declaration":
            shape = declaration.child_by_field_name("body")
        else:
            shape = declaration.child_by_field_name("value")
        mutable = type_mutability(tree, shape)
        if mutable is None:
            continue
        if MUTABLE_TYPE_NAME.match(name):
            if not mutable:
                findings.append(report(
                    tree, TYPE_DECLARATION_IMMUTABILITY, name_node, f"{name} is named as mutable but is fully readonly.",
                ))
        elif mutable:
            findings.append(report(
                tree, TYPE_DECLARATION_IMMUTABILITY, name_node, f"{name} should be a fully readonly type.",
            ))
    return findings


RULES = [
    Rule(NO_LET, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_no_let,
         "Disallow mutable variable bindings", NoLetOptions),
    Rule(NO_THROW, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_no_throw,
         "Disallow throw statements", NoThrowOptions),
    Rule(NO_PROMISE_REJECT, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_no_promise_reject,
         "Disallow rejecting promises"),
    Rule(IMMUTABLE_DATA, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_immutable_data,
         "Disallow mutating const-bound values", ImmutableDataOptions),
    Rule(READONLY_TYPE, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_readonly_type,
         "Require readonly members in declared type shapes"),
    Rule(PREFER_PROPERTY_SIGNATURES, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_prefer_property_signatures,
         "Prefer property signatures over method signatures", PropertySignaturesOptions),
    Rule(PREFER_IMMUTABLE_TYPES, RuleCategory.FUNCTIONAL, Severity.ERROR, detect_prefer_immutable_types,
         "Require readonly parameter, return and variable types", PreferImmutableTypesOptions),
    Rule(TYPE_DECLARATION_IMMUTABILITY, RuleCategory.FUNCTIONAL, Severity.WARNING,
         detect_type_declaration_immutability, "Require declared types to be fully readonly", TypeDeclarationOptions),
]
