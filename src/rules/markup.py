"""Markup hygiene detectors for JSX attributes and elements."""

import re
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from src.lint.frontend import SyntaxTree
from src.lint.registry import Rule
from src.models.diagnostics import Finding, RuleCategory, Severity
from src.rules.queries import (
    call_arguments,
    callee_node,
    find_jsx_attribute,
    first_named,
    is_dom_element_name,
    jsx_attribute_expression,
    jsx_attribute_name,
    jsx_attribute_name_node,
    jsx_attribute_value,
    jsx_attributes,
    jsx_children,
    jsx_expression_inner,
    jsx_tag,
    jsx_tag_name,
    jsx_tags,
    named_children,
    object_properties,
    report,
    resolve_binding,
    root_identifier,
    static_value,
    string_value,
    unwrap,
)
from src.rules.vocabulary import (
    CLASSNAME_HELPERS,
    COMMON_EVENTS_BY_LOWERCASE,
    CSS_PROPERTIES,
    EVENT_HANDLER_NAME,
    FOREIGN_RAW_HTML_PROP,
    GLOBAL_NAMES,
    HTML_LIKE,
    KNOWN_NAMESPACES,
    LENGTH_PROPERTY,
    NONSTANDARD_EVENTS,
    OTHER_NAMESPACES,
    RAW_HTML_PROP,
    REACT_SPECIFIC_PROPS,
    SCRIPT_URL,
    SOLID_COMPONENTS,
    SOLID_PRIMITIVE_SOURCES,
    STYLE_NAMESPACES,
    VOID_ELEMENTS,
)

NO_INNERHTML = "solid/no-innerhtml"
JSX_NO_DUPLICATE_PROPS = "solid/jsx-no-duplicate-props"
JSX_NO_SCRIPT_URL = "solid/jsx-no-script-url"
NO_REACT_SPECIFIC_PROPS = "solid/no-react-specific-props"
NO_UNKNOWN_NAMESPACES = "solid/no-unknown-namespaces"
EVENT_HANDLERS = "solid/event-handlers"
NO_ARRAY_HANDLERS = "solid/no-array-handlers"
JSX_NO_UNDEF = "solid/jsx-no-undef"
SELF_CLOSING_COMP = "solid/self-closing-comp"
STYLE_PROP = "solid/style-prop"
PREFER_CLASSLIST = "solid/prefer-classlist"


class _Options(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class NoInnerHtmlOptions(_Options):
    allow_static: bool = Field(default=True, alias="allowStatic")


class DuplicatePropsOptions(_Options):
    ignore_case: bool = Field(default=False, alias="ignoreCase")


class UnknownNamespacesOptions(_Options):
    allowed_namespaces: list[str] = Field(default_factory=list, alias="allowedNamespaces")


class EventHandlersOptions(_Options):
    ignore_case: bool = Field(default=False, alias="ignoreCase")
    warn_on_spread: bool = Field(default=False, alias="warnOnSpread")


class JsxNoUndefOptions(_Options):
    allow_globals: bool = Field(default=False, alias="allowGlobals")
    auto_import: bool = Field(default=True, alias="autoImport")


class SelfClosingOptions(_Options):
    component: Literal["all", "none"] = "all"
    html: Literal["all", "void", "none"] = "all"


class StylePropOptions(_Options):
    style_props: list[str] = Field(default_factory=lambda: ["style"], alias="styleProps")
    allow_string: bool = Field(default=False, alias="allowString")


class PreferClassListOptions(_Options):
    classnames: list[str] = Field(default_factory=lambda: list(CLASSNAME_HELPERS))


def _element_of(tag):
    """The element owning a tag: the tag itself when self-closing."""
    return tag.parent if tag.type == "jsx_opening_element" else tag


def _is_namespaced(attribute) -> bool:
    name = jsx_attribute_name_node(attribute)
    return name is not None and name.type == "jsx_namespace_name"


def _named_attributes(tag) -> list:
    return [attribute for attribute in jsx_attributes(tag) if attribute.type == "jsx_attribute"]


def detect_no_innerhtml(tree: SyntaxTree, options: NoInnerHtmlOptions | None) -> list[Finding]:
    options = options or NoInnerHtmlOptions()
    dangerous = (
        "The innerHTML prop is dangerous; passing unsanitized input can lead to security vulnerabilities. "
        "This rule can be disabled or configured to allow static strings."
    )
    findings = []

    for tag in jsx_tags(tree):
        for attribute in _named_attributes(tag):
            name = jsx_attribute_name(tree, attribute)
            if name == FOREIGN_RAW_HTML_PROP:
                findings.append(report(
                    tree, NO_INNERHTML, attribute,
                    "The dangerouslySetInnerHTML prop is not supported; use innerHTML instead.",
                ))
                continue
            if name != RAW_HTML_PROP:
                continue

            value = static_value(tree, jsx_attribute_expression(attribute)) if options.allow_static else None
            if value is None or not isinstance(value.value, str):
                findings.append(report(tree, NO_INNERHTML, attribute, dangerous))
            elif not HTML_LIKE.search(value.value):
                findings.append(report(
                    tree, NO_INNERHTML, attribute, "The string passed to innerHTML does not appear to be valid HTML.",
                ))
            elif jsx_children(tree, _element_of(tag)):
                findings.append(report(
                    tree, NO_INNERHTML, attribute, "The innerHTML prop will replace the element's children.",
                ))

    return findings


def _normalize_prop_name(name: str, ignore_case: bool) -> str:
    if ignore_case or name.startswith("on"):
        name = re.sub(r"^on(?:capture)?:", "on", name.lower())
    return re.sub(r"^(?:attr|prop):", "", name)


def detect_jsx_no_duplicate_props(tree: SyntaxTree, options: DuplicatePropsOptions | None) -> list[Finding]:
    options = options or DuplicatePropsOptions()
    findings = []

    for tag in jsx_tags(tree):
        seen: set[str] = set()
        for attribute in _named_attributes(tag):
            name = jsx_attribute_name(tree, attribute)
            normalized = _normalize_prop_name(name, options.ignore_case)
            if normalized in seen:
                if normalized == "class":
                    message = (
                        "Duplicate `class` props are not allowed; while it might seem to work, "
                        "it can break unexpectedly. Use `classList` instead."
                    )
                else:
                    message = "Duplicate props are not allowed."
                findings.append(report(tree, JSX_NO_DUPLICATE_PROPS, jsx_attribute_name_node(attribute), message))
            seen.add(normalized)

        if "children" in seen and jsx_children(tree, _element_of(tag)):
            attribute = find_jsx_attribute(tree, tag, "children")
            findings.append(report(
                tree, JSX_NO_DUPLICATE_PROPS, jsx_attribute_name_node(attribute),
                "Using `children` prop with JSX children is not allowed.",
            ))

    return findings


def detect_jsx_no_script_url(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for tag in jsx_tags(tree):
        for attribute in _named_attributes(tag):
            value = static_value(tree, jsx_attribute_expression(attribute))
            if value is not None and isinstance(value.value, str) and SCRIPT_URL.match(value.value):
                findings.append(report(
                    tree, JSX_NO_SCRIPT_URL, attribute,
                    "For security, don't use javascript: URLs. Use event handlers instead if you can.",
                ))
    return findings


def detect_no_react_specific_props(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for tag in jsx_tags(tree):
        is_dom = is_dom_element_name(jsx_tag_name(tree, tag))
        for attribute in _named_attributes(tag):
            name = jsx_attribute_name(tree, attribute)
            if name in REACT_SPECIFIC_PROPS:
                findings.append(report(
                    tree, NO_REACT_SPECIFIC_PROPS, attribute,
                    f"Prefer the `{REACT_SPECIFIC_PROPS[name]}` prop over the deprecated `{name}` prop.",
                ))
            elif name == "key" and is_dom:
                findings.append(report(
                    tree, NO_REACT_SPECIFIC_PROPS, attribute,
                    "Elements in a <For> or <Index> list do not need a key prop.",
                ))
    return findings


def detect_no_unknown_namespaces(tree: SyntaxTree, options: UnknownNamespacesOptions | None) -> list[Finding]:
    options = options or UnknownNamespacesOptions()
    allowed = set(KNOWN_NAMESPACES) | set(OTHER_NAMESPACES) | set(options.allowed_namespaces)
    findings = []

    for tag in jsx_tags(tree):
        is_dom = is_dom_element_name(jsx_tag_name(tree, tag))
        for attribute in _named_attributes(tag):
            if not _is_namespaced(attribute):
                continue
            name_node = jsx_attribute_name_node(attribute)
            namespace = tree.text(name_node).split(":", 1)[0]

            if not is_dom:
                message = "Namespaced props have no effect on components."
            elif namespace in STYLE_NAMESPACES:
                message = (
                    f"Using the '{namespace}:' special prefix is potentially confusing, "
                    f"prefer the '{namespace}' prop instead."
                )
            elif namespace not in allowed:
                message = (
                    f"'{namespace}:' is not one of Solid's special prefixes for JSX attributes "
                    "(on:, oncapture:, use:, prop:, attr:, bool:)."
                )
            else:
                continue
            findings.append(report(tree, NO_UNKNOWN_NAMESPACES, name_node, message))

    return findings


def detect_event_handlers(tree: SyntaxTree, options: EventHandlersOptions | None) -> list[Finding]:
    """Check the naming of event handler props on DOM elements.

    A prop that looks like a handler but holds a static string or number
    is really an attribute. Otherwise the name must be an unambiguous,
    correctly capitalized event.
    """
    options = options or EventHandlersOptions()
    findings = []

    for tag in jsx_tags(tree):
        if not is_dom_element_name(jsx_tag_name(tree, tag)):
            continue
        if options.warn_on_spread:
            for spread in jsx_attributes(tag):
                spread_value = jsx_expression_inner(spread) if spread.type == "jsx_expression" else None
                spread_object = unwrap(first_named(spread_value)) if spread_value is not None else None
                if spread_object is None or spread_object.type != "object":
                    continue
                for entry in object_properties(tree, spread_object):
                    if entry.spread or entry.key is None or entry.key.type == "computed_property_name":
                        continue
                    if entry.name is not None and entry.name.startswith("on"):
                        findings.append(report(
                            tree, EVENT_HANDLERS, entry.node,
                            f"The {entry.name} prop should be added as a JSX attribute, not spread in. "
                            "Solid doesn't add listeners when spreading into JSX.",
                        ))

        for attribute in _named_attributes(tag):
            if _is_namespaced(attribute):
                continue
            name_node = jsx_attribute_name_node(attribute)
            name = tree.text(name_node)
            if not EVENT_HANDLER_NAME.match(name):
                continue

            raw = jsx_attribute_value(attribute)
            value = static_value(tree, jsx_attribute_expression(attribute)) if raw is not None else None
            if raw is None or raw.type == "string" or (
                value is not None and isinstance(value.value, (str, int, float)) and not isinstance(value.value, bool)
            ):
                shown = f" ({value.value})" if value is not None else ""
                findings.append(report(
                    tree, EVENT_HANDLERS, attribute,
                    f"The {name} prop is named as an event handler (starts with 'on'), but Solid knows its "
                    f"value{shown} is a string or number, so it will be treated as an attribute. "
                    f"If this is intentional, name this prop attr:{name}.",
                ))
                continue
            if options.ignore_case:
                continue

            lowered = name.lower()
            if lowered in NONSTANDARD_EVENTS:
                fixed = NONSTANDARD_EVENTS[lowered]
                findings.append(report(
                    tree, EVENT_HANDLERS, name_node, f"The {name} prop should be renamed to {fixed} for readability.",
                ))
            elif lowered in COMMON_EVENTS_BY_LOWERCASE and COMMON_EVENTS_BY_LOWERCASE[lowered] != name:
                fixed = COMMON_EVENTS_BY_LOWERCASE[lowered]
                findings.append(report(
                    tree, EVENT_HANDLERS, name_node, f"The {name} prop should be renamed to {fixed} for readability.",
                ))
            elif name[2].islower():
                handler_name = "on" + name[2].upper() + name[3:]
                findings.append(report(
                    tree, EVENT_HANDLERS, name_node,
                    f"Ambiguous prop name: '{name}'. Rename to '{handler_name}' to be handled as an event handler, "
                    f"or to 'attr:{name}' to be treated as a regular attribute.",
                ))

    return findings


def detect_no_array_handlers(tree: SyntaxTree, options=None) -> list[Finding]:
    findings = []
    for tag in jsx_tags(tree):
        if not is_dom_element_name(jsx_tag_name(tree, tag)):
            continue
        for attribute in _named_attributes(tag):
            name = jsx_attribute_name(tree, attribute)
            if not re.match(r"^on(?::|[A-Za-z])", name):
                continue
            value = jsx_attribute_expression(attribute)
            if value is not None and value.type == "array":
                findings.append(report(
                    tree, NO_ARRAY_HANDLERS, attribute, "Passing an array as an event handler is potentially confusing.",
                ))
    return findings


def detect_jsx_no_undef(tree: SyntaxTree, options: JsxNoUndefOptions | None) -> list[Finding]:
    """Flag components and directives used without a binding in scope."""
    options = options or JsxNoUndefOptions()
    findings = []

    def defined(ident) -> bool:
        if options.allow_globals and tree.text(ident) in GLOBAL_NAMES:
            return True
        return resolve_binding(tree, ident) is not None

    for tag in jsx_tags(tree):
        name_node = tag.child_by_field_name("name")
        if name_node.type == "jsx_namespace_name":
            continue
        ident = name_node if name_node.type == "identifier" else root_identifier(name_node)
        if ident is None:
            continue
        name = tree.text(ident)
        if is_dom_element_name(name) or defined(ident):
            continue
        if options.auto_import and name in SOLID_COMPONENTS:
            message = f"'{name}' should be imported from '{SOLID_PRIMITIVE_SOURCES[name]}'."
        else:
            message = f"'{name}' is not defined."
        findings.append(report(tree, JSX_NO_UNDEF, ident, message))

    for tag in jsx_tags(tree):
        for attribute in _named_attributes(tag):
            name_node = jsx_attribute_name_node(attribute)
            if name_node.type != "jsx_namespace_name":
                continue
            parts = named_children(name_node)
            if len(parts) != 2 or tree.text(parts[0]) != "use":
                continue
            directive = parts[1]
            if not defined(directive):
                findings.append(report(
                    tree, JSX_NO_UNDEF, directive, f"Custom directive '{tree.text(directive)}' is not defined.",
                ))

    return findings


def _can_self_close(tree: SyntaxTree, element) -> bool:
    opening = jsx_tag(element)
    closing = element.child_by_field_name("close_tag")
    if closing is None:
        closing = next((c for c in element.named_children if c.type == "jsx_closing_element"), None)
    if opening is None or closing is None:
        return False
    between = tree.source[opening.end_byte:closing.start_byte].decode("utf-8", errors="replace")
    return between == "" or (not between.strip() and "\n" in between)


def detect_self_closing_comp(tree: SyntaxTree, options: SelfClosingOptions | None) -> list[Finding]:
    options = options or SelfClosingOptions()
    findings = []

    for element in tree.find_nodes("jsx_element"):
        name = jsx_tag_name(tree, jsx_tag(element))
        if name is None or not _can_self_close(tree, element):
            continue
        if is_dom_element_name(name):
            wanted = options.html == "all" or (options.html == "void" and name in VOID_ELEMENTS)
        else:
            wanted = options.component == "all"
        if wanted:
            findings.append(report(tree, SELF_CLOSING_COMP, element, "Empty components are self-closing."))

    return findings


def _kebab_case(name: str) -> str:
    return re.sub(r"[A-Z]", lambda match: "-" + match.group(0).lower(), name)


def detect_style_prop(tree: SyntaxTree, options: StylePropOptions | None) -> list[Finding]:
    """Check style props: object form, kebab-case keys and unit-bearing lengths."""
    options = options or StylePropOptions()
    findings = []

    for tag in jsx_tags(tree):
        for attribute in _named_attributes(tag):
            if jsx_attribute_name(tree, attribute) not in options.style_props:
                continue
            value = jsx_attribute_expression(attribute)
            if value is None:
                continue

            if string_value(tree, value) is not None or value.type == "template_string":
                if not options.allow_string:
                    findings.append(report(
                        tree, STYLE_PROP, attribute, "Use an object for the style prop instead of a string.",
                    ))
                continue
            if value.type != "object":
                continue

            for prop in object_properties(tree, value):
                if prop.spread or prop.name is None or prop.node.type != "pair":
                    continue
                name = prop.name
                if not name.startswith("--") and name not in CSS_PROPERTIES:
                    kebab = _kebab_case(name)
                    if kebab in CSS_PROPERTIES:
                        message = f"Use {kebab} instead of {name}."
                    else:
                        message = f"{name} is not a valid CSS property."
                    findings.append(report(tree, STYLE_PROP, prop.key, message))
                    continue

                number = static_value(tree, prop.value, resolve=False)
                if (
                    LENGTH_PROPERTY.search(name)
                    and number is not None
                    and isinstance(number.value, (int, float))
                    and not isinstance(number.value, bool)
                    and number.value != 0
                ):
                    findings.append(report(
                        tree, STYLE_PROP, prop.value,
                        'This CSS property value should be a string with a unit; Solid does not automatically '
                        'append a "px" unit.',
                    ))

    return findings


def detect_prefer_classlist(tree: SyntaxTree, options: PreferClassListOptions | None) -> list[Finding]:
    options = options or PreferClassListOptions()
    findings = []

    for tag in jsx_tags(tree):
        if find_jsx_attribute(tree, tag, "classList") is not None:
            continue
        for attribute in _named_attributes(tag):
            name = jsx_attribute_name(tree, attribute)
            if name not in ("class", "className"):
                continue
            value = jsx_attribute_expression(attribute)
            if value is None or value.type != "call_expression":
                continue
            callee = callee_node(value)
            if callee is None or callee.type != "identifier" or tree.text(callee) not in options.classnames:
                continue
            arguments = call_arguments(value)
            if len(arguments) == 1 and unwrap(arguments[0]).type == "object":
                findings.append(report(
                    tree, PREFER_CLASSLIST, attribute,
                    f"The classlist prop should be used instead of {tree.text(callee)} to efficiently set classes "
                    "based on an object.",
                ))

    return findings


RULES = [
    Rule(NO_INNERHTML, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_innerhtml,
         "Disallow unsafe raw HTML props", NoInnerHtmlOptions),
    Rule(JSX_NO_DUPLICATE_PROPS, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_jsx_no_duplicate_props,
         "Disallow duplicate props on one element", DuplicatePropsOptions),
    Rule(JSX_NO_SCRIPT_URL, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_jsx_no_script_url,
         "Disallow javascript: URLs"),
    Rule(NO_REACT_SPECIFIC_PROPS, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_no_react_specific_props,
         "Disallow React-specific prop names"),
    Rule(NO_UNKNOWN_NAMESPACES, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_unknown_namespaces,
         "Disallow unknown attribute namespaces", UnknownNamespacesOptions),
    Rule(EVENT_HANDLERS, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_event_handlers,
         "Require unambiguous event handler props", EventHandlersOptions),
    Rule(NO_ARRAY_HANDLERS, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_no_array_handlers,
         "Disallow array event handlers"),
    Rule(JSX_NO_UNDEF, RuleCategory.REACTIVE_COMPONENT, Severity.ERROR, detect_jsx_no_undef,
         "Disallow undefined components and directives", JsxNoUndefOptions),
    Rule(SELF_CLOSING_COMP, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_self_closing_comp,
         "Require self-closing empty elements", SelfClosingOptions),
    Rule(STYLE_PROP, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_style_prop,
         "Require valid style objects", StylePropOptions),
    Rule(PREFER_CLASSLIST, RuleCategory.REACTIVE_COMPONENT, Severity.WARNING, detect_prefer_classlist,
         "Prefer classList over classnames helpers", PreferClassListOptions),
]
