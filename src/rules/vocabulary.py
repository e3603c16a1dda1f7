"""Vocabulary tables used by the detectors.

Every enumerated name list a rule depends on lives here so that it can be
extended in one place: mutating methods, foreign prop names, HTML tags,
CSS properties, event names, library entry points and option orderings.
"""

import re

# ---------------------------------------------------------------------------
# Functional purity
# ---------------------------------------------------------------------------

ARRAY_MUTATOR_METHODS = frozenset({
    "copyWithin", "fill", "pop", "push", "reverse", "shift", "sort", "splice", "unshift",
})

COLLECTION_MUTATOR_METHODS = frozenset({"add", "clear", "delete", "set"})

COLLECTION_CONSTRUCTORS = frozenset({"Map", "Set", "WeakMap", "WeakSet"})

MUTABLE_GENERIC_TYPES = frozenset({"Record", "Array", "Map", "Set", "WeakMap", "WeakSet"})

READONLY_GENERIC_TYPES = frozenset({
    "Readonly", "ReadonlyArray", "ReadonlyMap", "ReadonlySet",
    "ReadonlyDeep", "DeepReadonly", "Immutable",
})

# Type names that are declared mutable on purpose
MUTABLE_TYPE_NAME = re.compile(r"^I?Mutable")

# ---------------------------------------------------------------------------
# Reactive components and markup
# ---------------------------------------------------------------------------

HTML_TAGS = frozenset({
    "a", "abbr", "address", "area", "article", "aside", "audio", "b", "base", "bdi", "bdo",
    "blockquote", "body", "br", "button", "canvas", "caption", "cite", "code", "col",
    "colgroup", "data", "datalist", "dd", "del", "details", "dfn", "dialog", "div", "dl",
    "dt", "em", "embed", "fieldset", "figcaption", "figure", "footer", "form", "h1", "h2",
    "h3", "h4", "h5", "h6", "head", "header", "hgroup", "hr", "html", "i", "iframe", "img",
    "input", "ins", "kbd", "label", "legend", "li", "link", "main", "map", "mark", "menu",
    "meta", "meter", "nav", "noscript", "object", "ol", "optgroup", "option", "output", "p",
    "param", "picture", "pre", "progress", "q", "rp", "rt", "ruby", "s", "samp", "script",
    "search", "section", "select", "slot", "small", "source", "span", "strong", "style",
    "sub", "summary", "sup", "svg", "table", "tbody", "td", "template", "textarea", "tfoot",
    "th", "thead", "time", "title", "tr", "track", "u", "ul", "var", "video", "wbr",
})

VOID_ELEMENTS = frozenset({
    "area", "base", "br", "col", "embed", "hr", "img", "input", "link", "meta", "param",
    "source", "track", "wbr",
})

# Props from another UI ecosystem and their native names
REACT_SPECIFIC_PROPS = {
    "className": "class",
    "htmlFor": "for",
}

FOREIGN_RAW_HTML_PROP = "dangerouslySetInnerHTML"
RAW_HTML_PROP = "innerHTML"

KNOWN_NAMESPACES = ("on", "oncapture", "use", "prop", "attr", "bool")
STYLE_NAMESPACES = ("style", "class")
OTHER_NAMESPACES = ("xmlns", "xlink")

COMMON_EVENTS = (
    "onAnimationEnd", "onAnimationIteration", "onAnimationStart", "onBeforeInput", "onBlur",
    "onChange", "onClick", "onContextMenu", "onCopy", "onCut", "onDblClick", "onDrag",
    "onDragEnd", "onDragEnter", "onDragExit", "onDragLeave", "onDragOver", "onDragStart",
    "onDrop", "onError", "onFocus", "onFocusIn", "onFocusOut", "onGotPointerCapture",
    "onInput", "onInvalid", "onKeyDown", "onKeyPress", "onKeyUp", "onLoad",
    "onLostPointerCapture", "onMouseDown", "onMouseEnter", "onMouseLeave", "onMouseMove",
    "onMouseOut", "onMouseOver", "onMouseUp", "onPaste", "onPointerCancel", "onPointerDown",
    "onPointerEnter", "onPointerLeave", "onPointerMove", "onPointerOut", "onPointerOver",
    "onPointerUp", "onReset", "onScroll", "onSelect", "onSubmit", "onToggle",
    "onTouchCancel", "onTouchEnd", "onTouchMove", "onTouchStart", "onTransitionEnd",
    "onWheel",
)

COMMON_EVENTS_BY_LOWERCASE = {event.lower(): event for event in COMMON_EVENTS}

NONSTANDARD_EVENTS = {
    "ondoubleclick": "onDblClick",
}

EVENT_HANDLER_NAME = re.compile(r"^on[a-zA-Z]")

SCRIPT_URL = re.compile(
    r"^[\u0000-\u001F ]*j[\r\n\t]*a[\r\n\t]*v[\r\n\t]*a[\r\n\t]*s[\r\n\t]*c[\r\n\t]*r"
    r"[\r\n\t]*i[\r\n\t]*p[\r\n\t]*t[\r\n\t]*:",
    re.IGNORECASE,
)

HTML_LIKE = re.compile(r"<[a-z][\s\S]*>", re.IGNORECASE)

CLASSNAME_HELPERS = ("cn", "clsx", "classnames")

LENGTH_PROPERTY = re.compile(r"\b(?:width|height|margin|padding|border-width|font-size)\b", re.IGNORECASE)

CSS_PROPERTIES = frozenset({
    # Layout
    "display", "position", "top", "right", "bottom", "left", "float", "clear", "z-index",
    "overflow", "overflow-x", "overflow-y", "overflow-wrap", "visibility", "opacity",
    "clip", "clip-path", "inset", "inset-block", "inset-block-start", "inset-block-end",
    "inset-inline", "inset-inline-start", "inset-inline-end",
    # Flexbox and grid
    "flex", "flex-basis", "flex-direction", "flex-flow", "flex-grow", "flex-shrink",
    "flex-wrap", "order", "justify-content", "justify-items", "justify-self",
    "align-content", "align-items", "align-self", "place-content", "place-items",
    "place-self", "grid", "grid-area", "grid-auto-columns", "grid-auto-flow",
    "grid-auto-rows", "grid-column", "grid-column-end", "grid-column-gap",
    "grid-column-start", "grid-gap", "grid-row", "grid-row-end", "grid-row-gap",
    "grid-row-start", "grid-template", "grid-template-areas", "grid-template-columns",
    "grid-template-rows", "gap", "row-gap", "column-gap",
    # Box model
    "width", "height", "min-width", "max-width", "min-height", "max-height",
    "inline-size", "block-size", "min-inline-size", "max-inline-size",
    "min-block-size", "max-block-size", "box-sizing", "aspect-ratio",
    "margin", "margin-top", "margin-right", "margin-bottom", "margin-left",
    "margin-block", "margin-block-start", "margin-block-end",
    "margin-inline", "margin-inline-start", "margin-inline-end",
    "padding", "padding-top", "padding-right", "padding-bottom", "padding-left",
    "padding-block", "padding-block-start", "padding-block-end",
    "padding-inline", "padding-inline-start", "padding-inline-end",
    # Borders and outlines
    "border", "border-top", "border-right", "border-bottom", "border-left",
    "border-width", "border-top-width", "border-right-width", "border-bottom-width",
    "border-left-width", "border-style", "border-top-style", "border-right-style",
    "border-bottom-style", "border-left-style", "border-color", "border-top-color",
    "border-right-color", "border-bottom-color", "border-left-color", "border-radius",
    "border-top-left-radius", "border-top-right-radius", "border-bottom-left-radius",
    "border-bottom-right-radius", "border-start-start-radius", "border-start-end-radius",
    "border-end-start-radius", "border-end-end-radius", "border-image",
    "border-image-outset", "border-image-repeat", "border-image-slice",
    "border-image-source", "border-image-width", "border-collapse", "border-spacing",
    "border-block", "border-block-color", "border-block-style", "border-block-width",
    "border-block-start", "border-block-end", "border-inline", "border-inline-color",
    "border-inline-style", "border-inline-width", "border-inline-start",
    "border-inline-end", "outline", "outline-color", "outline-offset", "outline-style",
    "outline-width", "box-shadow",
    # Background
    "background", "background-attachment", "background-blend-mode", "background-clip",
    "background-color", "background-image", "background-origin", "background-position",
    "background-position-x", "background-position-y", "background-repeat",
    "background-size",
    # Typography
    "color", "font", "font-family", "font-feature-settings", "font-kerning", "font-size",
    "font-size-adjust", "font-stretch", "font-style", "font-synthesis", "font-variant",
    "font-variant-caps", "font-variant-ligatures", "font-variant-numeric",
    "font-variation-settings", "font-weight", "letter-spacing", "line-break",
    "line-height", "text-align", "text-align-last", "text-decoration",
    "text-decoration-color", "text-decoration-line", "text-decoration-style",
    "text-decoration-thickness", "text-emphasis", "text-indent", "text-justify",
    "text-orientation", "text-overflow", "text-rendering", "text-shadow",
    "text-transform", "text-underline-offset", "text-underline-position",
    "white-space", "word-break", "word-spacing", "word-wrap", "writing-mode",
    "direction", "unicode-bidi", "hyphens", "tab-size", "quotes",
    "list-style", "list-style-image", "list-style-position", "list-style-type",
    "table-layout", "caption-side", "empty-cells", "vertical-align",
    # Transforms, animation and effects
    "transform", "transform-box", "transform-origin", "transform-style", "translate",
    "rotate", "scale", "perspective", "perspective-origin", "backface-visibility",
    "animation", "animation-delay", "animation-direction", "animation-duration",
    "animation-fill-mode", "animation-iteration-count", "animation-name",
    "animation-play-state", "animation-timing-function", "transition",
    "transition-delay", "transition-duration", "transition-property",
    "transition-timing-function", "filter", "backdrop-filter", "mix-blend-mode",
    "isolation", "will-change",
    # Content, containment and scrolling
    "object-fit", "object-position", "resize", "contain", "content",
    "counter-increment", "counter-reset", "counter-set", "container",
    "container-name", "container-type", "scroll-behavior", "scroll-margin",
    "scroll-padding", "scroll-snap-align", "scroll-snap-stop", "scroll-snap-type",
    "overscroll-behavior", "overscroll-behavior-x", "overscroll-behavior-y",
    "columns", "column-count", "column-fill", "column-rule", "column-rule-color",
    "column-rule-style", "column-rule-width", "column-span", "column-width",
    "break-after", "break-before", "break-inside", "page-break-after",
    "page-break-before", "page-break-inside", "orphans", "widows",
    # Interaction
    "cursor", "caret-color", "pointer-events", "touch-action", "user-select",
    "appearance", "accent-color", "color-scheme", "all", "image-rendering",
    # Masks and shapes
    "mask", "mask-clip", "mask-composite", "mask-image", "mask-mode", "mask-origin",
    "mask-position", "mask-repeat", "mask-size", "mask-type", "shape-image-threshold",
    "shape-margin", "shape-outside",
    # Vendor prefixed
    "-webkit-appearance", "-webkit-font-smoothing", "-webkit-line-clamp",
    "-webkit-overflow-scrolling", "-webkit-tap-highlight-color",
    "-webkit-text-fill-color", "-webkit-text-stroke", "-webkit-text-size-adjust",
    "-moz-appearance", "-moz-osx-font-smoothing", "-ms-overflow-style",
    # SVG
    "fill", "fill-opacity", "fill-rule", "stroke", "stroke-dasharray",
    "stroke-dashoffset", "stroke-linecap", "stroke-linejoin", "stroke-miterlimit",
    "stroke-opacity", "stroke-width", "paint-order", "dominant-baseline", "text-anchor",
})

# ---------------------------------------------------------------------------
# Reactive primitives
# ---------------------------------------------------------------------------

SOLID_SOURCE = re.compile(r"^solid-js(?:/web|/store)?$")

SOLID_PRIMITIVE_SOURCES: dict[str, str] = {
    **dict.fromkeys((
        "createSignal", "createEffect", "createMemo", "createResource", "onMount",
        "onCleanup", "onError", "untrack", "batch", "on", "createRoot", "getOwner",
        "runWithOwner", "mergeProps", "splitProps", "useTransition", "startTransition",
        "observable", "from", "mapArray", "indexArray", "createContext", "useContext",
        "children", "lazy", "createUniqueId", "createDeferred", "createRenderEffect",
        "createComputed", "createReaction", "createSelector", "DEV", "For", "Show",
        "Switch", "Match", "Index", "ErrorBoundary", "Suspense", "SuspenseList",
    ), "solid-js"),
    **dict.fromkeys((
        "Portal", "render", "hydrate", "renderToString", "renderToStream",
        "renderToStringAsync", "isServer", "generateHydrationScript", "HydrationScript",
        "Dynamic",
    ), "solid-js/web"),
    **dict.fromkeys((
        "createStore", "produce", "reconcile", "unwrap", "createMutable", "modifyMutable",
    ), "solid-js/store"),
}

SOLID_TYPE_SOURCES: dict[str, str] = {
    **dict.fromkeys((
        "Signal", "Accessor", "Setter", "Resource", "ResourceActions", "ResourceOptions",
        "ResourceReturn", "ResourceFetcher", "InitializedResourceReturn", "Component",
        "VoidProps", "VoidComponent", "ParentProps", "ParentComponent", "FlowProps",
        "FlowComponent", "ValidComponent", "ComponentProps", "Ref", "MergeProps",
        "SplitProps", "Context", "JSX", "ResolvedChildren", "MatchProps",
    ), "solid-js"),
    "MountableElement": "solid-js/web",
    **dict.fromkeys(("StoreNode", "Store", "SetStoreFunction"), "solid-js/store"),
}

# Built-in components a user is likely to forget to import
SOLID_COMPONENTS = frozenset({
    "Show", "For", "Index", "Switch", "Match", "ErrorBoundary", "Suspense",
    "SuspenseList", "Portal", "Dynamic",
})

# Capitalized names a browser defines globally
GLOBAL_NAMES = frozenset({
    "Array", "Audio", "Boolean", "Date", "Element", "Error", "HTMLElement", "Image", "Intl",
    "JSON", "Map", "Math", "Number", "Object", "Option", "Promise", "Reflect", "Set",
    "String", "Symbol", "URL", "WeakMap", "WeakSet", "Worker",
})

STORE_SOURCE = "solid-js/store"

# Creators whose result (or first tuple element) is a reactive accessor
TUPLE_ACCESSOR_CREATORS = frozenset({"createSignal", "createResource"})
DIRECT_ACCESSOR_CREATORS = frozenset({"createMemo", "createSelector"})

TRACKED_SCOPES = frozenset({"createEffect", "createMemo", "createRenderEffect", "createComputed"})

# Reactive variables: signal accessors are read by calling them, props-like
# objects by reading their properties
SIGNAL_TUPLE_CREATORS = frozenset({"createSignal", "useTransition"})
PROPS_DIRECT_CREATORS = frozenset({"mergeProps", "splitProps", "createMutable"})
SIGNAL_SETTER_CREATORS = frozenset({"createSignal", "createStore"})

PROPS_NAME = re.compile(r"[pP]rops")
# Props read once on purpose, e.g. ``props.initialValue``
UNTRACKED_PROP_NAME = re.compile(r"^(?:initial|default|static[A-Z])")

# Callbacks run as tracked computations
FUNCTION_TRACKED_SCOPES = frozenset({
    "createMemo", "children", "createEffect", "createRenderEffect", "createDeferred",
    "createComputed", "createSelector", "untrack", "mapArray", "indexArray", "observable",
})
# Callbacks run later, outside tracking, where reading reactive values is fine
DEFERRED_CALLBACK_SCOPES = frozenset({"onMount", "onCleanup", "onError"})
TIMER_FUNCTIONS = frozenset({
    "setInterval", "setTimeout", "setImmediate", "requestAnimationFrame", "requestIdleCallback",
})
OBSERVER_CONSTRUCTORS = frozenset({
    "IntersectionObserver", "MutationObserver", "PerformanceObserver", "ReportingObserver",
    "ResizeObserver",
})
REACTIVE_FUNCTION_NAME = re.compile(r"^(?:use|create)[A-Z]")

# Callbacks invoked synchronously by their caller belong to the caller's scope
SYNC_CALLBACK_METHODS = frozenset({
    "forEach", "map", "flatMap", "reduce", "reduceRight", "find", "findIndex", "filter",
    "every", "some",
})
SYNC_CALLBACK_FUNCTIONS = frozenset({"batch", "produce"})

DEPENDENCY_FREE_SCOPES = frozenset({"createEffect", "createMemo"})

# ---------------------------------------------------------------------------
# Data-fetching hooks
# ---------------------------------------------------------------------------

QUERY_SOURCE = re.compile(r"^@tanstack/.+-query$")

QUERY_CLIENT_CLASS = "QueryClient"

QUERY_HOOKS = frozenset({
    "useQuery", "useSuspenseQuery", "useInfiniteQuery", "useSuspenseInfiniteQuery",
})

MULTI_QUERY_HOOKS = frozenset({"useQueries", "useSuspenseQueries"})

MUTATION_HOOKS = frozenset({"useMutation"})

RESULT_OBJECT_HOOKS = QUERY_HOOKS | MULTI_QUERY_HOOKS | MUTATION_HOOKS

DEPENDENCY_ARRAY_HOOKS = frozenset({
    "useEffect", "useLayoutEffect", "useCallback", "useMemo", "useImperativeHandle",
})

# Hook and component function names
HOOK_OR_COMPONENT_NAME = re.compile(r"^(use|[A-Z])")

INFINITE_QUERY_FUNCTIONS = frozenset({
    "infiniteQueryOptions", "useInfiniteQuery", "useSuspenseInfiniteQuery",
})

INFINITE_QUERY_ORDER = (
    (("queryFn",), ("getPreviousPageParam", "getNextPageParam")),
)

MUTATION_FUNCTIONS = frozenset({"useMutation"})

MUTATION_ORDER = (
    (("onMutate",), ("onError", "onSettled")),
)

# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

ROUTER_SOURCE = re.compile(r"^@tanstack/.+-router$")

PATH_FIRST_ARG_FUNCTIONS = frozenset({"createFileRoute", "createLazyFileRoute", "createLazyRoute"})

PATH_PROPERTY_FUNCTIONS = frozenset({"createRoute"})

# Called directly with the options object
CREATE_ROUTE_DIRECT = frozenset({"createRootRoute", "createRoute"})

# Called once to produce the function that takes the options object
CREATE_ROUTE_INDIRECT = frozenset({"createFileRoute", "createRootRouteWithContext"})

ROUTE_OPTION_ORDER = (
    (("params", "validateSearch"), ("search",)),
    (("search",), ("loaderDeps", "ssr")),
    (("loaderDeps",), ("context",)),
    (("context",), ("beforeLoad",)),
    (("beforeLoad",), ("loader",)),
    (("loader",), ("onEnter", "onStay", "onLeave", "head", "scripts", "headers", "remountDeps")),
)

VALID_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

BRACED_PARAM = re.compile(r"\{(-?\$)([^}]*)\}")
