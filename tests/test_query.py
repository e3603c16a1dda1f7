"""Tests for the data-fetching hook rules."""

QUERY_IMPORT = 'import { QueryClient, useQuery, useMutation, useQueries } from "@tanstack/solid-query";\n'


def _texts(code: str, diagnostics) -> list[str]:
    source = code.encode("utf-8")
    return [source[d.span.start:d.span.end].decode("utf-8") for d in diagnostics]


class TestStableQueryClient:
    """Tests for query/stable-query-client."""

    def test_client_in_component_or_hook(self, lint):
        """Test that constructing a client in a component or hook body is reported."""
        code = QUERY_IMPORT + (
            "function App() {\n  const client = new QueryClient();\n  return client;\n}\n"
            "function useClient() {\n  return new QueryClient();\n}\n"
        )
        diagnostics = lint(code, "query/stable-query-client", "app.ts")

        assert _texts(code, diagnostics) == ["new QueryClient()", "new QueryClient()"]
        assert [d.span.line for d in diagnostics] == [3, 7]

    def test_stable_locations(self, lint):
        """Test module scope, plain helpers and async functions."""
        code = QUERY_IMPORT + (
            "const shared = new QueryClient();\n"
            "function makeClient() {\n  return new QueryClient();\n}\n"
            "async function App() {\n  return new QueryClient();\n}\n"
        )
        assert lint(code, "query/stable-query-client", "app.ts") == []

    def test_other_client_class(self, lint):
        """Test that a QueryClient from another library is not checked."""
        code = 'import { QueryClient } from "./local";\nfunction App() {\n  return new QueryClient();\n}\n'
        assert lint(code, "query/stable-query-client", "app.ts") == []


class TestNoRestDestructuring:
    """Tests for query/no-rest-destructuring."""

    def test_direct_rest(self, lint):
        """Test rest destructuring of a query hook call."""
        code = QUERY_IMPORT + "const { data, ...rest } = useQuery(options);\n"
        diagnostics = lint(code, "query/no-rest-destructuring", "app.ts")

        assert _texts(code, diagnostics) == ["{ data, ...rest }"]
        assert diagnostics[0].message.startswith("Object rest destructuring on a query")

    def test_rest_through_variable(self, lint):
        """Test rest destructuring of a variable holding a query result."""
        code = QUERY_IMPORT + "const query = useQuery(options);\nconst { ...rest } = query;\n"
        assert [d.span.line for d in lint(code, "query/no-rest-destructuring", "app.ts")] == [3]

    def test_multi_query_elements(self, lint):
        """Test rest destructuring inside a destructured array of results."""
        code = QUERY_IMPORT + "const [{ ...first }, second] = useQueries(options);\n"
        assert _texts(code, lint(code, "query/no-rest-destructuring", "app.ts")) == ["{ ...first }"]

    def test_allowed_forms(self, lint):
        """Test plain destructuring and mutation results."""
        code = QUERY_IMPORT + (
            "const { data, isLoading } = useQuery(options);\n"
            "const { mutate, ...mutation } = useMutation(options);\n"
        )
        assert lint(code, "query/no-rest-destructuring", "app.ts") == []


class TestPropertyOrder:
    """Tests for the query option ordering rules."""

    def test_mutation_callbacks(self, lint):
        """Test that onError before onMutate is reported at onError."""
        code = QUERY_IMPORT + "useMutation({ onError: e, onMutate: m, onSettled: s });\n"
        diagnostics = lint(code, "query/mutation-property-order", "app.ts")

        assert _texts(code, diagnostics) == ["onError"]
        assert diagnostics[0].message == (
            "Invalid order of properties for `useMutation`: `onError` should come after `onMutate`."
        )

    def test_mutation_in_order(self, lint):
        """Test that a correctly ordered mutation is fine."""
        code = QUERY_IMPORT + "useMutation({ mutationFn: f, onMutate: m, onError: e, onSettled: s });\n"
        assert lint(code, "query/mutation-property-order", "app.ts") == []

    def test_infinite_query(self, lint):
        """Test that page param callbacks must follow queryFn."""
        code = (
            'import { useInfiniteQuery, infiniteQueryOptions } from "@tanstack/solid-query";\n'
            "useInfiniteQuery({ queryKey: k, getNextPageParam: g, queryFn: f });\n"
            "infiniteQueryOptions({ queryKey: k, queryFn: f, getNextPageParam: g });\n"
        )
        diagnostics = lint(code, "query/infinite-query-property-order", "app.ts")

        assert _texts(code, diagnostics) == ["getNextPageParam"]
        assert "`getNextPageParam` should come after `queryFn`" in diagnostics[0].message


class TestNoUnstableDeps:
    """Tests for query/no-unstable-deps."""

    def test_whole_result_in_deps(self, lint):
        """Test that a whole query result in a dependency array is reported."""
        code = QUERY_IMPORT + (
            "function useThing() {\n"
            "  const query = useQuery(options);\n"
            "  const { data } = useQuery(options);\n"
            "  const mutation = useMutation(options);\n"
            "  useEffect(() => {}, [query, data]);\n"
            "  useCallback(() => {}, [mutation]);\n"
            "}\n"
        )
        diagnostics = lint(code, "query/no-unstable-deps", "app.ts")

        assert _texts(code, diagnostics) == ["query", "mutation"]
        assert diagnostics[0].message.startswith(
            "The result of useQuery is not referentially stable, so don't pass it directly into the "
            "dependencies array of useEffect."
        )
        assert "The result of useMutation" in diagnostics[1].message


class TestExhaustiveDeps:
    """Tests for query/exhaustive-deps."""

    def test_missing_dependencies(self, lint):
        """Test that locals read by queryFn must appear in queryKey."""
        code = QUERY_IMPORT + (
            "function useTodo(id, page) {\n"
            '  return useQuery({ queryKey: ["todo"], queryFn: () => fetchTodo(id, page) });\n'
            "}\n"
        )
        diagnostics = lint(code, "query/exhaustive-deps", "app.ts")

        assert _texts(code, diagnostics) == ['["todo"]']
        assert diagnostics[0].message == "The following dependencies are missing in your queryKey: id, page"

    def test_complete_key(self, lint):
        """Test that keys naming every dependency are fine."""
        code = QUERY_IMPORT + (
            "function useTodo(id) {\n"
            '  return useQuery({ queryKey: ["todo", { id }], queryFn: () => fetchTodo(id) });\n'
            "}\n"
        )
        assert lint(code, "query/exhaustive-deps", "app.ts") == []

    def test_stable_names(self, lint):
        """Test that module-level names and names local to queryFn are not dependencies."""
        code = QUERY_IMPORT + (
            'const base = "/api";\n'
            "function useTodos() {\n"
            '  return useQuery({ queryKey: ["todos"], queryFn: () => { const url = base; return get(url); } });\n'
            "}\n"
        )
        assert lint(code, "query/exhaustive-deps", "app.ts") == []

    def test_allowlist(self, lint_with):
        """Test that allowlisted names are ignored."""
        code = QUERY_IMPORT + (
            "function useTodo(id, api) {\n"
            '  return useQuery({ queryKey: ["todo", id], queryFn: () => api.fetch(id) });\n'
            "}\n"
        )
        assert lint_with(code, "query/exhaustive-deps", {"allowlist": ["api"]}, "app.ts") == []
