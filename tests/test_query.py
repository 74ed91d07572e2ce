import pytest
from cloud_alm_mcp.core.odata import KeyStyle, ODataQuery, SortOrder, key_path


def test_empty_query_renders_nothing():
    assert ODataQuery().to_query_string() == ""
    assert ODataQuery().is_empty


def test_rendering_is_idempotent():
    query = ODataQuery().filter("status eq 'OPEN'").top(10)
    assert query.to_query_string() == query.to_query_string()


def test_filter_encodes_quotes_and_ampersand():
    query = ODataQuery().filter("title eq 'R&D'")
    assert query.to_query_string() == "?$filter=title%20eq%20%27R%26D%27"


def test_orderby_keeps_call_order():
    query = (
        ODataQuery()
        .orderby("status", SortOrder.ASC)
        .orderby("modifiedAt", SortOrder.DESC)
    )
    assert query.to_query_string() == "?$orderby=status asc,modifiedAt desc"


def test_facets_render_in_fixed_order():
    query = (
        ODataQuery()
        .search("login")
        .count()
        .skip(20)
        .top(10)
        .orderby("title")
        .expand(["toParentNode"])
        .select(["uuid", "title"])
        .filter("a eq 1")
    )
    assert query.to_query_string() == (
        "?$filter=a%20eq%201&$select=uuid,title&$expand=toParentNode"
        "&$orderby=title asc&$top=10&$skip=20&$count=true&$search=login"
    )


def test_setters_do_not_mutate_original():
    base = ODataQuery().top(5)
    narrowed = base.filter("x eq 1")
    assert base.filter_expr is None
    assert narrowed.top_n == 5


def test_negative_paging_rejected():
    with pytest.raises(ValueError):
        ODataQuery().top(-1)
    with pytest.raises(ValueError):
        ODataQuery().skip(-5)


def test_from_params_parses_tool_strings():
    query = ODataQuery.from_params(
        filter="projectId eq 'abc'",
        select="uuid, title",
        orderby="modifiedAt desc, title",
        top=50,
    )
    assert query is not None
    assert query.select_fields == ("uuid", "title")
    assert query.order_by == (
        ("modifiedAt", SortOrder.DESC),
        ("title", SortOrder.ASC),
    )
    assert query.to_query_string() == (
        "?$filter=projectId%20eq%20%27abc%27&$select=uuid,title"
        "&$orderby=modifiedAt desc,title asc&$top=50"
    )


def test_from_params_returns_none_when_empty():
    assert ODataQuery.from_params() is None
    assert ODataQuery.from_params(filter="", select="  ,") is None


def test_sort_order_parse_is_lenient():
    assert SortOrder.parse("DESC") is SortOrder.DESC
    assert SortOrder.parse("sideways") is SortOrder.ASC
    assert SortOrder.parse(None) is SortOrder.ASC


def test_key_path_styles():
    assert key_path("abc-123") == "/abc-123"
    assert key_path("a/b c") == "/a%2Fb%20c"
    assert key_path("SAP.Alerts", KeyStyle.PARENTHESES) == "('SAP.Alerts')"
    assert key_path("o'neil", KeyStyle.PARENTHESES) == "('o%27%27neil')"
    assert key_path("") == ""
