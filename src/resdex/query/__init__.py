"""Query layer: ordering, filtering, pagination and the three query tools."""

from resdex.query.filter import filter_by, unique_by
from resdex.query.paginator import PaginationResult, paginate
from resdex.query.sorter import sort_resources
from resdex.query.tools import (
    GetResourceContentTool,
    ListResourcesTool,
    SearchResourcesTool,
    render_resource,
)

__all__ = [
    "GetResourceContentTool",
    "ListResourcesTool",
    "PaginationResult",
    "SearchResourcesTool",
    "filter_by",
    "paginate",
    "render_resource",
    "sort_resources",
    "unique_by",
]
