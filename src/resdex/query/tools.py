"""Query tools: list, search and get-content over a ResourceRegistry.

List and search share one pipeline:
  select → unique by id → drop bare sections → sort → paginate → serialize

Get-content resolves exactly one resource and renders it as Markdown. A
missing id is an error-flagged result, not an exception.
"""

from __future__ import annotations

from typing import Any, TypedDict

from resdex.query.filter import filter_by, unique_by
from resdex.query.paginator import paginate
from resdex.query.sorter import sort_resources
from resdex.registry.models import Resource, ResourceKind, has_metadata, to_dict
from resdex.registry.registry import ResourceRegistry

DEFAULT_LIMIT = 15
DEFAULT_PAGE = 1


class ContentResult(TypedDict, total=False):
    text: str
    isError: bool


def is_listable(resource: Resource) -> bool:
    """Sections need at least one metadata field; contexts and files always list."""
    if resource.kind is ResourceKind.SECTION:
        return has_metadata(resource)
    return True


class _PagedTool:
    def __init__(self, registry: ResourceRegistry, default_limit: int = DEFAULT_LIMIT) -> None:
        self.registry = registry
        self.default_limit = default_limit

    def _respond(
        self, selected: list[Resource], limit: int | None, page: int | None
    ) -> dict[str, Any]:
        limit = self.default_limit if limit is None else limit
        page = DEFAULT_PAGE if page is None else page

        unique = unique_by(selected, "id")
        listable = filter_by(unique, is_listable)
        result = paginate(sort_resources(listable), page, limit)
        return {
            "resources": [to_dict(r) for r in result.items],
            "limit": result.limit,
            "page": result.page,
            "total": result.total,
            "totalPages": result.total_pages,
        }


class ListResourcesTool(_PagedTool):
    """List resources, optionally narrowed to an id prefix such as ``tests|unit``."""

    def execute(
        self,
        prefix: str | None = None,
        limit: int | None = None,
        page: int | None = None,
    ) -> dict[str, Any]:
        selected = self.registry.get_by_prefix(prefix) if prefix else self.registry.get_all()
        return self._respond(selected, limit, page)


class SearchResourcesTool(_PagedTool):
    """Whole-word phrase search; any matching phrase selects a resource."""

    def execute(
        self,
        phrases: list[str],
        limit: int | None = None,
        page: int | None = None,
    ) -> dict[str, Any]:
        return self._respond(self.registry.search_by_phrases(phrases), limit, page)


class GetResourceContentTool:
    def __init__(self, registry: ResourceRegistry) -> None:
        self.registry = registry

    def execute(self, id: str, show_children: bool = False) -> ContentResult:
        resource = self.registry.get_by_id(id)
        if resource is None:
            return {"text": f"Resource '{id}' not found.", "isError": True}
        return {"text": render_resource(resource, show_children=show_children)}


def render_resource(resource: Resource, *, show_children: bool = False) -> str:
    """Render *resource* as a Markdown block: heading, metadata, body, children."""
    out = f"# {resource.name}\n\n"
    if resource.description:
        out += f"**Description:** {resource.description}\n\n"
    if resource.when_to_load:
        out += f"**When to load:** {resource.when_to_load}\n\n"
    if resource.importance:
        out += f"**Importance:** {resource.importance.value}\n\n"
    if resource.content:
        out += f"\n---\n\n{resource.content}\n"

    if show_children and resource.children:
        out += f"\n## Children ({len(resource.children)})\n\n"
        for child in resource.children:
            out += f"### {child.name} ({child.id})\n"
            if child.description:
                out += f"{child.description}\n"
            out += "\n"
    return out
