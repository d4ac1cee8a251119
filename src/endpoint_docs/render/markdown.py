"""Markdown renderer for documentation views."""

import json
from typing import Any

from endpoint_docs.handler import IndexView, RouteView
from endpoint_docs.routes.base import EndpointRecord
from endpoint_docs.schema.nodes import ConditionalNode, DeniedNode, DocNode, RuleAssertion, RuleReference

INDENT = "  "

PARAM_SECTIONS = (
    ("path_params", "Path parameters"),
    ("query_params", "Query parameters"),
    ("payload_params", "Payload"),
    ("response_params", "Response"),
)


class MarkdownRenderer:
    """Renders RouteView and IndexView documents as Markdown."""

    def render(self, view: RouteView | IndexView) -> str:
        lines = self._render_title(view.api_version)
        if isinstance(view, RouteView):
            for record in view.routes:
                lines.extend(self._render_endpoint(record))
        else:
            for group in view.groups:
                if not group.routes:
                    continue
                lines.extend([f"## {group.server}", ""])
                for record in group.routes:
                    lines.extend(self._render_endpoint(record))
        return "\n".join(lines).rstrip() + "\n"

    def _render_title(self, api_version: str | None) -> list[str]:
        title = "# API Documentation"
        if api_version:
            title += f" (v{api_version})"
        return [title, ""]

    # -- endpoints ------------------------------------------------------------

    def _render_endpoint(self, record: EndpointRecord) -> list[str]:
        lines = [f"### {record.method} {record.path}", ""]
        if record.description:
            lines.extend([record.description, ""])
        for note in record.notes or []:
            lines.append(f"> {note}")
        if record.notes:
            lines.append("")

        meta = []
        if record.tags:
            meta.append(f"- Tags: {', '.join(record.tags)}")
        if record.auth:
            meta.append(f"- Auth: `{_dump(record.auth)}`")
        if record.vhost:
            vhost = record.vhost if isinstance(record.vhost, str) else ", ".join(record.vhost)
            meta.append(f"- Virtual host: {vhost}")
        if record.cors:
            meta.append(f"- CORS: `{_dump(record.cors)}`")
        if record.jsonp:
            meta.append(f"- JSONP parameter: `{record.jsonp}`")
        if meta:
            lines.extend(meta + [""])

        for attr, title in PARAM_SECTIONS:
            node = getattr(record, attr)
            if node is not None:
                lines.extend([f"#### {title}", ""] + self._render_root(node) + [""])

        for code, node in (record.status_schema or {}).items():
            if node is not None:
                lines.extend([f"#### Response {code}", ""] + self._render_root(node) + [""])
        return lines

    # -- schema nodes ---------------------------------------------------------

    def _render_root(self, node: DocNode | ConditionalNode | DeniedNode) -> list[str]:
        if isinstance(node, DocNode) and node.children is not None and not node.name:
            # Unnamed root object: its own details head the section, children follow as the list
            lines = []
            if node.description:
                lines.extend([node.description, ""])
            details = self._node_details(node)
            if details:
                lines.extend([f"- {detail}" for detail in details] + [""])
            if not node.children:
                lines.append("_Any keys allowed._")
            for child in node.children:
                lines.extend(self._render_node(child, 0))
            return lines
        return self._render_node(node, 0)

    def _render_node(self, node: DocNode | ConditionalNode | DeniedNode, depth: int) -> list[str]:
        pad = INDENT * depth
        if isinstance(node, DeniedNode):
            return [f"{pad}- _Denied: this value must not be provided._"]
        if isinstance(node, ConditionalNode):
            return self._render_conditional(node, depth)

        lines = [pad + "- " + self._node_heading(node)]
        detail_pad = INDENT * (depth + 1)
        for detail in self._node_details(node):
            lines.append(f"{detail_pad}- {detail}")

        for child in node.children or []:
            lines.extend(self._render_node(child, depth + 1))
        lines.extend(self._render_list("Ordered items", node.ordered_items, depth))
        lines.extend(self._render_list("Items", node.items, depth))
        lines.extend(self._render_list("Forbidden items", node.forbidden_items, depth))
        lines.extend(self._render_list("One of", node.alternatives, depth))
        return lines

    def _render_conditional(self, node: ConditionalNode, depth: int) -> list[str]:
        pad = INDENT * depth
        lines = [f"{pad}- When `{node.condition.key}` matches:"]
        lines.extend(self._render_node(node.condition.value, depth + 1))
        if node.then is not None:
            lines.append(f"{pad}- Then:")
            lines.extend(self._render_node(node.then, depth + 1))
        if node.otherwise is not None:
            lines.append(f"{pad}- Otherwise:")
            lines.extend(self._render_node(node.otherwise, depth + 1))
        return lines

    def _render_list(self, title: str, nodes: list | None, depth: int) -> list[str]:
        if not nodes:
            return []
        lines = [f"{INDENT * (depth + 1)}- {title}:"]
        for item in nodes:
            lines.extend(self._render_node(item, depth + 2))
        return lines

    def _node_heading(self, node: DocNode) -> str:
        if node.name and not node.type_is_name:
            heading = f"**{node.name}** `{node.type}`"
        else:
            heading = f"`{node.type}`"

        flags = node.flags
        markers = []
        if flags is not None:
            if flags.required:
                markers.append("required")
            if flags.forbidden:
                markers.append("forbidden")
            if flags.stripped:
                markers.append("stripped")
        if markers:
            heading += " (" + ", ".join(markers) + ")"
        if node.description:
            heading += f": {node.description}"
        return heading

    def _node_details(self, node: DocNode) -> list[str]:
        details = [f"Note: {note}" for note in node.notes or []]
        if node.unit:
            details.append(f"Unit: {node.unit}")
        if node.target:
            details.append(f"Must match: {node.target}")
        if node.allowed_values:
            details.append(f"Allowed: {node.allowed_values}")
        if node.disallowed_values:
            details.append(f"Disallowed: {node.disallowed_values}")

        flags = node.flags
        if flags is not None:
            if flags.default is not None:
                details.append(f"Default: `{_dump(flags.default)}`")
            if flags.allow_unknown:
                details.append("Unknown keys allowed")
            if flags.encoding:
                details.append(f"Encoding: {flags.encoding}")
            if flags.insensitive:
                details.append("Case insensitive")

        details.extend(node.peers or [])
        for name, arg in (node.rules or {}).items():
            details.append(self._rule_detail(name, arg))
        if node.examples:
            details.append("Examples: " + ", ".join(f"`{_dump(example)}`" for example in node.examples))
        if node.tags:
            details.append(f"Tags: {', '.join(node.tags)}")
        return details

    def _rule_detail(self, name: str, arg: Any) -> str:
        if isinstance(arg, RuleReference):
            return f"{name}: `{arg.ref}`"
        if isinstance(arg, RuleAssertion):
            value = arg.value.type if isinstance(arg.value, DocNode) else arg.value.kind
            return f"{name}: `{arg.key}` must be `{value}`"
        if isinstance(arg, str) and not arg:
            return name
        return f"{name}: `{_dump(arg)}`"


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)
