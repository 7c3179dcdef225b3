"""Custom OpenAPI schema hooks for drf-spectacular.

Every operation is tagged with exactly one feature group so the Swagger UI
is partitioned by dashboard area instead of a single generic tag.
"""

from __future__ import annotations

from typing import Any

# Method names that contain operations in the OpenAPI path item
_HTTP_METHODS = {"get", "post", "put", "patch", "delete", "options", "head"}


PATTERN_TAGS = [
    ("/api/v1/classrooms", "Classrooms"),
    ("/api/v1/sessions", "Sessions"),
    ("/api/v1/presence", "Presence"),
    ("/api/v1/messages", "Chat"),
    ("/api/v1/notes", "Notes"),
    ("/api/v1/ai", "AI"),
    ("/api/v1/reports", "Reports"),
    ("/api/v1/videos", "Videos"),
    ("/api/v1/integrations/google", "Integrations"),
    ("/api/v1/notifications", "Notifications"),
    ("/api/v1/system", "Meta"),
    ("/api/v1/schema", "Meta"),
    ("/api/v1/auth/jwt", "JWT Authentication"),
    ("/api/v1/auth/", "Authentication"),
    ("/api/v1/users", "Users"),
]

ALL_TAGS = list(dict.fromkeys(t for _, t in PATTERN_TAGS))


def assign_group_tag(path: str) -> str | None:
    """Return the first matching tag name for a given path."""
    for prefix, tag in PATTERN_TAGS:
        if path.startswith(prefix):
            return tag
    return None


def group_tags(result: dict[str, Any], **kwargs: Any) -> dict[str, Any]:
    """Post-processing hook to force consistent tag grouping."""
    paths = result.get("paths", {})
    for path, path_item in paths.items():  # type: ignore[assignment]
        tag = assign_group_tag(path)
        if not tag:
            continue
        for method, op_obj in path_item.items():
            if method.lower() not in _HTTP_METHODS:
                continue
            if not isinstance(op_obj, dict):
                continue
            op_obj["tags"] = [tag]

    # Ensure declared tags list contains all groups we used (order preserved)
    existing = {t.get("name") for t in result.get("tags", [])}
    tag_list = result.setdefault("tags", [])
    for tag in ALL_TAGS:
        if tag not in existing:
            tag_list.append({"name": tag})
    return result
