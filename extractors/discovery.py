"""
Discovery Extractor — Parse discovery documents into ApiDescription.

Receives the JSON dict served by the discovery service (or bundled with
the package), returns typed specs for binding. No HTTP, no logging.
"""

from typing import Any

from models import ApiDescription, MethodSpec, ParameterSpec, ResourceSpec

# HTTP methods that never carry a request body
BODYLESS_METHODS = frozenset({"GET", "DELETE", "HEAD"})


def parse_parameter(name: str, raw: dict[str, Any]) -> ParameterSpec:
    """Parse one entry of a `parameters` map."""
    return ParameterSpec(
        name=name,
        location=raw.get("location", "query"),
        type=raw.get("type", "string"),
        required=bool(raw.get("required", False)),
        repeated=bool(raw.get("repeated", False)),
        pattern=raw.get("pattern"),
        enum=list(raw.get("enum", [])),
    )


def parse_parameters(raw: dict[str, Any] | None) -> dict[str, ParameterSpec]:
    return {name: parse_parameter(name, p) for name, p in (raw or {}).items()}


def parse_method(name: str, raw: dict[str, Any]) -> MethodSpec:
    """
    Parse one method.

    A method accepts a body when the document declares a `request` schema
    and the verb can carry one.
    """
    http_method = raw.get("httpMethod", "GET").upper()
    return MethodSpec(
        id=raw.get("id", name),
        name=name,
        http_method=http_method,
        path=raw.get("path", ""),
        parameters=parse_parameters(raw.get("parameters")),
        parameter_order=list(raw.get("parameterOrder", [])),
        accepts_body="request" in raw and http_method not in BODYLESS_METHODS,
        description=raw.get("description"),
    )


def parse_resource(name: str, raw: dict[str, Any]) -> ResourceSpec:
    """Parse a resource and, recursively, its nested resources."""
    return ResourceSpec(
        name=name,
        methods={m: parse_method(m, spec) for m, spec in raw.get("methods", {}).items()},
        resources={r: parse_resource(r, spec) for r, spec in raw.get("resources", {}).items()},
    )


def parse_discovery_document(
    document: dict[str, Any],
    root_url: str | None = None,
) -> ApiDescription:
    """
    Parse a discovery document.

    Args:
        document: Discovery document as a dict
        root_url: Overrides the document's rootUrl (e.g. to target a fake server)

    Raises:
        ValueError: If the document lacks name/version
    """
    if not isinstance(document, dict):
        raise ValueError("Discovery document must be a JSON object")
    name = document.get("name")
    version = document.get("version")
    if not name or not version:
        raise ValueError("Discovery document is missing 'name' or 'version'")

    root = root_url or document.get("rootUrl", "")
    if root and not root.endswith("/"):
        root += "/"

    return ApiDescription(
        name=name,
        version=version,
        root_url=root,
        service_path=document.get("servicePath", ""),
        parameters=parse_parameters(document.get("parameters")),
        methods={m: parse_method(m, spec) for m, spec in document.get("methods", {}).items()},
        resources={r: parse_resource(r, spec) for r, spec in document.get("resources", {}).items()},
        title=document.get("title"),
    )


def list_method_ids(api: ApiDescription) -> list[str]:
    """All bindable method paths, e.g. ['tokeninfo', 'files.list', 'files.comments.list']."""
    ids = sorted(api.methods)

    def walk(prefix: str, resource: ResourceSpec) -> None:
        for method_name in sorted(resource.methods):
            ids.append(f"{prefix}{method_name}")
        for child_name in sorted(resource.resources):
            walk(f"{prefix}{child_name}.", resource.resources[child_name])

    for resource_name in sorted(api.resources):
        walk(f"{resource_name}.", api.resources[resource_name])
    return ids
