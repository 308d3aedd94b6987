"""
Parameter validation and URL building for bound API methods.

Handles:
- Rejecting unknown / missing parameters before any HTTP happens
- Enum and pattern checks declared by the discovery document
- Path expansion (RFC 6570, via uritemplate) and query encoding
"""

import re
from typing import Any
from urllib.parse import urlencode

import uritemplate

from models import MethodSpec, ParameterSpec

# =============================================================================
# RESERVED PARAMETERS
# =============================================================================

# Handled by the transport, never sent as query/path parameters
HEADERS_PARAM = "headers"
BODY_PARAMS = ("body", "resource")
RESERVED_PARAMS = frozenset({HEADERS_PARAM, *BODY_PARAMS})


# =============================================================================
# VALIDATION
# =============================================================================

def _merged_parameters(
    method: MethodSpec,
    api_parameters: dict[str, ParameterSpec],
) -> dict[str, ParameterSpec]:
    """API-wide parameters (alt, fields, key...) overlaid by the method's own."""
    return {**api_parameters, **method.parameters}


def _check_value(spec: ParameterSpec, value: Any, method_id: str) -> None:
    values = value if spec.repeated and isinstance(value, (list, tuple)) else [value]
    for item in values:
        text = format_value(item)
        if spec.enum and text not in spec.enum:
            raise ValueError(
                f"{method_id}: {spec.name}={text!r} is not one of {spec.enum}"
            )
        if spec.pattern and not re.fullmatch(spec.pattern, text):
            raise ValueError(
                f"{method_id}: {spec.name}={text!r} does not match {spec.pattern!r}"
            )


def validate_params(
    method: MethodSpec,
    api_parameters: dict[str, ParameterSpec],
    params: dict[str, Any],
) -> None:
    """
    Check call parameters against the method description.

    Raises:
        TypeError: Unknown parameter, missing required parameter, or
                   'headers' that isn't a dict
        ValueError: Value outside the declared enum or pattern
    """
    known = _merged_parameters(method, api_parameters)

    unknown = [name for name in params if name not in known and name not in RESERVED_PARAMS]
    if unknown:
        raise TypeError(f"{method.id}() got unexpected parameter(s): {', '.join(sorted(unknown))}")

    missing = [
        name for name, spec in known.items()
        if spec.required and params.get(name) is None
    ]
    if missing:
        raise TypeError(f"{method.id}() missing required parameter(s): {', '.join(missing)}")

    for name, value in params.items():
        if name in RESERVED_PARAMS or value is None:
            continue
        _check_value(known[name], value, method.id)

    headers = params.get(HEADERS_PARAM)
    if headers is not None and not isinstance(headers, dict):
        raise TypeError(f"{method.id}(): 'headers' must be a dict, got {type(headers).__name__}")


# =============================================================================
# URL BUILDING
# =============================================================================

def format_value(value: Any) -> str:
    """Query/path representation: booleans as 'true'/'false', everything else str()."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(
    base_url: str,
    method: MethodSpec,
    api_parameters: dict[str, ParameterSpec],
    params: dict[str, Any],
) -> str:
    """
    Expand the method path and append query parameters.

    Query parameters keep the method's parameterOrder first, then the rest in
    call order. Repeated parameters become repeated keys (?id=a&id=b).
    """
    known = _merged_parameters(method, api_parameters)

    path_values: dict[str, Any] = {}
    query_names: list[str] = []
    for name in list(method.parameter_order) + list(params):
        if name in RESERVED_PARAMS or name in path_values or name in query_names:
            continue
        value = params.get(name)
        if value is None:
            continue
        if known[name].location == "path":
            path_values[name] = format_value(value)
        else:
            query_names.append(name)

    path = uritemplate.expand(method.path, path_values)

    query: list[tuple[str, str]] = []
    for name in query_names:
        value = params[name]
        if isinstance(value, (list, tuple)):
            query.extend((name, format_value(v)) for v in value)
        else:
            query.append((name, format_value(value)))

    url = base_url + path
    if query:
        url += "?" + urlencode(query)
    return url
