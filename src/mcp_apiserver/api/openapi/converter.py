"""OpenAPI to MCP configuration converter."""

import hashlib
import json
import re
from typing import Any, Dict, List, Optional, Protocol, Tuple

import jsonschema
import yaml
from pydantic import ValidationError

from mcp_apiserver.api.base.base_exceptions import ConversionError
from mcp_apiserver.api.config.models import (
    ArgConfig,
    MCPConfig,
    RouterConfig,
    ServerConfig,
    ToolConfig,
)
from mcp_apiserver.api.openapi.document_schema import (
    OPENAPI_DOCUMENT_SCHEMA,
    PARAMETER_SCHEMA,
)


DEFAULT_TENANT = "default"
MAX_SCHEMA_NODES = 50_000
HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")
JSON_MEDIA_TYPE = "application/json"


class Converter(Protocol):
    """Turns OpenAPI document bytes into an MCP configuration."""

    def convert(self, spec_bytes: bytes) -> MCPConfig:
        ...

    def convert_with_options(self, spec_bytes: bytes, tenant: str, prefix: str) -> MCPConfig:
        ...


class OpenAPIConverter:
    """Converts OpenAPI 3.x documents to MCP configurations.

    Conversion is pure: the same bytes and addressing always yield an equal
    configuration, and any problem raises ``ConversionError`` before anything
    is built.

    Only parameters and request bodies are resolved. A document whose
    references would expand past ``max_schema_nodes`` nodes is rejected.
    """

    def __init__(self, default_tenant: str = DEFAULT_TENANT, max_schema_nodes: int = MAX_SCHEMA_NODES):
        self._default_tenant = default_tenant
        self._max_schema_nodes = max_schema_nodes
        self._document_validator = jsonschema.Draft7Validator(OPENAPI_DOCUMENT_SCHEMA)
        self._parameter_validator = jsonschema.Draft7Validator(PARAMETER_SCHEMA)

    def convert(self, spec_bytes: bytes) -> MCPConfig:
        """Convert using the default addressing convention.

        The tenant is the converter's default tenant and the prefix is
        ``/<name>``.

        Args:
            spec_bytes: Raw OpenAPI document (JSON or YAML)

        Returns:
            MCPConfig: Converted configuration

        Raises:
            ConversionError: If the document is empty, malformed or unsupported
        """
        return self._convert(spec_bytes, tenant=None, prefix=None)

    def convert_with_options(self, spec_bytes: bytes, tenant: str, prefix: str) -> MCPConfig:
        """Convert using explicit addressing.

        Both values are used verbatim, empty strings included.

        Args:
            spec_bytes: Raw OpenAPI document (JSON or YAML)
            tenant: Tenant namespace
            prefix: Route prefix

        Returns:
            MCPConfig: Converted configuration

        Raises:
            ConversionError: If the document is empty, malformed or unsupported
        """
        return self._convert(spec_bytes, tenant=tenant, prefix=prefix)

    def _convert(self, spec_bytes: bytes, tenant: Optional[str], prefix: Optional[str]) -> MCPConfig:
        document = self._load_document(spec_bytes)
        self._validate_document(document)

        info = document["info"]
        name = self._config_name(info["title"], spec_bytes)
        base_url = self._base_url(document)

        try:
            tools = self._build_tools(document, base_url)
        except ValidationError as e:
            first = e.errors()[0]
            raise ConversionError(
                f"operation produced an invalid tool at {'.'.join(str(p) for p in first['loc'])}: {first['msg']}"
            )
        if not tools:
            raise ConversionError("document defines no operations")

        tenant = self._default_tenant if tenant is None else tenant
        prefix = f"/{name}" if prefix is None else prefix

        metadata = {
            "title": info["title"],
            "version": str(info["version"]),
            "openapi": document["openapi"],
        }
        if info.get("description"):
            metadata["description"] = info["description"]

        server = ServerConfig(
            name=name,
            description=info.get("description", ""),
            config={"url": base_url} if base_url else {},
            allowed_tools=tuple(tool.name for tool in tools),
        )
        return MCPConfig(
            name=name,
            tenant=tenant,
            prefix=prefix,
            servers=(server,),
            routers=(RouterConfig(server=name, prefix=prefix),),
            tools=tuple(tools),
            metadata=metadata,
        )

    def _load_document(self, spec_bytes: bytes) -> Dict[str, Any]:
        if not spec_bytes or not spec_bytes.strip():
            raise ConversionError("empty OpenAPI document")

        try:
            text = spec_bytes.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise ConversionError(f"document is not valid UTF-8: {e}")

        try:
            if text.lstrip().startswith("{"):
                document = json.loads(text)
            else:
                document = yaml.safe_load(text)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConversionError(f"document is neither valid JSON nor YAML: {e}")

        if not isinstance(document, dict):
            raise ConversionError(
                f"document must be a mapping, got {type(document).__name__}"
            )
        return document

    def _validate_document(self, document: Dict[str, Any]) -> None:
        if "swagger" in document:
            raise ConversionError(
                f"unsupported specification version: swagger {document['swagger']}"
            )

        error = jsonschema.exceptions.best_match(self._document_validator.iter_errors(document))
        if error is not None:
            raise ConversionError(
                f"document validation failed at {_error_path(error)}: {error.message}"
            )

        if not document["openapi"].startswith("3."):
            raise ConversionError(
                f"unsupported OpenAPI version: {document['openapi']}"
            )

    def _config_name(self, title: str, spec_bytes: bytes) -> str:
        slug = re.sub(r"[^a-z0-9]+", "_", title.lower()).strip("_") or "openapi"
        digest = hashlib.sha256(spec_bytes).hexdigest()[:8]
        return f"{slug}_{digest}"

    def _base_url(self, document: Dict[str, Any]) -> str:
        servers = document.get("servers") or []
        if not servers:
            return ""
        return servers[0]["url"].rstrip("/")

    def _build_tools(self, document: Dict[str, Any], base_url: str) -> List[ToolConfig]:
        tools: List[ToolConfig] = []
        seen = set()
        resolver = _RefResolver(document, self._max_schema_nodes)

        for path, path_item in document["paths"].items():
            path_item = resolver.follow(path_item)
            if not isinstance(path_item, dict):
                raise ConversionError(f"path item {path} must be a mapping")
            shared_params = resolver.resolve(path_item.get("parameters", []))

            for method, operation in path_item.items():
                if method not in HTTP_METHODS:
                    continue
                if not isinstance(operation, dict):
                    raise ConversionError(
                        f"operation {method.upper()} {path} must be a mapping"
                    )

                tool = self._build_tool(path, method, operation, shared_params, base_url, resolver)
                if tool.name in seen:
                    raise ConversionError(f"duplicate operation name: {tool.name}")
                seen.add(tool.name)
                tools.append(tool)

        return tools

    def _build_tool(
        self,
        path: str,
        method: str,
        operation: Dict[str, Any],
        shared_params: List[Any],
        base_url: str,
        resolver: "_RefResolver"
    ) -> ToolConfig:
        location = f"{method.upper()} {path}"
        name = operation.get("operationId") or _generated_name(method, path)

        operation_params = resolver.resolve(operation.get("parameters", []))
        candidates = self._parameter_args(location, shared_params, operation_params)
        headers: Dict[str, str] = {}
        whole_body = False

        if "requestBody" in operation:
            media_type, body_candidates, whole_body = self._body_args(
                location, resolver.resolve(operation["requestBody"])
            )
            headers["Content-Type"] = media_type
            candidates.extend(body_candidates)

        # Parameters keep their names; a later argument with a taken name is
        # renamed and keeps the original as its wire name
        args: List[ArgConfig] = []
        properties: Dict[str, Any] = {}
        for arg, schema in candidates:
            arg_name = _unique_name(arg.name, arg.position, properties)
            if arg_name != arg.name:
                wire_name = None if whole_body and arg.position == "body" else arg.name
                arg = arg.model_copy(update={"name": arg_name, "wire_name": wire_name})
            args.append(arg)
            properties[arg_name] = schema

        input_schema: Dict[str, Any] = {"type": "object", "properties": properties}
        required = [arg.name for arg in args if arg.required]
        if required:
            input_schema["required"] = required

        return ToolConfig(
            name=name,
            description=operation.get("summary") or operation.get("description") or "",
            method=method.upper(),
            endpoint=f"{base_url}{path}",
            headers=headers,
            args=tuple(args),
            input_schema=input_schema,
        )

    def _parameter_args(
        self,
        location: str,
        shared_params: List[Any],
        operation_params: List[Any]
    ) -> List[Tuple[ArgConfig, Dict[str, Any]]]:
        # Operation parameters override path-level ones with the same name and location
        if not isinstance(shared_params, list) or not isinstance(operation_params, list):
            raise ConversionError(f"parameters of {location} must be a list")

        merged: Dict[Tuple[str, str], Dict[str, Any]] = {}
        for param in shared_params + operation_params:
            error = jsonschema.exceptions.best_match(self._parameter_validator.iter_errors(param))
            if error is not None:
                raise ConversionError(
                    f"invalid parameter in {location} at {_error_path(error)}: {error.message}"
                )
            merged[(param["name"], param["in"])] = param

        candidates = []
        for (name, position), param in merged.items():
            schema = param.get("schema", {"type": "string"})
            description = param.get("description", "")
            arg = ArgConfig(
                name=name,
                position=position,
                required=position == "path" or bool(param.get("required", False)),
                type=_schema_type(schema),
                description=description,
                default=schema.get("default"),
            )
            candidates.append((arg, _with_description(schema, description)))

        return candidates

    def _body_args(
        self,
        location: str,
        request_body: Any
    ) -> Tuple[str, List[Tuple[ArgConfig, Dict[str, Any]]], bool]:
        """Build body arguments.

        Returns the chosen media type, the arguments with their property
        schemas, and whether the body is passed whole as one argument.
        """
        content = request_body.get("content") if isinstance(request_body, dict) else None
        if not isinstance(content, dict) or not content:
            raise ConversionError(f"request body of {location} declares no content")

        media_type = JSON_MEDIA_TYPE if JSON_MEDIA_TYPE in content else next(iter(content))
        media = content[media_type] or {}
        schema = media.get("schema", {"type": "object"}) if isinstance(media, dict) else None
        if not isinstance(schema, dict):
            raise ConversionError(f"request body schema of {location} must be a mapping")
        body_required = bool(request_body.get("required", False))

        if _schema_type(schema) == "object" and isinstance(schema.get("properties"), dict):
            required = schema.get("required", [])
            if not isinstance(required, list):
                raise ConversionError(f"body schema required of {location} must be a list")

            candidates = []
            for prop_name, prop_schema in schema["properties"].items():
                if not isinstance(prop_schema, dict):
                    raise ConversionError(
                        f"schema of body property {prop_name} in {location} must be a mapping"
                    )
                arg = ArgConfig(
                    name=prop_name,
                    position="body",
                    required=prop_name in required,
                    type=_schema_type(prop_schema),
                    description=prop_schema.get("description", ""),
                    default=prop_schema.get("default"),
                )
                candidates.append((arg, prop_schema))
            return media_type, candidates, False

        description = request_body.get("description", "")
        arg = ArgConfig(
            name="body",
            position="body",
            required=body_required,
            type=_schema_type(schema),
            description=description,
        )
        return media_type, [(arg, _with_description(schema, description))], True


class _RefResolver:
    """Resolves local ``$ref``s of one document.

    Each reference is resolved once and the result is shared by every node
    pointing at it. The size the resolved nodes would have when written out
    in full may not exceed ``max_nodes``.
    """

    def __init__(self, document: Dict[str, Any], max_nodes: int):
        self._document = document
        self._max_nodes = max_nodes
        self._resolved: Dict[str, Tuple[Any, int]] = {}
        self._expanded = 0

    def follow(self, node: Any) -> Any:
        """Follow references until a non-reference node, without resolving below it."""
        stack: Tuple[str, ...] = ()
        while isinstance(node, dict) and "$ref" in node:
            ref = self._check(node["$ref"], stack)
            stack += (ref,)
            node = _lookup(ref, self._document)
        return node

    def resolve(self, node: Any) -> Any:
        """Resolve every reference below node.

        Raises:
            ConversionError: If a reference is unsupported, unresolvable or
                cyclic, or the expanded size passes the budget
        """
        resolved, size = self._resolve(node, ())
        self._expanded += size
        if self._expanded > self._max_nodes:
            raise self._too_large()
        return resolved

    def _resolve(self, node: Any, stack: Tuple[str, ...]) -> Tuple[Any, int]:
        if isinstance(node, dict):
            if "$ref" in node:
                ref = self._check(node["$ref"], stack)
                if ref not in self._resolved:
                    self._resolved[ref] = self._resolve(_lookup(ref, self._document), stack + (ref,))
                return self._resolved[ref]
            resolved = {}
            size = 1
            for key, value in node.items():
                resolved[key], child_size = self._resolve(value, stack)
                size += child_size
                if size > self._max_nodes:
                    raise self._too_large()
            return resolved, size
        if isinstance(node, list):
            items = []
            size = 1
            for value in node:
                item, child_size = self._resolve(value, stack)
                items.append(item)
                size += child_size
                if size > self._max_nodes:
                    raise self._too_large()
            return items, size
        return node, 1

    def _check(self, ref: Any, stack: Tuple[str, ...]) -> str:
        if not isinstance(ref, str) or not ref.startswith("#/"):
            raise ConversionError(f"unsupported reference: {ref}")
        if ref in stack:
            raise ConversionError(f"cyclic reference: {ref}")
        return ref

    def _too_large(self) -> ConversionError:
        return ConversionError(f"document expands beyond {self._max_nodes} schema nodes")


def _lookup(ref: str, document: Dict[str, Any]) -> Any:
    node: Any = document
    for part in ref[2:].split("/"):
        part = part.replace("~1", "/").replace("~0", "~")
        if not isinstance(node, dict) or part not in node:
            raise ConversionError(f"unresolvable reference: {ref}")
        node = node[part]
    return node


def _unique_name(name: str, position: str, taken: Dict[str, Any]) -> str:
    if name not in taken:
        return name
    candidate = f"{name}_{position}"
    suffix = 2
    while candidate in taken:
        candidate = f"{name}_{position}_{suffix}"
        suffix += 1
    return candidate


def _generated_name(method: str, path: str) -> str:
    slug = re.sub(r"[^A-Za-z0-9]+", "_", path).strip("_") or "root"
    return f"{method}_{slug}"


def _schema_type(schema: Any) -> str:
    if not isinstance(schema, dict):
        return "string"
    schema_type = schema.get("type")
    if isinstance(schema_type, str):
        return schema_type
    if "properties" in schema:
        return "object"
    return "string"


def _with_description(schema: Dict[str, Any], description: str) -> Dict[str, Any]:
    if description and "description" not in schema:
        return {**schema, "description": description}
    return schema


def _error_path(error: jsonschema.exceptions.ValidationError) -> str:
    return ".".join(str(part) for part in error.absolute_path) or "<root>"
