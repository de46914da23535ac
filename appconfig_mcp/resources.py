"""MCP resource registrations: one JSON document per application with configs."""

import logging
from urllib.parse import unquote

from fastmcp import FastMCP
from fastmcp.resources import FunctionResource, Resource
from fastmcp.server.middleware import Middleware, MiddlewareContext

from appconfig_mcp.service import RESOURCE_URI_PREFIX, ResourceDescriptor
from appconfig_mcp.tools import ConfigToolDependencies

logger = logging.getLogger(__name__)


def register_config_resources(
    mcp: FastMCP,
    dependencies: ConfigToolDependencies,
) -> None:
    """Register the resource template that reads any application's configs and the listing middleware."""

    @mcp.resource(
        RESOURCE_URI_PREFIX + "{app_key}",
        name="application_configuration",
        description="All resolvable configuration files of one application, read and parsed.",
        mime_type="application/json",
    )
    async def application_configuration(app_key: str) -> str:
        # ConfigResourceError propagates so the client sees a failed read.
        return await dependencies.require_service().read_resource(unquote(app_key))

    mcp.add_middleware(DiscoveredResourceListing(dependencies))


class DiscoveredResourceListing(Middleware):
    """
    Lists one resource per application that has configs at request time.

    Resolution runs on every list request, so apps whose configs appear or
    disappear after startup are reflected immediately. Reads go through the
    ``config://apps/{app_key}`` template.
    """

    def __init__(self, dependencies: ConfigToolDependencies) -> None:
        self._dependencies = dependencies

    async def on_list_resources(self, context: MiddlewareContext, call_next):
        resources = [
            resource
            for resource in await call_next(context)
            if not str(resource.uri).startswith(RESOURCE_URI_PREFIX)
        ]
        descriptors = self._dependencies.require_service().list_resources()
        logger.debug(
            "Config resources listed",
            extra={"apps": [descriptor.app_key for descriptor in descriptors]},
        )
        resources.extend(_as_resource(self._dependencies, descriptor) for descriptor in descriptors)
        return resources


def _as_resource(dependencies: ConfigToolDependencies, descriptor: ResourceDescriptor) -> Resource:
    app_key = descriptor.app_key

    async def read_application_configuration() -> str:
        return await dependencies.require_service().read_resource(app_key)

    return FunctionResource.from_function(
        fn=read_application_configuration,
        uri=descriptor.uri,
        name=descriptor.name,
        description=descriptor.description,
        mime_type=descriptor.mime_type,
    )
