"""MCP tool handlers for the TruffleHog server."""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.types import TextContent

from trufflehog_mcp.core.errors import ToolExecutionError, ValidationError
from trufflehog_mcp.core.remediation import (
    format_detector_catalog,
    format_finding_analysis,
    format_status,
)
from trufflehog_mcp.core.scan_request import ScanMode, request_from_arguments
from trufflehog_mcp.core.scanner_config import (
    build_scanner_config,
    render_scanner_config,
    save_scanner_config,
)
from trufflehog_mcp.mcp.context import MCPContext

logger = logging.getLogger(__name__)

# Handler type: takes arguments dict and MCPContext, returns list of TextContent
_HANDLERS: dict[str, Callable[[dict, MCPContext], Awaitable[list[TextContent]]]] = {}


def _register(name: str):
    def decorator(fn):
        _HANDLERS[name] = fn
        return fn
    return decorator


def _text(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


async def call_tool(name: str, arguments: Any, ctx: MCPContext) -> list[TextContent]:
    """
    Handle tool calls from MCP clients.

    Expected failures (engine missing, bad input, scan errors) come back as
    ordinary text. Anything else is raised as ToolExecutionError so the
    server flags the response as an error.

    Args:
        name: The tool name to invoke.
        arguments: Tool arguments as a dictionary.
        ctx: MCPContext containing all required services.

    Returns:
        List of TextContent with the tool result.
    """
    if ctx is None:
        raise ToolExecutionError("Error: MCPContext not initialized")

    handler = _HANDLERS.get(name)
    if handler is None:
        return _text(f"Unknown tool: {name}")

    try:
        return await handler(arguments or {}, ctx)
    except ValidationError as e:
        return _text(f"Error: {e}")
    except Exception as e:
        logger.exception(f"Unexpected error in tool {name}")
        raise ToolExecutionError(f"Error executing tool {name}: {e}") from e


async def _run_scan(mode: ScanMode, arguments: dict, ctx: MCPContext) -> list[TextContent]:
    request = request_from_arguments(mode, arguments)
    report = await ctx.scan_service.scan(request)
    return _text(report.text)


@_register("trufflehog_status")
async def _handle_status(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    entry = await ctx.installation_cache.status()
    return _text(format_status(entry, ctx.config))


@_register("scan_git_repo")
async def _handle_scan_git_repo(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.GIT, arguments, ctx)


@_register("scan_github_org")
async def _handle_scan_github_org(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.GITHUB_ORG, arguments, ctx)


@_register("scan_gitlab")
async def _handle_scan_gitlab(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.GITLAB, arguments, ctx)


@_register("scan_filesystem")
async def _handle_scan_filesystem(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.FILESYSTEM, arguments, ctx)


@_register("scan_s3_bucket")
async def _handle_scan_s3_bucket(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.S3, arguments, ctx)


@_register("scan_docker_image")
async def _handle_scan_docker_image(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.DOCKER_IMAGE, arguments, ctx)


@_register("verify_secret")
async def _handle_verify_secret(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return await _run_scan(ScanMode.VERIFY, arguments, ctx)


@_register("list_detectors")
async def _handle_list_detectors(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    return _text(format_detector_catalog())


@_register("generate_config")
async def _handle_generate_config(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    sources = arguments.get("sources")
    if sources is not None and not isinstance(sources, list):
        return _text("Error: 'sources' must be a list")

    webhook_url = None
    if arguments.get("enableWebhook"):
        webhook_url = arguments.get("webhookUrl") or ctx.config.webhook.url or None

    content = build_scanner_config(ctx.config, sources=sources, webhook_url=webhook_url)

    output_path = arguments.get("outputPath")
    if output_path:
        try:
            saved_path, rendered = save_scanner_config(output_path, content)
        except OSError as e:
            return _text(f"Error saving configuration: {e}")
        fence = "yaml" if saved_path.lower().endswith((".yaml", ".yml")) else "json"
        return _text(f"Configuration file saved to: {saved_path}\n\n```{fence}\n{rendered}\n```")

    rendered = render_scanner_config(content)
    return _text(f"""# Generated TruffleHog Configuration

```json
{rendered}
```

## Usage

Save this configuration to a file (e.g., `config.yaml`) and run:

```bash
trufflehog scan --config=config.yaml
```

Or with Docker:

```bash
docker run --net=host -v $(pwd)/config.yaml:/tmp/config.yaml \\
  us-docker.pkg.dev/thog-artifacts/public/scanner:latest \\
  scan --config=/tmp/config.yaml
```
""")


@_register("analyze_finding")
async def _handle_analyze_finding(arguments: dict, ctx: MCPContext) -> list[TextContent]:
    detector_type = arguments.get("detectorType")
    if not isinstance(detector_type, str) or not detector_type.strip():
        return _text("Error: Missing required argument: detectorType")
    return _text(
        format_finding_analysis(
            detector_type,
            verified=bool(arguments.get("verified")),
            source_type=arguments.get("sourceType"),
        )
    )
