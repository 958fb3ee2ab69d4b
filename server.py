"""
server.py — YT Script Optimizer MCP Server
All MCP protocol logic, tool registration, and schema definitions live here.
"""

import json
import logging
from datetime import datetime, timezone
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import (
    Tool,
    TextContent,
    CallToolResult,
    ListToolsResult,
)
import config
import optimizer
import transcripts

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(level=getattr(logging, config.LOG_LEVEL, logging.INFO))
logger = logging.getLogger(config.SERVER_NAME)

# ---------------------------------------------------------------------------
# Server instance
# ---------------------------------------------------------------------------

app = Server(config.SERVER_NAME)

# ---------------------------------------------------------------------------
# Tool definitions
# ---------------------------------------------------------------------------

CONTENT_STYLES = ["tutorial", "review", "vlog", "educational", "entertainment"]
OPTIMIZATION_LEVELS = ["light", "moderate", "aggressive"]

# Shared by both optimize tools.
TUNING_PROPERTIES = {
    "concept": {
        "type": "string",
        "description": "The video concept/topic. Used as the primary keyword when no keywords are given.",
    },
    "keywords": {
        "type": "object",
        "description": (
            "Keywords data from a keyword analyzer: "
            "{\"recommended\": {\"primary\": [{\"keyword\": ...}], \"secondary\": [...], \"longTail\": [...]}}"
        ),
    },
    "target_duration": {
        "type": "number",
        "description": "Target video duration in minutes. Defaults to 10. Also accepted as targetDuration.",
        "default": 10,
    },
    "content_style": {
        "type": "string",
        "description": "Style of content. Defaults to tutorial. Also accepted as contentStyle.",
        "enum": CONTENT_STYLES,
        "default": "tutorial",
    },
    "optimization_level": {
        "type": "string",
        "description": "How much to modify the script. Defaults to moderate. Also accepted as optimizationLevel.",
        "enum": OPTIMIZATION_LEVELS,
        "default": "moderate",
    },
}

TOOLS: list[Tool] = [

    Tool(
        name="optimize_script",
        description=(
            "Optimizes a video script for YouTube SEO keyword integration and engagement. "
            "Returns the original and optimized script with keyword density, readability and "
            "engagement metrics for each, the list of planned changes, structure and engagement "
            "suggestions, keyword insertion targets, tips, and warnings. "
            "Rule-based and deterministic apart from the choice of hook phrase."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "script": {
                    "type": "string",
                    "description": "The video script to optimize.",
                },
                **TUNING_PROPERTIES,
            },
            "required": ["script", "concept"],
        },
    ),

    Tool(
        name="optimize_video_transcript",
        description=(
            "Fetches the transcript of a published video and runs optimize_script on it. "
            "Useful for auditing an existing video's spoken script. "
            "Auto-generated transcripts carry little punctuation, so sentence metrics are rough."
        ),
        inputSchema={
            "type": "object",
            "properties": {
                "video_id": {
                    "type": "string",
                    "description": "YouTube video ID (e.g. dQw4w9WgXcQ).",
                },
                **TUNING_PROPERTIES,
            },
            "required": ["video_id", "concept"],
        },
    ),

    Tool(
        name="ping",
        description="Health check. Returns server name, version, and current UTC timestamp.",
        inputSchema={
            "type": "object",
            "properties": {},
            "required": [],
        },
    ),

]

# ---------------------------------------------------------------------------
# MCP handlers
# ---------------------------------------------------------------------------

@app.list_tools()
async def list_tools() -> ListToolsResult:
    """Expose all registered tools to the MCP client."""
    return ListToolsResult(tools=TOOLS)


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> CallToolResult:
    """
    Route incoming tool calls to the correct engine function.
    Returns normalized JSON. All errors surfaced cleanly without crashing.
    """
    arguments = arguments or {}
    logger.info(f"Tool called: {name} | Argument keys: {sorted(arguments)}")

    try:
        result = _dispatch(name, arguments)
        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps(result, ensure_ascii=False, indent=2))],
            isError=False,
        )
    except ValueError as e:
        logger.warning(f"ValueError in tool '{name}': {e}")
        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps({"error": str(e)}))],
            isError=True,
        )
    except Exception as e:
        logger.error(f"Unexpected error in tool '{name}': {e}", exc_info=True)
        return CallToolResult(
            content=[TextContent(type="text", text=json.dumps({"error": f"Internal server error: {str(e)}"}))],
            isError=True,
        )


def _ping() -> dict:
    return {
        "status": "ok",
        "agent": config.SERVER_NAME,
        "version": config.SERVER_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _dispatch(name: str, args: dict):
    """
    Pure dispatch table — maps tool names to engine functions.
    No business logic here.
    """
    match name:

        case "optimize_script":
            return optimizer.optimize_script(
                script=args.get("script"),
                concept=args.get("concept"),
                keywords=args.get("keywords"),
                target_duration=args.get("target_duration", args.get("targetDuration", 10)),
                content_style=args.get("content_style", args.get("contentStyle", "tutorial")),
                optimization_level=args.get("optimization_level", args.get("optimizationLevel", "moderate")),
            )

        case "optimize_video_transcript":
            return transcripts.optimize_video_transcript(
                video_id=args.get("video_id"),
                concept=args.get("concept"),
                keywords=args.get("keywords"),
                target_duration=args.get("target_duration", args.get("targetDuration", 10)),
                content_style=args.get("content_style", args.get("contentStyle", "tutorial")),
                optimization_level=args.get("optimization_level", args.get("optimizationLevel", "moderate")),
            )

        case "ping":
            return _ping()

        case _:
            raise ValueError(f"Unknown tool: '{name}'")


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------

async def run():
    """Start the MCP server over stdio."""
    logger.info(f"Starting {config.SERVER_NAME} server v{config.SERVER_VERSION} ({len(TOOLS)} tools)...")
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            app.create_initialization_options(),
        )


def main():
    import asyncio
    asyncio.run(run())


if __name__ == "__main__":
    main()
