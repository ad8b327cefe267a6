"""HTTP runner for MCP server (remote deployment)."""

from mcp.server.fastmcp import FastMCP
from mcp.server.fastmcp.server import TransportSecuritySettings
from transcript_topics_mcp.server import (
    app_lifespan,
    load_transcript,
    load_topics,
    list_topics,
    select_topic,
    clear_selection,
    get_view,
    get_topic_info,
    build_prompt,
    debug_segments,
    session_stats,
    analyze_topic,
    help_resource,
    TOOL_ANNOTATIONS,
)

server = FastMCP(
    "Transcript Topics",
    instructions="Parse timestamped transcripts and align topics against them",
    lifespan=app_lifespan,
    host="0.0.0.0",
    port=8402,
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)

# Register tools with annotations
for tool in (
    load_transcript,
    load_topics,
    list_topics,
    select_topic,
    clear_selection,
    get_view,
    get_topic_info,
    build_prompt,
    debug_segments,
    session_stats,
):
    server.tool(annotations=TOOL_ANNOTATIONS)(tool)

# Register prompts
server.prompt()(analyze_topic)

# Register resources
server.resource("transcript-topics://help")(help_resource)

server.run(transport="streamable-http")
