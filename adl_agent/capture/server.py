"""
ADL Agent Server

FastAPI server receiving chat messages and logging decisions to ADL.

Endpoints:
- POST /api/messages: Bot Framework activity endpoint (Teams, Web Chat)
- POST /slack/events: Slack webhook endpoint
- GET /health: Health check

Pipeline:
1. Receive activity / webhook event
2. Parse with the matching handler
3. Run the turn through the DecisionAgent
4. Return the agent's replies
"""

import json
import logging
from typing import Optional
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, HTTPException, Header
from fastapi.responses import JSONResponse

from ..common.config import load_config, configure_logging, ADLConfig
from ..common.adl_client import ADLClient, ADLClientError
from .agent import DecisionAgent
from .record_builder import RecordBuilder, RecordDefaults
from .session import SessionStore
from .handlers import SlackHandler, TeamsHandler

logger = logging.getLogger("adl.server")


# Global state
config: Optional[ADLConfig] = None
adl_client: Optional[ADLClient] = None
agent: Optional[DecisionAgent] = None
teams_handler: Optional[TeamsHandler] = None
slack_handler: Optional[SlackHandler] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize components on startup"""
    global config, adl_client, agent, teams_handler, slack_handler

    logger.info("Starting ADL Decision Capture Agent...")
    config = load_config()

    adl_client = ADLClient(tool_name=config.mcp.tool_name)
    if config.mcp.server_path:
        try:
            await adl_client.connect(config.mcp.server_path, config.mcp.command, config.mcp.args)
        except ADLClientError as e:
            logger.error("%s", e)
    else:
        logger.warning("ADL_MCP_SERVER_PATH not configured. Please set it in .env file.")

    builder = RecordBuilder(RecordDefaults(
        author=config.defaults.author,
        fact_sheet=config.defaults.fact_sheet,
        status=config.defaults.status,
    ))
    agent = DecisionAgent(client=adl_client, builder=builder, sessions=SessionStore())

    teams_handler = TeamsHandler()
    slack_handler = SlackHandler(signing_secret=config.agent.slack_signing_secret)

    logger.info("Ready to receive messages")

    yield

    logger.info("Shutting down...")
    await adl_client.disconnect()


app = FastAPI(
    title="ADL Decision Capture Agent",
    description="Captures architecture decisions from chat and speech",
    version="0.1.0",
    lifespan=lifespan
)


# =============================================================================
# Endpoints
# =============================================================================

@app.get("/health")
async def health():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "service": "adl-agent",
        "initialized": agent is not None,
        "adl_connected": adl_client.is_connected if adl_client else False,
        "conversations": len(agent.sessions) if agent else 0,
    }


@app.post("/api/messages")
async def messages(request: Request):
    """
    Handle Bot Framework activities.

    Replies are returned in the response body as {"replies": [...]}.
    """
    if not agent or not teams_handler:
        raise HTTPException(status_code=503, detail="Agent not initialized")

    try:
        activity = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if not isinstance(activity, dict):
        raise HTTPException(status_code=400, detail="Expected a JSON object")

    if teams_handler.members_added(activity):
        return JSONResponse({"replies": [agent.welcome_message()]})

    message = teams_handler.parse_event(activity)
    if not message or not teams_handler.should_process(message):
        return JSONResponse({"replies": []})

    replies = await agent.handle_message(message.conversation_id, message.text)
    return JSONResponse({"replies": replies})


@app.post("/slack/events")
async def slack_events(
    request: Request,
    x_slack_signature: Optional[str] = Header(None),
    x_slack_request_timestamp: Optional[str] = Header(None)
):
    """
    Handle Slack webhook events.

    This is the main entry point for Slack integration.
    """
    if not agent or not slack_handler:
        raise HTTPException(status_code=503, detail="Handler not initialized")

    body = await request.body()

    if not slack_handler.verify_signature(
        body,
        x_slack_signature or "",
        x_slack_request_timestamp or ""
    ):
        raise HTTPException(status_code=401, detail="Invalid signature")

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise HTTPException(status_code=400, detail="Invalid JSON")

    if not isinstance(data, dict):
        raise HTTPException(status_code=400, detail="Expected a JSON object")

    # Handle URL verification challenge
    if slack_handler.is_url_verification(data):
        return JSONResponse({"challenge": slack_handler.get_challenge(data)})

    message = slack_handler.parse_event(data)
    replies = []
    if message and slack_handler.should_process(message):
        replies = await agent.handle_message(message.conversation_id, message.text)

    return JSONResponse({"ok": True, "replies": replies})


# =============================================================================
# CLI Entry Point
# =============================================================================

def run_server():
    """Run the ADL agent server"""
    import uvicorn

    settings = load_config()
    configure_logging(settings.agent.log_level)

    logger.info("Starting server on %s:%d", settings.agent.host, settings.agent.port)
    uvicorn.run(
        "adl_agent.capture.server:app",
        host=settings.agent.host,
        port=settings.agent.port,
        reload=False,
    )


if __name__ == "__main__":
    run_server()
