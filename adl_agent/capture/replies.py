"""
Reply Templates

User-facing texts sent back to the chat surface.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..common.schemas import ConfigFields, DecisionRecord


FORMAT_HELP = (
    "• `@ADL [Your decision here]`\n"
    "• `@ADL (Your decision here)`\n"
    "• Say \"ADL ... your decision ... END ADL\""
)

WELCOME_TEMPLATE = """👋 Hello! I'm the ADL Decision Capture Agent.

To log a decision, use one of these formats:
{formats}

Optional fields: author:"...", factsheets:"A, B", meeting:"...", status:"...", title:"..."
Send them without a decision (`@ADL author:"Jo"`) to set defaults for this conversation.

I'll automatically capture and save your decisions to the ADL system."""

CAPTURING = '🎤 Capturing decision... (say "END ADL" when finished)'

NOT_EXTRACTED = (
    "⚠️ ADL command detected, but I couldn't extract the decision.\n\n"
    "Please use one of these formats:\n" + FORMAT_HELP
)

CAPTURE_FAILED = "❌ Could not extract decision from captured text."

CONFIG_HELP = (
    "⚠️ ADL settings detected, but no value could be read.\n\n"
    "Quote each value, for example:\n"
    "• `@ADL author:\"Jo\" factsheets:\"Billing, Ledger\"`\n"
    "• `@ADL meeting:\"Weekly sync\" status:\"Accepted\"`"
)

ECHO_TEMPLATE = (
    'Message received: "{text}"\n\n'
    "💡 Tip: To log a decision, use @ADL [Your decision here]"
)


def _value(value: Optional[str]) -> str:
    return value if value else "(not set)"


def _sheets(record_or_config) -> str:
    sheets = record_or_config.fact_sheets
    return ", ".join(sheets) if sheets else "(not set)"


def render_welcome() -> str:
    return WELCOME_TEMPLATE.format(formats=FORMAT_HELP)


def render_echo(text: str) -> str:
    return ECHO_TEMPLATE.format(text=text)


def render_record_fields(record: "DecisionRecord") -> str:
    """Render the fields of a record as a Markdown block"""
    lines = [
        f"**Title**: {record.title}",
        f"**Decision**: {record.decision}",
        f"**Author**: {_value(record.author)}",
        f"**Fact Sheets**: {_sheets(record)}",
        f"**Status**: {_value(record.status)}",
    ]
    if record.meeting:
        lines.append(f"**Meeting**: {record.meeting}")
    return "\n".join(lines)


def render_processing(record: "DecisionRecord") -> str:
    return f'📝 Processing decision: "{record.decision}"'


def render_not_connected(record: "DecisionRecord") -> str:
    return (
        "⚠️ ADL-MCP server is not connected. Please configure ADL_MCP_SERVER_PATH in .env file.\n\n"
        + render_record_fields(record)
    )


def render_success(record: "DecisionRecord", entry_id: str) -> str:
    return (
        "✅ 🔔 **Decision logged successfully!**\n\n"
        + render_record_fields(record)
        + f"\n\nEntry ID: {entry_id}"
    )


def render_failure(error: str) -> str:
    return (
        f"❌ Failed to log decision: {error}\n\n"
        "Please check the ADL-MCP server connection."
    )


def render_config_updated(config: "ConfigFields") -> str:
    return (
        "⚙️ Defaults updated for this conversation.\n\n"
        f"**Author**: {_value(config.author)}\n"
        f"**Fact Sheets**: {_sheets(config)}\n"
        f"**Meeting**: {_value(config.meeting)}\n"
        f"**Status**: {_value(config.status)}"
    )
