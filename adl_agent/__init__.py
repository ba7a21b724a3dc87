"""
ADL Decision Agent

Captures architecture decisions from chat messages and meeting transcripts
and logs them to the ADL (architecture decision log) service over MCP.

Philosophy:
- Pattern matching only: every extraction is deterministic
- The extraction core is pure; session state is owned by the host
- Missing fields are synthesized, never invented from thin air

Usage:
    from adl_agent.common import load_config, ADLClient
    from adl_agent.common.schemas import DecisionRecord, ConfigFields, CaptureState
    from adl_agent.capture import extract_entry, classify, advance
"""

__version__ = "0.1.0"
