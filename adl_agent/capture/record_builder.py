"""
Record Builder

Turns recognized command text into a DecisionRecord and resolves the
fields the message left open.

Key Rules:
- No decision payload -> no record (None, never an empty record)
- Explicit title wins, otherwise a title is synthesized
- Defaults are passed in by the host; nothing here reads the environment
"""

from dataclasses import dataclass
from typing import List, Optional

from ..common.schemas import ConfigFields, DecisionRecord
from .extractor import extract_decision
from .field_parser import extract_fields
from .system_names import extract_system_names
from .title import generate_title


def extract_entry(text: Optional[str]) -> Optional[DecisionRecord]:
    """
    Extract a decision record from a single message.

    Combines the decision extractor, the field parser and, when no
    title:"..." field is present, the title synthesizer. Optional fields
    that are not in the text stay None for the caller to resolve.

    Args:
        text: Command text, e.g. '@ADL [We adopt Kubernetes] author:"Jo"'

    Returns:
        DecisionRecord or None if no decision payload was found
    """
    decision = extract_decision(text)
    if not decision:
        return None

    fields = extract_fields(text)

    return DecisionRecord(
        decision=decision,
        title=fields.title or generate_title(decision),
        author=fields.author,
        fact_sheets=fields.fact_sheets,
        meeting=fields.meeting,
        status=fields.status,
    )


@dataclass
class RecordDefaults:
    """Host-level fallbacks used when neither message nor session sets a field"""
    author: str = ""
    fact_sheet: str = ""
    status: str = ""


class RecordBuilder:
    """
    Completes extracted records before submission.

    Resolution order per field:
    1. Value given in the message
    2. Session default set by a config command
    3. Host default (fact sheets: derived system names first)
    """

    def __init__(self, defaults: Optional[RecordDefaults] = None, derive_fact_sheets: bool = True):
        """
        Initialize record builder.

        Args:
            defaults: Host defaults for author, fact sheet and status
            derive_fact_sheets: Tag records with system names found in the
                decision when no fact sheets were given
        """
        self._defaults = defaults or RecordDefaults()
        self._derive_fact_sheets = derive_fact_sheets

    def build(self, text: Optional[str], session: Optional[ConfigFields] = None) -> Optional[DecisionRecord]:
        """Extract and complete a record in one step"""
        record = extract_entry(text)
        if record is None:
            return None
        return self.complete(record, session)

    def complete(self, record: DecisionRecord, session: Optional[ConfigFields] = None) -> DecisionRecord:
        """
        Resolve open fields of a record.

        Returns a new record; the input is left untouched so a caller can
        resubmit the same record after a failed submission.
        """
        session = session or ConfigFields()

        return record.model_copy(update={
            "author": record.author or session.author or self._defaults.author or None,
            "fact_sheets": self._resolve_fact_sheets(record, session),
            "meeting": record.meeting or session.meeting,
            "status": record.status or session.status or self._defaults.status or None,
        })

    def _resolve_fact_sheets(self, record: DecisionRecord, session: ConfigFields) -> Optional[List[str]]:
        if record.fact_sheets:
            return list(record.fact_sheets)
        if session.fact_sheets:
            return list(session.fact_sheets)

        if self._derive_fact_sheets:
            derived = extract_system_names(record.decision)
            if derived:
                return derived

        if self._defaults.fact_sheet:
            return [self._defaults.fact_sheet]
        return None
