# src/solana_relay/utils/audit_logger.py

import json
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .logger import get_logger

audit_log = get_logger("AuditLogger")  # Dedicated logger instance


class AuditLogger:
    """
    Records every relay submission as a JSON line.
    Bodies carry only public data (addresses, amounts, signature, blockhash).
    """

    def __init__(self, log_to_file: bool = False, filepath: str = "relay_audit.log"):
        self.log_to_file = log_to_file
        self.filepath = filepath
        audit_log.info("AuditLogger initialized.")

    async def log_relay_event(
            self,
            event_type: str,  # e.g. "TRANSFER_SOL_SUCCESS", "TRANSFER_SPL_TOKEN_FAIL"
            path: str,
            params: Optional[Dict[str, Any]] = None,
            transaction_id: Optional[str] = None,
            error: Optional[BaseException] = None,
    ) -> Dict[str, Any]:
        """Logs a relay submission outcome and returns the entry written."""
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type.upper(),
            "path": path,
            "success": error is None,
            "transaction_id": transaction_id,
            "error": str(error) if error else None,
            "error_type": type(error).__name__ if error else None,
        }
        if params:
            log_entry["request"] = dict(params)

        log_message = json.dumps(log_entry)
        audit_log.info(log_message)

        if self.log_to_file:
            try:
                with open(self.filepath, "a") as f:
                    f.write(log_message + "\n")
            except OSError as e:
                audit_log.error(f"Failed to write audit log to file {self.filepath}: {e}")
        return log_entry
